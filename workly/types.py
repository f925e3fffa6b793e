"""Shared client types."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class UserRole(str, Enum):
    CLIENT = "client"
    PROVIDER = "provider"
    ADMIN = "admin"


@dataclass
class AuthUser:
    """The signed-in user's profile as the app keeps it locally."""

    id: str
    email: str
    name: str
    role: UserRole
    language: str = "sl"
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    specialties: Optional[List[str]] = None
    completed_requests: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["role"] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthUser":
        """Rebuild from a dict produced by `to_dict`, keeping values as stored.

        Raises KeyError, TypeError or ValueError when the shape is wrong.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Expected a dict, got {type(data).__name__}")

        specialties = data.get("specialties")
        if specialties is not None and not isinstance(specialties, list):
            raise TypeError("specialties must be a list")

        return cls(
            id=str(data["id"]),
            email=data["email"],
            name=data["name"],
            role=UserRole(data["role"]),
            language=data.get("language", "sl"),
            phone=data.get("phone"),
            avatar_url=data.get("avatar_url"),
            specialties=specialties,
            completed_requests=int(data.get("completed_requests") or 0),
        )

    @classmethod
    def from_profile_row(cls, row: Dict[str, Any]) -> "AuthUser":
        """Build from a `profiles` row, where blank columns mean unset."""
        return cls.from_dict(
            {
                **row,
                "language": "en" if row.get("language") == "en" else "sl",
                "phone": row.get("phone") or None,
                "avatar_url": row.get("avatar_url") or None,
                "specialties": row.get("specialties") or None,
            }
        )
