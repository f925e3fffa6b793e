"""Database utilities for Supabase integration.

Every helper here performs its work through the shared Supabase client and
returns plain dict records (or ``None`` / ``[]``) to the routes.
"""

import math
from typing import Annotated

from fastapi import Depends

from supabase import Client, create_client

from .config import Settings, get_settings
from .logging_config import get_logger

logger = get_logger("workly.database")

_supabase_client: Client | None = None


def get_supabase_client(settings: Settings | None = None) -> Client:
    """Get cached Supabase client."""
    global _supabase_client
    if _supabase_client is None:
        if settings is None:
            settings = get_settings()
        # Prefer new secret key, fall back to legacy service_role_key
        api_key = settings.supabase_secret_key or settings.supabase_service_role_key
        if not api_key:
            raise ValueError("Either SUPABASE_SECRET_KEY or SUPABASE_SERVICE_ROLE_KEY must be set")
        _supabase_client = create_client(settings.supabase_url, api_key)
    return _supabase_client


def get_db(settings: Annotated[Settings, Depends(get_settings)]) -> Client:
    """FastAPI dependency for Supabase client."""
    return get_supabase_client(settings)


# Type alias for dependency injection
Database = Annotated[Client, Depends(get_db)]


# =============================================================================
# Table Names
# =============================================================================

PROFILES_TABLE = "profiles"
JOBS_TABLE = "jobs"
ORDERS_TABLE = "orders"
REVIEWS_TABLE = "reviews"

ORDER_WITH_DETAILS = (
    "*, job:jobs(*), "
    "client:profiles!orders_client_id_fkey(*), "
    "provider:profiles!orders_provider_id_fkey(*)"
)
REVIEW_WITH_DETAILS = "*, job:jobs(*), client:profiles!reviews_client_id_fkey(*)"


# =============================================================================
# Order Operations
# =============================================================================

# Target status -> statuses an order may be in to move there
ORDER_TRANSITIONS = {
    "accepted": {"pending"},
    "declined": {"pending"},
    "paid": {"accepted"},
    "in_progress": {"paid"},
    "completed": {"accepted", "paid", "in_progress"},
    "cancelled": {"pending", "accepted"},
}

ACTIVE_ORDER_STATUSES = ["accepted", "paid", "in_progress"]


class OrderTransitionError(Exception):
    """Raised when an order is not in a status the transition allows."""

    def __init__(self, order: dict, new_status: str):
        self.order = order
        self.current_status = order.get("status")
        self.new_status = new_status
        super().__init__(
            f"Order {order.get('id')} cannot move from '{self.current_status}' to '{new_status}'"
        )


def can_transition(from_status: str, to_status: str) -> bool:
    """Check if an order status transition is valid."""
    return from_status in ORDER_TRANSITIONS.get(to_status, set())


async def create_order(
    db: Client,
    job_id: str,
    client_id: str,
    provider_id: str,
    title: str,
    date_time: str,
    price_eur: float,
    location: str | None = None,
) -> dict:
    """Create a new order (a provider's offer on a job)."""
    data = {
        "job_id": job_id,
        "client_id": client_id,
        "provider_id": provider_id,
        "title": title,
        "location": location or None,
        "date_time": date_time,
        "price_eur": price_eur,
        "status": "pending",
    }
    result = db.table(ORDERS_TABLE).insert(data).execute()
    if not result.data:
        raise RuntimeError("Failed to create order")
    return result.data[0]


async def get_order(db: Client, order_id: str) -> dict | None:
    """Get an order by ID."""
    result = db.table(ORDERS_TABLE).select("*").eq("id", order_id).execute()
    return result.data[0] if result.data else None


async def get_orders_for_thread(db: Client, thread_id: str) -> list[dict]:
    """Get all orders in a conversation thread, oldest first.

    Threads are keyed by the job they discuss, so this selects on job_id.
    """
    result = (
        db.table(ORDERS_TABLE)
        .select(ORDER_WITH_DETAILS)
        .eq("job_id", thread_id)
        .order("created_at", desc=False)
        .execute()
    )
    return result.data or []


async def transition_order(db: Client, order_id: str, new_status: str, **updates) -> dict | None:
    """Atomically move an order to ``new_status``.

    Uses UPDATE ... WHERE status IN (allowed) so concurrent transitions
    cannot both succeed.

    Returns:
        The updated order, the unchanged order if it already has
        ``new_status``, or None if the order does not exist.

    Raises:
        OrderTransitionError: the order is in a status that cannot move
            to ``new_status``.
    """
    allowed_from = sorted(ORDER_TRANSITIONS[new_status])
    result = (
        db.table(ORDERS_TABLE)
        .update({"status": new_status, **updates})
        .eq("id", order_id)
        .in_("status", allowed_from)
        .execute()
    )
    if result.data:
        return result.data[0]

    # Update didn't match - either the order doesn't exist or its status differs
    order = await get_order(db, order_id)
    if not order:
        return None
    if order["status"] == new_status:
        return order

    logger.warning(
        f"Rejected order transition {order_id}: "
        f"status '{order['status']}' cannot move to '{new_status}'"
    )
    raise OrderTransitionError(order, new_status)


async def accept_order(db: Client, order_id: str) -> dict | None:
    """Client accepts the provider's offer."""
    return await transition_order(db, order_id, "accepted")


async def decline_order(db: Client, order_id: str) -> dict | None:
    """Client declines the provider's offer."""
    return await transition_order(db, order_id, "declined")


async def complete_order(db: Client, order_id: str) -> dict | None:
    """Mark the work on an order as done."""
    return await transition_order(db, order_id, "completed")


async def mark_order_paid(
    db: Client, order_id: str, stripe_payment_intent_id: str | None = None
) -> dict | None:
    """Record payment and start work: accepted -> paid -> in_progress.

    The two steps are separate atomic updates. If the second one fails the
    order stays 'paid' and calling this again resumes from there. The payment
    intent id is written by both steps so a resumed call still records it.
    """
    updates = {}
    if stripe_payment_intent_id:
        updates["stripe_payment_intent_id"] = stripe_payment_intent_id

    try:
        paid = await transition_order(db, order_id, "paid", **updates)
    except OrderTransitionError as e:
        if e.current_status != "in_progress":
            raise
        # Already paid and started
        return e.order

    if paid is None:
        return None
    return await transition_order(db, order_id, "in_progress", **updates)


async def complete_active_order_for_job(db: Client, job_id: str, provider_id: str) -> dict | None:
    """Complete the most recently updated active order for a job/provider pair."""
    result = (
        db.table(ORDERS_TABLE)
        .select("id, status")
        .eq("job_id", job_id)
        .eq("provider_id", provider_id)
        .in_("status", ACTIVE_ORDER_STATUSES)
        .order("updated_at", desc=True)
        .limit(1)
        .execute()
    )
    if not result.data:
        return None
    return await complete_order(db, result.data[0]["id"])


# =============================================================================
# Job Operations
# =============================================================================


async def get_job(db: Client, job_id: str) -> dict | None:
    """Get a job by ID."""
    result = db.table(JOBS_TABLE).select("id, client_id, provider_id, status").eq("id", job_id).execute()
    return result.data[0] if result.data else None


async def complete_job(db: Client, job_id: str, provider_id: str) -> dict | None:
    """Mark a job completed and assign the provider who did it."""
    result = (
        db.table(JOBS_TABLE)
        .update({"status": "completed", "provider_id": provider_id})
        .eq("id", job_id)
        .execute()
    )
    return result.data[0] if result.data else None


# =============================================================================
# Review Operations
# =============================================================================


async def get_job_review(db: Client, job_id: str) -> dict | None:
    """Get the review left for a job, if any."""
    result = db.table(REVIEWS_TABLE).select("*").eq("job_id", job_id).limit(1).execute()
    return result.data[0] if result.data else None


async def get_client_job_review(db: Client, job_id: str, client_id: str) -> dict | None:
    """Get the review a specific client left for a job."""
    result = (
        db.table(REVIEWS_TABLE)
        .select("id")
        .eq("job_id", job_id)
        .eq("client_id", client_id)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


async def get_provider_reviews(db: Client, provider_id: str) -> list[dict]:
    """Get all reviews for a provider, newest first."""
    result = (
        db.table(REVIEWS_TABLE)
        .select(REVIEW_WITH_DETAILS)
        .eq("provider_id", provider_id)
        .order("created_at", desc=True)
        .execute()
    )
    return result.data or []


async def get_provider_ratings(db: Client, provider_id: str) -> list[int]:
    """Get just the ratings a provider has received."""
    result = db.table(REVIEWS_TABLE).select("rating").eq("provider_id", provider_id).execute()
    return [row["rating"] for row in result.data or []]


async def create_review(
    db: Client,
    job_id: str,
    client_id: str,
    provider_id: str,
    rating: int,
    comment: str | None = None,
) -> dict:
    """Insert a review."""
    data = {
        "job_id": job_id,
        "client_id": client_id,
        "provider_id": provider_id,
        "rating": rating,
        "comment": comment or None,
    }
    result = db.table(REVIEWS_TABLE).insert(data).execute()
    if not result.data:
        raise RuntimeError("Failed to create review")
    return result.data[0]


def average_rating(ratings: list[int]) -> float:
    """Mean rating rounded to one decimal, 0 when there are none."""
    if not ratings:
        return 0.0
    return math.floor(sum(ratings) / len(ratings) * 10 + 0.5) / 10
