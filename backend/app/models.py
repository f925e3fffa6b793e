"""Pydantic models for API requests and responses."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

OrderStatus = Literal["pending", "accepted", "declined", "paid", "in_progress", "completed", "cancelled"]

# =============================================================================
# Order Models
# =============================================================================


class OrderCreate(BaseModel):
    """Request to create an order from a job offer."""

    model_config = ConfigDict(populate_by_name=True)

    thread_id: str | None = Field(None, alias="threadId")
    task_id: str = Field(..., alias="taskId", min_length=1)
    client_id: str = Field(..., alias="clientId", min_length=1)
    provider_id: str = Field(..., alias="providerId", min_length=1)
    title: str = Field(..., min_length=1)
    location: str | None = None
    date_time_iso: str = Field(..., alias="dateTimeISO", min_length=1)
    price_eur: float = Field(..., alias="priceEur", allow_inf_nan=False)


class MarkPaidRequest(BaseModel):
    """Optional payment details when marking an order paid."""

    model_config = ConfigDict(populate_by_name=True)

    stripe_payment_intent_id: str | None = Field(None, alias="stripePaymentIntentId")


class OrderResponse(BaseModel):
    """Order record as stored."""

    id: str
    job_id: str
    client_id: str
    provider_id: str
    title: str
    location: str | None = None
    date_time: str | None = None
    price_eur: float
    status: OrderStatus
    stripe_payment_intent_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    # Joined records (thread listings only)
    job: dict[str, Any] | None = None
    client: dict[str, Any] | None = None
    provider: dict[str, Any] | None = None


# =============================================================================
# Review Models
# =============================================================================


class ReviewCreate(BaseModel):
    """Request to review a completed job."""

    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(..., alias="jobId", min_length=1)
    client_id: str | None = Field(None, alias="clientId")
    provider_id: str = Field(..., alias="providerId", min_length=1)
    rating: int
    comment: str | None = None


class ReviewResponse(BaseModel):
    """Review record as stored."""

    id: str
    job_id: str
    client_id: str
    provider_id: str
    rating: int
    comment: str | None = None
    created_at: datetime | None = None
    job: dict[str, Any] | None = None
    client: dict[str, Any] | None = None


class ProviderStats(BaseModel):
    """Aggregate review figures for a provider."""

    model_config = ConfigDict(populate_by_name=True)

    total_reviews: int = Field(..., alias="totalReviews")
    average_rating: float = Field(..., alias="averageRating")


# =============================================================================
# Diagnostics Models
# =============================================================================


class GitInfo(BaseModel):
    commitSha: str | None = None
    commitRef: str | None = None
    commitMessage: str | None = None


class DeploymentInfo(BaseModel):
    env: str | None = None
    deploymentId: str | None = None
    url: str | None = None
    git: GitInfo


class VersionResponse(BaseModel):
    """Server time plus deployment metadata."""

    time: str
    vercel: DeploymentInfo
