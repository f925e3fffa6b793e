"""Review routes.

Read endpoints for job and provider reviews, plus review submission by
the client who requested the job.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request, status
from pydantic import ValidationError

from ..auth import CurrentUser
from ..database import (
    Database,
    average_rating,
    complete_active_order_for_job,
    complete_job,
    create_review,
    get_client_job_review,
    get_job,
    get_job_review,
    get_provider_ratings,
    get_provider_reviews,
)
from ..logging_config import get_logger
from ..models import ProviderStats, ReviewCreate, ReviewResponse
from ..rate_limit import READ_LIMIT, WRITE_LIMIT, limiter

logger = get_logger("workly.reviews")
router = APIRouter(tags=["reviews"])


def to_review_response(review: dict) -> ReviewResponse:
    """Convert DB review dict to response model."""
    return ReviewResponse.model_validate(review)


@router.get("/jobs/{job_id}/review")
@limiter.limit(READ_LIMIT)
async def get_job_review_endpoint(request: Request, job_id: str, db: Database):
    """Get the review for a job, or an empty object if it has none."""
    try:
        review = await get_job_review(db, job_id)
        if not review:
            return {}
        return to_review_response(review).model_dump(mode="json")
    except Exception as e:
        logger.error(f"Failed to fetch review for job {job_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch review",
        )


@router.get("/providers/{provider_id}/reviews", response_model=list[ReviewResponse])
@limiter.limit(READ_LIMIT)
async def get_provider_reviews_endpoint(request: Request, provider_id: str, db: Database):
    """Get all reviews for a provider, newest first."""
    try:
        reviews = await get_provider_reviews(db, provider_id)
        return [to_review_response(r) for r in reviews]
    except Exception as e:
        logger.error(f"Failed to fetch reviews for provider {provider_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch reviews",
        )


@router.get("/providers/{provider_id}/stats", response_model=ProviderStats)
@limiter.limit(READ_LIMIT)
async def get_provider_stats_endpoint(request: Request, provider_id: str, db: Database):
    """Total review count and average rating for a provider."""
    try:
        ratings = await get_provider_ratings(db, provider_id)
    except Exception as e:
        logger.error(f"Failed to fetch ratings for provider {provider_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch reviews",
        )
    return ProviderStats(total_reviews=len(ratings), average_rating=average_rating(ratings))


@router.post("/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(WRITE_LIMIT)
async def create_review_endpoint(
    request: Request,
    auth: CurrentUser,
    db: Database,
    payload: Any = Body(None),
):
    """
    Review a job as the client who requested it.

    Reviewing completes the job (assigning the provider) and the provider's
    active order on it. Each step is its own write: if inserting the review
    fails, the job and order stay completed and the request can be retried.
    """
    try:
        review = ReviewCreate.model_validate(payload if payload is not None else {})
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing required fields")

    if not 1 <= review.rating <= 5:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Rating must be between 1 and 5",
        )

    client_id = auth.user_id
    logger.info(f"POST /reviews | job={review.job_id} | client={client_id} | rating={review.rating}")

    if review.client_id and review.client_id != client_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Client mismatch")

    try:
        job = await get_job(db, review.job_id)
        if not job:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

        if job["client_id"] != client_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only the client who requested the job can review it",
            )

        if await get_client_job_review(db, review.job_id, client_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You have already reviewed this job.",
            )

        if job["status"] != "completed":
            await complete_job(db, review.job_id, review.provider_id)

        completed_order = await complete_active_order_for_job(db, review.job_id, review.provider_id)
        if completed_order:
            logger.info(f"Order completed by review | id={completed_order['id']}")

        created = await create_review(
            db,
            job_id=review.job_id,
            client_id=client_id,
            provider_id=review.provider_id,
            rating=review.rating,
            comment=review.comment,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create review for job {review.job_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or "Failed to create review",
        )

    logger.info(f"Review created | id={created['id']} | job={review.job_id}")
    return to_review_response(created)
