"""Order routes.

Create an order from a job offer and drive it through its lifecycle.
Transition legality is decided by the data-access helpers.
"""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request, status
from pydantic import ValidationError

from ..database import (
    Database,
    OrderTransitionError,
    accept_order,
    complete_order,
    create_order,
    decline_order,
    mark_order_paid,
)
from ..logging_config import get_logger, log_order_transition
from ..models import MarkPaidRequest, OrderCreate, OrderResponse
from ..rate_limit import WRITE_LIMIT, limiter

logger = get_logger("workly.orders")
router = APIRouter(prefix="/orders", tags=["orders"])

MISSING_FIELDS = "Missing required fields"
ORDER_NOT_FOUND = "Order not found"


def to_order_response(order: dict) -> OrderResponse:
    """Convert DB order dict to response model."""
    return OrderResponse.model_validate(order)


async def _run_transition(action: str, order_id: str, transition, *args) -> OrderResponse:
    try:
        order = await transition(*args)
    except OrderTransitionError as e:
        log_order_transition(logger, action, order_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot {action} order in status: {e.current_status}",
        )

    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=ORDER_NOT_FOUND)

    log_order_transition(logger, action, order_id, status=order.get("status"))
    return to_order_response(order)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(WRITE_LIMIT)
async def create_order_endpoint(
    request: Request,
    db: Database,
    payload: Any = Body(None),
):
    """
    Create an order from a job offer.

    Requires taskId, clientId, providerId, title, dateTimeISO and a finite
    priceEur; threadId and location are optional.
    """
    try:
        order = OrderCreate.model_validate(payload if payload is not None else {})
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=MISSING_FIELDS)

    logger.info(
        f"POST /orders | job={order.task_id} | client={order.client_id} | provider={order.provider_id}"
    )
    if order.thread_id and order.thread_id != order.task_id:
        logger.debug(f"Order thread {order.thread_id} differs from job {order.task_id}")

    try:
        created = await create_order(
            db,
            job_id=order.task_id,
            client_id=order.client_id,
            provider_id=order.provider_id,
            title=order.title,
            date_time=order.date_time_iso,
            price_eur=order.price_eur,
            location=order.location,
        )
        response = to_order_response(created)
    except Exception as e:
        logger.error(f"Failed to create order for job {order.task_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e) or "Failed to create order",
        )

    logger.info(f"Order created | id={response.id} | job={order.task_id}")
    return response


@router.post("/{order_id}/accept", response_model=OrderResponse)
@limiter.limit(WRITE_LIMIT)
async def accept_order_endpoint(request: Request, order_id: str, db: Database):
    """Client accepts the provider's offer."""
    logger.info(f"POST /orders/{order_id}/accept")
    return await _run_transition("accept", order_id, accept_order, db, order_id)


@router.post("/{order_id}/decline", response_model=OrderResponse)
@limiter.limit(WRITE_LIMIT)
async def decline_order_endpoint(request: Request, order_id: str, db: Database):
    """Client declines the provider's offer."""
    logger.info(f"POST /orders/{order_id}/decline")
    return await _run_transition("decline", order_id, decline_order, db, order_id)


@router.post("/{order_id}/complete", response_model=OrderResponse)
@limiter.limit(WRITE_LIMIT)
async def complete_order_endpoint(request: Request, order_id: str, db: Database):
    """Mark the work on an order as done."""
    logger.info(f"POST /orders/{order_id}/complete")
    return await _run_transition("complete", order_id, complete_order, db, order_id)


@router.post("/{order_id}/mark-paid", response_model=OrderResponse)
@limiter.limit(WRITE_LIMIT)
async def mark_order_paid_endpoint(
    request: Request,
    order_id: str,
    db: Database,
    payment: MarkPaidRequest | None = Body(None),
):
    """Record payment for an accepted order and start work on it."""
    logger.info(f"POST /orders/{order_id}/mark-paid")
    intent_id = payment.stripe_payment_intent_id if payment else None
    return await _run_transition("mark paid", order_id, mark_order_paid, db, order_id, intent_id)
