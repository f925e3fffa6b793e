"""Thread routes."""

from fastapi import APIRouter, HTTPException, Request, status

from ..database import Database, get_orders_for_thread
from ..logging_config import get_logger
from ..models import OrderResponse
from ..rate_limit import READ_LIMIT, limiter
from .orders import to_order_response

logger = get_logger("workly.threads")
router = APIRouter(prefix="/threads", tags=["threads"])


@router.get("/{thread_id}/orders", response_model=list[OrderResponse])
@limiter.limit(READ_LIMIT)
async def list_thread_orders(request: Request, thread_id: str, db: Database):
    """Get all orders in a conversation thread, oldest first."""
    try:
        orders = await get_orders_for_thread(db, thread_id)
        return [to_order_response(o) for o in orders]
    except Exception as e:
        logger.error(f"Failed to fetch orders for thread {thread_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch orders",
        )
