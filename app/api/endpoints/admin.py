import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.core.deps import get_subscriber_store
from app.core.exceptions import DatabaseError
from app.schemas.subscriber import Subscriber as SubscriberSchema, SubscriberList
from app.services.subscriber_store import SubscriberStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/subscribers", response_model=SubscriberList)
def list_subscribers(
    response: Response,
    store: SubscriberStore = Depends(get_subscriber_store),
):
    """All waitlist subscribers, most recent signup first (same data as the admin page)"""
    try:
        subscribers = store.list_all()
    except DatabaseError as e:
        logger.error(f"Error fetching subscribers: {e.message}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    response.headers["Cache-Control"] = "no-store"
    return SubscriberList(
        count=len(subscribers),
        subscribers=[SubscriberSchema.model_validate(s) for s in subscribers],
    )
