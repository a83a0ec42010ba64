from fastapi import Depends
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.services.subscriber_store import SubscriberStore
from app.services.subscription_service import SubscriptionService


def get_subscriber_store(db: Session = Depends(get_db)) -> SubscriberStore:
    """One store per request, bound to the request's session"""
    return SubscriberStore(db)


def get_subscription_service(
    store: SubscriberStore = Depends(get_subscriber_store),
) -> SubscriptionService:
    return SubscriptionService(store)
