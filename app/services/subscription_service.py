import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.validation import (
    INVALID_EMAIL_MESSAGE,
    NO_INTEREST_MESSAGE,
    Interest,
    is_valid_email,
    normalize_email,
    normalize_interests,
    normalize_zip,
)
from app.models.subscriber import Subscriber
from app.services.subscriber_store import SubscriberStore
from app.utils.audit import audit

logger = logging.getLogger(__name__)


@dataclass
class SubscriptionRequest:
    email: str
    interests: List[Interest]
    zip: Optional[str] = None


def parse_subscription(payload: Any) -> SubscriptionRequest:
    """Validate an untrusted signup payload.

    Checks run in a fixed order and the first failure wins, so a request
    with a bad email and no interests reports the email.
    """
    if not isinstance(payload, dict):
        payload = {}

    email = normalize_email(payload.get("email"))
    if not is_valid_email(email):
        raise ValidationError(INVALID_EMAIL_MESSAGE, error_code="invalid_email")

    interests = normalize_interests(payload.get("interests"))
    if not interests:
        raise ValidationError(NO_INTEREST_MESSAGE, error_code="no_interest")

    zip_code = normalize_zip(payload.get("zip"), settings.ZIP_MAX_LENGTH)
    return SubscriptionRequest(email=email, interests=interests, zip=zip_code)


class SubscriptionService:
    def __init__(self, store: SubscriberStore, source: str = None):
        self.store = store
        self.source = source or settings.SUBSCRIBE_SOURCE

    def subscribe(self, payload: Any) -> Subscriber:
        request = parse_subscription(payload)
        subscriber = self.store.upsert(
            request.email,
            request.interests,
            request.zip,
            self.source,
        )
        audit(
            "SUBSCRIBER_UPSERTED",
            email=subscriber.email,
            interests=subscriber.interests,
            source=subscriber.source,
        )
        return subscriber
