import json
import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.deps import get_subscription_service
from app.core.exceptions import DatabaseError, ValidationError
from app.schemas.subscriber import ErrorResponse, SubscribeResponse
from app.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["subscribe"])

SAVE_FAILED_MESSAGE = "Failed to save subscription. Please try again."


async def _read_payload(request: Request) -> dict:
    """Parse the JSON body; anything unparseable is treated as an empty payload"""
    body = await request.body()
    try:
        payload = json.loads(body) if body else {}
    except (ValueError, UnicodeDecodeError):
        logger.info("Ignoring malformed subscribe body (%d bytes)", len(body))
        return {}
    return payload if isinstance(payload, dict) else {}


@router.post(
    "/subscribe",
    response_model=SubscribeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def subscribe(
    request: Request,
    service: SubscriptionService = Depends(get_subscription_service),
):
    payload = await _read_payload(request)
    try:
        service.subscribe(payload)
    except ValidationError as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": e.message})
    except DatabaseError as e:
        logger.error(f"Error saving subscriber: {e.message}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": SAVE_FAILED_MESSAGE},
        )
    return SubscribeResponse(ok=True)
