import logging
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.core.config import settings
from app.core.deps import get_subscriber_store
from app.core.exceptions import DatabaseError
from app.core.validation import Interest, split_interests
from app.services.subscriber_store import SubscriberStore
from app.views.signup_form import SignupForm, SUCCESS_MESSAGE, ZIP_INPUT_MAX_LENGTH

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
LOAD_FAILED_MESSAGE = "Failed to load subscribers"
MISSING_ZIP = "—"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def short_date(value: datetime) -> str:
    """Jan 5, 2025"""
    if value is None:
        return ""
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def pluralize(count: int, singular: str, plural: str = None) -> str:
    if count == 1:
        return singular
    return plural or f"{singular}s"


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["short_date"] = short_date
templates.env.filters["interest_tags"] = split_interests
templates.env.filters["pluralize"] = pluralize
templates.env.globals["site_name"] = settings.SITE_NAME

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def landing_page(request: Request):
    form = SignupForm()
    return templates.TemplateResponse(request, "landing.html", {
        "form": form,
        "interests": list(Interest),
        "client_config": form.to_client_config(),
        "success_message": SUCCESS_MESSAGE,
        "zip_max_length": ZIP_INPUT_MAX_LENGTH,
        "year": datetime.now().year,
    })


@router.get("/admin/subscribers", response_class=HTMLResponse)
def subscribers_page(request: Request, store: SubscriberStore = Depends(get_subscriber_store)):
    subscribers = []
    error = None
    try:
        subscribers = store.list_all()
    except DatabaseError as e:
        logger.error(f"Error fetching subscribers: {e.message}", exc_info=True)
        error = e.message or LOAD_FAILED_MESSAGE

    response = templates.TemplateResponse(request, "admin/subscribers.html", {
        "subscribers": subscribers,
        "error": error,
        "missing_zip": MISSING_ZIP,
    })
    response.headers["Cache-Control"] = "no-store"
    return response
