"""
State of the landing page signup form.

The browser keeps this state in ``static/js/signup.js``; this class is the
reference version of the same rules. The landing page renders its initial
markup from ``SignupForm()`` and hands ``to_client_config()`` to the script,
so the defaults, labels, messages and email pattern exist only here.
"""
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

from app.core.config import settings
from app.core.validation import (
    DEFAULT_INTERESTS,
    EMAIL_MAX_LENGTH,
    EMAIL_PATTERN,
    Interest,
    is_valid_email,
    normalize_email,
)

SUBSCRIBE_ENDPOINT = "/api/subscribe"
FALLBACK_ERROR_MESSAGE = "Something went sideways. Try again."
SUCCESS_MESSAGE = "You're on the list."
SUBMIT_LABEL = "Notify Me at Launch"
SUBMITTING_LABEL = "Saving your spot..."
ZIP_INPUT_MAX_LENGTH = 5


class FormStatus(str, enum.Enum):
    IDLE = "idle"
    SUCCESS = "success"
    ERROR = "error"


def _default_interests() -> Set[Interest]:
    return set(DEFAULT_INTERESTS)


@dataclass
class SignupForm:
    email: str = ""
    interests: Set[Interest] = field(default_factory=_default_interests)
    zip: str = ""
    is_submitting: bool = False
    status: FormStatus = FormStatus.IDLE
    error_message: str = ""

    def toggle_interest(self, interest: Interest) -> None:
        interest = Interest(interest)
        if interest in self.interests:
            self.interests.remove(interest)
        else:
            self.interests.add(interest)

    def is_selected(self, interest: Interest) -> bool:
        return Interest(interest) in self.interests

    @property
    def selected_interests(self) -> List[Interest]:
        # Display order, not click order
        return [i for i in Interest if i in self.interests]

    @property
    def can_submit(self) -> bool:
        return is_valid_email(normalize_email(self.email)) and bool(self.interests) and not self.is_submitting

    @property
    def submit_label(self) -> str:
        return SUBMITTING_LABEL if self.is_submitting else SUBMIT_LABEL

    def begin_submit(self) -> Optional[Dict[str, Any]]:
        """Start a submission and return the JSON body to POST.

        Returns None when the submit control would be disabled.
        """
        if not self.can_submit:
            return None
        self.status = FormStatus.IDLE
        self.error_message = ""
        self.is_submitting = True
        return {
            "email": normalize_email(self.email),
            "interests": [i.value for i in self.selected_interests],
            "zip": self.zip.strip() or None,
            "source": settings.SUBSCRIBE_SOURCE,
        }

    def complete(self, status_code: int, body: Any = None) -> None:
        """Apply the endpoint's response; body is the decoded JSON or None."""
        try:
            if 200 <= status_code < 300:
                self.status = FormStatus.SUCCESS
                self.email = ""
                self.zip = ""
                self.interests = _default_interests()
            else:
                message = body.get("error") if isinstance(body, dict) else None
                self.fail(message)
        finally:
            self.is_submitting = False

    def fail(self, message: Optional[str] = None) -> None:
        self.status = FormStatus.ERROR
        self.error_message = message or FALLBACK_ERROR_MESSAGE
        self.is_submitting = False

    def to_client_config(self) -> Dict[str, Any]:
        return {
            "endpoint": SUBSCRIBE_ENDPOINT,
            "emailPattern": EMAIL_PATTERN,
            "emailMaxLength": EMAIL_MAX_LENGTH,
            "source": settings.SUBSCRIBE_SOURCE,
            "defaultInterests": [i.value for i in DEFAULT_INTERESTS],
            "fallbackError": FALLBACK_ERROR_MESSAGE,
            "submitLabel": SUBMIT_LABEL,
            "submittingLabel": SUBMITTING_LABEL,
        }
