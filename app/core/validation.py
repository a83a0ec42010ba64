"""
Signup rules shared by the subscription endpoint and the landing page form.

The browser script receives EMAIL_PATTERN verbatim, so it must stay a regex
that means the same thing in Python and JavaScript.
"""
import enum
import re
from typing import Any, Iterable, List, Optional

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
_EMAIL_RE = re.compile(EMAIL_PATTERN)
# Width of subscribers.email
EMAIL_MAX_LENGTH = 320

INTEREST_SEPARATOR = ", "

INVALID_EMAIL_MESSAGE = "Invalid email."
NO_INTEREST_MESSAGE = "Select at least one interest."


class Interest(str, enum.Enum):
    OIL = "oil"
    SALT = "salt"

    @property
    def label(self) -> str:
        return INTEREST_LABELS[self]


INTEREST_LABELS = {
    Interest.OIL: "Infused Oil",
    Interest.SALT: "Finishing Salt",
}

DEFAULT_INTERESTS = (Interest.OIL, Interest.SALT)


def normalize_email(value: Any) -> str:
    """Coerce to string, trim and lowercase.

    Only strings and numbers are coerced; arrays, objects, booleans and None
    become an empty string so they fail validation instead of storing a repr.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return ""
    return str(value).strip().lower()


def is_valid_email(email: str) -> bool:
    if not email or len(email) > EMAIL_MAX_LENGTH:
        return False
    return _EMAIL_RE.match(email) is not None


def normalize_interests(value: Any) -> List[Interest]:
    """Return the known interests in submitted order, without repeats.

    Anything that is not a JSON array counts as no selection at all.
    """
    if not isinstance(value, (list, tuple)):
        return []
    result: List[Interest] = []
    for item in value:
        if isinstance(item, Interest):
            interest = item
        else:
            try:
                interest = Interest(str(item).strip().lower())
            except ValueError:
                continue
        if interest not in result:
            result.append(interest)
    return result


def normalize_zip(value: Any, max_length: int) -> Optional[str]:
    if value is None:
        return None
    zip_code = str(value).strip()
    if not zip_code:
        return None
    return zip_code[:max_length]


def join_interests(interests: Iterable[Interest]) -> str:
    return INTEREST_SEPARATOR.join(Interest(i).value for i in interests)


def split_interests(stored: Optional[str]) -> List[str]:
    if not stored:
        return []
    return [tag for tag in stored.split(INTEREST_SEPARATOR) if tag]
