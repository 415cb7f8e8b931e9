# Validation Rules for the Engagement Core
# Pure checks run before any write. Each validator collects every violation
# and raises a single ValidationError, or returns the cleaned values.

import re
from datetime import date, datetime, time, timezone
from typing import Any, List, Mapping, Optional

from pydantic import EmailStr, HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError, Violation
from core.lifecycle import (
    DeliverableStatus,
    DeliverableType,
    REVIEW_OUTCOMES,
    requires_review_notes,
)
from core.roles import UserType


TITLE_MAX_LENGTH = 200
TEXT_MAX_LENGTH = 1000
URL_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 8

_http_url = TypeAdapter(HttpUrl)
_email = TypeAdapter(EmailStr)

_SCRIPT_BLOCK = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
_SCRIPT_TAG = re.compile(r"</?script\b[^>]*>", re.IGNORECASE)
_JS_URI = re.compile(r"javascript\s*:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(
    r"[\s/]+on[a-z]+\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s>]+)",
    re.IGNORECASE,
)


def sanitize_text(value: Any) -> str:
    """Strip script tags, javascript: URIs and inline event handlers."""
    if value is None:
        return ""
    text = str(value)
    # Removing one match can splice a new one together, so repeat until stable
    while True:
        cleaned = _SCRIPT_BLOCK.sub("", text)
        cleaned = _SCRIPT_TAG.sub("", cleaned)
        cleaned = _JS_URI.sub("", cleaned)
        cleaned = _EVENT_HANDLER.sub("", cleaned)
        if cleaned == text:
            return text.strip()
        text = cleaned


def parse_datetime(value: Any, end_of_day: bool = False) -> Optional[datetime]:
    """
    Parse a datetime, date or ISO-8601 string into a naive UTC datetime.
    A date without a time becomes midnight, or 23:59:59.999999 with end_of_day.
    Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.max if end_of_day else time.min)
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            if len(raw) == 10:
                day = date.fromisoformat(raw)
                parsed = datetime.combine(day, time.max if end_of_day else time.min)
            else:
                parsed = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_positive_int(value: Any) -> Optional[int]:
    """Return value as a positive int, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        number = int(value)
    elif isinstance(value, str):
        raw = value.strip()
        if not re.fullmatch(r"[+-]?\d+", raw):
            return None
        number = int(raw)
    else:
        return None
    return number if number > 0 else None


def is_absolute_url(value: str) -> bool:
    try:
        _http_url.validate_python(value)
    except PydanticValidationError:
        return False
    return True


class _Checker:
    """Accumulates violations across a validator run."""

    def __init__(self):
        self.violations: List[Violation] = []

    def add(self, field: str, rule: str, message: str) -> None:
        self.violations.append(Violation(field, rule, message))

    def text(self, data: Mapping, field: str, label: str, required: bool = False,
             max_length: Optional[int] = None) -> str:
        value = sanitize_text(data.get(field))
        if required and not value:
            self.add(field, "required", f"{label} is required")
        if max_length is not None and len(value) > max_length:
            self.add(field, "max_length", f"{label} must be at most {max_length} characters")
        return value

    def positive_int(self, data: Mapping, field: str, label: str) -> Optional[int]:
        raw = data.get(field)
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            self.add(field, "required", f"{label} is required")
            return None
        number = parse_positive_int(raw)
        if number is None:
            self.add(field, "positive_integer", f"{label} must be a positive whole number")
        return number

    def done(self) -> None:
        if self.violations:
            raise ValidationError(self.violations)


def validate_listing(data: Mapping, now: datetime) -> dict:
    check = _Checker()
    cleaned = {
        "title": check.text(data, "title", "Title", required=True, max_length=TITLE_MAX_LENGTH),
        "description": check.text(data, "description", "Description", required=True),
        "category": check.text(data, "category", "Category", required=True),
        "budget": check.positive_int(data, "budget", "Budget"),
        "requirements": check.text(data, "requirements", "Requirements"),
        "deliverables": check.text(data, "deliverables", "Deliverables"),
        "deadline": None,
        "campaign_deadline": None,
    }

    raw_deadline = data.get("deadline")
    if raw_deadline in (None, ""):
        check.add("deadline", "required", "Deadline is required")
    else:
        deadline = parse_datetime(raw_deadline)
        if deadline is None:
            check.add("deadline", "invalid_deadline", "Invalid deadline format")
        elif deadline <= now:
            check.add("deadline", "past_deadline", "Deadline must be in the future")
        else:
            cleaned["deadline"] = deadline

    raw_campaign_deadline = data.get("campaign_deadline")
    if raw_campaign_deadline not in (None, ""):
        campaign_deadline = parse_datetime(raw_campaign_deadline)
        if campaign_deadline is None:
            check.add("campaign_deadline", "invalid_deadline", "Invalid campaign deadline format")
        elif cleaned["deadline"] is not None and campaign_deadline < cleaned["deadline"]:
            check.add("campaign_deadline", "before_deadline",
                      "Campaign deadline cannot be before the application deadline")
        elif campaign_deadline <= now:
            check.add("campaign_deadline", "past_deadline", "Campaign deadline must be in the future")
        else:
            cleaned["campaign_deadline"] = campaign_deadline

    check.done()
    return cleaned


def validate_proposal(data: Mapping) -> dict:
    check = _Checker()
    cleaned = {
        "message": check.text(data, "message", "Message", required=True),
        "proposed_budget": check.positive_int(data, "proposed_budget", "Proposed budget"),
        "timeline": check.text(data, "timeline", "Timeline", required=True),
    }
    check.done()
    return cleaned


def validate_deliverable(data: Mapping, now: datetime) -> dict:
    check = _Checker()
    cleaned = {
        "title": check.text(data, "title", "Title", required=True, max_length=TITLE_MAX_LENGTH),
        "description": check.text(data, "description", "Description", max_length=TEXT_MAX_LENGTH),
        "type": None,
        "due_date": None,
    }

    raw_type = data.get("type")
    try:
        cleaned["type"] = DeliverableType(raw_type)
    except ValueError:
        allowed = ", ".join(t.value for t in DeliverableType)
        check.add("type", "invalid_choice", f"Type must be one of: {allowed}")

    raw_due = data.get("due_date")
    if raw_due not in (None, ""):
        due_date = parse_datetime(raw_due, end_of_day=True)
        if due_date is None:
            check.add("due_date", "invalid_due_date", "Invalid due date format")
        elif due_date < now:
            check.add("due_date", "past_due_date", "Due date cannot be in the past")
        else:
            cleaned["due_date"] = due_date

    check.done()
    return cleaned


def validate_submission(data: Mapping) -> dict:
    check = _Checker()
    file_url = (data.get("file_url") or "").strip()
    if file_url:
        if len(file_url) > URL_MAX_LENGTH:
            check.add("file_url", "max_length", f"File URL is too long (max {URL_MAX_LENGTH} characters)")
        elif not is_absolute_url(file_url):
            check.add("file_url", "invalid_url", "File URL must be a valid http(s) URL")
    notes = check.text(data, "submission_notes", "Submission notes", max_length=TEXT_MAX_LENGTH)
    check.done()
    return {"file_url": file_url or None, "submission_notes": notes or None}


def validate_review(data: Mapping) -> dict:
    check = _Checker()
    outcome = None
    try:
        outcome = DeliverableStatus(data.get("status"))
    except ValueError:
        pass
    if outcome not in REVIEW_OUTCOMES:
        allowed = ", ".join(sorted(s.value for s in REVIEW_OUTCOMES))
        check.add("status", "invalid_choice", f"Review status must be one of: {allowed}")
        outcome = None

    notes = check.text(data, "review_notes", "Review notes", max_length=TEXT_MAX_LENGTH)
    if outcome is not None and requires_review_notes(outcome) and not notes:
        check.add("review_notes", "required", "Review notes are required when rejecting or requesting a revision")

    check.done()
    return {"status": outcome, "review_notes": notes or None}


def validate_message(data: Mapping) -> dict:
    check = _Checker()
    content = check.text(data, "content", "Message", required=True, max_length=TEXT_MAX_LENGTH)
    check.done()
    return {"content": content}


def validate_registration(data: Mapping) -> dict:
    check = _Checker()
    cleaned = {
        "name": check.text(data, "name", "Name", required=True, max_length=TITLE_MAX_LENGTH),
        "bio": check.text(data, "bio", "Bio", max_length=TEXT_MAX_LENGTH),
        "website": (data.get("website") or "").strip(),
        "social_media": dict(data.get("social_media") or {}),
        "email": None,
        "password": data.get("password") or "",
        "user_type": None,
    }

    email = (data.get("email") or "").strip().lower()
    if not email:
        check.add("email", "required", "Email is required")
    else:
        try:
            cleaned["email"] = str(_email.validate_python(email))
        except PydanticValidationError:
            check.add("email", "invalid_email", "Email address is not valid")

    if not cleaned["password"]:
        check.add("password", "required", "Password is required")
    elif len(cleaned["password"]) < PASSWORD_MIN_LENGTH:
        check.add("password", "min_length", f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")

    try:
        cleaned["user_type"] = UserType(data.get("user_type"))
    except ValueError:
        check.add("user_type", "invalid_choice", "User type must be 'brand' or 'influencer'")

    if cleaned["website"]:
        _check_website(check, cleaned["website"])

    check.done()
    return cleaned


def validate_profile_update(data: Mapping) -> dict:
    """Only keys present in data are validated and returned."""
    check = _Checker()
    cleaned = {}
    if "name" in data and data["name"] is not None:
        cleaned["name"] = check.text(data, "name", "Name", required=True, max_length=TITLE_MAX_LENGTH)
    if "bio" in data and data["bio"] is not None:
        cleaned["bio"] = check.text(data, "bio", "Bio", max_length=TEXT_MAX_LENGTH)
    if "website" in data and data["website"] is not None:
        website = data["website"].strip()
        if website:
            _check_website(check, website)
        cleaned["website"] = website
    if "social_media" in data and data["social_media"] is not None:
        cleaned["social_media"] = dict(data["social_media"])
    check.done()
    return cleaned


def _check_website(check: _Checker, website: str) -> None:
    if len(website) > URL_MAX_LENGTH:
        check.add("website", "max_length", f"Website is too long (max {URL_MAX_LENGTH} characters)")
    elif not is_absolute_url(website):
        check.add("website", "invalid_url", "Website must be a valid http(s) URL")
