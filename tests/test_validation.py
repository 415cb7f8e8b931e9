from datetime import datetime

import pytest

from core.errors import ValidationError
from core.lifecycle import DeliverableStatus, DeliverableType
from core.roles import UserType
from core.validation import (
    parse_datetime,
    parse_positive_int,
    sanitize_text,
    validate_deliverable,
    validate_listing,
    validate_message,
    validate_proposal,
    validate_registration,
    validate_review,
    validate_submission,
)

NOW = datetime(2026, 3, 1, 12, 0, 0)

LISTING = {
    "title": "Spring launch",
    "description": "Promote our spring collection",
    "category": "fashion",
    "budget": "1000",
    "deadline": "2026-03-10",
}


def test_sanitize_strips_scripts_and_handlers():
    assert sanitize_text("hi<script>alert(1)</script> there") == "hi there"
    assert sanitize_text('<a href="javascript:alert(1)">x</a>') == '<a href="alert(1)">x</a>'
    assert sanitize_text('<img src="a.png" onerror="steal()">') == '<img src="a.png">'
    assert sanitize_text("  plain  ") == "plain"
    assert sanitize_text(None) == ""


def test_sanitize_catches_spliced_and_slash_prefixed_payloads():
    assert sanitize_text('<a href="javajavascript:script:alert(1)">x</a>') == '<a href="alert(1)">x</a>'
    assert sanitize_text("<img src=x/onerror=alert(1)>") == "<img src=x>"


def test_parse_datetime_variants():
    assert parse_datetime("2026-03-10") == datetime(2026, 3, 10)
    assert parse_datetime("2026-03-10", end_of_day=True) == datetime(2026, 3, 10, 23, 59, 59, 999999)
    assert parse_datetime("2026-03-10T08:00:00Z") == datetime(2026, 3, 10, 8, 0)
    assert parse_datetime("2026-03-10T10:00:00+02:00") == datetime(2026, 3, 10, 8, 0)
    assert parse_datetime("next tuesday") is None
    assert parse_datetime("") is None


def test_parse_positive_int():
    assert parse_positive_int(5) == 5
    assert parse_positive_int("12") == 12
    assert parse_positive_int(3.0) == 3
    assert parse_positive_int(0) is None
    assert parse_positive_int(-4) is None
    assert parse_positive_int("1.5") is None
    assert parse_positive_int(True) is None


def test_valid_listing_is_cleaned():
    cleaned = validate_listing(LISTING, NOW)
    assert cleaned["budget"] == 1000
    assert cleaned["deadline"] == datetime(2026, 3, 10)
    assert cleaned["campaign_deadline"] is None


def test_listing_collects_every_violation():
    with pytest.raises(ValidationError) as exc_info:
        validate_listing({"budget": 0, "deadline": "2026-02-01"}, NOW)

    rules = dict(zip(exc_info.value.fields(), exc_info.value.rules()))
    assert rules["title"] == "required"
    assert rules["description"] == "required"
    assert rules["category"] == "required"
    assert rules["budget"] == "positive_integer"
    assert rules["deadline"] == "past_deadline"


def test_listing_deadline_must_parse():
    with pytest.raises(ValidationError) as exc_info:
        validate_listing({**LISTING, "deadline": "soon"}, NOW)
    assert exc_info.value.rules() == ["invalid_deadline"]


def test_listing_deadline_equal_to_now_is_past():
    with pytest.raises(ValidationError) as exc_info:
        validate_listing({**LISTING, "deadline": NOW.isoformat()}, NOW)
    assert exc_info.value.rules() == ["past_deadline"]


def test_campaign_deadline_not_before_application_deadline():
    with pytest.raises(ValidationError) as exc_info:
        validate_listing({**LISTING, "campaign_deadline": "2026-03-05"}, NOW)
    assert exc_info.value.rules() == ["before_deadline"]

    cleaned = validate_listing({**LISTING, "campaign_deadline": "2026-04-01"}, NOW)
    assert cleaned["campaign_deadline"] == datetime(2026, 4, 1)


def test_proposal_rules():
    with pytest.raises(ValidationError) as exc_info:
        validate_proposal({"message": "  ", "proposed_budget": "abc"})
    assert set(exc_info.value.fields()) == {"message", "proposed_budget", "timeline"}

    cleaned = validate_proposal({"message": "Hi", "proposed_budget": 800, "timeline": "2 weeks"})
    assert cleaned == {"message": "Hi", "proposed_budget": 800, "timeline": "2 weeks"}


def test_deliverable_rules():
    cleaned = validate_deliverable({"title": "Post 1", "type": "image", "due_date": "2026-03-01"}, NOW)
    assert cleaned["type"] is DeliverableType.IMAGE
    # Date-only due dates run to the end of that day
    assert cleaned["due_date"] == datetime(2026, 3, 1, 23, 59, 59, 999999)

    with pytest.raises(ValidationError) as exc_info:
        validate_deliverable({"title": "x" * 201, "type": "podcast", "due_date": "2026-02-28"}, NOW)
    assert set(exc_info.value.rules()) == {"max_length", "invalid_choice", "past_due_date"}


def test_submission_url_checks():
    assert validate_submission({"file_url": "https://x.com/f.jpg"})["file_url"] == "https://x.com/f.jpg"
    assert validate_submission({}) == {"file_url": None, "submission_notes": None}

    with pytest.raises(ValidationError) as exc_info:
        validate_submission({"file_url": "not a url"})
    assert exc_info.value.rules() == ["invalid_url"]

    with pytest.raises(ValidationError) as exc_info:
        validate_submission({"file_url": "https://x.com/" + "a" * 500})
    assert exc_info.value.rules() == ["max_length"]


@pytest.mark.parametrize("outcome", ["rejected", "revision_requested"])
def test_review_notes_required_for_negative_outcomes(outcome):
    with pytest.raises(ValidationError) as exc_info:
        validate_review({"status": outcome})
    assert exc_info.value.fields() == ["review_notes"]


def test_approval_needs_no_notes():
    assert validate_review({"status": "approved"}) == {"status": DeliverableStatus.APPROVED, "review_notes": None}


def test_review_rejects_non_review_status():
    with pytest.raises(ValidationError) as exc_info:
        validate_review({"status": "pending"})
    assert exc_info.value.rules() == ["invalid_choice"]


def test_review_notes_length():
    with pytest.raises(ValidationError) as exc_info:
        validate_review({"status": "rejected", "review_notes": "n" * 1001})
    assert exc_info.value.rules() == ["max_length"]


def test_message_content():
    assert validate_message({"content": " hello "}) == {"content": "hello"}
    with pytest.raises(ValidationError):
        validate_message({"content": "<script>x</script>"})
    with pytest.raises(ValidationError):
        validate_message({"content": "m" * 1001})


def test_registration():
    cleaned = validate_registration({
        "name": "Acme",
        "email": "Team@Influmatch.io",
        "password": "supersecret",
        "user_type": "brand",
    })
    assert cleaned["email"] == "team@influmatch.io"
    assert cleaned["user_type"] is UserType.BRAND

    with pytest.raises(ValidationError) as exc_info:
        validate_registration({"name": "Acme", "email": "nope", "password": "short", "user_type": "admin"})
    assert set(exc_info.value.rules()) == {"invalid_email", "min_length", "invalid_choice"}
