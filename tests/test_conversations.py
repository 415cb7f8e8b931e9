import pytest

from core.conversations import (
    pair_conversation_id,
    parse_conversation_id,
    proposal_conversation_id,
)
from core.errors import ValidationError


def test_pair_id_is_order_independent():
    assert pair_conversation_id(7, 3) == "3-7"
    assert pair_conversation_id(3, 7) == "3-7"


def test_parse_pair_id():
    key = parse_conversation_id("3-7")
    assert key.participants == (3, 7)
    assert not key.is_proposal_chat


def test_parse_proposal_id():
    key = parse_conversation_id(proposal_conversation_id(42))
    assert key.conversation_id == "proposal-42"
    assert key.proposal_id == 42
    assert key.is_proposal_chat


@pytest.mark.parametrize("raw", ["7-3", "3-3", "proposal-", "proposal-x", "abc", "1-2-3", ""])
def test_malformed_ids_are_rejected(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_conversation_id(raw)
    assert exc_info.value.rules() == ["invalid_conversation"]
