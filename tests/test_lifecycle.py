import pytest

from core.errors import InvalidTransition
from core.lifecycle import (
    DeliverableStatus,
    ListingStatus,
    ProposalStatus,
    allowed_transitions,
    can_transition,
    check_transition,
    is_terminal,
    requires_review_notes,
)


@pytest.mark.parametrize("target", [ProposalStatus.ACCEPTED, ProposalStatus.REJECTED, ProposalStatus.WITHDRAWN])
def test_under_review_proposal_can_move_to_any_decision(target):
    assert check_transition(ProposalStatus.UNDER_REVIEW, target) is target


def test_accepted_proposal_can_only_be_withdrawn():
    assert allowed_transitions(ProposalStatus.ACCEPTED) == {ProposalStatus.WITHDRAWN}
    assert can_transition(ProposalStatus.ACCEPTED, ProposalStatus.REJECTED) is False


def test_rejected_proposal_cannot_be_accepted():
    with pytest.raises(InvalidTransition, match="from 'rejected' to 'accepted'"):
        check_transition(ProposalStatus.REJECTED, ProposalStatus.ACCEPTED)


def test_terminal_states():
    assert is_terminal(ProposalStatus.REJECTED)
    assert is_terminal(ProposalStatus.WITHDRAWN)
    assert is_terminal(DeliverableStatus.APPROVED)
    assert is_terminal(DeliverableStatus.REJECTED)
    assert is_terminal(ListingStatus.COMPLETED)
    assert not is_terminal(ListingStatus.CLOSED)


def test_deliverable_review_graph():
    assert can_transition(DeliverableStatus.PENDING, DeliverableStatus.SUBMITTED)
    assert can_transition(DeliverableStatus.SUBMITTED, DeliverableStatus.APPROVED)
    assert can_transition(DeliverableStatus.SUBMITTED, DeliverableStatus.UNDER_REVIEW)
    assert can_transition(DeliverableStatus.UNDER_REVIEW, DeliverableStatus.REVISION_REQUESTED)
    assert can_transition(DeliverableStatus.REVISION_REQUESTED, DeliverableStatus.SUBMITTED)
    assert can_transition(DeliverableStatus.REVISION_REQUESTED, DeliverableStatus.REJECTED)

    assert not can_transition(DeliverableStatus.PENDING, DeliverableStatus.APPROVED)
    assert not can_transition(DeliverableStatus.REVISION_REQUESTED, DeliverableStatus.APPROVED)


def test_listing_can_be_reopened_until_completed():
    assert check_transition(ListingStatus.ACTIVE, ListingStatus.CLOSED) is ListingStatus.CLOSED
    assert check_transition(ListingStatus.CLOSED, ListingStatus.ACTIVE) is ListingStatus.ACTIVE
    with pytest.raises(InvalidTransition):
        check_transition(ListingStatus.COMPLETED, ListingStatus.ACTIVE)


def test_check_transition_rejects_mixed_status_types():
    with pytest.raises(InvalidTransition):
        check_transition(ProposalStatus.UNDER_REVIEW, DeliverableStatus.SUBMITTED)


def test_notes_required_for_rejection_and_revision_only():
    assert requires_review_notes(DeliverableStatus.REJECTED)
    assert requires_review_notes(DeliverableStatus.REVISION_REQUESTED)
    assert not requires_review_notes(DeliverableStatus.APPROVED)
    assert not requires_review_notes(DeliverableStatus.UNDER_REVIEW)
