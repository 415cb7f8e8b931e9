# Status Lifecycles for Listings, Proposals and Deliverables
# The transition tables here are the single source of truth for every status change

import enum
from typing import Dict, FrozenSet, TypeVar

from core.errors import InvalidTransition


class ListingStatus(str, enum.Enum):
    ACTIVE = "active"
    CLOSED = "closed"
    COMPLETED = "completed"


class ProposalStatus(str, enum.Enum):
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


class DeliverableStatus(str, enum.Enum):
    PENDING = "pending"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVISION_REQUESTED = "revision_requested"


class DeliverableType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"
    POST = "post"
    STORY = "story"
    REEL = "reel"
    OTHER = "other"


# {from_state: {allowed_to_states}}
LISTING_TRANSITIONS: Dict[ListingStatus, FrozenSet[ListingStatus]] = {
    ListingStatus.ACTIVE: frozenset({ListingStatus.CLOSED, ListingStatus.COMPLETED}),
    ListingStatus.CLOSED: frozenset({ListingStatus.ACTIVE, ListingStatus.COMPLETED}),
    ListingStatus.COMPLETED: frozenset(),
}

PROPOSAL_TRANSITIONS: Dict[ProposalStatus, FrozenSet[ProposalStatus]] = {
    ProposalStatus.UNDER_REVIEW: frozenset({
        ProposalStatus.ACCEPTED,
        ProposalStatus.REJECTED,
        ProposalStatus.WITHDRAWN,
    }),
    ProposalStatus.ACCEPTED: frozenset({ProposalStatus.WITHDRAWN}),
    ProposalStatus.REJECTED: frozenset(),
    ProposalStatus.WITHDRAWN: frozenset(),
}

DELIVERABLE_TRANSITIONS: Dict[DeliverableStatus, FrozenSet[DeliverableStatus]] = {
    DeliverableStatus.PENDING: frozenset({DeliverableStatus.SUBMITTED}),
    DeliverableStatus.SUBMITTED: frozenset({
        DeliverableStatus.UNDER_REVIEW,
        DeliverableStatus.APPROVED,
        DeliverableStatus.REJECTED,
        DeliverableStatus.REVISION_REQUESTED,
    }),
    DeliverableStatus.UNDER_REVIEW: frozenset({
        DeliverableStatus.APPROVED,
        DeliverableStatus.REJECTED,
        DeliverableStatus.REVISION_REQUESTED,
    }),
    DeliverableStatus.APPROVED: frozenset(),
    DeliverableStatus.REJECTED: frozenset(),
    DeliverableStatus.REVISION_REQUESTED: frozenset({
        DeliverableStatus.SUBMITTED,
        DeliverableStatus.REJECTED,
    }),
}

# Review outcomes a brand may pick
REVIEW_OUTCOMES = frozenset({
    DeliverableStatus.UNDER_REVIEW,
    DeliverableStatus.APPROVED,
    DeliverableStatus.REJECTED,
    DeliverableStatus.REVISION_REQUESTED,
})

# Review outcomes that must carry review notes
NOTES_REQUIRED_OUTCOMES = frozenset({
    DeliverableStatus.REJECTED,
    DeliverableStatus.REVISION_REQUESTED,
})

_TABLES = {
    ListingStatus: ("listing", LISTING_TRANSITIONS),
    ProposalStatus: ("proposal", PROPOSAL_TRANSITIONS),
    DeliverableStatus: ("deliverable", DELIVERABLE_TRANSITIONS),
}

S = TypeVar("S", ListingStatus, ProposalStatus, DeliverableStatus)


def allowed_transitions(current: S) -> FrozenSet[S]:
    _, table = _TABLES[type(current)]
    return table.get(current, frozenset())


def is_terminal(status: S) -> bool:
    return not allowed_transitions(status)


def can_transition(current: S, target: S) -> bool:
    return target in allowed_transitions(current)


def check_transition(current: S, target: S) -> S:
    """Return target if the move is legal, otherwise raise InvalidTransition."""
    entity, _ = _TABLES[type(current)]
    if type(target) is not type(current) or not can_transition(current, target):
        raise InvalidTransition(entity, current.value, getattr(target, "value", str(target)))
    return target


def requires_review_notes(outcome: DeliverableStatus) -> bool:
    return outcome in NOTES_REQUIRED_OUTCOMES
