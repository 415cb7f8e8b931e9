"""
Authorization predicate for listings, proposals, deliverables and conversations.

Each ``can_*`` function is a pure allow/deny decision over an already-trusted
actor and the records involved. The matching ``require_*`` function raises
Unauthorized on denial so callers can gate a mutation in one line. Nothing here
touches storage or the clock; callers pass ``now`` where deadlines matter.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from core.conversations import ConversationKey
from core.errors import Conflict, Unauthorized
from core.lifecycle import DeliverableStatus, ProposalStatus
from core.records import Actor, DeliverableRecord, ListingRecord, ProposalRecord
from core.roles import Permission, has_permission


class ProposalVisibility(str, Enum):
    ALL = "all"
    OWN = "own"


def _owns_listing(actor: Optional[Actor], listing: ListingRecord) -> bool:
    return actor is not None and actor.is_brand and actor.id == listing.brand_id


def _owns_proposal(actor: Optional[Actor], proposal: ProposalRecord) -> bool:
    return actor is not None and actor.is_influencer and actor.id == proposal.influencer_id


def _require(allowed: bool, detail: str) -> None:
    if not allowed:
        raise Unauthorized(detail)


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

def can_read_listing(actor: Optional[Actor], listing: ListingRecord) -> bool:
    return True


def can_create_listing(actor: Actor) -> bool:
    return has_permission(actor.user_type, Permission.CREATE_LISTINGS)


def require_create_listing(actor: Actor) -> None:
    _require(can_create_listing(actor), "Only brands can create listings")


def can_manage_listing(actor: Actor, listing: ListingRecord) -> bool:
    return _owns_listing(actor, listing) and has_permission(actor.user_type, Permission.MANAGE_OWN_LISTINGS)


def require_manage_listing(actor: Actor, listing: ListingRecord) -> None:
    _require(can_manage_listing(actor, listing), "Only the brand that owns this listing can change it")


# ---------------------------------------------------------------------------
# Proposals
# ---------------------------------------------------------------------------

def can_create_proposal(actor: Actor) -> bool:
    return has_permission(actor.user_type, Permission.SUBMIT_PROPOSALS)


def require_create_proposal(actor: Actor) -> None:
    _require(can_create_proposal(actor), "Only influencers can submit proposals")


def proposal_visibility(actor: Actor, listing: ListingRecord) -> Optional[ProposalVisibility]:
    """ALL for the owning brand, OWN for any influencer, None otherwise."""
    if _owns_listing(actor, listing):
        return ProposalVisibility.ALL
    if actor.is_influencer:
        return ProposalVisibility.OWN
    return None


def require_proposal_visibility(actor: Actor, listing: ListingRecord) -> ProposalVisibility:
    visibility = proposal_visibility(actor, listing)
    _require(visibility is not None, "Access denied")
    return visibility


def can_view_proposal(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> bool:
    return _owns_listing(actor, listing) or _owns_proposal(actor, proposal)


def require_view_proposal(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> None:
    _require(can_view_proposal(actor, listing, proposal), "You don't have access to this proposal")


def can_set_proposal_status(actor: Actor, listing: ListingRecord, proposal: ProposalRecord,
                            target: ProposalStatus) -> bool:
    """Accept/reject belong to the owning brand; either party may withdraw."""
    if _owns_listing(actor, listing):
        return has_permission(actor.user_type, Permission.REVIEW_PROPOSALS)
    if target == ProposalStatus.WITHDRAWN and _owns_proposal(actor, proposal):
        return has_permission(actor.user_type, Permission.WITHDRAW_PROPOSALS)
    return False


def require_set_proposal_status(actor: Actor, listing: ListingRecord, proposal: ProposalRecord,
                                target: ProposalStatus) -> None:
    _require(
        can_set_proposal_status(actor, listing, proposal, target),
        "Access denied. Only the brand owner can update proposal status.",
    )


def can_edit_proposal(actor: Actor, proposal: ProposalRecord) -> bool:
    return _owns_proposal(actor, proposal) and has_permission(actor.user_type, Permission.EDIT_OWN_PROPOSALS)


def require_edit_proposal(actor: Actor, proposal: ProposalRecord) -> None:
    _require(can_edit_proposal(actor, proposal), "Access denied. Only the proposal creator can edit it.")
    if proposal.status != ProposalStatus.UNDER_REVIEW:
        raise Conflict(
            'Proposal cannot be edited. Only proposals with "under_review" status can be modified.'
        )


# ---------------------------------------------------------------------------
# Deliverables
# ---------------------------------------------------------------------------

def can_create_deliverable(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> bool:
    return (
        _owns_listing(actor, listing)
        and has_permission(actor.user_type, Permission.CREATE_DELIVERABLES)
        and proposal.status == ProposalStatus.ACCEPTED
    )


def require_create_deliverable(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> None:
    _require(
        can_create_deliverable(actor, listing, proposal),
        "Only the brand that owns the listing can add deliverables to an accepted proposal",
    )


def can_view_deliverable(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> bool:
    return can_view_proposal(actor, listing, proposal)


def require_view_deliverable(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> None:
    _require(can_view_deliverable(actor, listing, proposal), "You don't have access to this deliverable")


def can_modify_deliverable(actor: Actor, listing: ListingRecord, deliverable: DeliverableRecord) -> bool:
    """Brand-side edits and deletion, only before any work was submitted."""
    return _owns_listing(actor, listing) and deliverable.status == DeliverableStatus.PENDING


def require_modify_deliverable(actor: Actor, listing: ListingRecord, deliverable: DeliverableRecord) -> None:
    _require(
        can_modify_deliverable(actor, listing, deliverable),
        "Only the owning brand can change a deliverable, and only while it is pending",
    )


def require_accepted_proposal(proposal: ProposalRecord) -> None:
    """Deliverable work continues only while the proposal stays accepted."""
    if proposal.status != ProposalStatus.ACCEPTED:
        raise Conflict(f"Proposal is {proposal.status.value}; its deliverables can no longer change")


def can_submit_deliverable(actor: Actor, proposal: ProposalRecord, deliverable: DeliverableRecord,
                           now: datetime) -> bool:
    # Whether the status allows a submission is decided by the transition table
    return (
        _owns_proposal(actor, proposal)
        and has_permission(actor.user_type, Permission.SUBMIT_DELIVERABLES)
        and (deliverable.due_date is None or deliverable.due_date >= now)
    )


def require_submit_deliverable(actor: Actor, proposal: ProposalRecord, deliverable: DeliverableRecord,
                               now: datetime) -> None:
    if not _owns_proposal(actor, proposal):
        raise Unauthorized("Only the influencer on this proposal can submit this deliverable")
    _require(can_submit_deliverable(actor, proposal, deliverable, now), "Deliverable is past its due date")


def can_review_deliverable(actor: Actor, listing: ListingRecord) -> bool:
    return _owns_listing(actor, listing) and has_permission(actor.user_type, Permission.REVIEW_DELIVERABLES)


def require_review_deliverable(actor: Actor, listing: ListingRecord) -> None:
    _require(
        can_review_deliverable(actor, listing),
        "Only the brand that owns the listing can review deliverables",
    )


# ---------------------------------------------------------------------------
# Messaging and profiles
# ---------------------------------------------------------------------------

def can_use_proposal_chat(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> bool:
    return (
        proposal.status == ProposalStatus.ACCEPTED
        and (_owns_listing(actor, listing) or _owns_proposal(actor, proposal))
    )


def require_proposal_chat(actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> None:
    _require(
        can_use_proposal_chat(actor, listing, proposal),
        "Chat is only available to the brand and influencer on an accepted proposal",
    )


def can_read_pair_conversation(actor: Actor, key: ConversationKey) -> bool:
    return key.participants is not None and actor.id in key.participants


def require_pair_conversation(actor: Actor, key: ConversationKey) -> None:
    _require(can_read_pair_conversation(actor, key), "You are not part of this conversation")


def can_update_user(actor: Actor, user_id: int) -> bool:
    return actor.id == user_id and has_permission(actor.user_type, Permission.UPDATE_PROFILE)


def require_update_user(actor: Actor, user_id: int) -> None:
    _require(can_update_user(actor, user_id), "Unauthorized")
