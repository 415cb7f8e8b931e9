# Engagement Service for Influmatch
# Runs the authorization predicate, validation and status tables in front of every store write

import logging
from dataclasses import dataclass
from typing import List, Mapping, Optional, Type

from core import policy
from core.clock import Clock, SystemClock
from core.conversations import (
    ConversationKey,
    pair_conversation_id,
    parse_conversation_id,
    proposal_conversation_id,
)
from core.errors import (
    Conflict,
    DuplicateProposal,
    NotFound,
    Unauthorized,
    ValidationError,
    Violation,
)
from core.lifecycle import (
    DeliverableStatus,
    ListingStatus,
    ProposalStatus,
    check_transition,
)
from core.records import (
    Actor,
    ConversationSummary,
    DeliverableRecord,
    ListingRecord,
    MessageRecord,
    ProposalRecord,
    evolve,
)
from core.store import EngagementStore
from core import validation

logger = logging.getLogger(__name__)


@dataclass
class ProposalChat:
    """A proposal-scoped conversation and the context needed to render it."""
    conversation_id: str
    proposal: ProposalRecord
    listing: ListingRecord
    messages: List[MessageRecord]

    @property
    def has_existing_messages(self) -> bool:
        return bool(self.messages)


def _parse_choice(enum_cls: Type, value, field: str = "status"):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(s.value for s in enum_cls)
        raise ValidationError([Violation(field, "invalid_choice", f"Status must be one of: {allowed}")])


class EngagementService:
    """
    Listing, proposal, deliverable and messaging operations.

    Every mutating method checks, in order: the referenced records exist,
    the actor is allowed, the input is valid, the status move is legal.
    Only then is a single write issued to the store.
    """

    def __init__(self, store: EngagementStore, clock: Optional[Clock] = None):
        self.store = store
        self.clock = clock or SystemClock()

    # ==================== LOOKUPS ====================

    def _listing(self, listing_id: int) -> ListingRecord:
        listing = self.store.find_listing(listing_id)
        if listing is None:
            raise NotFound("Listing", listing_id)
        return listing

    def _proposal(self, proposal_id: int) -> ProposalRecord:
        proposal = self.store.find_proposal(proposal_id)
        if proposal is None:
            raise NotFound("Proposal", proposal_id)
        return proposal

    def _deliverable_context(self, deliverable_id: int):
        deliverable = self.store.find_deliverable(deliverable_id)
        if deliverable is None:
            raise NotFound("Deliverable", deliverable_id)
        proposal = self._proposal(deliverable.proposal_id)
        listing = self._listing(proposal.listing_id)
        return listing, proposal, deliverable

    # ==================== LISTINGS ====================

    def list_listings(self, status: Optional[str] = None, brand_id: Optional[int] = None) -> List[ListingRecord]:
        """Public listing browse, newest first."""
        parsed = _parse_choice(ListingStatus, status) if status else None
        return self.store.list_listings(status=parsed, brand_id=brand_id)

    def get_listing(self, listing_id: int, actor: Optional[Actor] = None) -> ListingRecord:
        listing = self._listing(listing_id)
        if not policy.can_read_listing(actor, listing):
            raise Unauthorized("You don't have access to this listing")
        return listing

    def create_listing(self, actor: Actor, data: Mapping) -> ListingRecord:
        policy.require_create_listing(actor)
        cleaned = validation.validate_listing(data, self.clock.now())

        listing = self.store.insert_listing(ListingRecord(id=None, brand_id=actor.id, **cleaned))
        logger.info(f"Listing {listing.id} created by brand {actor.id}")
        return listing

    def update_listing_status(self, actor: Actor, listing_id: int, status) -> ListingRecord:
        listing = self._listing(listing_id)
        policy.require_manage_listing(actor, listing)
        target = check_transition(listing.status, _parse_choice(ListingStatus, status))

        updated = self.store.update_listing(evolve(listing, status=target))
        logger.info(f"Listing {listing_id}: {listing.status.value} -> {target.value}")
        return updated

    # ==================== PROPOSALS ====================

    def submit_proposal(self, actor: Actor, listing_id: int, data: Mapping) -> ProposalRecord:
        policy.require_create_proposal(actor)
        listing = self._listing(listing_id)

        if self.store.find_proposal_by_listing_and_influencer(listing.id, actor.id) is not None:
            raise DuplicateProposal(listing.id, actor.id)
        if listing.status != ListingStatus.ACTIVE:
            raise Conflict("Listing is not accepting proposals")

        cleaned = validation.validate_proposal(data)
        proposal = self.store.insert_proposal(
            ProposalRecord(id=None, listing_id=listing.id, influencer_id=actor.id, **cleaned)
        )
        logger.info(f"Proposal {proposal.id} submitted on listing {listing.id} by influencer {actor.id}")
        return proposal

    def list_proposals_for_listing(self, actor: Actor, listing_id: int) -> List[ProposalRecord]:
        listing = self._listing(listing_id)
        visibility = policy.require_proposal_visibility(actor, listing)

        proposals = self.store.list_proposals_for_listing(listing.id)
        if visibility == policy.ProposalVisibility.OWN:
            proposals = [p for p in proposals if p.influencer_id == actor.id]
        return proposals

    def list_my_proposals(self, actor: Actor) -> List[ProposalRecord]:
        if not actor.is_influencer:
            raise Unauthorized("Only influencers have proposals")
        return self.store.list_proposals_for_influencer(actor.id)

    def get_proposal(self, actor: Actor, proposal_id: int) -> ProposalRecord:
        proposal = self._proposal(proposal_id)
        policy.require_view_proposal(actor, self._listing(proposal.listing_id), proposal)
        return proposal

    def update_proposal_status(self, actor: Actor, proposal_id: int, status) -> ProposalRecord:
        proposal = self._proposal(proposal_id)
        listing = self._listing(proposal.listing_id)
        policy.require_view_proposal(actor, listing, proposal)
        requested = _parse_choice(ProposalStatus, status)

        policy.require_set_proposal_status(actor, listing, proposal, requested)
        target = check_transition(proposal.status, requested)

        updated = self.store.update_proposal(evolve(proposal, status=target))
        logger.info(f"Proposal {proposal_id}: {proposal.status.value} -> {target.value} by user {actor.id}")
        return updated

    def edit_proposal(self, actor: Actor, proposal_id: int, data: Mapping) -> ProposalRecord:
        proposal = self._proposal(proposal_id)
        policy.require_edit_proposal(actor, proposal)

        merged = {
            "message": proposal.message,
            "proposed_budget": proposal.proposed_budget,
            "timeline": proposal.timeline,
        }
        merged.update({k: v for k, v in data.items() if k in merged and v is not None})
        cleaned = validation.validate_proposal(merged)

        updated = self.store.update_proposal(evolve(proposal, **cleaned))
        logger.info(f"Proposal {proposal_id} edited by influencer {actor.id}")
        return updated

    # ==================== DELIVERABLES ====================

    def create_deliverable(self, actor: Actor, proposal_id: int, data: Mapping) -> DeliverableRecord:
        proposal = self._proposal(proposal_id)
        listing = self._listing(proposal.listing_id)
        policy.require_create_deliverable(actor, listing, proposal)
        cleaned = validation.validate_deliverable(data, self.clock.now())

        deliverable = self.store.insert_deliverable(
            DeliverableRecord(id=None, proposal_id=proposal.id, **cleaned)
        )
        logger.info(f"Deliverable {deliverable.id} created for proposal {proposal.id}")
        return deliverable

    def get_deliverable(self, actor: Actor, deliverable_id: int) -> DeliverableRecord:
        listing, proposal, deliverable = self._deliverable_context(deliverable_id)
        policy.require_view_deliverable(actor, listing, proposal)
        return deliverable

    def list_deliverables_for_proposal(self, actor: Actor, proposal_id: int) -> List[DeliverableRecord]:
        proposal = self._proposal(proposal_id)
        policy.require_view_deliverable(actor, self._listing(proposal.listing_id), proposal)
        return self.store.list_deliverables_for_proposal(proposal.id)

    def list_my_deliverables(self, actor: Actor) -> List[DeliverableRecord]:
        if actor.is_brand:
            return self.store.list_deliverables_for_brand(actor.id)
        return self.store.list_deliverables_for_influencer(actor.id)

    def update_deliverable(self, actor: Actor, deliverable_id: int, data: Mapping) -> DeliverableRecord:
        listing, proposal, deliverable = self._deliverable_context(deliverable_id)
        policy.require_modify_deliverable(actor, listing, deliverable)
        policy.require_accepted_proposal(proposal)

        merged = {
            "title": deliverable.title,
            "description": deliverable.description,
            "type": deliverable.type.value,
        }
        merged.update({k: v for k, v in data.items() if k in merged and v is not None})
        # Only a due date sent with this request is checked; an explicit null clears it
        merged["due_date"] = data.get("due_date")
        cleaned = validation.validate_deliverable(merged, self.clock.now())
        if "due_date" not in data:
            cleaned["due_date"] = deliverable.due_date

        updated = self.store.update_deliverable(evolve(deliverable, **cleaned))
        logger.info(f"Deliverable {deliverable_id} updated by brand {actor.id}")
        return updated

    def delete_deliverable(self, actor: Actor, deliverable_id: int) -> None:
        listing, _, deliverable = self._deliverable_context(deliverable_id)
        policy.require_modify_deliverable(actor, listing, deliverable)

        self.store.delete_deliverable(deliverable.id)
        logger.info(f"Deliverable {deliverable_id} deleted by brand {actor.id}")

    def submit_deliverable(self, actor: Actor, deliverable_id: int, data: Mapping) -> DeliverableRecord:
        _, proposal, deliverable = self._deliverable_context(deliverable_id)
        now = self.clock.now()
        policy.require_submit_deliverable(actor, proposal, deliverable, now)
        policy.require_accepted_proposal(proposal)
        cleaned = validation.validate_submission(data)
        target = check_transition(deliverable.status, DeliverableStatus.SUBMITTED)

        updated = self.store.update_deliverable(
            evolve(deliverable, status=target, submitted_at=now, **cleaned)
        )
        logger.info(f"Deliverable {deliverable_id}: {deliverable.status.value} -> submitted")
        return updated

    def review_deliverable(self, actor: Actor, deliverable_id: int, data: Mapping) -> DeliverableRecord:
        listing, proposal, deliverable = self._deliverable_context(deliverable_id)
        policy.require_review_deliverable(actor, listing)
        policy.require_accepted_proposal(proposal)
        cleaned = validation.validate_review(data)
        target = check_transition(deliverable.status, cleaned["status"])

        updated = self.store.update_deliverable(
            evolve(
                deliverable,
                status=target,
                review_notes=cleaned["review_notes"],
                reviewed_at=self.clock.now(),
            )
        )
        logger.info(f"Deliverable {deliverable_id}: {deliverable.status.value} -> {target.value} by brand {actor.id}")
        return updated

    # ==================== MESSAGING ====================

    def _proposal_party(self, actor: Actor, listing: ListingRecord, proposal: ProposalRecord) -> int:
        """The other participant of a proposal chat."""
        return proposal.influencer_id if actor.id == listing.brand_id else listing.brand_id

    def send_message(self, actor: Actor, data: Mapping) -> MessageRecord:
        """
        Send a message either into a proposal chat (``proposal_id`` or a
        ``proposal-{id}`` conversation id) or directly to ``recipient_id``.
        """
        content = validation.validate_message(data)["content"]
        recipient_id = data.get("recipient_id")
        proposal_id = data.get("proposal_id")
        conversation_id = data.get("conversation_id")

        key: Optional[ConversationKey] = None
        if conversation_id:
            key = parse_conversation_id(conversation_id)
            if key.is_proposal_chat:
                if proposal_id is not None and int(proposal_id) != key.proposal_id:
                    raise ValidationError([Violation("conversation_id", "invalid_conversation",
                                                     "Conversation does not match the proposal")])
                proposal_id = key.proposal_id

        if proposal_id is not None:
            proposal = self._proposal(int(proposal_id))
            listing = self._listing(proposal.listing_id)
            policy.require_proposal_chat(actor, listing, proposal)
            other = self._proposal_party(actor, listing, proposal)
            if recipient_id is not None and int(recipient_id) != other:
                raise ValidationError([Violation("recipient_id", "invalid_recipient",
                                                 "Recipient is not part of this proposal")])
            conversation_id = proposal_conversation_id(proposal.id)
            recipient_id = other
        else:
            if recipient_id is None:
                raise ValidationError([Violation("recipient_id", "required", "Recipient is required")])
            recipient_id = int(recipient_id)
            if recipient_id == actor.id:
                raise ValidationError([Violation("recipient_id", "invalid_recipient",
                                                 "You cannot message yourself")])
            if self.store.find_user(recipient_id) is None:
                raise NotFound("User", recipient_id)
            expected = pair_conversation_id(actor.id, recipient_id)
            if key is not None and key.conversation_id != expected:
                raise ValidationError([Violation("conversation_id", "invalid_conversation",
                                                 "Conversation does not match the recipient")])
            conversation_id = expected

        message = self.store.insert_message(MessageRecord(
            id=None,
            conversation_id=conversation_id,
            sender_id=actor.id,
            recipient_id=recipient_id,
            content=content,
        ))
        logger.info(f"Message {message.id} sent in {conversation_id} by user {actor.id}")
        return message

    def get_conversation(self, actor: Actor, conversation_id: str) -> List[MessageRecord]:
        key = parse_conversation_id(conversation_id)
        if key.is_proposal_chat:
            return self.get_proposal_chat(actor, key.proposal_id).messages
        policy.require_pair_conversation(actor, key)
        return self.store.list_messages(key.conversation_id)

    def list_conversations(self, actor: Actor) -> List[ConversationSummary]:
        return self.store.list_conversations_for_user(actor.id)

    def get_proposal_chat(self, actor: Actor, proposal_id: int) -> ProposalChat:
        proposal = self._proposal(proposal_id)
        listing = self._listing(proposal.listing_id)
        policy.require_proposal_chat(actor, listing, proposal)

        conversation_id = proposal_conversation_id(proposal.id)
        return ProposalChat(
            conversation_id=conversation_id,
            proposal=proposal,
            listing=listing,
            messages=self.store.list_messages(conversation_id),
        )

    def start_proposal_chat(self, actor: Actor, proposal_id: int) -> ProposalChat:
        """Open (or reopen) the chat for an accepted proposal. Nothing is written."""
        chat = self.get_proposal_chat(actor, proposal_id)
        logger.info(f"Chat {chat.conversation_id} opened by user {actor.id}")
        return chat


def get_engagement_service(store: EngagementStore, clock: Optional[Clock] = None) -> EngagementService:
    """Factory function to get engagement service instance."""
    return EngagementService(store, clock)
