# SQLAlchemy implementation of the engagement store
# Rows never leave this module: every read is mapped to a core record first

import logging
from collections import OrderedDict
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import desc, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import Conflict, DuplicateProposal, NotFound, StorageError
from core.lifecycle import ListingStatus
from core.records import (
    ConversationSummary,
    DeliverableRecord,
    ListingRecord,
    MessageRecord,
    ProposalRecord,
    UserRecord,
)
from database.models import Deliverable, Listing, Message, Proposal, User

logger = logging.getLogger(__name__)


# ============================================================================
# ROW -> RECORD MAPPING
# ============================================================================

def user_to_record(row: User) -> UserRecord:
    return UserRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        user_type=row.user_type,
        bio=row.bio or "",
        website=row.website or "",
        social_media=dict(row.social_media or {}),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def listing_to_record(row: Listing) -> ListingRecord:
    return ListingRecord(
        id=row.id,
        brand_id=row.brand_id,
        title=row.title,
        description=row.description,
        category=row.category,
        budget=row.budget,
        deadline=row.deadline,
        campaign_deadline=row.campaign_deadline,
        requirements=row.requirements or "",
        deliverables=row.deliverables or "",
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def proposal_to_record(row: Proposal) -> ProposalRecord:
    return ProposalRecord(
        id=row.id,
        listing_id=row.listing_id,
        influencer_id=row.influencer_id,
        message=row.message,
        proposed_budget=row.proposed_budget,
        timeline=row.timeline,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def deliverable_to_record(row: Deliverable) -> DeliverableRecord:
    return DeliverableRecord(
        id=row.id,
        proposal_id=row.proposal_id,
        title=row.title,
        type=row.type,
        description=row.description or "",
        due_date=row.due_date,
        status=row.status,
        file_url=row.file_url,
        submission_notes=row.submission_notes,
        review_notes=row.review_notes,
        submitted_at=row.submitted_at,
        reviewed_at=row.reviewed_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def message_to_record(row: Message) -> MessageRecord:
    return MessageRecord(
        id=row.id,
        conversation_id=row.conversation_id,
        sender_id=row.sender_id,
        recipient_id=row.recipient_id,
        content=row.content,
        read=bool(row.read),
        created_at=row.created_at,
    )


# Writable columns per model; ids, foreign keys to owners and timestamps managed by the database are excluded
_USER_FIELDS = ("name", "bio", "website", "social_media")
_LISTING_FIELDS = ("title", "description", "category", "budget", "deadline", "campaign_deadline",
                   "requirements", "deliverables", "status")
_PROPOSAL_FIELDS = ("message", "proposed_budget", "timeline", "status")
_DELIVERABLE_FIELDS = ("title", "description", "type", "due_date", "status", "file_url",
                       "submission_notes", "review_notes", "submitted_at", "reviewed_at")


def _apply(row, record, fields) -> None:
    for name in fields:
        setattr(row, name, getattr(record, name))


# ============================================================================
# STORE
# ============================================================================

class SqlAlchemyStore:
    """
    EngagementStore over a SQLAlchemy session.
    Each write commits on its own; any database failure rolls back and
    surfaces as StorageError.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage failure while {action}: {e}")
            raise StorageError(f"Storage failure while {action}") from e

    def _save(self, row, action: str):
        with self._guard(action):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        return row

    def _get(self, model, entity: str, entity_id: int):
        row = self.db.get(model, entity_id)
        if row is None:
            raise NotFound(entity, entity_id)
        return row

    # ==================== USERS ====================

    def find_user(self, user_id: int) -> Optional[UserRecord]:
        with self._guard("loading user"):
            row = self.db.get(User, user_id)
        return user_to_record(row) if row else None

    def find_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self._guard("loading user"):
            row = self.db.query(User).filter(User.email == email).first()
        return user_to_record(row) if row else None

    def insert_user(self, user: UserRecord) -> UserRecord:
        row = User(
            name=user.name,
            email=user.email,
            password_hash=user.password_hash,
            user_type=user.user_type,
            bio=user.bio,
            website=user.website,
            social_media=user.social_media,
        )
        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Rejected duplicate registration for {user.email}")
            raise Conflict("User with this email already exists") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage failure while creating user: {e}")
            raise StorageError("Storage failure while creating user") from e
        self.db.refresh(row)
        return user_to_record(row)

    def update_user(self, user: UserRecord) -> UserRecord:
        with self._guard("updating user"):
            row = self._get(User, "User", user.id)
            _apply(row, user, _USER_FIELDS)
        return user_to_record(self._save(row, "updating user"))

    # ==================== LISTINGS ====================

    def find_listing(self, listing_id: int) -> Optional[ListingRecord]:
        with self._guard("loading listing"):
            row = self.db.get(Listing, listing_id)
        return listing_to_record(row) if row else None

    def list_listings(self, status: Optional[ListingStatus] = None,
                      brand_id: Optional[int] = None) -> List[ListingRecord]:
        with self._guard("listing listings"):
            query = self.db.query(Listing)
            if status is not None:
                query = query.filter(Listing.status == status)
            if brand_id is not None:
                query = query.filter(Listing.brand_id == brand_id)
            rows = query.order_by(desc(Listing.created_at), desc(Listing.id)).all()
        return [listing_to_record(r) for r in rows]

    def insert_listing(self, listing: ListingRecord) -> ListingRecord:
        row = Listing(brand_id=listing.brand_id)
        _apply(row, listing, _LISTING_FIELDS)
        return listing_to_record(self._save(row, "creating listing"))

    def update_listing(self, listing: ListingRecord) -> ListingRecord:
        with self._guard("updating listing"):
            row = self._get(Listing, "Listing", listing.id)
            _apply(row, listing, _LISTING_FIELDS)
        return listing_to_record(self._save(row, "updating listing"))

    # ==================== PROPOSALS ====================

    def find_proposal(self, proposal_id: int) -> Optional[ProposalRecord]:
        with self._guard("loading proposal"):
            row = self.db.get(Proposal, proposal_id)
        return proposal_to_record(row) if row else None

    def find_proposal_by_listing_and_influencer(self, listing_id: int,
                                                influencer_id: int) -> Optional[ProposalRecord]:
        with self._guard("loading proposal"):
            row = self.db.query(Proposal).filter(
                Proposal.listing_id == listing_id,
                Proposal.influencer_id == influencer_id,
            ).first()
        return proposal_to_record(row) if row else None

    def list_proposals_for_listing(self, listing_id: int) -> List[ProposalRecord]:
        with self._guard("listing proposals"):
            rows = self.db.query(Proposal).filter(
                Proposal.listing_id == listing_id
            ).order_by(desc(Proposal.created_at), desc(Proposal.id)).all()
        return [proposal_to_record(r) for r in rows]

    def list_proposals_for_influencer(self, influencer_id: int) -> List[ProposalRecord]:
        with self._guard("listing proposals"):
            rows = self.db.query(Proposal).filter(
                Proposal.influencer_id == influencer_id
            ).order_by(desc(Proposal.created_at), desc(Proposal.id)).all()
        return [proposal_to_record(r) for r in rows]

    def insert_proposal(self, proposal: ProposalRecord) -> ProposalRecord:
        row = Proposal(listing_id=proposal.listing_id, influencer_id=proposal.influencer_id)
        _apply(row, proposal, _PROPOSAL_FIELDS)
        try:
            self.db.add(row)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if self.find_proposal_by_listing_and_influencer(proposal.listing_id, proposal.influencer_id):
                raise DuplicateProposal(proposal.listing_id, proposal.influencer_id) from e
            logger.error(f"Storage failure while creating proposal: {e}")
            raise StorageError("Storage failure while creating proposal") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Storage failure while creating proposal: {e}")
            raise StorageError("Storage failure while creating proposal") from e
        self.db.refresh(row)
        return proposal_to_record(row)

    def update_proposal(self, proposal: ProposalRecord) -> ProposalRecord:
        with self._guard("updating proposal"):
            row = self._get(Proposal, "Proposal", proposal.id)
            _apply(row, proposal, _PROPOSAL_FIELDS)
        return proposal_to_record(self._save(row, "updating proposal"))

    # ==================== DELIVERABLES ====================

    def find_deliverable(self, deliverable_id: int) -> Optional[DeliverableRecord]:
        with self._guard("loading deliverable"):
            row = self.db.get(Deliverable, deliverable_id)
        return deliverable_to_record(row) if row else None

    def list_deliverables_for_proposal(self, proposal_id: int) -> List[DeliverableRecord]:
        with self._guard("listing deliverables"):
            rows = self.db.query(Deliverable).filter(
                Deliverable.proposal_id == proposal_id
            ).order_by(desc(Deliverable.created_at), desc(Deliverable.id)).all()
        return [deliverable_to_record(r) for r in rows]

    def list_deliverables_for_influencer(self, influencer_id: int) -> List[DeliverableRecord]:
        with self._guard("listing deliverables"):
            rows = self.db.query(Deliverable).join(
                Proposal, Deliverable.proposal_id == Proposal.id
            ).filter(
                Proposal.influencer_id == influencer_id
            ).order_by(desc(Deliverable.created_at), desc(Deliverable.id)).all()
        return [deliverable_to_record(r) for r in rows]

    def list_deliverables_for_brand(self, brand_id: int) -> List[DeliverableRecord]:
        with self._guard("listing deliverables"):
            rows = self.db.query(Deliverable).join(
                Proposal, Deliverable.proposal_id == Proposal.id
            ).join(
                Listing, Proposal.listing_id == Listing.id
            ).filter(
                Listing.brand_id == brand_id
            ).order_by(desc(Deliverable.created_at), desc(Deliverable.id)).all()
        return [deliverable_to_record(r) for r in rows]

    def insert_deliverable(self, deliverable: DeliverableRecord) -> DeliverableRecord:
        row = Deliverable(proposal_id=deliverable.proposal_id)
        _apply(row, deliverable, _DELIVERABLE_FIELDS)
        return deliverable_to_record(self._save(row, "creating deliverable"))

    def update_deliverable(self, deliverable: DeliverableRecord) -> DeliverableRecord:
        with self._guard("updating deliverable"):
            row = self._get(Deliverable, "Deliverable", deliverable.id)
            _apply(row, deliverable, _DELIVERABLE_FIELDS)
        return deliverable_to_record(self._save(row, "updating deliverable"))

    def delete_deliverable(self, deliverable_id: int) -> None:
        with self._guard("deleting deliverable"):
            row = self._get(Deliverable, "Deliverable", deliverable_id)
            self.db.delete(row)
            self.db.commit()

    # ==================== MESSAGES ====================

    def insert_message(self, message: MessageRecord) -> MessageRecord:
        row = Message(
            conversation_id=message.conversation_id,
            sender_id=message.sender_id,
            recipient_id=message.recipient_id,
            content=message.content,
            read=message.read,
        )
        return message_to_record(self._save(row, "sending message"))

    def list_messages(self, conversation_id: str) -> List[MessageRecord]:
        with self._guard("loading messages"):
            rows = self.db.query(Message).filter(
                Message.conversation_id == conversation_id
            ).order_by(Message.created_at, Message.id).all()
        return [message_to_record(r) for r in rows]

    def list_conversations_for_user(self, user_id: int) -> List[ConversationSummary]:
        """One summary per conversation the user takes part in, most recent first."""
        with self._guard("loading conversations"):
            rows = self.db.query(Message).filter(
                or_(Message.sender_id == user_id, Message.recipient_id == user_id)
            ).order_by(Message.created_at, Message.id).all()

        grouped = OrderedDict()
        for row in rows:
            grouped.setdefault(row.conversation_id, []).append(row)

        summaries = []
        for conversation_id, messages in grouped.items():
            last = messages[-1]
            other = last.recipient_id if last.sender_id == user_id else last.sender_id
            summaries.append(ConversationSummary(
                conversation_id=conversation_id,
                other_user_id=other,
                last_message=message_to_record(last),
                message_count=len(messages),
            ))
        summaries.sort(key=lambda s: (s.last_message.created_at, s.last_message.id), reverse=True)
        return summaries
