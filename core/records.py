# Entity Records for the Engagement Core
# Plain dataclasses that decouple the core from storage rows and API payloads

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from core.lifecycle import DeliverableStatus, DeliverableType, ListingStatus, ProposalStatus
from core.roles import UserType


@dataclass(frozen=True)
class Actor:
    """An already-authenticated identity performing an operation."""
    id: int
    user_type: UserType

    @property
    def is_brand(self) -> bool:
        return self.user_type == UserType.BRAND

    @property
    def is_influencer(self) -> bool:
        return self.user_type == UserType.INFLUENCER


@dataclass
class UserRecord:
    id: Optional[int]
    name: str
    email: str
    password_hash: str
    user_type: UserType
    bio: str = ""
    website: str = ""
    social_media: dict = field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def as_actor(self) -> Actor:
        return Actor(id=self.id, user_type=self.user_type)


@dataclass
class ListingRecord:
    id: Optional[int]
    brand_id: int
    title: str
    description: str
    category: str
    budget: int
    deadline: datetime
    campaign_deadline: Optional[datetime] = None
    requirements: str = ""
    deliverables: str = ""
    status: ListingStatus = ListingStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class ProposalRecord:
    id: Optional[int]
    listing_id: int
    influencer_id: int
    message: str
    proposed_budget: int
    timeline: str
    status: ProposalStatus = ProposalStatus.UNDER_REVIEW
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class DeliverableRecord:
    id: Optional[int]
    proposal_id: int
    title: str
    type: DeliverableType
    description: str = ""
    due_date: Optional[datetime] = None
    status: DeliverableStatus = DeliverableStatus.PENDING
    file_url: Optional[str] = None
    submission_notes: Optional[str] = None
    review_notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class MessageRecord:
    id: Optional[int]
    conversation_id: str
    sender_id: int
    recipient_id: int
    content: str
    read: bool = False
    created_at: Optional[datetime] = None


@dataclass
class ConversationSummary:
    conversation_id: str
    other_user_id: int
    last_message: MessageRecord
    message_count: int


def evolve(record, **changes):
    """Copy a record with some fields replaced."""
    return replace(record, **changes)
