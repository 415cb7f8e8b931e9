# Pydantic Schemas for the Influmatch API
# Request bodies stay loosely typed: field rules are enforced by core.validation
# so every violation is reported together.

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Union
from datetime import datetime

from core.lifecycle import DeliverableStatus, DeliverableType, ListingStatus, ProposalStatus
from core.roles import UserType


# ============================================================================
# AUTH & USER SCHEMAS
# ============================================================================

class UserRegister(BaseModel):
    """Registration payload. Validated by core.validation.validate_registration."""
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    user_type: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    social_media: Optional[dict] = None


class UserLogin(BaseModel):
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    name: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    social_media: Optional[dict] = None


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    user_type: UserType
    bio: str = ""
    website: str = ""
    social_media: dict = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicUserResponse(BaseModel):
    """Profile as seen by other users (no email)."""
    id: int
    name: str
    user_type: UserType
    bio: str = ""
    website: str = ""
    social_media: dict = Field(default_factory=dict)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


# ============================================================================
# LISTING SCHEMAS
# ============================================================================

class ListingCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    budget: Optional[Union[int, str]] = None
    deadline: Optional[str] = None  # ISO date or datetime
    campaign_deadline: Optional[str] = None
    requirements: Optional[str] = None
    deliverables: Optional[str] = None


class ListingStatusUpdate(BaseModel):
    status: str


class ListingResponse(BaseModel):
    id: int
    brand_id: int
    title: str
    description: str
    category: str
    budget: int
    deadline: datetime
    campaign_deadline: Optional[datetime] = None
    requirements: str = ""
    deliverables: str = ""
    status: ListingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============================================================================
# PROPOSAL SCHEMAS
# ============================================================================

class ProposalCreate(BaseModel):
    message: Optional[str] = None
    proposed_budget: Optional[Union[int, str]] = None
    timeline: Optional[str] = None


class ProposalStatusUpdate(BaseModel):
    status: str


class ProposalResponse(BaseModel):
    id: int
    listing_id: int
    influencer_id: int
    message: str
    proposed_budget: int
    timeline: str
    status: ProposalStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============================================================================
# DELIVERABLE SCHEMAS
# ============================================================================

class DeliverableCreate(BaseModel):
    proposal_id: int
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    due_date: Optional[str] = None


class DeliverableUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    due_date: Optional[str] = None


class DeliverableSubmit(BaseModel):
    file_url: Optional[str] = None
    submission_notes: Optional[str] = None


class DeliverableReview(BaseModel):
    status: Optional[str] = None
    review_notes: Optional[str] = None


class DeliverableResponse(BaseModel):
    id: int
    proposal_id: int
    title: str
    description: str = ""
    type: DeliverableType
    due_date: Optional[datetime] = None
    status: DeliverableStatus
    file_url: Optional[str] = None
    submission_notes: Optional[str] = None
    review_notes: Optional[str] = None
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# ============================================================================
# MESSAGE SCHEMAS
# ============================================================================

class MessageCreate(BaseModel):
    content: Optional[str] = None
    recipient_id: Optional[int] = None
    proposal_id: Optional[int] = None
    conversation_id: Optional[str] = None


class MessageResponse(BaseModel):
    id: int
    conversation_id: str
    sender_id: int
    recipient_id: int
    content: str
    read: bool = False
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ConversationResponse(BaseModel):
    conversation_id: str
    other_user_id: int
    last_message: MessageResponse
    message_count: int

    class Config:
        from_attributes = True


class ProposalChatResponse(BaseModel):
    conversation_id: str
    proposal: ProposalResponse
    listing: ListingResponse
    messages: List[MessageResponse] = []
    has_existing_messages: bool = False

    class Config:
        from_attributes = True
