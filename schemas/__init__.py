# Schemas module for Influmatch
# Organizes all Pydantic schemas in a modular structure

from schemas.marketplace import (
    # Auth & user schemas
    UserRegister,
    UserLogin,
    UserUpdate,
    UserResponse,
    PublicUserResponse,
    AuthResponse,

    # Listing schemas
    ListingCreate,
    ListingStatusUpdate,
    ListingResponse,

    # Proposal schemas
    ProposalCreate,
    ProposalStatusUpdate,
    ProposalResponse,

    # Deliverable schemas
    DeliverableCreate,
    DeliverableUpdate,
    DeliverableSubmit,
    DeliverableReview,
    DeliverableResponse,

    # Message schemas
    MessageCreate,
    MessageResponse,
    ConversationResponse,
    ProposalChatResponse,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "PublicUserResponse",
    "AuthResponse",
    "ListingCreate",
    "ListingStatusUpdate",
    "ListingResponse",
    "ProposalCreate",
    "ProposalStatusUpdate",
    "ProposalResponse",
    "DeliverableCreate",
    "DeliverableUpdate",
    "DeliverableSubmit",
    "DeliverableReview",
    "DeliverableResponse",
    "MessageCreate",
    "MessageResponse",
    "ConversationResponse",
    "ProposalChatResponse",
]
