# Database Models for Influmatch

from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, JSON, String, Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

from core.lifecycle import DeliverableStatus, DeliverableType, ListingStatus, ProposalStatus
from core.roles import UserType

Base = declarative_base()


def _enum(enum_cls, name: str) -> Enum:
    # Store the lowercase values, not the member names
    return Enum(enum_cls, values_callable=lambda x: [e.value for e in x], name=name)


# ============================================================================
# USER
# ============================================================================

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    user_type = Column(_enum(UserType, "usertype"), nullable=False, index=True)
    bio = Column(Text, default="")
    website = Column(String(500), default="")
    social_media = Column(JSON, default=dict)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    listings = relationship("Listing", back_populates="brand")
    proposals = relationship("Proposal", back_populates="influencer")


# ============================================================================
# LISTING
# ============================================================================

class Listing(Base):
    """A brand's campaign posting accepting proposals from influencers."""
    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    brand_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    budget = Column(Integer, nullable=False)
    deadline = Column(DateTime, nullable=False)  # Application cutoff
    campaign_deadline = Column(DateTime)  # Execution cutoff
    requirements = Column(Text, default="")
    deliverables = Column(Text, default="")  # Free text summary

    status = Column(_enum(ListingStatus, "listingstatus"), nullable=False, default=ListingStatus.ACTIVE)

    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    brand = relationship("User", back_populates="listings")
    proposals = relationship("Proposal", back_populates="listing", cascade="all, delete-orphan")


# ============================================================================
# PROPOSAL
# ============================================================================

class Proposal(Base):
    """An influencer's bid on a listing."""
    __tablename__ = "proposals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    listing_id = Column(Integer, ForeignKey("listings.id", ondelete="CASCADE"), nullable=False, index=True)
    influencer_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    message = Column(Text, nullable=False)
    proposed_budget = Column(Integer, nullable=False)
    timeline = Column(String(200), nullable=False)

    status = Column(_enum(ProposalStatus, "proposalstatus"), nullable=False, default=ProposalStatus.UNDER_REVIEW)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    listing = relationship("Listing", back_populates="proposals")
    influencer = relationship("User", back_populates="proposals")
    deliverables = relationship("Deliverable", back_populates="proposal", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("listing_id", "influencer_id", name="uq_proposals_listing_influencer"),
    )


# ============================================================================
# DELIVERABLE
# ============================================================================

class Deliverable(Base):
    """A unit of content work on an accepted proposal."""
    __tablename__ = "deliverables"

    id = Column(Integer, primary_key=True, autoincrement=True)
    proposal_id = Column(Integer, ForeignKey("proposals.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, default="")
    type = Column(_enum(DeliverableType, "deliverabletype"), nullable=False)
    due_date = Column(DateTime)

    status = Column(_enum(DeliverableStatus, "deliverablestatus"), nullable=False, default=DeliverableStatus.PENDING)

    # Submission
    file_url = Column(String(500))
    submission_notes = Column(Text)
    submitted_at = Column(DateTime)

    # Brand review
    review_notes = Column(Text)
    reviewed_at = Column(DateTime)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    proposal = relationship("Proposal", back_populates="deliverables")


# ============================================================================
# MESSAGE
# ============================================================================

class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    conversation_id = Column(String(64), nullable=False)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    recipient_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    read = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())

    # Relationships
    sender = relationship("User", foreign_keys=[sender_id])
    recipient = relationship("User", foreign_keys=[recipient_id])

    __table_args__ = (
        Index("idx_messages_conversation_created", "conversation_id", "created_at"),
    )
