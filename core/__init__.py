# Engagement core for Influmatch
# Pure rules: roles, authorization predicate, status lifecycles and validation.
# Depends only on pydantic for URL and email checks; no web framework or database imports.

from core.errors import (
    EngagementError,
    Violation,
    ValidationError,
    Unauthorized,
    NotFound,
    InvalidTransition,
    DuplicateProposal,
    Conflict,
    StorageError,
)
from core.lifecycle import (
    ListingStatus,
    ProposalStatus,
    DeliverableStatus,
    DeliverableType,
)
from core.records import Actor
from core.roles import UserType, Permission

__all__ = [
    # Errors
    "EngagementError",
    "Violation",
    "ValidationError",
    "Unauthorized",
    "NotFound",
    "InvalidTransition",
    "DuplicateProposal",
    "Conflict",
    "StorageError",

    # Statuses
    "ListingStatus",
    "ProposalStatus",
    "DeliverableStatus",
    "DeliverableType",

    # Identity
    "Actor",
    "UserType",
    "Permission",
]
