# Engagement Errors for Influmatch
# Typed failures raised by the engagement core; the HTTP layer maps them to status codes

from dataclasses import dataclass
from typing import List, Optional


class EngagementError(Exception):
    """Base class for every failure the engagement core raises."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


@dataclass(frozen=True)
class Violation:
    """A single broken validation rule."""
    field: str
    rule: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "rule": self.rule, "message": self.message}


class ValidationError(EngagementError):
    """One or more field violations. Nothing was written."""

    def __init__(self, violations: List[Violation]):
        self.violations = list(violations)
        super().__init__("; ".join(v.message for v in self.violations) or "Validation failed")

    def rules(self) -> List[str]:
        return [v.rule for v in self.violations]

    def fields(self) -> List[str]:
        return [v.field for v in self.violations]


class Unauthorized(EngagementError):
    """The actor lacks permission for the requested operation."""


class NotFound(EngagementError):
    """A referenced entity does not exist."""

    def __init__(self, entity: str, entity_id: Optional[object] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class InvalidTransition(EngagementError):
    """A status change that the transition table does not allow."""

    def __init__(self, entity: str, current: str, requested: str):
        self.entity = entity
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move {entity} from '{current}' to '{requested}'")


class DuplicateProposal(EngagementError):
    """The influencer already has a proposal on this listing."""

    def __init__(self, listing_id: int, influencer_id: int):
        self.listing_id = listing_id
        self.influencer_id = influencer_id
        super().__init__("You have already submitted a proposal for this listing")


class Conflict(EngagementError):
    """The entity is in a state that forbids the operation."""


class StorageError(EngagementError):
    """Opaque persistence failure."""
