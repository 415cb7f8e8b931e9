# Conversation identifiers
# "{low}-{high}" pairs two users; "proposal-{id}" scopes a chat to one proposal

from dataclasses import dataclass
from typing import Optional, Tuple

from core.errors import ValidationError, Violation

PROPOSAL_PREFIX = "proposal-"


@dataclass(frozen=True)
class ConversationKey:
    conversation_id: str
    proposal_id: Optional[int] = None
    participants: Optional[Tuple[int, int]] = None

    @property
    def is_proposal_chat(self) -> bool:
        return self.proposal_id is not None


def pair_conversation_id(user_a: int, user_b: int) -> str:
    low, high = sorted((int(user_a), int(user_b)))
    return f"{low}-{high}"


def proposal_conversation_id(proposal_id: int) -> str:
    return f"{PROPOSAL_PREFIX}{int(proposal_id)}"


def parse_conversation_id(conversation_id: str) -> ConversationKey:
    raw = (conversation_id or "").strip()
    if raw.startswith(PROPOSAL_PREFIX):
        suffix = raw[len(PROPOSAL_PREFIX):]
        if suffix.isdigit():
            return ConversationKey(conversation_id=raw, proposal_id=int(suffix))
    else:
        parts = raw.split("-")
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            low, high = sorted(int(p) for p in parts)
            if low != high and raw == f"{low}-{high}":
                return ConversationKey(conversation_id=raw, participants=(low, high))
    raise ValidationError([
        Violation("conversation_id", "invalid_conversation", f"Unknown conversation id '{conversation_id}'")
    ])
