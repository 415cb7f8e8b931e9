"""
Messages Router
Direct messages between users and proposal-scoped chat (polled by the client)
"""

from fastapi import APIRouter, Depends, status as http_status
from typing import List

from auth.dependencies import get_current_actor
from core.records import Actor
from routers.deps import get_engagement
from schemas.marketplace import ConversationResponse, MessageCreate, MessageResponse
from services.engagement_service import EngagementService

router = APIRouter(prefix="/api/messages", tags=["messages"])


@router.post("", response_model=MessageResponse, status_code=http_status.HTTP_201_CREATED)
def send_message(
    message: MessageCreate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.send_message(actor, message.model_dump())


@router.get("", response_model=List[ConversationResponse])
def list_conversations(
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Conversations the current user takes part in, most recent first."""
    return service.list_conversations(actor)


@router.get("/{conversation_id}", response_model=List[MessageResponse])
def get_conversation(
    conversation_id: str,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.get_conversation(actor, conversation_id)
