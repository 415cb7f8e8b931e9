"""
Proposals Router
Handles influencer proposals, their status and proposal-scoped chat
"""

from fastapi import APIRouter, Depends
from typing import List

from auth.decorators import require_user_type
from auth.dependencies import get_current_actor
from core.records import Actor
from core.roles import UserType
from routers.deps import get_engagement
from schemas.marketplace import (
    DeliverableResponse, ProposalChatResponse, ProposalCreate,
    ProposalResponse, ProposalStatusUpdate,
)
from services.engagement_service import EngagementService

router = APIRouter(prefix="/api/proposals", tags=["proposals"])


@router.get("/my-proposals", response_model=List[ProposalResponse])
def get_my_proposals(
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(require_user_type(UserType.INFLUENCER))
):
    """All proposals sent by the current influencer."""
    return service.list_my_proposals(actor)


@router.get("/{proposal_id}", response_model=ProposalResponse)
def get_proposal(
    proposal_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.get_proposal(actor, proposal_id)


@router.put("/{proposal_id}/status", response_model=ProposalResponse)
def update_proposal_status(
    proposal_id: int,
    update: ProposalStatusUpdate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """
    Accept or reject (owning brand) or withdraw (brand or the proposal's influencer).
    """
    return service.update_proposal_status(actor, proposal_id, update.status)


@router.put("/{proposal_id}", response_model=ProposalResponse)
def edit_proposal(
    proposal_id: int,
    proposal_data: ProposalCreate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Edit message, budget and timeline while the proposal is under review."""
    return service.edit_proposal(actor, proposal_id, proposal_data.model_dump(exclude_unset=True))


@router.post("/{proposal_id}/start-chat", response_model=ProposalChatResponse)
def start_chat(
    proposal_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return ProposalChatResponse.model_validate(service.start_proposal_chat(actor, proposal_id))


@router.get("/{proposal_id}/chat", response_model=ProposalChatResponse)
def get_chat(
    proposal_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return ProposalChatResponse.model_validate(service.get_proposal_chat(actor, proposal_id))


@router.get("/{proposal_id}/deliverables", response_model=List[DeliverableResponse])
def list_proposal_deliverables(
    proposal_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.list_deliverables_for_proposal(actor, proposal_id)
