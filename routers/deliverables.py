"""
Deliverables Router
Content work on accepted proposals: creation, submission and brand review
"""

from fastapi import APIRouter, Depends, status as http_status
from typing import List

from auth.dependencies import get_current_actor
from core.records import Actor
from routers.deps import get_engagement
from schemas.marketplace import (
    DeliverableCreate, DeliverableResponse, DeliverableReview,
    DeliverableSubmit, DeliverableUpdate,
)
from services.engagement_service import EngagementService

router = APIRouter(prefix="/api/deliverables", tags=["deliverables"])


@router.post("", response_model=DeliverableResponse, status_code=http_status.HTTP_201_CREATED)
def create_deliverable(
    deliverable_data: DeliverableCreate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Brand adds a deliverable to one of its accepted proposals."""
    data = deliverable_data.model_dump()
    proposal_id = data.pop("proposal_id")
    return service.create_deliverable(actor, proposal_id, data)


@router.get("", response_model=List[DeliverableResponse])
def list_my_deliverables(
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Deliverables across the brand's listings, or assigned to the influencer."""
    return service.list_my_deliverables(actor)


@router.get("/{deliverable_id}", response_model=DeliverableResponse)
def get_deliverable(
    deliverable_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.get_deliverable(actor, deliverable_id)


@router.put("/{deliverable_id}", response_model=DeliverableResponse)
def update_deliverable(
    deliverable_id: int,
    update: DeliverableUpdate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.update_deliverable(actor, deliverable_id, update.model_dump(exclude_unset=True))


@router.delete("/{deliverable_id}")
def delete_deliverable(
    deliverable_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    service.delete_deliverable(actor, deliverable_id)
    return {"message": "Deliverable deleted successfully"}


@router.put("/{deliverable_id}/submit", response_model=DeliverableResponse)
def submit_deliverable(
    deliverable_id: int,
    submission: DeliverableSubmit,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Influencer submits (or resubmits) work for review."""
    return service.submit_deliverable(actor, deliverable_id, submission.model_dump())


@router.put("/{deliverable_id}/review", response_model=DeliverableResponse)
def review_deliverable(
    deliverable_id: int,
    review: DeliverableReview,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """
    Brand review. Rejecting or requesting a revision needs review notes.
    """
    return service.review_deliverable(actor, deliverable_id, review.model_dump())
