"""
Listings Router
Brand campaign listings and the proposals submitted on them
"""

from fastapi import APIRouter, Depends, Query, status as http_status
from typing import List, Optional

from auth.dependencies import get_current_actor, get_optional_actor
from core.records import Actor
from routers.deps import get_engagement
from schemas.marketplace import (
    ListingCreate, ListingResponse, ListingStatusUpdate,
    ProposalCreate, ProposalResponse,
)
from services.engagement_service import EngagementService

router = APIRouter(prefix="/api/listings", tags=["listings"])


@router.get("", response_model=List[ListingResponse])
def list_listings(
    status: Optional[str] = Query(None),
    brand_id: Optional[int] = Query(None),
    service: EngagementService = Depends(get_engagement)
):
    """Browse listings, newest first. Public."""
    return service.list_listings(status=status, brand_id=brand_id)


@router.post("", response_model=ListingResponse, status_code=http_status.HTTP_201_CREATED)
def create_listing(
    listing_data: ListingCreate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Create a listing owned by the current brand."""
    return service.create_listing(actor, listing_data.model_dump())


@router.get("/{listing_id}", response_model=ListingResponse)
def get_listing(
    listing_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Optional[Actor] = Depends(get_optional_actor)
):
    return service.get_listing(listing_id, actor)


@router.patch("/{listing_id}/status", response_model=ListingResponse)
def update_listing_status(
    listing_id: int,
    update: ListingStatusUpdate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """Close, reopen or complete a listing."""
    return service.update_listing_status(actor, listing_id, update.status)


@router.get("/{listing_id}/proposals", response_model=List[ProposalResponse])
def list_listing_proposals(
    listing_id: int,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    """
    The owning brand sees every proposal.
    An influencer only sees their own.
    """
    return service.list_proposals_for_listing(actor, listing_id)


@router.post("/{listing_id}/proposals", response_model=ProposalResponse, status_code=http_status.HTTP_201_CREATED)
def submit_proposal(
    listing_id: int,
    proposal_data: ProposalCreate,
    service: EngagementService = Depends(get_engagement),
    actor: Actor = Depends(get_current_actor)
):
    return service.submit_proposal(actor, listing_id, proposal_data.model_dump())
