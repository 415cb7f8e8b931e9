from datetime import datetime, timedelta

import pytest

from core import policy
from core.conversations import parse_conversation_id
from core.errors import Conflict, Unauthorized
from core.lifecycle import DeliverableStatus, DeliverableType, ProposalStatus
from core.records import Actor, DeliverableRecord, ListingRecord, ProposalRecord, evolve
from core.roles import UserType

NOW = datetime(2026, 3, 1, 12, 0, 0)

BRAND = Actor(1, UserType.BRAND)
OTHER_BRAND = Actor(2, UserType.BRAND)
INFLUENCER = Actor(3, UserType.INFLUENCER)
OTHER_INFLUENCER = Actor(4, UserType.INFLUENCER)

LISTING = ListingRecord(
    id=10, brand_id=1, title="Launch", description="d", category="c", budget=1000,
    deadline=NOW + timedelta(days=1),
)
PROPOSAL = ProposalRecord(id=20, listing_id=10, influencer_id=3, message="m", proposed_budget=800, timeline="2 weeks")
ACCEPTED = evolve(PROPOSAL, status=ProposalStatus.ACCEPTED)
DELIVERABLE = DeliverableRecord(id=30, proposal_id=20, title="Post 1", type=DeliverableType.IMAGE)


def test_listings_are_public_but_only_brands_create():
    assert policy.can_read_listing(None, LISTING)
    assert policy.can_create_listing(BRAND)
    with pytest.raises(Unauthorized):
        policy.require_create_listing(INFLUENCER)


def test_only_owner_manages_listing():
    assert policy.can_manage_listing(BRAND, LISTING)
    assert not policy.can_manage_listing(OTHER_BRAND, LISTING)
    assert not policy.can_manage_listing(Actor(1, UserType.INFLUENCER), LISTING)


def test_proposal_visibility():
    assert policy.proposal_visibility(BRAND, LISTING) == policy.ProposalVisibility.ALL
    assert policy.proposal_visibility(OTHER_INFLUENCER, LISTING) == policy.ProposalVisibility.OWN
    with pytest.raises(Unauthorized):
        policy.require_proposal_visibility(OTHER_BRAND, LISTING)


def test_only_influencers_submit_proposals():
    policy.require_create_proposal(INFLUENCER)
    with pytest.raises(Unauthorized):
        policy.require_create_proposal(BRAND)


def test_influencer_cannot_set_another_influencers_proposal_status():
    with pytest.raises(Unauthorized):
        policy.require_set_proposal_status(OTHER_INFLUENCER, LISTING, PROPOSAL, ProposalStatus.WITHDRAWN)


def test_accept_and_reject_are_brand_only():
    assert policy.can_set_proposal_status(BRAND, LISTING, PROPOSAL, ProposalStatus.ACCEPTED)
    assert not policy.can_set_proposal_status(INFLUENCER, LISTING, PROPOSAL, ProposalStatus.ACCEPTED)
    assert not policy.can_set_proposal_status(OTHER_BRAND, LISTING, PROPOSAL, ProposalStatus.REJECTED)


def test_either_party_may_withdraw():
    assert policy.can_set_proposal_status(INFLUENCER, LISTING, PROPOSAL, ProposalStatus.WITHDRAWN)
    assert policy.can_set_proposal_status(BRAND, LISTING, ACCEPTED, ProposalStatus.WITHDRAWN)


def test_edit_proposal_only_while_under_review():
    policy.require_edit_proposal(INFLUENCER, PROPOSAL)
    with pytest.raises(Conflict):
        policy.require_edit_proposal(INFLUENCER, ACCEPTED)
    with pytest.raises(Unauthorized):
        policy.require_edit_proposal(OTHER_INFLUENCER, PROPOSAL)


def test_deliverables_need_an_accepted_proposal():
    assert policy.can_create_deliverable(BRAND, LISTING, ACCEPTED)
    assert not policy.can_create_deliverable(BRAND, LISTING, PROPOSAL)
    assert not policy.can_create_deliverable(OTHER_BRAND, LISTING, ACCEPTED)


def test_submit_deliverable_rules():
    policy.require_submit_deliverable(INFLUENCER, ACCEPTED, DELIVERABLE, NOW)

    with pytest.raises(Unauthorized):
        policy.require_submit_deliverable(OTHER_INFLUENCER, ACCEPTED, DELIVERABLE, NOW)

    # Status is left to the transition table
    submitted = evolve(DELIVERABLE, status=DeliverableStatus.SUBMITTED)
    policy.require_submit_deliverable(INFLUENCER, ACCEPTED, submitted, NOW)

    overdue = evolve(DELIVERABLE, due_date=NOW - timedelta(seconds=1))
    with pytest.raises(Unauthorized, match="past its due date"):
        policy.require_submit_deliverable(INFLUENCER, ACCEPTED, overdue, NOW)

    revision = evolve(DELIVERABLE, status=DeliverableStatus.REVISION_REQUESTED, due_date=NOW)
    assert policy.can_submit_deliverable(INFLUENCER, ACCEPTED, revision, NOW)


def test_review_deliverable_rules():
    assert policy.can_review_deliverable(BRAND, LISTING)
    assert not policy.can_review_deliverable(OTHER_BRAND, LISTING)
    with pytest.raises(Unauthorized):
        policy.require_review_deliverable(INFLUENCER, LISTING)


def test_deliverable_work_needs_an_accepted_proposal():
    policy.require_accepted_proposal(ACCEPTED)
    with pytest.raises(Conflict):
        policy.require_accepted_proposal(evolve(ACCEPTED, status=ProposalStatus.WITHDRAWN))


def test_modify_deliverable_only_while_pending():
    assert policy.can_modify_deliverable(BRAND, LISTING, DELIVERABLE)
    assert not policy.can_modify_deliverable(BRAND, LISTING, evolve(DELIVERABLE, status=DeliverableStatus.SUBMITTED))
    assert not policy.can_modify_deliverable(INFLUENCER, LISTING, DELIVERABLE)


def test_proposal_chat_needs_accepted_proposal_and_a_party():
    assert policy.can_use_proposal_chat(BRAND, LISTING, ACCEPTED)
    assert policy.can_use_proposal_chat(INFLUENCER, LISTING, ACCEPTED)
    assert not policy.can_use_proposal_chat(INFLUENCER, LISTING, PROPOSAL)
    assert not policy.can_use_proposal_chat(OTHER_INFLUENCER, LISTING, ACCEPTED)


def test_pair_conversation_membership():
    key = parse_conversation_id("1-3")
    assert policy.can_read_pair_conversation(BRAND, key)
    with pytest.raises(Unauthorized):
        policy.require_pair_conversation(OTHER_BRAND, key)


def test_users_update_only_themselves():
    assert policy.can_update_user(INFLUENCER, 3)
    assert not policy.can_update_user(INFLUENCER, 1)
