import pytest
from sqlalchemy.exc import OperationalError

from core.errors import Conflict, DuplicateProposal, StorageError
from core.records import ProposalRecord, UserRecord
from core.roles import UserType


def test_unique_constraint_surfaces_as_duplicate_proposal(store, influencer, listing, proposal):
    # Bypasses the read-before-write check to hit the constraint directly
    with pytest.raises(DuplicateProposal):
        store.insert_proposal(ProposalRecord(
            id=None, listing_id=listing.id, influencer_id=influencer.id,
            message="again", proposed_budget=500, timeline="1 week",
        ))
    assert len(store.list_proposals_for_listing(listing.id)) == 1


def test_duplicate_email_is_a_conflict(store, brand):
    existing = store.find_user(brand.id)
    with pytest.raises(Conflict):
        store.insert_user(UserRecord(
            id=None, name="Copy", email=existing.email, password_hash="x", user_type=UserType.BRAND,
        ))


def test_records_are_mapped_from_rows(store, listing, proposal):
    loaded = store.find_proposal(proposal.id)
    assert isinstance(loaded, ProposalRecord)
    assert loaded.listing_id == listing.id
    assert loaded.created_at is not None
    assert store.find_proposal(12345) is None
    assert store.find_proposal_by_listing_and_influencer(listing.id, 12345) is None


def test_database_errors_become_storage_errors(store, session, monkeypatch):
    def broken_get(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("connection lost"))

    monkeypatch.setattr(session, "get", broken_get)
    with pytest.raises(StorageError):
        store.find_listing(1)
