from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from core.clock import FixedClock
from core.records import UserRecord
from core.roles import UserType
from database.config import Database
from database.store import SqlAlchemyStore
from services.account_service import AccountService
from services.engagement_service import EngagementService

NOW = datetime(2026, 3, 1, 12, 0, 0)


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    db = database.SessionLocal()
    yield db
    db.close()


@pytest.fixture
def store(session):
    return SqlAlchemyStore(session)


@pytest.fixture
def service(store, clock):
    return EngagementService(store, clock)


@pytest.fixture
def accounts(store):
    return AccountService(store)


def _user(store, name, user_type):
    return store.insert_user(UserRecord(
        id=None,
        name=name,
        email=f"{name.lower().replace(' ', '.')}@influmatch.io",
        password_hash="not-a-real-hash",
        user_type=user_type,
    )).as_actor()


@pytest.fixture
def brand(store):
    return _user(store, "Acme Brand", UserType.BRAND)


@pytest.fixture
def other_brand(store):
    return _user(store, "Rival Brand", UserType.BRAND)


@pytest.fixture
def influencer(store):
    return _user(store, "Ivy Influencer", UserType.INFLUENCER)


@pytest.fixture
def other_influencer(store):
    return _user(store, "Omar Influencer", UserType.INFLUENCER)


LISTING_DATA = {
    "title": "Spring launch",
    "description": "Promote our spring collection",
    "category": "fashion",
    "budget": 1000,
    "deadline": "2026-03-02",
}

PROPOSAL_DATA = {
    "message": "I'd love to work on this",
    "proposed_budget": 800,
    "timeline": "2 weeks",
}


@pytest.fixture
def listing(service, brand):
    return service.create_listing(brand, LISTING_DATA)


@pytest.fixture
def proposal(service, influencer, listing):
    return service.submit_proposal(influencer, listing.id, PROPOSAL_DATA)


@pytest.fixture
def accepted_proposal(service, brand, proposal):
    return service.update_proposal_status(brand, proposal.id, "accepted")


@pytest.fixture
def deliverable(service, brand, accepted_proposal):
    return service.create_deliverable(brand, accepted_proposal.id, {"type": "image", "title": "Post 1"})


@pytest.fixture
def client(database, clock):
    from server import create_app

    app = create_app(database=database, clock=clock)
    with TestClient(app) as test_client:
        yield test_client
