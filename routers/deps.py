# Shared router dependencies

from fastapi import Depends, Request

from auth.dependencies import get_store
from database.store import SqlAlchemyStore
from services.account_service import AccountService, get_account_service
from services.engagement_service import EngagementService, get_engagement_service


def get_engagement(request: Request, store: SqlAlchemyStore = Depends(get_store)) -> EngagementService:
    """Engagement service bound to this request's store and the app clock."""
    return get_engagement_service(store, request.app.state.clock)


def get_accounts(store: SqlAlchemyStore = Depends(get_store)) -> AccountService:
    return get_account_service(store)
