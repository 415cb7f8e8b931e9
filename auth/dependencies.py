# Authentication Dependencies for Influmatch
# Provides dependencies for getting the current user from JWT token

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional

from auth.utils import decode_access_token
from core.records import Actor, UserRecord
from database.config import get_db
from database.store import SqlAlchemyStore


security = HTTPBearer(auto_error=False)


def get_store(db: Session = Depends(get_db)) -> SqlAlchemyStore:
    """Engagement store bound to the request's session."""
    return SqlAlchemyStore(db)


def _load_user(credentials: Optional[HTTPAuthorizationCredentials], store: SqlAlchemyStore) -> Optional[UserRecord]:
    if not credentials:
        return None
    token_data = decode_access_token(credentials.credentials)
    if token_data is None:
        return None
    return store.find_user(token_data.user_id)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: SqlAlchemyStore = Depends(get_store)
) -> UserRecord:
    """
    Validate JWT token and return current user.
    This is the core authentication dependency.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = _load_user(credentials, store)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_current_actor(current_user: UserRecord = Depends(get_current_user)) -> Actor:
    return current_user.as_actor()


def get_optional_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: SqlAlchemyStore = Depends(get_store)
) -> Optional[Actor]:
    """Return the actor if authenticated, else None."""
    user = _load_user(credentials, store)
    return user.as_actor() if user else None
