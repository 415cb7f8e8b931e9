"""
Users Router
Public profiles and self-service profile updates
"""

from fastapi import APIRouter, Depends

from auth.dependencies import get_current_actor
from core.records import Actor
from routers.deps import get_accounts
from schemas.marketplace import PublicUserResponse, UserResponse, UserUpdate
from services.account_service import AccountService

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/{user_id}", response_model=PublicUserResponse)
def get_user(user_id: int, accounts: AccountService = Depends(get_accounts)):
    return accounts.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    update: UserUpdate,
    accounts: AccountService = Depends(get_accounts),
    actor: Actor = Depends(get_current_actor)
):
    """Update your own profile. userType and email cannot change."""
    return accounts.update_profile(actor, user_id, update.model_dump(exclude_unset=True))
