"""
Auth Router
Handles registration, login and the current user
"""

from fastapi import APIRouter, Depends, HTTPException, status as http_status

from auth.dependencies import get_current_user
from auth.utils import token_for_user
from core.records import UserRecord
from routers.deps import get_accounts
from schemas.marketplace import AuthResponse, UserLogin, UserRegister, UserResponse
from services.account_service import AccountService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=http_status.HTTP_201_CREATED)
def register(user_data: UserRegister, accounts: AccountService = Depends(get_accounts)):
    """
    Register a new brand or influencer.
    Returns JWT token on success.
    """
    user = accounts.register(user_data.model_dump())
    return {"access_token": token_for_user(user), "token_type": "bearer", "user": user}


@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, accounts: AccountService = Depends(get_accounts)):
    """
    Login with email and password.
    Returns JWT token on success.
    """
    user = accounts.authenticate(credentials.email, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=http_status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    return {"access_token": token_for_user(user), "token_type": "bearer", "user": user}


@router.get("/me", response_model=UserResponse)
def get_me(current_user: UserRecord = Depends(get_current_user)):
    return current_user
