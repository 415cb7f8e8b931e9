# Auth module for Influmatch
# Provides JWT authentication, password hashing and role gates

from auth.utils import (
    TokenData,
    get_password_hash,
    verify_password,
    create_access_token,
    decode_access_token,
    token_for_user,
)

from auth.dependencies import (
    get_store,
    get_current_user,
    get_current_actor,
    get_optional_actor,
)

from auth.decorators import (
    AuthError,
    require_user_type,
)

__all__ = [
    # Tokens and passwords
    "TokenData",
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "decode_access_token",
    "token_for_user",

    # Dependencies
    "get_store",
    "get_current_user",
    "get_current_actor",
    "get_optional_actor",

    # Decorators
    "AuthError",
    "require_user_type",
]
