# Authorization Dependencies for Influmatch
# Coarse role gates for endpoints; ownership rules live in core.policy

from fastapi import HTTPException, status, Depends

from auth.dependencies import get_current_user
from core.records import Actor, UserRecord
from core.roles import UserType


class AuthError(HTTPException):
    """Custom exception for authentication/authorization errors."""

    def __init__(self, detail: str, status_code: int = status.HTTP_403_FORBIDDEN):
        super().__init__(status_code=status_code, detail=detail)


def require_user_type(*allowed_types: UserType):
    """
    Dependency that requires the user to be one of the specified types.

    Usage:
        @router.get("/my-proposals")
        def my_proposals(
            actor: Actor = Depends(require_user_type(UserType.INFLUENCER))
        ):
            ...
    """
    def dependency(current_user: UserRecord = Depends(get_current_user)) -> Actor:
        if current_user.user_type not in allowed_types:
            allowed_names = ", ".join(t.value for t in allowed_types)
            raise AuthError(detail=f"This endpoint requires user type: {allowed_names}")
        return current_user.as_actor()

    return dependency

