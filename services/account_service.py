# Account Service for Influmatch
# Registration, login and profile management

import logging
from typing import Mapping, Optional

from auth.utils import get_password_hash, verify_password
from core import policy, validation
from core.errors import Conflict, NotFound
from core.records import Actor, UserRecord, evolve
from core.store import EngagementStore

logger = logging.getLogger(__name__)


class AccountService:

    def __init__(self, store: EngagementStore):
        self.store = store

    def register(self, data: Mapping) -> UserRecord:
        """Create a user. userType is fixed from here on."""
        cleaned = validation.validate_registration(data)

        if self.store.find_user_by_email(cleaned["email"]) is not None:
            raise Conflict("User with this email already exists")

        password = cleaned.pop("password")
        user = self.store.insert_user(UserRecord(
            id=None,
            password_hash=get_password_hash(password),
            **cleaned,
        ))
        logger.info(f"Registered {user.user_type.value} user {user.id}")
        return user

    def authenticate(self, email: str, password: str) -> Optional[UserRecord]:
        """Return the user for valid credentials, None otherwise."""
        user = self.store.find_user_by_email((email or "").strip().lower())
        if user is None or not verify_password(password or "", user.password_hash):
            logger.info("Failed login attempt")
            return None
        return user

    def get_user(self, user_id: int) -> UserRecord:
        user = self.store.find_user(user_id)
        if user is None:
            raise NotFound("User", user_id)
        return user

    def update_profile(self, actor: Actor, user_id: int, data: Mapping) -> UserRecord:
        user = self.get_user(user_id)
        policy.require_update_user(actor, user.id)
        cleaned = validation.validate_profile_update(data)

        updated = self.store.update_user(evolve(user, **cleaned))
        logger.info(f"Profile {user_id} updated")
        return updated


def get_account_service(store: EngagementStore) -> AccountService:
    """Factory function to get account service instance."""
    return AccountService(store)
