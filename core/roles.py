# Role-Based Access Control for Influmatch
# This module defines user roles and the role-level permissions of the marketplace.
# Ownership checks (is this MY listing?) live in core.policy.

from enum import Enum
from typing import Dict, Set


class UserType(str, Enum):
    """User types in the marketplace."""
    BRAND = "brand"
    INFLUENCER = "influencer"


class Permission(str, Enum):
    """Role-level permissions for the platform."""

    # Brand permissions
    CREATE_LISTINGS = "create_listings"
    MANAGE_OWN_LISTINGS = "manage_own_listings"
    REVIEW_PROPOSALS = "review_proposals"
    CREATE_DELIVERABLES = "create_deliverables"
    REVIEW_DELIVERABLES = "review_deliverables"

    # Influencer permissions
    SUBMIT_PROPOSALS = "submit_proposals"
    EDIT_OWN_PROPOSALS = "edit_own_proposals"
    SUBMIT_DELIVERABLES = "submit_deliverables"

    # Common permissions
    VIEW_LISTINGS = "view_listings"
    WITHDRAW_PROPOSALS = "withdraw_proposals"
    SEND_MESSAGES = "send_messages"
    UPDATE_PROFILE = "update_profile"


_COMMON: Set[Permission] = {
    Permission.VIEW_LISTINGS,
    Permission.WITHDRAW_PROPOSALS,
    Permission.SEND_MESSAGES,
    Permission.UPDATE_PROFILE,
}

# Role to permissions mapping
ROLE_PERMISSIONS: Dict[UserType, Set[Permission]] = {
    UserType.BRAND: {
        Permission.CREATE_LISTINGS,
        Permission.MANAGE_OWN_LISTINGS,
        Permission.REVIEW_PROPOSALS,
        Permission.CREATE_DELIVERABLES,
        Permission.REVIEW_DELIVERABLES,
        *_COMMON,
    },

    UserType.INFLUENCER: {
        Permission.SUBMIT_PROPOSALS,
        Permission.EDIT_OWN_PROPOSALS,
        Permission.SUBMIT_DELIVERABLES,
        *_COMMON,
    },
}


def get_permissions_for_role(user_type: UserType) -> Set[Permission]:
    """Get all permissions for a given user type."""
    return ROLE_PERMISSIONS.get(user_type, set())


def has_permission(user_type: UserType, permission: Permission) -> bool:
    """Check if a user type has a specific permission."""
    return permission in get_permissions_for_role(user_type)
