# Services Module for Influmatch
# Contains business logic services

from services.engagement_service import EngagementService, ProposalChat, get_engagement_service
from services.account_service import AccountService, get_account_service

__all__ = [
    'EngagementService',
    'ProposalChat',
    'get_engagement_service',
    'AccountService',
    'get_account_service',
]
