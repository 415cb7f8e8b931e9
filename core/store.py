# Data-access interface consumed by the engagement service
# Implementations return records (or None for "not found") and raise StorageError on failure

from typing import List, Optional, Protocol

from core.lifecycle import ListingStatus
from core.records import (
    ConversationSummary,
    DeliverableRecord,
    ListingRecord,
    MessageRecord,
    ProposalRecord,
    UserRecord,
)


class EngagementStore(Protocol):

    # Users
    def find_user(self, user_id: int) -> Optional[UserRecord]: ...
    def find_user_by_email(self, email: str) -> Optional[UserRecord]: ...
    def insert_user(self, user: UserRecord) -> UserRecord: ...
    def update_user(self, user: UserRecord) -> UserRecord: ...

    # Listings
    def find_listing(self, listing_id: int) -> Optional[ListingRecord]: ...
    def list_listings(self, status: Optional[ListingStatus] = None,
                      brand_id: Optional[int] = None) -> List[ListingRecord]: ...
    def insert_listing(self, listing: ListingRecord) -> ListingRecord: ...
    def update_listing(self, listing: ListingRecord) -> ListingRecord: ...

    # Proposals
    def find_proposal(self, proposal_id: int) -> Optional[ProposalRecord]: ...
    def find_proposal_by_listing_and_influencer(self, listing_id: int,
                                                influencer_id: int) -> Optional[ProposalRecord]: ...
    def list_proposals_for_listing(self, listing_id: int) -> List[ProposalRecord]: ...
    def list_proposals_for_influencer(self, influencer_id: int) -> List[ProposalRecord]: ...
    def insert_proposal(self, proposal: ProposalRecord) -> ProposalRecord: ...
    def update_proposal(self, proposal: ProposalRecord) -> ProposalRecord: ...

    # Deliverables
    def find_deliverable(self, deliverable_id: int) -> Optional[DeliverableRecord]: ...
    def list_deliverables_for_proposal(self, proposal_id: int) -> List[DeliverableRecord]: ...
    def list_deliverables_for_influencer(self, influencer_id: int) -> List[DeliverableRecord]: ...
    def list_deliverables_for_brand(self, brand_id: int) -> List[DeliverableRecord]: ...
    def insert_deliverable(self, deliverable: DeliverableRecord) -> DeliverableRecord: ...
    def update_deliverable(self, deliverable: DeliverableRecord) -> DeliverableRecord: ...
    def delete_deliverable(self, deliverable_id: int) -> None: ...

    # Messages
    def insert_message(self, message: MessageRecord) -> MessageRecord: ...
    def list_messages(self, conversation_id: str) -> List[MessageRecord]: ...
    def list_conversations_for_user(self, user_id: int) -> List[ConversationSummary]: ...
