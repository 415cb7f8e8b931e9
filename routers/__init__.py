# API Routers Module
# Exports all modular API routers

from routers.auth import router as auth_router
from routers.users import router as users_router
from routers.listings import router as listings_router
from routers.proposals import router as proposals_router
from routers.deliverables import router as deliverables_router
from routers.messages import router as messages_router

__all__ = [
    'auth_router',
    'users_router',
    'listings_router',
    'proposals_router',
    'deliverables_router',
    'messages_router',
]
