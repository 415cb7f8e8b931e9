# FastAPI Server for the Influmatch Marketplace

import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.app_config import FRONTEND_URL, LOG_LEVEL
from core.clock import Clock, SystemClock
from core.errors import (
    Conflict,
    DuplicateProposal,
    EngagementError,
    InvalidTransition,
    NotFound,
    StorageError,
    Unauthorized,
    ValidationError,
)
from database.config import Database
from routers import (
    auth_router,
    users_router,
    listings_router,
    proposals_router,
    deliverables_router,
    messages_router,
)

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Domain error -> HTTP status
ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    Unauthorized: status.HTTP_403_FORBIDDEN,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidTransition: status.HTTP_409_CONFLICT,
    DuplicateProposal: status.HTTP_409_CONFLICT,
    Conflict: status.HTTP_409_CONFLICT,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(request: Request, exc: EngagementError) -> JSONResponse:
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS:
            status_code = ERROR_STATUS[error_type]
            break

    if isinstance(exc, ValidationError):
        body = {"detail": exc.detail, "errors": [v.to_dict() for v in exc.violations]}
    elif status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
        body = {"detail": "Internal server error"}
    else:
        body = {"detail": exc.detail}
    return JSONResponse(status_code=status_code, content=body)


def create_app(database: Optional[Database] = None, clock: Optional[Clock] = None) -> FastAPI:
    """
    Build the API. The database and clock are created here (or injected by tests)
    and shared with request handlers through ``app.state``.
    """
    app = FastAPI(
        title="Influmatch API",
        description="Brand and influencer collaboration marketplace",
        version="1.0.0"
    )
    app.state.database = database or Database()
    app.state.clock = clock or SystemClock()

    @app.on_event("startup")
    def startup_event():
        app.state.database.wait_until_ready()
        app.state.database.init_db()
        logger.info("Influmatch API started")

    @app.on_event("shutdown")
    def shutdown_event():
        app.state.database.dispose()

    # CORS Setup - only the configured frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EngagementError, _error_response)

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(listings_router)
    app.include_router(proposals_router)
    app.include_router(deliverables_router)
    app.include_router(messages_router)

    # Health Check
    @app.get("/")
    def root():
        return {
            "message": "Influmatch API",
            "version": "1.0.0",
            "status": "running"
        }

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
