"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from guildfeed.config import Settings
from guildfeed.interface.api.routes import (
    bookmarks,
    health,
    moderation,
    polls,
    posts,
    replies,
    votes,
)
from guildfeed.util.di.container import create_container, setup_di
from guildfeed.util.observability import instrument_fastapi, instrument_httpx


def create_app(settings: Settings | None = None, container=None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function; start_app.py
    does it in production and the test harness does it in tests.

    Args:
        settings: Settings to use (loaded from the environment if omitted)
        container: DI container to use (production container if omitted)
    """
    settings = settings or Settings()

    # Instrument httpx for the guild directory calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Guild Feed API",
        description="Backend API for guild discussion feeds: posts, threaded replies, votes, polls and moderation",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(replies.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(polls.router)
    app_instance.include_router(moderation.router)
    app_instance.include_router(bookmarks.router)

    return app_instance
