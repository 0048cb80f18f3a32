"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from repo_briefing.infrastructure.config import get_settings
from repo_briefing.interface.dependencies import build_repo_fetcher, new_http_client
from repo_briefing.interface.error_handlers import register_error_handlers
from repo_briefing.interface.routes import router


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    """One GitHub client and adapter per process, closed on shutdown."""
    async with new_http_client() as client:
        app.state.repo_fetcher = build_repo_fetcher(get_settings(), client)
        yield


def create_app() -> FastAPI:
    """Build and wire the FastAPI application."""
    app = FastAPI(
        title="GitHub Repository Briefing",
        version="1.0.0",
        description=(
            "Takes a public GitHub repository URL and an AI API key and returns "
            "a briefing record: metadata, languages, file tree, and an "
            "LLM-written purpose, tech stack, architecture summary and "
            "complexity score."
        ),
        lifespan=_lifespan,
    )

    register_error_handlers(app)
    app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
