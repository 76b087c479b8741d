"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from word_tutor.api.routes import router
from word_tutor.chat.client import ChatClient
from word_tutor.chat.session import ChatSession
from word_tutor.config import Settings, get_settings
from word_tutor.conversation.prompt_manager import PromptManager
from word_tutor.storage.profile_store import JsonFileProfileStore


def configure_logging() -> None:
    """Configure structlog based on environment."""
    is_production = os.getenv("ENV", "development").lower() == "production"

    if is_production:
        # Production: JSON format for machine parsing
        renderer = structlog.processors.JSONRenderer()
        level = logging.INFO
    else:
        # Development: console format for human readability
        renderer = structlog.dev.ConsoleRenderer()
        level = logging.DEBUG

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; the prompt manager is loaded once at startup."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = JsonFileProfileStore(settings.settings_store_path)
        manager = PromptManager(store)
        await manager.initialize()
        client = ChatClient(
            api_key=settings.chat_api_key,
            model=settings.chat_model,
            base_url=settings.chat_base_url,
            temperature=settings.chat_temperature,
            timeout=settings.chat_timeout_seconds,
        )
        app.state.profile_store = store
        app.state.prompt_manager = manager
        app.state.chat_session = ChatSession(manager, client)
        yield

    app = FastAPI(title="Word Tutor", version="0.1.0", lifespan=lifespan)
    app.include_router(router)
    return app


def main() -> None:
    """Run the application."""
    configure_logging()
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
