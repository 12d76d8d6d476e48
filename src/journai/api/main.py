"""FastAPI application for Journai.

Turns free-text daily summaries into structured journal entries and keeps
one entry per calendar date.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from journai.api.routes import API_VERSION, router
from journai.config import settings
from journai.ingestion.llm_client import close_llm_client, get_llm_client
from journai.storage.neo4j_client import Neo4jClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan - startup and shutdown."""
    # Startup
    logger.info("Starting Journai API...")

    # A database that cannot be reached is fatal at startup
    db = Neo4jClient()
    await db.connect()
    try:
        await db.setup_schema()
    except Exception:
        logger.exception("Schema setup failed, closing Neo4j driver")
        await db.close()
        raise
    logger.info("Connected to Neo4j")

    app.state.db = db
    app.state.llm_client = get_llm_client()
    logger.info(f"Using completion model {app.state.llm_client.model}")

    yield

    # Shutdown
    logger.info("Shutting down Journai API...")
    await close_llm_client()
    await db.close()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Journai",
        description="Daily journal entries generated from free-text summaries",
        version=API_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "journai.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_debug,
    )


if __name__ == "__main__":
    run()
