"""API routes for Journai.

Provides:
- POST / to generate and store the entry for a day
- GET / to list stored entries
- DELETE / to remove the entry for a date
- GET /health for liveness checks
"""

import datetime
import logging

from fastapi import APIRouter, HTTPException, Request, Response
from pydantic import BaseModel

from journai.errors import JournaiError
from journai.ingestion.llm_client import LLMClient
from journai.ingestion.pipeline import IngestionPipeline
from journai.models import JournalEntry
from journai.storage.neo4j_client import Neo4jClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "0.1.0"


# ============================================================================
# Journal Models
# ============================================================================


class CreateJournalEntry(BaseModel):
    """Free-text description of a day."""

    name: str
    summary: str
    date: datetime.date | None = None


class DeleteJournalEntry(BaseModel):
    """Date of the entry to delete."""

    date: datetime.date


class JournalEntryResponse(BaseModel):
    """Stored journal entry."""

    date: datetime.date
    rate: float
    short_summary: str

    @classmethod
    def from_entry(cls, entry: JournalEntry) -> "JournalEntryResponse":
        return cls(date=entry.date, rate=entry.rate, short_summary=entry.short_summary)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    neo4j_connected: bool
    version: str = API_VERSION


# ============================================================================
# Helper Functions
# ============================================================================


def get_db(request: Request) -> Neo4jClient:
    """Get database from app state."""
    return request.app.state.db


def get_llm(request: Request) -> LLMClient:
    """Get LLM client from app state."""
    return request.app.state.llm_client


# ============================================================================
# Journal Endpoints
# ============================================================================


@router.post("/", response_model=JournalEntryResponse)
async def create_journal_entry(
    request: Request,
    body: CreateJournalEntry,
) -> JournalEntryResponse:
    """
    Create the journal entry for a day.

    A second submission for the same date replaces the stored rate and
    summary instead of failing.
    """
    try:
        pipeline = IngestionPipeline(store=get_db(request), llm_client=get_llm(request))
        result = await pipeline.ingest(
            name=body.name,
            summary=body.summary,
            entry_date=body.date,
        )
    except JournaiError as e:
        logger.exception(f"Error creating journal entry: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Journal entry creation failed: {str(e)}",
        )

    return JournalEntryResponse.from_entry(result.entry)


@router.get("/", response_model=list[JournalEntryResponse])
async def list_journal_entries(request: Request) -> list[JournalEntryResponse]:
    """List all journal entries."""
    db = get_db(request)

    try:
        entries = await db.list_entries()
    except JournaiError as e:
        logger.exception(f"Error listing journal entries: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to list journal entries: {str(e)}",
        )

    return [JournalEntryResponse.from_entry(entry) for entry in entries]


@router.delete("/")
async def delete_journal_entry(
    request: Request,
    body: DeleteJournalEntry,
) -> Response:
    """Delete the entry for a date. Succeeds whether or not it existed."""
    db = get_db(request)

    try:
        deleted = await db.delete_entry(body.date)
    except JournaiError as e:
        logger.exception(f"Error deleting journal entry: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to delete journal entry: {str(e)}",
        )

    logger.info(f"Deleted {deleted} journal entries for {body.date.isoformat()}")
    return Response(status_code=200)


# ============================================================================
# Admin Endpoints
# ============================================================================


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    try:
        db = get_db(request)
        # Try a simple query to verify connection
        await db.execute_query("RETURN 1 as n")
        neo4j_connected = True
    except JournaiError:
        neo4j_connected = False

    return HealthResponse(
        status="healthy" if neo4j_connected else "degraded",
        neo4j_connected=neo4j_connected,
    )
