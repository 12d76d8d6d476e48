"""Pytest configuration and fixtures."""

import json
from collections.abc import Iterator
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from journai.config import Settings
from journai.errors import DuplicateKey
from journai.ingestion.llm_client import LLMClient
from journai.models import JournalEntry


class InMemoryEntryStore:
    """Dict-backed EntryStore that enforces one entry per date."""

    def __init__(self) -> None:
        self.entries: dict[date, JournalEntry] = {}
        self.inserts = 0
        self.merges = 0

    async def connect(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def setup_schema(self) -> None:
        pass

    async def insert_entry(self, entry: JournalEntry) -> None:
        if entry.date in self.entries:
            raise DuplicateKey(entry.date)
        self.entries[entry.date] = JournalEntry(entry.date, entry.rate, entry.short_summary)
        self.inserts += 1

    async def upsert_merge_entry(
        self, entry_date: date, rate: float, short_summary: str
    ) -> None:
        self.entries[entry_date] = JournalEntry(entry_date, rate, short_summary)
        self.merges += 1

    async def list_entries(self) -> list[JournalEntry]:
        return [self.entries[d] for d in sorted(self.entries)]

    async def delete_entry(self, entry_date: date) -> int:
        return 1 if self.entries.pop(entry_date, None) is not None else 0

    async def execute_query(self, query: str, **params) -> list[dict]:
        return [{"n": 1}]

    @property
    def mutations(self) -> int:
        return self.inserts + self.merges


def completion(entry_date: str, rate: float, short_summary: str) -> str:
    """Completion text in the format the system prompt asks for."""
    return json.dumps({"date": entry_date, "rate": rate, "short_summary": short_summary})


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        neo4j_uri="bolt://localhost:7687",
        neo4j_user="neo4j",
        neo4j_password="test_password",
        llm_base_url="http://localhost:11434/v1",
        llm_model="gpt-4",
        llm_api_key="test-key",
    )


@pytest.fixture
def make_completion():
    """Factory for completion texts."""
    return completion


@pytest.fixture
def memory_store() -> InMemoryEntryStore:
    """Empty in-memory entry store."""
    return InMemoryEntryStore()


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Mock LLM client returning a fixed journal entry completion."""
    client = MagicMock(spec=LLMClient)
    client.model = "gpt-4"
    client.complete = AsyncMock(
        return_value=completion("2024-03-01", 0.8, "Productive day")
    )
    client.close = AsyncMock()
    return client


@pytest.fixture
def sample_entry() -> JournalEntry:
    """Sample journal entry for testing."""
    return JournalEntry(
        date=date(2024, 3, 1),
        rate=0.8,
        short_summary="Productive day",
    )


@pytest.fixture
def api_client(memory_store, mock_llm_client) -> Iterator[TestClient]:
    """TestClient with the in-memory store and mocked LLM wired into the lifespan."""
    from journai.api.main import create_app

    with patch("journai.api.main.Neo4jClient", return_value=memory_store), patch(
        "journai.api.main.get_llm_client", return_value=mock_llm_client
    ):
        app = create_app()
        with TestClient(app, raise_server_exceptions=False) as client:
            yield client
