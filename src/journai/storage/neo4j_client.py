"""Neo4j client for journal entry storage."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession
from neo4j.exceptions import ConstraintError, DriverError, Neo4jError, ServiceUnavailable

from journai.config import settings
from journai.errors import DuplicateKey, StorageError
from journai.models import JournalEntry
from journai.storage.schema import get_all_schema_queries

logger = logging.getLogger(__name__)


class Neo4jClient:
    """Async Neo4j client implementing the EntryStore operations.

    One driver is shared by all requests; the driver hands out a session
    per operation, so the client is safe to use from concurrent tasks.
    """

    def __init__(
        self,
        uri: str | None = None,
        user: str | None = None,
        password: str | None = None,
        database: str | None = None,
    ) -> None:
        self.uri = uri or settings.neo4j_uri
        self.user = user or settings.neo4j_user
        self.password = password or settings.neo4j_password
        self.database = database or settings.neo4j_database
        self._driver: AsyncDriver | None = None

    async def connect(self) -> None:
        """Establish connection to Neo4j."""
        if self._driver is None:
            self._driver = AsyncGraphDatabase.driver(
                self.uri,
                auth=(self.user, self.password),
                user_agent=settings.app_name,
            )
            # Verify connectivity
            try:
                await self._driver.verify_connectivity()
                logger.info(f"Connected to Neo4j at {self.uri}")
            except (ServiceUnavailable, Neo4jError, DriverError) as e:
                logger.error(f"Failed to connect to Neo4j: {e}")
                await self._driver.close()
                self._driver = None
                raise

    async def close(self) -> None:
        """Close the database connection."""
        if self._driver is not None:
            await self._driver.close()
            self._driver = None
            logger.info("Disconnected from Neo4j")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get a database session."""
        if self._driver is None:
            await self.connect()
        assert self._driver is not None
        async with self._driver.session(database=self.database) as session:
            yield session

    async def setup_schema(self) -> None:
        """Create the date uniqueness constraint."""
        for query in get_all_schema_queries():
            await self.execute_query(query)
            logger.debug(f"Executed schema query: {query[:50]}...")
        logger.info("Schema setup completed")

    # ==========================================================================
    # Journal entry operations
    # ==========================================================================

    async def insert_entry(self, entry: JournalEntry) -> None:
        """Create a new entry, DuplicateKey if its date is already stored."""
        query = """
        CREATE (e:JournalEntry {date: $date, rate: $rate, short_summary: $short_summary})
        """
        try:
            async with self.session() as session:
                result = await session.run(query, **entry.to_dict())
                await result.consume()
        except ConstraintError as e:
            raise DuplicateKey(entry.date) from e
        except (Neo4jError, DriverError) as e:
            raise StorageError(f"insert failed for {entry.date.isoformat()}: {e}") from e

    async def upsert_merge_entry(
        self, entry_date: date, rate: float, short_summary: str
    ) -> None:
        """Set rate and summary on the entry for a date."""
        query = """
        MERGE (e:JournalEntry {date: $date})
        SET e.rate = $rate,
            e.short_summary = $short_summary
        """
        await self.execute_query(
            query,
            date=entry_date.isoformat(),
            rate=rate,
            short_summary=short_summary,
        )

    async def list_entries(self) -> list[JournalEntry]:
        """Get all entries ordered by date."""
        query = "MATCH (e:JournalEntry) RETURN e ORDER BY e.date ASC"
        records = await self.execute_query(query)
        return [JournalEntry.from_dict(dict(record["e"])) for record in records]

    async def delete_entry(self, entry_date: date) -> int:
        """Delete the entry for a date. Missing dates delete nothing."""
        query = """
        MATCH (e:JournalEntry {date: $date})
        DELETE e
        RETURN count(e) AS deleted
        """
        records = await self.execute_query(query, date=entry_date.isoformat())
        return records[0]["deleted"] if records else 0

    # ==========================================================================
    # Utility operations
    # ==========================================================================

    async def execute_query(self, query: str, **params: Any) -> list[dict[str, Any]]:
        """Execute a raw Cypher query."""
        results: list[dict[str, Any]] = []
        try:
            async with self.session() as session:
                result = await session.run(query, **params)
                async for record in result:
                    results.append(dict(record))
        except (Neo4jError, DriverError) as e:
            raise StorageError(str(e)) from e
        return results

    async def clear_all(self) -> None:
        """Delete all journal entries. Use with caution!"""
        await self.execute_query("MATCH (e:JournalEntry) DETACH DELETE e")
        logger.warning("All journal entries cleared from Neo4j")
