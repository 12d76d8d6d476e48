"""Ingestion pipeline - turns a daily summary into a stored journal entry.

Steps, strictly in order:
1. Build the prompt (name, date, summary)
2. Request one completion
3. Parse the completion into a JournalEntry
4. Check the entry is for the requested date
5. Insert the entry; if its date is already stored, merge rate and summary

Any failure other than a duplicate date stops the pipeline before the next
step runs, so nothing is written unless the model output parsed cleanly.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Literal

from journai.errors import DuplicateKey, MalformedModelOutput
from journai.ingestion.llm_client import LLMClient, get_llm_client
from journai.ingestion.parser import EntryParser
from journai.ingestion.prompts import build_journal_entry_messages, today
from journai.models import JournalEntry
from journai.storage.base import EntryStore

logger = logging.getLogger(__name__)

IngestionOutcome = Literal["created", "merged"]


@dataclass
class IngestionResult:
    """Result of one ingestion request."""

    entry: JournalEntry
    outcome: IngestionOutcome

    @property
    def merged(self) -> bool:
        return self.outcome == "merged"


class IngestionPipeline:
    """
    Pipeline for creating journal entries from free-text summaries.

    The returned entry is always the one parsed from the completion. When
    the date already exists the stored record takes the new rate and
    summary, so the last submission for a date wins.
    """

    def __init__(
        self,
        store: EntryStore,
        llm_client: LLMClient | None = None,
        parser: EntryParser | None = None,
    ) -> None:
        self.store = store
        self.llm = llm_client or get_llm_client()
        self.parser = parser or EntryParser()

    async def ingest(
        self,
        name: str,
        summary: str,
        entry_date: date | None = None,
    ) -> IngestionResult:
        """
        Generate, validate and persist the journal entry for one day.

        Args:
            name: Journaler name or label
            summary: Free-text description of the day
            entry_date: Day the entry is for, today (UTC) when omitted

        Returns:
            IngestionResult with the parsed entry and whether it was
            created or merged into an existing one
        """
        requested_date = entry_date or today()

        logger.debug(f"Prompting for {requested_date.isoformat()}")
        messages = build_journal_entry_messages(name, summary, requested_date)

        logger.debug("Requesting completion")
        completion = await self.llm.complete(messages)

        logger.debug("Parsing completion")
        entry = self.parser.parse(completion)
        if entry.date != requested_date:
            # The stored key must be the date that was asked for
            raise MalformedModelOutput(
                f"model returned date {entry.date.isoformat()} "
                f"for requested {requested_date.isoformat()}",
                raw_output=completion,
            )

        outcome = await self._persist(entry)
        return IngestionResult(entry=entry, outcome=outcome)

    async def _persist(self, entry: JournalEntry) -> IngestionOutcome:
        """Insert the entry, merging into the stored one on a duplicate date."""
        try:
            await self.store.insert_entry(entry)
        except DuplicateKey:
            logger.info(f"Entry for {entry.date.isoformat()} exists, merging")
            await self.store.upsert_merge_entry(
                entry.date, entry.rate, entry.short_summary
            )
            logger.info(f"Merged journal entry for {entry.date.isoformat()}")
            return "merged"

        logger.info(f"Created journal entry for {entry.date.isoformat()}")
        return "created"
