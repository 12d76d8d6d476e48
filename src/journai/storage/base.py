"""Storage capability used by the ingestion pipeline and the API."""

from datetime import date
from typing import Protocol

from journai.models import JournalEntry


class EntryStore(Protocol):
    """Date-unique collection of journal entries.

    Implementations raise DuplicateKey from `insert_entry` when the date is
    taken and StorageError for any other fault.
    """

    async def insert_entry(self, entry: JournalEntry) -> None:
        ...

    async def upsert_merge_entry(
        self, entry_date: date, rate: float, short_summary: str
    ) -> None:
        ...

    async def list_entries(self) -> list[JournalEntry]:
        ...

    async def delete_entry(self, entry_date: date) -> int:
        ...
