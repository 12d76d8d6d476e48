"""Journai data models."""

from journai.models.journal_entry import JournalEntry

__all__ = [
    "JournalEntry",
]
