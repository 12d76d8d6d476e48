"""Exception hierarchy for the entry-ingestion pipeline.

Every error except DuplicateKey ends the request. DuplicateKey is raised by
the store when a record for the same date already exists and is handled by
the pipeline through the merge path.
"""

from datetime import date


class JournaiError(Exception):
    """Base class for all Journai errors."""


class PromptBuildError(JournaiError):
    """The prompt messages could not be constructed."""


class CompletionError(JournaiError):
    """Base class for completion failures."""


class CompletionServiceError(CompletionError):
    """Transport, auth, rate-limit or request failure from the LLM service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NoOutput(CompletionError):
    """The LLM service answered but produced no usable text."""

    def __init__(self, message: str = "no output from the completion service") -> None:
        super().__init__(message)


class MalformedModelOutput(JournaiError):
    """Completion text could not be parsed into a journal entry."""

    def __init__(self, message: str, raw_output: str | None = None) -> None:
        super().__init__(message)
        self.raw_output = raw_output


class StoreError(JournaiError):
    """Base class for storage failures."""


class DuplicateKey(StoreError):
    """An entry with the same date already exists."""

    def __init__(self, entry_date: date) -> None:
        super().__init__(f"journal entry for {entry_date.isoformat()} already exists")
        self.date = entry_date


class StorageError(StoreError):
    """Any storage or transport fault other than a duplicate date."""
