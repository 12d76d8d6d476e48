"""Completion parser - turns model output into a validated JournalEntry."""

import datetime
import logging
import re

from pydantic import BaseModel, ConfigDict, ValidationError

from journai.config import settings
from journai.errors import MalformedModelOutput
from journai.models import JournalEntry

logger = logging.getLogger(__name__)

# Only complete tag pairs are removed, the JSON itself is never touched
THINKING_PATTERNS = [
    re.compile(r'<think>[\s\S]*?</think>', re.DOTALL),
    re.compile(r'<thinking>[\s\S]*?</thinking>', re.DOTALL),
]


class _EntryPayload(BaseModel):
    """Shape the model is instructed to produce."""

    model_config = ConfigDict(strict=True, extra="ignore")

    date: datetime.date
    rate: float
    short_summary: str


def strip_thinking_tags(text: str) -> str:
    """Remove complete <think>/<thinking> blocks emitted by reasoning models."""
    for pattern in THINKING_PATTERNS:
        text = pattern.sub("", text)
    return text.strip()


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one diagnostic line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class EntryParser:
    """
    Strict parser for journal entry completions.

    Accepts exactly one JSON object with `date` (ISO date string), `rate`
    (number) and `short_summary` (string). Extra keys are ignored. Anything
    else raises MalformedModelOutput.
    """

    def __init__(
        self,
        rate_min: float | None = None,
        rate_max: float | None = None,
        strip_thinking: bool | None = None,
    ) -> None:
        self.rate_min = settings.rate_min if rate_min is None else rate_min
        self.rate_max = settings.rate_max if rate_max is None else rate_max
        self.strip_thinking = (
            settings.strip_thinking if strip_thinking is None else strip_thinking
        )

    def parse(self, raw_output: str) -> JournalEntry:
        """Parse completion text into a JournalEntry."""
        text = raw_output or ""
        if self.strip_thinking:
            text = strip_thinking_tags(text)
        else:
            text = text.strip()

        if not text:
            raise MalformedModelOutput("completion text is empty", raw_output=raw_output)

        try:
            payload = _EntryPayload.model_validate_json(text)
        except ValidationError as e:
            diagnostic = format_validation_error(e)
            logger.warning(f"Could not parse completion as journal entry: {diagnostic}")
            raise MalformedModelOutput(
                f"invalid journal entry: {diagnostic}",
                raw_output=raw_output,
            ) from e

        if not self.rate_min <= payload.rate <= self.rate_max:
            raise MalformedModelOutput(
                f"rate {payload.rate} outside [{self.rate_min}, {self.rate_max}]",
                raw_output=raw_output,
            )

        return JournalEntry(
            date=payload.date,
            rate=payload.rate,
            short_summary=payload.short_summary,
        )


def parse_entry(raw_output: str) -> JournalEntry:
    """Parse completion text with default settings."""
    return EntryParser().parse(raw_output)
