"""Journal entry model - one structured record per calendar day."""

import datetime
from dataclasses import dataclass


@dataclass
class JournalEntry:
    """
    Structured daily record produced from a free-text summary.

    `date` is the natural key: at most one entry exists per calendar day.
    `rate` and `short_summary` are generated by the model and are the only
    fields a later submission for the same day can change.
    """

    date: datetime.date
    rate: float
    short_summary: str

    def to_dict(self) -> dict:
        """Convert to dictionary for Neo4j storage and API responses."""
        return {
            "date": self.date.isoformat(),
            "rate": self.rate,
            "short_summary": self.short_summary,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "JournalEntry":
        """Create from dictionary (Neo4j record)."""
        raw_date = data["date"]
        if isinstance(raw_date, str):
            entry_date = datetime.date.fromisoformat(raw_date)
        elif hasattr(raw_date, "to_native"):
            # neo4j.time.Date
            entry_date = raw_date.to_native()
        else:
            entry_date = raw_date
        return cls(
            date=entry_date,
            rate=float(data["rate"]),
            short_summary=data["short_summary"],
        )
