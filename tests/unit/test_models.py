"""Unit tests for data models."""

from datetime import date

from neo4j.time import Date as Neo4jDate

from journai.models import JournalEntry


class TestJournalEntry:
    """Tests for JournalEntry model."""

    def test_to_dict(self, sample_entry: JournalEntry) -> None:
        """Test conversion to storage properties."""
        assert sample_entry.to_dict() == {
            "date": "2024-03-01",
            "rate": 0.8,
            "short_summary": "Productive day",
        }

    def test_from_dict_iso_string(self) -> None:
        """Test creating an entry from a stored node."""
        entry = JournalEntry.from_dict(
            {"date": "2024-03-01", "rate": 0.8, "short_summary": "Productive day"}
        )
        assert entry.date == date(2024, 3, 1)
        assert entry.rate == 0.8

    def test_from_dict_neo4j_date(self) -> None:
        """Test nodes written with a native Neo4j date."""
        entry = JournalEntry.from_dict(
            {"date": Neo4jDate(2024, 3, 1), "rate": 1, "short_summary": "x"}
        )
        assert entry.date == date(2024, 3, 1)
        assert isinstance(entry.rate, float)

    def test_from_dict_date_object(self) -> None:
        entry = JournalEntry.from_dict(
            {"date": date(2024, 3, 1), "rate": 0.5, "short_summary": "x"}
        )
        assert entry.date == date(2024, 3, 1)

    def test_round_trip(self, sample_entry: JournalEntry) -> None:
        assert JournalEntry.from_dict(sample_entry.to_dict()) == sample_entry
