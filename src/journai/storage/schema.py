"""Neo4j schema setup - constraints and indexes."""

JOURNAL_ENTRY_LABEL = "JournalEntry"

# Schema setup queries
SCHEMA_QUERIES = [
    # One entry per calendar date; also backs date lookups
    f"CREATE CONSTRAINT journal_entry_date IF NOT EXISTS FOR (e:{JOURNAL_ENTRY_LABEL}) REQUIRE e.date IS UNIQUE",
]

# Node layout:
# (e:JournalEntry {date: "2024-03-01", rate: 0.8, short_summary: "..."})


def get_all_schema_queries() -> list[str]:
    """Get all schema setup queries."""
    return SCHEMA_QUERIES.copy()
