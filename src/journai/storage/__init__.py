"""Storage layer for Journai."""

from journai.storage.base import EntryStore
from journai.storage.neo4j_client import Neo4jClient
from journai.storage.schema import get_all_schema_queries

__all__ = [
    "EntryStore",
    "Neo4jClient",
    "get_all_schema_queries",
]
