"""Ingestion layer for Journai - prompting, completion, parsing, persistence."""

from journai.ingestion.llm_client import LLMClient, close_llm_client, get_llm_client
from journai.ingestion.parser import EntryParser, parse_entry
from journai.ingestion.pipeline import IngestionPipeline, IngestionResult
from journai.ingestion.prompts import build_journal_entry_messages

__all__ = [
    # Prompts
    "build_journal_entry_messages",
    # LLM
    "LLMClient",
    "get_llm_client",
    "close_llm_client",
    # Parser
    "EntryParser",
    "parse_entry",
    # Pipeline
    "IngestionPipeline",
    "IngestionResult",
]
