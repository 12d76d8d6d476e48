"""LLM prompts for journal entry generation.

The system instruction is fixed: it defines the exact JSON object the
parser accepts, so any change here must stay in sync with EntryParser.
"""

from datetime import date, datetime, timezone

from journai.errors import PromptBuildError

JOURNAL_ENTRY_SYSTEM_PROMPT = """You turn a person's description of their day into a journal entry.

The user message has the form:
NAME (YYYY-MM-DD): free-text summary of the day

Reply with a single JSON object and nothing else, no markdown, no comments:
{"date": "YYYY-MM-DD", "rate": 0.0, "short_summary": "..."}

Fields:
- date: the date given in the user message, unchanged, formatted YYYY-MM-DD
- rate: how good the day was for the person, a number from 0.0 (terrible) to 1.0 (excellent)
- short_summary: one or two sentences summarizing the day, written in the same language as the user message

Example:
Input: Sam (2024-03-01): Finished the report early, went running, slept well.
Output: {"date": "2024-03-01", "rate": 0.85, "short_summary": "Productive day with a finished report and a good run."}"""

USER_MESSAGE_TEMPLATE = "{name} ({date}): {summary}"


def today() -> date:
    """Current calendar date in UTC."""
    return datetime.now(timezone.utc).date()


def build_user_message(name: str, summary: str, entry_date: date) -> str:
    """Render the user message carrying name, date and summary."""
    return USER_MESSAGE_TEMPLATE.format(
        name=name,
        date=entry_date.isoformat(),
        summary=summary,
    )


def build_journal_entry_messages(
    name: str,
    summary: str,
    entry_date: date | None = None,
) -> list[dict[str, str]]:
    """
    Build the two chat messages sent to the completion service.

    Args:
        name: Journaler name or label
        summary: Free-text description of the day
        entry_date: Day the entry is for, today (UTC) when omitted

    Returns:
        [system instruction, user message]
    """
    if not isinstance(name, str) or not isinstance(summary, str):
        raise PromptBuildError("name and summary must be strings")
    if entry_date is None:
        entry_date = today()
    elif not isinstance(entry_date, date):
        raise PromptBuildError(f"invalid entry date: {entry_date!r}")
    elif isinstance(entry_date, datetime):
        entry_date = entry_date.date()

    return [
        {"role": "system", "content": JOURNAL_ENTRY_SYSTEM_PROMPT},
        {"role": "user", "content": build_user_message(name, summary, entry_date)},
    ]
