#!/usr/bin/env python3
"""Command-line client for a running Journai API.

Usage:
    python scripts/journal_client.py add NAME SUMMARY [--date YYYY-MM-DD]
    python scripts/journal_client.py list
    python scripts/journal_client.py delete YYYY-MM-DD

Options:
    --url       API base URL (default: http://localhost:3000)
"""

import argparse
import logging
import sys

import requests

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"
TIMEOUT = 120.0


def print_entry(entry: dict) -> None:
    print(f"{entry['date']}  rate={entry['rate']:.2f}  {entry['short_summary']}")


def add_entry(base_url: str, name: str, summary: str, date: str | None) -> bool:
    """Submit a daily summary and print the generated entry."""
    payload = {"name": name, "summary": summary}
    if date:
        payload["date"] = date

    response = requests.post(f"{base_url}/", json=payload, timeout=TIMEOUT)
    if response.status_code != 200:
        logger.error(f"Create failed ({response.status_code}): {response.text}")
        return False

    print_entry(response.json())
    return True


def list_entries(base_url: str) -> bool:
    """Print all stored entries."""
    response = requests.get(f"{base_url}/", timeout=TIMEOUT)
    if response.status_code != 200:
        logger.error(f"List failed ({response.status_code}): {response.text}")
        return False

    entries = response.json()
    if not entries:
        print("No journal entries")
    for entry in entries:
        print_entry(entry)
    return True


def delete_entry(base_url: str, date: str) -> bool:
    """Delete the entry for a date."""
    response = requests.delete(f"{base_url}/", json={"date": date}, timeout=TIMEOUT)
    if response.status_code != 200:
        logger.error(f"Delete failed ({response.status_code}): {response.text}")
        return False

    print(f"Deleted entry for {date}")
    return True


def main() -> int:
    parser = argparse.ArgumentParser(description="Journai API client")
    parser.add_argument("--url", default=DEFAULT_API_URL, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Create or update a day's entry")
    add_parser.add_argument("name")
    add_parser.add_argument("summary")
    add_parser.add_argument("--date", help="Entry date (YYYY-MM-DD), server date if omitted")

    subparsers.add_parser("list", help="List all entries")

    delete_parser = subparsers.add_parser("delete", help="Delete a day's entry")
    delete_parser.add_argument("date")

    args = parser.parse_args()
    base_url = args.url.rstrip("/")

    try:
        if args.command == "add":
            ok = add_entry(base_url, args.name, args.summary, args.date)
        elif args.command == "list":
            ok = list_entries(base_url)
        else:
            ok = delete_entry(base_url, args.date)
    except requests.ConnectionError:
        logger.error(f"Cannot connect to API at {base_url}. Is it running?")
        return 1

    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
