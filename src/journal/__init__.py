"""
Journal module for the GentleDay intention / mood / gratitude log.

This module provides functionality for:
- Append-only CSV journal storage (journal.csv)
- Today / last-N / weekly summary views with mood average and streak
- Guided breathing and grounding timers
"""

from src.journal.aggregator import (
    WeeklySummary,
    last_n,
    parse_count,
    today_entries,
    weekly_summary,
)
from src.journal.codec import CsvCodec
from src.journal.exceptions import (
    FileCreateError,
    FileReadError,
    FileWriteError,
    JournalError,
    JournalStoreError,
)
from src.journal.models import JournalEntry, parse_mood, parse_timestamp
from src.journal.repository import HEADER, JournalRepository

__all__ = [
    "CsvCodec",
    "FileCreateError",
    "FileReadError",
    "FileWriteError",
    "HEADER",
    "JournalEntry",
    "JournalError",
    "JournalRepository",
    "JournalStoreError",
    "WeeklySummary",
    "last_n",
    "parse_count",
    "parse_mood",
    "parse_timestamp",
    "today_entries",
    "weekly_summary",
]
