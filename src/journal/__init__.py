"""Append-only JSONL journal of reconstructed positions."""

from journal.writer import JournalWriter

__all__ = ["JournalWriter"]
