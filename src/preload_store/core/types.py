"""Shared type aliases for the framework layer."""

from __future__ import annotations

from typing import Any, Callable

# Receives human-readable progress fragments, invoked synchronously
ProgressSink = Callable[[str], None]

# Raw DynamoDB item in AttributeValue format
RawItem = dict[str, dict[str, Any]]


def discard_progress(message: str) -> None:
    """Progress sink that drops every message."""
