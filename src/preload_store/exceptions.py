"""Exception hierarchy for preload-store."""

from __future__ import annotations

import builtins


class PreloadStoreError(Exception):
    """Base exception for all preload-store errors."""


class StoreConnectionError(PreloadStoreError, builtins.ConnectionError):
    """Raised when a store session cannot be established or the backend is misconfigured."""


class WriteError(PreloadStoreError):
    """Raised when a batch chunk fails to apply.

    Chunks written before the failing one stay applied; chunks after it are
    never attempted.
    """


class QueryError(PreloadStoreError):
    """Raised when a read, scan or lookup fails for a reason other than a missing record."""
