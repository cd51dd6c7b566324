"""preload-store: persistence for HSTS preload domain states on DynamoDB.

Public API::

    from preload_store import (
        DomainStore, temp_local_store, prod_store,
        DomainState, PreloadStatus,
        StoreConnectionError, WriteError, QueryError,
    )

Applications that want structured logs call ``setup_logging`` once at
startup::

    setup_logging(AppSettings().observability)
"""

from __future__ import annotations

from preload_store.core.config import AppSettings
from preload_store.core.logging_config import setup_logging
from preload_store.exceptions import (
    PreloadStoreError,
    QueryError,
    StoreConnectionError,
    WriteError,
)
from preload_store.models import DomainState, PreloadStatus
from preload_store.schema import AUTOCOMPLETE_LIMIT, BATCH_SIZE
from preload_store.store import DomainStore, prod_store, temp_local_store

__all__ = [
    "AppSettings",
    "setup_logging",
    "DomainStore",
    "temp_local_store",
    "prod_store",
    "DomainState",
    "PreloadStatus",
    "PreloadStoreError",
    "StoreConnectionError",
    "WriteError",
    "QueryError",
    "BATCH_SIZE",
    "AUTOCOMPLETE_LIMIT",
]
