"""The public domain-state store.

``DomainStore`` is the only entry point callers use.  It picks the backend
once at construction and delegates every operation to the batch writer or
the query engine.  Callers only ever see ``StoreConnectionError``,
``WriteError`` or ``QueryError``.

Usage::

    store, shutdown = temp_local_store()
    try:
        store.put_state(DomainState(name="garron.net", status=PreloadStatus.REJECTED))
        store.state_for_name("garron.net")
    finally:
        shutdown()
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from preload_store.backends.local import start_local_backend
from preload_store.backends.prod import ProdBackend
from preload_store.backends.protocol import IStoreBackend
from preload_store.backends.table import ensure_table
from preload_store.batch_writer import BatchWriter
from preload_store.core.config import AppSettings, StoreConfig
from preload_store.core.startup_checks import validate_settings
from preload_store.core.types import ProgressSink, discard_progress
from preload_store.exceptions import StoreConnectionError
from preload_store.models import DomainState, PreloadStatus
from preload_store.query import QueryEngine

log = logging.getLogger(__name__)


class DomainStore:
    """Persistence for domain preload states."""

    def __init__(self, backend: IStoreBackend, config: Optional[StoreConfig] = None) -> None:
        config = config or StoreConfig()
        self._backend = backend
        self._writer = BatchWriter(backend, config.table_name, timeout=config.timeout_seconds)
        self._queries = QueryEngine(backend, config.table_name, timeout=config.timeout_seconds)

    @property
    def backend(self) -> IStoreBackend:
        return self._backend

    def put_states(
        self,
        updates: Sequence[DomainState],
        progress: ProgressSink = discard_progress,
    ) -> None:
        """Write ``updates`` in chunks, reporting each chunk to ``progress``."""
        self._writer.put_states(updates, progress)

    def put_state(self, update: DomainState) -> None:
        self._writer.put_state(update)

    def state_for_name(self, name: str) -> DomainState:
        return self._queries.state_for_name(name)

    def all_states(self) -> list[DomainState]:
        return self._queries.all_states()

    def names_with_status(self, status: PreloadStatus) -> list[str]:
        return self._queries.names_with_status(status)

    def autocomplete(self, prefix: str) -> list[DomainState]:
        return self._queries.autocomplete(prefix)


def temp_local_store(
    settings: Optional[AppSettings] = None,
) -> tuple[DomainStore, Callable[[], None]]:
    """Start an in-memory emulator and return a store bound to it.

    The caller must invoke the returned ``shutdown`` to stop the emulator.
    """
    settings = settings or AppSettings()
    validate_settings(settings, local=True)

    backend, shutdown = start_local_backend(settings.emulator)
    try:
        client = backend.new_client(settings.store.timeout_seconds)
        ensure_table(client, settings.store.table_name)
    except (ClientError, BotoCoreError) as exc:
        shutdown()
        raise StoreConnectionError(f"Could not provision table on local emulator: {exc}") from exc
    except StoreConnectionError:
        shutdown()
        raise

    return DomainStore(backend, settings.store), shutdown


def prod_store(settings: Optional[AppSettings] = None) -> DomainStore:
    """Return a store bound to the production DynamoDB table."""
    settings = settings or AppSettings()
    validate_settings(settings)

    backend = ProdBackend(
        settings.store.aws_region,
        endpoint_url=settings.store.endpoint_url,
        profile=settings.store.profile,
    )
    log.info("Using production table %s", settings.store.table_name)
    return DomainStore(backend, settings.store)
