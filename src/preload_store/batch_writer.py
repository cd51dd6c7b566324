"""Chunked writes of domain states.

Updates are split into chunks of at most ``BATCH_SIZE`` and each chunk is
applied with one ``TransactWriteItems`` call, so a chunk lands entirely or
not at all.  Writing stops at the first failed chunk: chunks before it stay
applied, chunks after it are never sent.  Callers that need every update
applied must resubmit the remainder themselves (at-least-once semantics).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from preload_store.backends.protocol import IStoreBackend
from preload_store.core.errors import backend_errors
from preload_store.core.types import ProgressSink, discard_progress
from preload_store.exceptions import PreloadStoreError, WriteError
from preload_store.models import DomainState
from preload_store.schema import BATCH_SIZE, DEFAULT_TIMEOUT, to_item

log = logging.getLogger(__name__)


class BatchWriter:
    """Writes ``DomainState`` records through a backend in bounded chunks."""

    def __init__(
        self,
        backend: IStoreBackend,
        table_name: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        if not 0 < batch_size <= BATCH_SIZE:
            raise ValueError(f"batch_size must be in 1..{BATCH_SIZE}, got {batch_size}")
        self._backend = backend
        self._table_name = table_name
        self._timeout = timeout
        self._batch_size = batch_size

    def put_states(
        self,
        updates: Sequence[DomainState],
        progress: ProgressSink = discard_progress,
    ) -> None:
        """Write ``updates`` in input order, one transaction per chunk.

        Raises ``WriteError`` on the first failed chunk and
        ``StoreConnectionError`` if the backend is unreachable.
        """
        if not updates:
            progress("No updates.\n")
            return

        client = self._backend.new_client(self._timeout)

        total = len(updates)
        for start in range(0, total, self._batch_size):
            chunk = updates[start:start + self._batch_size]
            self._put_chunk(client, chunk, start, progress)

        log.debug("Wrote %d domain states to %s", total, self._table_name)

    def put_state(self, update: DomainState) -> None:
        self.put_states([update])

    def _put_chunk(
        self,
        client: Any,
        chunk: Sequence[DomainState],
        offset: int,
        progress: ProgressSink,
    ) -> None:
        progress(f"Updating {len(chunk)} entries...")

        # A transaction may not touch one key twice; the later update wins
        latest = {state.name: state for state in chunk}
        transact_items = [
            {"Put": {"TableName": self._table_name, "Item": to_item(state)}}
            for state in latest.values()
        ]

        try:
            with backend_errors("put_states", WriteError, f"chunk at offset {offset}"):
                client.transact_write_items(TransactItems=transact_items)
        except PreloadStoreError:
            progress(" failed.\n")
            log.error(
                "Chunk of %d states at offset %d failed; earlier chunks remain applied",
                len(chunk),
                offset,
            )
            raise

        progress(" done.\n")
