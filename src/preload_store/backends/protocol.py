"""Store backend protocol — the one capability every backend provides."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class IStoreBackend(Protocol):
    """Produces DynamoDB client sessions (local emulator, production, test fakes)."""

    def new_client(self, timeout: float) -> Any:
        """Return a client whose every call is bounded by ``timeout`` seconds.

        Raises ``StoreConnectionError`` if no usable session can be set up.
        """
        ...
