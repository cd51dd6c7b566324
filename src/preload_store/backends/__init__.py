"""Store backends: the local emulator and production DynamoDB."""

from __future__ import annotations

from preload_store.backends.local import LocalBackend, PortAllocator, start_local_backend
from preload_store.backends.prod import ProdBackend
from preload_store.backends.protocol import IStoreBackend
from preload_store.backends.table import ensure_table

__all__ = [
    "IStoreBackend",
    "LocalBackend",
    "ProdBackend",
    "PortAllocator",
    "start_local_backend",
    "ensure_table",
]
