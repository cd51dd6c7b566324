"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from preload_store.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings, *, local: bool = False) -> None:
    """Validate settings before building a store. Raises ValueError on fatal misconfig."""
    _check_store(settings)
    if local:
        _check_emulator(settings)


def _check_store(settings: AppSettings) -> None:
    if not settings.store.table_name.strip():
        raise ValueError("PRELOAD_STORE_TABLE_NAME must not be empty.")
    if settings.store.timeout_seconds <= 0:
        raise ValueError(
            f"PRELOAD_STORE_TIMEOUT_SECONDS must be positive, got {settings.store.timeout_seconds}."
        )


def _check_emulator(settings: AppSettings) -> None:
    """Warn early when the emulator jar is not where we expect it."""
    if not settings.emulator.jar_path.is_file():
        log.warning(
            "DynamoDB Local jar not found at %s. "
            "Set PRELOAD_EMULATOR_JAR_PATH or the emulator will fail to start.",
            settings.emulator.jar_path,
        )
