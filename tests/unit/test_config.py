"""Tests for settings and startup validation."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from preload_store.core.config import AppSettings, EmulatorConfig, ObservabilityConfig, StoreConfig
from preload_store import setup_logging
from preload_store.core.startup_checks import validate_settings


class TestStoreConfig:
    def test_defaults(self) -> None:
        config = StoreConfig()
        assert config.timeout_seconds == 10.0
        assert config.table_name == "hstspreload-domains"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRELOAD_STORE_TABLE_NAME", "from-env")
        monkeypatch.setenv("PRELOAD_STORE_TIMEOUT_SECONDS", "3.5")
        config = StoreConfig()
        assert config.table_name == "from-env"
        assert config.timeout_seconds == 3.5

    def test_emulator_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PRELOAD_EMULATOR_JAR_PATH", "/opt/ddb/DynamoDBLocal.jar")
        assert EmulatorConfig().jar_path == Path("/opt/ddb/DynamoDBLocal.jar")


class TestValidateSettings:
    def test_accepts_defaults(self) -> None:
        validate_settings(AppSettings())

    def test_rejects_empty_table(self) -> None:
        settings = AppSettings(store=StoreConfig(table_name="  "))
        with pytest.raises(ValueError, match="TABLE_NAME"):
            validate_settings(settings)

    def test_rejects_non_positive_timeout(self) -> None:
        settings = AppSettings(store=StoreConfig(timeout_seconds=0))
        with pytest.raises(ValueError, match="TIMEOUT_SECONDS"):
            validate_settings(settings)

    def test_warns_on_missing_jar(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        settings = AppSettings(emulator=EmulatorConfig(jar_path=tmp_path / "missing.jar"))
        with caplog.at_level(logging.WARNING, logger="preload_store.core.startup_checks"):
            validate_settings(settings, local=True)
        assert "DynamoDB Local jar not found" in caplog.text


class TestSetupLogging:
    def test_sets_package_level(self) -> None:
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            setup_logging(ObservabilityConfig(log_level="debug"))
            assert logging.getLogger("preload_store").level == logging.DEBUG
            assert logging.getLogger("botocore").level == logging.INFO
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
