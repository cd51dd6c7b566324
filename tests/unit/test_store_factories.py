"""Tests for the temp_local_store / prod_store construction entry points."""

from __future__ import annotations

from typing import Any

import pytest

from preload_store import store as store_module
from preload_store.backends.prod import ProdBackend
from preload_store.core.config import AppSettings, StoreConfig
from preload_store.exceptions import StoreConnectionError
from preload_store.models import DomainState, PreloadStatus
from preload_store.store import prod_store, temp_local_store
from tests.fakes.fake_dynamodb import FakeBackend, client_error


class _ShutdownRecorder:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(store=StoreConfig(table_name="local-domains", timeout_seconds=1.5))


class TestTempLocalStore:
    def test_provisions_table_and_returns_shutdown(
        self, monkeypatch: pytest.MonkeyPatch, settings: AppSettings
    ) -> None:
        backend = FakeBackend()
        recorder = _ShutdownRecorder()
        provisioned: list[tuple[Any, str]] = []
        monkeypatch.setattr(store_module, "start_local_backend", lambda config: (backend, recorder))
        monkeypatch.setattr(
            store_module, "ensure_table", lambda client, name: provisioned.append((client, name))
        )

        store, shutdown = temp_local_store(settings)

        assert provisioned == [(backend.client, "local-domains")]
        assert store.backend is backend
        store.put_state(DomainState(name="garron.net", status=PreloadStatus.REJECTED))
        assert store.state_for_name("garron.net").status == PreloadStatus.REJECTED
        assert backend.timeouts[0] == 1.5

        shutdown()
        assert recorder.calls == 1

    def test_start_failure_propagates(self, monkeypatch: pytest.MonkeyPatch, settings: AppSettings) -> None:
        def boom(config: Any) -> Any:
            raise StoreConnectionError("Could not start DynamoDB Local")

        monkeypatch.setattr(store_module, "start_local_backend", boom)
        with pytest.raises(StoreConnectionError, match="Could not start"):
            temp_local_store(settings)

    def test_provisioning_failure_shuts_down(
        self, monkeypatch: pytest.MonkeyPatch, settings: AppSettings
    ) -> None:
        recorder = _ShutdownRecorder()
        monkeypatch.setattr(store_module, "start_local_backend", lambda config: (FakeBackend(), recorder))

        def fail(client: Any, name: str) -> None:
            raise client_error("InternalFailure", "CreateTable")

        monkeypatch.setattr(store_module, "ensure_table", fail)
        with pytest.raises(StoreConnectionError, match="provision"):
            temp_local_store(settings)
        assert recorder.calls == 1


class TestProdStore:
    def test_binds_prod_backend(self) -> None:
        settings = AppSettings(store=StoreConfig(aws_region="us-west-2"))
        store = prod_store(settings)
        assert isinstance(store.backend, ProdBackend)

    def test_region_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("PRELOAD_STORE_AWS_REGION", "AWS_REGION", "AWS_PROFILE"):
            monkeypatch.delenv(var, raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        store = prod_store(AppSettings(store=StoreConfig()))
        assert store.backend.new_client(1.0).meta.region_name == "eu-west-1"

    def test_explicit_region_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        store = prod_store(AppSettings(store=StoreConfig(aws_region="ap-south-1")))
        assert store.backend.new_client(1.0).meta.region_name == "ap-south-1"

    def test_rejects_bad_settings(self) -> None:
        with pytest.raises(ValueError):
            prod_store(AppSettings(store=StoreConfig(table_name="")))
