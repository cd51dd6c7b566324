"""Shared fixtures for preload-store tests."""

from __future__ import annotations

import pytest

from preload_store.core.config import StoreConfig
from preload_store.models import DomainState, PreloadStatus
from preload_store.store import DomainStore
from tests.fakes.fake_dynamodb import FakeBackend, FakeDynamoDBClient


@pytest.fixture
def fake_client() -> FakeDynamoDBClient:
    return FakeDynamoDBClient()


@pytest.fixture
def backend(fake_client: FakeDynamoDBClient) -> FakeBackend:
    return FakeBackend(fake_client)


@pytest.fixture
def store_config() -> StoreConfig:
    return StoreConfig(table_name="test-domains", timeout_seconds=2.0)


@pytest.fixture
def store(backend: FakeBackend, store_config: StoreConfig) -> DomainStore:
    return DomainStore(backend, store_config)


@pytest.fixture
def sample_states() -> list[DomainState]:
    """A handful of domains across several statuses."""
    return [
        DomainState(name="google.com", status=PreloadStatus.PRELOADED),
        DomainState(name="goop.net", status=PreloadStatus.PENDING),
        DomainState(name="gopher.io", status=PreloadStatus.REJECTED, message="no HSTS header"),
        DomainState(name="amazon.com", status=PreloadStatus.REJECTED),
        DomainState(name="example.org", status=PreloadStatus.REMOVED),
    ]
