"""Nested pydantic-settings configuration for preload-store.

Each group reads its own ``PRELOAD_<GROUP>_*`` env vars::

    export PRELOAD_STORE_TABLE_NAME=hstspreload-domains
    export PRELOAD_EMULATOR_JAR_PATH=/opt/dynamodb/DynamoDBLocal.jar
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class StoreConfig(BaseSettings):
    """Backing table configuration.

    Env vars use ``PRELOAD_STORE_`` prefix.  ``aws_region`` falls back to the
    usual AWS environment resolution when left empty.
    """

    model_config = {"env_prefix": "PRELOAD_STORE_"}

    table_name: str = "hstspreload-domains"
    aws_region: str = ""
    endpoint_url: Optional[str] = None
    profile: Optional[str] = None
    timeout_seconds: float = 10.0


class EmulatorConfig(BaseSettings):
    """DynamoDB Local emulator used for ephemeral stores.

    Env vars use ``PRELOAD_EMULATOR_`` prefix.
    """

    model_config = {"env_prefix": "PRELOAD_EMULATOR_"}

    java_bin: str = "java"
    jar_path: Path = Path("./testing/dynamodb/DynamoDBLocal.jar")
    host: str = "localhost"
    startup_timeout: float = Field(default=10.0, gt=0.0)


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``PRELOAD_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "PRELOAD_OBSERVABILITY_"}

    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level settings aggregating all sub-configs."""

    store: StoreConfig = StoreConfig()
    emulator: EmulatorConfig = EmulatorConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
