"""Construction of low-level DynamoDB clients with a single bounded attempt per call."""

from __future__ import annotations

from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from preload_store.exceptions import StoreConnectionError


def build_client(
    *,
    timeout: float,
    region: Optional[str],
    endpoint_url: Optional[str] = None,
    profile: Optional[str] = None,
    access_key: Optional[str] = None,
    secret_key: Optional[str] = None,
) -> Any:
    """Create a DynamoDB client on a fresh boto3 session.

    boto3 sessions are not thread-safe, so every caller gets its own.
    """
    config = Config(
        connect_timeout=timeout,
        read_timeout=timeout,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )
    try:
        session = boto3.session.Session(
            profile_name=profile,
            region_name=region or None,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )
        return session.client("dynamodb", endpoint_url=endpoint_url, config=config)
    except (BotoCoreError, ValueError) as exc:
        raise StoreConnectionError(f"Could not create DynamoDB client: {exc}") from exc
