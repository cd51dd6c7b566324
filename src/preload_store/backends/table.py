"""Table provisioning for stores that start empty (the local emulator)."""

from __future__ import annotations

import logging
from typing import Any

from botocore.exceptions import ClientError

from preload_store.core.errors import error_code
from preload_store.schema import ATTRIBUTE_DEFINITIONS, KEY_SCHEMA

log = logging.getLogger(__name__)


def ensure_table(client: Any, table_name: str, *, max_wait_attempts: int = 20) -> bool:
    """Create the domain-state table if missing and wait until it exists.

    Returns ``True`` when the table was created by this call.
    """
    created = True
    try:
        client.create_table(
            TableName=table_name,
            KeySchema=KEY_SCHEMA,
            AttributeDefinitions=ATTRIBUTE_DEFINITIONS,
            BillingMode="PAY_PER_REQUEST",
        )
        log.info("Created table %s", table_name)
    except ClientError as exc:
        if error_code(exc) != "ResourceInUseException":
            raise
        created = False
        log.debug("Table %s already exists", table_name)

    client.get_waiter("table_exists").wait(
        TableName=table_name,
        WaiterConfig={"Delay": 1, "MaxAttempts": max_wait_attempts},
    )
    return created
