"""Key-ordered reads over the domain-state partition.

All queries stay inside the single ``DomainState`` partition, where DynamoDB
keeps items sorted by name.  Records are rebuilt with the name taken from
the key.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

from preload_store.backends.protocol import IStoreBackend
from preload_store.core.errors import backend_errors
from preload_store.exceptions import QueryError
from preload_store.models import DomainState, PreloadStatus
from preload_store.schema import (
    AUTOCOMPLETE_LIMIT,
    DEFAULT_TIMEOUT,
    DOMAIN_STATE_KIND,
    KIND_ATTR,
    NAME_ATTR,
    STATUS_ATTR,
    from_item,
    make_key,
    name_from_key,
)

log = logging.getLogger(__name__)

# "name" and "status" are DynamoDB reserved words
_ATTR_NAMES = {"#k": KIND_ATTR, "#n": NAME_ATTR, "#s": STATUS_ATTR}
_KIND_VALUE = {":kind": {"S": DOMAIN_STATE_KIND}}


class QueryEngine:
    """Runs scans, lookups and prefix searches against one table."""

    def __init__(
        self,
        backend: IStoreBackend,
        table_name: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._backend = backend
        self._table_name = table_name
        self._timeout = timeout

    def all_states(self) -> list[DomainState]:
        """Every stored record, in no guaranteed order."""
        items = self._collect(
            "all_states",
            KeyConditionExpression="#k = :kind",
            ExpressionAttributeNames={"#k": KIND_ATTR},
            ExpressionAttributeValues=_KIND_VALUE,
        )
        return self._decode("all_states", items)

    def names_with_status(self, status: PreloadStatus) -> list[str]:
        """Names whose status equals ``status``; keys only, no payload."""
        items = self._collect(
            "names_with_status",
            subject=status.value,
            KeyConditionExpression="#k = :kind",
            FilterExpression="#s = :status",
            ProjectionExpression="#n",
            ExpressionAttributeNames=_ATTR_NAMES,
            ExpressionAttributeValues={**_KIND_VALUE, ":status": {"S": status.value}},
        )
        return [name_from_key(item) for item in items]

    def state_for_name(self, name: str) -> DomainState:
        """Exact lookup.  A missing record reads as ``UNKNOWN``, not an error."""
        client = self._backend.new_client(self._timeout)
        with backend_errors("state_for_name", QueryError, name):
            response = client.get_item(
                TableName=self._table_name,
                Key=make_key(name),
                ConsistentRead=True,
            )

        item = response.get("Item")
        if not item:
            return DomainState(name=name, status=PreloadStatus.UNKNOWN)
        return self._decode("state_for_name", [item])[0]

    def autocomplete(self, prefix: str) -> list[DomainState]:
        """Up to ``AUTOCOMPLETE_LIMIT`` records whose names start with ``prefix``.

        Runs an ascending range query for keys strictly after ``prefix`` and
        drops the results that have already run past the prefix.
        """
        if prefix:
            condition = "#k = :kind AND #n > :prefix"
            names = {"#k": KIND_ATTR, "#n": NAME_ATTR}
            values = {**_KIND_VALUE, ":prefix": {"S": prefix}}
        else:
            # Key conditions reject empty strings; every name matches anyway
            condition = "#k = :kind"
            names = {"#k": KIND_ATTR}
            values = _KIND_VALUE

        client = self._backend.new_client(self._timeout)
        with backend_errors("autocomplete", QueryError, prefix):
            response = client.query(
                TableName=self._table_name,
                KeyConditionExpression=condition,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ScanIndexForward=True,
                Limit=AUTOCOMPLETE_LIMIT,
            )

        states = self._decode("autocomplete", response.get("Items", []))
        return [s for s in states if s.name.startswith(prefix)]

    def _collect(self, operation: str, subject: str = "", **query: Any) -> list[dict[str, Any]]:
        client = self._backend.new_client(self._timeout)
        with backend_errors(operation, QueryError, subject):
            return list(self._pages(client, query))

    def _pages(self, client: Any, query: dict[str, Any]) -> Iterator[dict[str, Any]]:
        kwargs = {"TableName": self._table_name, **query}
        while True:
            response = client.query(**kwargs)
            yield from response.get("Items", [])
            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                return
            kwargs["ExclusiveStartKey"] = last_key

    @staticmethod
    def _decode(operation: str, items: list[dict[str, Any]]) -> list[DomainState]:
        try:
            return [from_item(item) for item in items]
        except (KeyError, ValueError) as exc:
            raise QueryError(f"{operation}: malformed record: {exc}") from exc
