"""Record schema: translation between ``DomainState`` and raw DynamoDB items.

Table layout::

    kind  (partition key, S):  "DomainState"
    name  (sort key, S):       "<domain name>"

Every record shares one partition so that names sort lexicographically,
which lets prefix lookups run as a key-range query.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from preload_store.core.types import RawItem
from preload_store.models import DomainState, PreloadStatus

DOMAIN_STATE_KIND = "DomainState"

KIND_ATTR = "kind"
NAME_ATTR = "name"
STATUS_ATTR = "status"
MESSAGE_ATTR = "message"
LAST_UPDATED_ATTR = "last_updated"

BATCH_SIZE = 100  # TransactWriteItems accepts at most 100 items
AUTOCOMPLETE_LIMIT = 5
DEFAULT_TIMEOUT = 10.0

KEY_SCHEMA = [
    {"AttributeName": KIND_ATTR, "KeyType": "HASH"},
    {"AttributeName": NAME_ATTR, "KeyType": "RANGE"},
]
ATTRIBUTE_DEFINITIONS = [
    {"AttributeName": KIND_ATTR, "AttributeType": "S"},
    {"AttributeName": NAME_ATTR, "AttributeType": "S"},
]


def make_key(name: str) -> RawItem:
    """Build the primary key for a domain name."""
    return {
        KIND_ATTR: {"S": DOMAIN_STATE_KIND},
        NAME_ATTR: {"S": name},
    }


def to_item(state: DomainState) -> RawItem:
    """Encode a state as a full item (key plus value attributes)."""
    item = make_key(state.name)
    item[STATUS_ATTR] = {"S": state.status.value}
    if state.message:
        item[MESSAGE_ATTR] = {"S": state.message}
    if state.last_updated is not None:
        item[LAST_UPDATED_ATTR] = {"S": state.last_updated.isoformat()}
    return item


def name_from_key(item: dict[str, Any]) -> str:
    return item[NAME_ATTR]["S"]


def from_item(item: dict[str, Any]) -> DomainState:
    """Decode a raw item.  The name always comes from the key."""
    last_updated = item.get(LAST_UPDATED_ATTR, {}).get("S")
    return DomainState(
        name=name_from_key(item),
        status=PreloadStatus(item.get(STATUS_ATTR, {}).get("S", PreloadStatus.UNKNOWN.value)),
        message=item.get(MESSAGE_ATTR, {}).get("S", ""),
        last_updated=datetime.fromisoformat(last_updated) if last_updated else None,
    )
