"""Production backend — the real, durable DynamoDB service."""

from __future__ import annotations

import logging
from typing import Any, Optional

from preload_store.backends._client import build_client

log = logging.getLogger(__name__)


class ProdBackend:
    """Calls out to live DynamoDB.

    An empty ``region`` defers to the standard AWS environment resolution
    (``AWS_REGION``, ``AWS_DEFAULT_REGION``, profile config).  No network
    options are layered on beyond the per-call timeout.
    """

    def __init__(
        self,
        region: str = "",
        *,
        endpoint_url: Optional[str] = None,
        profile: Optional[str] = None,
    ) -> None:
        self._region = region
        self._endpoint_url = endpoint_url
        self._profile = profile

    def new_client(self, timeout: float) -> Any:
        log.debug("Creating production DynamoDB client (region=%s)", self._region or "<env>")
        return build_client(
            timeout=timeout,
            region=self._region,
            endpoint_url=self._endpoint_url,
            profile=self._profile,
        )
