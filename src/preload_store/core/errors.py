"""Translation of botocore failures into the preload-store exception hierarchy."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    EndpointConnectionError,
    NoCredentialsError,
    NoRegionError,
    ReadTimeoutError,
)

from preload_store.exceptions import PreloadStoreError, StoreConnectionError

# Error codes that mean the session itself is unusable, not the request
_CONNECTION_ERROR_CODES = frozenset({
    "UnrecognizedClientException",
    "InvalidSignatureException",
    "MissingAuthenticationTokenException",
    "ResourceNotFoundException",
})

_CONNECTION_EXCEPTIONS = (
    EndpointConnectionError,
    ConnectTimeoutError,
    ReadTimeoutError,
    NoCredentialsError,
    NoRegionError,
)


def error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


def is_connection_failure(exc: Exception) -> bool:
    """True when ``exc`` means the backend is unreachable or misconfigured."""
    if isinstance(exc, _CONNECTION_EXCEPTIONS):
        return True
    return isinstance(exc, ClientError) and error_code(exc) in _CONNECTION_ERROR_CODES


@contextmanager
def backend_errors(
    operation: str,
    error_cls: type[PreloadStoreError],
    subject: str = "",
) -> Iterator[None]:
    """Re-raise backend exceptions as ``StoreConnectionError`` or ``error_cls``.

    The original exception is chained as ``__cause__``.
    """
    where = f"{operation}({subject!r})" if subject else operation
    try:
        yield
    except PreloadStoreError:
        raise
    except (ClientError, BotoCoreError) as exc:
        if is_connection_failure(exc):
            raise StoreConnectionError(f"{where}: backend unavailable: {exc}") from exc
        raise error_cls(f"{where} failed: {exc}") from exc
