"""Local backend — an ephemeral DynamoDB Local emulator on localhost.

Each emulator gets its own port from a process-wide ``PortAllocator`` so that
stores created concurrently within one process never collide.
"""

from __future__ import annotations

import logging
import socket
import subprocess
import threading
import time
from typing import TYPE_CHECKING, Any, Callable, Optional

from preload_store.backends._client import build_client
from preload_store.exceptions import StoreConnectionError

if TYPE_CHECKING:
    from preload_store.core.config import EmulatorConfig

log = logging.getLogger(__name__)

FIRST_LOCAL_PORT = 9001

# The emulator accepts any credentials, but botocore refuses to sign without some
_LOCAL_REGION = "us-east-1"
_LOCAL_ACCESS_KEY = "local"
_LOCAL_SECRET_KEY = "local"

_SHUTDOWN_GRACE_SECONDS = 5.0
_POLL_INTERVAL = 0.1


class PortAllocator:
    """Hands out monotonically increasing ports, safe across threads.

    Lives for the whole process; ports are never returned.
    """

    def __init__(self, start: int = FIRST_LOCAL_PORT) -> None:
        self._next = start
        self._lock = threading.Lock()

    def next_port(self) -> int:
        with self._lock:
            port = self._next
            self._next += 1
        return port


# Process-wide allocator, initialised on first import
default_ports = PortAllocator()


def _split_address(address: str) -> tuple[str, int]:
    host, _, port = address.rpartition(":")
    if not host or not port.isdigit():
        raise StoreConnectionError(f"Malformed local address {address!r}, expected host:port")
    return host, int(port)


def _port_open(host: str, port: int, timeout: float) -> bool:
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


class LocalBackend:
    """Talks to a DynamoDB Local emulator at ``address`` (``host:port``).

    The client never leaves the machine.
    """

    def __init__(self, address: str) -> None:
        self.address = address

    def new_client(self, timeout: float) -> Any:
        if not self.address:
            raise StoreConnectionError("Empty address. Uninitialized local backend?")

        host, port = _split_address(self.address)
        if not _port_open(host, port, timeout):
            raise StoreConnectionError(f"Local emulator not reachable at {self.address}")

        return build_client(
            timeout=timeout,
            region=_LOCAL_REGION,
            endpoint_url=f"http://{self.address}",
            access_key=_LOCAL_ACCESS_KEY,
            secret_key=_LOCAL_SECRET_KEY,
        )


def _build_command(config: EmulatorConfig, port: int) -> list[str]:
    jar = config.jar_path
    return [
        config.java_bin,
        f"-Djava.library.path={jar.parent / 'DynamoDBLocal_lib'}",
        "-jar",
        str(jar),
        "-inMemory",
        "-port",
        str(port),
    ]


def _stop(proc: subprocess.Popen) -> None:
    if proc.poll() is not None:
        return
    proc.terminate()
    try:
        proc.wait(timeout=_SHUTDOWN_GRACE_SECONDS)
    except subprocess.TimeoutExpired:
        log.warning("Emulator pid=%d ignored SIGTERM, killing", proc.pid)
        proc.kill()
        proc.wait()


def start_local_backend(
    config: EmulatorConfig,
    ports: Optional[PortAllocator] = None,
) -> tuple[LocalBackend, Callable[[], None]]:
    """Spawn a DynamoDB Local process and wait until it accepts connections.

    Returns the backend and a ``shutdown`` callable that terminates the
    process; ``shutdown`` is safe to call more than once.  Raises
    ``StoreConnectionError`` if the process cannot be launched, exits early,
    or is not listening within ``config.startup_timeout``.
    """
    port = (ports or default_ports).next_port()
    address = f"{config.host}:{port}"
    cmd = _build_command(config, port)

    if _port_open(config.host, port, _POLL_INTERVAL):
        raise StoreConnectionError(f"Port for DynamoDB Local already in use at {address}")

    log.info("Starting DynamoDB Local on %s", address)
    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        raise StoreConnectionError(f"Could not start DynamoDB Local ({cmd[0]}): {exc}") from exc

    deadline = time.monotonic() + config.startup_timeout
    while not _port_open(config.host, port, _POLL_INTERVAL):
        if proc.poll() is not None:
            raise StoreConnectionError(
                f"DynamoDB Local exited with code {proc.returncode} before listening on {address}"
            )
        if time.monotonic() >= deadline:
            _stop(proc)
            raise StoreConnectionError(
                f"DynamoDB Local did not listen on {address} within {config.startup_timeout}s"
            )
        time.sleep(_POLL_INTERVAL)

    # Something else may have grabbed the port while the emulator died
    time.sleep(_POLL_INTERVAL)
    if proc.poll() is not None:
        raise StoreConnectionError(
            f"DynamoDB Local exited with code {proc.returncode} during startup on {address}"
        )

    log.info("DynamoDB Local ready on %s (pid=%d)", address, proc.pid)

    stopped = threading.Event()

    def shutdown() -> None:
        if stopped.is_set():
            return
        stopped.set()
        _stop(proc)
        log.info("Stopped DynamoDB Local on %s", address)

    return LocalBackend(address), shutdown
