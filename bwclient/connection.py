"""Persistent TCP connection to the bounce world server."""

from __future__ import annotations

import re
import socket
from urllib.parse import urlsplit

CLIENT_VERSION = 2
MAX_COMMAND_LENGTH = 63

_DEVICE_PREFIX = re.compile(r"^n\d:", re.IGNORECASE)


class ServerError(Exception):
    """Raised when talking to the server fails."""


def parse_endpoint(url: str) -> tuple[str, int]:
    """Return (host, port) of a ``[nN:]tcp://host:port`` endpoint."""
    parts = urlsplit(_DEVICE_PREFIX.sub("", url.strip(), count=1))
    if parts.scheme.lower() != "tcp":
        raise ValueError(f"endpoint must use tcp: {url!r}")
    if not parts.hostname:
        raise ValueError(f"endpoint has no host: {url!r}")
    port = parts.port
    if port is None:
        raise ValueError(f"endpoint has no port: {url!r}")
    return parts.hostname, port


def build_client_data(name: str, width: int, height: int) -> str:
    """Return the ``name,version,width,height`` registration string."""
    return f"{name},{CLIENT_VERSION},{width},{height}"


class Connection:
    """A line-less command/response connection to the server."""

    def __init__(self, url: str, timeout: float | None = None) -> None:
        self.url = url
        self.host, self.port = parse_endpoint(url)
        self.timeout = timeout
        self._sock: socket.socket | None = None

    def open(self) -> None:
        try:
            self._sock = socket.create_connection((self.host, self.port), timeout=self.timeout)
        except OSError as exc:
            raise ServerError(f"connect: {exc}") from exc

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "Connection":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise ServerError("not connected")
        return self._sock

    def send_raw(self, data: bytes) -> None:
        """Send *data* as it is."""
        try:
            self._socket().sendall(data)
        except OSError as exc:
            raise ServerError(f"send_command: {exc}") from exc

    def send_command(self, *args: str) -> None:
        """Send a command made of *args* joined by single spaces."""
        if not args:
            raise ValueError("a command needs at least one word")
        command = " ".join(args).encode("latin-1")
        if len(command) > MAX_COMMAND_LENGTH:
            raise ValueError(f"command longer than {MAX_COMMAND_LENGTH} bytes")
        self.send_raw(command)

    def _recv(self, size: int) -> bytes:
        try:
            chunk = self._socket().recv(size)
        except OSError as exc:
            raise ServerError(f"read_response: {exc}") from exc
        if not chunk:
            raise ServerError("read_response: connection closed by server")
        return chunk

    def read_wait(self, length: int) -> bytes:
        """Read exactly *length* bytes."""
        if length < 0:
            raise ValueError("length must not be negative")
        buf = bytearray()
        while len(buf) < length:
            buf += self._recv(length - len(buf))
        return bytes(buf)

    def read_min(self, minimum: int, maximum: int) -> bytes:
        """Read at least *minimum* and at most *maximum* bytes."""
        if minimum < 0 or maximum < minimum:
            raise ValueError("need 0 <= minimum <= maximum")
        buf = bytearray()
        while len(buf) < minimum:
            buf += self._recv(maximum - len(buf))
        return bytes(buf)