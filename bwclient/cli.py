"""Command-line entry point of the bounce world client."""

from __future__ import annotations

import argparse
import os
import select
import sys
import time

from bwclient.charmap import Platform
from bwclient.client import BounceClient
from bwclient.connection import Connection, ServerError
from bwclient.display import Display
from bwclient.screen import Screen
from bwclient.shapes import ShapeBufferError

try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None

VERSION = "2.0.0"
PROTOCOL = "n1:"
MAX_ENDPOINT = 59
MAX_NAME = 8

_CLEAR = "\x1b[2J"
_HOME = "\x1b[H"


def normalize_endpoint(text: str) -> str:
    """Turn the user's endpoint input into a device URL like ``n1:tcp://host:port``."""
    text = text.strip()[:MAX_ENDPOINT]
    if text[:3].lower() != "tcp":
        text = "tcp://" + text
    return PROTOCOL + text


def read_name(text: str) -> str:
    """Return the player name: printable characters only, at most eight."""
    return "".join(c for c in text.rstrip("\r\n") if c.isprintable())[:MAX_NAME]


class _KeyReader:
    """Non-blocking single-key reader for the controlling terminal."""

    def __init__(self) -> None:
        self._fd: int | None = None
        self._saved = None

    def __enter__(self) -> "_KeyReader":
        if msvcrt is None and termios is not None:
            try:
                fd = sys.stdin.fileno()
            except (AttributeError, OSError, ValueError):
                return self
            if os.isatty(fd):
                self._fd = fd
                self._saved = termios.tcgetattr(fd)
                tty.setcbreak(fd)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved is not None and self._fd is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved)

    def read(self) -> str | None:
        if msvcrt is not None:
            if not msvcrt.kbhit():
                return None
            key = msvcrt.getwch()
            if key in ("\x00", "\xe0"):
                msvcrt.getwch()
                return None
            return key
        if self._fd is None:
            return None
        ready, _, _ = select.select([self._fd], [], [], 0)
        if not ready:
            return None
        data = os.read(self._fd, 1)
        if not data:
            return "q"
        return data.decode("latin-1")


def _write_screen(text: str) -> None:
    sys.stdout.write(_HOME + text + "\n")
    sys.stdout.flush()


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bwclient", description="Bounce world client.")
    parser.add_argument("url", nargs="?", help="server endpoint, e.g. tcp://host:port")
    parser.add_argument("--name", help="your name (max 8 characters)")
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=Platform.TERMINAL.value,
        help="character set to draw with",
    )
    parser.add_argument("--timeout", type=float, default=None, help="socket timeout in seconds")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)

    print(f"Welcome to Bouncy World Client, version {VERSION}")
    url = args.url if args.url is not None else input("Bounce Server URL: > ")
    name = read_name(args.name if args.name is not None else input("Your name (max 8): > "))
    platform = Platform(args.platform)

    try:
        with Connection(normalize_endpoint(url), args.timeout) as connection, _KeyReader() as keys:
            sys.stdout.write(_CLEAR)
            display = Display(Screen(), platform)
            client = BounceClient(connection, name, platform, display, keys.read, time.sleep)
            client.on_render = _write_screen
            client.fetch_shapes()
            client.add_client()
            client.wait_for_key()
            client.fetch_world_state()
            client.run()
    except (ServerError, ShapeBufferError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())