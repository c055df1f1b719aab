"""Terminal client for a Bouncy World simulation server."""

__version__ = "2.0.0"
__all__ = [
    "broadcast",
    "charmap",
    "cli",
    "client",
    "connection",
    "display",
    "hexdump",
    "screen",
    "shapes",
    "world",
]