"""World state, frame and status data sent by the bounce server."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum, IntFlag

CLIENT_NAME_WIDTH = 8

# width, height, body count, five body sizes, clients, frozen, wrapped
_WORLD_FORMAT = struct.Struct("<HHH5BBBB")
WORLD_STATE_SIZE = _WORLD_FORMAT.size

_FRAME_HEADER = 3
_PLACEMENT_SIZE = 3


class AppStatus(IntFlag):
    """Flags in the status byte of each frame."""

    NONE = 0
    CLIENT_CHANGE = 1
    OBJECT_CHANGE = 2
    FROZEN_TOGGLE = 4
    CLIENT_CMD = 8
    COLLISION = 32


class ClientCommand(IntEnum):
    """Commands the server can queue for a client."""

    ENABLE_DARK_MODE = 1
    DISABLE_DARK_MODE = 2
    ENABLE_WHO = 3
    DISABLE_WHO = 4
    ENABLE_BROADCAST = 5
    DISABLE_BROADCAST = 6
    ENABLE_INFO = 7
    DISABLE_INFO = 8


@dataclass(frozen=True)
class WorldState:
    """Summary of the world: its size, bodies and clients."""

    width: int
    height: int
    body_count: int
    bodies: tuple[int, int, int, int, int]
    num_clients: int
    is_frozen: bool
    is_wrapped: bool

    @classmethod
    def from_bytes(cls, data: bytes) -> "WorldState":
        """Decode the 14-byte little-endian world state record."""
        if len(data) < WORLD_STATE_SIZE:
            raise ValueError(f"world state needs {WORLD_STATE_SIZE} bytes, got {len(data)}")
        width, height, body_count, *rest = _WORLD_FORMAT.unpack_from(data)
        bodies = tuple(rest[:5])
        num_clients, frozen, wrapped = rest[5:]
        return cls(width, height, body_count, bodies, num_clients, bool(frozen), bool(wrapped))


@dataclass(frozen=True)
class ShapePlacement:
    """A shape to draw centred at (x, y) in screen coordinates."""

    shape_id: int
    x: int
    y: int


@dataclass(frozen=True)
class Frame:
    """One simulation step as seen by this client."""

    step: int
    status: AppStatus
    placements: tuple[ShapePlacement, ...]


def _signed(byte: int) -> int:
    return byte - 256 if byte > 127 else byte


def parse_frame(data: bytes) -> Frame:
    """Decode a client state frame: step, status, count, then (id, x, y) triples.

    Bytes the server did not send read as zero.
    """
    count = data[2] if len(data) > 2 else 0
    needed = _FRAME_HEADER + count * _PLACEMENT_SIZE
    buf = bytes(data) + bytes(max(0, needed - len(data)))
    step = buf[0]
    status = AppStatus(buf[1])
    placements = tuple(
        ShapePlacement(buf[pos], _signed(buf[pos + 1]), _signed(buf[pos + 2]))
        for pos in range(_FRAME_HEADER, needed, _PLACEMENT_SIZE)
    )
    return Frame(step, status, placements)


def parse_client_names(data: bytes) -> list[str]:
    """Split the server's list of space-padded 8-character client names."""
    text = bytes(data).rstrip(b"\x00").decode("latin-1")
    return [
        text[start:start + CLIENT_NAME_WIDTH].ljust(CLIENT_NAME_WIDTH)
        for start in range(0, len(text), CLIENT_NAME_WIDTH)
    ]