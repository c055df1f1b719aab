"""Shape definitions received from the bounce server."""

from __future__ import annotations

from dataclasses import dataclass

from bwclient.charmap import Platform, convert_chars

SHAPES_BUFFER_SIZE = 512
MAX_SHAPES = 50

# Layout of the shape preview grid shown after loading.
_GRID_COLUMNS = 7
_GRID_CELL = 6
_GRID_TOP = 3


class ShapeBufferError(Exception):
    """Raised when shape data does not fit the client's shape storage."""


@dataclass(frozen=True)
class Shape:
    """A square shape: ``width`` rows of ``width`` display characters."""

    shape_id: int
    width: int
    data: str

    def rows(self) -> list[str]:
        """Return the shape as a list of ``width`` strings."""
        if self.width == 0:
            return []
        return [self.data[start:start + self.width] for start in range(0, len(self.data), self.width)]


def parse_shapes(data: bytes, count: int, platform: Platform = Platform.TERMINAL) -> list[Shape]:
    """Parse *count* shape records of the form ``id, width, width*width chars``.

    The characters are converted to *platform* glyphs. Raises
    ShapeBufferError when the shapes need more storage than the client has,
    and ValueError when *data* ends before all records are read.
    """
    if count < 0:
        raise ValueError("shape count must not be negative")
    if count > MAX_SHAPES:
        raise ShapeBufferError(f"too many shapes: {count} (max {MAX_SHAPES})")

    shapes = []
    pos = 0
    used = 0
    for _ in range(count):
        if pos + 2 > len(data):
            raise ValueError("shape data truncated")
        shape_id, width = data[pos], data[pos + 1]
        pos += 2
        length = width * width
        if used + length > SHAPES_BUFFER_SIZE:
            raise ShapeBufferError("Insufficient buffer space")
        raw = data[pos:pos + length]
        if len(raw) < length:
            raise ValueError("shape data truncated")
        pos += length
        used += length
        shapes.append(Shape(shape_id, width, convert_chars(bytes(raw), platform)))
    return shapes


def shape_grid_position(index: int) -> tuple[int, int]:
    """Return the (x, y) screen position of shape *index* in the preview grid."""
    if index < 0:
        raise ValueError("shape index must not be negative")
    row, column = divmod(index, _GRID_COLUMNS)
    return column * _GRID_CELL, row * _GRID_CELL + _GRID_TOP