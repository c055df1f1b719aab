import pytest

from bwclient.charmap import Platform, convert_chars
from bwclient.shapes import (
    MAX_SHAPES,
    SHAPES_BUFFER_SIZE,
    Shape,
    ShapeBufferError,
    parse_shapes,
    shape_grid_position,
)


def _record(shape_id: int, rows: list[str]) -> bytes:
    width = len(rows)
    return bytes([shape_id, width]) + "".join(rows).encode("latin-1")


def test_parse_single_shape_converts_characters():
    raw_rows = ["r)", "L!"]
    shapes = parse_shapes(_record(4, raw_rows), 1)
    assert len(shapes) == 1
    shape = shapes[0]
    assert shape.shape_id == 4
    assert shape.width == 2
    assert shape.data == convert_chars("r)L!", Platform.TERMINAL)


def test_parse_uses_platform_mapping():
    data = _record(1, ["ab", "cd"])
    shape = parse_shapes(data, 1, Platform.ATARI)[0]
    assert shape.data == convert_chars(b"abcd", Platform.ATARI)


def test_parse_multiple_shapes_in_order():
    data = _record(1, ["o"]) + _record(2, ["oo", "oo"]) + _record(3, ["ooo", "ooo", "ooo"])
    shapes = parse_shapes(data, 3)
    assert [s.shape_id for s in shapes] == [1, 2, 3]
    assert [s.width for s in shapes] == [1, 2, 3]
    assert all(len(s.data) == s.width * s.width for s in shapes)


def test_parse_ignores_trailing_bytes():
    data = _record(9, ["o"]) + b"\x00\x00\x00"
    assert parse_shapes(data, 1) == [Shape(9, 1, "o")]


def test_parse_zero_count_is_empty():
    assert parse_shapes(b"", 0) == []


def test_rows_splits_by_width():
    shape = Shape(1, 3, "abcdefghi")
    assert shape.rows() == ["abc", "def", "ghi"]


def test_rows_round_trip():
    rows = ["o o", " o ", "o o"]
    shape = parse_shapes(_record(2, rows), 1)[0]
    assert shape.rows() == rows


def test_buffer_exactly_full_is_accepted():
    data = _record(1, ["o" * 16] * 16) + _record(2, ["o" * 16] * 16)
    shapes = parse_shapes(data, 2)
    assert sum(len(s.data) for s in shapes) == SHAPES_BUFFER_SIZE


def test_buffer_overflow_raises():
    data = _record(1, ["o" * 16] * 16) + _record(2, ["o" * 16] * 16) + _record(3, ["o"])
    with pytest.raises(ShapeBufferError):
        parse_shapes(data, 3)


def test_too_many_shapes_raises():
    data = _record(1, ["o"]) * (MAX_SHAPES + 1)
    with pytest.raises(ShapeBufferError):
        parse_shapes(data, MAX_SHAPES + 1)


def test_truncated_data_raises():
    data = _record(1, ["oo", "oo"])[:-1]
    with pytest.raises(ValueError):
        parse_shapes(data, 1)


def test_missing_record_raises():
    with pytest.raises(ValueError):
        parse_shapes(_record(1, ["o"]), 2)


def test_grid_first_position():
    assert shape_grid_position(0) == (0, 3)


def test_grid_positions_within_row_step_evenly():
    positions = [shape_grid_position(i) for i in range(7)]
    assert len({y for _, y in positions}) == 1
    xs = [x for x, _ in positions]
    assert all(b - a == xs[1] - xs[0] for a, b in zip(xs, xs[1:]))


def test_grid_wraps_to_next_row():
    first_x, first_y = shape_grid_position(0)
    next_x, next_y = shape_grid_position(7)
    assert next_x == first_x
    assert next_y > first_y


def test_grid_negative_index_raises():
    with pytest.raises(ValueError):
        shape_grid_position(-1)