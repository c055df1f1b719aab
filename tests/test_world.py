import struct

import pytest

from bwclient.world import (
    AppStatus,
    ClientCommand,
    Frame,
    ShapePlacement,
    WorldState,
    parse_client_names,
    parse_frame,
)


def _world_bytes(width=320, height=176, body_count=7, bodies=(1, 2, 3, 0, 1),
                 clients=2, frozen=0, wrapped=1):
    return struct.pack("<HHH5BBBB", width, height, body_count, *bodies, clients, frozen, wrapped)


@pytest.mark.parametrize(
    "byte, flag",
    [
        (1, AppStatus.CLIENT_CHANGE),
        (2, AppStatus.OBJECT_CHANGE),
        (4, AppStatus.FROZEN_TOGGLE),
        (8, AppStatus.CLIENT_CMD),
        (32, AppStatus.COLLISION),
    ],
)
def test_status_byte_decodes_to_protocol_flag(byte, flag):
    frame = parse_frame(bytes([0, byte, 0]))
    assert frame.status == flag


def test_status_combined_flags():
    status = AppStatus(1 | 32)
    assert AppStatus.CLIENT_CHANGE in status
    assert AppStatus.COLLISION in status
    assert AppStatus.FROZEN_TOGGLE not in status


def test_client_command_values():
    assert ClientCommand(1) is ClientCommand.ENABLE_DARK_MODE
    assert ClientCommand(8) is ClientCommand.DISABLE_INFO


def test_world_state_decodes_fields():
    state = WorldState.from_bytes(_world_bytes())
    assert state == WorldState(320, 176, 7, (1, 2, 3, 0, 1), 2, False, True)


def test_world_state_frozen_flag():
    state = WorldState.from_bytes(_world_bytes(frozen=1, wrapped=0))
    assert state.is_frozen is True
    assert state.is_wrapped is False


def test_world_state_record_is_fourteen_bytes():
    assert len(_world_bytes()) == 14
    state = WorldState.from_bytes(_world_bytes() + b"\xff\xff")
    assert state.width == 320


def test_world_state_short_data_raises():
    with pytest.raises(ValueError):
        WorldState.from_bytes(_world_bytes()[:13])


def test_parse_frame_reads_placements():
    data = bytes([5, 0, 2, 1, 10, 12, 3, 20, 4])
    frame = parse_frame(data)
    assert frame == Frame(5, AppStatus.NONE, (ShapePlacement(1, 10, 12), ShapePlacement(3, 20, 4)))


def test_parse_frame_signed_coordinates():
    data = bytes([0, 0, 1, 2, 0xFF, 0xFE])
    placement = parse_frame(data).placements[0]
    assert (placement.x, placement.y) == (-1, -2)


def test_parse_frame_status():
    frame = parse_frame(bytes([9, 8 | 32, 0]))
    assert frame.step == 9
    assert frame.status == AppStatus.CLIENT_CMD | AppStatus.COLLISION
    assert frame.placements == ()


def test_parse_frame_missing_bytes_read_as_zero():
    frame = parse_frame(bytes([7, 0, 1, 4]))
    assert frame.placements == (ShapePlacement(4, 0, 0),)


def test_parse_frame_count_matches_placements():
    count = 20
    data = bytes([1, 0, count]) + bytes(range(count * 3))
    assert len(parse_frame(data).placements) == count


def test_parse_client_names_splits_padded_names():
    data = b"alice   bob     " + b"\x00" * 10
    assert parse_client_names(data) == ["alice   ", "bob     "]


def test_parse_client_names_pads_last_name():
    names = parse_client_names(b"carol   dan")
    assert names[-1] == "dan     "
    assert all(len(name) == 8 for name in names)


def test_parse_client_names_empty():
    assert parse_client_names(b"\x00" * 16) == []