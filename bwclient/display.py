"""Rendering of frames, shapes, the client list and the info bar."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from bwclient.broadcast import draw_broadcast
from bwclient.charmap import BoxChars, Platform, box_chars
from bwclient.screen import Screen
from bwclient.shapes import Shape
from bwclient.world import CLIENT_NAME_WIDTH, Frame, WorldState

INFO_ROWS = 2
NAME_FIELD = 9

_CLIENTS_COLUMN = 29
_CLIENTS_TOP = 2
_CLIENTS_MARGIN = 4

# Key help line: (text, shown in reverse video).
_KEY_HELP = (
    ("F", True), ("rz ", False),
    ("R", True), ("st ", False),
    ("+", True), ("/", False), ("-", True), (" ", False),
    ("1", True), ("-", False), ("5", True), ("Add ", False),
    ("W", True), ("ho ", False),
    ("I", True), ("nf ", False),
    ("Q", True), ("uit ", False),
)
_DARK_KEY_HELP = (
    ("D", True), ("rk ", False),
    ("f", False), ("L", True), ("sh", False),
)


@dataclass
class ViewState:
    """What the client currently shows on screen."""

    is_darkmode: bool = True
    is_showing_info: bool = False
    is_showing_clients: bool = False
    is_showing_broadcast: bool = False
    flash_on_collision: bool = False
    info_display_count: int = 0


def format_u8(value: int) -> str:
    """Format a byte value into two character cells, left-justified."""
    if not 0 <= value <= 255:
        raise ValueError("value must be between 0 and 255")
    if value < 10:
        return f"{value} "
    tens, units = divmod(value, 10)
    return chr(ord("0") + tens) + chr(ord("0") + units)


def draw_shape(
    screen: Screen, shape: Shape, center_x: int, center_y: int, max_y: int | None = None
) -> None:
    """Draw *shape* around (center_x, center_y), clipped to the screen.

    Rows at or below *max_y* are not drawn. Spaces in the shape are skipped,
    leaving what is already on screen.
    """
    limit_y = screen.height if max_y is None else min(max_y, screen.height)
    half = shape.width >> 1
    start_x = center_x - half - 1
    start_y = center_y - half - 1
    if shape.width % 2 == 0:
        start_x += 1
        start_y += 1

    for i, row in enumerate(shape.rows()):
        y = start_y + i
        if not 0 <= y < limit_y:
            continue
        started = False
        for j, c in enumerate(row):
            x = start_x + j
            if 0 <= x < screen.width:
                if not started:
                    screen.gotoxy(x, y)
                    started = True
                if c != " ":
                    screen.putc(c)
                else:
                    screen.gotox(screen.wherex() + 1)
            elif started:
                break


def draw_clients(screen: Screen, names: Sequence[str], box: BoxChars) -> None:
    """Draw the box listing connected client names."""
    shown = min(len(names), screen.height - _CLIENTS_MARGIN)
    screen.putsxy(
        _CLIENTS_COLUMN, _CLIENTS_TOP,
        box.ulcorner + box.hline * CLIENT_NAME_WIDTH + box.urcorner,
    )
    for i, name in enumerate(names[:shown]):
        field = name.ljust(CLIENT_NAME_WIDTH)[:CLIENT_NAME_WIDTH]
        screen.putsxy(_CLIENTS_COLUMN, _CLIENTS_TOP + 1 + i, box.vline + field + box.vline)
    screen.putsxy(
        _CLIENTS_COLUMN, _CLIENTS_TOP + 1 + len(names),
        box.llcorner + box.hline * CLIENT_NAME_WIDTH + box.lrcorner,
    )


def _puts_reversed(screen: Screen, text: str) -> None:
    screen.set_reverse(True)
    screen.puts(text)
    screen.set_reverse(False)


def _draw_info(screen: Screen, name: str, world: WorldState, dark_keys: bool) -> None:
    stats_row = screen.height - INFO_ROWS
    screen.putsxy(0, stats_row, name)
    screen.puts(" " * max(0, NAME_FIELD - len(name)))

    labels = ("C", "1", "2", "3", "4", "5")
    values = (world.num_clients, *world.bodies)
    for label, value in zip(labels, values):
        _puts_reversed(screen, f"{label}:")
        screen.puts(format_u8(value))

    if world.height > 99:
        screen.putc(" ")
    size = f"{world.width}x{world.height}"
    if world.is_frozen:
        _puts_reversed(screen, size)
    else:
        screen.puts(size)

    screen.gotoxy(0, stats_row + 1)
    help_items = _KEY_HELP + (_DARK_KEY_HELP if dark_keys else ())
    for text, reverse in help_items:
        if reverse:
            _puts_reversed(screen, text)
        else:
            screen.puts(text)


def draw_info(screen: Screen, name: str, world: WorldState) -> None:
    """Draw the info bar: name, client and body counts, world size, key help."""
    _draw_info(screen, name, world, dark_keys=False)


class Display:
    """Draws simulation frames onto a screen."""

    def __init__(self, screen: Screen, platform: Platform = Platform.TERMINAL) -> None:
        self.screen = screen
        self.platform = platform
        self.box = box_chars(platform)
        screen.clear()

    def show_frame(
        self,
        frame: Frame,
        shapes,
        world: WorldState,
        view: ViewState,
        name: str,
        clients: Sequence[str] = (),
        message: str = "",
    ) -> str:
        """Draw *frame* with the overlays *view* asks for; return the screen text."""
        screen = self.screen
        playfield_rows = screen.height - INFO_ROWS if view.is_showing_info else screen.height

        if view.info_display_count < 2:
            screen.clear()
            if view.is_showing_info:
                _draw_info(screen, name, world, dark_keys=self.platform is Platform.ATARI)
            view.info_display_count += 1
        else:
            screen.clear_rows(0, playfield_rows)

        for placement in frame.placements:
            try:
                shape = shapes[placement.shape_id]
            except (IndexError, KeyError):
                continue
            draw_shape(screen, shape, placement.x, placement.y, playfield_rows)

        if view.is_showing_clients:
            draw_clients(screen, clients, self.box)
        if view.is_showing_broadcast:
            draw_broadcast(screen, message, self.box)

        return screen.render()