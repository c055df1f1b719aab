"""The bounce world client: talks to the server and drives the display."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence

from bwclient.charmap import Platform
from bwclient.connection import Connection, ServerError, build_client_data
from bwclient.display import Display, ViewState
from bwclient.screen import SCREEN_HEIGHT, SCREEN_WIDTH
from bwclient.shapes import Shape, parse_shapes, shape_grid_position
from bwclient.world import (
    WORLD_STATE_SIZE,
    AppStatus,
    ClientCommand,
    Frame,
    WorldState,
    parse_client_names,
    parse_frame,
)

APP_DATA_SIZE = 256
CLIENTS_BUFFER_SIZE = 512
BROADCAST_SIZE = 119
KEY_POLL_INTERVAL = 20 / 60

_SIMPLE_COMMANDS = {"+": "x-inc", "-": "x-dec", "f": "x-freeze", "r": "x-reset"}
_BODY_KEYS = ("1", "2", "3", "4", "5")
_EFFECT_PLATFORMS = frozenset({Platform.ATARI, Platform.PMD85})
_STEP_UNSET = 0xFF
_EMPTY_WORLD = WorldState(0, 0, 0, (0, 0, 0, 0, 0), 0, False, False)
_WORLD_CHANGES = AppStatus.CLIENT_CHANGE | AppStatus.FROZEN_TOGGLE | AppStatus.OBJECT_CHANGE


def _no_key() -> str | None:
    return None


class BounceClient:
    """A registered client of the bounce world server."""

    def __init__(
        self,
        connection: Connection,
        name: str,
        platform: Platform = Platform.TERMINAL,
        display: Display | None = None,
        read_key: Callable[[], str | None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.connection = connection
        self.name = name
        self.platform = platform
        self.display = display
        self.read_key = read_key or _no_key
        self.sleep = sleep
        self.view = ViewState()
        self.world = _EMPTY_WORLD
        self.shapes: list[Shape] = []
        self.clients: list[str] = []
        self.message = ""
        self.client_id: int | None = None
        self.current_step = _STEP_UNSET
        self.is_running = True
        self.collisions = 0
        self.on_render: Callable[[str], None] | None = None

    # -- helpers -----------------------------------------------------------

    def _screen_size(self) -> tuple[int, int]:
        if self.display is None:
            return SCREEN_WIDTH, SCREEN_HEIGHT
        return self.display.screen.width, self.display.screen.height

    def _present(self) -> None:
        if self.display is not None and self.on_render is not None:
            self.on_render(self.display.screen.render())

    def _require_id(self) -> str:
        if self.client_id is None:
            raise ServerError("client is not registered")
        return str(self.client_id)

    def _do_command(self, *words: str) -> None:
        self.connection.send_command(*words)
        # The one-byte reply carries nothing but must be read to stay aligned.
        self.connection.read_wait(1)
        self.fetch_world_state()
        self.view.info_display_count = 0

    def _toggle_info(self) -> None:
        self.view.is_showing_info = not self.view.is_showing_info
        if not self.view.is_showing_broadcast:
            self.view.info_display_count = 0

    def _draw_shape_preview(self) -> None:
        if self.display is None:
            return
        screen = self.display.screen
        screen.clear()
        screen.putsxy(0, 0, "Beginning parse of shapes data...")
        screen.putsxy(0, 1, f"Parsed shapes, count: {len(self.shapes)}")
        for index, shape in enumerate(self.shapes):
            x, y = shape_grid_position(index)
            if x + shape.width > screen.width:
                continue
            for offset, row in enumerate(shape.rows()):
                if y + offset >= screen.height:
                    break
                screen.putsxy(x, y + offset, row)
        self._present()

    def _show(self, frame: Frame) -> None:
        if self.display is None:
            return
        text = self.display.show_frame(
            frame, self.shapes, self.world, self.view, self.name, self.clients, self.message
        )
        if self.on_render is not None:
            self.on_render(text)

    # -- server requests ---------------------------------------------------

    def add_client(self) -> int:
        """Register with the server and return the client id it assigns."""
        width, height = self._screen_size()
        self.connection.send_command("x-add-client", build_client_data(self.name, width, height))
        client_id = self.connection.read_wait(1)[0]
        if client_id == 0:
            raise ServerError("bad client id")
        self.client_id = client_id
        if self.display is not None:
            screen = self.display.screen
            screen.putsxy(10, 19, "Client ID: ")
            screen.putsxy(21, 19, str(client_id))
            self._present()
        return client_id

    def fetch_shapes(self) -> list[Shape]:
        """Fetch and parse the shape definitions."""
        self.connection.send_command("x-shape-count")
        count = self.connection.read_wait(1)[0]
        self.connection.send_command("x-shape-data")
        data = bytearray(self.connection.read_min(1, APP_DATA_SIZE))
        while True:
            try:
                self.shapes = parse_shapes(bytes(data), count, self.platform)
                break
            except ValueError:
                if len(data) >= APP_DATA_SIZE:
                    raise
                data += self.connection.read_min(1, APP_DATA_SIZE - len(data))
        self._draw_shape_preview()
        return self.shapes

    def fetch_world_state(self) -> WorldState:
        self.connection.send_command("x-ws")
        self.world = WorldState.from_bytes(self.connection.read_wait(WORLD_STATE_SIZE))
        return self.world

    def fetch_clients(self) -> list[str]:
        self.connection.send_command("x-who")
        self.clients = parse_client_names(self.connection.read_min(1, CLIENTS_BUFFER_SIZE))
        return self.clients

    def fetch_broadcast(self) -> str:
        self.connection.send_command("x-msg")
        self.message = self.connection.read_min(1, BROADCAST_SIZE).decode("latin-1")
        return self.message

    def fetch_client_state(self) -> bytes:
        """Ask for this client's current frame and return the raw reply."""
        command = f"x-w {self._require_id()}".encode("latin-1")
        self.connection.send_raw(command)
        return self.connection.read_min(1, APP_DATA_SIZE)

    def fetch_commands(self) -> list[int]:
        """Fetch the commands queued for this client and apply each in turn."""
        self.connection.send_command("x-cmd-get", self._require_id())
        commands = list(self.connection.read_min(1, APP_DATA_SIZE))
        for command in commands:
            self.apply_command(command)
        return commands

    # -- events ------------------------------------------------------------

    def apply_command(self, command: int) -> None:
        """Apply one server command; unknown commands are ignored."""
        try:
            cmd = ClientCommand(command)
        except ValueError:
            return
        if cmd is ClientCommand.ENABLE_DARK_MODE:
            self.view.is_darkmode = True
        elif cmd is ClientCommand.DISABLE_DARK_MODE:
            self.view.is_darkmode = False
        elif cmd is ClientCommand.ENABLE_WHO:
            self.view.is_showing_clients = True
        elif cmd is ClientCommand.DISABLE_WHO:
            self.view.is_showing_clients = False
        elif cmd is ClientCommand.ENABLE_BROADCAST:
            self.fetch_broadcast()
            self.view.is_showing_broadcast = True
        elif cmd is ClientCommand.DISABLE_BROADCAST:
            self.fetch_broadcast()
            self.view.is_showing_broadcast = False
        elif cmd is ClientCommand.ENABLE_INFO:
            self.view.is_showing_info = False
            self._toggle_info()
        elif cmd is ClientCommand.DISABLE_INFO:
            self.view.is_showing_info = True
            self._toggle_info()

    def handle_status(self, status: int) -> None:
        """React to the status flags of a frame."""
        flags = AppStatus(status)
        if flags & _WORLD_CHANGES:
            self.fetch_world_state()
            self.view.info_display_count = 0
        if flags & AppStatus.CLIENT_CHANGE:
            self.fetch_clients()
        if flags & AppStatus.CLIENT_CMD:
            self.fetch_commands()
        if flags & AppStatus.COLLISION:
            self.collisions += 1

    def handle_key(self, key: str) -> None:
        """Act on one key press."""
        if key in _SIMPLE_COMMANDS:
            self._do_command(_SIMPLE_COMMANDS[key])
        elif key in _BODY_KEYS:
            self._do_command("x-add-body", key)
        elif key == "i":
            self._toggle_info()
        elif key == "w":
            self.view.is_showing_clients = not self.view.is_showing_clients
        elif key == "q":
            self.is_running = False
        elif self.platform in _EFFECT_PLATFORMS:
            if key == "d":
                self.view.is_darkmode = not self.view.is_darkmode
            elif key == "l":
                self.view.flash_on_collision = not self.view.flash_on_collision

    def wait_for_key(self) -> str:
        """Keep the client alive on the server until a key is pressed."""
        if self.display is not None:
            screen = self.display.screen
            screen.hline(6, 20, 28)
            screen.set_reverse(True)
            screen.putsxy(8, 21, "Press a key to continue")
            screen.set_reverse(False)
            screen.hline(6, 22, 28)
            self._present()
        while (key := self.read_key()) is None:
            self.fetch_client_state()
            self.sleep(KEY_POLL_INTERVAL)
        return key

    # -- main loop ---------------------------------------------------------

    def step(self) -> bool:
        """Run one round of the simulation loop; return True if a new frame was shown."""
        data = self.fetch_client_state()
        if len(data) == 1:
            return False
        frame = parse_frame(data)
        if frame.status:
            self.handle_status(frame.status)
        shown = False
        if frame.step != self.current_step:
            self.current_step = frame.step
            self._show(frame)
            shown = True
        key = self.read_key()
        if key:
            self.handle_key(key)
        return shown

    def run(self) -> None:
        """Run the simulation until the user quits, then deregister."""
        if self.display is not None:
            self.display.screen.clear()
        self.fetch_clients()
        while self.is_running:
            self.step()
        self.disconnect()

    def disconnect(self) -> None:
        """Tell the server this client is leaving and close the connection."""
        if self.client_id is not None:
            self.connection.send_command("close", str(self.client_id))
        self.connection.close()


__all__: Sequence[str] = ("BounceClient",)