# bwclient

bwclient is a terminal client for a Bouncy World server. The server runs a
shared simulation of bouncing bodies. Each connected client gets its own view
of that world. bwclient draws that view as text on a 40×24 character screen
and writes it to standard output using ANSI escape codes.

The package needs only the Python standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Running

```
bwclient [URL] [--name NAME] [--platform {atari,apple2,c64,pmd85,terminal}] [--timeout SECONDS]
bwclient --version
```

- `URL` is the server endpoint. If you leave it out, the client prompts for
  it. A plain `host:port` works: `tcp://` is added when the text does not
  start with `tcp`. The endpoint must include a port.
- `--name` is your player name. If you leave it out, the client prompts for
  it. Only printable characters are kept, and at most 8 of them.
- `--platform` picks the character set used to draw shapes and boxes. The
  default is `terminal`, which uses Unicode box-drawing and block characters.
- `--timeout` sets the socket timeout in seconds. By default there is none.

Once started, the client:

1. connects to the server,
2. downloads the shape definitions and shows a preview of them,
3. registers itself and shows the client ID it was given,
4. waits for a key press, polling the server in the meantime so that it is
   not dropped,
5. draws frames as the server sends new simulation steps, until you quit.

When you quit, the client deregisters from the server and closes the
connection. Connection and protocol errors are printed as `Error: ...`, and
the command then exits with status 1.

## Keys

Keys are read from an interactive terminal. On POSIX systems the terminal is
switched to cbreak mode while the client runs.

| Key     | Action                                            |
|---------|---------------------------------------------------|
| `+`     | speed the simulation up (`x-inc`)                 |
| `-`     | slow the simulation down (`x-dec`)                |
| `f`     | freeze or unfreeze the world (`x-freeze`)         |
| `1`–`5` | add a body of that size (`x-add-body`)            |
| `r`     | reset the world (`x-reset`)                       |
| `i`     | show or hide the info bar                         |
| `w`     | show or hide the box listing connected clients    |
| `q`     | quit and deregister from the server               |
| `d`     | toggle the dark-mode setting (`atari` and `pmd85` platforms only) |
| `l`     | toggle the flash-on-collision setting (`atari` and `pmd85` platforms only) |

The server can also send commands to a client. These switch dark mode, the
client list, the info bar or a broadcast message on and off. A broadcast
message is shown word-wrapped in a box near the top of the screen.

## What it does not do

The client keeps track of the dark-mode and flash-on-collision settings, but
drawing does not depend on them. Collisions are counted in
`BounceClient.collisions`. They produce no sound and no screen flash. Output
is always plain text with ANSI reverse video, whichever `--platform` is
chosen. The platform only changes which characters are drawn.

## Using it as a library

- `bwclient.charmap`
  - `convert_chars(data, platform)` maps the server's neutral shape characters
    to glyphs of a `Platform`.
  - `box_chars(platform)` returns that platform's `BoxChars`.
- `bwclient.hexdump.hex_dump(data)` formats bytes as a hex and ASCII dump,
  eight bytes per line.
- `bwclient.screen.Screen` is an in-memory character screen with a cursor and
  reverse video. `render()` returns the screen as text.
- `bwclient.shapes`
  - `parse_shapes(data, count, platform)` decodes shape records into `Shape`
    objects. It raises `ShapeBufferError` when they do not fit into the
    512-character store or when there are more than 50 shapes.
- `bwclient.world`
  - `parse_frame(data)` decodes a frame into a `Frame` of `ShapePlacement`s.
  - `WorldState.from_bytes(data)` decodes the 14-byte world state.
  - `parse_client_names(data)` splits the client list into names.
  - `AppStatus` and `ClientCommand` hold the protocol's flag and command values.
- `bwclient.connection`
  - `Connection` is the TCP command channel to the server, usable as a context
    manager. It raises `ServerError` on failure.
  - `parse_endpoint(url)` returns the host and port of an endpoint.
- `bwclient.broadcast.wrap_message(message, width)` word-wraps text into
  fixed-width lines.
- `bwclient.display`
  - `Display.show_frame(...)` draws a frame together with the overlays that a
    `ViewState` asks for.
- `bwclient.client.BounceClient` drives a whole session. Its `read_key` and
  `sleep` callables can be swapped out, for example in tests.
- `bwclient.cli.main(argv=None)` is the command-line entry point.