# tevremote

A small client that remotely controls a running tev image viewer over TCP.
By default it connects to `127.0.0.1:14158`. Messages go one way only: the
client sends commands and never reads a reply. Calls block, and a `Client`
is not thread-safe.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Usage

```python
from tevremote.client import Client
from tevremote.vg import VgCommand, Pos, Size, Color, Winding

with Client() as client:  # connect() on enter, disconnect() on exit
    client.open_image("/path/to/image.exr")
    client.reload_image("/path/to/image.exr")

    # Create a 2x1 RGB image and fill it with data in one step
    client.create_image_with_data(
        "generated", 2, 1, 3, [1.0, 0.0, 0.0, 0.0, 1.0, 0.0]
    )

    # Draw vector graphics on top of it
    client.vector_graphics("generated", [
        VgCommand.begin_path(),
        VgCommand.rect(Pos(0, 0), Size(1, 1)),
        VgCommand.path_winding(Winding.CLOCKWISE),
        VgCommand.stroke_color(Color(1, 1, 0, 1)),
        VgCommand.stroke(),
    ])

    client.close_image("generated")
```

`Client(hostname="127.0.0.1", port=14158)` does not connect by itself. Call
`connect()` (it does nothing if already connected) or use the client as a
context manager. `is_connected()`, `hostname` and `port` report the state and
settings. A port outside 0–65535 raises `ValueError`.

### Client methods

- `open_image(image_path, channel_selector="", grab_focus=True)`
- `reload_image(image_name, grab_focus=True)`
- `close_image(image_name)`
- `create_image(image_name, width, height, channel_count, channel_names=None, grab_focus=True)`
  creates an empty image. Channel names default to `R`, `G`, `B`, `A`. With
  more than four channels, names must be given.
- `update_image(image_name, x, y, width, height, channel_count, image_data, channel_names=None, channel_offsets=None, channel_strides=None, grab_focus=True)`
  fills a region with float data. Offsets and strides count floats, not bytes.
  They default to `0, 1, 2, 3` and to the channel count. The length of
  `image_data` must equal the largest `offset + (width*height - 1) * stride + 1`
  over the channels.
- `create_image_with_data(image_name, width, height, channel_count, image_data, grab_focus=True)`
  calls `create_image` and then `update_image` with tightly packed data.
- `vector_graphics(image_name, commands, append=True, grab_focus=True)`
  draws a sequence of `VgCommand`s.

### Errors

Failures raise exceptions:

- `tevremote.client.NotConnectedError` when a command is sent before connecting.
- `tevremote.client.TevSocketError` when resolving, connecting, sending or
  closing fails. Both of these derive from `tevremote.client.TevError`.
- `tevremote.protocol.ArgumentError`, a `ValueError`, when the image arguments
  are inconsistent. Examples are a zero width or height, zero channels, more
  than four channels without names, offsets or strides, fewer names, offsets or
  strides than channels, values that do not fit the wire integer sizes, or a
  data length that does not match the offsets and strides.

### Vector graphics

`tevremote.vg` provides `VgCommand`, with one static constructor per command:
`save`, `restore`, `fill_color`, `fill`, `stroke_color`, `stroke`,
`begin_path`, `close_path`, `path_winding`, `move_to`, `line_to`, `arc_to`,
`arc`, `bezier_to`, `circle`, `ellipse`, `quad_to`, `rect`, `rounded_rect` and
`rounded_rect_varying`. The module also provides the value types `Pos`, `Size`
and `Color`, and the enums `CommandType` and `Winding`. A command holds at most
`VgCommand.MAX_PAYLOAD` (8) floats. A longer payload raises `ValueError`.

### Building messages without a socket

`tevremote.protocol` has the encoders that the client uses. They return the
complete framed message as `bytes`: `encode_open_image`, `encode_reload_image`,
`encode_close_image`, `encode_create_image`, `encode_update_image` and
`encode_vector_graphics`. `frame(header, extra=b"")` adds the little-endian
32-bit total length prefix. The prefix counts its own four bytes.
`PacketType` lists the message type bytes.

## Example command

```
tevremote-example [--hostname HOST] [--port PORT] [--directory DIR] [--delay SECONDS]
```

The command writes checkerboard images to `test1.pfm` and `test2.pfm` in
`DIR`, which defaults to the current directory, and opens both in tev. It then
overwrites `test1.pfm` with a UV gradient, reloads it and closes it. Last, it
creates a 2048x1024 gradient image named `test3` from memory and disconnects.
It waits `--delay` seconds (default 1) between steps. A failed step prints
`Failed: ...` and the command carries on. Start tev before you run it.

The same module provides `Image.checkerboard`, `Image.uv_gradient` and
`write_pfm(image, path)`. `write_pfm` writes 1- and 3-channel images as
little-endian PFM and silently skips other channel counts.

## What this package does not do

It is only a sender. It does not display images. It does not receive or
check any answer from tev, so a successful call only means that the bytes
were sent. It does not start the viewer.