"""Encoding of the messages sent to a tev server."""

from __future__ import annotations

import os
import struct
import sys
from array import array
from enum import IntEnum
from typing import Iterable, Optional, Sequence, Union

from tevremote.vg import VgCommand

_UINT32_MAX = 2**32 - 1
_UINT64_MAX = 2**64 - 1
_DEFAULT_CHANNEL_NAMES = ("R", "G", "B", "A")

StrPath = Union[str, bytes, "os.PathLike[str]", "os.PathLike[bytes]"]


class PacketType(IntEnum):
    """Type byte that starts every message."""

    OPEN_IMAGE = 0
    RELOAD_IMAGE = 1
    CLOSE_IMAGE = 2
    UPDATE_IMAGE = 3
    CREATE_IMAGE = 4
    UPDATE_IMAGE_V2 = 5
    UPDATE_IMAGE_V3 = 6
    OPEN_IMAGE_V2 = 7
    VECTOR_GRAPHICS = 8


class ArgumentError(ValueError):
    """Raised when the arguments of a request are inconsistent."""


def _type(packet: PacketType) -> bytes:
    return struct.pack("<B", int(packet))


def _flag(value: bool) -> bytes:
    """Encode a boolean; the wire format uses 0 for true and 1 for false."""
    encoded = 0 if bool(value) else 1
    return struct.pack("<B", encoded)


def _string(text: StrPath) -> bytes:
    value = os.fspath(text)
    raw = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return raw.split(b"\x00", 1)[0] + b"\x00"


def _u32(value: int, what: str) -> bytes:
    value = int(value)
    if not 0 <= value <= _UINT32_MAX:
        raise ArgumentError(f"{what} must fit in an unsigned 32-bit integer.")
    return struct.pack("<I", value)


def _u64(value: int, what: str) -> bytes:
    value = int(value)
    if not 0 <= value <= _UINT64_MAX:
        raise ArgumentError(f"{what} must fit in an unsigned 64-bit integer.")
    return struct.pack("<Q", value)


def _floats(values: Iterable[float]) -> array:
    data = array("f", values)
    if sys.byteorder == "big":
        data.byteswap()
    return data


def _channel_list(values: Optional[Sequence], default: Sequence, count: int, what: str) -> list:
    chosen = list(default if values is None else values)
    if len(chosen) < count:
        raise ArgumentError(f"Expected {count} channel {what}, got {len(chosen)}.")
    return chosen[:count]


def frame(header: bytes, extra: bytes = b"") -> bytes:
    """Prefix a message with its total length, including the 4-byte prefix."""
    total = 4 + len(header) + len(extra)
    if total > _UINT32_MAX:
        raise ArgumentError("Message is too large.")
    return struct.pack("<I", total) + bytes(header) + bytes(extra)


def encode_open_image(
    image_path: StrPath, channel_selector: str = "", grab_focus: bool = True
) -> bytes:
    """Message asking tev to open an image file."""
    header = (
        _type(PacketType.OPEN_IMAGE_V2)
        + _flag(grab_focus)
        + _string(image_path)
        + _string(channel_selector)
    )
    return frame(header)


def encode_reload_image(image_name: StrPath, grab_focus: bool = True) -> bytes:
    """Message asking tev to reload an image."""
    header = _type(PacketType.RELOAD_IMAGE) + _flag(grab_focus) + _string(image_name)
    return frame(header)


def encode_close_image(image_name: StrPath) -> bytes:
    """Message asking tev to close an image."""
    return frame(_type(PacketType.CLOSE_IMAGE) + _string(image_name))


def encode_create_image(
    image_name: StrPath,
    width: int,
    height: int,
    channel_count: int,
    channel_names: Optional[Sequence[str]] = None,
    grab_focus: bool = True,
) -> bytes:
    """Message asking tev to create an empty image."""
    if width == 0 or height == 0:
        raise ArgumentError("Image width and height must be greater than 0.")
    if channel_count == 0:
        raise ArgumentError("Image must have at least one channel.")
    if channel_count > 4 and channel_names is None:
        raise ArgumentError(
            "Channel names cannot be inferred for images with more than 4 channels."
        )
    names = _channel_list(channel_names, _DEFAULT_CHANNEL_NAMES, channel_count, "names")

    parts = [
        _type(PacketType.CREATE_IMAGE),
        _flag(grab_focus),
        _string(image_name),
        _u32(width, "Width"),
        _u32(height, "Height"),
        _u32(channel_count, "Channel count"),
    ]
    parts.extend(_string(name) for name in names)
    return frame(b"".join(parts))


def encode_update_image(
    image_name: StrPath,
    x: int,
    y: int,
    width: int,
    height: int,
    channel_count: int,
    channel_names: Optional[Sequence[str]],
    channel_offsets: Optional[Sequence[int]],
    channel_strides: Optional[Sequence[int]],
    image_data: Iterable[float],
    grab_focus: bool = True,
) -> bytes:
    """Message updating a region of an image with float pixel data.

    Offsets and strides count floats, not bytes. Missing names, offsets and
    strides default to R, G, B, A / 0, 1, 2, 3 / the channel count.
    """
    if channel_count == 0:
        raise ArgumentError("Image must have at least one channel.")
    if channel_count > 4 and (
        channel_names is None or channel_offsets is None or channel_strides is None
    ):
        raise ArgumentError(
            "Channel names/offsets/strides cannot be inferred for images with more than 4 channels."
        )

    names = _channel_list(channel_names, _DEFAULT_CHANNEL_NAMES, channel_count, "names")
    offsets = _channel_list(channel_offsets, range(4), channel_count, "offsets")
    strides = _channel_list(
        channel_strides, [channel_count] * 4, channel_count, "strides"
    )

    parts = [
        _type(PacketType.UPDATE_IMAGE_V3),
        _flag(grab_focus),
        _string(image_name),
        _u32(channel_count, "Channel count"),
    ]
    parts.extend(_string(name) for name in names)
    parts.extend(
        (_u32(x, "X"), _u32(y, "Y"), _u32(width, "Width"), _u32(height, "Height"))
    )
    parts.extend(_u64(offset, "Channel offset") for offset in offsets)
    parts.extend(_u64(stride, "Channel stride") for stride in strides)

    pixel_count = int(width) * int(height)
    expected = max(
        int(offset) + (pixel_count - 1) * int(stride) + 1
        for offset, stride in zip(offsets, strides)
    )
    data = _floats(image_data)
    if len(data) != expected:
        raise ArgumentError(
            "Image data size does not match specified dimensions, offset, and stride. "
            f"(Expected: {expected})"
        )
    return frame(b"".join(parts), data.tobytes())


def _encode_command(command: VgCommand) -> bytes:
    return struct.pack("<b", int(command.type)) + _floats(command.data).tobytes()


def encode_vector_graphics(
    image_name: StrPath,
    commands: Iterable[VgCommand],
    append: bool = True,
    grab_focus: bool = True,
) -> bytes:
    """Message drawing vector graphics on top of an image."""
    commands = list(commands)
    parts = [
        _type(PacketType.VECTOR_GRAPHICS),
        _flag(grab_focus),
        _string(image_name),
        _flag(append),
        _u32(len(commands), "Command count"),
    ]
    parts.extend(_encode_command(command) for command in commands)
    return frame(b"".join(parts))