import struct
from pathlib import Path

import pytest

from tevremote.protocol import (
    ArgumentError,
    PacketType,
    encode_close_image,
    encode_create_image,
    encode_open_image,
    encode_reload_image,
    encode_update_image,
    encode_vector_graphics,
    frame,
)
from tevremote.vg import CommandType, Pos, Size, VgCommand


class _Reader:
    def __init__(self, message):
        (self.total,) = struct.unpack_from("<I", message, 0)
        self.data = message
        self.pos = 4

    def u8(self):
        value = self.data[self.pos]
        self.pos += 1
        return value

    def i8(self):
        (value,) = struct.unpack_from("<b", self.data, self.pos)
        self.pos += 1
        return value

    def u32(self):
        (value,) = struct.unpack_from("<I", self.data, self.pos)
        self.pos += 4
        return value

    def u64(self):
        (value,) = struct.unpack_from("<Q", self.data, self.pos)
        self.pos += 8
        return value

    def string(self):
        end = self.data.index(b"\x00", self.pos)
        value = self.data[self.pos:end].decode("utf-8")
        self.pos = end + 1
        return value

    def floats(self, count):
        values = struct.unpack_from(f"<{count}f", self.data, self.pos)
        self.pos += 4 * count
        return list(values)

    def rest(self):
        return self.data[self.pos:]


def test_close_image_wire_bytes():
    assert encode_close_image("a") == b"\x07\x00\x00\x00\x02a\x00"


def test_frame_length_prefix_counts_itself():
    message = frame(b"head", b"tail")
    assert struct.unpack("<I", message[:4])[0] == len(message)
    assert message[4:] == b"headtail"


def test_open_image_fields():
    reader = _Reader(encode_open_image("/tmp/x.exr", "R", grab_focus=True))
    assert reader.total == len(reader.data)
    assert reader.u8() == PacketType.OPEN_IMAGE_V2
    assert reader.u8() == 0  # true is encoded as 0
    assert reader.string() == "/tmp/x.exr"
    assert reader.string() == "R"
    assert reader.rest() == b""


def test_grab_focus_flag_is_inverted():
    focused = encode_reload_image("img", grab_focus=True)
    unfocused = encode_reload_image("img", grab_focus=False)
    assert focused[5] == 0
    assert unfocused[5] == 1
    assert focused[4] == PacketType.RELOAD_IMAGE


def test_open_image_accepts_path_objects():
    message = encode_open_image(Path("dir") / "img.pfm")
    reader = _Reader(message)
    reader.u8()
    reader.u8()
    assert reader.string() == str(Path("dir") / "img.pfm")
    assert reader.string() == ""


def test_create_image_default_channel_names():
    reader = _Reader(encode_create_image("img", 16, 8, 2))
    assert reader.u8() == PacketType.CREATE_IMAGE
    assert reader.u8() == 0
    assert reader.string() == "img"
    assert (reader.u32(), reader.u32(), reader.u32()) == (16, 8, 2)
    assert [reader.string(), reader.string()] == ["R", "G"]
    assert reader.rest() == b""


def test_create_image_custom_channel_names():
    names = ["a", "b", "c", "d", "e"]
    reader = _Reader(encode_create_image("img", 1, 1, 5, names, grab_focus=False))
    reader.u8()
    assert reader.u8() == 1
    reader.string()
    reader.u32(), reader.u32()
    assert reader.u32() == 5
    assert [reader.string() for _ in names] == names


@pytest.mark.parametrize(
    "width, height, channels, names",
    [(0, 4, 1, None), (4, 0, 1, None), (4, 4, 0, None), (4, 4, 5, None)],
)
def test_create_image_argument_errors(width, height, channels, names):
    with pytest.raises(ArgumentError):
        encode_create_image("img", width, height, channels, names)


def test_update_image_defaults_round_trip():
    data = [float(i) for i in range(2 * 3 * 3)]
    message = encode_update_image("img", 1, 2, 2, 3, 3, None, None, None, data)
    reader = _Reader(message)
    assert reader.total == len(message)
    assert reader.u8() == PacketType.UPDATE_IMAGE_V3
    assert reader.u8() == 0
    assert reader.string() == "img"
    assert reader.u32() == 3
    assert [reader.string() for _ in range(3)] == ["R", "G", "B"]
    assert [reader.u32() for _ in range(4)] == [1, 2, 2, 3]
    assert [reader.u64() for _ in range(3)] == [0, 1, 2]
    assert [reader.u64() for _ in range(3)] == [3, 3, 3]
    assert reader.floats(len(data)) == data
    assert reader.rest() == b""


def test_update_image_planar_layout():
    data = [float(i) for i in range(8)]
    message = encode_update_image(
        "img", 0, 0, 2, 2, 2, ["Y", "Z"], [0, 4], [1, 1], data
    )
    assert message.endswith(struct.pack("<8f", *data))
    with pytest.raises(ArgumentError, match="Expected"):
        encode_update_image("img", 0, 0, 2, 2, 2, ["Y", "Z"], [0, 4], [1, 1], data[:7])


def test_update_image_wrong_size():
    with pytest.raises(ArgumentError, match="does not match"):
        encode_update_image("img", 0, 0, 2, 2, 1, None, None, None, [0.0] * 3)


def test_update_image_zero_channels():
    with pytest.raises(ArgumentError):
        encode_update_image("img", 0, 0, 1, 1, 0, None, None, None, [])


@pytest.mark.parametrize(
    "names, offsets, strides",
    [
        (None, [0, 1, 2, 3, 4], [5] * 5),
        (list("abcde"), None, [5] * 5),
        (list("abcde"), [0, 1, 2, 3, 4], None),
    ],
)
def test_update_image_many_channels_need_layout(names, offsets, strides):
    with pytest.raises(ArgumentError):
        encode_update_image("img", 0, 0, 1, 1, 5, names, offsets, strides, [0.0] * 5)


def test_update_image_many_channels_with_layout():
    names = list("abcde")
    message = encode_update_image(
        "img", 0, 0, 1, 1, 5, names, [0, 1, 2, 3, 4], [5] * 5, [1.0] * 5
    )
    assert struct.unpack("<I", message[:4])[0] == len(message)
    assert message.endswith(struct.pack("<5f", *[1.0] * 5))


def test_vector_graphics_round_trip():
    commands = [
        VgCommand.begin_path(),
        VgCommand.rect(Pos(1.5, 2.5), Size(3.0, 4.0)),
        VgCommand.circle(Pos(0.5, 0.25), 2.0),
        VgCommand.fill(),
    ]
    message = encode_vector_graphics("img", commands, append=False, grab_focus=True)
    reader = _Reader(message)
    assert reader.total == len(message)
    assert reader.u8() == PacketType.VECTOR_GRAPHICS
    assert reader.u8() == 0
    assert reader.string() == "img"
    assert reader.u8() == 1  # append=False
    assert reader.u32() == len(commands)
    for command in commands:
        assert CommandType(reader.i8()) is command.type
        assert reader.floats(len(command.data)) == list(command.data)
    assert reader.rest() == b""


def test_vector_graphics_empty():
    reader = _Reader(encode_vector_graphics("img", iter(())))
    reader.u8()
    reader.u8()
    reader.string()
    assert reader.u8() == 0
    assert reader.u32() == 0
    assert reader.rest() == b""


def test_invalid_command_type_byte_is_signed():
    message = encode_vector_graphics("i", [VgCommand()])
    assert struct.unpack("<b", message[-1:])[0] == CommandType.INVALID