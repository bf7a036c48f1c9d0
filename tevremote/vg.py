"""Vector graphics commands drawn by tev on top of an image."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import ClassVar, Tuple


class CommandType(IntEnum):
    """Kind of a vector graphics command, as sent on the wire."""

    INVALID = 127
    SAVE = 0
    RESTORE = 1
    FILL_COLOR = 2
    FILL = 3
    STROKE_COLOR = 4
    STROKE = 5
    BEGIN_PATH = 6
    CLOSE_PATH = 7
    PATH_WINDING = 8
    DEBUG_DUMP_PATH_CACHE = 9
    MOVE_TO = 10
    LINE_TO = 11
    ARC_TO = 12
    ARC = 13
    BEZIER_TO = 14
    CIRCLE = 15
    ELLIPSE = 16
    QUAD_TO = 17
    RECT = 18
    ROUNDED_RECT = 19
    ROUNDED_RECT_VARYING = 20


class Winding(IntEnum):
    """Direction of a path."""

    COUNTER_CLOCKWISE = 1
    CLOCKWISE = 2


@dataclass(frozen=True)
class Pos:
    """A point in image space."""

    x: float
    y: float


@dataclass(frozen=True)
class Size:
    """A width and a height."""

    width: float
    height: float


@dataclass(frozen=True)
class Color:
    """An RGBA colour."""

    r: float
    g: float
    b: float
    a: float


@dataclass(frozen=True)
class VgCommand:
    """A single vector graphics command with up to ``MAX_PAYLOAD`` floats."""

    MAX_PAYLOAD: ClassVar[int] = 8

    type: CommandType = CommandType.INVALID
    data: Tuple[float, ...] = field(default=())

    def __post_init__(self) -> None:
        values = tuple(float(value) for value in self.data)
        if len(values) > self.MAX_PAYLOAD:
            raise ValueError(
                f"Payload too large: {len(values)} values, at most {self.MAX_PAYLOAD} allowed."
            )
        object.__setattr__(self, "type", CommandType(self.type))
        object.__setattr__(self, "data", values)

    @staticmethod
    def save() -> "VgCommand":
        return VgCommand(CommandType.SAVE)

    @staticmethod
    def restore() -> "VgCommand":
        return VgCommand(CommandType.RESTORE)

    @staticmethod
    def fill_color(color: Color) -> "VgCommand":
        return VgCommand(CommandType.FILL_COLOR, (color.r, color.g, color.b, color.a))

    @staticmethod
    def fill() -> "VgCommand":
        return VgCommand(CommandType.FILL)

    @staticmethod
    def stroke_color(color: Color) -> "VgCommand":
        return VgCommand(CommandType.STROKE_COLOR, (color.r, color.g, color.b, color.a))

    @staticmethod
    def stroke() -> "VgCommand":
        return VgCommand(CommandType.STROKE)

    @staticmethod
    def begin_path() -> "VgCommand":
        return VgCommand(CommandType.BEGIN_PATH)

    @staticmethod
    def close_path() -> "VgCommand":
        return VgCommand(CommandType.CLOSE_PATH)

    @staticmethod
    def path_winding(winding: Winding) -> "VgCommand":
        return VgCommand(CommandType.PATH_WINDING, (float(int(winding)),))

    @staticmethod
    def move_to(p: Pos) -> "VgCommand":
        return VgCommand(CommandType.MOVE_TO, (p.x, p.y))

    @staticmethod
    def line_to(p: Pos) -> "VgCommand":
        return VgCommand(CommandType.LINE_TO, (p.x, p.y))

    @staticmethod
    def arc_to(p1: Pos, p2: Pos, radius: float) -> "VgCommand":
        return VgCommand(CommandType.ARC_TO, (p1.x, p1.y, p2.x, p2.y, radius))

    @staticmethod
    def arc(
        center: Pos, radius: float, angle_begin: float, angle_end: float, winding: Winding
    ) -> "VgCommand":
        return VgCommand(
            CommandType.ARC,
            (center.x, center.y, radius, angle_begin, angle_end, float(int(winding))),
        )

    @staticmethod
    def bezier_to(c1: Pos, c2: Pos, p: Pos) -> "VgCommand":
        return VgCommand(CommandType.BEZIER_TO, (c1.x, c1.y, c2.x, c2.y, p.x, p.y))

    @staticmethod
    def circle(center: Pos, radius: float) -> "VgCommand":
        return VgCommand(CommandType.CIRCLE, (center.x, center.y, radius))

    @staticmethod
    def ellipse(center: Pos, radius: Size) -> "VgCommand":
        return VgCommand(
            CommandType.ELLIPSE, (center.x, center.y, radius.width, radius.height)
        )

    @staticmethod
    def quad_to(c: Pos, p: Pos) -> "VgCommand":
        return VgCommand(CommandType.QUAD_TO, (c.x, c.y, p.x, p.y))

    @staticmethod
    def rect(p: Pos, size: Size) -> "VgCommand":
        return VgCommand(CommandType.RECT, (p.x, p.y, size.width, size.height))

    @staticmethod
    def rounded_rect(p: Pos, size: Size, radius: float) -> "VgCommand":
        return VgCommand(
            CommandType.ROUNDED_RECT, (p.x, p.y, size.width, size.height, radius)
        )

    @staticmethod
    def rounded_rect_varying(
        p: Pos,
        size: Size,
        radius_top_left: float,
        radius_top_right: float,
        radius_bottom_right: float,
        radius_bottom_left: float,
    ) -> "VgCommand":
        return VgCommand(
            CommandType.ROUNDED_RECT_VARYING,
            (
                p.x,
                p.y,
                size.width,
                size.height,
                radius_top_left,
                radius_top_right,
                radius_bottom_right,
                radius_bottom_left,
            ),
        )