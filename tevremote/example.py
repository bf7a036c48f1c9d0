"""Demonstration that drives a running tev viewer with generated images."""

from __future__ import annotations

import argparse
import sys
import time
from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from tevremote.client import DEFAULT_HOSTNAME, DEFAULT_PORT, Client, TevError
from tevremote.protocol import ArgumentError


@dataclass
class Image:
    """A float image with interleaved channels."""

    width: int
    height: int
    channels: int
    data: array = field(default_factory=lambda: array("f"))

    @staticmethod
    def checkerboard(width: int, height: int) -> "Image":
        """Single-channel checkerboard of 16x16 pixel tiles."""
        data = array("f")
        for y in range(height):
            data.extend(1.0 if ((x >> 4) ^ (y >> 4)) & 1 else 0.0 for x in range(width))
        return Image(width, height, 1, data)

    @staticmethod
    def uv_gradient(width: int, height: int) -> "Image":
        """Three-channel image holding x/width and y/height in red and green."""
        us = [x / float(width) for x in range(width)]
        data = array("f")
        for y in range(height):
            v = y / float(height)
            row = [0.0] * (3 * width)
            row[0::3] = us
            row[1::3] = [v] * width
            data.extend(row)
        return Image(width, height, 3, data)


def write_pfm(image: Image, path) -> None:
    """Write a 1- or 3-channel image as little-endian PFM; other images are skipped."""
    if image.channels not in (1, 3):
        return
    kind = "f" if image.channels == 1 else "F"
    header = f"P{kind}\n{image.width} {image.height}\n{-1.0:f}\n".encode("ascii")
    data = array("f", image.data)
    if sys.byteorder == "big":
        data.byteswap()
    with open(path, "wb") as handle:
        handle.write(header)
        handle.write(data.tobytes())


def _parse(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Drive tev with a few generated images.")
    parser.add_argument("--hostname", default=DEFAULT_HOSTNAME)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--directory", type=Path, default=Path.cwd(),
                        help="where the test images are written")
    parser.add_argument("--delay", type=float, default=1.0,
                        help="seconds to wait between commands")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse(argv)
    print("tev client example")

    test1 = args.directory / "test1.pfm"
    test2 = args.directory / "test2.pfm"
    write_pfm(Image.checkerboard(128, 128), test1)
    write_pfm(Image.checkerboard(256, 256), test2)

    client = Client(args.hostname, args.port)

    def check(action: Callable[[], None]) -> None:
        try:
            action()
        except (TevError, ArgumentError) as exc:
            print(f"Failed: {exc}")

    def wait() -> None:
        time.sleep(args.delay)

    print("Connecting to tev")
    check(client.connect)

    print(f"Open image from {test1}")
    check(lambda: client.open_image(str(test1)))
    wait()

    print(f"Open image from {test2}")
    check(lambda: client.open_image(str(test2)))
    wait()

    write_pfm(Image.uv_gradient(512, 128), test1)

    print(f"Reload image {test1}")
    check(lambda: client.reload_image(str(test1)))
    wait()

    print(f"Close image {test1}")
    check(lambda: client.close_image(str(test1)))
    wait()

    print("Create image")
    test3 = Image.uv_gradient(1024 * 2, 1024)
    check(lambda: client.create_image_with_data(
        "test3", test3.width, test3.height, test3.channels, test3.data))

    print("Disconnecting from tev")
    check(client.disconnect)
    return 0


if __name__ == "__main__":
    sys.exit(main())