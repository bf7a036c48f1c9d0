"""Blocking client that remotely controls a running tev image viewer."""

from __future__ import annotations

import socket
from typing import Iterable, Optional, Sequence

from tevremote import protocol
from tevremote.protocol import StrPath
from tevremote.vg import VgCommand

DEFAULT_HOSTNAME = "127.0.0.1"
DEFAULT_PORT = 14158


class TevError(Exception):
    """Base class of the errors raised while talking to tev."""


class NotConnectedError(TevError):
    """Raised when a message is sent before a connection was made."""


class TevSocketError(TevError):
    """Raised when the underlying socket reports a failure."""


def _describe(exc: OSError) -> str:
    if exc.errno is not None and exc.strerror:
        return f"{exc.strerror.rstrip(chr(13) + chr(10))} ({exc.errno})"
    return str(exc)


class Client:
    """Sends commands to tev over TCP.

    Communication is one way, from this client to the tev server. Calls
    block and the client is not thread-safe. The connection is not opened
    by the constructor: call :meth:`connect` or use the client as a context
    manager.
    """

    def __init__(self, hostname: str = DEFAULT_HOSTNAME, port: int = DEFAULT_PORT) -> None:
        if not 0 <= int(port) <= 0xFFFF:
            raise ValueError("Port must be between 0 and 65535.")
        self._hostname = hostname
        self._port = int(port)
        self._socket: Optional[socket.socket] = None

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def port(self) -> int:
        return self._port

    def __enter__(self) -> "Client":
        self.connect()
        return self

    def __exit__(self, *args) -> None:
        self.disconnect()

    def connect(self) -> None:
        """Open the connection; does nothing if already connected."""
        if self.is_connected():
            return
        try:
            infos = socket.getaddrinfo(
                self._hostname, self._port, socket.AF_UNSPEC, socket.SOCK_STREAM
            )
        except socket.gaierror as exc:
            reason = exc.strerror or str(exc)
            raise TevSocketError(f"getaddrinfo() failed: {reason}") from exc

        failure: Optional[TevSocketError] = None
        for family, socktype, proto, _, address in infos:
            try:
                sock = socket.socket(family, socktype, proto)
            except OSError as exc:
                failure = TevSocketError(f"socket() failed: {_describe(exc)}")
                continue
            try:
                sock.connect(address)
            except OSError as exc:
                sock.close()
                failure = TevSocketError(f"connect() failed: {_describe(exc)}")
                continue
            self._socket = sock
            return
        if failure is not None:
            raise failure

    def disconnect(self) -> None:
        """Close the connection if there is one."""
        sock, self._socket = self._socket, None
        if sock is None:
            return
        try:
            sock.close()
        except OSError as exc:
            raise TevSocketError(f"Error closing socket: {_describe(exc)}") from exc

    def is_connected(self) -> bool:
        return self._socket is not None

    def _send(self, message: bytes) -> None:
        if self._socket is None:
            raise NotConnectedError("Not connected")
        try:
            self._socket.sendall(message)
        except OSError as exc:
            raise TevSocketError(f"socket send() failed: {_describe(exc)}") from exc

    def open_image(
        self, image_path: StrPath, channel_selector: str = "", grab_focus: bool = True
    ) -> None:
        """Ask tev to open an image file."""
        self._send(protocol.encode_open_image(image_path, channel_selector, grab_focus))

    def reload_image(self, image_name: StrPath, grab_focus: bool = True) -> None:
        """Ask tev to reload an image."""
        self._send(protocol.encode_reload_image(image_name, grab_focus))

    def close_image(self, image_name: StrPath) -> None:
        """Ask tev to close an image."""
        self._send(protocol.encode_close_image(image_name))

    def create_image(
        self,
        image_name: StrPath,
        width: int,
        height: int,
        channel_count: int,
        channel_names: Optional[Sequence[str]] = None,
        grab_focus: bool = True,
    ) -> None:
        """Create an empty image; names default to R, G, B, A."""
        self._send(
            protocol.encode_create_image(
                image_name, width, height, channel_count, channel_names, grab_focus
            )
        )

    def update_image(
        self,
        image_name: StrPath,
        x: int,
        y: int,
        width: int,
        height: int,
        channel_count: int,
        image_data: Iterable[float],
        channel_names: Optional[Sequence[str]] = None,
        channel_offsets: Optional[Sequence[int]] = None,
        channel_strides: Optional[Sequence[int]] = None,
        grab_focus: bool = True,
    ) -> None:
        """Update a region of an existing image.

        Offsets and strides are counted in floats, not bytes.
        """
        self._send(
            protocol.encode_update_image(
                image_name,
                x,
                y,
                width,
                height,
                channel_count,
                channel_names,
                channel_offsets,
                channel_strides,
                image_data,
                grab_focus,
            )
        )

    def create_image_with_data(
        self,
        image_name: StrPath,
        width: int,
        height: int,
        channel_count: int,
        image_data: Iterable[float],
        grab_focus: bool = True,
    ) -> None:
        """Create an image and fill it with tightly packed data (at most 4 channels)."""
        self.create_image(image_name, width, height, channel_count, None, grab_focus)
        self.update_image(
            image_name, 0, 0, width, height, channel_count, image_data, grab_focus=grab_focus
        )

    def vector_graphics(
        self,
        image_name: StrPath,
        commands: Iterable[VgCommand],
        append: bool = True,
        grab_focus: bool = True,
    ) -> None:
        """Draw vector graphics on top of an image."""
        self._send(
            protocol.encode_vector_graphics(image_name, commands, append, grab_focus)
        )