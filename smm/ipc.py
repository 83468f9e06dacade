"""
sway IPC Client for smm

Speaks the i3/sway IPC protocol to read the current outputs and to move
them to new positions.

Protocol documentation: https://i3wm.org/docs/ipc.html
"""

from __future__ import annotations
import socket
import struct
import json
import os
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from .protocol import Monitor
from .grid import placement_command


class MessageType(IntEnum):
    """i3 IPC message types used by smm."""

    RUN_COMMAND = 0
    GET_WORKSPACES = 1
    SUBSCRIBE = 2
    GET_OUTPUTS = 3
    GET_TREE = 4
    GET_VERSION = 7


class IPCError(RuntimeError):
    """Raised when talking to the sway IPC socket fails."""


MAGIC = b"i3-ipc"
HEADER_SIZE = len(MAGIC) + 8


def encode_message(msg_type: int, payload: str | bytes = b"") -> bytes:
    """Frame a message: magic, payload length, type, payload."""
    data = payload.encode("utf-8") if isinstance(payload, str) else payload
    return MAGIC + struct.pack("<II", len(data), msg_type) + data


def decode_header(header: bytes) -> Tuple[int, int]:
    """Decode a message header.

    Returns:
        (payload length, message type)

    Raises:
        IPCError: Header is short or does not start with the i3-ipc magic
    """
    if len(header) < HEADER_SIZE:
        raise IPCError(f"Short IPC header: {len(header)} bytes")
    magic = header[: len(MAGIC)]
    if magic != MAGIC:
        raise IPCError(f"Invalid magic bytes: {magic!r}")
    length, msg_type = struct.unpack("<II", header[len(MAGIC) : HEADER_SIZE])
    return length, msg_type


def get_socket_path() -> Optional[str]:
    """Socket path announced by the running compositor, if any."""
    return os.getenv("SWAYSOCK") or os.getenv("I3SOCK")


class SwayIPC:
    """
    Blocking client for the sway IPC socket.

    Acts as the monitor source (GET_OUTPUTS) and the placement sink
    (RUN_COMMAND) of an edit session.
    """

    def __init__(
        self, socket_path: Optional[str] = None, sock: Optional[socket.socket] = None
    ):
        """Initialize the client.

        Args:
            socket_path: Path of the IPC socket (defaults to $SWAYSOCK / $I3SOCK)
            sock: Already connected socket to use instead of connecting
        """
        self.socket_path = socket_path or get_socket_path()
        self.sock = sock

    def connect(self):
        """Connect to the IPC socket if not connected yet."""
        if self.sock is not None:
            return
        if not self.socket_path:
            raise IPCError("No sway IPC socket found (is SWAYSOCK set?)")
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(self.socket_path)
        except (socket.error, FileNotFoundError) as e:
            sock.close()
            raise IPCError(f"Failed to connect to {self.socket_path}: {e}") from e
        self.sock = sock

    def close(self):
        """Close the connection."""
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    def __enter__(self) -> "SwayIPC":
        self.connect()
        return self

    def __exit__(self, *exc):
        self.close()

    def _recv_exact(self, size: int) -> bytes:
        data = b""
        while len(data) < size:
            chunk = self.sock.recv(size - len(data))
            if not chunk:
                raise IPCError("IPC connection closed by compositor")
            data += chunk
        return data

    def request(self, msg_type: MessageType, payload: str = "") -> Any:
        """Send a message and return the decoded JSON reply.

        Raises:
            IPCError: Socket failure, bad framing or unexpected reply type
        """
        self.connect()
        try:
            self.sock.sendall(encode_message(msg_type, payload))
            length, reply_type = decode_header(self._recv_exact(HEADER_SIZE))
            data = self._recv_exact(length)
        except socket.error as e:
            raise IPCError(f"IPC socket error: {e}") from e

        if reply_type != msg_type:
            raise IPCError(
                f"Expected reply type {int(msg_type)}, got {reply_type}"
            )
        return json.loads(data.decode("utf-8"))

    def get_outputs(self) -> List[Dict[str, Any]]:
        """Raw output list as reported by sway."""
        return self.request(MessageType.GET_OUTPUTS)

    def get_monitors(self, include_inactive: bool = False) -> List[Monitor]:
        """Current outputs as monitors.

        Args:
            include_inactive: Also return disabled outputs
        """
        return [
            Monitor.from_output(output)
            for output in self.get_outputs()
            if include_inactive or output.get("active", True)
        ]

    def run_command(self, command: str) -> List[Dict[str, Any]]:
        """Run a sway command.

        Returns:
            One {"success": bool, "error"?: str} entry per command
        """
        return self.request(MessageType.RUN_COMMAND, command)

    def apply(self, placements: List[Monitor]) -> List[Tuple[str, str]]:
        """Move every output to its placement.

        Returns:
            (command, error) for each command sway did not accept
        """
        failures = []
        for monitor in placements:
            command = placement_command(monitor)
            print(f"IPC: Running: {command}")
            for result in self.run_command(command):
                if not result.get("success", False):
                    failures.append((command, result.get("error", "unknown error")))
        return failures
