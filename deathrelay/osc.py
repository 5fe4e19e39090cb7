"""Minimal OSC 1.0 message encoding and UDP delivery."""

from __future__ import annotations

import logging
import socket
import struct
from collections.abc import Iterable
from typing import Union

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9000

OscArg = Union[bool, int, float, str, bytes, None]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

log = logging.getLogger(__name__)


def _osc_string(text: str) -> bytes:
    raw = text.encode("utf-8") + b"\x00"
    return raw + b"\x00" * (-len(raw) % 4)


def _osc_blob(data: bytes) -> bytes:
    return struct.pack(">i", len(data)) + data + b"\x00" * (-len(data) % 4)


def _encode_arg(arg: OscArg) -> tuple[str, bytes]:
    if arg is None:
        return "N", b""
    if isinstance(arg, bool):
        return ("T" if arg else "F"), b""
    if isinstance(arg, int):
        if not _INT32_MIN <= arg <= _INT32_MAX:
            raise ValueError(f"integer {arg} does not fit in an OSC int32")
        return "i", struct.pack(">i", arg)
    if isinstance(arg, float):
        return "f", struct.pack(">f", arg)
    if isinstance(arg, str):
        return "s", _osc_string(arg)
    if isinstance(arg, (bytes, bytearray)):
        return "b", _osc_blob(bytes(arg))
    raise TypeError(f"unsupported OSC argument type: {type(arg).__name__}")


def encode_message(address: str, args: Iterable[OscArg]) -> bytes:
    """Encode an OSC message with the given address and arguments."""
    tags = [","]
    payload = []
    for arg in args:
        tag, data = _encode_arg(arg)
        tags.append(tag)
        payload.append(data)
    return _osc_string(address) + _osc_string("".join(tags)) + b"".join(payload)


def send_message(
    address: str,
    args: Iterable[OscArg],
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> bool:
    """Send one OSC message over UDP; return whether it was sent."""
    try:
        packet = encode_message(address, args)
    except (TypeError, ValueError) as exc:
        log.error("Failed to encode OSC message: %s", exc)
        return False
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.bind(("0.0.0.0", 0))
            sock.sendto(packet, (host, port))
    except OSError as exc:
        log.error("Failed to send OSC message: %s", exc)
        return False
    return True