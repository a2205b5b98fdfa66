"""Byte-level key decoding for raw-mode terminals.

Returns symbolic names (``UP``, ``ENTER``, ``CTRL_L`` ...) for control keys and
the decoded character for printable input. An empty string means timeout.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 30

_CONTROL_KEYS = {
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
    b"\x7f": "BACKSPACE",
    b"\x08": "BACKSPACE",
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x0c": "CTRL_L",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}


def _ready(fd: int, timeout_ms: int) -> bool:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    return bool(ready)


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_escape(fd: int) -> str:
    if not _ready(fd, ESC_SEQUENCE_TIMEOUT_MS):
        return "ESC"
    seq = os.read(fd, 1)
    if seq not in {b"[", b"O"}:
        return "ESC"

    params = b""
    while True:
        part = os.read(fd, 1)
        if not part:
            return "ESC"
        if part in _CSI_FINAL_KEYS:
            return _CSI_FINAL_KEYS[part]
        if part == b"~":
            return _CSI_TILDE_KEYS.get(params.decode("ascii", errors="replace").split(";")[0], "ESC")
        if not (part.isdigit() or part == b";"):
            return "ESC"
        params += part
        if len(params) > 16:
            return "ESC"


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read and decode one key press from ``fd``."""
    if timeout_ms is not None and not _ready(fd, timeout_ms):
        return ""

    ch = os.read(fd, 1)
    if not ch:
        return ""
    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]
    if ch == b"\x1b":
        return _read_escape(fd)

    length = _utf8_length(ch[0])
    if length > 1:
        ch += os.read(fd, length - 1)
    return ch.decode("utf-8", errors="replace")


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "read_key"]
