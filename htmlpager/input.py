"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, multi-byte UTF-8, and SGR mouse reports.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

CONTROL_KEYS = {
    b"\x01": "CTRL_A",
    b"\x03": "CTRL_C",
    b"\x05": "CTRL_E",
    b"\x0b": "CTRL_K",
    b"\x15": "CTRL_U",
    b"\x17": "CTRL_W",
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
}

CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

CSI_TILDE_KEYS = {
    b"1": "HOME",
    b"2": "INSERT",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
    b"11": "F1",
    b"12": "F2",
    b"13": "F3",
    b"14": "F4",
    b"15": "F5",
    b"17": "F6",
    b"18": "F7",
    b"19": "F8",
    b"20": "F9",
    b"21": "F10",
    b"23": "F11",
    b"24": "F12",
}

SS3_KEYS = {
    **CSI_FINAL_KEYS,
    b"P": "F1",
    b"Q": "F2",
    b"R": "F3",
    b"S": "F4",
}

# Returned for sequences that are not mapped or arrive truncated. Only a
# lone ESC byte decodes to "ESC".
UNKNOWN_KEY = "UNKNOWN"


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _decode_utf8(fd: int, first: bytes) -> str:
    data = bytearray(first)
    for _ in range(_utf8_length(first[0]) - 1):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return bytes(data).decode("utf-8", errors="replace")


def _decode_sgr_mouse(fd: int) -> str:
    # ESC [ < btn ; col ; row (M/m)
    payload: list[bytes] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        if part in {b"M", b"m"}:
            break
        payload.append(part)
        if len(payload) > 64:
            return UNKNOWN_KEY
    try:
        btn_s, col_s, row_s = b"".join(payload).decode("ascii").split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return UNKNOWN_KEY
    if btn & 0b0100_0000:
        direction = "UP" if (btn & 0b11) == 0 else "DOWN"
        return f"MOUSE_WHEEL_{direction}:{col}:{row}"
    action = "DOWN" if part == b"M" else "UP"
    return f"MOUSE_{action}:{col}:{row}"


def _decode_csi(fd: int) -> str:
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return UNKNOWN_KEY
    if seq in CSI_FINAL_KEYS:
        return CSI_FINAL_KEYS[seq]
    if seq == b"<":
        return _decode_sgr_mouse(fd)
    if seq.isdigit():
        params = bytearray(seq)
        while True:
            part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return UNKNOWN_KEY
            if part == b"~":
                # Modifiers follow the key code, as in ESC [ 6 ; 5 ~.
                code = bytes(params).split(b";", 1)[0]
                return CSI_TILDE_KEYS.get(code, UNKNOWN_KEY)
            if not (part.isdigit() or part == b";"):
                # Modified arrows such as ESC [ 1 ; 5 C.
                return CSI_FINAL_KEYS.get(part, UNKNOWN_KEY)
            params += part
            if len(params) > 16:
                return UNKNOWN_KEY
    return UNKNOWN_KEY


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Return the next key token, or ``""`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""
        ch = os.read(fd, 1)
        if not ch:
            return ""

    if ch in CONTROL_KEYS:
        return CONTROL_KEYS[ch]
    if ch != b"\x1b":
        return _decode_utf8(fd, ch)

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _decode_csi(fd)
    if seq == b"O":
        # SS3 arrows/home/end in application cursor mode, and F1-F4.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return UNKNOWN_KEY
        return SS3_KEYS.get(final, UNKNOWN_KEY)
    _PENDING_BYTES.append(seq)
    return "ESC"
