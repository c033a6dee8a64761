import os
import select
import sys
from typing import Optional

from hnradar.tui.keys import Key, LAYOUT_MAP


# Resize handling
class ResizeScreen(Exception):
    pass


resize_needed = False


def handle_winch(signum, frame):
    global resize_needed
    resize_needed = True


def _read_escape_sequence(fd: int) -> str:
    """Decodes what follows an ESC byte; a lone ESC is the Escape key."""
    r, _, _ = select.select([fd], [], [], 0)
    if not r:
        return Key.ESCAPE

    try:
        ch2 = os.read(fd, 1).decode()
        if ch2 not in ("[", "O"):
            return Key.ESCAPE

        ch3 = os.read(fd, 1).decode()
        if ch3 == "A":
            return Key.UP
        if ch3 == "B":
            return Key.DOWN
        if ch3 == "C":
            return Key.RIGHT
        if ch3 == "D":
            return Key.LEFT
        if ch2 == "[" and ch3 in ("5", "6"):  # PgUp is [5~, PgDn is [6~
            ch4 = os.read(fd, 1).decode()
            if ch4 == "~":
                return Key.PAGE_UP if ch3 == "5" else Key.PAGE_DOWN
    except (OSError, UnicodeDecodeError):
        pass
    return Key.UNKNOWN


def get_key() -> Optional[str]:
    """Reads a key press and decodes escape sequences. Returns None on timeout."""
    global resize_needed

    fd = sys.stdin.fileno()

    if resize_needed:
        resize_needed = False
        raise ResizeScreen()

    try:
        # Wait for input with timeout so finished fetches get picked up
        r, _, _ = select.select([fd], [], [], 0.1)
        if not r:
            return None  # Timeout - no input
    except (OSError, InterruptedError):
        return None

    # Read first byte
    try:
        b1 = os.read(fd, 1)
    except OSError:
        return Key.UNKNOWN
    if not b1:
        return Key.UNKNOWN

    # Determine UTF-8 sequence length
    byte1 = ord(b1)
    seq_len = 1
    if (byte1 & 0xE0) == 0xC0:
        seq_len = 2
    elif (byte1 & 0xF0) == 0xE0:
        seq_len = 3
    elif (byte1 & 0xF8) == 0xF0:
        seq_len = 4

    raw_bytes = b1
    if seq_len > 1:
        try:
            raw_bytes += os.read(fd, seq_len - 1)
        except OSError:
            pass

    try:
        ch = raw_bytes.decode("utf-8")
    except UnicodeDecodeError:
        return Key.UNKNOWN

    if ch == "\x03":
        return Key.CTRL_C
    if ch == "\x1b":
        return _read_escape_sequence(fd)

    # Convert from other keyboard layouts to English
    ch = LAYOUT_MAP.get(ch, ch)

    if ch in ("\r", "\n"):
        return Key.ENTER
    if ch == "\x7f":
        return Key.BACKSPACE

    if ch in ("q", "Q", "r", "R", "c", "C", "h", "H", "j", "J", "k", "K", "l", "L"):
        return ch.lower()

    return ch
