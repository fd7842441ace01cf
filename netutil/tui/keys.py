"""
Keyboard input: raw terminal bytes to discrete key events.
"""

from __future__ import annotations

import os
import select
import sys
import termios
import tty
from dataclasses import dataclass
from typing import List, Optional

# Named keys; printable keys use the character itself
ENTER = "enter"
ESC = "esc"
TAB = "tab"
BACKTAB = "backtab"
BACKSPACE = "backspace"
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
HOME = "home"
END = "end"
PAGE_UP = "pageup"
PAGE_DOWN = "pagedown"
DELETE = "delete"
INSERT = "insert"


@dataclass(frozen=True)
class KeyEvent:
    """A key code plus the Ctrl modifier."""

    key: str
    ctrl: bool = False

    @property
    def is_char(self) -> bool:
        """True for a printable character without modifiers."""
        return len(self.key) == 1 and not self.ctrl and self.key.isprintable()

    def __str__(self) -> str:
        return f"Ctrl+{self.key}" if self.ctrl else self.key


_CSI_FINAL = {
    "A": UP,
    "B": DOWN,
    "C": RIGHT,
    "D": LEFT,
    "H": HOME,
    "F": END,
    "Z": BACKTAB,
}

_CSI_TILDE = {
    "1": HOME,
    "2": INSERT,
    "3": DELETE,
    "4": END,
    "5": PAGE_UP,
    "6": PAGE_DOWN,
    "7": HOME,
    "8": END,
}


def _decode_csi(data: str, pos: int) -> tuple[Optional[KeyEvent], int]:
    """Decode ``ESC [ params final`` starting after the ``[``."""
    end = pos
    while end < len(data) and data[end] in "0123456789;":
        end += 1
    if end >= len(data):
        return None, end
    params, final = data[pos:end], data[end]
    ctrl = params.endswith(";5")
    if final == "~":
        name = _CSI_TILDE.get(params.split(";")[0])
    else:
        name = _CSI_FINAL.get(final)
    return (KeyEvent(name, ctrl) if name else None), end + 1


def decode_keys(data: str) -> List[KeyEvent]:
    """
    Decode a chunk of terminal input into key events.

    Unknown escape sequences are dropped. A lone ESC (or ESC followed by a
    character that does not start a sequence) is reported as ``esc``.
    """
    events: List[KeyEvent] = []
    pos = 0

    while pos < len(data):
        ch = data[pos]

        if ch == "\x1b":
            nxt = data[pos + 1] if pos + 1 < len(data) else ""
            if nxt == "[":
                event, pos = _decode_csi(data, pos + 2)
                if event:
                    events.append(event)
                continue
            if nxt == "O" and pos + 2 < len(data):
                name = _CSI_FINAL.get(data[pos + 2])
                if name:
                    events.append(KeyEvent(name))
                pos += 3
                continue
            events.append(KeyEvent(ESC))
            pos += 1
            continue

        if ch in "\r\n":
            events.append(KeyEvent(ENTER))
            # CRLF is one keypress
            if ch == "\r" and data[pos + 1:pos + 2] == "\n":
                pos += 1
        elif ch == "\t":
            events.append(KeyEvent(TAB))
        elif ch in "\x7f\x08":
            events.append(KeyEvent(BACKSPACE))
        elif "\x01" <= ch <= "\x1a":
            events.append(KeyEvent(chr(ord(ch) + 96), ctrl=True))
        elif ch.isprintable():
            events.append(KeyEvent(ch))
        pos += 1

    return events


class KeyReader:
    """
    Poll stdin for key events with a bounded timeout.

    Inside the context stdin is in cbreak mode with XON/XOFF flow control
    disabled so Ctrl+S and Ctrl+Q reach the application. Ctrl+C still raises
    KeyboardInterrupt.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self._saved = None

    def __enter__(self) -> "KeyReader":
        fd = self.stream.fileno()
        if os.isatty(fd):
            self._saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
            attrs = termios.tcgetattr(fd)
            attrs[0] &= ~termios.IXON
            termios.tcsetattr(fd, termios.TCSADRAIN, attrs)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.stream.fileno(), termios.TCSADRAIN, self._saved)
            self._saved = None

    def poll(self, timeout: float) -> List[KeyEvent]:
        """Wait up to ``timeout`` seconds; an empty list means no input."""
        fd = self.stream.fileno()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return []

        chunk = os.read(fd, 1024)
        # Escape sequences can straddle reads
        while chunk.endswith(b"\x1b") or chunk.endswith(b"\x1b["):
            more, _, _ = select.select([fd], [], [], 0.01)
            if not more:
                break
            chunk += os.read(fd, 1024)

        return decode_keys(chunk.decode("utf-8", errors="replace"))
