"""Terminal line editing: key decoding, prompt rendering and input history.

Nothing here touches a terminal.  :class:`KeyDecoder` turns raw input
bytes into keys, and :class:`LineEditor` applies keys to the line being
edited.  The editor collects the text that redraws the prompt, which the
caller fetches with :meth:`LineEditor.take_output`.
"""

from __future__ import annotations

import enum
from typing import Iterable, Optional, Union

_ESC = 0x1B
_WRAP_OFF = "\x1b[?7l"
_WRAP_ON = "\x1b[?7h"


class Key(enum.Enum):
    """Editing keys that are not plain characters."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    DELETE = enum.auto()
    BACKSPACE = enum.auto()
    ENTER = enum.auto()
    TAB = enum.auto()


KeyInput = Union[Key, str]

_ESCAPE_KEYS = {
    b"\x1b[A": Key.UP,
    b"\x1b[B": Key.DOWN,
    b"\x1b[C": Key.RIGHT,
    b"\x1b[D": Key.LEFT,
    b"\x1b[H": Key.HOME,
    b"\x1b[F": Key.END,
    b"\x1b[3~": Key.DELETE,
}

_CONTROL_KEYS = {
    "\t": Key.TAB,
    "\r": Key.ENTER,
    "\b": Key.BACKSPACE,
    "\x7f": Key.BACKSPACE,
}


def _is_attribute_byte(byte: int) -> bool:
    return chr(byte).isdigit() or byte in b";?["


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if 0xC0 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF8:
        return 4
    return 0


class KeyDecoder:
    """Incrementally decodes terminal input bytes into keys and characters."""

    def __init__(self, utf8: bool = True) -> None:
        self.utf8 = utf8
        self._pending = bytearray()

    def feed(self, data: bytes) -> list[KeyInput]:
        """Add input bytes and return every key that is now complete.

        Plain characters come back as one-character strings, editing keys as
        :class:`Key` members.  Unknown escape sequences are dropped; bytes of
        an unfinished sequence are kept for the next call.
        """
        self._pending += data
        keys: list[KeyInput] = []
        while self._pending:
            parsed = self._parse(self._pending)
            if parsed is None:
                break
            consumed, key = parsed
            del self._pending[:consumed]
            if key is not None:
                keys.append(key)
        return keys

    def _parse(self, buf: bytearray) -> Optional[tuple[int, Optional[KeyInput]]]:
        if buf[0] == _ESC:
            return self._parse_escape(buf, 0)
        if not self.utf8:
            return 1, self._classify(chr(buf[0]))
        length = _utf8_length(buf[0])
        if length == 0:
            return 1, None
        for index in range(1, min(length, len(buf))):
            if buf[index] == _ESC:
                # an escape sequence cuts the character short; drop its bytes
                return index, None
        if len(buf) < length:
            return None
        try:
            char = bytes(buf[:length]).decode("utf-8")
        except UnicodeDecodeError:
            return length, None
        return length, self._classify(char)

    @staticmethod
    def _parse_escape(buf: bytearray, start: int) -> Optional[tuple[int, Optional[KeyInput]]]:
        if len(buf) < start + 2:
            return None
        if buf[start + 1] != ord("["):
            return start + 2, None
        index = start + 2
        while index < len(buf) and _is_attribute_byte(buf[index]):
            index += 1
        if index >= len(buf):
            return None
        sequence = bytes(buf[start:index + 1])
        return index + 1, _ESCAPE_KEYS.get(sequence)

    @staticmethod
    def _classify(char: str) -> KeyInput:
        return _CONTROL_KEYS.get(char, char)


def move_cursor(from_pos: int, offset: int, width: int) -> str:
    """Return the escape sequence that moves the cursor by ``offset`` cells.

    Positions count cells of a text wrapped at ``width`` columns.
    """
    if width <= 0:
        raise ValueError("screen width must be positive")
    old_y, old_x = divmod(from_pos, width)
    new_y, new_x = divmod(from_pos + offset, width)
    command = ""
    if new_y < old_y:
        command += f"\x1b[{old_y - new_y}A"
    elif new_y > old_y:
        command += f"\x1b[{new_y - old_y}B"
    if new_x < old_x:
        command += f"\x1b[{old_x - new_x}D"
    elif new_x > old_x:
        command += f"\x1b[{new_x - old_x}C"
    return command


class LineEditor:
    """The state of one editable input line below a prompt, with history."""

    def __init__(self, width: int = 80, history: Optional[Iterable[str]] = None) -> None:
        if width <= 0:
            raise ValueError("screen width must be positive")
        self.width = width
        self.history: list[str] = list(history) if history is not None else []
        self.prompt = ""
        self.text = ""
        self.caret = 0
        self.complete = False
        self._history_pos = len(self.history)
        self._history_remove_last = False
        self._output: list[str] = []

    def start(self, prompt: str) -> None:
        """Begin editing a new, empty line after ``prompt`` and draw it."""
        self.prompt = prompt
        self._history_pos = len(self.history)
        self._history_remove_last = False
        self.text = ""
        self.complete = False
        self.caret = 0
        self.redraw()

    def handle_key(self, key: KeyInput) -> bool:
        """Apply one key; return whether the line has been completed."""
        if isinstance(key, str):
            for char in key:
                self._insert(char)
            return self.complete
        actions = {
            Key.UP: self._history_up,
            Key.DOWN: self._history_down,
            Key.LEFT: self._move_left,
            Key.RIGHT: self._move_right,
            Key.HOME: self._move_home,
            Key.END: self._move_end,
            Key.DELETE: self._remove_next,
            Key.BACKSPACE: self._remove,
            Key.ENTER: self._enter,
            Key.TAB: lambda: None,
        }
        actions[key]()
        return self.complete

    def resize(self, width: int) -> None:
        """Redraw the line for a screen that is now ``width`` columns wide."""
        if width <= 0:
            raise ValueError("screen width must be positive")
        self.clear()
        self.width = width
        self.redraw()

    def clear(self) -> None:
        """Blank the prompt and line on screen, leaving the cursor at its start."""
        width = self.width
        buffer_len = len(self.prompt) + len(self.text)
        additional_lines = buffer_len // width
        if additional_lines:
            self._write(move_cursor(len(self.prompt) + self.caret, -(self.caret + len(self.prompt)), width))
            clear_line = " " * width + "\n\r"
            self._write(
                _WRAP_OFF
                + clear_line * additional_lines
                + " " * (buffer_len - additional_lines * width)
                + _WRAP_ON
            )
            self._write(move_cursor(buffer_len, -buffer_len, width))
        else:
            self._write(_WRAP_OFF + "\r" + " " * buffer_len + "\r" + _WRAP_ON)

    def redraw(self) -> None:
        """Draw the prompt and the whole line, then place the cursor at the caret."""
        self._prompt_write()

    def finish(self) -> str:
        """Clear the line from screen, record it in the history and return it."""
        self.clear()
        result = self.text
        if self._history_remove_last:
            self.history.pop()
            self._history_remove_last = False
        if result:
            self.history.append(result)
        self._history_pos = len(self.history)
        return result

    def take_output(self) -> str:
        """Return the screen output produced so far and forget it."""
        output = "".join(self._output)
        self._output.clear()
        return output

    def _write(self, text: str) -> None:
        if text:
            self._output.append(text)

    def _prompt_write(self, offset: int = 0, clear_str: str = "") -> None:
        width = self.width
        offset += offset // width * 2
        buffer = self.prompt + self.text + clear_str
        wrapped = []
        for start in range(0, len(buffer), width):
            line = buffer[start:start + width]
            wrapped.append(line)
            if len(line) == width:
                wrapped.append("\r\n")
        self._write(_WRAP_OFF + "".join(wrapped)[offset:] + _WRAP_ON)
        tail = len(self.text) + len(clear_str)
        if self.caret < tail:
            self._write(move_cursor(len(self.prompt) + tail, -(tail - self.caret), width))

    def _insert(self, char: str) -> None:
        old_caret = self.caret
        self.text = self.text[:old_caret] + char + self.text[old_caret:]
        self.caret += 1
        self._prompt_write(len(self.prompt) + old_caret)

    def _remove(self) -> None:
        if self.text and self.caret > 0:
            self.text = self.text[:self.caret - 1] + self.text[self.caret:]
            self._move_left()
            self._prompt_write(len(self.prompt) + self.caret, " ")

    def _remove_next(self) -> None:
        if self.caret < len(self.text):
            self.text = self.text[:self.caret] + self.text[self.caret + 1:]
            self._prompt_write(len(self.prompt) + self.caret, " ")

    def _move_left(self) -> None:
        if self.caret > 0:
            self._write(move_cursor(len(self.prompt) + self.caret, -1, self.width))
            self.caret -= 1

    def _move_right(self) -> None:
        if self.caret < len(self.text):
            self._write(move_cursor(len(self.prompt) + self.caret, 1, self.width))
            self.caret += 1

    def _move_home(self) -> None:
        if self.caret > 0:
            self._write(move_cursor(len(self.prompt) + self.caret, -self.caret, self.width))
            self.caret = 0

    def _move_end(self) -> None:
        if self.caret < len(self.text):
            self._write(
                move_cursor(len(self.prompt) + self.caret, len(self.text) - self.caret, self.width)
            )
            self.caret = len(self.text)

    def _enter(self) -> None:
        self.complete = True

    def _show_history_entry(self) -> None:
        self.clear()
        self.text = self.history[self._history_pos]
        self.caret = len(self.text)
        self._prompt_write()

    def _history_up(self) -> None:
        if self._history_pos == 0:
            return
        current = self.text
        if self._history_pos == len(self.history):
            self._history_pos -= 1
            self.history.append(current)
            self._history_remove_last = True
        else:
            self.history[self._history_pos] = current
            self._history_pos -= 1
        self._show_history_entry()

    def _history_down(self) -> None:
        if self._history_pos == len(self.history):
            return
        self.history[self._history_pos] = self.text
        self._history_pos += 1
        self._show_history_entry()
        if self._history_pos + 1 == len(self.history):
            self.history.pop()
            self._history_pos = len(self.history)
            self._history_remove_last = False