"""Console output helpers and an interactive line prompt.

:class:`Prompt` reads a line from the terminal with in-line editing and
history.  While it exists, whatever the process writes to stdout or
stderr is caught and shown above the prompt, so output and input do not
mix on screen.
"""

from __future__ import annotations

import atexit
import collections
import os
import re
import select
import signal
import sys
from typing import Optional

from nstdkit.line_editor import KeyDecoder, LineEditor

try:
    import termios
except ImportError:  # not available on this platform
    termios = None  # type: ignore[assignment]

_STDIN = 0
_STDOUT = 1
_STDERR = 2
_READ_SIZE = 4096
_CURSOR_REPORT = re.compile(rb"\x1b\[(\d+);(\d+)R")
_ATTRIBUTE_BYTES = frozenset(b"0123456789;?[")


def print_out(text: str) -> int:
    """Write ``text`` to stdout and return the number of characters."""
    sys.stdout.write(text)
    return len(text)


def printf(fmt: str, *args) -> int:
    """Write ``fmt % args`` to stdout and return the number of characters."""
    return print_out(fmt % args)


def print_error(text: str) -> int:
    """Write ``text`` to stderr and return the number of characters."""
    sys.stderr.write(text)
    return len(text)


def errorf(fmt: str, *args) -> int:
    """Write ``fmt % args`` to stderr and return the number of characters."""
    return print_error(fmt % args)


def _parse_cursor_report(sequence: bytes) -> tuple[int, int]:
    """Turn a ``ESC [ row ; col R`` report into zero-based ``(x, y)``."""
    match = _CURSOR_REPORT.fullmatch(sequence)
    if match is None:
        raise ValueError(f"not a cursor position report: {sequence!r}")
    row, column = int(match.group(1)), int(match.group(2))
    return column - 1, row - 1


def _flush_python_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        if stream is None:
            continue
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def _raw_mode(original: list) -> list:
    mode = [list(item) if isinstance(item, list) else item for item in original]
    mode[0] &= ~(
        termios.IGNBRK | termios.BRKINT | termios.PARMRK | termios.ISTRIP
        | termios.INLCR | termios.IGNCR | termios.ICRNL | termios.IXON
    )
    mode[2] &= ~(termios.CSIZE | termios.PARENB)
    mode[2] |= termios.CS8
    mode[3] &= ~(
        termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG | termios.IEXTEN
    )
    mode[3] |= termios.ISIG
    mode[6][termios.VMIN] = 1
    mode[6][termios.VTIME] = 0
    mode[1] |= termios.OPOST
    return mode


class Prompt:
    """Reads edited lines from the terminal; only one may be active at a time.

    If stdin is not a terminal, or another prompt is active, the prompt is
    inactive and :meth:`get_line` returns an empty string.
    """

    _active = False
    _original_termios: Optional[list] = None
    _termios_fd = _STDIN
    _exit_hook_installed = False
    _resize_write: Optional[int] = None

    def __init__(self) -> None:
        self._valid = False
        if termios is None or Prompt._active or not os.isatty(_STDIN):
            return
        Prompt._active = True
        self._valid = True

        _flush_python_streams()
        self._orig_out = os.dup(_STDOUT)
        self._orig_err = os.dup(_STDERR)
        self._out_read, self._out_write = os.pipe()
        self._err_read, self._err_write = os.pipe()
        os.dup2(self._out_write, _STDOUT)
        os.dup2(self._err_write, _STDERR)

        if Prompt._original_termios is None:
            Prompt._original_termios = termios.tcgetattr(_STDIN)
            if not Prompt._exit_hook_installed:
                atexit.register(Prompt._restore_term_mode)
                Prompt._exit_hook_installed = True
        self._raw = _raw_mode(Prompt._original_termios)
        self._no_echo = _raw_mode(Prompt._original_termios)
        termios.tcsetattr(_STDIN, termios.TCSADRAIN, self._no_echo)

        self._resize_read: Optional[int] = None
        if hasattr(signal, "SIGWINCH"):
            read_end, write_end = os.pipe()
            os.set_blocking(write_end, False)
            try:
                self._previous_winch = signal.signal(signal.SIGWINCH, Prompt._on_resize)
            except ValueError:  # signals can only be set from the main thread
                os.close(read_end)
                os.close(write_end)
            else:
                self._resize_read = read_end
                Prompt._resize_write = write_end

        utf8 = os.environ.get("LANG", "").endswith(".UTF-8")
        self._encoding = "utf-8" if utf8 else "latin-1"
        self._decoder = KeyDecoder(utf8)
        self._pending_input = bytearray()
        self._pending_output = bytearray()
        self._keys: collections.deque = collections.deque()
        self._cursor_x = 0
        self._editor = LineEditor(self._screen_width())

    @staticmethod
    def _on_resize(signum, frame) -> None:
        fd = Prompt._resize_write
        if fd is not None:
            try:
                os.write(fd, b"\x01")
            except OSError:
                pass

    @staticmethod
    def _restore_term_mode() -> None:
        if Prompt._original_termios is not None and termios is not None:
            try:
                termios.tcsetattr(Prompt._termios_fd, termios.TCSADRAIN, Prompt._original_termios)
            except termios.error:
                pass
            Prompt._original_termios = None

    def get_line(self, prompt: str) -> str:
        """Show ``prompt``, let the user edit a line and return it."""
        if not self._valid:
            return ""
        self._redirect_pending_data()
        self._enable_raw_mode()
        self._save_cursor_position()

        editor = self._editor
        editor.start(prompt)
        while not editor.complete:
            self._drain_keys()
            if editor.complete:
                break
            self._flush_console()
            watched = [self._out_read, self._err_read, _STDIN]
            if self._resize_read is not None:
                watched.append(self._resize_read)
            readable, _, _ = select.select(watched, [], [])
            if self._out_read in readable:
                self._handle_output(self._out_read)
            if self._err_read in readable:
                self._handle_output(self._err_read)
            if _STDIN in readable:
                data = os.read(_STDIN, 64)
                if not data:
                    raise EOFError("end of terminal input")
                self._pending_input += data
            if self._resize_read is not None and self._resize_read in readable:
                if os.read(self._resize_read, 64):
                    self._flush_console()
                    editor.resize(self._screen_width())

        result = editor.finish()
        self._restore_cursor_position()
        self._flush_console()
        self._restore_terminal_mode()
        return result

    def close(self) -> None:
        """Give the terminal and the standard streams back; safe to repeat."""
        if not self._valid:
            return
        self._redirect_pending_data()
        if self._resize_read is not None:
            signal.signal(signal.SIGWINCH, signal.SIG_IGN)
            os.close(self._resize_read)
            if Prompt._resize_write is not None:
                os.close(Prompt._resize_write)
                Prompt._resize_write = None
            self._resize_read = None
        Prompt._restore_term_mode()
        _flush_python_streams()
        os.dup2(self._orig_out, _STDOUT)
        os.dup2(self._orig_err, _STDERR)
        for fd in (
            self._orig_out, self._orig_err,
            self._out_read, self._out_write, self._err_read, self._err_write,
        ):
            os.close(fd)
        self._valid = False
        Prompt._active = False

    def __enter__(self) -> "Prompt":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_valid", False):
            try:
                self.close()
            except OSError:
                pass

    def _drain_keys(self) -> None:
        if self._pending_input:
            data = bytes(self._pending_input)
            self._pending_input.clear()
            self._keys.extend(self._decoder.feed(data))
        while self._keys and not self._editor.complete:
            self._editor.handle_key(self._keys.popleft())

    def _emit(self, text: str) -> None:
        self._collect_editor_output()
        self._pending_output += text.encode(self._encoding, errors="replace")

    def _collect_editor_output(self) -> None:
        output = self._editor.take_output() if hasattr(self, "_editor") else ""
        if output:
            self._pending_output += output.encode(self._encoding, errors="replace")

    def _flush_console(self) -> None:
        self._collect_editor_output()
        if self._pending_output:
            os.write(self._orig_out, bytes(self._pending_output))
            self._pending_output.clear()

    def _enable_raw_mode(self) -> None:
        termios.tcsetattr(_STDIN, termios.TCSADRAIN, self._raw)

    def _restore_terminal_mode(self) -> None:
        termios.tcsetattr(_STDIN, termios.TCSADRAIN, self._no_echo)

    def _read_byte(self) -> bytes:
        data = os.read(_STDIN, 1)
        if not data:
            raise EOFError("end of terminal input")
        return data

    def _read_escape_rest(self) -> bytes:
        sequence = bytearray(b"\x1b")
        first = self._read_byte()
        sequence += first
        if first != b"[":
            return bytes(sequence)
        while True:
            byte = self._read_byte()
            sequence += byte
            if byte[0] not in _ATTRIBUTE_BYTES:
                return bytes(sequence)

    def _cursor_position(self) -> tuple[int, int]:
        self._flush_console()
        os.write(self._orig_out, b"\x1b[6n")
        while True:
            byte = self._read_byte()
            if byte != b"\x1b":
                self._pending_input += byte
                continue
            sequence = self._read_escape_rest()
            if sequence[1:2] == b"[" and sequence.endswith(b"R"):
                return _parse_cursor_report(sequence)
            self._pending_input += sequence

    def _screen_width(self) -> int:
        try:
            columns = os.get_terminal_size(self._orig_out).columns
        except OSError:
            columns = 0
        if columns:
            return columns
        x, _ = self._cursor_position()
        try:
            os.write(self._orig_out, b"\x1b[999C")
        except OSError:
            return 80
        new_x, _ = self._cursor_position()
        if new_x > x:
            try:
                os.write(self._orig_out, f"\x1b[{new_x - x}D".encode("ascii"))
            except OSError:
                return 80
        return new_x + 1

    def _save_cursor_position(self) -> None:
        self._cursor_x, _ = self._cursor_position()
        if self._cursor_x:
            self._emit("\r\n")

    def _restore_cursor_position(self) -> None:
        if self._cursor_x:
            self._emit(f"\x1b[A\r\x1b[{self._cursor_x}C")

    def _redirect_pending_data(self) -> None:
        _flush_python_streams()
        routes = {self._out_read: self._orig_out, self._err_read: self._orig_err}
        while True:
            readable, _, _ = select.select(list(routes), [], [], 0)
            if not readable:
                return
            for fd in readable:
                data = os.read(fd, _READ_SIZE)
                if data:
                    os.write(routes[fd], data)

    def _handle_output(self, fd: int) -> None:
        self._editor.clear()
        self._restore_cursor_position()
        self._flush_console()
        self._restore_terminal_mode()

        data = os.read(fd, _READ_SIZE)
        self._pending_output += data
        self._flush_console()

        self._enable_raw_mode()
        self._save_cursor_position()
        self._editor.redraw()