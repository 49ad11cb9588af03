# nstdkit

A small collection of general-purpose building blocks, using only the
Python standard library:

- `nstdkit.sha256`: `Sha256` incremental hashing (`update`, `finalize`, `reset`) plus the static helpers `Sha256.hash` and `Sha256.hmac`.
- `nstdkit.poolmap`: `PoolMap`, an insertion-ordered map that creates each value from a factory when a key is first appended or inserted.
- `nstdkit.strings`: C-locale string helpers such as `compare`, `compare_ignore_case`, `find_last_of`, `substr`, `trim`, `to_bool`, `from_bool`, `join` and `string_hash`.
- `nstdkit.sync`: `Semaphore` (timeouts in milliseconds) and `Mutex`, which can be used as a context manager.
- `nstdkit.callback`: `Emitter` and `Listener` signal/slot connections made with `connect` and broken with `disconnect`. You can change connections while a signal is being emitted. Such changes take effect when the outermost emission has finished.
- `nstdkit.future`: `Future`, which runs a function on a background thread and offers `abort`, `join` and `result`.
- `nstdkit.directory`: `Directory` for listing one directory filtered by a wildcard pattern, plus `exists`, `create`, `unlink`, `purge`, `change`, `current_directory`, `temp_directory` and `home_directory`.
- `nstdkit.line_editor`: terminal-free line editing. `KeyDecoder` turns input bytes into keys. `LineEditor` applies the keys, keeps history and produces the escape sequences that redraw the line.
- `nstdkit.console`: `print_out`, `printf`, `print_error`, `errorf`, and `Prompt`. `Prompt` reads an edited line from the terminal and shows anything written to stdout or stderr above the prompt.

## Installation

```
pip install nstdkit
```

## Examples

```python
from nstdkit.sha256 import Sha256

digest = Sha256.hash(b"abc")
mac = Sha256.hmac(b"secret", b"message")

h = Sha256()
h.update(b"ab")
h.update(b"c")
assert h.finalize() == digest
```

```python
from nstdkit.callback import Emitter, Listener, connect

class Button(Emitter):
    def clicked(self, n):
        self.emit(Button.clicked, n)

class Counter(Listener):
    def __init__(self):
        super().__init__()
        self.total = 0

    def add(self, n):
        self.total += n

button, counter = Button(), Counter()
connect(button, Button.clicked, counter, counter.add)
button.clicked(3)
assert counter.total == 3
```

```python
from nstdkit.future import Future

future = Future()
future.start(pow, 2, 10)
print(future.result())  # 1024
```

```python
from nstdkit.directory import Directory

with Directory() as d:
    d.open(".", "*.py")
    for name, is_dir in d:
        print(name, is_dir)
```

```python
from nstdkit.console import Prompt

with Prompt() as prompt:
    line = prompt.get_line("> ")
```

## Limitations

- `Prompt` needs a POSIX terminal (`termios`) on stdin. Only one prompt can be active at a time. If stdin is not a terminal, if the platform has no `termios`, or if another prompt is already active, the prompt is inactive and `get_line` returns an empty string.
- The package is a library only. It installs no command-line program.

## Running the tests

```
pip install nstdkit[test]
pytest
```