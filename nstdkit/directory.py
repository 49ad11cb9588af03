"""Directory listing with wildcard patterns, and directory housekeeping."""

from __future__ import annotations

import errno
import fnmatch
import os
import tempfile
from typing import Iterator, Optional

_WINDOWS = os.name == "nt"


def _not_open_error() -> OSError:
    return OSError(errno.EINVAL, "directory is not open")


def _matches(pattern: str, name: str) -> bool:
    if not pattern:
        return True
    if _WINDOWS:
        return fnmatch.fnmatchcase(name.lower(), pattern.lower())
    return fnmatch.fnmatchcase(name, pattern)


def _parent(path: str) -> str:
    return os.path.dirname(path) or "."


class Directory:
    """Iterates the entries of one directory, optionally filtered by a pattern.

    Entries are ``(name, is_dir)`` pairs; ``.`` and ``..`` are never returned.
    """

    def __init__(self) -> None:
        self._entries: Optional[Iterator[os.DirEntry]] = None
        self._scandir = None
        self.path = ""
        self.pattern = ""
        self.dirs_only = False

    def open(self, path: str, pattern: str = "", dirs_only: bool = False) -> None:
        """Start listing ``path`` (the current directory if empty).

        Raises OSError if this object is already open or the directory
        cannot be opened.
        """
        if self._scandir is not None:
            raise OSError(errno.EINVAL, "directory is already open")
        scanner = os.scandir(path or ".")
        self._scandir = scanner
        self._entries = iter(scanner)
        self.path = path
        self.pattern = pattern
        self.dirs_only = dirs_only

    def close(self) -> None:
        """Stop listing; closing a closed directory does nothing."""
        if self._scandir is not None:
            self._scandir.close()
            self._scandir = None
            self._entries = None

    def read(self) -> Optional[tuple[str, bool]]:
        """Return the next matching ``(name, is_dir)``, or None when none are left."""
        if self._entries is None:
            raise _not_open_error()
        for entry in self._entries:
            name = entry.name
            if not _matches(self.pattern, name):
                continue
            try:
                is_dir = entry.is_dir()
            except OSError:
                is_dir = False
            if self.dirs_only and not is_dir:
                continue
            if is_dir and name in (".", ".."):
                continue
            return name, is_dir
        return None

    def __iter__(self) -> Iterator[tuple[str, bool]]:
        while True:
            item = self.read()
            if item is None:
                return
            yield item

    def __enter__(self) -> "Directory":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __del__(self) -> None:
        scanner = getattr(self, "_scandir", None)
        if scanner is not None:
            scanner.close()


def exists(path: str) -> bool:
    """Return whether ``path`` is an existing directory."""
    return os.path.isdir(path)


def create(path: str) -> None:
    """Create ``path`` and any missing parents; an existing directory is fine."""
    parent = _parent(path)
    if parent != "." and parent != path and not exists(parent):
        create(parent)
    try:
        os.mkdir(path, 0o755)
    except FileExistsError:
        if not exists(path):
            raise


def unlink(path: str, recursive: bool = False) -> None:
    """Remove the directory ``path``; with ``recursive`` also its contents.

    Symbolic links inside are removed, never followed.  Raises OSError on
    failure.
    """
    try:
        os.rmdir(path)
        return
    except OSError as exc:
        if not recursive or exc.errno not in (errno.ENOTEMPTY, errno.EEXIST):
            raise
    with os.scandir(path) as entries:
        for entry in entries:
            child = os.path.join(path, entry.name)
            if entry.is_dir(follow_symlinks=False):
                unlink(child, True)
            else:
                os.unlink(child)
    os.rmdir(path)


def purge(path: str, recursive: bool = False) -> None:
    """Remove ``path`` and then each parent that has become empty."""
    unlink(path, recursive)
    current = path
    parent = _parent(current)
    while parent != "." and parent != current:
        try:
            os.rmdir(parent)
        except OSError:
            break
        current, parent = parent, _parent(parent)


def change(path: str) -> None:
    """Change the process's working directory."""
    os.chdir(path)


def current_directory() -> str:
    """Return the absolute path of the working directory."""
    return os.getcwd()


def temp_directory() -> str:
    """Return the directory for temporary data."""
    if _WINDOWS:
        location = tempfile.gettempdir()
        while len(location) > 1 and location.endswith("\\"):
            location = location[:-1]
        return location
    return "/tmp"


def home_directory() -> str:
    """Return the current user's home directory, or "" if it is unknown."""
    if _WINDOWS:
        home = os.path.expanduser("~")
        return "" if home == "~" else home
    import pwd

    try:
        return pwd.getpwuid(os.geteuid()).pw_dir
    except KeyError:
        return ""