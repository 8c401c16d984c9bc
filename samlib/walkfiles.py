"""Recursive directory walking with regex ignores and name filters."""

from __future__ import annotations

import enum
import os
import re
import stat
import sys
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .globmatch import fnmatch

FileFunc = Callable[[str, os.stat_result], Optional[int]]
PathLike = Union[str, "os.PathLike[str]"]

_PATH_MAX = 1024
_S_IFMT = 0o170000


class WalkFlag(enum.IntFlag):
    """Walk options.

    File type bits from the :mod:`stat` module (for example
    ``stat.S_IFLNK``) may also be or-ed in to have special files of that
    type passed to the file function.
    """

    NONE = 0
    VERBOSE = 1 << 16
    DOTFILES = 1 << 17
    ONE_DIR = 1 << 18
    NO_SUBDIRS = 1 << 19
    XDEV = 1 << 20
    INCLUDE_DIRS = 1 << 21


@dataclass(frozen=True)
class _Filter:
    pattern: Optional[str] = None
    regex: Optional["re.Pattern[str]"] = None

    def matches(self, fname: str) -> bool:
        if self.pattern is not None:
            return fnmatch(self.pattern, fname, 0)
        return self.regex is not None and self.regex.search(fname) is not None


def _compile(regex: str) -> "re.Pattern[str]":
    try:
        return re.compile(regex)
    except re.error as err:
        raise ValueError(f"Invalid regex '{regex}'") from err


def _perror(path: str, err: OSError) -> None:
    print(f"{path}: {err.strerror}", file=sys.stderr)


def _print_path(path: str, sbuf: os.stat_result) -> int:
    print(path)
    return 0


class Walker:
    """Walks a path, calling a function for every file that passes the filters."""

    def __init__(self, file_func: Optional[FileFunc] = None, flags: int = 0) -> None:
        self.file_func = file_func
        self.flags = int(flags)
        self._ignores: list["re.Pattern[str]"] = []
        self._filters: list[_Filter] = []

    def add_ignore(self, regex: str) -> None:
        """Skip every path matched by ``regex``; raises ValueError if invalid."""
        self._ignores.insert(0, _compile(regex))

    def check_ignores(self, path: str) -> bool:
        """True if ``path`` matches one of the ignore expressions."""
        return any(ignore.search(path) for ignore in self._ignores)

    def add_filter(self, pat: str) -> None:
        """Only accept file names matching the shell pattern ``pat``."""
        if any(f.pattern == pat for f in self._filters):
            return
        self._filters.insert(0, _Filter(pattern=pat))

    def add_filter_re(self, regex: str) -> None:
        """Only accept file names matching ``regex``; raises ValueError if invalid."""
        self._filters.insert(0, _Filter(regex=_compile(regex)))

    def check_filters(self, fname: str) -> bool:
        """True if there are no filters or one of them matches ``fname``."""
        if not self._filters:
            return True
        return any(f.matches(fname) for f in self._filters)

    def _verbose(self, message: str) -> None:
        if self.flags & WalkFlag.VERBOSE:
            print(message, file=sys.stderr)

    def _call(self, path: str, sbuf: os.stat_result) -> int:
        assert self.file_func is not None
        return int(self.file_func(path, sbuf) or 0)

    def _do_dir(self, dname: str, dstat: os.stat_result) -> int:
        try:
            names = os.listdir(dname)
        except OSError as err:
            _perror(dname, err)
            return 1

        error = 0
        for name in names:
            if name.startswith(".") and not self.flags & WalkFlag.DOTFILES:
                continue

            path = f"{dname}/{name}" if dname != "/" else f"/{name}"
            if len(path) >= _PATH_MAX:
                print(f"PATH TRUNCATED: {dname}/{name}", file=sys.stderr)
                error = 1
                continue

            if self.check_ignores(path):
                self._verbose(f"Ignoring: {path}")
                continue

            try:
                sbuf = os.lstat(path)
            except OSError as err:
                _perror(path, err)
                error = 1
                continue

            kind = stat.S_IFMT(sbuf.st_mode)
            if self.flags & WalkFlag.ONE_DIR and kind == stat.S_IFDIR:
                kind = stat.S_IFREG

            if kind == stat.S_IFDIR:
                if self.flags & WalkFlag.NO_SUBDIRS:
                    continue
                if self.flags & WalkFlag.XDEV and dstat.st_dev != sbuf.st_dev:
                    self._verbose(f"Skipping dir {path}")
                    continue
                if self.flags & WalkFlag.INCLUDE_DIRS:
                    error |= self._call(path, sbuf)
                error |= self._do_dir(path, sbuf)
                continue

            if kind != stat.S_IFREG and (kind & self.flags & _S_IFMT) != kind:
                self._verbose(f"Special {path} (0{kind:o})")
                continue

            if self.check_filters(name):
                error |= self._call(path, sbuf)
            else:
                self._verbose(f"Skipping {name}")

        return error

    def walk(self, path: PathLike, file_func: Optional[FileFunc] = None, flags: int = 0) -> int:
        """Walk ``path`` (a directory or a single file).

        ``flags`` are added to the walker's flags. Returns the or-ed results
        of the file function and 1 for any error met while walking. Raises
        OSError if ``path`` itself cannot be examined.
        """
        path = os.fspath(path)
        sbuf = os.lstat(path)

        if file_func is not None:
            self.file_func = file_func
        elif self.file_func is None:
            self.file_func = _print_path

        self.flags |= int(flags)
        self._verbose(f"walk flags 0{self.flags:o}")

        if stat.S_ISDIR(sbuf.st_mode):
            return self._do_dir(path, sbuf)
        return self._call(path, sbuf)


_global_walker = Walker()


def walkfiles(path: PathLike, file_func: Optional[FileFunc] = None, flags: int = 0) -> int:
    """Walk ``path`` with the shared module-level walker."""
    return _global_walker.walk(path, file_func, flags)