"""Line-at-a-time reading of files and command output, and running commands."""

from __future__ import annotations

import enum
import os
import subprocess
import sys
from typing import Callable, Iterable, Optional, Union

LineFunc = Callable[[str], object]
PathLike = Union[str, "os.PathLike[str]"]

_CMD_MAX = 1024
_SPACE = " \t\n\v\f\r"


class ReadFlag(enum.IntFlag):
    """Options for :func:`readfile`."""

    NONE = 0
    IGNORE_EMPTY = 1 << 0
    IGNORE_COMMENTS = 1 << 1


def _strip_nl(line: str) -> str:
    return line.removesuffix("\n")


def _feed(lines: Iterable[str], line_func: LineFunc, flags: int) -> bool:
    for raw in lines:
        line = _strip_nl(raw)
        if flags & ReadFlag.IGNORE_EMPTY and not line.strip(_SPACE):
            continue
        if flags & ReadFlag.IGNORE_COMMENTS and line.startswith("#"):
            continue
        if line_func(line):
            return True
    return False


def readfile(line_func: LineFunc, path: Optional[PathLike] = None, flags: int = 0) -> bool:
    """Call ``line_func`` for each line of ``path`` (stdin if None), newline removed.

    Stops as soon as ``line_func`` returns a true value and then returns
    True; returns False when the whole input was read.
    """
    if line_func is None:
        raise ValueError("line_func is required")
    flags = int(flags)
    if path is None:
        return _feed(sys.stdin, line_func, flags)
    with open(path, "r", encoding="utf-8", errors="surrogateescape", newline="\n") as fp:
        return _feed(fp, line_func, flags)


def readcmd(line_func: LineFunc, cmd: str) -> int:
    """Run ``cmd`` in the shell and call ``line_func`` for each output line.

    The command is cut to 1023 characters. Returns the exit status (negative
    signal number if killed). Raises InterruptedError if ``line_func``
    stopped the read by returning a true value.
    """
    if line_func is None:
        raise ValueError("line_func is required")
    cmd = cmd[: _CMD_MAX - 1]

    stopped = False
    with subprocess.Popen(cmd, shell=True, stdout=subprocess.PIPE) as proc:
        assert proc.stdout is not None
        for raw in proc.stdout:
            line = _strip_nl(raw.decode("utf-8", errors="surrogateescape"))
            if line_func(line):
                stopped = True
                break
        proc.stdout.close()
        status = proc.wait()

    if stopped:
        raise InterruptedError("line function stopped reading")
    return status


def do_system(cmd: str) -> int:
    """Run ``cmd`` in the shell and return its exit status.

    Raises ValueError if the command is 1024 characters or longer.
    """
    if len(cmd) >= _CMD_MAX:
        raise ValueError("command too long")
    return subprocess.run(cmd, shell=True).returncode