"""Process information from /proc (or psutil elsewhere) and stack dumps."""

from __future__ import annotations

import errno
import os
import traceback
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import psutil

_CMDLINE_MAX = 4096
_STAT_MAX = 4096
_T = TypeVar("_T")


@dataclass(frozen=True)
class ProcStat:
    """A few fields of a process's stat record."""

    pid: int
    comm: str
    state: str
    ppid: int
    pgrp: int
    session: int
    starttime: int


def _have_proc() -> bool:
    return os.path.isdir("/proc/self")


def _read_proc(pid: int, name: str, size: int) -> bytes:
    with open(f"/proc/{int(pid)}/{name}", "rb") as fp:
        return fp.read(size)


def _ps_call(pid: int, func: Callable[[psutil.Process], _T]) -> _T:
    try:
        return func(psutil.Process(pid))
    except psutil.NoSuchProcess as err:
        raise ProcessLookupError(errno.ESRCH, f"no process {pid}") from err
    except psutil.AccessDenied as err:
        raise PermissionError(errno.EACCES, f"access denied to process {pid}") from err


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="surrogateescape")


def readproccmdline(pid: int) -> str:
    """Return the full command line of ``pid`` with arguments joined by spaces."""
    if not _have_proc():
        return " ".join(_ps_call(pid, lambda p: p.cmdline()))
    data = _read_proc(pid, "cmdline", _CMDLINE_MAX)
    if data:
        data = data[:-1].replace(b"\0", b" ") + data[-1:]
    return _decode(data.split(b"\0", 1)[0])


def readproccmd(pid: int) -> str:
    """Return the command (first argument) of ``pid``."""
    if not _have_proc():
        return _ps_call(pid, lambda p: p.name())
    data = _read_proc(pid, "cmdline", _CMDLINE_MAX)
    return _decode(data.split(b"\0", 1)[0])


def readprocstat(pid: int) -> ProcStat:
    """Return selected fields of ``/proc/<pid>/stat``."""
    if not _have_proc():
        raise OSError(errno.ENOSYS, "process stat records are not available")
    text = _decode(_read_proc(pid, "stat", _STAT_MAX))
    try:
        head, _, tail = text.partition(" (")
        comm, _, rest = tail.rpartition(") ")
        fields = rest.split()
        return ProcStat(
            pid=int(head),
            comm=comm,
            state=fields[0],
            ppid=int(fields[1]),
            pgrp=int(fields[2]),
            session=int(fields[3]),
            starttime=int(fields[19]),
        )
    except (ValueError, IndexError) as err:
        raise ValueError(f"malformed stat record for process {pid}") from err


def _cmdline_or_empty(pid: int) -> str:
    try:
        return readproccmdline(pid)
    except OSError:
        return ""


def findpid(cmd: str, start_pid: int = 0) -> Optional[int]:
    """Return the first pid above ``start_pid`` whose command line contains ``cmd``."""
    if _have_proc():
        pids = (int(name) for name in os.listdir("/proc") if name.isdigit())
    else:
        pids = iter(psutil.pids())
    for pid in pids:
        if pid <= start_pid:
            continue
        if cmd in _cmdline_or_empty(pid):
            return pid
    return None


def dump_stack() -> None:
    """Print the current call stack to standard output, one frame per entry."""
    for entry in traceback.format_stack():
        print(entry.rstrip("\n"))