"""File creation, temporary names, recursive mkdir and ELF detection."""

from __future__ import annotations

import errno
import os
import sys
import tempfile
from typing import Optional, Union

PathLike = Union[str, "os.PathLike[str]"]

ELF_MAGIC = b"\x7fELF"
_DEFAULT_TMP = "/tmp"


def _tmpdir() -> str:
    if sys.platform == "win32":
        return tempfile.gettempdir()
    return os.environ.get("TMPDIR") or _DEFAULT_TMP


def create_file(fname: PathLike, length: int = 0, mode: int = 0) -> None:
    """Create ``fname`` of ``length`` bytes; mode 0 means 0o644.

    Raises FileExistsError if the file already exists.
    """
    if os.path.lexists(fname):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), os.fspath(fname))
    if mode == 0:
        mode = 0o644
    fd = os.open(fname, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    try:
        os.ftruncate(fd, length)
    finally:
        os.close(fd)


def mktempfile() -> tuple[int, str]:
    """Create a new ``tmp.*`` file in the temp directory.

    Returns an open file descriptor and the file's path.
    """
    return tempfile.mkstemp(prefix="tmp.", dir=_tmpdir())


def tmpfilename(fname: Optional[str] = None) -> str:
    """Return ``fname`` placed in the temp directory, or the directory itself."""
    out = _tmpdir()
    if len(out) > 1:
        out = out.rstrip("/") or "/"
    if fname is not None:
        if not out.endswith("/"):
            out += "/"
        out += fname.lstrip("/")
    return out


def mkdir_p(path: PathLike, mode: int = 0o777) -> None:
    """Create ``path`` and any missing parents; an existing path is not an error."""
    path = os.fspath(path)
    try:
        os.mkdir(path, mode)
        return
    except FileExistsError:
        return
    except FileNotFoundError:
        pass

    start = 1 if path.startswith("/") else 0
    slash = path.find("/", start)
    while slash >= 0:
        try:
            os.mkdir(path[:slash], mode)
        except FileExistsError:
            pass
        slash = path.find("/", slash + 1)

    try:
        os.mkdir(path, mode)
    except FileExistsError:
        pass


def is_elf(path: PathLike) -> bool:
    """True if the file starts with the ELF magic bytes.

    Raises OSError (EINVAL) for files shorter than the magic.
    """
    with open(path, "rb") as fp:
        head = fp.read(len(ELF_MAGIC))
    if len(head) != len(ELF_MAGIC):
        raise OSError(errno.EINVAL, "file too short", os.fspath(path))
    return head == ELF_MAGIC