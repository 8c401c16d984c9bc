"""A page cache over a file of fixed-size pages.

Pages are read on demand, kept in least-recently-used order and written
back when dirty, either when their buffer is reused or on :meth:`MPool.sync`.
Pages handed out are pinned until returned with :meth:`MPool.put`; pinned
pages are never evicted, so the cache grows past its limit if it must.
"""

from __future__ import annotations

import errno
import os
import stat
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Optional

MPOOL_DIRTY = 0x01
MPOOL_PINNED = 0x02

MAX_PAGE_NUMBER = 0xFFFFFFFF

PageFilter = Callable[[Any, int, bytearray], None]

_EFTYPE = getattr(errno, "EFTYPE", errno.EINVAL)


@dataclass(eq=False)
class Page:
    """One cached page: its number, its bytes and its pinned/dirty state."""

    pgno: int
    data: bytearray
    flags: int = 0

    @property
    def pinned(self) -> bool:
        """True while the page is handed out."""
        return bool(self.flags & MPOOL_PINNED)

    @property
    def dirty(self) -> bool:
        """True if the page has changes not yet written to the file."""
        return bool(self.flags & MPOOL_DIRTY)


class MPool:
    """A cache of ``pagesize`` pages of the regular file open on ``fd``.

    The file descriptor stays owned by the caller and is not closed.
    """

    def __init__(self, fd: int, pagesize: int, maxcache: int) -> None:
        if pagesize <= 0:
            raise ValueError("pagesize must be positive")
        sb = os.fstat(fd)
        if not stat.S_ISREG(sb.st_mode):
            raise OSError(errno.ESPIPE, os.strerror(errno.ESPIPE))
        self.fd = fd
        self.pagesize = pagesize
        self.maxcache = maxcache
        self.npages = sb.st_size // pagesize
        self.curcache = 0
        self._cache: "OrderedDict[int, Page]" = OrderedDict()
        self._pgin: Optional[PageFilter] = None
        self._pgout: Optional[PageFilter] = None
        self._cookie: Any = None
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("operation on a closed pool")

    def filter(self, pgin: Optional[PageFilter], pgout: Optional[PageFilter],
               cookie: Any = None) -> None:
        """Set functions run on each page after reading and before writing.

        Each is called as ``func(cookie, pgno, data)`` and may change
        ``data`` in place.
        """
        self._pgin = pgin
        self._pgout = pgout
        self._cookie = cookie

    def _write(self, page: Page) -> None:
        if self._pgout is not None:
            self._pgout(self._cookie, page.pgno, page.data)
        off = self.pagesize * page.pgno
        if os.lseek(self.fd, off, os.SEEK_SET) != off:
            raise OSError(errno.EIO, "seek failed")
        if os.write(self.fd, bytes(page.data)) != self.pagesize:
            raise OSError(errno.EIO, "short write")
        page.flags &= ~MPOOL_DIRTY

    def _bucket(self) -> Page:
        """Return a free page buffer, flushing an unpinned page if needed."""
        if self.curcache >= self.maxcache:
            victim = next((p for p in self._cache.values() if not p.pinned), None)
            if victim is not None:
                if victim.dirty:
                    self._write(victim)
                del self._cache[victim.pgno]
                return victim
        self.curcache += 1
        return Page(pgno=-1, data=bytearray(self.pagesize))

    def new(self) -> Page:
        """Add a new zero-filled page at the end of the file and return it pinned."""
        self._check_open()
        if self.npages == MAX_PAGE_NUMBER:
            raise OSError(errno.EFBIG, "no more page numbers")
        page = self._bucket()
        page.data[:] = bytes(self.pagesize)
        page.pgno = self.npages
        self.npages += 1
        page.flags = MPOOL_PINNED
        self._cache[page.pgno] = page
        return page

    def get(self, pgno: int) -> Page:
        """Return page ``pgno`` pinned, reading it from the file if not cached."""
        self._check_open()
        if not 0 <= pgno < self.npages:
            raise OSError(errno.EINVAL, f"no page {pgno}")

        page = self._cache.get(pgno)
        if page is not None:
            self._cache.move_to_end(pgno)
            page.flags |= MPOOL_PINNED
            return page

        page = self._bucket()
        off = self.pagesize * pgno
        if os.lseek(self.fd, off, os.SEEK_SET) != off:
            raise OSError(errno.EIO, "seek failed")
        data = os.read(self.fd, self.pagesize)
        if len(data) != self.pagesize:
            raise OSError(_EFTYPE, f"short read of page {pgno}")
        page.data[:] = data
        page.pgno = pgno
        page.flags = MPOOL_PINNED
        self._cache[pgno] = page

        if self._pgin is not None:
            self._pgin(self._cookie, pgno, page.data)
        return page

    def put(self, page: Page, flags: int = 0) -> None:
        """Unpin ``page``; with ``MPOOL_DIRTY`` it is marked for writing."""
        page.flags &= ~MPOOL_PINNED
        page.flags |= flags & MPOOL_DIRTY

    def sync(self) -> None:
        """Write every dirty page to the file and flush it to disk."""
        self._check_open()
        for page in list(self._cache.values()):
            if page.dirty:
                self._write(page)
        os.fsync(self.fd)

    def close(self) -> None:
        """Drop all cached pages without writing them."""
        self._cache.clear()
        self.curcache = 0
        self._closed = True

    def __enter__(self) -> "MPool":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()