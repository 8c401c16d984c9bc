import errno
import os

import pytest

from samlib.mpool import MPOOL_DIRTY, MPool, Page

PAGESIZE = 64


@pytest.fixture
def dbfile(tmp_path):
    path = tmp_path / "pages.db"
    fd = os.open(path, os.O_RDWR | os.O_CREAT, 0o644)
    yield path, fd
    os.close(fd)


def _fill(fd, pages):
    for i in range(pages):
        os.write(fd, bytes([i + 1]) * PAGESIZE)


def test_npages_from_file_size(dbfile):
    path, fd = dbfile
    _fill(fd, 3)
    with MPool(fd, PAGESIZE, 4) as pool:
        assert pool.npages == 3


def test_get_reads_contents(dbfile):
    path, fd = dbfile
    _fill(fd, 3)
    with MPool(fd, PAGESIZE, 4) as pool:
        page = pool.get(1)
        assert page.pgno == 1
        assert bytes(page.data) == bytes([2]) * PAGESIZE
        assert page.pinned


def test_get_past_end_raises(dbfile):
    path, fd = dbfile
    _fill(fd, 2)
    with MPool(fd, PAGESIZE, 4) as pool:
        with pytest.raises(OSError) as info:
            pool.get(2)
        assert info.value.errno == errno.EINVAL


def test_cache_hit_returns_same_page(dbfile):
    path, fd = dbfile
    _fill(fd, 2)
    with MPool(fd, PAGESIZE, 4) as pool:
        first = pool.get(0)
        pool.put(first)
        assert not first.pinned
        second = pool.get(0)
        assert second is first
        assert second.pinned


def test_new_assigns_increasing_numbers(dbfile):
    path, fd = dbfile
    _fill(fd, 2)
    with MPool(fd, PAGESIZE, 4) as pool:
        a = pool.new()
        b = pool.new()
        assert (a.pgno, b.pgno) == (2, 3)
        assert pool.npages == 4
        assert bytes(a.data) == bytes(PAGESIZE)


def test_dirty_page_written_on_sync(dbfile):
    path, fd = dbfile
    with MPool(fd, PAGESIZE, 4) as pool:
        page = pool.new()
        page.data[:] = b"x" * PAGESIZE
        pool.put(page, MPOOL_DIRTY)
        assert page.dirty
        pool.sync()
        assert not page.dirty
    assert path.read_bytes() == b"x" * PAGESIZE


def test_clean_page_not_written(dbfile):
    path, fd = dbfile
    with MPool(fd, PAGESIZE, 4) as pool:
        page = pool.new()
        assert page.pgno == 0
        page.data[:] = b"y" * PAGESIZE
        pool.put(page)
        assert not page.dirty
        pool.sync()
        assert pool.npages == 1
    assert path.read_bytes() == b""


def test_filters_called(dbfile):
    path, fd = dbfile
    calls = []

    def pgin(cookie, pgno, data):
        calls.append(("in", cookie, pgno))

    def pgout(cookie, pgno, data):
        calls.append(("out", cookie, pgno))
        data[0] = ord("z")

    with MPool(fd, PAGESIZE, 4) as pool:
        pool.filter(pgin, pgout, "cookie")
        page = pool.new()
        assert page.pgno == 0
        pool.put(page, MPOOL_DIRTY)
        pool.sync()
    assert calls == [("out", "cookie", 0)]
    assert path.read_bytes()[:1] == b"z"

    calls.clear()
    with MPool(fd, PAGESIZE, 4) as pool:
        pool.filter(pgin, pgout, "cookie")
        again = pool.get(0)
        assert bytes(again.data[:1]) == b"z"
    assert calls == [("in", "cookie", 0)]


def test_eviction_flushes_dirty_page(dbfile):
    path, fd = dbfile
    with MPool(fd, PAGESIZE, 1) as pool:
        page0 = pool.new()
        page0.data[:] = b"a" * PAGESIZE
        pool.put(page0, MPOOL_DIRTY)
        page1 = pool.new()
        assert page1.pgno == 1
        assert pool.curcache == 1
        assert path.read_bytes() == b"a" * PAGESIZE
        pool.put(page1)
        again = pool.get(0)
        assert bytes(again.data) == b"a" * PAGESIZE


def test_pinned_pages_grow_cache(dbfile):
    path, fd = dbfile
    with MPool(fd, PAGESIZE, 1) as pool:
        page0 = pool.new()
        page1 = pool.new()
        assert page0 is not page1
        assert pool.curcache == 2
        assert page0.pinned and page1.pinned


def test_short_read_raises(dbfile):
    path, fd = dbfile
    _fill(fd, 2)
    with MPool(fd, PAGESIZE, 4) as pool:
        os.ftruncate(fd, PAGESIZE + PAGESIZE // 2)
        with pytest.raises(OSError):
            pool.get(1)


def test_pipe_rejected():
    rfd, wfd = os.pipe()
    try:
        with pytest.raises(OSError) as info:
            MPool(rfd, PAGESIZE, 4)
        assert info.value.errno == errno.ESPIPE
    finally:
        os.close(rfd)
        os.close(wfd)


def test_closed_pool_rejects_get(dbfile):
    path, fd = dbfile
    _fill(fd, 1)
    pool = MPool(fd, PAGESIZE, 4)
    pool.get(0)
    pool.close()
    assert pool.curcache == 0
    with pytest.raises(ValueError):
        pool.get(0)


def test_page_flags_properties():
    page = Page(pgno=5, data=bytearray(4), flags=MPOOL_DIRTY)
    assert page.dirty
    assert not page.pinned