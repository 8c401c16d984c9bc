import os
import stat

import pytest

from samlib.files import create_file, is_elf, mkdir_p, mktempfile, tmpfilename


def test_create_file_length_and_mode(tmp_path):
    path = tmp_path / "f"
    create_file(path, 4096, 0o600)
    assert os.path.getsize(path) == 4096
    assert stat.S_IMODE(os.stat(path).st_mode) == 0o600


def test_create_file_default_length(tmp_path):
    path = tmp_path / "g"
    create_file(path)
    assert os.path.getsize(path) == 0


def test_create_file_exists(tmp_path):
    path = tmp_path / "f"
    path.write_text("x")
    with pytest.raises(FileExistsError):
        create_file(path, 10)
    assert path.read_text() == "x"


def test_mktempfile_uses_tmpdir(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    fd, path = mktempfile()
    try:
        os.write(fd, b"data")
    finally:
        os.close(fd)
    assert os.path.dirname(path) == str(tmp_path)
    assert os.path.basename(path).startswith("tmp.")
    assert open(path, "rb").read() == b"data"


def test_mktempfile_unique(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    fd1, p1 = mktempfile()
    fd2, p2 = mktempfile()
    os.close(fd1)
    os.close(fd2)
    assert p1 != p2 and os.path.exists(p1) and os.path.exists(p2)


def test_tmpfilename(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    assert tmpfilename("foo") == f"{tmp_path}/foo"
    assert tmpfilename("///foo") == f"{tmp_path}/foo"
    assert tmpfilename() == str(tmp_path)


def test_tmpfilename_trailing_slash(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", f"{tmp_path}/")
    assert tmpfilename("foo") == f"{tmp_path}/foo"


def test_tmpfilename_default(monkeypatch):
    monkeypatch.setenv("TMPDIR", "")
    assert tmpfilename() == "/tmp"
    assert tmpfilename("x") == "/tmp/x"


def test_mkdir_p_nested(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    mkdir_p(target)
    assert target.is_dir()


def test_mkdir_p_trailing_slash(tmp_path):
    mkdir_p(f"{tmp_path}/x/y/")
    assert (tmp_path / "x" / "y").is_dir()


def test_mkdir_p_existing(tmp_path):
    mkdir_p(tmp_path)
    assert tmp_path.is_dir()


def test_mkdir_p_under_file_fails(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(OSError):
        mkdir_p(blocker / "sub" / "deeper")


def test_is_elf(tmp_path):
    elf = tmp_path / "elf"
    elf.write_bytes(b"\x7fELF\x02\x01\x01")
    script = tmp_path / "script"
    script.write_bytes(b"#!/bin/sh\n")
    assert is_elf(elf) is True
    assert is_elf(script) is False


def test_is_elf_short_file(tmp_path):
    short = tmp_path / "short"
    short.write_bytes(b"ab")
    with pytest.raises(OSError):
        is_elf(short)


def test_is_elf_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        is_elf(tmp_path / "missing")