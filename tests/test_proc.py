import os
import subprocess
import sys
import uuid

import pytest

from samlib.proc import dump_stack, findpid, readproccmd, readproccmdline, readprocstat

_MISSING_PID = 2**31 - 1


@pytest.fixture
def child():
    tag = uuid.uuid4().hex
    args = [sys.executable, "-c", "import time; print('ready', flush=True); time.sleep(60)", tag]
    proc = subprocess.Popen(args, stdout=subprocess.PIPE, text=True)
    proc.stdout.readline()
    yield proc, args, tag
    proc.kill()
    proc.wait()
    proc.stdout.close()


def test_readproccmdline(child):
    proc, args, _ = child
    assert readproccmdline(proc.pid) == " ".join(args)


def test_readproccmd(child):
    proc, args, _ = child
    assert readproccmd(proc.pid) == args[0]


def test_readprocstat(child):
    proc, _, _ = child
    info = readprocstat(proc.pid)
    assert info.pid == proc.pid
    assert info.ppid == os.getpid()
    assert info.state in ("S", "R")
    assert info.starttime > 0


def test_findpid(child):
    proc, _, tag = child
    assert findpid(tag, 0) == proc.pid
    assert findpid(tag, proc.pid) is None


def test_findpid_no_match():
    assert findpid(uuid.uuid4().hex + "-absent", 0) is None


def test_missing_process():
    with pytest.raises(OSError):
        readproccmdline(_MISSING_PID)
    with pytest.raises(OSError):
        readproccmd(_MISSING_PID)
    with pytest.raises(OSError):
        readprocstat(_MISSING_PID)


def test_dump_stack_prints_frames(capsys):
    dump_stack()
    out = capsys.readouterr().out
    assert "test_dump_stack_prints_frames" in out
    assert "dump_stack" in out