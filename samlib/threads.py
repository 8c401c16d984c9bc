"""Simple threads that return an int, plus a mutex and a spinlock."""

from __future__ import annotations

import os
import threading
from typing import Any, Callable, Optional

ThreadFunc = Callable[[Any], int]


def _yield() -> None:
    sched_yield = getattr(os, "sched_yield", None)
    if sched_yield is not None:
        sched_yield()
    else:
        threading.Event().wait(0)


class SamThread:
    """A thread running ``fn(arg)``; :meth:`join` returns its result."""

    def __init__(self, fn: ThreadFunc, arg: Any = None) -> None:
        if fn is None:
            raise ValueError("fn is required")
        self._fn = fn
        self._arg = arg
        self._rc = -1
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        try:
            self._rc = self._fn(self._arg)
        except BaseException as err:  # re-raised in join()
            self._error = err

    def join(self) -> int:
        """Wait for the thread and return what the function returned.

        An exception raised by the function is raised here.
        """
        self._thread.join()
        if self._error is not None:
            raise self._error
        return self._rc


def samthread_create(fn: ThreadFunc, arg: Any = None) -> SamThread:
    """Start a thread running ``fn(arg)``."""
    return SamThread(fn, arg)


def samthread_join(thread: SamThread) -> int:
    """Wait for ``thread`` and return its result."""
    if thread is None:
        raise ValueError("thread is required")
    return thread.join()


def samthread_tid() -> int:
    """Return the operating-system id of the calling thread."""
    return threading.get_native_id()


class Mutex:
    """A non-recursive lock. Once destroyed, lock and unlock do nothing."""

    def __init__(self) -> None:
        self._lock: Optional[threading.Lock] = threading.Lock()

    @property
    def locked(self) -> bool:
        """True while some thread holds the mutex."""
        return self._lock is not None and self._lock.locked()

    @property
    def destroyed(self) -> bool:
        """True once :meth:`destroy` has been called."""
        return self._lock is None

    def lock(self) -> None:
        """Block until the mutex is held."""
        if self._lock is not None:
            self._lock.acquire()

    def unlock(self) -> None:
        """Release the mutex; releasing an unheld mutex raises RuntimeError."""
        if self._lock is not None:
            self._lock.release()

    def destroy(self) -> None:
        """Take the mutex one last time and retire it."""
        lock = self._lock
        if lock is None:
            return
        lock.acquire()
        self._lock = None
        lock.release()

    def __enter__(self) -> "Mutex":
        self.lock()
        return self

    def __exit__(self, *exc: object) -> None:
        self.unlock()


class Spinlock:
    """A lock that busy-waits, yielding the processor between attempts."""

    def __init__(self) -> None:
        self._flag = threading.Lock()

    @property
    def locked(self) -> bool:
        """True while the spinlock is held."""
        return self._flag.locked()

    def lock(self) -> None:
        """Spin until the lock is taken."""
        while not self._flag.acquire(blocking=False):
            _yield()

    def unlock(self) -> None:
        """Release the lock; releasing a free spinlock does nothing."""
        if self._flag.locked():
            self._flag.release()

    def __enter__(self) -> "Spinlock":
        self.lock()
        return self

    def __exit__(self, *exc: object) -> None:
        self.unlock()