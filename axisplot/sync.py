from __future__ import annotations

from contextlib import contextmanager
import logging
import threading
from typing import Callable, Generic, Iterator, TypeVar


LOGGER = logging.getLogger(__name__)
T = TypeVar("T")


class RWLock:
    """Many-readers / single-writer lock. Writers are preferred; not re-entrant."""

    def __init__(self) -> None:
        self._cv = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cv:
            while self._writer or self._waiting_writers > 0:
                self._cv.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cv:
            if self._readers <= 0:
                raise RuntimeError("release_read called without a matching acquire_read")
            self._readers -= 1
            if self._readers == 0:
                self._cv.notify_all()

    def acquire_write(self) -> None:
        with self._cv:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers > 0:
                    self._cv.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cv:
            if not self._writer:
                raise RuntimeError("release_write called without a matching acquire_write")
            self._writer = False
            self._cv.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def reader_count(self) -> int:
        with self._cv:
            return self._readers

    @property
    def write_held(self) -> bool:
        with self._cv:
            return self._writer


class Shared(Generic[T]):
    """Shared-ownership handle around a mutable model.

    Readers (render passes) use :meth:`read`; writers use :meth:`write` and should
    keep the critical section short. Change listeners run after the write lock is
    released, on the writing thread.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._lock = RWLock()
        self._revision = 0
        self._listeners: list[Callable[[], None]] = []
        self._listeners_lock = threading.Lock()

    @property
    def revision(self) -> int:
        return self._revision

    @contextmanager
    def read(self) -> Iterator[T]:
        with self._lock.read_locked():
            yield self._value

    @contextmanager
    def write(self, *, notify: bool = True) -> Iterator[T]:
        with self._lock.write_locked():
            yield self._value
            self._revision += 1
        if notify:
            self._notify()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        first_error: Exception | None = None
        for listener in listeners:
            try:
                listener()
            except Exception as exc:
                LOGGER.warning("shared model change listener failed: %r", listener, exc_info=True)
                if first_error is None:
                    first_error = exc
        # Every listener sees the change before the first failure propagates.
        if first_error is not None:
            raise first_error
