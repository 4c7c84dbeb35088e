"""Module that implements the initialize-once holder of the connection handle."""

from __future__ import annotations

from enum import auto, Enum
import threading
from typing import Any, Callable, Optional

from hdfsadapter.errors import HdfsConnectionError, Phase


class CacheState(Enum):
    """Lifecycle states of the cached handle."""

    UNINITIALIZED = auto()
    INITIALIZING = auto()
    READY = auto()


class _Attempt:
    """One-shot result of a single in-flight initialization."""

    def __init__(self) -> None:
        self.done = threading.Event()
        self.handle: Any = None
        self.error: Optional[BaseException] = None


class ConnectionCache:
    """
    Lazily populated slot holding a single connection handle.

    The first caller to find the slot empty runs the initialization function. Callers
    that arrive while it is running wait for that attempt and receive its handle or its
    error; they never start an initialization of their own in parallel. Once a handle
    has been stored it is returned without taking any lock, and it is never replaced.

    A failed attempt leaves the slot empty so that the next call retries from scratch,
    unless cache_failures is set, in which case every subsequent caller gets an error
    chained to the first failure.
    """

    def __init__(self, cache_failures: bool = False):
        """Instantiate an empty connection cache."""
        self._cache_failures = cache_failures

        self._lock = threading.Lock()
        self._handle: Any = None
        self._attempt: Optional[_Attempt] = None
        self._failure: Optional[Exception] = None

    @property
    def state(self) -> CacheState:
        """Return the current lifecycle state."""
        with self._lock:
            if self._handle is not None:
                return CacheState.READY
            elif self._attempt is not None:
                return CacheState.INITIALIZING
            else:
                return CacheState.UNINITIALIZED

    def get_or_init(self, init_fn: Callable[[], Any]) -> Any:
        """Return the cached handle, initializing it with init_fn if needed."""
        handle = self._handle
        if handle is not None:
            return handle

        with self._lock:
            if self._handle is not None:
                return self._handle

            if self._failure is not None:
                raise HdfsConnectionError(
                    "an earlier initialization failed", self._failure_phase()
                ) from self._failure

            attempt = self._attempt
            owner = attempt is None

            if attempt is None:
                attempt = self._attempt = _Attempt()

        if owner:
            return self._initialize(attempt, init_fn)

        attempt.done.wait()

        if attempt.error is not None:
            raise attempt.error

        return attempt.handle

    def _failure_phase(self) -> Optional[Phase]:
        if isinstance(self._failure, HdfsConnectionError):
            return self._failure.phase

        return None

    def _initialize(self, attempt: _Attempt, init_fn: Callable[[], Any]) -> Any:
        try:
            handle = init_fn()

            if handle is None:
                raise ValueError("initialization did not produce a handle")
        except BaseException as e:
            attempt.error = e

            with self._lock:
                self._attempt = None

                if self._cache_failures and isinstance(e, Exception):
                    self._failure = e

            attempt.done.set()
            raise

        attempt.handle = handle

        with self._lock:
            self._handle = handle
            self._attempt = None

        attempt.done.set()

        return handle
