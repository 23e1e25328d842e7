"""
One-time initialization tracking.

InitializationContext runs each keyed initializer at most once and hands the
result to every later caller. It is an explicit object passed to whoever
needs it, not a module-level singleton, so tests and separate services each
get their own state.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InitState(Enum):
    """Initialization states for a single key."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class InitializationContext:
    """
    Runs initializers once per key.

    Concurrent callers for the same key block until the first caller's
    initializer finishes and then receive its result. A failing initializer
    leaves the key NOT_STARTED (so the next call retries) and re-raises.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._key_locks: Dict[str, threading.Lock] = {}
        self._states: Dict[str, InitState] = {}
        self._results: Dict[str, Any] = {}

    def _key_lock(self, key: str) -> threading.Lock:
        with self._lock:
            if key not in self._key_locks:
                self._key_locks[key] = threading.Lock()
            return self._key_locks[key]

    def state(self, key: str) -> InitState:
        """Get the initialization state for a key."""
        with self._lock:
            return self._states.get(key, InitState.NOT_STARTED)

    def run_once(self, key: str, init_fn: Callable[[], T]) -> T:
        """
        Run init_fn for key unless it already completed.

        Args:
            key: Initialization key
            init_fn: Zero-argument initializer

        Returns:
            The initializer's result (cached after the first success)
        """
        with self._key_lock(key):
            with self._lock:
                if self._states.get(key) is InitState.DONE:
                    return self._results[key]
                self._states[key] = InitState.IN_PROGRESS

            logger.debug(f"[{self.name}] Initializing '{key}'")
            try:
                result = init_fn()
            except Exception:
                with self._lock:
                    self._states[key] = InitState.NOT_STARTED
                logger.warning(f"[{self.name}] Initialization of '{key}' failed, will retry on next call")
                raise

            with self._lock:
                self._results[key] = result
                self._states[key] = InitState.DONE

            logger.debug(f"[{self.name}] Initialized '{key}'")
            return result

    def reset(self, key: str) -> None:
        """Forget a key so its initializer runs again (e.g. after logout)."""
        with self._lock:
            self._states.pop(key, None)
            self._results.pop(key, None)

    def reset_all(self) -> None:
        """Forget every key."""
        with self._lock:
            self._states.clear()
            self._results.clear()
