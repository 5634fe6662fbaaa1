"""Best-effort background work for page loaders.

Deferred data is started before the critical query and resolved later by the
presentation layer. A deferred call never raises: failures are logged and the
handle resolves to ``None``.
"""

from __future__ import annotations

import atexit
import logging
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor, as_completed
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)


class Deferred:
    """Handle to one deferred result. ``result()`` returns the value or None."""

    def __init__(self, name: str, future: Future):
        self.name = name
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def cancel(self) -> bool:
        return self._future.cancel()

    def result(self, timeout: Optional[float] = None) -> Any:
        """Block until resolved.

        Returns None when the work failed or was cancelled. A timeout only
        stops the wait; the handle stays pending.

        Raises:
            concurrent.futures.TimeoutError: ``timeout`` elapsed first.
        """
        try:
            return self._future.result(timeout=timeout)
        except CancelledError:
            return None

    def __repr__(self) -> str:
        state = "done" if self.done() else "pending"
        return f"<Deferred {self.name} {state}>"


def _swallow(name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    try:
        return fn(*args, **kwargs)
    except Exception:
        logger.exception("deferred load %r failed; resolving to None", name)
        return None


class DeferredRunner:
    """Flask extension owning the thread pools used by page loaders.

    Deferred (best-effort) work and critical fan-out run on separate pools so
    a backlog of slow deferred queries never holds up a critical response.
    """

    def __init__(self, max_workers: Optional[int] = None):
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._critical_executor: Optional[ThreadPoolExecutor] = None
        self._atexit_registered = False

    def init_app(self, app) -> None:
        # Pools built for a previous app keep their old size; start fresh.
        self.shutdown(wait=False)
        self.max_workers = int(app.config.get("DEFERRED_MAX_WORKERS", 8))
        if not self._atexit_registered:
            atexit.register(self.shutdown, False)
            self._atexit_registered = True
        app.extensions["deferred_runner"] = self

    @property
    def executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="deferred")
        return self._executor

    @property
    def critical_executor(self) -> ThreadPoolExecutor:
        if self._critical_executor is None:
            self._critical_executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="critical")
        return self._critical_executor

    def submit(self, name: str, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Deferred:
        return Deferred(name, self.executor.submit(_swallow, name, fn, *args, **kwargs))

    def map(self, fn: Callable[[Any], Any], items) -> list:
        """Run ``fn`` over ``items`` concurrently; exceptions propagate (critical path)."""
        return list(self.critical_executor.map(fn, items))

    def shutdown(self, wait: bool = True) -> None:
        for executor in (self._executor, self._critical_executor):
            if executor is not None:
                executor.shutdown(wait=wait)
        self._executor = None
        self._critical_executor = None


def resolve_all(deferred: Dict[str, Deferred], timeout: Optional[float] = None) -> Dict[str, Any]:
    return {name: handle.result(timeout=timeout) for name, handle in deferred.items()}


def as_resolved(deferred: Dict[str, Deferred]) -> Iterator[Tuple[str, Any]]:
    """Yield ``(name, value)`` pairs in completion order."""
    by_future = {handle._future: handle for handle in deferred.values()}
    for future in as_completed(by_future):
        handle = by_future[future]
        yield handle.name, handle.result()
