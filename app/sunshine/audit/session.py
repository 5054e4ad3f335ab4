"""Multi-root scan sessions.

Each requested root is walked by its own task on a thread pool. Two
delivery strategies are offered:

- :func:`scan` collects every root into its own list and merges them
  once all roots have finished.
- :func:`start_session` streams findings through an unbounded queue
  that never blocks producers; a completion thread enqueues a single
  marker after every root task has terminated.
"""

import logging
import os
import queue
import threading
from collections.abc import Iterable, Iterator
from concurrent.futures import Future, ThreadPoolExecutor, wait
from pathlib import Path

from sunshine.audit.classifier import EntryClassifier
from sunshine.audit.errors import HomeDirectoryUnavailableError
from sunshine.audit.models import Finding, ScanResult
from sunshine.audit.policy import build_catalog
from sunshine.audit.walker import walk

logger = logging.getLogger(__name__)

_THREAD_PREFIX = "sunshine-root"


class _Complete:
    """Completion marker placed on a session queue exactly once."""

    def __repr__(self) -> str:
        return "<scan complete>"


COMPLETE = _Complete()


def resolve_home(home: str | Path | None = None) -> str:
    """Resolve the current user's home directory.

    Args:
        home: Explicit home directory. If None, uses the environment.

    Returns:
        Absolute, normalized home directory path.

    Raises:
        HomeDirectoryUnavailableError: If no home directory can be found.
    """
    if home is None:
        # An empty $HOME makes pathlib fall back to "/"
        if os.environ.get("HOME") == "":
            msg = "Cannot determine home directory: $HOME is empty"
            raise HomeDirectoryUnavailableError(msg)
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as e:
            msg = f"Cannot determine home directory: {e}"
            raise HomeDirectoryUnavailableError(msg) from e

    home_str = str(home)
    if not home_str or home_str.startswith("~"):
        msg = "Cannot determine home directory"
        raise HomeDirectoryUnavailableError(msg)

    return os.path.normpath(os.path.abspath(home_str))


def _collect_root(root: str, classifier: EntryClassifier) -> list[Finding]:
    """Walk one root to completion and return its findings in order."""
    findings = list(walk(root, classifier))
    logger.debug("Finished %s with %d finding(s)", root, len(findings))
    return findings


def scan(
    roots: Iterable[str | Path],
    *,
    home: str | Path | None = None,
    max_workers: int | None = None,
) -> ScanResult:
    """Scan roots concurrently and return the merged result.

    Blocks until every root has been scanned. Findings are merged in
    root order; within a root they keep traversal order.

    Args:
        roots: Paths to scan.
        home: Home directory override (defaults to the current user's).
        max_workers: Thread pool size (defaults to one per root).

    Returns:
        ScanResult with all warnings and errors.

    Raises:
        HomeDirectoryUnavailableError: If the home directory cannot be
            resolved. No root is scanned in that case.
    """
    home_dir = resolve_home(home)
    root_paths = [str(r) for r in roots]
    if not root_paths:
        return ScanResult()

    classifier = EntryClassifier(build_catalog(home_dir))
    workers = max_workers or len(root_paths)
    logger.debug("Scanning %d root(s) with %d worker(s)", len(root_paths), workers)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=_THREAD_PREFIX) as executor:
        per_root = list(executor.map(lambda r: _collect_root(r, classifier), root_paths))

    return ScanResult.from_findings([f for findings in per_root for f in findings])


class ScanSession:
    """Streaming scan across several roots.

    Findings from all roots are delivered through one queue. Consumers
    iterate :meth:`findings` until the completion marker is seen, or
    call :meth:`result` to drain everything at once.

    Args:
        roots: Paths to scan.
        home: Resolved home directory.
        max_workers: Thread pool size (defaults to one per root).
    """

    def __init__(
        self,
        roots: Iterable[str | Path],
        *,
        home: str,
        max_workers: int | None = None,
    ) -> None:
        self._roots = tuple(str(r) for r in roots)
        self._home = home
        self._classifier = EntryClassifier(build_catalog(home))
        self._max_workers = max_workers or max(len(self._roots), 1)

        self._queue: queue.Queue[Finding | _Complete] = queue.Queue()
        self._done = threading.Event()
        self._failures: list[BaseException] = []
        self._lock = threading.Lock()
        self._started = False
        self._drained = False

    @property
    def roots(self) -> tuple[str, ...]:
        return self._roots

    @property
    def home(self) -> str:
        return self._home

    @property
    def is_done(self) -> bool:
        """True once every root task has terminated."""
        return self._done.is_set()

    def start(self) -> "ScanSession":
        """Launch one task per root and the completion task.

        Returns:
            The session itself, for chaining.

        Raises:
            RuntimeError: If the session was already started.
        """
        with self._lock:
            if self._started:
                msg = "Scan session already started"
                raise RuntimeError(msg)
            self._started = True

        executor = ThreadPoolExecutor(
            max_workers=self._max_workers,
            thread_name_prefix=_THREAD_PREFIX,
        )
        futures = [executor.submit(self._scan_root, root) for root in self._roots]
        # Already submitted tasks keep running after shutdown
        executor.shutdown(wait=False)

        completion = threading.Thread(
            target=self._await_completion,
            args=(futures,),
            name="sunshine-completion",
            daemon=True,
        )
        completion.start()
        return self

    def wait(self, timeout: float | None = None) -> bool:
        """Block until every root task has terminated.

        Args:
            timeout: Maximum seconds to wait (None = forever).

        Returns:
            True if the session completed within the timeout.
        """
        return self._done.wait(timeout)

    def findings(self) -> Iterator[Finding]:
        """Yield findings as they arrive until the completion marker.

        Yields:
            PolicyWarning and ScanError instances.

        Raises:
            RuntimeError: If the session was never started.
            Exception: The first unexpected exception raised by a root
                task, re-raised after the marker.
        """
        if not self._started:
            msg = "Scan session not started"
            raise RuntimeError(msg)

        if not self._drained:
            while True:
                item = self._queue.get()
                if isinstance(item, _Complete):
                    break
                yield item
            self._drained = True

        if self._failures:
            raise self._failures[0]

    def result(self) -> ScanResult:
        """Drain the session and return the merged result."""
        return ScanResult.from_findings(list(self.findings()))

    def _scan_root(self, root: str) -> None:
        for finding in walk(root, self._classifier):
            self._queue.put(finding)

    def _await_completion(self, futures: list[Future[None]]) -> None:
        wait(futures)
        for future in futures:
            exc = future.exception()
            if exc is not None:
                logger.error("Root task failed: %s", exc)
                self._failures.append(exc)
        self._queue.put(COMPLETE)
        self._done.set()


def start_session(
    roots: Iterable[str | Path],
    *,
    home: str | Path | None = None,
    max_workers: int | None = None,
) -> ScanSession:
    """Resolve the home directory and start a streaming session.

    Args:
        roots: Paths to scan.
        home: Home directory override (defaults to the current user's).
        max_workers: Thread pool size (defaults to one per root).

    Returns:
        A started ScanSession.

    Raises:
        HomeDirectoryUnavailableError: If the home directory cannot be
            resolved. No root task is launched in that case.
    """
    home_dir = resolve_home(home)
    return ScanSession(roots, home=home_dir, max_workers=max_workers).start()
