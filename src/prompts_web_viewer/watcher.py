"""Polling change notifications for markdown files."""

import logging
import threading
from collections.abc import Callable

from prompts_web_viewer.walker import FileWalker

logger = logging.getLogger(__name__)


class ChangeWatcher:
    """Polls document modification times and reports changed paths.

    Added, modified and removed documents are all reported. The callback
    runs on the watcher thread, one path at a time.
    """

    def __init__(
        self,
        walker: FileWalker,
        on_change: Callable[[str], None],
        interval: float = 1.0,
    ) -> None:
        """Initialise watcher.

        Args:
            walker: Walker defining which files are watched.
            on_change: Called with the root-relative path of each change.
            interval: Seconds between scans.
        """
        if interval <= 0:
            msg = f"Poll interval must be positive: {interval}"
            raise ValueError(msg)
        self.walker = walker
        self.on_change = on_change
        self.interval = interval
        self._mtimes: dict[str, int] = self._scan()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    def poll(self) -> list[str]:
        """Scan once and notify about every changed path.

        Returns:
            Paths reported to the callback, in sorted order.
        """
        current = self._scan()
        previous, self._mtimes = self._mtimes, current
        changed = sorted(
            path for path in previous.keys() | current.keys() if previous.get(path) != current.get(path)
        )
        for path in changed:
            try:
                self.on_change(path)
            except Exception:
                logger.exception("Change handler failed for %s", path)
        return changed

    def start(self) -> None:
        """Start polling on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="change-watcher", daemon=True)
        self._thread.start()
        logger.info("Watching %s for changes every %.1fs", self.walker.root, self.interval)

    def stop(self) -> None:
        """Stop polling and wait for the thread to exit."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.poll()

    def _scan(self) -> dict[str, int]:
        mtimes: dict[str, int] = {}
        for relative_path, absolute_path in self.walker.iter_files():
            try:
                mtimes[relative_path] = absolute_path.stat().st_mtime_ns
            except OSError:
                # Removed between listing and stat.
                continue
        return mtimes
