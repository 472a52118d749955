"""
Polling change source for a configuration directory.
"""

import logging
import os
import queue
import threading
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from interfaces import ChangeReason, FileChangeConsumer, IChangeSource

logger = logging.getLogger(__name__)

# (modification time in ns, size) of a tracked file
FileSignature = Tuple[int, int]


class FileTracker(IChangeSource):
    """
    Detects created, modified and deleted files in a directory.

    Scanning compares each file's signature with the previous scan and pushes
    the differences onto an event queue. A single thread at a time drains that
    queue into the registered consumers, so events reach consumers one after
    the other and in detection order. Scans happen on check() or, once start()
    is called, periodically on a background thread.
    """

    def __init__(self, directory: Path, poll_interval: float = 2.0):
        """
        Initialize the tracker.

        Args:
            directory: Directory whose regular files are tracked (not recursive)
            poll_interval: Seconds between background scans
        """
        self.directory = Path(directory)
        self.poll_interval = poll_interval
        self._consumers: List[FileChangeConsumer] = []
        self._signatures: Dict[Path, FileSignature] = {}
        self._events: "queue.Queue[Tuple[ChangeReason, Path]]" = queue.Queue()
        self._scan_lock = threading.Lock()
        self._dispatch_lock = threading.Lock()
        self._consumers_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def register(self, consumer: FileChangeConsumer) -> None:
        with self._consumers_lock:
            if consumer not in self._consumers:
                self._consumers.append(consumer)

    def unregister(self, consumer: FileChangeConsumer) -> None:
        with self._consumers_lock:
            if consumer in self._consumers:
                self._consumers.remove(consumer)

    def check(self) -> None:
        """Scan the directory and deliver pending events unless another thread already is."""
        self._scan()
        self._dispatch()

    def _scan(self) -> None:
        with self._scan_lock:
            current = self._snapshot()
            for path in sorted(self._signatures.keys() - current.keys()):
                self._events.put((ChangeReason.DELETED, path))
            for path in sorted(current):
                if self._signatures.get(path) != current[path]:
                    self._events.put((ChangeReason.UPDATED, path))
            self._signatures = current

    def _snapshot(self) -> Dict[Path, FileSignature]:
        signatures: Dict[Path, FileSignature] = {}
        try:
            entries = list(os.scandir(self.directory))
        except FileNotFoundError:
            return signatures
        except OSError as e:
            logger.error(f"Cannot scan directory {self.directory}: {e}")
            # Keep the previous view rather than reporting every file deleted
            return dict(self._signatures)

        for entry in entries:
            try:
                if not entry.is_file():
                    continue
                stat = entry.stat()
            except OSError:
                # Vanished between listing and stat
                continue
            signatures[Path(entry.path)] = (stat.st_mtime_ns, stat.st_size)
        return signatures

    def _dispatch(self) -> None:
        # The lock holder delivers everything queued; others never wait for it
        while not self._events.empty():
            if not self._dispatch_lock.acquire(blocking=False):
                return
            try:
                self._drain()
            finally:
                self._dispatch_lock.release()

    def _drain(self) -> None:
        while True:
            try:
                reason, path = self._events.get_nowait()
            except queue.Empty:
                return
            with self._consumers_lock:
                consumers = list(self._consumers)
            for consumer in consumers:
                try:
                    consumer(reason, path)
                except Exception as e:
                    logger.error(f"Change consumer failed on {reason.value} {path}: {e}", exc_info=True)

    def start(self) -> None:
        """Start periodic scanning on a daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="file-tracker", daemon=True)
        self._thread.start()
        logger.info(f"Tracking {self.directory} every {self.poll_interval}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop periodic scanning and wait for the thread to exit."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                self.check()
            except Exception as e:
                logger.error(f"File tracking failed: {e}", exc_info=True)
            self._stop_event.wait(self.poll_interval)
