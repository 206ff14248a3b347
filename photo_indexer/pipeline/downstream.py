"""
The contract between the preparation stage and the stage that follows it
(place-name resolution in the full indexer).
"""
import logging
import threading
from typing import List, Protocol

from ..models import Media


class DownstreamStage(Protocol):
    def start(self) -> None: ...

    def enqueue(self, media: Media) -> None:
        """Accepts one record. Called concurrently from every worker."""
        ...

    def done(self) -> None: ...

    def wait(self) -> None: ...


class MediaCollector:
    """
    Downstream stage that keeps every record in memory.
    Useful when the caller needs the whole batch, e.g. sorted, after drain.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._items: List[Media] = []
        self._closed = threading.Event()

    def start(self):
        logging.debug("MediaCollector started")

    def enqueue(self, media: Media):
        with self._lock:
            self._items.append(media)

    def done(self):
        self._closed.set()

    def wait(self):
        self._closed.wait()
        logging.debug(f"MediaCollector drained with {len(self)} records")

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def items(self) -> List[Media]:
        with self._lock:
            return list(self._items)

    def sorted_by_signature(self) -> List[Media]:
        return sorted(self.items, key=lambda m: m.signature)
