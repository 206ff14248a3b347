import logging
import os
import queue
import threading
import time
from typing import List, Optional

from tqdm import tqdm

from .. import config
from ..exceptions import PipelineClosedError, PipelineStateError
from ..metadata.normalizer import MediaNormalizer
from ..models import CandidateFile, Media
from .downstream import DownstreamStage


class PreparationStage:
    """
    Bounded worker pool that turns candidates into Media records and hands
    them to the next stage.

    Lifecycle: start() -> submit()* -> signal_done() -> wait().

    The queue holds at most `pool_size` candidates, so submit() blocks once
    every worker is busy and the queue is full. Records reach the downstream
    stage in no particular order, each exactly once.
    """

    def __init__(self,
                 downstream: DownstreamStage,
                 pool_size: int = config.NUM_CONSUMERS,
                 normalizer: Optional[MediaNormalizer] = None,
                 show_progress: bool = False):
        if pool_size < 1:
            raise ValueError(f"pool_size must be at least 1, got {pool_size}")

        self.downstream = downstream
        self.pool_size = pool_size
        self.normalizer = normalizer or MediaNormalizer()
        self.show_progress = show_progress

        self._queue: "queue.Queue[object]" = queue.Queue(maxsize=pool_size)
        self._sentinel = object()
        self._threads: List[threading.Thread] = []
        self._state = threading.Condition()
        self._submitting = 0
        self._started = False
        self._closed = False
        self._drained = False

        self._count_lock = threading.Lock()
        self._processed = 0
        self._progress: Optional[tqdm] = None

    # --- Lifecycle ---

    def start(self):
        with self._state:
            if self._started:
                raise PipelineStateError("Preparation stage already started")
            self._started = True

        try:
            self.downstream.start()
        except Exception:
            with self._state:
                self._started = False
            raise

        if self.show_progress:
            self._progress = tqdm(desc=config.PROGRESS_DESC, unit="file")

        for idx in range(self.pool_size):
            thread = threading.Thread(target=self._worker, name=f"prepare-worker-{idx + 1}")
            thread.daemon = True
            thread.start()
            self._threads.append(thread)

        logging.info(f"Preparation stage started with {self.pool_size} workers")

    def submit(self, candidate: CandidateFile):
        """Queues one candidate, blocking while the pool is saturated."""
        with self._state:
            if not self._started:
                raise PipelineStateError("submit() called before start()")
            if self._closed:
                raise PipelineClosedError(f"Stage is closed; cannot accept {candidate.full_path}")
            self._submitting += 1

        try:
            self._queue.put(candidate)
        finally:
            with self._state:
                self._submitting -= 1
                self._state.notify_all()

    def signal_done(self):
        """No more candidates will arrive. Workers exit once the queue is empty."""
        with self._state:
            if not self._started:
                raise PipelineStateError("signal_done() called before start()")
            if self._closed:
                return
            self._closed = True
            # Submits already past the closed check must land ahead of the markers
            while self._submitting:
                self._state.wait()

        # One marker per worker, queued behind every pending candidate
        for _ in self._threads:
            self._queue.put(self._sentinel)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Blocks until every worker has exited and the downstream stage has drained.

        With a timeout, returns False if the workers are still busy when it
        expires; records already forwarded are unaffected and wait() can be
        called again.
        """
        with self._state:
            if not self._started:
                raise PipelineStateError("wait() called before start()")
            if not self._closed:
                raise PipelineStateError("wait() called before signal_done()")

        deadline = None if timeout is None else time.monotonic() + timeout
        for thread in self._threads:
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            thread.join(remaining)
            if thread.is_alive():
                return False

        with self._state:
            if self._drained:
                return True
            self._drained = True

        self.downstream.done()
        self.downstream.wait()

        if self._progress is not None:
            self._progress.close()

        logging.info(f"Preparation stage drained. Prepared {self.processed} files.")
        return True

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.signal_done()
        self.wait()

    @property
    def processed(self) -> int:
        with self._count_lock:
            return self._processed

    # --- Workers ---

    def _worker(self):
        while True:
            item = self._queue.get()
            if item is self._sentinel:
                break
            media = self._prepare(item)
            self._forward(media, item)

    def _prepare(self, candidate: CandidateFile) -> Media:
        try:
            return self.normalizer.normalize(candidate)
        except Exception:
            logging.exception(f"Failed preparing {candidate.full_path}; forwarding bare record")
            return Media(
                signature=candidate.signature,
                filename=os.path.basename(candidate.full_path),
                path=candidate.aliased_path,
                length_in_bytes=candidate.length_in_bytes,
            )

    def _forward(self, media: Media, candidate: CandidateFile):
        try:
            self.downstream.enqueue(media)
        except Exception:
            logging.exception(f"Downstream stage rejected {candidate.full_path}")
            return

        with self._count_lock:
            self._processed += 1
            if self._progress is not None:
                self._progress.update(1)
        logging.debug(f"Prepared {candidate.full_path}")
