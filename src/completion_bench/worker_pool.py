"""Manages concurrent request execution."""
import logging
import concurrent.futures
import threading
from typing import List, Sequence

from .constants import BenchmarkConstants
from .inference_client import InferenceClient
from .models import TokenizedPrompt


# Configure logging
logger = logging.getLogger(__name__)


class ProgressCounter:
    """Completion counter shared by all workers."""

    def __init__(self, total: int, log_interval: int = BenchmarkConstants.PROGRESS_LOG_INTERVAL):
        self.total = total
        self.log_interval = log_interval
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            value = self._value
        if value % self.log_interval == 0:
            logger.info(f"Processed {value}/{self.total}")
        return value


class WorkerPool:
    """Runs batches on a fixed number of threads, one batch per worker task."""

    def __init__(self, inference_client: InferenceClient, threads: int, delay_ms: int = 0):
        if threads < 1:
            raise ValueError(f"Thread count must be at least 1, got {threads}")
        self.inference_client = inference_client
        self.threads = threads
        self.delay_ms = delay_ms
        self._abort = threading.Event()

    def run(self, batches: Sequence[List[TokenizedPrompt]]) -> int:
        """
        Process all batches and wait for every worker to finish.

        A worker that raises aborts the run: the remaining workers stop before
        their next prompt, queued batches are cancelled and the exception is re-raised.

        Args:
            batches: Prompt batches, each drained sequentially by one worker.

        Returns:
            Number of prompts processed.
        """
        self._abort.clear()
        progress = ProgressCounter(sum(len(batch) for batch in batches))

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.threads) as executor:
            futures = [executor.submit(self._process_batch, batch, progress) for batch in batches]
            done, not_done = concurrent.futures.wait(futures, return_when=concurrent.futures.FIRST_EXCEPTION)

            failed = [future for future in futures if future.done() and not future.cancelled()
                      and future.exception() is not None]
            if failed:
                self._abort.set()
                for future in not_done:
                    future.cancel()
                logger.error(f"Worker failed, aborting run after {progress.value} prompts")
                raise failed[0].exception()

        return progress.value

    def _process_batch(self, batch: List[TokenizedPrompt], progress: ProgressCounter) -> None:
        for prompt in batch:
            if self._abort.is_set():
                return
            self.inference_client.generate(prompt)
            # Returns early when the run is aborted
            self._abort.wait(self.delay_ms / 1000)
            progress.increment()
