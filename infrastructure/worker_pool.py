import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Optional, TypeVar

from domain.errors import UnknownError

logger = logging.getLogger(__name__)

T = TypeVar("T")

POLL_INTERVAL = 0.1  # seconds between idle checks while draining


@dataclass
class TaskResult(Generic[T]):
    """Outcome of one unit of work: either a value or the exception it raised."""
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ResultChannel(Generic[T]):
    """Many-producer, single-consumer channel carrying task results."""

    def __init__(self):
        self._queue: "queue.Queue[TaskResult[T]]" = queue.Queue()

    def send(self, result: TaskResult[T]) -> None:
        self._queue.put(result)

    def receive(self, timeout: Optional[float] = None) -> TaskResult[T]:
        """
        Take the next result, blocking up to timeout seconds.

        Raises:
            queue.Empty: If no result arrived in time
        """
        return self._queue.get(timeout=timeout)

    def try_receive(self) -> Optional[TaskResult[T]]:
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None


class WorkerPool:
    """
    Fixed-size pool of worker threads.

    Every submitted unit sends exactly one TaskResult to its channel, whether
    it returns or raises. Callers count their submissions and drain that many
    results; the channel is never closed.
    """

    def __init__(self, num_threads: int):
        if num_threads < 1:
            raise ValueError(f"num_threads must be positive, got {num_threads}")
        self.num_threads = num_threads
        self._executor = ThreadPoolExecutor(
            max_workers=num_threads,
            thread_name_prefix="chksum-worker"
        )
        self._lock = threading.Lock()
        self._pending = 0

    def __enter__(self) -> "WorkerPool":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.join()

    @property
    def pending(self) -> int:
        with self._lock:
            return self._pending

    def submit(self, channel: ResultChannel, fn: Callable[..., Any], *args: Any) -> None:
        """Run fn(*args) on a worker and send its outcome to channel."""
        with self._lock:
            self._pending += 1
        try:
            self._executor.submit(self._run, channel, fn, args)
        except RuntimeError:
            # Executor already shut down
            with self._lock:
                self._pending -= 1
            raise

    def _run(self, channel: ResultChannel, fn: Callable[..., Any], args: tuple) -> None:
        try:
            try:
                result = TaskResult(value=fn(*args))
            except Exception as e:
                result = TaskResult(error=e)
            channel.send(result)
        finally:
            # Decrement only after sending so an idle pool implies a full channel
            with self._lock:
                self._pending -= 1

    def drain(self, channel: ResultChannel, count: int) -> Iterator[TaskResult]:
        """
        Yield exactly count results from channel, in completion order.

        Raises:
            UnknownError: If the channel runs dry while no unit is running
        """
        for _ in range(count):
            yield self._next_result(channel)

    def _next_result(self, channel: ResultChannel) -> TaskResult:
        while True:
            try:
                return channel.receive(timeout=POLL_INTERVAL)
            except queue.Empty:
                if self.pending == 0:
                    result = channel.try_receive()
                    if result is None:
                        logger.error("Result channel is empty but no work is pending")
                        raise UnknownError()
                    return result

    def join(self) -> None:
        """Wait for all submitted units to finish and release the threads."""
        self._executor.shutdown(wait=True)
