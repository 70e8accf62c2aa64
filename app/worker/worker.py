import threading
from concurrent.futures import Future, ThreadPoolExecutor

from app.config.settings import Settings
from app.logging.logger import Log
from app.worker.job_runner import JobRunner


class Worker:
    """Thread pool running one independent job per submitted document."""

    def __init__(self, job_runner: JobRunner, settings: Settings) -> None:
        self._job_runner = job_runner
        self._executor = ThreadPoolExecutor(
            max_workers=settings.worker_count,
            thread_name_prefix="redaction-worker",
        )
        self._lock = threading.Lock()
        self._shutdown = False

    def dispatch(self, document_id: str) -> "Future[bool]":
        """Schedule processing for a document and return immediately.

        Raises:
            RuntimeError: if the worker has been shut down.
        """
        with self._lock:
            if self._shutdown:
                raise RuntimeError("Worker is shut down")
            future = self._executor.submit(self._job_runner.run, document_id)
        Log.debug(f"Dispatched document {document_id}")
        return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work; optionally wait for in-flight documents."""
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
        Log.info("Worker shutting down")
        self._executor.shutdown(wait=wait)
