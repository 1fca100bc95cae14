#!/usr/bin/env python3
"""
One-way task dispatch for notifications.

Async mode enqueues on the RQ ``notifications`` queue with retries; sync
mode (queue disabled or Redis unreachable) runs the task inline. Either
way ``dispatch`` never raises: failures go to the error reporter.

Sync mode runs delivery on the caller's thread, so a scoring request waits
for the email provider. Each send is bounded by the channel timeout
(``email.request_timeout_seconds``), with no retries.

Tasks must be module-level functions so RQ can import them in the worker.
"""

import logging
from typing import Any, Callable, Optional

from redis import Redis
from rq import Queue, Retry, Callback

from core.monitoring import ErrorReporter, LoggingErrorReporter

logger = logging.getLogger(__name__)


def report_job_failure(job, connection, exc_type, exc_value, traceback):
    """RQ on_failure callback. Runs in the worker after the last retry fails."""
    LoggingErrorReporter().report_error(
        exc_value,
        {'job_id': job.id, 'func': job.func_name, 'args': [str(a) for a in job.args]}
    )


class TaskDispatcher:
    """
    Args:
        redis_url: Redis connection URL for the queue
        use_async_queue: Whether to use the queue at all
        queue_name: RQ queue name
        error_reporter: Sink for contained failures
        queue: Pre-built RQ queue (mostly for tests)
    """

    def __init__(
        self,
        redis_url: Optional[str] = None,
        use_async_queue: bool = True,
        queue_name: str = 'notifications',
        error_reporter: Optional[ErrorReporter] = None,
        queue: Optional[Queue] = None
    ):
        self.error_reporter = error_reporter or LoggingErrorReporter()
        self.queue = queue
        self.async_mode = queue is not None

        if queue is not None:
            return

        if not use_async_queue or not redis_url:
            logger.info("Async queue disabled via config. Using sync mode.")
            return

        try:
            redis_conn = Redis.from_url(redis_url)
            # Validate connection with ping before using
            redis_conn.ping()
            self.queue = Queue(queue_name, connection=redis_conn)
            self.async_mode = True
            logger.info(f"Task dispatcher connected to Redis queue '{queue_name}'")
        except Exception as e:
            logger.error(f"Redis connection failed: {e}. Falling back to sync mode.")
            self.queue = None
            self.async_mode = False

    def dispatch(self, func: Callable[..., Any], *args: Any) -> Optional[str]:
        """
        Fire and forget ``func(*args)``.

        Returns the RQ job id in async mode, otherwise None. In sync mode the
        task has finished by the time this returns.
        """
        if self.async_mode:
            try:
                job = self.queue.enqueue(
                    func,
                    *args,
                    job_timeout='5m',
                    result_ttl=86400,
                    retry=Retry(max=3, interval=[30, 60, 120]),
                    on_failure=Callback(report_job_failure)
                )
                logger.info(f"Queued {func.__name__} as job {job.id}")
                return job.id
            except Exception as e:
                logger.error(f"Failed to enqueue {func.__name__}: {e}. Running inline.")
                self.error_reporter.report_error(e, {'step': 'enqueue', 'func': func.__name__})

        self._run_inline(func, *args)
        return None

    def _run_inline(self, func: Callable[..., Any], *args: Any) -> None:
        try:
            func(*args)
        except Exception as e:
            logger.error(f"Task {func.__name__} failed: {e}")
            self.error_reporter.report_error(e, {'func': func.__name__, 'args': [str(a) for a in args]})

    def get_queue_status(self) -> dict:
        if not self.async_mode:
            return {'status': 'sync_mode', 'queue_length': 0}
        try:
            return {'status': 'active', 'queue_length': len(self.queue)}
        except Exception as e:
            return {'status': 'error', 'error': str(e)}
