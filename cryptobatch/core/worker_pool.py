# cryptobatch/core/worker_pool.py
# -*- coding: utf-8 -*-
"""
Fixed pool of worker threads that drain one shared task queue and publish
exactly one TaskResult per task to a shared result queue.
"""

import queue
import logging
import threading
from pathlib import Path
from typing import Iterable

from .file_handler import process_task
from .models import Task, TaskResult
from ..utils.constants import DEFAULT_WORKERS
from ..utils.exceptions import BatchCryptError, ConfigError

logger = logging.getLogger(__name__)

# Placed on the intake queue once per worker to close intake
_INTAKE_CLOSED = None


class WorkerPool:
    """
    Runs tasks on a fixed number of threads.

    The key is shared read-only by every worker. The intake and result
    queues are created per run and handed to each worker explicitly.
    """

    def __init__(self, key: bytes, output_dir: Path | str, workers: int | None = None):
        if workers is None:
            workers = DEFAULT_WORKERS
        if workers < 1:
            raise ConfigError(f"Worker count must be at least 1, got {workers}.")
        self.key = key
        self.output_dir = Path(output_dir)
        self.workers = workers
        logger.debug(f"WorkerPool initialised with {self.workers} worker(s).")

    def _work(self, intake: queue.Queue, results: queue.Queue) -> None:
        """Worker loop: take tasks until intake is closed."""
        name = threading.current_thread().name
        handled = 0
        while True:
            task = intake.get()
            try:
                if task is _INTAKE_CLOSED:
                    break
                logger.debug(f"{name} picked up {task.source}")
                results.put(process_task(task, self.key, self.output_dir))
                handled += 1
            finally:
                intake.task_done()
        logger.debug(f"{name} finished after {handled} task(s).")

    def run(self, tasks: Iterable[Task]) -> list[TaskResult]:
        """
        Processes every task exactly once and returns one result per task.

        Returns only after all workers have terminated. Result order is
        unspecified.
        """
        tasks = list(tasks)
        intake: queue.Queue = queue.Queue()
        results: queue.Queue = queue.Queue()

        thread_count = min(self.workers, max(1, len(tasks)))
        threads = [
            threading.Thread(
                target=self._work,
                args=(intake, results),
                name=f"cryptobatch-worker-{i}",
                daemon=True,
            )
            for i in range(thread_count)
        ]
        logger.info(f"Starting {thread_count} worker(s) for {len(tasks)} task(s).")
        for thread in threads:
            thread.start()

        for task in tasks:
            intake.put(task)
        for _ in threads:
            intake.put(_INTAKE_CLOSED)

        # Wait barrier: every worker must terminate before results are read
        for thread in threads:
            thread.join()
        logger.debug("All workers joined. Draining results.")

        collected: list[TaskResult] = []
        while True:
            try:
                collected.append(results.get_nowait())
            except queue.Empty:
                break

        if len(collected) != len(tasks):
            raise BatchCryptError(
                f"Internal: expected {len(tasks)} results, collected {len(collected)}."
            )
        return collected
