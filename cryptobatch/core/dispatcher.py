# cryptobatch/core/dispatcher.py
# -*- coding: utf-8 -*-
"""Orchestrates one end-to-end batch run: validate, build tasks, dispatch, report."""

import os
import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable

from .crypto_logic import validate_key
from .models import Task, TaskResult, BatchReport
from .worker_pool import WorkerPool
from ..utils.exceptions import FileAccessError, InvalidModeError, OutputCollisionError

logger = logging.getLogger(__name__)


def list_input_files(input_dir: Path | str) -> list[Path]:
    """
    Lists the regular files directly inside input_dir, sorted by name.
    Subdirectories are skipped, not descended into.

    Raises:
        FileAccessError: If the directory cannot be listed.
    """
    input_dir = Path(input_dir)
    try:
        with os.scandir(input_dir) as entries:
            files = [Path(entry.path) for entry in entries if entry.is_file()]
    except OSError as e:
        msg = f"Error reading input directory {input_dir}: {e}"
        logger.error(msg)
        raise FileAccessError(msg) from e
    files.sort()
    logger.debug(f"Found {len(files)} file(s) in {input_dir}.")
    return files


def _split_collisions(tasks: list[Task]) -> tuple[list[Task], list[TaskResult]]:
    """
    Separates tasks whose output names collide. Every task in a colliding
    group gets an OutputCollisionError; none of them is dispatched.
    """
    by_output: dict[str, list[Task]] = defaultdict(list)
    for task in tasks:
        try:
            by_output[task.output_name()].append(task)
        except InvalidModeError:
            # Reported per task by the workers
            return tasks, []

    runnable: list[Task] = []
    rejected: list[TaskResult] = []
    for name, group in by_output.items():
        if len(group) == 1:
            runnable.extend(group)
            continue
        sources = ", ".join(str(t.source) for t in group)
        logger.warning(f"{len(group)} inputs map to output '{name}': {sources}")
        for task in group:
            error = OutputCollisionError(f"Output name '{name}' is shared by: {sources}")
            rejected.append(TaskResult(task=task, error=error))
    return runnable, rejected


def run_batch(
    files: Iterable[Path | str],
    key: bytes,
    output_dir: Path | str,
    mode: str,
    *,
    workers: int | None = None,
) -> BatchReport:
    """
    Encrypts or decrypts every file into output_dir using a worker pool.

    Args:
        files: Flat list of input file paths.
        key: Raw AES key; validated before anything else happens.
        output_dir: Directory receiving every output file.
        mode: 'encrypt' or 'decrypt'. Any other value fails every task with
            InvalidModeError instead of aborting the run.
        workers: Worker thread count (default: host CPU count).

    Returns:
        A BatchReport holding exactly one result per input file.

    Raises:
        ConfigError: If the key or worker count is invalid. No file is touched.
    """
    key = validate_key(key)
    pool = WorkerPool(key, output_dir, workers)

    tasks = [Task(source=Path(f), mode=mode) for f in files]
    logger.info(f"Dispatching {len(tasks)} file(s) for {mode}.")

    runnable, rejected = _split_collisions(tasks)
    results = rejected + pool.run(runnable)
    report = BatchReport(mode=mode, results=results)

    # Reported to the operator by the caller
    for result in report.failed:
        logger.debug(f"{result.task.source}: [{result.kind}] {result.error}")
    logger.info(f"{mode} finished: {len(report.succeeded)} succeeded, {len(report.failed)} failed.")
    return report
