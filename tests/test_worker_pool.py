# tests/test_worker_pool.py
# -*- coding: utf-8 -*-
"""Tests for the thread-based worker pool."""

import os
import threading
from pathlib import Path

import pytest

from cryptobatch.core import worker_pool
from cryptobatch.core.models import Task, TaskResult
from cryptobatch.core.worker_pool import WorkerPool
from cryptobatch.utils.constants import AES_KEY_BYTES, MODE_ENCRYPT
from cryptobatch.utils.exceptions import ConfigError

KEY = os.urandom(AES_KEY_BYTES)


def _make_inputs(directory: Path, count: int) -> list[Path]:
    directory.mkdir()
    paths = []
    for i in range(count):
        path = directory / f"file_{i:03d}.dat"
        path.write_bytes(os.urandom(i * 7))
        paths.append(path)
    return paths


@pytest.mark.parametrize("workers", [1, 2, 8])
def test_every_task_yields_exactly_one_result(tmp_path: Path, workers: int):
    inputs = _make_inputs(tmp_path / "in", 25)
    out_dir = tmp_path / "out"; out_dir.mkdir()
    tasks = [Task(p, MODE_ENCRYPT) for p in inputs]

    results = WorkerPool(KEY, out_dir, workers).run(tasks)

    assert len(results) == len(tasks)
    assert sorted(r.task.source for r in results) == sorted(inputs)
    assert all(r.ok for r in results)
    assert len(list(out_dir.iterdir())) == len(inputs)


def test_empty_task_list(tmp_path: Path):
    assert WorkerPool(KEY, tmp_path, 4).run([]) == []


def test_workers_share_tasks_and_all_terminate(tmp_path: Path, monkeypatch):
    """Tasks are spread over worker threads and no worker outlives run()."""
    seen_threads = set()
    lock = threading.Lock()

    def fake_process_task(task, key, output_dir):
        with lock:
            seen_threads.add(threading.current_thread().name)
        return TaskResult(task=task, output=Path(output_dir) / task.output_name())

    monkeypatch.setattr(worker_pool, "process_task", fake_process_task)
    tasks = [Task(Path(f"f{i}"), MODE_ENCRYPT) for i in range(50)]

    before = threading.active_count()
    results = WorkerPool(KEY, tmp_path, 4).run(tasks)

    assert len(results) == 50
    assert seen_threads and all(name.startswith("cryptobatch-worker-") for name in seen_threads)
    assert threading.active_count() == before


def test_one_failure_does_not_stop_other_tasks(tmp_path: Path):
    inputs = _make_inputs(tmp_path / "in", 5)
    out_dir = tmp_path / "out"; out_dir.mkdir()
    tasks = [Task(p, MODE_ENCRYPT) for p in inputs] + [Task(tmp_path / "missing.txt", MODE_ENCRYPT)]

    results = WorkerPool(KEY, out_dir, 3).run(tasks)

    failed = [r for r in results if not r.ok]
    assert len(results) == 6
    assert len(failed) == 1 and failed[0].task.source.name == "missing.txt"


@pytest.mark.parametrize("workers", [0, -3])
def test_invalid_worker_count(tmp_path: Path, workers: int):
    with pytest.raises(ConfigError):
        WorkerPool(KEY, tmp_path, workers)


def test_default_worker_count_follows_host(tmp_path: Path):
    assert WorkerPool(KEY, tmp_path).workers == (os.cpu_count() or 1)
