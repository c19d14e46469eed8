# cryptobatch/core/file_handler.py
# -*- coding: utf-8 -*-
"""
Handles whole-file I/O for a single task: reading the input, resolving the
output path, running the AEAD transform and writing the result. Uses context
managers for file streams and maps OS errors onto FileAccessError.
"""

import os
import tempfile
import logging
from pathlib import Path
from contextlib import contextmanager

from .crypto_logic import encrypt_bytes, decrypt_bytes
from .models import Task, TaskResult
from ..utils.constants import MODE_ENCRYPT, MODE_DECRYPT
from ..utils.exceptions import BatchCryptError, FileAccessError, InvalidModeError

logger = logging.getLogger(__name__)  # Module-specific logger

PARTIAL_SUFFIX = ".part"


# --- Context Manager for Stream Handling ---
@contextmanager
def stream_handler(filepath: Path, mode: str):
    """
    Context manager to safely open a file path.
    Yields the open stream and wraps file opening/IO failures in FileAccessError.
    """
    logger.debug(f"Attempting to access stream: {filepath} in mode '{mode}'.")
    try:
        with open(filepath, mode) as file_stream:
            logger.debug(f"Opened file: {filepath} successfully.")
            yield file_stream
        logger.debug(f"Closed file: {filepath}")
    except FileNotFoundError as e:
        raise FileAccessError(f"File not found: {filepath}") from e
    except PermissionError as e:
        raise FileAccessError(f"Permission denied: {filepath}") from e
    except IsADirectoryError as e:
        raise FileAccessError(f"Is a directory: {filepath}") from e
    except OSError as e:
        raise FileAccessError(f"File access error for '{filepath}': {e}") from e


def read_input(path: Path) -> bytes:
    """Reads a whole input file into memory."""
    with stream_handler(path, 'rb') as input_stream:
        data = input_stream.read()
    logger.debug(f"Read {len(data)} bytes from {path}.")
    return data


def write_output(path: Path, data: bytes) -> None:
    """
    Writes data to path through a uniquely named staging file in the same
    directory, so the output only appears once it is complete and no other
    file is ever overwritten by the staging step.
    """
    try:
        fd, staging_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=PARTIAL_SUFFIX
        )
    except OSError as e:
        raise FileAccessError(f"Error creating output file {path}: {e}") from e
    staging = Path(staging_name)
    try:
        with os.fdopen(fd, 'wb') as output_stream:
            output_stream.write(data)
            output_stream.flush()
        os.replace(staging, path)
    except OSError as e:
        raise FileAccessError(f"Error writing output file {path}: {e}") from e
    finally:
        if staging.exists():
            staging.unlink()
    logger.debug(f"Wrote {len(data)} bytes to {path}.")


def resolve_output_path(task: Task, output_dir: Path) -> Path:
    """Output path of a task: its output name inside the run's output directory."""
    return Path(output_dir) / task.output_name()


def transform(mode: str, key: bytes, data: bytes) -> bytes:
    if mode == MODE_ENCRYPT:
        return encrypt_bytes(key, data)
    if mode == MODE_DECRYPT:
        return decrypt_bytes(key, data)
    raise InvalidModeError(f"Invalid mode: {mode!r}")


def process_task(task: Task, key: bytes, output_dir: Path) -> TaskResult:
    """
    Runs one task end to end and reports the outcome.

    Never raises: every failure is returned as an error result so other
    tasks are unaffected.
    """
    try:
        output_path = resolve_output_path(task, output_dir)
        plaintext_or_blob = read_input(task.source)
        processed = transform(task.mode, key, plaintext_or_blob)
        write_output(output_path, processed)
    except BatchCryptError as e:
        # Reported once by the dispatcher
        logger.debug(f"{task.mode.capitalize()} failed for {task.source}: [{e.kind}] {e}")
        return TaskResult(task=task, error=e)
    except Exception as e:
        logger.critical(f"Unexpected error processing {task.source}: {e}", exc_info=True)
        error = BatchCryptError(f"Unexpected error: {e}")
        error.__cause__ = e
        return TaskResult(task=task, error=error)

    logger.debug(f"{task.mode.capitalize()}ed {task.source} -> {output_path}")
    return TaskResult(task=task, output=output_path)
