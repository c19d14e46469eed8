# cryptobatch/cli/handlers.py
# -*- coding: utf-8 -*-
"""Command handlers for the cryptobatch CLI."""

import logging
import os
import sys

from .key_utils import read_key_arg, read_key_file
from ..core.dispatcher import list_input_files, run_batch
from ..core.models import BatchReport
from ..utils.exceptions import FileAccessError, ConfigError, BatchCryptError
from ..utils.constants import (
    MODE_ENCRYPT, MODE_DECRYPT,
    EXIT_SUCCESS, EXIT_GENERIC_ERROR, EXIT_FILE_ERROR, EXIT_ARG_ERROR, EXIT_TASK_ERROR,
)

logger = logging.getLogger(__name__)


def _obtain_key(args) -> bytes:
    if args.key is not None:
        return read_key_arg(args.key)
    if args.key_file is not None:
        return read_key_file(args.key_file)
    raise ConfigError("Internal logic error: No key source provided.")


def _print_report(report: BatchReport) -> None:
    """Prints one line per file, then a summary and the completion line."""
    for result in report.results:
        if result.ok:
            print(result.describe())
        else:
            print(result.describe(), file=sys.stderr)
    if not report.ok:
        # Failures were already listed one per line above
        print(report.summary_lines()[0], file=sys.stderr)
    print(f"{report.mode} complete")


def _handle_batch(args, mode: str) -> int:
    """
    Shared body of the encrypt/decrypt commands. Maps exceptions to exit codes.

    Key and directory problems abort before any file is processed. Per-file
    failures never abort the run; they only change the exit code.
    """
    logger.info(f"Processing '{mode}' command...")
    try:
        key = _obtain_key(args)

        files = list_input_files(args.input)
        if not files:
            logger.warning(f"No files found in input directory: {args.input}")

        try:
            os.makedirs(args.output, exist_ok=True)
        except OSError as e:
            raise FileAccessError(f"Cannot create output directory {args.output}: {e}") from e

        report = run_batch(files, key, args.output, mode, workers=args.workers)
        _print_report(report)

        if report.ok:
            logger.info(f"{mode.capitalize()} process finished successfully.")
            return EXIT_SUCCESS
        logger.error(f"{mode.capitalize()} finished with {len(report.failed)} failed file(s).")
        return EXIT_TASK_ERROR

    # --- Exception Handling and Exit Code Mapping (most specific first) ---
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ARG_ERROR
    except FileAccessError as e:
        logger.error(f"File access error during {mode} handler: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except BatchCryptError as e:
        logger.error(f"Application error during {mode} processing: {e}")
        return EXIT_GENERIC_ERROR
    except Exception as e:
        logger.critical(f"Unexpected error during {mode} handling: {e}", exc_info=True)
        print(f"Error: An unexpected error occurred during {mode}. Check logs.", file=sys.stderr)
        return EXIT_GENERIC_ERROR


def handle_encrypt(args) -> int:
    """Handles the 'encrypt' command."""
    return _handle_batch(args, MODE_ENCRYPT)


def handle_decrypt(args) -> int:
    """Handles the 'decrypt' command."""
    return _handle_batch(args, MODE_DECRYPT)
