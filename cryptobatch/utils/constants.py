# constants.py
# -*- coding: utf-8 -*-
"""Defines constants used throughout the cryptobatch application."""

import os

# --- AES-GCM Parameters ---
AES_KEY_BYTES: int = 32  # AES-256 key size in bytes
GCM_NONCE_BYTES: int = 12   # Standard GCM nonce size (96 bits)
GCM_TAG_BYTES: int = 16  # Standard GCM authentication tag size (128 bits)

# --- Modes and File Naming ---
MODE_ENCRYPT: str = "encrypt"
MODE_DECRYPT: str = "decrypt"
VALID_MODES: tuple[str, ...] = (MODE_ENCRYPT, MODE_DECRYPT)
ENCRYPTED_SUFFIX: str = ".enc"  # Appended on encrypt, stripped on decrypt

# --- Worker Pool ---
DEFAULT_WORKERS: int = os.cpu_count() or 1

# --- Exit Codes ---
EXIT_SUCCESS: int = 0        # Every file processed successfully
EXIT_GENERIC_ERROR: int = 1  # Generic or unexpected runtime error
EXIT_FILE_ERROR: int = 2     # Input directory or key file unreadable
EXIT_ARG_ERROR: int = 4      # Invalid arguments or configuration (e.g. bad key)
EXIT_TASK_ERROR: int = 5     # Run completed, but one or more files failed
EXIT_INTERRUPT: int = 130    # Process interrupted by user (Ctrl+C -> SIGINT)
