# key_utils.py
# -*- coding: utf-8 -*-
"""Utilities for obtaining the raw AES key from command-line sources."""

import logging
import os

from ..core.crypto_logic import parse_hex_key, validate_key
from ..utils.constants import AES_KEY_BYTES
from ..utils.exceptions import FileAccessError, ConfigError

logger = logging.getLogger(__name__)


def read_key_arg(hex_key: str) -> bytes:
    """
    Decodes the key given on the command line as hex.

    Raises:
        ConfigError: If the text is not hex or is not AES_KEY_BYTES long once decoded.
    """
    key = parse_hex_key(hex_key)
    logger.info("Key obtained from command line.")
    return key


def read_key_file(filepath: str) -> bytes:
    """
    Reads the key from the specified file.

    The file holds either exactly AES_KEY_BYTES raw bytes or the key as hex
    text (surrounding whitespace ignored).

    Raises:
        FileAccessError: If the file cannot be found or read.
        ConfigError: If the content is not a valid key.
    """
    logger.debug(f"Attempting to read key from file: {filepath}")
    if not os.path.exists(filepath):
        msg = f"Key file not found: {filepath}"
        logger.error(msg)
        raise FileAccessError(msg)
    try:
        with open(filepath, 'rb') as f:
            content = f.read()
    except PermissionError as e:
        msg = f"Permission denied reading key file: {filepath}"
        logger.error(msg)
        raise FileAccessError(msg) from e
    except OSError as e:
        msg = f"OS error reading key file {filepath}: {e}"
        logger.error(msg, exc_info=True)
        raise FileAccessError(msg) from e

    if len(content) == AES_KEY_BYTES:
        key = validate_key(content)
    else:
        try:
            text = content.decode('ascii')
        except UnicodeDecodeError as e:
            msg = (f"Invalid key in file {filepath}. Expected {AES_KEY_BYTES} raw bytes "
                   f"or {AES_KEY_BYTES * 2} hex characters, got {len(content)} bytes.")
            logger.error(msg)
            raise ConfigError(msg) from e
        key = parse_hex_key(text)

    logger.info(f"Key successfully read and validated from file: {filepath}")
    return key
