# crypto_logic.py
# -*- coding: utf-8 -*-
"""Core cryptographic primitives: AES-256-GCM sealing of whole buffers, key validation."""

import os
import binascii
import logging

from Crypto.Cipher import AES

# Import constants and custom exceptions
from ..utils.constants import AES_KEY_BYTES, GCM_NONCE_BYTES, GCM_TAG_BYTES
from ..utils.exceptions import (
    ConfigError,
    CipherInitError,
    RandomSourceError,
    MalformedInputError,
    AuthenticationError,
)

logger = logging.getLogger(__name__)


def validate_key(key: bytes) -> bytes:
    """
    Checks that the key is exactly AES_KEY_BYTES of binary data.

    Returns:
        The key unchanged, so the call can be used inline.

    Raises:
        ConfigError: If the key is not bytes or has the wrong length.
    """
    if not isinstance(key, (bytes, bytearray)):
        raise ConfigError(f"Key must be bytes, got {type(key).__name__}.")
    if len(key) != AES_KEY_BYTES:
        msg = f"Invalid key length. Expected {AES_KEY_BYTES} bytes, got {len(key)}."
        logger.error(msg)
        raise ConfigError(msg)
    return bytes(key)


def parse_hex_key(text: str) -> bytes:
    """
    Decodes a hex-encoded key (64 hex characters) and validates its length.

    Raises:
        ConfigError: If the text is not valid hex or does not decode to AES_KEY_BYTES.
    """
    try:
        key = binascii.unhexlify(text.strip())
    except (binascii.Error, ValueError) as e:
        msg = f"Invalid key. Must be {AES_KEY_BYTES} bytes ({AES_KEY_BYTES * 2} hex characters)."
        logger.error(f"Key is not valid hex: {e}")
        raise ConfigError(msg) from e
    return validate_key(key)


def generate_nonce() -> bytes:
    """Generates a cryptographically secure random GCM nonce."""
    try:
        return os.urandom(GCM_NONCE_BYTES)
    except (NotImplementedError, OSError) as e:
        msg = f"Secure random source unavailable: {e}"
        logger.error(msg)
        raise RandomSourceError(msg) from e


def _new_cipher(key: bytes, nonce: bytes):
    try:
        return AES.new(key, AES.MODE_GCM, nonce=nonce, mac_len=GCM_TAG_BYTES)
    except (ValueError, TypeError) as e:
        msg = f"Cipher initialisation failed: {e}"
        logger.error(msg)
        raise CipherInitError(msg) from e


def encrypt_bytes(key: bytes, plaintext: bytes) -> bytes:
    """
    Encrypts a whole buffer with AES-256-GCM under a fresh random nonce.

    Args:
        key: The raw AES key (AES_KEY_BYTES long).
        plaintext: Data to seal. May be empty.

    Returns:
        The blob: nonce || ciphertext || tag.

    Raises:
        CipherInitError: If the key is rejected by the cipher.
        RandomSourceError: If no nonce could be generated.
    """
    nonce = generate_nonce()
    cipher = _new_cipher(key, nonce)
    ciphertext, tag = cipher.encrypt_and_digest(plaintext)
    logger.debug(f"Sealed {len(plaintext)} plaintext bytes.")
    return nonce + ciphertext + tag


def decrypt_bytes(key: bytes, blob: bytes) -> bytes:
    """
    Opens a blob produced by encrypt_bytes and verifies its tag.

    Nothing is returned unless verification succeeds.

    Raises:
        MalformedInputError: If the blob is shorter than the nonce.
        CipherInitError: If the key is rejected by the cipher.
        AuthenticationError: If the tag is missing or does not verify.
    """
    if len(blob) < GCM_NONCE_BYTES:
        raise MalformedInputError(
            f"Ciphertext too short: {len(blob)} bytes, need at least {GCM_NONCE_BYTES} for the nonce."
        )
    nonce, sealed = blob[:GCM_NONCE_BYTES], blob[GCM_NONCE_BYTES:]
    cipher = _new_cipher(key, nonce)
    if len(sealed) < GCM_TAG_BYTES:
        # Truncated inside the tag: nothing to verify against
        raise AuthenticationError("MAC check failed: authentication tag is missing or truncated.")
    ciphertext, tag = sealed[:-GCM_TAG_BYTES], sealed[-GCM_TAG_BYTES:]
    try:
        plaintext = cipher.decrypt_and_verify(ciphertext, tag)
    except ValueError as e:
        raise AuthenticationError("MAC check failed: incorrect key or data corrupted.") from e
    logger.debug(f"Opened {len(ciphertext)} ciphertext bytes.")
    return plaintext
