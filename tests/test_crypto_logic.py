# tests/test_crypto_logic.py
# -*- coding: utf-8 -*-
"""Tests for the whole-buffer AES-256-GCM transform and key validation."""

import os

import pytest

from cryptobatch.core import crypto_logic
from cryptobatch.core.crypto_logic import (
    encrypt_bytes, decrypt_bytes, validate_key, parse_hex_key
)
from cryptobatch.utils.constants import AES_KEY_BYTES, GCM_NONCE_BYTES, GCM_TAG_BYTES
from cryptobatch.utils.exceptions import (
    AuthenticationError, MalformedInputError, CipherInitError, RandomSourceError, ConfigError
)

KEY = os.urandom(AES_KEY_BYTES)
PLAINTEXT = b"Test data with different chars: !@#$%^&*()_+`~-=[]{}|\\:;\"'<>,.?/"


@pytest.mark.parametrize("plaintext", [b"", b"x", PLAINTEXT, os.urandom(100_000)])
def test_round_trip(plaintext: bytes):
    """Decrypting an encrypted buffer returns the original, including empty input."""
    blob = encrypt_bytes(KEY, plaintext)
    assert len(blob) == GCM_NONCE_BYTES + len(plaintext) + GCM_TAG_BYTES
    assert decrypt_bytes(KEY, blob) == plaintext


def test_encryption_is_not_deterministic():
    """Two encryptions of the same plaintext use different nonces."""
    first = encrypt_bytes(KEY, PLAINTEXT)
    second = encrypt_bytes(KEY, PLAINTEXT)
    assert first != second
    assert first[:GCM_NONCE_BYTES] != second[:GCM_NONCE_BYTES]


def test_every_single_bit_flip_is_detected():
    blob = encrypt_bytes(KEY, b"short secret")
    for position in range(len(blob) * 8):
        tampered = bytearray(blob)
        tampered[position // 8] ^= 1 << (position % 8)
        with pytest.raises(AuthenticationError):
            decrypt_bytes(KEY, bytes(tampered))


def test_wrong_key_fails_authentication():
    blob = encrypt_bytes(KEY, PLAINTEXT)
    other_key = bytes(b ^ 0xFF for b in KEY)
    with pytest.raises(AuthenticationError):
        decrypt_bytes(other_key, blob)


@pytest.mark.parametrize("length", [0, 1, GCM_NONCE_BYTES - 1])
def test_blob_shorter_than_nonce_is_malformed(length: int):
    with pytest.raises(MalformedInputError):
        decrypt_bytes(KEY, os.urandom(length))


def test_blob_with_truncated_tag_fails_authentication():
    """A nonce followed by fewer than 16 bytes cannot carry a tag."""
    blob = encrypt_bytes(KEY, b"")
    with pytest.raises(AuthenticationError):
        decrypt_bytes(KEY, blob[:-1])


def test_bad_key_is_rejected_by_cipher():
    with pytest.raises(CipherInitError):
        encrypt_bytes(b"too short", PLAINTEXT)


def test_random_source_failure(monkeypatch):
    def broken_urandom(size):
        raise NotImplementedError("no entropy source")
    monkeypatch.setattr(crypto_logic.os, "urandom", broken_urandom)
    with pytest.raises(RandomSourceError):
        encrypt_bytes(KEY, PLAINTEXT)


@pytest.mark.parametrize("length", [AES_KEY_BYTES - 1, AES_KEY_BYTES + 1, 0, 16])
def test_validate_key_rejects_wrong_length(length: int):
    with pytest.raises(ConfigError):
        validate_key(os.urandom(length))


def test_validate_key_rejects_text():
    with pytest.raises(ConfigError):
        validate_key("a" * AES_KEY_BYTES)


def test_parse_hex_key():
    assert parse_hex_key(KEY.hex()) == KEY
    assert parse_hex_key(f"  {KEY.hex().upper()}\n") == KEY


@pytest.mark.parametrize("text", ["zz" * AES_KEY_BYTES, "ab" * 31, "ab" * 33, "abc"])
def test_parse_hex_key_rejects_bad_input(text: str):
    with pytest.raises(ConfigError):
        parse_hex_key(text)
