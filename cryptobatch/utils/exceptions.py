# exceptions.py
# -*- coding: utf-8 -*-
"""Custom exception classes for the cryptobatch application."""


class BatchCryptError(Exception):
    """Base class for application-specific errors."""

    @property
    def kind(self) -> str:
        """Short error category used in per-file reports."""
        return type(self).__name__


class ConfigError(BatchCryptError):
    """Invalid arguments or configuration (missing argument, bad key). Fatal."""
    pass


class FileAccessError(BatchCryptError):
    """Error related to file access (not found, permissions, I/O)."""
    pass


class OutputCollisionError(FileAccessError):
    """Two input files resolve to the same output file name."""
    pass


class CipherInitError(BatchCryptError):
    """The cipher primitive rejected the key."""
    pass


class RandomSourceError(BatchCryptError):
    """The secure random source could not produce a nonce."""
    pass


class MalformedInputError(BatchCryptError):
    """Ciphertext blob is too short to contain a nonce."""
    pass


class AuthenticationError(BatchCryptError):
    """Tag verification failed (wrong key, corrupted or tampered data)."""
    pass


class InvalidModeError(BatchCryptError):
    """Mode is neither 'encrypt' nor 'decrypt'."""
    pass
