"""
Reference file codec.

The reference answer workbook is stored as

    12-byte random nonce || AES-256-GCM ciphertext

under a key embedded in this module. The key ships with the program, so
this only keeps the answers from being read casually. It is NOT a
security boundary.
"""
import logging
import os
from pathlib import Path
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from core.errors import DecryptionFailure

logger = logging.getLogger(__name__)

NONCE_LEN = 96 // 8

ENC_KEY = bytes([
    232, 222, 212, 202, 166, 177, 188, 199, 87, 34, 44, 10, 102, 1, 9, 0,
    32, 22, 22, 20, 136, 177, 128, 199, 87, 32, 44, 10, 102, 2, 4, 6,
])


def encrypt(plaintext: bytes, key: bytes = ENC_KEY) -> bytes:
    """Encrypt bytes, returning nonce followed by ciphertext."""
    nonce = os.urandom(NONCE_LEN)
    return nonce + AESGCM(key).encrypt(nonce, plaintext, None)


def decrypt(blob: bytes, key: bytes = ENC_KEY) -> bytes:
    """
    Decrypt a nonce-prefixed blob produced by encrypt().

    Raises:
        DecryptionFailure: if the blob is truncated or fails authentication
    """
    if len(blob) < NONCE_LEN:
        raise DecryptionFailure(f"encrypted data too short ({len(blob)} bytes)")

    nonce, ciphertext = blob[:NONCE_LEN], blob[NONCE_LEN:]
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag:
        raise DecryptionFailure("authentication failed: wrong key or corrupted data")
    except ValueError as e:
        raise DecryptionFailure(str(e))


def encrypt_file(source: Union[str, Path], dest: Union[str, Path]) -> int:
    """Encrypt a file to dest. Returns the number of bytes written."""
    plaintext = Path(source).read_bytes()
    blob = encrypt(plaintext)
    Path(dest).write_bytes(blob)
    logger.info(f"Encrypted {len(plaintext)} bytes from {source} to {dest}")
    return len(blob)


def decrypt_file(path: Union[str, Path]) -> bytes:
    """Read and decrypt a file fully into memory."""
    blob = Path(path).read_bytes()
    try:
        plaintext = decrypt(blob)
    except DecryptionFailure as e:
        raise DecryptionFailure(f"failed to decrypt the reference file [{path}]: {e.message}")
    logger.info(f"Decrypted {len(plaintext)} bytes from {path}")
    return plaintext
