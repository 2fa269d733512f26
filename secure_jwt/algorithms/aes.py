"""AES-GCM strategies."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .base import EncryptionAlgo, EncryptionAlgorithm


class AES128GCM(EncryptionAlgorithm):
    """AES-128-GCM with a 12-byte nonce."""

    name = EncryptionAlgo.AES_128_GCM
    key_length = 16
    iv_length = 12

    def _cipher(self, key: bytes) -> AESGCM:
        return AESGCM(key)


class AES256GCM(EncryptionAlgorithm):
    """AES-256-GCM.

    Tokens carry a 16-byte nonce for this cipher; existing tokens depend on it.
    """

    name = EncryptionAlgo.AES_256_GCM
    key_length = 32
    iv_length = 16

    def _cipher(self, key: bytes) -> AESGCM:
        return AESGCM(key)
