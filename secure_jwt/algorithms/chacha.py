"""ChaCha20-Poly1305 strategy."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305

from .base import EncryptionAlgo, EncryptionAlgorithm


class ChaCha20Poly1305Algorithm(EncryptionAlgorithm):
    name = EncryptionAlgo.CHACHA20_POLY1305
    key_length = 32
    iv_length = 12

    def _cipher(self, key: bytes) -> ChaCha20Poly1305:
        return ChaCha20Poly1305(key)
