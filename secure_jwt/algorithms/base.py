"""Authenticated-encryption strategy interface."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from cryptography.exceptions import InvalidTag

from ..errors import DecryptionError, EncryptionError, message

logger = logging.getLogger(__name__)

AAD_PREFIX = "secure-jwt-"
TAG_LENGTH = 16

_HEX_RE = re.compile(r"^(?:[0-9a-fA-F]{2})+$")
_TAG_RE = re.compile(r"^[0-9a-fA-F]{32}$")


class EncryptionAlgo(str, Enum):
    """Supported AEAD ciphers."""

    AES_128_GCM = "aes-128-gcm"
    AES_256_GCM = "aes-256-gcm"
    CHACHA20_POLY1305 = "chacha20-poly1305"


class KeyDerivation(str, Enum):
    """Secret-to-key derivation methods."""

    BASIC = "basic"
    PBKDF2 = "pbkdf2"


@dataclass(frozen=True)
class EncryptedBlock:
    """Hex-encoded ciphertext, nonce and authentication tag."""

    encrypted: str
    iv: str
    tag: str

    def to_dict(self) -> Dict[str, Any]:
        return {"encrypted": self.encrypted, "iv": self.iv, "tag": self.tag}


def build_aad(version: str) -> bytes:
    """Bind the token version into the authentication tag."""
    return f"{AAD_PREFIX}{version}".encode("utf-8")


class EncryptionAlgorithm(ABC):
    """Base class for AEAD strategies.

    Subclasses declare their key and nonce sizes and build the underlying
    ``cryptography`` primitive; sealing, opening and hex framing live here.
    """

    name: EncryptionAlgo
    key_length: int
    iv_length: int

    @abstractmethod
    def _cipher(self, key: bytes) -> Any:
        """Return an AEAD primitive exposing ``encrypt``/``decrypt``."""

    def get_key_length(self) -> int:
        return self.key_length

    def get_iv_length(self) -> int:
        return self.iv_length

    def encrypt(self, plaintext: str, key: bytes, iv: bytes, version: str) -> EncryptedBlock:
        try:
            sealed = self._cipher(key).encrypt(iv, plaintext.encode("utf-8"), build_aad(version))
        except (TypeError, ValueError, OverflowError) as exc:
            raise EncryptionError(f"{message('ENCRYPTION_FAILED')}: {exc}") from exc

        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        if len(tag) == 0:
            raise EncryptionError(message("FAILED_TO_GENERATE_AUTH_TAG"))
        return EncryptedBlock(encrypted=ciphertext.hex(), iv=iv.hex(), tag=tag.hex())

    def decrypt(self, block: EncryptedBlock, key: bytes, version: str) -> str:
        if not isinstance(block.iv, str) or len(block.iv) != self.iv_length * 2 or not _HEX_RE.match(block.iv):
            raise DecryptionError(message("INVALID_IV_FORMAT"))
        if not isinstance(block.tag, str) or not _TAG_RE.match(block.tag):
            raise DecryptionError(message("INVALID_AUTH_TAG_FORMAT"))
        if not isinstance(block.encrypted, str) or not _HEX_RE.match(block.encrypted):
            raise DecryptionError(message("INVALID_CIPHERTEXT_FORMAT"))

        sealed = bytes.fromhex(block.encrypted) + bytes.fromhex(block.tag)
        try:
            plaintext = self._cipher(key).decrypt(bytes.fromhex(block.iv), sealed, build_aad(version))
            return plaintext.decode("utf-8")
        except (InvalidTag, TypeError, ValueError) as exc:
            # Wrong key, tampered bytes and AAD mismatch all surface as one error.
            logger.debug("AEAD open failed for %s: %s", self.name.value, type(exc).__name__)
            raise DecryptionError(message("DECRYPTION_FAILED")) from None
