"""Algorithm lookup, secure randomness and key derivation."""

from __future__ import annotations

import logging
import secrets
from typing import Dict, Type, Union

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..errors import EncryptionError, ValidationError, message
from .aes import AES128GCM, AES256GCM
from .base import EncryptionAlgo, EncryptionAlgorithm, KeyDerivation
from .chacha import ChaCha20Poly1305Algorithm

logger = logging.getLogger(__name__)

BASIC_SALT_LENGTH = 32
PBKDF2_SALT_LENGTH = 32
PBKDF2_ITERATIONS = 50_000
PBKDF2_KEY_LENGTH = 32

_ALGORITHMS: Dict[EncryptionAlgo, Type[EncryptionAlgorithm]] = {
    EncryptionAlgo.AES_128_GCM: AES128GCM,
    EncryptionAlgo.AES_256_GCM: AES256GCM,
    EncryptionAlgo.CHACHA20_POLY1305: ChaCha20Poly1305Algorithm,
}


def _to_algo(value: Union[str, EncryptionAlgo]) -> EncryptionAlgo:
    if isinstance(value, EncryptionAlgo):
        return value
    try:
        return EncryptionAlgo(value)
    except ValueError:
        raise EncryptionError(f"{message('INVALID_ALGORITHM')}: {value!r}") from None


def _to_derivation(value: Union[str, KeyDerivation]) -> KeyDerivation:
    if isinstance(value, KeyDerivation):
        return value
    try:
        return KeyDerivation(value)
    except ValueError:
        raise ValidationError(message("INVALID_KEY_DERIVATION_METHOD")) from None


def get_algorithm(name: Union[str, EncryptionAlgo]) -> EncryptionAlgorithm:
    """Return a fresh strategy instance for ``name``."""
    return _ALGORITHMS[_to_algo(name)]()


def supported_algorithms() -> list[str]:
    return [algo.value for algo in _ALGORITHMS]


def random_bytes(length: int) -> bytes:
    """Return ``length`` bytes from the OS CSPRNG."""
    return secrets.token_bytes(length)


def derive_key_basic(secret: str) -> bytes:
    """Random salt followed by the UTF-8 secret.

    The salt alone covers every supported key length, so after
    :func:`fit_key` truncates the material the key is pure salt and the
    secret never reaches it.
    """
    return random_bytes(BASIC_SALT_LENGTH) + secret.encode("utf-8")


def derive_key_pbkdf2(secret: str) -> bytes:
    """PBKDF2-HMAC-SHA256 over the secret with a fresh random salt."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=PBKDF2_KEY_LENGTH,
        salt=random_bytes(PBKDF2_SALT_LENGTH),
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(secret.encode("utf-8"))


def derive_key(secret: str, method: Union[str, KeyDerivation] = KeyDerivation.BASIC) -> bytes:
    """Derive key material from ``secret`` using ``method`` (basic or pbkdf2)."""
    derivation = _to_derivation(method)
    logger.debug("Deriving key material using %s", derivation.value)
    if derivation is KeyDerivation.PBKDF2:
        return derive_key_pbkdf2(secret)
    return derive_key_basic(secret)


def fit_key(material: bytes, algorithm: EncryptionAlgorithm) -> bytes:
    """Truncate derived material to the algorithm key length."""
    required = algorithm.get_key_length()
    if len(material) < required:
        raise EncryptionError(message("INVALID_KEY_LENGTH"))
    return bytes(material[:required])
