"""Authenticated-encryption algorithms and key derivation."""

from .aes import AES128GCM, AES256GCM
from .base import AAD_PREFIX, EncryptedBlock, EncryptionAlgo, EncryptionAlgorithm, KeyDerivation, build_aad
from .chacha import ChaCha20Poly1305Algorithm
from .factory import derive_key, derive_key_basic, derive_key_pbkdf2, fit_key, get_algorithm, random_bytes, supported_algorithms

__all__ = [
    "AAD_PREFIX",
    "AES128GCM",
    "AES256GCM",
    "ChaCha20Poly1305Algorithm",
    "EncryptedBlock",
    "EncryptionAlgo",
    "EncryptionAlgorithm",
    "KeyDerivation",
    "build_aad",
    "derive_key",
    "derive_key_basic",
    "derive_key_pbkdf2",
    "fit_key",
    "get_algorithm",
    "random_bytes",
    "supported_algorithms",
]
