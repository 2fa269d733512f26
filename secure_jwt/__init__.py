"""secure_jwt package.

Compact tokens whose entire payload is sealed with an AEAD cipher
(AES-GCM or ChaCha20-Poly1305), with in-process caching of verification
and decode results.
"""

from .algorithms import EncryptionAlgo, KeyDerivation
from .cache import Cache
from .config import TokenConfig
from .errors import (
    DecryptionError,
    EncryptionError,
    ErrorCode,
    PayloadTooLargeError,
    SecretKeyError,
    SecureJWTError,
    TimeFormatError,
    TokenExpiredError,
    TokenInvalidError,
    ValidationError,
    VersionMismatchError,
)
from .rotation import KeyRotationManager
from .token import TokenHandler, VerificationResult

__version__ = "1.0.0"

__all__ = [
    "TokenHandler",
    "TokenConfig",
    "KeyRotationManager",
    "VerificationResult",
    "Cache",
    "EncryptionAlgo",
    "KeyDerivation",
    "ErrorCode",
    "SecureJWTError",
    "ValidationError",
    "EncryptionError",
    "DecryptionError",
    "TokenExpiredError",
    "TokenInvalidError",
    "VersionMismatchError",
    "PayloadTooLargeError",
    "TimeFormatError",
    "SecretKeyError",
]
