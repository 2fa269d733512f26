"""Error taxonomy and message catalogue for token operations."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    ENCRYPTION_ERROR = "ENCRYPTION_ERROR"
    DECRYPTION_ERROR = "DECRYPTION_ERROR"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    TOKEN_INVALID = "TOKEN_INVALID"
    VERSION_MISMATCH = "VERSION_MISMATCH"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    TIME_FORMAT_ERROR = "TIME_FORMAT_ERROR"
    SECRET_KEY_ERROR = "SECRET_KEY_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


MESSAGES: Dict[str, str] = {
    # data
    "DATA_NULL": "Data cannot be null",
    "DATA_EMPTY_STRING": "Data cannot be an empty string",
    "DATA_NOT_SERIALIZABLE": "Data must be JSON-serializable",
    # token string
    "TOKEN_EXPIRED": "Token has expired",
    "TOKEN_MUST_BE_STRING": "Token must be a string",
    "TOKEN_CANNOT_BE_EMPTY": "Token cannot be empty",
    "TOKEN_TIMESTAMP_MISMATCH": "Token timestamp mismatch",
    "TOKEN_FORMAT_NOT_BASE64": "Invalid token format: not valid base64",
    "TOKEN_FORMAT_TOO_SHORT": "Invalid token format: too short",
    "TOKEN_FORMAT_TOO_LONG": "Invalid token format: too long",
    "TOKEN_FORMAT_INVALID_PADDING": "Invalid token format: invalid base64 padding",
    "TOKEN_FORMAT_INVALID_LENGTH": "Invalid token format: invalid base64 length",
    # envelope structure
    "TOKEN_STRUCTURE_NOT_OBJECT": "Invalid token structure: not an object",
    "TOKEN_STRUCTURE_MISSING_FIELD": "Invalid token structure: missing field",
    "TOKEN_STRUCTURE_ENCRYPTED_FIELD": "Invalid token structure: encrypted field must be non-empty string",
    "TOKEN_STRUCTURE_IV_FIELD": "Invalid token structure: iv field must be non-empty string",
    "TOKEN_STRUCTURE_TAG_FIELD": "Invalid token structure: tag field must be non-empty string",
    "TOKEN_STRUCTURE_EXP_FIELD": "Invalid token structure: exp field must be positive integer",
    "TOKEN_STRUCTURE_IAT_FIELD": "Invalid token structure: iat field must be positive integer",
    "TOKEN_STRUCTURE_VERSION_FIELD": "Invalid token structure: version field must be non-empty string",
    "TOKEN_STRUCTURE_IAT_GREATER_THAN_EXP": "Invalid token structure: iat cannot be greater than exp",
    "TOKEN_STRUCTURE_IAT_TOO_FAR_PAST": "Invalid token structure: iat too far in the past",
    "TOKEN_STRUCTURE_EXP_TOO_FAR_FUTURE": "Invalid token structure: exp too far in the future",
    # inner payload structure
    "PAYLOAD_STRUCTURE_NOT_OBJECT": "Invalid payload structure: not an object",
    "PAYLOAD_STRUCTURE_MISSING_FIELD": "Invalid payload structure: missing field",
    "PAYLOAD_STRUCTURE_EXP_FIELD": "Invalid payload structure: exp field must be integer",
    "PAYLOAD_STRUCTURE_IAT_FIELD": "Invalid payload structure: iat field must be integer",
    "PAYLOAD_STRUCTURE_VERSION_FIELD": "Invalid payload structure: version field must be string",
    # version
    "VERSION_MISMATCH": "Token version does not match expected version",
    "VERSION_DOWNGRADE_ATTACK": "Version downgrade attack detected - token version is older than expected",
    "VERSION_UPGRADE_NOT_SUPPORTED": "Token version is newer than supported version",
    "VERSION_MUST_BE_STRING": "Version must be a string",
    "VERSION_CANNOT_BE_EMPTY": "Version cannot be empty",
    "VERSION_INVALID_FORMAT": 'Version must be in format "x.y.z" (e.g., "1.0.0", "2.1.0")',
    # payload size and expiry
    "PAYLOAD_TOO_LARGE": "Payload size exceeds maximum limit of 8KB",
    "EXPIRATION_TOO_FAR": "Token expiration is too far in the future (max 1 year)",
    # time expressions
    "TIME_FORMAT_INVALID": "Invalid time format. Expected format: number + unit (ms, s, m, h, d, M, y)",
    "TIME_VALUE_NOT_POSITIVE": "Time value must be positive",
    "TIME_VALUE_TOO_LARGE": "Time value exceeds maximum limit of 1 year",
    "TIME_STRING_NON_EMPTY": "Time string must be a non-empty string",
    # secret
    "SECRET_TOO_SHORT": "Secret key must be at least 8 characters long",
    "SECRET_TOO_LONG": "Secret key must be at most 255 characters long",
    "SECRET_INVALID_CHARS": "Secret key contains invalid characters",
    "SECRET_MUST_BE_STRING": "Secret must be a string",
    "SECRET_REQUIRED": "Secret is required",
    # cache size
    "CACHE_SIZE_MUST_BE_INTEGER": "Cache size must be an integer",
    "CACHE_SIZE_TOO_SMALL": "Cache size must be at least 1",
    "CACHE_SIZE_TOO_LARGE": "Cache size must be at most 10000",
    # options
    "EXPIRE_IN_REQUIRED": "expire_in is required and must be a string",
    "INVALID_KEY_DERIVATION_METHOD": "Key derivation method must be one of: basic, pbkdf2",
    "INVALID_ALGORITHM": "Unsupported encryption algorithm",
    # crypto
    "ENCRYPTION_FAILED": "Encryption operation failed",
    "DECRYPTION_FAILED": "Decryption failed",
    "INVALID_IV_FORMAT": "Invalid IV format",
    "INVALID_AUTH_TAG_FORMAT": "Invalid authentication tag format",
    "INVALID_CIPHERTEXT_FORMAT": "Invalid ciphertext format",
    "INVALID_KEY_LENGTH": "Derived key is shorter than the algorithm key length",
    "FAILED_TO_GENERATE_AUTH_TAG": "Failed to generate authentication tag",
    # operations
    "UNKNOWN_ERROR": "Unknown error occurred",
    "SIGNING_FAILED": "Signing failed",
    "DECODE_FAILED": "Decode failed",
    "VERIFY_FAILED": "Verification failed",
    "INVALID_TOKEN_FORMAT": "Invalid token format",
    "INVALID_TOKEN_STRUCTURE": "Invalid token structure",
    "INVALID_PAYLOAD_STRUCTURE": "Invalid payload structure",
    "ROTATION_EXHAUSTED": "Token verification failed with every available key",
}


def message(key: str) -> str:
    """Return the catalogue message for ``key``."""
    return MESSAGES.get(key, MESSAGES["UNKNOWN_ERROR"])


class SecureJWTError(Exception):
    """Base error for every token operation failure."""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR
    status_code: int = 500
    default_message: str = MESSAGES["UNKNOWN_ERROR"]

    def __init__(self, message: Optional[str] = None, *, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Render the error envelope used by HTTP layers."""
        return {"error": {"code": self.code.value, "message": self.message, "details": dict(self.details)}}


class ValidationError(SecureJWTError):
    code = ErrorCode.VALIDATION_ERROR
    status_code = 400


class EncryptionError(SecureJWTError):
    code = ErrorCode.ENCRYPTION_ERROR
    status_code = 500
    default_message = MESSAGES["ENCRYPTION_FAILED"]


class DecryptionError(SecureJWTError):
    code = ErrorCode.DECRYPTION_ERROR
    status_code = 500
    default_message = MESSAGES["DECRYPTION_FAILED"]


class TokenExpiredError(SecureJWTError):
    code = ErrorCode.TOKEN_EXPIRED
    status_code = 401
    default_message = MESSAGES["TOKEN_EXPIRED"]


class TokenInvalidError(SecureJWTError):
    code = ErrorCode.TOKEN_INVALID
    status_code = 401
    default_message = "Invalid token"


class VersionMismatchError(SecureJWTError):
    code = ErrorCode.VERSION_MISMATCH
    status_code = 400
    default_message = MESSAGES["VERSION_MISMATCH"]


class PayloadTooLargeError(SecureJWTError):
    code = ErrorCode.PAYLOAD_TOO_LARGE
    status_code = 413
    default_message = MESSAGES["PAYLOAD_TOO_LARGE"]


class TimeFormatError(SecureJWTError):
    code = ErrorCode.TIME_FORMAT_ERROR
    status_code = 400
    default_message = MESSAGES["TIME_FORMAT_INVALID"]


class SecretKeyError(SecureJWTError):
    code = ErrorCode.SECRET_KEY_ERROR
    status_code = 500


__all__ = [
    "ErrorCode",
    "MESSAGES",
    "message",
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
