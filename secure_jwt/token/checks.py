"""Validation steps shared by sign, verify and decode.

Every check raises the most specific error from :mod:`secure_jwt.errors`;
none of them touch key material.
"""

from __future__ import annotations

import re
from typing import Any, Dict

from ..errors import (
    PayloadTooLargeError,
    SecretKeyError,
    TokenExpiredError,
    ValidationError,
    VersionMismatchError,
    message,
)
from ..utils.time import now_seconds

MAX_PAYLOAD_BYTES = 8192
MIN_TOKEN_LENGTH = 10
MAX_TOKEN_LENGTH = 100_000
MIN_SECRET_LENGTH = 8
MAX_SECRET_LENGTH = 255
MIN_CACHE_SIZE = 1
MAX_CACHE_SIZE = 10_000
YEAR_SECONDS = 365 * 24 * 60 * 60

ENVELOPE_FIELDS = ("encrypted", "iv", "tag", "exp", "iat", "version")
PAYLOAD_FIELDS = ("data", "exp", "iat", "version")

_BASE64_RE = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_VERSION_RE = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# construction options

def check_secret(secret: Any) -> None:
    if not isinstance(secret, str):
        raise ValidationError(message("SECRET_MUST_BE_STRING"))
    if len(secret) < MIN_SECRET_LENGTH:
        raise SecretKeyError(message("SECRET_TOO_SHORT"))
    if len(secret) > MAX_SECRET_LENGTH:
        raise SecretKeyError(message("SECRET_TOO_LONG"))
    if any(not 32 <= ord(ch) <= 126 for ch in secret):
        raise SecretKeyError(message("SECRET_INVALID_CHARS"))


def check_expire_in(expire_in: Any) -> None:
    if not isinstance(expire_in, str):
        raise ValidationError(message("EXPIRE_IN_REQUIRED"))


def check_version(version: Any) -> None:
    if not isinstance(version, str):
        raise ValidationError(message("VERSION_MUST_BE_STRING"))
    if not version:
        raise ValidationError(message("VERSION_CANNOT_BE_EMPTY"))
    if not _VERSION_RE.match(version):
        raise ValidationError(message("VERSION_INVALID_FORMAT"))


def check_cache_size(cached: Any) -> None:
    if not _is_int(cached):
        raise ValidationError(message("CACHE_SIZE_MUST_BE_INTEGER"))
    if cached < MIN_CACHE_SIZE:
        raise ValidationError(message("CACHE_SIZE_TOO_SMALL"))
    if cached > MAX_CACHE_SIZE:
        raise ValidationError(message("CACHE_SIZE_TOO_LARGE"))


# signing

def check_data(data: Any) -> None:
    if data is None:
        raise ValidationError(message("DATA_NULL"))
    if isinstance(data, str) and not data:
        raise ValidationError(message("DATA_EMPTY_STRING"))


def check_payload_size(serialized: str, max_bytes: int = MAX_PAYLOAD_BYTES) -> None:
    if len(serialized.encode("utf-8")) > max_bytes:
        raise PayloadTooLargeError(message("PAYLOAD_TOO_LARGE"))


def check_expiration_window(exp: int, iat: int) -> None:
    if exp > iat + YEAR_SECONDS:
        raise ValidationError(message("EXPIRATION_TOO_FAR"))


# token string

def check_token(token: Any) -> None:
    if not isinstance(token, str):
        raise ValidationError(message("TOKEN_MUST_BE_STRING"))
    if not token:
        raise ValidationError(message("TOKEN_CANNOT_BE_EMPTY"))


def check_token_integrity(token: str) -> None:
    """Reject input that cannot be standard padded base64 before decoding it."""
    if not _BASE64_RE.match(token):
        raise ValidationError(message("TOKEN_FORMAT_NOT_BASE64"))
    if len(token) < MIN_TOKEN_LENGTH:
        raise ValidationError(message("TOKEN_FORMAT_TOO_SHORT"))
    if len(token) > MAX_TOKEN_LENGTH:
        raise ValidationError(message("TOKEN_FORMAT_TOO_LONG"))
    if token.count("=") > 2:
        raise ValidationError(message("TOKEN_FORMAT_INVALID_PADDING"))
    if len(token) % 4 != 0:
        raise ValidationError(message("TOKEN_FORMAT_INVALID_LENGTH"))


# envelope and payload

def check_envelope(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValidationError(message("TOKEN_STRUCTURE_NOT_OBJECT"))
    for field in ENVELOPE_FIELDS:
        if field not in raw:
            raise ValidationError(f"{message('TOKEN_STRUCTURE_MISSING_FIELD')} '{field}'")

    for field, key in (("encrypted", "TOKEN_STRUCTURE_ENCRYPTED_FIELD"), ("iv", "TOKEN_STRUCTURE_IV_FIELD"), ("tag", "TOKEN_STRUCTURE_TAG_FIELD")):
        if not isinstance(raw[field], str) or not raw[field]:
            raise ValidationError(message(key))
    if not _is_int(raw["exp"]) or raw["exp"] <= 0:
        raise ValidationError(message("TOKEN_STRUCTURE_EXP_FIELD"))
    if not _is_int(raw["iat"]) or raw["iat"] <= 0:
        raise ValidationError(message("TOKEN_STRUCTURE_IAT_FIELD"))
    if not isinstance(raw["version"], str) or not raw["version"]:
        raise ValidationError(message("TOKEN_STRUCTURE_VERSION_FIELD"))

    if raw["iat"] > raw["exp"]:
        raise ValidationError(message("TOKEN_STRUCTURE_IAT_GREATER_THAN_EXP"))
    now = now_seconds()
    if raw["iat"] < now - YEAR_SECONDS:
        raise ValidationError(message("TOKEN_STRUCTURE_IAT_TOO_FAR_PAST"))
    if raw["exp"] > now + YEAR_SECONDS:
        raise ValidationError(message("TOKEN_STRUCTURE_EXP_TOO_FAR_FUTURE"))
    return raw


def check_payload(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValidationError(message("PAYLOAD_STRUCTURE_NOT_OBJECT"))
    for field in PAYLOAD_FIELDS:
        if field not in raw:
            raise ValidationError(f"{message('PAYLOAD_STRUCTURE_MISSING_FIELD')} '{field}'")
    if not _is_int(raw["exp"]):
        raise ValidationError(message("PAYLOAD_STRUCTURE_EXP_FIELD"))
    if not _is_int(raw["iat"]):
        raise ValidationError(message("PAYLOAD_STRUCTURE_IAT_FIELD"))
    if not isinstance(raw["version"], str):
        raise ValidationError(message("PAYLOAD_STRUCTURE_VERSION_FIELD"))
    return raw


# semantic checks

def _version_key(version: str) -> tuple:
    parts = []
    for part in version.split("."):
        parts.append(int(part) if part.isdigit() else 0)
    return tuple(parts)


def check_version_compatibility(token_version: str, expected_version: str) -> None:
    """Require an exact match, naming downgrades and upgrades in the message."""
    if token_version == expected_version:
        return
    token_key, expected_key = _version_key(token_version), _version_key(expected_version)
    width = max(len(token_key), len(expected_key))
    token_key += (0,) * (width - len(token_key))
    expected_key += (0,) * (width - len(expected_key))
    if token_key < expected_key:
        raise VersionMismatchError(message("VERSION_DOWNGRADE_ATTACK"))
    if token_key > expected_key:
        raise VersionMismatchError(message("VERSION_UPGRADE_NOT_SUPPORTED"))
    raise VersionMismatchError(message("VERSION_MISMATCH"))


def check_not_expired(exp: int) -> None:
    # whole-second granularity: a token stays valid through its exp second
    if exp < now_seconds():
        raise TokenExpiredError(message("TOKEN_EXPIRED"))


def check_timestamps(payload_exp: int, envelope_exp: int, payload_iat: int, envelope_iat: int) -> None:
    if payload_exp != envelope_exp or payload_iat != envelope_iat:
        raise ValidationError(message("TOKEN_TIMESTAMP_MISMATCH"))
