"""Base64 and JSON helpers that fail with validation errors."""

from __future__ import annotations

import base64
import binascii
import hashlib
import json
from typing import Any

from ..errors import ValidationError


def dumps_compact(value: Any) -> str:
    """Serialize ``value`` as compact JSON without ASCII escaping."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def loads_json(text: str, error_message: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        raise ValidationError(error_message) from exc


def b64encode_text(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def b64decode_text(token: str, error_message: str) -> str:
    """Decode standard base64 into UTF-8 text."""
    try:
        return base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise ValidationError(error_message) from exc


def token_fingerprint(token: str) -> str:
    """Short SHA-256 prefix used to refer to a token in logs."""
    return hashlib.sha256(token.encode("utf-8", "replace")).hexdigest()[:16]
