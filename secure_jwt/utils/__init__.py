"""Utility helpers for time and encoding operations."""

from .encoding import b64decode_text, b64encode_text, dumps_compact, loads_json, token_fingerprint
from .time import MAX_LIFETIME_MS, now_ms, now_seconds, parse_time_to_ms

__all__ = [
    "b64decode_text",
    "b64encode_text",
    "dumps_compact",
    "loads_json",
    "token_fingerprint",
    "MAX_LIFETIME_MS",
    "now_ms",
    "now_seconds",
    "parse_time_to_ms",
]
