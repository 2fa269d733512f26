"""Encrypted token issuance and validation."""

from .handler import TokenHandler
from .types import InnerPayload, TokenEnvelope, VerificationResult

__all__ = ["TokenHandler", "TokenEnvelope", "InnerPayload", "VerificationResult"]
