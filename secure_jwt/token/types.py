"""Token datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..algorithms.base import EncryptedBlock


@dataclass(frozen=True)
class TokenEnvelope:
    """Outer wire structure, JSON-serialized and base64-encoded."""

    encrypted: str
    iv: str
    tag: str
    exp: int
    iat: int
    version: str

    @classmethod
    def from_block(cls, block: EncryptedBlock, *, exp: int, iat: int, version: str) -> "TokenEnvelope":
        return cls(encrypted=block.encrypted, iv=block.iv, tag=block.tag, exp=exp, iat=iat, version=version)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "TokenEnvelope":
        return cls(
            encrypted=raw["encrypted"],
            iv=raw["iv"],
            tag=raw["tag"],
            exp=raw["exp"],
            iat=raw["iat"],
            version=raw["version"],
        )

    @property
    def block(self) -> EncryptedBlock:
        return EncryptedBlock(encrypted=self.encrypted, iv=self.iv, tag=self.tag)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "encrypted": self.encrypted,
            "iv": self.iv,
            "tag": self.tag,
            "exp": self.exp,
            "iat": self.iat,
            "version": self.version,
        }


@dataclass(frozen=True)
class InnerPayload:
    """Plaintext recovered after decryption."""

    data: Any
    exp: int
    iat: int
    version: str

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "InnerPayload":
        return cls(data=raw["data"], exp=raw["exp"], iat=raw["iat"], version=raw["version"])

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "exp": self.exp, "iat": self.iat, "version": self.version}


@dataclass(frozen=True)
class VerificationResult:
    valid: bool
    reason: str
    payload: InnerPayload | None = None
