"""Handler configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from .algorithms.base import EncryptionAlgo, KeyDerivation
from .errors import SecretKeyError, ValidationError, message

ENV_PREFIX = "SECURE_JWT_"


@dataclass(frozen=True)
class TokenConfig:
    """Options accepted by :class:`secure_jwt.TokenHandler`."""

    secret: str
    expire_in: str
    version: str = "1.0.0"
    algorithm: str = EncryptionAlgo.AES_256_GCM.value
    key_derivation: str = KeyDerivation.BASIC.value
    cached: int = 1000

    @classmethod
    def from_env(cls, prefix: str = ENV_PREFIX, environ: Optional[Dict[str, str]] = None) -> "TokenConfig":
        """Build a config from ``<prefix>SECRET``, ``<prefix>EXPIRE_IN`` and friends."""
        env = os.environ if environ is None else environ
        secret = env.get(f"{prefix}SECRET")
        if not secret:
            raise SecretKeyError(message("SECRET_REQUIRED"))

        raw_cached = env.get(f"{prefix}CACHED", "1000")
        try:
            cached = int(raw_cached)
        except ValueError:
            raise ValidationError(message("CACHE_SIZE_MUST_BE_INTEGER")) from None

        return cls(
            secret=secret,
            expire_in=env.get(f"{prefix}EXPIRE_IN", "1h"),
            version=env.get(f"{prefix}VERSION", "1.0.0"),
            algorithm=env.get(f"{prefix}ALGORITHM", EncryptionAlgo.AES_256_GCM.value),
            key_derivation=env.get(f"{prefix}KEY_DERIVATION", KeyDerivation.BASIC.value),
            cached=cached,
        )

    def with_overrides(self, **changes: Any) -> "TokenConfig":
        return replace(self, **changes)

    def __repr__(self) -> str:
        return (
            f"TokenConfig(secret='***', expire_in={self.expire_in!r}, version={self.version!r}, "
            f"algorithm={self.algorithm!r}, key_derivation={self.key_derivation!r}, cached={self.cached!r})"
        )
