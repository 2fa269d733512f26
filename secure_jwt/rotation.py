"""Secret rotation across a current and a previous token handler."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import TokenConfig
from .errors import SecureJWTError, ValidationError, message
from .token.handler import TokenHandler

logger = logging.getLogger(__name__)


class KeyRotationManager:
    """Sign with the newest secret while still accepting tokens from the last one.

    Handlers derive their keys with a fresh salt, so tokens stay readable only
    through the handler instance that issued them; the manager keeps that
    instance alive for one rotation.
    """

    def __init__(self, secret: str, version: str = "1.0.0", *, expire_in: str = "1h", **options: Any) -> None:
        self._config = TokenConfig(secret=secret, expire_in=expire_in, version=version, **options)
        self._current = TokenHandler.from_config(self._config)
        self._previous: Optional[TokenHandler] = None

    @classmethod
    def from_config(cls, config: TokenConfig) -> "KeyRotationManager":
        return cls(
            config.secret,
            config.version,
            expire_in=config.expire_in,
            algorithm=config.algorithm,
            key_derivation=config.key_derivation,
            cached=config.cached,
        )

    @property
    def current_version(self) -> str:
        return self._current.version

    @property
    def previous_version(self) -> Optional[str]:
        return self._previous.version if self._previous is not None else None

    def rotate(self, new_secret: str, new_version: str) -> None:
        """Build a handler for ``new_secret``; the current one becomes previous."""
        config = self._config.with_overrides(secret=new_secret, version=new_version)
        handler = TokenHandler.from_config(config)
        self._previous, self._current, self._config = self._current, handler, config
        logger.debug("Rotated token key to version %s (previous %s)", self.current_version, self.previous_version)

    def sign(self, data: Any) -> str:
        return self._current.sign(data)

    def verify(self, token: str) -> bool:
        if self._current.verify(token):
            return True
        if self._previous is not None:
            return self._previous.verify(token)
        return False

    def decode(self, token: str) -> Any:
        last_error: Optional[SecureJWTError] = None
        for handler in (self._current, self._previous):
            if handler is None:
                continue
            try:
                return handler.decode(token)
            except SecureJWTError as exc:
                last_error = exc
        raise ValidationError(message("ROTATION_EXHAUSTED")) from last_error
