"""Encrypted token issuance, verification and decoding."""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any, Union

from ..algorithms.base import EncryptionAlgo, KeyDerivation
from ..algorithms.factory import derive_key, fit_key, get_algorithm, random_bytes
from ..cache.lru import Cache
from ..errors import DecryptionError, ErrorCode, SecureJWTError, ValidationError, message
from ..utils.encoding import b64decode_text, b64encode_text, dumps_compact, loads_json, token_fingerprint
from ..utils.time import now_ms, now_seconds, parse_time_to_ms
from . import checks
from .types import InnerPayload, TokenEnvelope, VerificationResult

if TYPE_CHECKING:
    from ..config import TokenConfig

logger = logging.getLogger(__name__)


class TokenHandler:
    """Issue and validate tokens whose whole payload is AEAD-encrypted.

    One handler owns one derived key, one cipher, one version string and one
    token lifetime, all fixed at construction. Rotating any of them means
    building a new handler. ``verify`` and ``decode`` memoize their results
    per raw token string in two independent caches; ``verify_strict`` never
    touches either cache.
    """

    def __init__(
        self,
        *,
        secret: str,
        expire_in: str,
        version: str = "1.0.0",
        algorithm: Union[str, EncryptionAlgo] = EncryptionAlgo.AES_256_GCM,
        key_derivation: Union[str, KeyDerivation] = KeyDerivation.BASIC,
        cached: int = 1000,
    ) -> None:
        checks.check_expire_in(expire_in)
        checks.check_secret(secret)
        checks.check_version(version)
        checks.check_cache_size(cached)

        self._algorithm = get_algorithm(algorithm)
        self._key = fit_key(derive_key(secret, key_derivation), self._algorithm)
        self._expire_in_ms = parse_time_to_ms(expire_in)
        self._version = version
        self._payload_cache: Cache[Any] = Cache(cached, self._expire_in_ms)
        self._verify_cache: Cache[bool] = Cache(cached, self._expire_in_ms)

    @classmethod
    def from_config(cls, config: "TokenConfig") -> "TokenHandler":
        return cls(
            secret=config.secret,
            expire_in=config.expire_in,
            version=config.version,
            algorithm=config.algorithm,
            key_derivation=config.key_derivation,
            cached=config.cached,
        )

    @property
    def version(self) -> str:
        return self._version

    @property
    def algorithm(self) -> str:
        return self._algorithm.name.value

    @property
    def expire_in_ms(self) -> float:
        return self._expire_in_ms

    def __repr__(self) -> str:
        return f"TokenHandler(algorithm={self.algorithm!r}, version={self._version!r})"

    def sign(self, data: Any) -> str:
        """Encrypt ``data`` into a new token string. Never touches the caches."""
        try:
            checks.check_data(data)
            iat = now_seconds()
            exp = iat + max(1, int(self._expire_in_ms // 1000))
            checks.check_expiration_window(exp, iat)

            payload = InnerPayload(data=data, exp=exp, iat=iat, version=self._version)
            try:
                payload_text = dumps_compact(payload.to_dict())
            except (TypeError, ValueError) as exc:
                raise ValidationError(f"{message('DATA_NOT_SERIALIZABLE')}: {exc}") from exc
            checks.check_payload_size(payload_text)

            iv = random_bytes(self._algorithm.get_iv_length())
            block = self._algorithm.encrypt(payload_text, self._key, iv, self._version)
            envelope = TokenEnvelope.from_block(block, exp=exp, iat=iat, version=self._version)
            return b64encode_text(dumps_compact(envelope.to_dict()))
        except SecureJWTError:
            raise
        except Exception as exc:
            raise ValidationError(f"{message('SIGNING_FAILED')}: {exc}") from exc

    def verify(self, token: str) -> bool:
        """Return whether ``token`` is valid. Never raises."""
        try:
            cached = self._verify_cache.get(token)
            if cached is not None:
                return cached

            result = self.inspect(token)
            if result.valid and result.payload is not None:
                self._verify_cache.set(token, True, max(0, result.payload.exp * 1000 - now_ms()))
            else:
                self._verify_cache.set(token, False, 0)
            return result.valid
        except Exception:
            logger.debug("Token verification aborted", exc_info=True)
            return False

    def verify_strict(self, token: str) -> None:
        """Validate ``token`` and raise the error of the first failing stage."""
        try:
            self._validate(token)
        except SecureJWTError:
            raise
        except Exception as exc:
            raise ValidationError(f"{message('VERIFY_FAILED')}: {exc}") from exc

    def decode(self, token: str) -> Any:
        """Return the data carried by ``token``, raising on any failure."""
        try:
            cached = self._payload_cache.get(token)
            if cached is not None:
                return copy.deepcopy(cached)

            payload = self._validate(token)
            self._payload_cache.set(token, payload.data, max(0, payload.exp * 1000 - now_ms()))
            return copy.deepcopy(payload.data)
        except SecureJWTError:
            raise
        except Exception as exc:
            raise ValidationError(f"{message('DECODE_FAILED')}: {exc}") from exc

    def inspect(self, token: str) -> VerificationResult:
        """Run the full pipeline and report the outcome instead of raising."""
        try:
            payload = self._validate(token)
        except SecureJWTError as exc:
            reason = exc.code.value
        except Exception:
            logger.debug("Unexpected failure while validating token", exc_info=True)
            reason = ErrorCode.UNKNOWN_ERROR.value
        else:
            return VerificationResult(valid=True, reason="ok", payload=payload)

        if isinstance(token, str):
            logger.debug("Token %s rejected: %s", token_fingerprint(token), reason)
        return VerificationResult(valid=False, reason=reason)

    def _validate(self, token: str) -> InnerPayload:
        checks.check_token(token)
        checks.check_token_integrity(token)

        envelope_text = b64decode_text(token, message("INVALID_TOKEN_FORMAT"))
        raw_envelope = loads_json(envelope_text, message("INVALID_TOKEN_STRUCTURE"))
        envelope = TokenEnvelope.from_dict(checks.check_envelope(raw_envelope))

        checks.check_version_compatibility(envelope.version, self._version)
        checks.check_not_expired(envelope.exp)

        plaintext = self._decrypt(envelope)

        raw_payload = loads_json(plaintext, message("INVALID_PAYLOAD_STRUCTURE"))
        payload = InnerPayload.from_dict(checks.check_payload(raw_payload))

        checks.check_version_compatibility(payload.version, envelope.version)
        checks.check_not_expired(payload.exp)
        checks.check_timestamps(payload.exp, envelope.exp, payload.iat, envelope.iat)
        return payload

    def _decrypt(self, envelope: TokenEnvelope) -> str:
        try:
            return self._algorithm.decrypt(envelope.block, self._key, self._version)
        except DecryptionError:
            raise
        except Exception as exc:
            raise DecryptionError(f"{message('DECRYPTION_FAILED')}: {exc}") from exc
