# cryptcodec/hashes/base.py
from __future__ import annotations
import abc
import dataclasses
import hmac
from typing import Any, ClassVar, Mapping

from ..exceptions import HashGenerationError
from ..results import Failed, Hashed, HashResult, sentinel_for
from ..utils.logging import logger

def to_bytes(password: str | bytes) -> bytes:
    if isinstance(password, bytes):
        return password
    if isinstance(password, str):
        return password.encode("utf-8")
    raise TypeError(f"password must be str or bytes, not {type(password).__name__}")

class CryptScheme(abc.ABC):
    """
    Contract shared by every crypt-style codec.

    Subclasses are frozen dataclasses: their defaults are bound once at
    construction, so one instance can be shared freely between threads.
    Use `using()` to get a codec with different defaults.
    """

    name: ClassVar[str]
    ident: ClassVar[str]
    raise_on_failure: bool

    # ---- implemented per scheme
    @abc.abstractmethod
    def gen_config(self, options: Mapping[str, Any] | None = None) -> str:
        ...

    @abc.abstractmethod
    def _checksum(self, password: bytes, config: str) -> str:
        """Raw candidate hash string for `config`; not yet checked."""

    @abc.abstractmethod
    def identify(self, text: str) -> bool:
        """True if `text` is a well-formed hash of this scheme."""

    @abc.abstractmethod
    def using(self, **options: Any) -> "CryptScheme":
        ...

    # ---- shared
    def compute(self, password: str | bytes, config: str) -> HashResult:
        secret = to_bytes(password)
        candidate = self._checksum(secret, config) if isinstance(config, str) else None
        if candidate is not None and self.identify(candidate):
            return Hashed(candidate)
        return Failed(sentinel_for(config), f"{self.name}: could not derive a valid hash")

    def gen_hash(self, password: str | bytes, config: str) -> str:
        result = self.compute(password, config)
        if not result.ok:
            logger.warning("%s produced sentinel %s; check the config string and platform support",
                           self.name, result.sentinel)
            if self.raise_on_failure:
                raise HashGenerationError(result.reason, result.sentinel)
        return result.render()

    def hash(self, password: str | bytes, config: str | Mapping[str, Any] | None = None) -> str:
        if config is None or isinstance(config, Mapping):
            config = self.gen_config(config)
        return self.gen_hash(password, config)

    def verify(self, password: str | bytes, stored: str) -> bool:
        if not isinstance(stored, str) or not isinstance(password, (str, bytes)):
            return False
        try:
            result = self.compute(password, stored)
        except UnicodeEncodeError:
            # str password that has no UTF-8 form, e.g. a lone surrogate
            return False
        if not result.ok:
            return False
        # Timing-safe compare
        return hmac.compare_digest(result.encoded.encode("utf-8"), stored.encode("utf-8"))

    def needs_rehash(self, stored: str) -> bool:
        return not self.identify(stored)

    def _replace(self, **changes: Any) -> "CryptScheme":
        return dataclasses.replace(self, **changes)
