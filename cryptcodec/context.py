# cryptcodec/context.py
"""
Pick the codec for a stored hash by its "$<ident>$" prefix.

    ctx = CryptContext([sha1_crypt, md5_crypt])
    if ctx.verify(password, stored) and ctx.needs_rehash(stored):
        stored = ctx.preferred.hash(password)
"""
from __future__ import annotations
from typing import Iterable, Optional

from .hashes import CryptScheme, md5_crypt, sha1_crypt

class CryptContext:
    def __init__(self, schemes: Iterable[CryptScheme], preferred: CryptScheme | None = None):
        self._schemes = {s.ident: s for s in schemes}
        if not self._schemes:
            raise ValueError("CryptContext needs at least one scheme")
        self.preferred = preferred or next(iter(self._schemes.values()))

    @property
    def schemes(self) -> tuple[CryptScheme, ...]:
        return tuple(self._schemes.values())

    def identify(self, stored: str) -> Optional[CryptScheme]:
        if not isinstance(stored, str) or not stored.startswith("$"):
            return None
        ident = stored[1:].split("$", 1)[0]
        return self._schemes.get(ident)

    def hash(self, password: str | bytes) -> str:
        return self.preferred.hash(password)

    def verify(self, password: str | bytes, stored: str) -> bool:
        scheme = self.identify(stored)
        return scheme is not None and scheme.verify(password, stored)

    def needs_rehash(self, stored: str) -> bool:
        scheme = self.identify(stored)
        if scheme is None or scheme.ident != self.preferred.ident:
            return True
        return scheme.needs_rehash(stored)

default_context = CryptContext([sha1_crypt, md5_crypt])

identify = default_context.identify
verify = default_context.verify
needs_rehash = default_context.needs_rehash
