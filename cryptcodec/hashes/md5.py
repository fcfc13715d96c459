# cryptcodec/hashes/md5.py
"""
md5_crypt: the FreeBSD "$1$" scheme.

Fixed cost (1000 rounds of MD5), kept for reading existing password databases.
Don't pick it for new hashes; the digest itself comes from the platform
md5-crypt primitive and this module only enforces the wire format:

    $1$<salt, 0-8 chars>$<checksum, 22 chars>
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping

from .. import primitives
from ..config import settings
from ..results import FAILED_TWICE
from ..schemas import HashConfig, Md5CryptOptions, load_options
from ..utils.encoding import encode64, is_alphabet
from ..utils.logging import logger
from .base import CryptScheme

SALT_BYTES = 6

_HASH_RE = re.compile(r"\$1\$[./0-9A-Za-z]{0,8}\$[./0-9A-Za-z]{22}")

@dataclass(frozen=True)
class Md5Crypt(CryptScheme):
    name: ClassVar[str] = "md5_crypt"
    ident: ClassVar[str] = "1"

    raise_on_failure: bool = field(default_factory=lambda: settings.RAISE_ON_FAILURE)

    def gen_salt(self, raw: bytes | None = None) -> str:
        if not raw:
            raw = primitives.random_bytes(SALT_BYTES)
        return encode64(raw, SALT_BYTES)

    def gen_config(self, options: Mapping[str, Any] | None = None) -> str:
        opts = load_options(Md5CryptOptions, options)
        salt = opts.salt if opts.salt is not None else self.gen_salt()
        if not is_alphabet(salt, 0, 8):
            return FAILED_TWICE
        config = HashConfig(scheme_id=self.ident, salt=salt).render()
        logger.debug("md5_crypt config generated (salt length %d)", len(salt))
        return config

    def _checksum(self, password: bytes, config: str) -> str:
        return primitives.md5_crypt(password, config)

    def identify(self, text: str) -> bool:
        return isinstance(text, str) and _HASH_RE.fullmatch(text) is not None

    def using(self, raise_on_failure: bool | None = None, **options: Any) -> "Md5Crypt":
        # no tunable cost; only the failure mode can change
        load_options(Md5CryptOptions, options)
        if raise_on_failure is None:
            return self
        return self._replace(raise_on_failure=raise_on_failure)

md5_crypt = Md5Crypt()
