# cryptcodec/hashes/sha1.py
"""
sha1_crypt: the NetBSD "$sha1$" scheme.

    $sha1$<rounds>$<salt, 0-64 chars>$<checksum, 28 chars>

The checksum is an HMAC-SHA1 chain keyed with the password:

    c1 = HMAC(password, salt + "$sha1$" + rounds)
    cN = HMAC(password, cN-1)            # rounds times in total

The 20 digest bytes are then shuffled into 21 (byte 0 is used twice) and
hash64 encoded. The shuffle adds no strength but is part of the format.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Mapping, Optional

from .. import primitives
from ..config import settings
from ..exceptions import InvalidOptionError
from ..results import FAILED, FAILED_TWICE
from ..schemas import MAX_ITERATIONS, HashConfig, Sha1CryptOptions, load_options
from ..utils.encoding import encode64
from ..utils.logging import logger
from .base import CryptScheme

SALT_BYTES = 6

# output byte i comes from digest byte OFFSETS[i]
OFFSETS = (2, 1, 0, 5, 4, 3, 8, 7, 6, 11, 10, 9, 14, 13, 12, 17, 16, 15, 0, 19, 18)

_HASH_RE = re.compile(r"\$sha1\$[0-9]+\$[./0-9A-Za-z]{0,64}\$[./0-9A-Za-z]{28}")
# config or full hash; the checksum is optional
_SETTINGS_RE = re.compile(
    r"\$sha1\$([0-9]+)\$([./0-9A-Za-z]{0,64})(?:\$([./0-9A-Za-z]{28})?)?"
)

def permute(digest: bytes) -> bytes:
    return bytes(digest[i] for i in OFFSETS)

def _rounds(text: str) -> Optional[int]:
    """Round count from its decimal text, or None when outside 1..MAX_ITERATIONS."""
    # int() refuses very long digit strings, so check the length first
    if len(text.lstrip("0")) > len(str(MAX_ITERATIONS)):
        return None
    rounds = int(text)
    return rounds if 1 <= rounds <= MAX_ITERATIONS else None

@dataclass(frozen=True)
class Sha1Crypt(CryptScheme):
    name: ClassVar[str] = "sha1_crypt"
    ident: ClassVar[str] = "sha1"

    iteration_count: int = field(default_factory=lambda: settings.SHA1_CRYPT_ITERATIONS)
    raise_on_failure: bool = field(default_factory=lambda: settings.RAISE_ON_FAILURE)

    def __post_init__(self):
        if isinstance(self.iteration_count, bool) or not isinstance(self.iteration_count, int) \
                or not 1 <= self.iteration_count <= MAX_ITERATIONS:
            raise InvalidOptionError(
                f"Iteration count must be an integer between 1 and {MAX_ITERATIONS}"
            )

    # -----------------------------
    # Config
    # -----------------------------
    def gen_salt(self, raw: bytes | None = None) -> str:
        """A full config string with a fresh salt at the bound iteration count."""
        return self._config(self.iteration_count, self._salt(raw))

    def gen_config(self, options: Mapping[str, Any] | None = None) -> str:
        opts = load_options(Sha1CryptOptions, options)
        rounds = opts.iteration_count or self.iteration_count
        salt = opts.salt if opts.salt is not None else self._salt()
        config = self._config(rounds, salt)
        if not self.verify_salt(config):
            return FAILED_TWICE
        logger.debug("sha1_crypt config generated (rounds=%d)", rounds)
        return config

    def _salt(self, raw: bytes | None = None) -> str:
        if not raw:
            raw = primitives.random_bytes(SALT_BYTES)
        return encode64(raw, SALT_BYTES)

    def _config(self, rounds: int, salt: str) -> str:
        return HashConfig(scheme_id=self.ident, cost_params=(rounds,), salt=salt).render()

    # -----------------------------
    # Grammar
    # -----------------------------
    def verify_salt(self, text: str) -> bool:
        """Accepts a config string or a full hash."""
        return isinstance(text, str) and _SETTINGS_RE.fullmatch(text) is not None

    def verify_hash(self, text: str) -> bool:
        return isinstance(text, str) and _HASH_RE.fullmatch(text) is not None

    identify = verify_hash

    def _settings(self, text: str) -> Optional[tuple[str, str, Optional[str]]]:
        """(rounds as written, salt, checksum or None), or None if unparseable."""
        m = _SETTINGS_RE.fullmatch(text)
        if not m:
            return None
        return m.group(1), m.group(2), m.group(3)

    def parse(self, text: str) -> HashConfig:
        parts = self._settings(text) if isinstance(text, str) else None
        rounds = _rounds(parts[0]) if parts is not None else None
        if rounds is None:
            raise ValueError(f"not a sha1_crypt config or hash: {text!r}")
        return HashConfig(scheme_id=self.ident, cost_params=(rounds,), salt=parts[1])

    # -----------------------------
    # Hashing
    # -----------------------------
    def crypt(self, password: str | bytes, config: str | None = None) -> str:
        """gen_hash, generating a config when none is given."""
        return self.gen_hash(password, config or self.gen_salt())

    def _checksum(self, password: bytes, config: str) -> str:
        parts = self._settings(config)
        if parts is None:
            return FAILED
        rounds_text, salt, _ = parts
        rounds = _rounds(rounds_text)
        if rounds is None:
            return FAILED

        checksum = primitives.hmac_sha1(password, f"{salt}$sha1${rounds_text}".encode("ascii"))
        for _ in range(rounds - 1):
            checksum = primitives.hmac_sha1(password, checksum)

        encoded = encode64(permute(checksum), len(OFFSETS))
        return f"$sha1${rounds_text}${salt}${encoded}"

    def needs_rehash(self, stored: str) -> bool:
        if not self.verify_hash(stored):
            return True
        return _rounds(self._settings(stored)[0]) != self.iteration_count

    def using(self, **options: Any) -> "Sha1Crypt":
        raise_on_failure = options.pop("raise_on_failure", self.raise_on_failure)
        opts = load_options(Sha1CryptOptions, options)
        return self._replace(
            iteration_count=opts.iteration_count or self.iteration_count,
            raise_on_failure=raise_on_failure,
        )

sha1_crypt = Sha1Crypt()
