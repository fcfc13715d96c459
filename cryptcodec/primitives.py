# cryptcodec/primitives.py
"""
External collaborators: randomness, HMAC, and the md5-crypt digest.
The codecs only enforce the wire format around these.
"""
import hashlib
import hmac
import re
import secrets

from passlib.hash import md5_crypt as _md5_crypt

from .results import FAILED

_MD5_SALT_RE = re.compile(r"\$1\$([^$]{0,8})")

def random_bytes(n: int) -> bytes:
    return secrets.token_bytes(n)

def hmac_sha1(key: bytes, message: bytes) -> bytes:
    return hmac.new(key, message, hashlib.sha1).digest()

def md5_crypt(password: bytes, config: str) -> str:
    """
    crypt(3) for the "$1$" method: the salt is read from a config or a full hash
    (at most 8 chars, stopping at '$'). Returns "*0" when it cannot hash.
    """
    m = _MD5_SALT_RE.match(config or "")
    if not m:
        return FAILED
    try:
        return _md5_crypt.using(salt=m.group(1)).hash(password)
    except (ValueError, TypeError):
        return FAILED
