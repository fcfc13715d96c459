# cryptcodec/utils/encoding.py
"""
hash64: the base-64 variant used by crypt(3) style hashes.

Not standard base64. The alphabet is ./0-9A-Za-z and each group of 3 bytes is
read little-endian, so the low 6 bits of the first byte become the first symbol.
A trailing group of 1 or 2 bytes yields 2 or 3 symbols, with no padding.
"""
import re

from ..exceptions import InvalidEncodingError

ALPHABET = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
ALPHABET_CLASS = r"[./0-9A-Za-z]"

_INDEX = {c: i for i, c in enumerate(ALPHABET)}

def encode64(data: bytes, count: int | None = None) -> str:
    """Encode the first `count` bytes of `data` (all of it by default)."""
    if count is None:
        count = len(data)
    if count < 0 or count > len(data):
        raise ValueError(f"count must be between 0 and {len(data)}, got {count}")

    out = []
    for start in range(0, count, 3):
        group = data[start:min(start + 3, count)]
        value = int.from_bytes(group, "little")
        for shift in range(0, 6 * (len(group) + 1), 6):
            out.append(ALPHABET[(value >> shift) & 0x3F])
    return "".join(out)

def decode64(text: str) -> bytes:
    if len(text) % 4 == 1:
        raise InvalidEncodingError(f"hash64 text cannot have length {len(text)}")

    out = bytearray()
    for start in range(0, len(text), 4):
        group = text[start:start + 4]
        value = 0
        for shift, char in enumerate(group):
            try:
                value |= _INDEX[char] << (6 * shift)
            except KeyError:
                raise InvalidEncodingError(f"invalid hash64 character: {char!r}") from None
        n = len(group) - 1
        if value >> (8 * n):
            raise InvalidEncodingError(f"non-canonical hash64 group: {group!r}")
        out += value.to_bytes(n, "little")
    return bytes(out)

def is_alphabet(text: str, min_len: int = 0, max_len: int | None = None) -> bool:
    upper = "" if max_len is None else str(max_len)
    return re.fullmatch(f"{ALPHABET_CLASS}{{{min_len},{upper}}}", text) is not None
