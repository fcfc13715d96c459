# cryptcodec/results.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Union

# crypt(3) failure strings; neither can ever match a real hash
FAILED = "*0"
FAILED_TWICE = "*1"

def sentinel_for(config: str) -> str:
    """The failure value for `config`, chosen so it never equals the config itself."""
    return FAILED_TWICE if config == FAILED else FAILED

def is_sentinel(value: str) -> bool:
    return value in (FAILED, FAILED_TWICE)

@dataclass(frozen=True)
class Hashed:
    encoded: str
    ok = True

    def render(self) -> str:
        return self.encoded

@dataclass(frozen=True)
class Failed:
    sentinel: str
    reason: str = ""
    ok = False

    def render(self) -> str:
        return self.sentinel

HashResult = Union[Hashed, Failed]
