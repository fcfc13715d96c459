from __future__ import annotations
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import InvalidOptionError

MAX_ITERATIONS = 4294967295

def normalize_options(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Option keys are case-insensitive and may be snake_case or camelCase."""
    return {str(k).lower().replace("_", ""): v for k, v in (options or {}).items()}

def load_options(model: type[BaseModel], options: Mapping[str, Any] | None) -> BaseModel:
    try:
        return model.model_validate(normalize_options(options))
    except ValidationError as e:
        msgs = "; ".join(err["msg"] for err in e.errors())
        raise InvalidOptionError(msgs) from e

# ----------------------------
# Per-scheme options
# ----------------------------
class Md5CryptOptions(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    salt: Optional[str] = Field(
        None,
        pattern=r"^[./0-9A-Za-z]{0,8}$",
        description="0-8 chars in the range ./0-9A-Za-z",
    )

class Sha1CryptOptions(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    iteration_count: Optional[int] = Field(None, alias="iterationcount")
    iteration_count_log2: Optional[int] = Field(None, alias="iterationcountlog2", ge=0)
    salt: Optional[str] = Field(None, pattern=r"^[./0-9A-Za-z]{0,64}$")

    @model_validator(mode="after")
    def _check_iterations(self):
        count = self.iteration_count
        if self.iteration_count_log2 is not None:
            # anything past 2**32 is out of range anyway
            count = 2 ** min(self.iteration_count_log2, 33)
        if count is not None and not 1 <= count <= MAX_ITERATIONS:
            raise ValueError(f"Iteration count must be an integer between 1 and {MAX_ITERATIONS}")
        self.iteration_count = count
        return self

# ----------------------------
# Parsed / generated settings
# ----------------------------
class HashConfig(BaseModel):
    """The recipe for a hash: scheme id, cost parameters and salt, no checksum."""
    model_config = ConfigDict(frozen=True)

    scheme_id: str
    cost_params: Tuple[int, ...] = ()
    salt: str = Field(pattern=r"^[./0-9A-Za-z]*$")

    def render(self) -> str:
        parts = [self.scheme_id, *map(str, self.cost_params), self.salt]
        return "$" + "$".join(parts) + "$"
