"""Base model shared by every persisted firevitals model.

Every model inherits from :class:`VitalsBaseModel` which provides:

* ``alias_generator=to_camel`` so the camelCase keys of the persisted
  blob map automatically to snake_case fields.
* ``frozen=True``: state is only ever replaced, never mutated in place.
* ``extra="ignore"`` so blobs written by newer builds still load.
"""

from __future__ import annotations

import math
import secrets
import time
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def now_ms() -> int:
    """Current epoch timestamp in milliseconds."""
    return int(time.time() * 1000)


def new_id() -> str:
    """Random identifier, unique within any realistic scene."""
    return secrets.token_hex(8)


def drop_missing(values: dict[str, Any]) -> dict[str, Any]:
    """Strip ``None`` and non-finite floats so the field default is used."""
    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, float) and not math.isfinite(value):
            continue
        cleaned[key] = value
    return cleaned


class VitalsBaseModel(BaseModel):
    """Base for persisted models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_blob(self) -> dict[str, Any]:
        """JSON-compatible dict with camelCase keys and absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
