"""Run configuration.

Values come from keyword overrides first, then the environment (a ``.env``
file in the working directory is loaded), then the defaults below:

    MINIFIER_ATTRIBUTES    comma-separated attribute kinds (default "class,id")
    MINIFIER_WORKERS       thread count for both passes (default 1)
"""

from __future__ import annotations

import os
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from minifier.errors import ConfigError

DEFAULT_ATTRIBUTES = ["class", "id"]


class MinifyConfig(BaseModel):
    """Validated settings for one minification run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    attributes: list[str] = DEFAULT_ATTRIBUTES
    workers: int = 1
    alias_map_path: Optional[str] = None

    @field_validator("attributes")
    @classmethod
    def clean_attributes(cls, v: list[str]) -> list[str]:
        cleaned: list[str] = []
        for name in v:
            name = name.strip().lower()
            if name and name not in cleaned:
                cleaned.append(name)
        if not cleaned:
            raise ValueError("at least one attribute kind is required")
        return cleaned

    @field_validator("workers")
    @classmethod
    def check_workers(cls, v: int) -> int:
        if v < 1:
            raise ValueError("workers must be >= 1")
        return v


def _from_env() -> dict[str, Any]:
    values: dict[str, Any] = {}
    attributes = os.getenv("MINIFIER_ATTRIBUTES")
    if attributes:
        values["attributes"] = attributes.split(",")
    workers = os.getenv("MINIFIER_WORKERS")
    if workers:
        values["workers"] = workers
    return values


def load_config(**overrides: Any) -> MinifyConfig:
    """Build a ``MinifyConfig`` from the environment plus explicit overrides.

    Overrides set to ``None`` are ignored so CLI defaults fall through.

    Raises:
        ConfigError: If the merged values do not validate.
    """
    load_dotenv()
    values = _from_env()
    values.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return MinifyConfig(**values)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
