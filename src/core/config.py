"""Application settings, read from environment variables (prefix CHESSDEV_)"""

import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, field_validator

ENV_PREFIX = "CHESSDEV_"


class Settings(BaseModel):
    database_url: str = "sqlite:///:memory:"
    log_level: str = "INFO"
    # None: a different game every time. Set it to replay the automatic side's choices exactly.
    rng_seed: Optional[int] = None
    ansi_colors: bool = True

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Only the variables that are actually set override the defaults"""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)
