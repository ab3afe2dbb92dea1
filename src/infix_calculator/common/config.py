"""Runtime configuration of the calculator."""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


ENV_PREFIX = "INFIX_CALCULATOR_"


class CalculatorSettings(BaseModel):
    """
    Settings shared by the core pipeline, the batch runner and the CLI.

    Settings are immutable once built, so one instance can be handed to any
    number of workers.
    """

    model_config = ConfigDict(frozen=True)

    max_expression_length: int = Field(
        default=1000, ge=1, description="Longest accepted expression, in characters"
    )
    max_workers: Optional[int] = Field(
        default=None, ge=1, description="Worker processes for batch runs (CPU count if unset)"
    )
    log_level: str = Field(default="WARNING", description="Level of the package logger")

    @field_validator("log_level")
    def log_level_must_be_known(cls, v: str) -> str:
        """Ensure the log level is one the logging module understands."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> CalculatorSettings:
    """
    Build settings from INFIX_CALCULATOR_* environment variables.

    Unset variables keep their defaults. Values are validated by pydantic,
    so a bad value raises a ValidationError.

    :param environ: Mapping to read from, defaults to os.environ

    :return: Validated settings
    :rtype: CalculatorSettings
    """
    if environ is None:
        environ = os.environ

    overrides = {}
    for field_name, env_name in (
        ("max_expression_length", "MAX_LENGTH"),
        ("max_workers", "MAX_WORKERS"),
        ("log_level", "LOG_LEVEL"),
    ):
        value = environ.get(ENV_PREFIX + env_name)
        if value:
            overrides[field_name] = value

    return CalculatorSettings(**overrides)
