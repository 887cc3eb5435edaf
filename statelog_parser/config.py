"""
Runtime configuration for the State Log Parser.

Values come from environment variables (a `.env` file is loaded by the CLI
before this is read). Explicit constructor arguments always win.

    STATELOG_MAX_FILE_SIZE   bytes; larger files are refused before reading
    STATELOG_SAMPLE_LENGTH   characters of text kept in failure diagnostics
    STATELOG_JSON_FALLBACK   "1"/"true" to retry broken .json files through recovery
    STATELOG_LOG_LEVEL       DEBUG, INFO, WARNING, ...
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024
DEFAULT_SAMPLE_LENGTH = 300

_TRUTHY = {"1", "true", "yes", "on"}


class ParserConfig(BaseModel):
    """Settings shared by the orchestrator, the pipeline and the CLI."""
    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, gt=0)
    sample_length: int = Field(default=DEFAULT_SAMPLE_LENGTH, ge=0)
    json_fallback_to_recovery: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, **overrides) -> "ParserConfig":
        """
        Build a config from STATELOG_* environment variables.

        Args:
            **overrides: Field values that take precedence over the environment.
                         None values are ignored.

        Returns:
            ParserConfig instance
        """
        values = {}

        max_size = os.getenv("STATELOG_MAX_FILE_SIZE")
        if max_size:
            values["max_file_size"] = int(max_size)

        sample_length = os.getenv("STATELOG_SAMPLE_LENGTH")
        if sample_length:
            values["sample_length"] = int(sample_length)

        fallback = os.getenv("STATELOG_JSON_FALLBACK")
        if fallback:
            values["json_fallback_to_recovery"] = fallback.strip().lower() in _TRUTHY

        log_level = os.getenv("STATELOG_LOG_LEVEL")
        if log_level:
            values["log_level"] = log_level.strip().upper()

        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def load_config(config: Optional[ParserConfig] = None) -> ParserConfig:
    """Return `config` if given, otherwise one built from the environment."""
    return config if config is not None else ParserConfig.from_env()
