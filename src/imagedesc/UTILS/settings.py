"""
Runtime settings, read from the process environment and an optional .env file.
"""
import logging
import os
from typing import Dict, Optional

from dotenv import dotenv_values
from pydantic import BaseModel, field_validator

ENV_PREFIX = "IMAGEDESC_"


class Settings(BaseModel):
    """
    Settings shared by the parsers and the command line.

    :param log_level: Name of the logging level used by the CLI.
    :param strict_history: Reject descriptors whose history does not match
        their diff IDs.
    """
    log_level: str = "WARNING"
    strict_history: bool = False

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


def _prefixed(values: Dict[str, Optional[str]]) -> Dict[str, str]:
    return {
        key[len(ENV_PREFIX):].lower(): value
        for key, value in values.items()
        if key.startswith(ENV_PREFIX) and value is not None
    }


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Builds the settings. Variables from the process environment override the
    ones found in ``env_file``.

    :param env_file: Path to a .env file. Missing files are skipped.
    :return: Validated settings.
    """
    merged: Dict[str, str] = {}
    if env_file and os.path.exists(env_file):
        merged.update(_prefixed(dotenv_values(env_file)))
    merged.update(_prefixed(dict(os.environ)))
    return Settings(**merged)
