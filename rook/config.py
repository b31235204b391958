"""Validated runtime configuration for the scorekeeper."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_STORAGE_PATH = Path("rook_scorekeeper.json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

ENV_STORAGE_PATH = "ROOK_STORAGE_PATH"
ENV_LOG_LEVEL = "ROOK_LOG_LEVEL"


class ScorekeeperConfig(BaseModel):
    storage_path: Path = Field(DEFAULT_STORAGE_PATH, description="JSON file holding the saved game.")
    key_prefix: str = Field("rook_", description="Prefix applied to every persisted key.")
    log_level: str = Field("INFO", description="Root logging level.")

    @field_validator("key_prefix")
    @classmethod
    def validate_prefix(cls, value: str) -> str:
        if not value or any(ch.isspace() for ch in value):
            raise ValueError("Key prefix must be non-empty and contain no whitespace.")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        normalized = value.upper()
        if normalized not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return normalized

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def load_config(path: Optional[Union[str, Path]] = None) -> ScorekeeperConfig:
    """Read an optional JSON config file, then apply environment overrides."""
    data: dict = {}
    if path is not None:
        data.update(json.loads(Path(path).read_text(encoding="utf-8")))
    if os.environ.get(ENV_STORAGE_PATH):
        data["storage_path"] = os.environ[ENV_STORAGE_PATH]
    if os.environ.get(ENV_LOG_LEVEL):
        data["log_level"] = os.environ[ENV_LOG_LEVEL]
    return ScorekeeperConfig(**data)
