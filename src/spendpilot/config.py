"""
SpendPilot configuration management.

Supports loading from YAML files, environment variables, and keyword overrides.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

from spendpilot.models.expense import DEFAULT_CATEGORIES


class StorageConfig(BaseModel):
    """Where expenses, budgets, goals and categories are kept."""

    backend: Literal["file", "memory"] = Field(default="file", description="Key-value backend")
    data_dir: str = Field(default="~/.spendpilot", description="Directory for JSON blobs (file backend)")


class SpendPilotConfig(BaseModel):
    """Root configuration for SpendPilot."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    default_categories: list[str] = Field(default_factory=lambda: list(DEFAULT_CATEGORIES))

    # Output settings
    currency: str = Field(default="USD")
    log_level: str = Field(default="WARNING")

    @classmethod
    def load(cls, config_path: str | None = None, **overrides: Any) -> SpendPilotConfig:
        """Load configuration from file, env vars, and overrides.

        Priority: overrides > env vars > config file > defaults.
        """
        data: dict[str, Any] = {}

        # 1. Load from YAML file if provided
        if config_path:
            path = Path(config_path)
            if path.exists():
                with open(path) as f:
                    data = yaml.safe_load(f) or {}

        # 2. Override from environment variables
        env_data_dir = os.environ.get("SPENDPILOT_DATA_DIR")
        env_backend = os.environ.get("SPENDPILOT_STORAGE")
        env_currency = os.environ.get("SPENDPILOT_CURRENCY")
        env_log_level = os.environ.get("SPENDPILOT_LOG_LEVEL")

        if env_data_dir or env_backend:
            storage = data.get("storage", {})
            if env_data_dir:
                storage["data_dir"] = env_data_dir
            if env_backend:
                storage["backend"] = env_backend
            data["storage"] = storage

        if env_currency:
            data["currency"] = env_currency
        if env_log_level:
            data["log_level"] = env_log_level.upper()

        # 3. Apply keyword overrides
        data.update(overrides)

        return cls.model_validate(data)
