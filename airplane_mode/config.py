"""YAML configuration loading with Pydantic validation."""

from __future__ import annotations

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator

from airplane_mode.core.enums import SettingState

# 1x1 transparent GIF
BLANK_AVATAR = "data:image/gif;base64,R0lGODlhAQABAIAAAAAAAP///yH5BAEAAAAALAAAAAABAAEAQAIBRAA7"


def _default_data_dir() -> Path:
    """Return the default data directory: ~/.airplane-mode"""
    return Path.home() / ".airplane-mode"


def _expand(value: str) -> str:
    return str(Path(value).expanduser())


class DatabaseConfig(BaseModel):
    path: str = str(_default_data_dir() / "options.db")

    @field_validator("path")
    @classmethod
    def expand_path(cls, value: str) -> str:
        return _expand(value)


class LogConfig(BaseModel):
    dir: str = str(_default_data_dir() / "logs")

    @field_validator("dir")
    @classmethod
    def expand_dir(cls, value: str) -> str:
        return _expand(value)


class PolicyConfig(BaseModel):
    option_key: str = "airplane-mode"
    default_state: SettingState = SettingState.ON
    local_hosts: List[str] = Field(
        default_factory=lambda: ["localhost", "127.0.0.1"],
        description="Hosts that stay reachable while the policy is enabled.",
    )
    capability: str = "manage_options"
    default_avatar: str = BLANK_AVATAR

    @field_validator("local_hosts")
    @classmethod
    def normalize_hosts(cls, hosts: List[str]) -> List[str]:
        return [h.strip().lower() for h in hosts if h.strip()]


class NonceConfig(BaseModel):
    secret: str = ""  # empty: a random per-process secret is generated
    lifetime: int = Field(default=86400, gt=1)  # seconds
    action: str = "airmde_nonce"
    param: str = "airmde_nonce"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    nonce: NonceConfig = Field(default_factory=NonceConfig)


_config: AppConfig | None = None


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file. Falls back to defaults if file not found."""
    global _config
    if _config is not None:
        return _config

    paths_to_try = []
    if config_path:
        paths_to_try.append(Path(config_path))
    paths_to_try.extend([
        Path("config.yaml"),
        Path("config.yml"),
        _default_data_dir() / "config.yaml",
        _default_data_dir() / "config.yml",
    ])

    for p in paths_to_try:
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}
            _config = AppConfig(**data)
            return _config

    _config = AppConfig()
    return _config


def get_config() -> AppConfig:
    """Get the current config, loading defaults if needed."""
    if _config is None:
        return load_config()
    return _config


def reset_config() -> None:
    """Reset config (for testing)."""
    global _config
    _config = None
