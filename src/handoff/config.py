"""Configuration management for handoff."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from handoff.delegation.skills import SkillRule, StaticSkillMatcher
from handoff.errors import ConfigError


def _default_data_dir() -> Path:
    return Path.home() / ".handoff"


class SkillEntry(BaseModel):
    """One static skill rule."""
    name: str = Field(..., min_length=1, description="Skill name returned on match")
    triggers: list[str] = Field(default_factory=list, description="Terms that select this skill")


class HandoffConfig(BaseModel):
    """Top-level configuration."""
    agents_dir: Path = Field(
        default_factory=lambda: _default_data_dir() / "agents",
        description="Directory holding agent metadata (*.yaml, *.yml, *.md)",
    )
    skills: list[SkillEntry] = Field(default_factory=list, description="Static skill trigger table")
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level

    def skill_matcher(self) -> StaticSkillMatcher:
        return StaticSkillMatcher(
            SkillRule(name=entry.name, triggers=tuple(entry.triggers)) for entry in self.skills
        )


def default_config_path() -> Path:
    return _default_data_dir() / "config.yaml"


def load_config(config_path: Path | None = None) -> HandoffConfig:
    """Load configuration from a YAML file, or defaults if it does not exist.

    A relative agents_dir is resolved against the config file's directory.

    Raises:
        ConfigError: the file is not valid YAML or fails validation
    """
    path = config_path or default_config_path()
    if not path.exists():
        return HandoffConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    try:
        config = HandoffConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration in {path}: {e}") from e

    agents_dir = config.agents_dir.expanduser()
    if not agents_dir.is_absolute():
        agents_dir = path.parent / agents_dir
    config.agents_dir = agents_dir
    return config
