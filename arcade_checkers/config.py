"""
Central configuration for session timings, AI tunables and logging.
Pydantic models give type-safe, validated settings.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from .types import Difficulty

ConfigDict = Dict[str, Any]


class TimingSettings(BaseModel):
    """Delays of the deferred session effects, in milliseconds."""

    ai_move_delay_ms: int = Field(default=800, ge=0, description="Pause before the computer moves")
    message_delay_ms: int = Field(default=1000, ge=0, description="Pause before the status text follows an AI move")
    hint_duration_ms: int = Field(default=3000, ge=0, description="How long a hint stays on screen")

    @field_validator('ai_move_delay_ms', 'message_delay_ms', 'hint_duration_ms', mode='before')
    @classmethod
    def validate_int_fields(cls, v):
        return int(v)


class AISettings(BaseModel):
    """Computer opponent configuration."""

    default_difficulty: Difficulty = Field(default=Difficulty.MEDIUM, description="Difficulty used until a game picks one")
    hard_depth: int = Field(default=3, ge=1, le=6, description="Plies searched by the hard tier and hints")
    seed: Optional[int] = Field(default=None, description="Seed for reproducible AI choices")

    @field_validator('default_difficulty', mode='before')
    @classmethod
    def validate_difficulty(cls, v):
        return v.lower() if isinstance(v, str) else v


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class CheckersConfig(BaseModel):
    """Main configuration model."""

    timing: TimingSettings = Field(default_factory=TimingSettings)
    ai: AISettings = Field(default_factory=AISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'CheckersConfig':
        """Create configuration from environment variables."""
        seed = os.getenv('CHECKERS_SEED')
        return cls(
            timing=TimingSettings(
                ai_move_delay_ms=os.getenv('CHECKERS_AI_DELAY_MS', '800'),
                message_delay_ms=os.getenv('CHECKERS_MESSAGE_DELAY_MS', '1000'),
                hint_duration_ms=os.getenv('CHECKERS_HINT_MS', '3000'),
            ),
            ai=AISettings(
                default_difficulty=os.getenv('CHECKERS_DIFFICULTY', 'medium'),
                hard_depth=int(os.getenv('CHECKERS_HARD_DEPTH', '3')),
                seed=int(seed) if seed else None,
            ),
            logging=LoggingSettings(
                log_level=os.getenv('CHECKERS_LOG_LEVEL', 'INFO'),
            ),
        )

    def to_dict(self) -> ConfigDict:
        return self.model_dump(mode='json')

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to a JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath
        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'CheckersConfig':
        """Load configuration from a JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)

        return cls(
            timing=TimingSettings(**data.get('timing', {})),
            ai=AISettings(**data.get('ai', {})),
            logging=LoggingSettings(**data.get('logging', {})),
            version=data.get('version', '1.0.0'),
            config_file=filepath,
        )

    def update_from_dict(self, updates: ConfigDict) -> None:
        """Update sections from a nested dictionary; values are re-validated."""
        for section, settings in updates.items():
            if hasattr(self, section) and isinstance(settings, dict):
                section_model = getattr(self, section)
                merged = {**section_model.model_dump(), **settings}
                setattr(self, section, type(section_model)(**merged))


# Global configuration instance
_config: Optional[CheckersConfig] = None


def get_config() -> CheckersConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = CheckersConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> CheckersConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = CheckersConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; level defaults to the configured one."""
    if getattr(setup_logging, "_configured", False):
        return
    name = (level or get_config().logging.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
