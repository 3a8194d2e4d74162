"""
Configuration management for StaticWeaver.

Handles loading, validation, and management of configuration settings
from YAML files, environment variables, and CLI arguments.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from dotenv import load_dotenv

from .constants import (
    DEFAULT_CLOSE_DELIM,
    DEFAULT_LOG_FILE,
    DEFAULT_OPEN_DELIM,
    DEFAULT_TEMPLATE_DIR,
    DOWNLOAD_TIMEOUT,
    VALID_LOG_LEVELS,
)

# Load environment variables from .env file
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    return int(value) if value not in (None, "") else None


@dataclass
class Config:
    """Configuration class for StaticWeaver settings."""

    # Template settings
    template_path: str = field(default_factory=lambda: os.getenv("TEMPLATE_PATH", DEFAULT_TEMPLATE_DIR))
    template_url: Optional[str] = field(default_factory=lambda: os.getenv("TEMPLATE_URL"))
    open_delim: str = field(default_factory=lambda: os.getenv("OPEN_DELIM", DEFAULT_OPEN_DELIM))
    close_delim: str = field(default_factory=lambda: os.getenv("CLOSE_DELIM", DEFAULT_CLOSE_DELIM))

    # Cache settings
    cache_ttl: float = field(default_factory=lambda: float(os.getenv("CACHE_TTL", "60")))
    cache_capacity: Optional[int] = field(default_factory=lambda: _optional_int("CACHE_CAPACITY"))

    # Download settings
    download_timeout: float = field(default_factory=lambda: float(os.getenv("DOWNLOAD_TIMEOUT", str(DOWNLOAD_TIMEOUT))))

    # Logging settings
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", DEFAULT_LOG_FILE))

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values."""
        if self.cache_ttl <= 0:
            raise ValueError("cache_ttl must be greater than 0 seconds")

        if self.cache_capacity is not None and self.cache_capacity < 0:
            raise ValueError("cache_capacity must not be negative")

        if not self.open_delim or not self.close_delim:
            raise ValueError("open_delim and close_delim must be non-empty")

        if self.download_timeout <= 0:
            raise ValueError("download_timeout must be greater than 0 seconds")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log_level: {self.log_level}")

    @classmethod
    def from_file(cls, config_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            Config instance
        """
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    def save_to_file(self, config_path: str | Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save YAML configuration file
        """
        path = Path(config_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "template_path": self.template_path,
            "template_url": self.template_url,
            "open_delim": self.open_delim,
            "close_delim": self.close_delim,
            "cache_ttl": self.cache_ttl,
            "cache_capacity": self.cache_capacity,
            "download_timeout": self.download_timeout,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    def __repr__(self) -> str:
        """String representation of configuration."""
        return f"Config(template_path={self.template_path}, cache_ttl={self.cache_ttl})"
