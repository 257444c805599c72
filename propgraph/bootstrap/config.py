"""
bootstrap/config.py - Engine configuration

Provides configuration loading from files, environment variables, and defaults.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from pathlib import Path
import os
import json
import logging

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass
class EngineConfig:
    """Schema construction and evaluation settings."""

    # Attach the partial result reached to DispatchError
    snapshot_on_dispatch_error: bool = True

    # Drop (with a warning) requirements naming undeclared properties
    # instead of failing schema construction
    allow_undeclared_requirements: bool = False

    # Thread pool size for evaluate_many
    max_workers: int = 4

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            snapshot_on_dispatch_error=_env_flag("PROPGRAPH_DISPATCH_SNAPSHOT", "true"),
            allow_undeclared_requirements=_env_flag("PROPGRAPH_ALLOW_UNDECLARED", "false"),
            max_workers=int(os.getenv("PROPGRAPH_MAX_WORKERS", "4")),
        )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        return cls(
            level=os.getenv("PROPGRAPH_LOG_LEVEL", "INFO"),
            format=os.getenv("PROPGRAPH_LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            log_file=os.getenv("PROPGRAPH_LOG_FILE"),
            json_logs=_env_flag("PROPGRAPH_JSON_LOGS", "false"),
        )


@dataclass
class PropgraphConfig:
    """Root configuration."""

    environment: str = "development"
    debug: bool = False

    engine: EngineConfig = field(default_factory=EngineConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> "PropgraphConfig":
        """Create configuration from environment variables."""
        return cls(
            environment=os.getenv("PROPGRAPH_ENVIRONMENT", "development"),
            debug=_env_flag("PROPGRAPH_DEBUG", "false"),
            engine=EngineConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )

    @classmethod
    def from_file(cls, filepath: str) -> "PropgraphConfig":
        """Load configuration from JSON file."""
        path = Path(filepath)
        if not path.exists():
            logger.warning(f"Config file not found: {filepath}, using defaults")
            return cls.from_env()

        with open(path) as f:
            data = json.load(f)

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PropgraphConfig":
        """Create config from dictionary, file values override the environment."""
        config = cls.from_env()

        if "environment" in data:
            config.environment = data["environment"]
        if "debug" in data:
            config.debug = data["debug"]

        for section in ("engine", "logging"):
            target = getattr(config, section)
            for key, value in (data.get(section) or {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)
                else:
                    logger.warning(f"Ignoring unknown config key: {section}.{key}")

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Serialize config to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "engine": {
                "snapshot_on_dispatch_error": self.engine.snapshot_on_dispatch_error,
                "allow_undeclared_requirements": self.engine.allow_undeclared_requirements,
                "max_workers": self.engine.max_workers,
            },
            "logging": {
                "level": self.logging.level,
                "log_file": self.logging.log_file,
                "json_logs": self.logging.json_logs,
            },
        }


# Global config instance
_config: Optional[PropgraphConfig] = None


def load_config(filepath: Optional[str] = None) -> PropgraphConfig:
    """
    Load configuration from file or environment.

    Args:
        filepath: Optional path to JSON config file

    Returns:
        PropgraphConfig instance
    """
    global _config

    if filepath:
        _config = PropgraphConfig.from_file(filepath)
    else:
        default_paths = [
            "./propgraph.json",
            "./config/propgraph.json",
            os.path.expanduser("~/.propgraph/config.json"),
        ]

        for path in default_paths:
            if Path(path).exists():
                logger.info(f"Loading config from: {path}")
                _config = PropgraphConfig.from_file(path)
                return _config

        _config = PropgraphConfig.from_env()

    logger.debug(f"Configuration loaded: environment={_config.environment}")
    return _config


def get_config() -> PropgraphConfig:
    """Get current configuration, loading if needed."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Forget the loaded configuration."""
    global _config
    _config = None
