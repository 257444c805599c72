"""
bootstrap/ - Configuration, logging and command line entry point
"""

from .config import (
    PropgraphConfig,
    EngineConfig,
    LoggingConfig,
    load_config,
    get_config,
    reset_config,
)

from .entrypoints import (
    cli_main,
    load_target,
    setup_logging,
)

__all__ = [
    # Config
    "PropgraphConfig",
    "EngineConfig",
    "LoggingConfig",
    "load_config",
    "get_config",
    "reset_config",
    # Entry points
    "cli_main",
    "load_target",
    "setup_logging",
]
