"""Command-line configuration.

Defaults are overridden by environment variables using the pattern
ALERTLINK_<KEY> (uppercase). Command-line flags override both. The library API
never reads the environment; only the CLI calls load_config().
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

LOG_LEVELS = ("debug", "info", "warning", "error", "critical")
LOG_FORMATS = ("console", "json")


@dataclass
class LoggingConfig:
    level: str = "warning"
    format: str = "console"  # "console" or "json"

    def __post_init__(self) -> None:
        """Validate logging parameters."""
        self.level = self.level.lower()
        if self.level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {self.level}")
        if self.format not in LOG_FORMATS:
            raise ValueError(
                f"log format must be one of {', '.join(LOG_FORMATS)}, got {self.format}"
            )


@dataclass
class AlertlinkConfig:
    """CLI configuration.

    Attributes:
        logging: Log level and renderer
        hmac_key: Default HMAC key for encode and decode (empty by default)
        program: Program name used when reconstructing commands
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    hmac_key: str = ""
    program: str = "alertlink"

    def __post_init__(self) -> None:
        if not self.program:
            raise ValueError("program must not be empty")


def load_config(environ: Optional[Mapping[str, str]] = None) -> AlertlinkConfig:
    """Load configuration from defaults plus environment overrides.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Validated AlertlinkConfig

    Raises:
        ValueError: If an override holds an invalid value
    """
    if environ is None:
        environ = os.environ

    logging_config = LoggingConfig(
        level=environ.get("ALERTLINK_LOG_LEVEL", LoggingConfig.level),
        format=environ.get("ALERTLINK_LOG_FORMAT", LoggingConfig.format),
    )
    return AlertlinkConfig(
        logging=logging_config,
        hmac_key=environ.get("ALERTLINK_HMAC_KEY", ""),
        program=environ.get("ALERTLINK_PROGRAM", "alertlink"),
    )
