"""Configuration for Retribution."""

import os
from dataclasses import dataclass
from pathlib import Path

PLUGIN_OUTPUT = "~/ret-plugin.json"


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./retribution.db"
    start_map: str = "Test Area"
    start_row: int = 1
    start_col: int = 1
    plugin_output: Path = Path(PLUGIN_OUTPUT).expanduser()
    plugin_enabled: bool = True
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        plugin_output = os.getenv("RETRIBUTION_PLUGIN_OUTPUT", PLUGIN_OUTPUT)
        log_file = os.getenv("RETRIBUTION_LOG_FILE")

        return cls(
            database_url=os.getenv("RETRIBUTION_DATABASE_URL", cls.database_url),
            start_map=os.getenv("RETRIBUTION_START_MAP", cls.start_map),
            start_row=int(os.getenv("RETRIBUTION_START_ROW", str(cls.start_row))),
            start_col=int(os.getenv("RETRIBUTION_START_COL", str(cls.start_col))),
            plugin_output=Path(plugin_output).expanduser(),
            plugin_enabled=os.getenv("RETRIBUTION_PLUGIN_ENABLED", "true").lower()
            not in ("false", "0", "no"),
            log_level=os.getenv("RETRIBUTION_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("RETRIBUTION_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
        )
