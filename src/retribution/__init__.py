"""Retribution, a grid-based text adventure."""

import sys

from .app import create_session
from .config import Config
from .console import run
from .logging import configure_logging, get_logger

__all__ = ["main", "create_session", "Config"]


def main() -> None:
    """Entry point for the retribution console game."""
    config = Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
    )

    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        database_url=config.database_url,
        start_map=config.start_map,
        log_level=config.log_level,
    )

    session = create_session(config)
    try:
        run(session, sys.stdin, sys.stdout)
    finally:
        session.close()
