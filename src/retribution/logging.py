"""Logging configuration for Retribution.

Logs go to stderr (or a file) so they never interleave with the narrative the
console loop prints on stdout.

Events are snake_case names for what happened (``hero_moved``,
``portal_traversed``, ``map_load_failed``). Location fields are always named
``map`` (the map name) and ``room`` (a ``(row, col)`` tuple, rendered as
``"row,col"``). Portal events add ``from_map`` and ``to_map``. Anything logged
while a turn is being handled also carries ``turn`` plus the location the turn
started at, via :func:`turn_context`.
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


def coords_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Render (row, col) tuples as "row,col" so JSON logs stay flat."""
    for key, value in event_dict.items():
        if (
            isinstance(value, tuple)
            and len(value) == 2
            and all(isinstance(part, int) for part in value)
        ):
            event_dict[key] = f"{value[0]},{value[1]}"
    return event_dict


@contextmanager
def turn_context(
    turn: int, map_name: str | None, room: tuple[int, int] | None
) -> Iterator[None]:
    """Tag every event logged inside the block with the turn and location.

    Fields passed explicitly to a log call win over the bound ones, so an
    event that reports where the hero ended up still says so.
    """
    with structlog.contextvars.bound_contextvars(turn=turn, map=map_name, room=room):
        yield


def configure_logging(
    log_level: str = "WARNING",
    log_file: Path | None = None,
    json_logs: bool = False,
) -> None:
    """Configure structured logging for the game.

    Unknown level names fall back to WARNING.
    """
    output_stream = open(log_file, "a") if log_file else sys.stderr

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(
            fmt="iso" if json_logs else "%Y-%m-%d %H:%M:%S"
        ),
        coords_processor,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=output_stream.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            _LEVELS.get(log_level.upper(), 30)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output_stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger instance for a module."""
    return structlog.get_logger(name)
