"""Application factory for Retribution."""

from importlib import resources
from pathlib import Path

from sqlmodel import create_engine

from .config import Config
from .engine.loader import load_areas
from .engine.state import new_game_state
from .engine.world import Room
from .logging import get_logger
from .plugin import StateWriter
from .session import GameSession
from .store import MapStore, create_tables

logger = get_logger(__name__)


class StartRoomError(ValueError):
    """The configured start coordinates don't hold a room."""


def _get_data_path() -> Path:
    """Locate areas.json via importlib.resources (works when installed in a venv)."""
    return resources.files("retribution.data").joinpath("areas.json")


def create_session(config: Config | None = None) -> GameSession:
    """Set up the map store and place the hero at the configured start.

    Raises MapLoadError if the starting map isn't in the store, and
    StartRoomError if the start coordinates aren't a room on it.
    """
    config = config or Config.from_env()

    engine = create_engine(config.database_url)
    create_tables(engine)

    store = MapStore(engine)
    areas = load_areas(_get_data_path())
    store.seed(areas)

    start_map = store.load_map(config.start_map)
    start = (config.start_row, config.start_col)
    if not isinstance(start_map.get(*start), Room):
        logger.error("start_not_a_room", map=start_map.name, room=start)
        raise StartRoomError(f"No room at {start} on map {start_map.name!r}")

    state = new_game_state()
    state.place(start_map, start)
    logger.info(
        "game_started",
        map=start_map.name,
        room=state.room,
        plugin_enabled=config.plugin_enabled,
    )

    writer = StateWriter(config.plugin_output) if config.plugin_enabled else None
    return GameSession(state, store.load_map, writer)
