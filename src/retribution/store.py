"""Map storage backed by the `maps` table.

MapStore.load_map is the map loader the travel interpreter calls when the
hero steps onto a portal. Each call opens and closes its own session.
"""

import datetime as dt
import json

from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from .engine.loader import MapLoadError
from .engine.world import Map, grid_to_data, map_from_grid_data
from .logging import get_logger
from .models import MapRecord

logger = get_logger(__name__)


def create_tables(engine: Engine) -> None:
    SQLModel.metadata.create_all(engine)
    logger.debug("database_setup_complete")


class MapStore:
    """Load and save maps by name."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def load_map(self, name: str) -> Map:
        """Fetch the map called `name`.

        Raises MapLoadError if there is no such map, the database can't be
        read, or the stored grid can't be decoded.
        """
        try:
            with Session(self.engine) as session:
                record = session.get(MapRecord, name)
                grid = record.grid if record is not None else None
        except SQLAlchemyError as exc:
            logger.error("map_load_failed", map=name, error=str(exc))
            raise MapLoadError(f"Could not read map {name!r}: {exc}") from exc

        if grid is None:
            logger.warning("map_not_found", map=name)
            raise MapLoadError(f"No map named {name!r}")

        try:
            game_map = map_from_grid_data(name, json.loads(grid))
        except (KeyError, TypeError, ValueError) as exc:
            logger.error("map_decode_failed", map=name, error=str(exc))
            raise MapLoadError(f"Map {name!r} is corrupt: {exc}") from exc

        logger.debug("map_loaded", map=name, rows=game_map.rows, cols=game_map.cols)
        return game_map

    def save_map(self, game_map: Map) -> None:
        """Insert or replace the stored copy of `game_map`."""
        grid = json.dumps(grid_to_data(game_map.grid))
        with Session(self.engine) as session:
            record = session.get(MapRecord, game_map.name)
            if record is None:
                session.add(MapRecord(name=game_map.name, grid=grid))
            else:
                record.grid = grid
                record.updated_at = dt.datetime.now(dt.UTC)
            session.commit()
        logger.debug("map_saved", map=game_map.name)

    def seed(self, maps: list[Map]) -> int:
        """Store each map that isn't already present. Returns how many were added."""
        added = 0
        with Session(self.engine) as session:
            for game_map in maps:
                if session.get(MapRecord, game_map.name) is not None:
                    continue
                session.add(
                    MapRecord(
                        name=game_map.name,
                        grid=json.dumps(grid_to_data(game_map.grid)),
                    )
                )
                added += 1
            session.commit()
        logger.info("maps_seeded", added=added, total=len(maps))
        return added
