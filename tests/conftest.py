"""Shared test fixtures for Retribution."""

from pathlib import Path

import pytest
from sqlmodel import create_engine

from retribution.app import _get_data_path
from retribution.config import Config
from retribution.engine.loader import MapLoadError, load_areas
from retribution.engine.state import GameState, new_game_state
from retribution.engine.world import Map
from retribution.store import MapStore, create_tables


@pytest.fixture
def areas() -> dict[str, Map]:
    return {m.name: m for m in load_areas(_get_data_path())}


@pytest.fixture
def test_area(areas: dict[str, Map]) -> Map:
    return areas["Test Area"]


@pytest.fixture
def loader():
    """Map loader over the bundled areas that records every name it was asked for."""

    def load_map(name: str) -> Map:
        load_map.calls.append(name)
        # Fresh copy each time, like reading it back from the store.
        for game_map in load_areas(_get_data_path()):
            if game_map.name == name:
                return game_map
        raise MapLoadError(f"No map named {name!r}")

    load_map.calls = []
    return load_map


@pytest.fixture
def state(test_area: Map) -> GameState:
    """Hero standing in room 1 at the centre of the test area."""
    state = new_game_state()
    state.place(test_area, (1, 1))
    return state


@pytest.fixture
def db_engine(tmp_path: Path):
    engine = create_engine(f"sqlite:///{tmp_path}/test.db")
    create_tables(engine)
    return engine


@pytest.fixture
def store(db_engine) -> MapStore:
    return MapStore(db_engine)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(
        database_url=f"sqlite:///{tmp_path}/test.db",
        plugin_output=tmp_path / "ret-plugin.json",
    )
