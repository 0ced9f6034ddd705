"""Parse the bundled area data file into Map objects.

The file is a JSON document listing maps by name, each with its grid in the
same tagged form the map store keeps (see world.grid_to_data):

    {"maps": [
        {"name": "Test Area 2", "grid": [
            [{"Portal": {"name": ..., "target": ..., "destination": [1, 1]}}],
            [{"Room": {"name": ..., "description": ...}}]
        ]}
    ]}

Empty cells are null.
"""

import json
from collections.abc import Callable
from pathlib import Path

from .world import Map, map_from_grid_data


class MapLoadError(Exception):
    """A map couldn't be loaded by name."""


class AreaDataError(ValueError):
    """The area data file is malformed."""


# Signature of the map-loading collaborator the interpreter calls on portals.
MapLoader = Callable[[str], Map]


def load_areas(data_path: Path) -> list[Map]:
    """Parse the area file at `data_path` and return its maps in file order."""
    with open(data_path) as fh:
        try:
            document = json.load(fh)
        except json.JSONDecodeError as exc:
            raise AreaDataError(f"{data_path} is not valid JSON: {exc}") from exc

    maps: list[Map] = []
    seen: set[str] = set()
    for entry in document.get("maps", []):
        try:
            game_map = map_from_grid_data(entry["name"], entry["grid"])
        except (KeyError, TypeError, ValueError) as exc:
            raise AreaDataError(f"Malformed map entry in {data_path}: {exc}") from exc
        if game_map.name in seen:
            raise AreaDataError(f"Duplicate map name {game_map.name!r}")
        seen.add(game_map.name)
        maps.append(game_map)
    return maps
