"""Map model for the game world.

A map is a fixed-size grid of optional grid squares. Each square is either a
Room, which the hero can stand in, or a Portal, which sends the hero to a
square on another (possibly the same) map.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

Coords = tuple[int, int]


@dataclass(frozen=True)
class Room:
    """A location the hero can occupy."""

    name: str
    description: str


@dataclass(frozen=True)
class Portal:
    """A one-way link to `destination` on the map named `target`.

    Portals never show up in room listings; they are resolved as soon as the
    hero steps onto them.
    """

    name: str
    target: str
    destination: Coords


GridSquare = Room | Portal


class Map:
    """A named rows x cols grid of squares, indexed [row][col]."""

    def __init__(self, name: str, rows: int, cols: int):
        self.name = name
        self.grid: list[list[GridSquare | None]] = [
            [None for _ in range(cols)] for _ in range(rows)
        ]

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def get(self, row: int, col: int) -> GridSquare | None:
        """Return the square at (row, col), or None if empty or off the grid."""
        if row < 0 or col < 0:
            return None
        if row >= self.rows or col >= self.cols:
            return None
        return self.grid[row][col]

    def set(self, row: int, col: int, square: GridSquare | None) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError("Index out of bounds.")
        self.grid[row][col] = square

    def squares(self) -> Iterator[tuple[Coords, GridSquare]]:
        """Yield ((row, col), square) for every occupied cell."""
        for row, cells in enumerate(self.grid):
            for col, square in enumerate(cells):
                if square is not None:
                    yield (row, col), square

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Map):
            return NotImplemented
        return self.name == other.name and self.grid == other.grid

    def __repr__(self) -> str:
        return f"Map(name={self.name!r}, rows={self.rows}, cols={self.cols})"


def square_to_data(square: GridSquare | None) -> dict[str, Any] | None:
    match square:
        case None:
            return None
        case Room(name=name, description=description):
            return {"Room": {"name": name, "description": description}}
        case Portal(name=name, target=target, destination=(row, col)):
            return {
                "Portal": {
                    "name": name,
                    "target": target,
                    "destination": [row, col],
                }
            }
    raise TypeError(f"Not a grid square: {square!r}")


def square_from_data(data: dict[str, Any] | None) -> GridSquare | None:
    """Decode a tagged cell. Raises KeyError/ValueError on malformed data."""
    if data is None:
        return None
    if "Room" in data:
        room = data["Room"]
        return Room(name=room["name"], description=room["description"])
    if "Portal" in data:
        portal = data["Portal"]
        row, col = portal["destination"]
        return Portal(
            name=portal["name"],
            target=portal["target"],
            destination=(int(row), int(col)),
        )
    raise ValueError(f"Unknown grid square kind: {sorted(data)}")


def grid_to_data(grid: list[list[GridSquare | None]]) -> list[list[Any]]:
    """Encode a grid as nested lists of tagged dicts (None for empty cells)."""
    return [[square_to_data(square) for square in row] for row in grid]


def map_from_grid_data(name: str, data: list[list[Any]]) -> Map:
    """Rebuild a Map from `grid_to_data` output.

    Rows must all be the same length.
    """
    rows = len(data)
    cols = len(data[0]) if data else 0
    if any(len(row) != cols for row in data):
        raise ValueError(f"Ragged grid for map {name!r}")
    game_map = Map(name, rows, cols)
    for row, cells in enumerate(data):
        for col, cell in enumerate(cells):
            game_map.set(row, col, square_from_data(cell))
    return game_map
