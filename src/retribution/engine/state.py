"""Mutable per-player game state.

The state owns the map the hero is currently on. Swapping maps on portal
traversal simply replaces `map`; nothing else holds a reference to it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .world import Coords, Map, grid_to_data


class Mode(str, Enum):
    """Game modes. Only TRAVEL has behaviour; the others are stubs."""

    TRAVEL = "travel"
    COMBAT = "combat"
    MENU = "menu"


@dataclass
class GameState:
    mode: Mode = Mode.TRAVEL
    map: Map | None = None
    room: Coords | None = None

    @property
    def has_position(self) -> bool:
        return self.map is not None and self.room is not None

    def place(self, game_map: Map, room: Coords) -> None:
        """Put the hero at `room` on `game_map`. Both are always set together."""
        self.map = game_map
        self.room = room

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the state, safe to hand to another thread."""
        return {
            "mode": self.mode.value,
            "map": (
                {"name": self.map.name, "grid": grid_to_data(self.map.grid)}
                if self.map is not None
                else None
            ),
            "room": list(self.room) if self.room is not None else None,
        }


def new_game_state() -> GameState:
    """Create a fresh state: travel mode, nowhere yet."""
    return GameState()
