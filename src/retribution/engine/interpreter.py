"""Travel interpreter.

interpret(command, state, load_map) -> str runs one command against the game
state and returns the narrative text. Every refusal, whatever the cause, is a
NotAbleError with the same player-facing message; the cause is kept on the
exception for logging.
"""

import sys
from enum import Enum

from ..logging import get_logger
from .commands import Command, Exit, Go
from .loader import MapLoader, MapLoadError
from .state import GameState, Mode
from .world import Coords, Portal, Room

logger = get_logger(__name__)

NOT_ABLE_MESSAGE = "Not able to do that action right now."

# (row, col) deltas
DIRECTIONS: dict[str, Coords] = {
    "north": (-1, 0),
    "south": (1, 0),
    "east": (0, 1),
    "west": (0, -1),
}


class NotAbleReason(str, Enum):
    NO_POSITION = "no_position"
    UNKNOWN_DIRECTION = "unknown_direction"
    NO_SQUARE = "no_square"
    WRONG_MODE = "wrong_mode"
    UNSUPPORTED_COMMAND = "unsupported_command"
    PORTAL_LOAD_FAILED = "portal_load_failed"
    BAD_PORTAL_DESTINATION = "bad_portal_destination"


class NotAbleError(Exception):
    """The hero can't do that right now."""

    def __init__(self, reason: NotAbleReason):
        super().__init__(NOT_ABLE_MESSAGE)
        self.reason = reason


def _refuse(reason: NotAbleReason, **fields) -> NotAbleError:
    logger.debug("action_refused", reason=reason.value, **fields)
    return NotAbleError(reason)


def _arrive(command: Go, room: Room) -> str:
    return f"Hero went {command.target}. {room.description}"


def _go(command: Go, state: GameState, load_map: MapLoader) -> str:
    if state.room is None:
        raise _refuse(NotAbleReason.NO_POSITION)

    delta = DIRECTIONS.get(command.target.lower())
    if delta is None:
        raise _refuse(NotAbleReason.UNKNOWN_DIRECTION, direction=command.target)

    row, col = state.room
    new_coords = (row + delta[0], col + delta[1])
    square = state.map.get(*new_coords) if state.map is not None else None

    match square:
        case Room() as room:
            state.room = new_coords
            logger.debug("hero_moved", map=state.map.name, room=new_coords)
            return _arrive(command, room)
        case Portal() as portal:
            return _traverse(command, portal, state, load_map)
        case _:
            raise _refuse(NotAbleReason.NO_SQUARE, room=new_coords)


def _traverse(
    command: Go, portal: Portal, state: GameState, load_map: MapLoader
) -> str:
    """Step through a portal: load its map first, then move the hero."""
    try:
        new_map = load_map(portal.target)
    except MapLoadError as exc:
        raise _refuse(
            NotAbleReason.PORTAL_LOAD_FAILED, portal=portal.name, error=str(exc)
        ) from exc

    old_name = state.map.name if state.map is not None else None
    state.place(new_map, portal.destination)
    logger.info(
        "portal_traversed",
        portal=portal.name,
        from_map=old_name,
        to_map=new_map.name,
        room=portal.destination,
    )

    # Destinations are expected to be rooms; chained portals aren't followed.
    destination = new_map.get(*portal.destination)
    if not isinstance(destination, Room):
        logger.warning(
            "portal_destination_not_a_room",
            portal=portal.name,
            map=new_map.name,
            room=portal.destination,
        )
        raise NotAbleError(NotAbleReason.BAD_PORTAL_DESTINATION)
    return _arrive(command, destination)


def _travel(command: Command, state: GameState, load_map: MapLoader) -> str:
    match command:
        case Go():
            return _go(command, state, load_map)
        case Exit():
            logger.info("exit_requested")
            sys.exit(0)
        case _:
            raise _refuse(NotAbleReason.UNSUPPORTED_COMMAND, command=command.name)


def interpret(command: Command, state: GameState, load_map: MapLoader) -> str:
    """Run `command` against `state` and return what happened.

    Raises NotAbleError when the command can't be carried out. The state is
    left untouched on every refusal except a portal whose destination on the
    freshly loaded map isn't a room; the hero then stays on the new map.
    """
    if state.mode is not Mode.TRAVEL:
        raise _refuse(NotAbleReason.WRONG_MODE, mode=state.mode.value)
    return _travel(command, state, load_map)
