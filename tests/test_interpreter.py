"""Tests for the travel interpreter."""

import copy

import pytest
from sqlmodel import create_engine

from retribution.engine.commands import parse_input
from retribution.engine.interpreter import (
    NOT_ABLE_MESSAGE,
    NotAbleError,
    NotAbleReason,
    interpret,
)
from retribution.engine.loader import MapLoadError
from retribution.engine.state import GameState, Mode, new_game_state
from retribution.engine.world import Map, Portal, Room
from retribution.store import MapStore


def _go(state: GameState, loader, line: str) -> str:
    return interpret(parse_input(line), state, loader)


@pytest.mark.parametrize(
    "line,room,text",
    [
        ("go north", (0, 1), "Hero went north. This is room 4."),
        ("go west", (1, 0), "Hero went west. This is room 2."),
        ("go east", (1, 2), "Hero went east. This is room 3."),
    ],
)
def test_move_to_room(state, loader, line, room, text):
    test_area = state.map
    assert _go(state, loader, line) == text
    assert state.room == room
    assert state.map is test_area
    assert loader.calls == []


def test_direction_is_case_insensitive(state, loader):
    assert _go(state, loader, "go NORTH") == "Hero went NORTH. This is room 4."
    assert state.room == (0, 1)


def test_unknown_direction(state, loader):
    with pytest.raises(NotAbleError) as excinfo:
        _go(state, loader, "go sideways")
    assert str(excinfo.value) == "Not able to do that action right now."
    assert excinfo.value.reason is NotAbleReason.UNKNOWN_DIRECTION
    assert state.room == (1, 1)


@pytest.mark.parametrize("start,line", [((1, 0), "go north"), ((0, 1), "go north")])
def test_empty_or_off_grid_square_leaves_state_alone(state, loader, start, line):
    state.room = start
    before = copy.deepcopy(state)
    map_before = state.map

    with pytest.raises(NotAbleError) as excinfo:
        _go(state, loader, line)

    assert excinfo.value.reason is NotAbleReason.NO_SQUARE
    assert state == before
    assert state.map is map_before


def test_west_edge(state, loader):
    state.room = (1, 0)
    with pytest.raises(NotAbleError):
        _go(state, loader, "go west")
    assert state.room == (1, 0)


def test_no_position(loader):
    state = new_game_state()
    with pytest.raises(NotAbleError) as excinfo:
        _go(state, loader, "go north")
    assert excinfo.value.reason is NotAbleReason.NO_POSITION


def test_portal_switches_map(state, loader):
    text = _go(state, loader, "go south")

    assert text == "Hero went south. This is in test area 2."
    assert state.map.name == "Test Area 2"
    assert state.room == (1, 0)
    assert loader.calls == ["Test Area 2"]


def test_portal_round_trip(state, loader):
    _go(state, loader, "go south")
    text = _go(state, loader, "go north")

    assert text == "Hero went north. This is room 1."
    assert state.map.name == "Test Area"
    assert state.room == (1, 1)
    assert loader.calls == ["Test Area 2", "Test Area"]


def test_portal_load_failure_rolls_back(state):
    def broken_loader(name: str) -> Map:
        raise MapLoadError("database is on fire")

    before = copy.deepcopy(state)
    map_before = state.map

    with pytest.raises(NotAbleError) as excinfo:
        _go(state, broken_loader, "go south")

    assert str(excinfo.value) == NOT_ABLE_MESSAGE
    assert excinfo.value.reason is NotAbleReason.PORTAL_LOAD_FAILED
    assert state == before
    assert state.map is map_before


def test_portal_into_non_room_stays_on_new_map(state):
    chained = Map("Chained", 1, 1)
    chained.set(0, 0, Portal("loop", "Test Area", (1, 1)))
    state.map.set(2, 1, Portal("to_chained", "Chained", (0, 0)))

    with pytest.raises(NotAbleError) as excinfo:
        _go(state, lambda name: chained, "go south")

    assert excinfo.value.reason is NotAbleReason.BAD_PORTAL_DESTINATION
    assert state.map is chained
    assert state.room == (0, 0)


def test_portal_into_empty_square(state):
    empty = Map("Empty", 2, 2)
    state.map.set(2, 1, Portal("to_empty", "Empty", (1, 1)))

    with pytest.raises(NotAbleError):
        _go(state, lambda name: empty, "go south")
    assert state.map is empty


def test_portal_within_same_map(state):
    state.map.set(0, 1, Portal("skip", "Test Area", (1, 2)))

    def same_map(name: str) -> Map:
        game_map = Map("Test Area", 3, 3)
        game_map.set(1, 2, Room("Room 3", "This is room 3."))
        return game_map

    assert _go(state, same_map, "go north") == "Hero went north. This is room 3."
    assert state.room == (1, 2)


@pytest.mark.parametrize(
    "line", ["take sword", "attack goblin", "say hello", "help", "dodge"]
)
def test_other_commands_not_able(state, loader, line):
    with pytest.raises(NotAbleError) as excinfo:
        interpret(parse_input(line), state, loader)
    assert str(excinfo.value) == NOT_ABLE_MESSAGE
    assert excinfo.value.reason is NotAbleReason.UNSUPPORTED_COMMAND


def test_endure_without_position():
    state = new_game_state()
    with pytest.raises(NotAbleError, match="Not able to do that action right now."):
        interpret(parse_input("endure"), state, lambda name: None)


@pytest.mark.parametrize("mode", [Mode.COMBAT, Mode.MENU])
@pytest.mark.parametrize("line", ["go north", "go sideways", "exit", "attack goblin"])
def test_only_travel_mode_acts(state, loader, mode, line):
    state.mode = mode
    with pytest.raises(NotAbleError) as excinfo:
        interpret(parse_input(line), state, loader)
    assert excinfo.value.reason is NotAbleReason.WRONG_MODE
    assert state.room == (1, 1)


def test_exit_terminates(state, loader):
    with pytest.raises(SystemExit) as excinfo:
        interpret(parse_input("exit"), state, loader)
    assert excinfo.value.code == 0


def test_portal_with_unreadable_store_rolls_back(state, tmp_path):
    store = MapStore(create_engine(f"sqlite:///{tmp_path}/empty.db"))
    map_before = state.map

    with pytest.raises(NotAbleError) as excinfo:
        _go(state, store.load_map, "go south")

    assert str(excinfo.value) == NOT_ABLE_MESSAGE
    assert excinfo.value.reason is NotAbleReason.PORTAL_LOAD_FAILED
    assert state.map is map_before
    assert state.room == (1, 1)
