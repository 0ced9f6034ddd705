"""Session layer bridging the parser, the interpreter and the collaborators."""

from .engine.commands import ArityError, UnknownCommandError, parse_input, tokenize
from .engine.interpreter import NotAbleError, interpret
from .engine.loader import MapLoader
from .engine.state import GameState
from .logging import get_logger, turn_context
from .plugin import StateWriter

logger = get_logger(__name__)

PROMPT_ERROR = "Try command again."


class GameSession:
    """Wraps a GameState with its map loader and optional snapshot writer."""

    def __init__(
        self,
        state: GameState,
        load_map: MapLoader,
        writer: StateWriter | None = None,
    ):
        self.state = state
        self.load_map = load_map
        self.writer = writer
        self.turns = 0

    def process_command(self, raw_input: str) -> str:
        """Run one line of input and return the text to show the player.

        Every non-blank line is a turn and is followed by a snapshot, whether
        or not it parsed. `exit` raises SystemExit, which is left to propagate.
        """
        if not tokenize(raw_input):
            return PROMPT_ERROR

        game_map = self.state.map
        with turn_context(
            self.turns + 1,
            game_map.name if game_map is not None else None,
            self.state.room,
        ):
            result = self._run(raw_input)
        self.turns += 1
        if self.writer is not None:
            self.writer.dispatch(self.state)
        return result

    def _run(self, raw_input: str) -> str:
        try:
            command = parse_input(raw_input)
        except UnknownCommandError:
            logger.debug("unknown_command", line=raw_input.strip())
            return f"{raw_input.strip()} is not a valid command."
        except ArityError as exc:
            return str(exc)

        try:
            return interpret(command, self.state, self.load_map)
        except NotAbleError as exc:
            return str(exc)

    def close(self) -> None:
        if self.writer is not None:
            self.writer.close()
        logger.info("session_closed", turns=self.turns)
