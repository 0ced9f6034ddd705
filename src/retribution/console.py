"""Console line source and read-evaluate-print loop."""

from typing import TextIO

from .logging import get_logger
from .session import PROMPT_ERROR, GameSession

logger = get_logger(__name__)

HERO_PROMPT = "What do you do hero?"


class PromptError(Exception):
    """Reading the next line failed; the player should just try again."""

    def __init__(self) -> None:
        super().__init__(PROMPT_ERROR)


def prompt(reader: TextIO, out: TextIO) -> str | None:
    """Ask the hero what to do and return their line, or None at end of input."""
    print(HERO_PROMPT, file=out, flush=True)
    try:
        line = reader.readline()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("read_failed", error=str(exc))
        raise PromptError() from exc
    if not line:
        return None
    return line


def run(session: GameSession, reader: TextIO, out: TextIO) -> None:
    """Loop until end of input. The `exit` command leaves via SystemExit."""
    while True:
        try:
            line = prompt(reader, out)
        except PromptError as exc:
            print(exc, file=out)
            continue
        if line is None:
            logger.info("input_closed")
            return
        print(session.process_command(line), file=out)
