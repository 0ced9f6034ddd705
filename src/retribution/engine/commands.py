"""Command grammar and dispatch.

parse_input(line) -> Command is the main entry point. It tokenizes the line,
looks the first word up in the synonym table and hands the tokens to that
command's build(). Every command is a small frozen dataclass; Command is the
union of all of them.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar

# Verbs
AID = "aid"
ASSIST = "assist"
ATTACK = "attack"
CAST = "cast"
CHARM = "charm"
CONSULT = "consult"
DEFEND = "defend"
DEFY = "defy"
DODGE = "dodge"
DROP = "drop"
ENDURE = "endure"
EXIT = "exit"
FIGHT = "fight"
GO = "go"
HELP = "help"
HIT = "hit"
IMPROVISE = "improvise"
INTERFERE = "interfere"
PARLEY = "parley"
PROTECT = "protect"
SAY = "say"
SEARCH = "search"
SHOOT = "shoot"
STUDY = "study"
TAKE = "take"
VOLLEY = "volley"

# Defy danger picks its stat from the word used to invoke it.
DEFY_DANGER_STATS = {
    CHARM: "charisma",
    DEFY: "wisdom",
    DODGE: "dexterity",
    ENDURE: "constitution",
    IMPROVISE: "intelligence",
}
DEFAULT_STAT = "dexterity"


class ParseError(Exception):
    """Raised when a line can't be turned into a command."""


class ArityError(ParseError):
    """Too few words for the matched command."""

    def __init__(self, label: str):
        super().__init__(f"Not enough arguments for {label} command.")
        self.label = label


class UnknownCommandError(ParseError):
    """The first word isn't a known verb."""

    def __init__(self, verb: str = ""):
        super().__init__("Command not found.")
        self.verb = verb


def tokenize(line: str) -> list[str]:
    """Split a line on runs of whitespace."""
    return line.split()


def _require(tokens: Sequence[str], minimum: int, label: str) -> None:
    if len(tokens) < minimum:
        raise ArityError(label)


def _optional(tokens: Sequence[str], index: int) -> str | None:
    return tokens[index] if len(tokens) > index else None


@dataclass(frozen=True)
class Aid:
    label: ClassVar[str] = "aid"

    name: str
    target: str
    description: str = field(default="Aid an ally in a fight.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Aid":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class Cast:
    label: ClassVar[str] = "cast"

    name: str
    spell_name: str
    target: str | None = None
    description: str = field(default="Cast a spell.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Cast":
        _require(tokens, 3, cls.label)
        return cls(name=tokens[0], spell_name=tokens[1], target=_optional(tokens, 2))


@dataclass(frozen=True)
class Defend:
    label: ClassVar[str] = "defend"

    name: str
    target: str
    description: str = field(default="Defend an ally in a fight.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Defend":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class DefyDanger:
    """Defy danger. The stat is never typed by the player."""

    label: ClassVar[str] = "defy danger"

    name: str
    stat: str
    target: str | None = None
    description: str = field(default="Defy danger using a stat.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "DefyDanger":
        _require(tokens, 1, cls.label)
        verb = tokens[0]
        return cls(
            name=verb,
            stat=DEFY_DANGER_STATS.get(verb, DEFAULT_STAT),
            target=_optional(tokens, 1),
        )


@dataclass(frozen=True)
class DiscernRealities:
    label: ClassVar[str] = "discern realities"

    name: str
    target: str | None = None
    description: str = field(
        default="Discern realities about a subject.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "DiscernRealities":
        _require(tokens, 1, cls.label)
        return cls(name=tokens[0], target=_optional(tokens, 1))


@dataclass(frozen=True)
class Drop:
    label: ClassVar[str] = "drop"

    name: str
    target: str
    description: str = field(
        default="Drops an item from the player's inventory.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Drop":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class Exit:
    label: ClassVar[str] = "exit"

    name: str = EXIT
    description: str = field(default="Exits the game.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Exit":
        _require(tokens, 1, cls.label)
        return cls(name=tokens[0])


@dataclass(frozen=True)
class Go:
    label: ClassVar[str] = "go"

    name: str
    target: str
    description: str = field(
        default="Moves the player to a new location.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Go":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class HackAndSlash:
    """Melee attack against every target named after the verb."""

    label: ClassVar[str] = "hack and slash"

    name: str
    targets: list[str]
    description: str = field(
        default="Attack an enemy with a melee weapon.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "HackAndSlash":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], targets=list(tokens[1:]))


@dataclass(frozen=True)
class Help:
    label: ClassVar[str] = "help"

    name: str
    target: str | None = None
    description: str = field(
        default="Prints a list of commands or the description of a command.",
        init=False,
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Help":
        _require(tokens, 1, cls.label)
        return cls(name=tokens[0], target=_optional(tokens, 1))


@dataclass(frozen=True)
class Interfere:
    label: ClassVar[str] = "interfere"

    name: str
    target: str
    description: str = field(
        default="Interfere with an enemy's attack.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Interfere":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class Parley:
    label: ClassVar[str] = "parley"

    name: str
    target: str
    description: str = field(default="Parley with an enemy.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Parley":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class Say:
    label: ClassVar[str] = "say"

    name: str
    target: str
    description: str = field(default="Prints a message to the screen.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Say":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=" ".join(tokens[1:]))


@dataclass(frozen=True)
class SpoutLore:
    label: ClassVar[str] = "spout lore"

    name: str
    target: str | None = None
    description: str = field(default="Spout lore about a subject.", init=False)

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "SpoutLore":
        _require(tokens, 1, cls.label)
        return cls(name=tokens[0], target=_optional(tokens, 1))


@dataclass(frozen=True)
class Take:
    label: ClassVar[str] = "take"

    name: str
    target: str
    description: str = field(
        default="Takes an item from the current location.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Take":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


@dataclass(frozen=True)
class Volley:
    label: ClassVar[str] = "volley"

    name: str
    target: str
    description: str = field(
        default="Attack an enemy with a ranged weapon.", init=False
    )

    @classmethod
    def build(cls, tokens: Sequence[str]) -> "Volley":
        _require(tokens, 2, cls.label)
        return cls(name=tokens[0], target=tokens[1])


Command = (
    Aid
    | Cast
    | Defend
    | DefyDanger
    | DiscernRealities
    | Drop
    | Exit
    | Go
    | HackAndSlash
    | Help
    | Interfere
    | Parley
    | Say
    | SpoutLore
    | Take
    | Volley
)

SYNONYMS: dict[str, type[Command]] = {
    AID: Aid,
    ASSIST: Aid,
    ATTACK: HackAndSlash,
    FIGHT: HackAndSlash,
    HIT: HackAndSlash,
    CAST: Cast,
    CONSULT: SpoutLore,
    CHARM: DefyDanger,
    DEFY: DefyDanger,
    DODGE: DefyDanger,
    ENDURE: DefyDanger,
    IMPROVISE: DefyDanger,
    DEFEND: Defend,
    PROTECT: Defend,
    DROP: Drop,
    EXIT: Exit,
    GO: Go,
    HELP: Help,
    INTERFERE: Interfere,
    PARLEY: Parley,
    SAY: Say,
    SEARCH: DiscernRealities,
    STUDY: DiscernRealities,
    SHOOT: Volley,
    VOLLEY: Volley,
    TAKE: Take,
}


def parse_input(line: str) -> Command:
    """Turn a line of player input into a Command.

    Raises ArityError when the verb is known but too few words follow it, and
    UnknownCommandError when the verb isn't in SYNONYMS. Blank lines are the
    caller's problem and raise ValueError.
    """
    tokens = tokenize(line)
    if not tokens:
        raise ValueError("Cannot parse an empty line.")

    command_cls = SYNONYMS.get(tokens[0])
    if command_cls is None:
        raise UnknownCommandError(tokens[0])
    return command_cls.build(tokens)
