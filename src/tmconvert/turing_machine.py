from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Self

from tmconvert.errors import MissingAlphabet, MissingTape


class Move(IntEnum):
    Left = -1
    Stop = 0
    Right = 1

    @classmethod
    def parse(cls, val: str) -> Self:
        """Decodes a move letter, anything unknown is treated as a stop."""
        match val:
            case "R":
                return cls.Right
            case "L":
                return cls.Left
            case _:
                return cls.Stop

    @property
    def letter(self) -> str:
        return self.name[0]


@dataclass(frozen=True)
class TransitionRule:
    state: int
    next_state: int
    reading_char: str
    place_char: str
    next_move: Move

    def __str__(self) -> str:
        return f"q{self.state}({self.reading_char}) -> q{self.next_state}({self.place_char}){self.next_move.letter}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state,
            "next_state": self.next_state,
            "reading_char": self.reading_char,
            "place_char": self.place_char,
            "next_move": self.next_move.name,
        }


@dataclass(frozen=True)
class Configuration:
    commands: tuple[TransitionRule, ...]
    alphabet: str | None
    tape: str | None

    def to_dict(self) -> dict[str, Any]:
        return {
            "commands": [rule.to_dict() for rule in self.commands],
            "alphabet": self.alphabet,
            "tape": self.tape,
        }


@dataclass
class ConfigurationBuilder:
    """Accumulates parsed lines into a `Configuration`.

    Rules are kept in the order they are added, duplicates included. Alphabet and tape can be set any number of
    times, only the last value is kept.
    """

    rules: list[TransitionRule] = field(default_factory=list)
    alphabet: str | None = None
    tape: str | None = None

    def add_rule(self, rule: TransitionRule) -> None:
        self.rules.append(rule)

    def set_alphabet(self, alphabet: str) -> None:
        self.alphabet = alphabet

    def set_tape(self, tape: str) -> None:
        self.tape = tape

    def finish(self) -> Configuration:
        if self.alphabet is None:
            raise MissingAlphabet
        if self.tape is None:
            raise MissingTape
        return Configuration(tuple(self.rules), self.alphabet, self.tape)
