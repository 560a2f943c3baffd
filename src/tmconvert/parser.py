import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from tmconvert.errors import ParseError
from tmconvert.turing_machine import Configuration, ConfigurationBuilder, Move, TransitionRule

TRANSITION_PATTERN = re.compile(r"q\d+\(.\)\s*->\s*q\d+\(.\)[RLS]", re.ASCII)
ALPHABET_PATTERN = re.compile(r"alphabet:\s*\(.*\)")
TAPE_PATTERN = re.compile(r"tape:\s*\(\*.*\)")


@dataclass(frozen=True)
class TransitionLine:
    text: str


@dataclass(frozen=True)
class AlphabetLine:
    text: str


@dataclass(frozen=True)
class TapeLine:
    text: str


@dataclass(frozen=True)
class IgnoredLine:
    text: str


Line: TypeAlias = TransitionLine | AlphabetLine | TapeLine | IgnoredLine


def classify(line: str) -> Line:
    if TRANSITION_PATTERN.fullmatch(line):
        return TransitionLine(line)
    elif ALPHABET_PATTERN.fullmatch(line):
        return AlphabetLine(line)
    elif TAPE_PATTERN.fullmatch(line):
        return TapeLine(line)
    else:
        return IgnoredLine(line)


def _parse_half(line: str, half: str) -> tuple[int, str]:
    number, paren, rest = half.strip().removeprefix("q").partition("(")
    if not paren or not rest:
        raise ParseError(line, f"expected '(<symbol>)' in '{half.strip()}'")
    number = number.strip()
    try:
        state = int(number)
    except ValueError as e:
        raise ParseError(line, f"'{number}' is not a state number") from e
    if state < 0:
        raise ParseError(line, f"state {state} is negative")
    return state, rest


def parse_transition(line: str) -> TransitionRule:
    """Decodes a line of the form `q<state>(<read>) -> q<state>(<write>)<move>`.

    The symbol is always the single character right after the opening parenthesis, so `(` and `)` are valid symbols.
    The move letter is the character after the closing parenthesis of the written symbol, a missing or unknown letter
    becomes `Move.Stop`.
    """
    left, arrow, right = line.partition("->")
    if not arrow:
        raise ParseError(line, "missing '->'")
    state, read_part = _parse_half(line, left)
    next_state, write_part = _parse_half(line, right)
    return TransitionRule(
        state=state,
        next_state=next_state,
        reading_char=read_part[0],
        place_char=write_part[0],
        next_move=Move.parse(write_part[2:3]),
    )


def parse_symbols(line: str, *, tape: bool) -> str:
    """Returns the parenthesized content of an alphabet or tape declaration.

    Alphabets are sorted and deduplicated, tapes are returned verbatim (including the leading `*`).
    """
    _, _, content = line.partition("(")
    content = content.removesuffix(")")
    if tape:
        return content
    return "".join(sorted(set(content)))


def parse_lines(lines: Iterable[str], *, on_ignored: Callable[[int, str], None] | None = None) -> Configuration:
    builder = ConfigurationBuilder()
    for line_num, raw in enumerate(lines, 1):
        match classify(raw.strip()):
            case TransitionLine(text):
                builder.add_rule(parse_transition(text))
            case AlphabetLine(text):
                builder.set_alphabet(parse_symbols(text, tape=False))
            case TapeLine(text):
                builder.set_tape(parse_symbols(text, tape=True))
            case IgnoredLine(text):
                if on_ignored and text:
                    on_ignored(line_num, text)
    return builder.finish()


def parse_spec(spec: str) -> Configuration:
    return parse_lines(spec.splitlines())
