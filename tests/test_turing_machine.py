import pytest

from tmconvert.errors import MissingAlphabet, MissingTape
from tmconvert.turing_machine import Configuration, ConfigurationBuilder, Move, TransitionRule


@pytest.mark.parametrize(
    ("letter", "move"), [("R", Move.Right), ("L", Move.Left), ("S", Move.Stop), ("N", Move.Stop), ("", Move.Stop)]
)
def test_move_parse(letter: str, move: Move):
    assert Move.parse(letter) is move


def test_rule_str():
    assert str(TransitionRule(0, 1, "a", "b", Move.Left)) == "q0(a) -> q1(b)L"


def test_configuration_to_dict():
    config = Configuration((TransitionRule(0, 1, "a", "b", Move.Right),), "ab", "*aab")
    assert config.to_dict() == {
        "commands": [{"state": 0, "next_state": 1, "reading_char": "a", "place_char": "b", "next_move": "Right"}],
        "alphabet": "ab",
        "tape": "*aab",
    }


def test_builder():
    builder = ConfigurationBuilder()
    first = TransitionRule(0, 1, "a", "b", Move.Right)
    second = TransitionRule(1, 1, "b", "b", Move.Stop)
    builder.add_rule(first)
    builder.add_rule(second)
    builder.add_rule(first)
    builder.set_alphabet("xy")
    builder.set_alphabet("ab")
    builder.set_tape("*b")
    builder.set_tape("*ab")
    assert builder.finish() == Configuration((first, second, first), "ab", "*ab")


def test_builder_empty_values_count_as_set():
    builder = ConfigurationBuilder()
    builder.set_alphabet("")
    builder.set_tape("")
    assert builder.finish() == Configuration((), "", "")


def test_builder_missing_fields():
    builder = ConfigurationBuilder()
    with pytest.raises(MissingAlphabet):
        builder.finish()
    builder.set_alphabet("a")
    with pytest.raises(MissingTape):
        builder.finish()
