import pytest
from blessed.keyboard import Keystroke

from spotify_top.events import next_message
from spotify_top.model import Message
from tests.conftest import FakeTerminal


@pytest.mark.parametrize("key, expected", [
    ("j", Message.SCROLL_DOWN),
    ("k", Message.SCROLL_UP),
    ("m", Message.CHANGE_TIME_WINDOW),
    ("q", Message.QUIT),
])
def test_bound_keys(key, expected):
    assert next_message(FakeTerminal([key])) is expected


@pytest.mark.parametrize("key", ["x", "J", " ", "Q"])
def test_unbound_keys_give_nothing(key):
    assert next_message(FakeTerminal([key])) is None


def test_timeout_gives_nothing():
    term = FakeTerminal([""])
    assert next_message(term) is None
    assert term.timeouts == [0.25]


def test_escape_sequences_are_ignored():
    arrow_down = Keystroke("\x1b[B", code=258, name="KEY_DOWN")
    assert next_message(FakeTerminal([arrow_down])) is None


def test_custom_timeout_is_passed_through():
    term = FakeTerminal(["q"])
    next_message(term, timeout=1.5)
    assert term.timeouts == [1.5]
