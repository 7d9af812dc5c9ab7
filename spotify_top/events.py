from typing import Optional

from blessed import Terminal

from spotify_top.config import POLL_TIMEOUT
from spotify_top.model import Message

KEY_BINDINGS = {
    "j": Message.SCROLL_DOWN,
    "k": Message.SCROLL_UP,
    "m": Message.CHANGE_TIME_WINDOW,
    "q": Message.QUIT,
}


def next_message(term: Terminal, timeout: float = POLL_TIMEOUT) -> Optional[Message]:
    """Wait up to ``timeout`` seconds for a key press and translate it.

    Returns None on timeout and for keys without a binding. Escape sequences
    (arrows, function keys) are never bound.
    """
    key = term.inkey(timeout=timeout)
    if not key or key.is_sequence:
        return None
    return KEY_BINDINGS.get(str(key))
