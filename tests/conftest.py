import io
from contextlib import contextmanager

import pytest
from blessed.keyboard import Keystroke
from rich.console import Console

from spotify_top.view import render


def make_track(n, duration_ms=200_000, artists=("Artist",)):
    return {
        "name": f"Song {n}",
        "duration_ms": duration_ms,
        "artists": [{"name": a} for a in artists],
    }


def make_artist(n, genres=("rock",)):
    return {"name": f"Band {n}", "genres": list(genres)}


class FakeSpotify:
    """Serves top items in pages shaped like the Web API's paging objects."""

    def __init__(self, tracks=(), artists=(), error=None):
        self.items = {"tracks": list(tracks), "artists": list(artists)}
        self.error = error
        self.first_page_calls = []
        self.next_calls = 0

    def _page(self, kind, offset, limit):
        more = offset + limit < len(self.items[kind])
        return {
            "kind": kind,
            "items": self.items[kind][offset:offset + limit],
            "offset": offset,
            "limit": limit,
            "next": f"https://api.spotify.com/v1/me/top/{kind}?offset={offset + limit}" if more else None,
        }

    def _first(self, kind, limit, offset, time_range):
        self.first_page_calls.append((kind, limit, offset, time_range))
        if self.error is not None:
            raise self.error
        return self._page(kind, offset, limit)

    def current_user_top_tracks(self, limit=20, offset=0, time_range="medium_term"):
        return self._first("tracks", limit, offset, time_range)

    def current_user_top_artists(self, limit=20, offset=0, time_range="medium_term"):
        return self._first("artists", limit, offset, time_range)

    def next(self, result):
        if not result["next"]:
            return None
        self.next_calls += 1
        return self._page(result["kind"], result["offset"] + result["limit"], result["limit"])


class FakeTerminal:
    """Hands out queued keys from inkey(); an empty string means the wait timed out."""

    def __init__(self, keys=()):
        self.keys = [k if isinstance(k, Keystroke) else Keystroke(k) for k in keys]
        self.timeouts = []
        self.entered = []
        self.exited = []

    def inkey(self, timeout=None):
        self.timeouts.append(timeout)
        if not self.keys:
            raise RuntimeError("FakeTerminal ran out of keys")
        return self.keys.pop(0)

    @contextmanager
    def _mode(self, name):
        self.entered.append(name)
        try:
            yield
        finally:
            self.exited.append(name)

    def cbreak(self):
        return self._mode("cbreak")

    def hidden_cursor(self):
        return self._mode("hidden_cursor")


class FakeLive:
    def __init__(self, **kwargs):
        self.options = kwargs
        self.frames = []

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def update(self, renderable, refresh=False):
        self.frames.append(renderable)


def render_text(renderable, width=120, height=30):
    console = Console(file=io.StringIO(), width=width, height=height, record=True)
    console.print(renderable)
    return console.export_text()


def screen_text(model, **kwargs):
    return render_text(render(model), **kwargs)


@pytest.fixture
def fake_spotify():
    return FakeSpotify(
        tracks=[make_track(n) for n in range(1, 4)],
        artists=[make_artist(n) for n in range(1, 4)],
    )
