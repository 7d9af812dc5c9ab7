from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from spotify_top.config import DEFAULT_LIMIT


class TimeWindow(Enum):
    """Aggregation period for top items. Values are the API's ``time_range``."""
    SHORT = "short_term"
    MEDIUM = "medium_term"
    LONG = "long_term"

    @property
    def label(self) -> str:
        return TIME_WINDOW_LABELS[self]

    def next(self) -> "TimeWindow":
        """The following window in the ring short, medium, long, short."""
        return _WINDOW_RING[self]


TIME_WINDOW_LABELS = {
    TimeWindow.SHORT: "Short Term",
    TimeWindow.MEDIUM: "Medium Term",
    TimeWindow.LONG: "Long Term",
}

_WINDOW_RING = {
    TimeWindow.SHORT: TimeWindow.MEDIUM,
    TimeWindow.MEDIUM: TimeWindow.LONG,
    TimeWindow.LONG: TimeWindow.SHORT,
}


class RunningState(Enum):
    RUNNING = "running"
    DONE = "done"


class Message(Enum):
    SCROLL_UP = "scroll_up"
    SCROLL_DOWN = "scroll_down"
    CHANGE_TIME_WINDOW = "change_time_window"
    QUIT = "quit"


@dataclass(frozen=True)
class RankedTrack:
    """A track from the user's top tracks."""
    rank: int
    title: str
    duration: str
    artists: list[str]

    @property
    def artists_str(self) -> str:
        return ", ".join(self.artists)


@dataclass(frozen=True)
class RankedArtist:
    """An artist from the user's top artists."""
    rank: int
    name: str
    genres: str


@dataclass
class ViewModel:
    """Everything the viewer shows. Owned by the main loop."""
    running_state: RunningState = RunningState.RUNNING
    time_window: TimeWindow = TimeWindow.SHORT
    display_name: str = ""
    limit: int = DEFAULT_LIMIT
    top_tracks: list[RankedTrack] = field(default_factory=list)
    top_artists: list[RankedArtist] = field(default_factory=list)
    scroll: int = 0
    show_artists: bool = True

    @property
    def running(self) -> bool:
        return self.running_state is RunningState.RUNNING

    def set_results(self, tracks: list[RankedTrack], artists: list[RankedArtist]) -> None:
        """Replace both result lists, never keeping more than ``limit`` rows."""
        self.top_tracks = list(tracks[:self.limit])
        self.top_artists = list(artists[:self.limit])


def update(model: ViewModel, msg: Message) -> Optional[Message]:
    """Apply one message to the model in place.

    Returns a follow-up message to apply in the same input cycle, or None.
    No transition produces one yet. A model in the DONE state ignores every
    message.
    """
    if model.running_state is RunningState.DONE:
        return None

    if msg is Message.SCROLL_DOWN:
        model.scroll += 1
    elif msg is Message.SCROLL_UP:
        model.scroll = max(0, model.scroll - 1)
    elif msg is Message.CHANGE_TIME_WINDOW:
        # Results are refetched by the caller, not here
        model.time_window = model.time_window.next()
    elif msg is Message.QUIT:
        model.running_state = RunningState.DONE
    else:
        raise ValueError(f"Unknown message: {msg!r}")

    return None
