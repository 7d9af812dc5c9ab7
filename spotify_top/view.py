from rich import box
from rich.console import RenderableType
from rich.layout import Layout
from rich.markup import escape
from rich.panel import Panel
from rich.style import Style
from rich.text import Text

from spotify_top.model import RankedArtist, RankedTrack, ViewModel

BORDER_STYLE = Style(color="green")
RANK_STYLE = Style(color="green", italic=True)
DURATION_STYLE = Style(color="white", dim=True)
KEY_HELP = "[dim]j/k scroll · m time range · q quit[/]"


def track_row(track: RankedTrack) -> Text:
    row = Text(justify="center")
    row.append(str(track.rank), style=RANK_STYLE)
    row.append(" - ")
    row.append(track.title)
    row.append(" by ")
    row.append(track.artists_str, style="cyan")
    row.append(f" ({track.duration})", style=DURATION_STYLE)
    return row


def artist_row(artist: RankedArtist) -> Text:
    row = Text(justify="center")
    row.append(str(artist.rank), style=RANK_STYLE)
    row.append(" - ")
    row.append(artist.name)
    row.append(f" ({artist.genres})", style="cyan")
    return row


def _rows_text(rows: list[Text], scroll: int) -> Text:
    if not rows:
        return Text("No data available.", style="dim", justify="center")
    # Rows above the scroll offset are clipped; the panel wraps long rows
    return Text("\n", justify="center").join(rows[scroll:])


def _panel(title: str, body: Text, subtitle: str = "") -> Panel:
    return Panel(
        body,
        title=f"[bold]{title}[/]",
        subtitle=subtitle or None,
        border_style=BORDER_STYLE,
        box=box.HEAVY,
    )


def render(model: ViewModel) -> RenderableType:
    """Build the screen for the current model. Reads the model, never changes it."""
    label = model.time_window.label
    name = f"[cyan]{escape(model.display_name)}[/]" if model.display_name else ""

    if not model.show_artists:
        tracks = _panel(
            f"Top Tracks ({label})",
            _rows_text([track_row(t) for t in model.top_tracks], model.scroll),
            subtitle=f"{name}  {KEY_HELP}" if name else KEY_HELP,
        )
        return Layout(tracks, name="tracks")

    tracks = _panel(
        f"Top Tracks ({label})",
        _rows_text([track_row(t) for t in model.top_tracks], model.scroll),
        subtitle=name,
    )

    artists = _panel(
        f"Top Artists ({label})",
        _rows_text([artist_row(a) for a in model.top_artists], model.scroll),
        subtitle=KEY_HELP,
    )

    layout = Layout()
    layout.split_column(
        Layout(tracks, name="tracks", ratio=1),
        Layout(artists, name="artists", ratio=1),
    )
    return layout
