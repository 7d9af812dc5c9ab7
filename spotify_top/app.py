#!/usr/bin/env python3
"""
Spotify Top

Authenticates you with Spotify and shows your top tracks and top artists in a
full-screen terminal view. Press m to cycle the time window, j/k to scroll and
q to quit.
"""

import argparse
import logging
import sys
from contextlib import ExitStack, contextmanager
from typing import Callable, Iterator, Optional

import spotipy
from blessed import Terminal
from dotenv import load_dotenv
from rich import box
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from spotify_top.client import authenticate, fetch_top_artists, fetch_top_tracks
from spotify_top.config import (
    CLIENT_ID_VAR,
    CLIENT_SECRET_VAR,
    DEFAULT_LIMIT,
    POLL_TIMEOUT,
    REDIRECT_URI_VAR,
    load_credentials,
)
from spotify_top.errors import SpotifyTopError
from spotify_top.events import next_message
from spotify_top.logger import setup_logging
from spotify_top.model import Message, TimeWindow, ViewModel, update
from spotify_top.view import render

logger = logging.getLogger(__name__)

TIME_WINDOW_CHOICES = {
    "short": TimeWindow.SHORT,
    "medium": TimeWindow.MEDIUM,
    "long": TimeWindow.LONG,
}


def load_results(
    sp: spotipy.Spotify,
    model: ViewModel,
    fetch_tracks: Callable = fetch_top_tracks,
    fetch_artists: Callable = fetch_top_artists,
) -> None:
    """Fetch both lists for the model's current time window and store them."""
    tracks = fetch_tracks(sp, model.time_window, model.limit)
    artists = fetch_artists(sp, model.time_window, model.limit) if model.show_artists else []
    model.set_results(tracks, artists)
    logger.info(
        "Loaded %d tracks and %d artists (%s)",
        len(model.top_tracks), len(model.top_artists), model.time_window.value,
    )


@contextmanager
def terminal_session(term: Terminal, console: Console) -> Iterator[Live]:
    """Take over the terminal for the viewer.

    Keys are read unbuffered (cbreak) and the screen is drawn on the alternate
    buffer. Everything is undone on the way out, whether the block finishes or
    raises.
    """
    with ExitStack() as stack:
        stack.enter_context(term.cbreak())
        stack.enter_context(term.hidden_cursor())
        live = stack.enter_context(Live(
            console=console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        ))
        yield live


def run(
    model: ViewModel,
    term: Terminal,
    live: Live,
    reload: Optional[Callable[[ViewModel], None]] = None,
    timeout: float = POLL_TIMEOUT,
) -> ViewModel:
    """Main loop: draw, wait for a key, apply messages. Returns once the model is DONE."""
    while model.running:
        live.update(render(model), refresh=True)

        msg = next_message(term, timeout)
        window_changed = False
        while msg is not None:
            window_changed = window_changed or msg is Message.CHANGE_TIME_WINDOW
            msg = update(model, msg)

        if window_changed and model.running and reload is not None:
            logger.debug("Time window changed to %s", model.time_window.value)
            reload(model)

    return model


def print_results(model: ViewModel, console: Console) -> None:
    """Print the lists as tables instead of opening the viewer."""
    label = model.time_window.label

    console.print(Panel(
        Text(model.display_name, style="bold cyan"),
        title=f"[bold white]🎧 TOP TRACKS & ARTISTS ({label.upper()})[/]",
        border_style="bright_magenta",
    ))

    track_table = Table(box=box.ROUNDED, show_header=True, header_style="bold green")
    track_table.add_column("#", style="dim", width=4, justify="right")
    track_table.add_column("Track", style="white")
    track_table.add_column("Artist", style="cyan")
    track_table.add_column("Length", justify="right")
    for track in model.top_tracks:
        track_table.add_row(
            str(track.rank), Text(track.title), Text(track.artists_str), track.duration
        )

    if model.top_tracks:
        console.print(track_table)
    else:
        console.print("[dim]No data available.[/]")

    if not model.show_artists:
        return

    artist_table = Table(box=box.ROUNDED, show_header=True, header_style="bold green")
    artist_table.add_column("#", style="dim", width=4, justify="right")
    artist_table.add_column("Artist", style="white")
    artist_table.add_column("Genres", style="cyan")
    for artist in model.top_artists:
        artist_table.add_row(str(artist.rank), Text(artist.name), Text(artist.genres))

    if model.top_artists:
        console.print(artist_table)
    else:
        console.print("[dim]No data available.[/]")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spotify-top",
        description="Browse your Spotify top tracks and top artists in the terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s                         # Top 10, last four weeks
  %(prog)s --limit 25 --time-range long
  %(prog)s --tracks-only
  %(prog)s --print                 # Print tables and exit

Keys:
  j / k   scroll down / up
  m       next time window (short, medium, long)
  q       quit

Environment Variables:
  {CLIENT_ID_VAR}      Your Spotify app client ID
  {CLIENT_SECRET_VAR}  Your Spotify app client secret
  {REDIRECT_URI_VAR}   Redirect URI registered for the app

A .env file in the working directory is read as well.
Get credentials at: https://developer.spotify.com/dashboard
        """
    )
    parser.add_argument(
        "--limit", "-n",
        type=_positive_int,
        default=DEFAULT_LIMIT,
        metavar="N",
        help=f"Number of tracks and artists to show (default: {DEFAULT_LIMIT})"
    )
    parser.add_argument(
        "--time-range",
        choices=sorted(TIME_WINDOW_CHOICES),
        default="short",
        help="Time window to start with (default: short)"
    )
    parser.add_argument(
        "--tracks-only",
        action="store_true",
        help="Show only top tracks"
    )
    parser.add_argument(
        "--print",
        action="store_true",
        dest="print_only",
        help="Print the results as tables instead of opening the viewer"
    )
    parser.add_argument(
        "--log-file",
        metavar="FILE",
        help="Write logs to FILE (nothing is logged otherwise)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug messages"
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    load_dotenv()
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.INFO)

    console = Console()
    err_console = Console(stderr=True)

    try:
        creds = load_credentials()

        console.print("[dim]Opening browser for Spotify authentication...[/]")
        session = authenticate(creds)
        console.print(f"[green]✓[/] Authenticated as: [cyan]{escape(session.display_name)}[/]")

        model = ViewModel(
            time_window=TIME_WINDOW_CHOICES[args.time_range],
            display_name=session.display_name,
            limit=args.limit,
            show_artists=not args.tracks_only,
        )
        with console.status("[bold green]Fetching your top items..."):
            load_results(session.sp, model)

        if args.print_only:
            print_results(model, console)
            return 0

        term = Terminal()
        with terminal_session(term, console) as live:
            run(model, term, live, reload=lambda m: load_results(session.sp, m))
    except SpotifyTopError as e:
        logger.error("Exiting: %s", e, exc_info=True)
        err_console.print(f"[bold red]Error:[/] {escape(str(e))}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
