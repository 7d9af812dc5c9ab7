"""
Spotify access: the OAuth session and the top-items fetchers.

Pagination and token handling are spotipy's job. This module only walks the
pages lazily and turns raw items into ranked rows.
"""

import logging
from dataclasses import dataclass
from itertools import islice
from typing import Callable, Iterator, Optional

import requests
import spotipy
from spotipy.cache_handler import MemoryCacheHandler
from spotipy.oauth2 import SpotifyOAuth, SpotifyOauthError

from spotify_top.config import MAX_PAGE_SIZE, SCOPE, Credentials
from spotify_top.errors import AuthError, FetchFailed
from spotify_top.model import RankedArtist, RankedTrack, TimeWindow

logger = logging.getLogger(__name__)

MAX_GENRES = 3

SPOTIFY_ERRORS = (spotipy.SpotifyException, SpotifyOauthError, requests.RequestException)


@dataclass
class Session:
    """An authorized client and the profile name it belongs to."""
    sp: spotipy.Spotify
    display_name: str


def authenticate(creds: Credentials, open_browser: bool = True) -> Session:
    """Run the authorization-code flow and return an authorized session.

    Opens the approval page in a browser; the token is kept in memory only.
    """
    auth_manager = SpotifyOAuth(
        client_id=creds.client_id,
        client_secret=creds.client_secret,
        redirect_uri=creds.redirect_uri,
        scope=SCOPE,
        open_browser=open_browser,
        cache_handler=MemoryCacheHandler(),
    )
    # No retries: errors surface on the first failed request
    sp = spotipy.Spotify(auth_manager=auth_manager, retries=0, status_retries=0)

    # The first API call drives the browser approval and the code exchange
    try:
        user = sp.current_user()
    except SPOTIFY_ERRORS as e:
        raise AuthError(f"Couldn't perform OAuth authentication: {e}") from e

    display_name = user.get("display_name") or user["id"]
    logger.info("Authenticated as %s", display_name)
    return Session(sp=sp, display_name=display_name)


def format_duration(seconds: int) -> str:
    """Format a duration as minutes:seconds, seconds always two digits."""
    minutes, seconds = divmod(int(seconds), 60)
    return f"{minutes}:{seconds:02d}"


def format_genres(genres: list[str]) -> str:
    return ", ".join(genres[:MAX_GENRES])


def iter_items(sp: spotipy.Spotify, first_page: Optional[dict]) -> Iterator[dict]:
    """Yield items page by page, requesting the next page only when needed."""
    page = first_page
    while page:
        yield from page.get("items", [])
        if not page.get("next"):
            return
        page = sp.next(page)


def _fetch_ranked(
    sp: spotipy.Spotify,
    first_page: Callable[..., Optional[dict]],
    window: TimeWindow,
    limit: int,
    to_row: Callable[[int, dict], object],
) -> list:
    if limit < 1:
        raise ValueError(f"limit must be a positive integer, got {limit}")

    try:
        page = first_page(limit=min(limit, MAX_PAGE_SIZE), offset=0, time_range=window.value)
        items = islice(iter_items(sp, page), limit)
        return [to_row(rank, item) for rank, item in enumerate(items, 1)]
    except SPOTIFY_ERRORS as e:
        raise FetchFailed(f"Could not fetch top items ({window.label}): {e}") from e


def _track_row(rank: int, item: dict) -> RankedTrack:
    return RankedTrack(
        rank=rank,
        title=item["name"],
        duration=format_duration(item.get("duration_ms", 0) // 1000),
        artists=[a["name"] for a in item.get("artists", [])],
    )


def _artist_row(rank: int, item: dict) -> RankedArtist:
    return RankedArtist(
        rank=rank,
        name=item["name"],
        genres=format_genres(item.get("genres", [])),
    )


def fetch_top_tracks(sp: spotipy.Spotify, window: TimeWindow, limit: int) -> list[RankedTrack]:
    """Fetch the user's top ``limit`` tracks for a time window.

    Fewer rows come back when Spotify has fewer. Ranks start at 1.
    """
    tracks = _fetch_ranked(sp, sp.current_user_top_tracks, window, limit, _track_row)
    logger.debug("Fetched %d top tracks (%s)", len(tracks), window.value)
    return tracks


def fetch_top_artists(sp: spotipy.Spotify, window: TimeWindow, limit: int) -> list[RankedArtist]:
    """Fetch the user's top ``limit`` artists for a time window."""
    artists = _fetch_ranked(sp, sp.current_user_top_artists, window, limit, _artist_row)
    logger.debug("Fetched %d top artists (%s)", len(artists), window.value)
    return artists
