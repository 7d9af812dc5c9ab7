import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from spotify_top.errors import ConfigError

logger = logging.getLogger(__name__)

CLIENT_ID_VAR = "RSPOTIFY_CLIENT_ID"
CLIENT_SECRET_VAR = "RSPOTIFY_CLIENT_SECRET"
REDIRECT_URI_VAR = "RSPOTIFY_REDIRECT_URI"

# Scope needed for /me/top/{tracks,artists}
SCOPE = "user-top-read"

DEFAULT_LIMIT = 10
MAX_PAGE_SIZE = 50  # Spotify rejects larger page sizes for top items
POLL_TIMEOUT = 0.25  # seconds


@dataclass(frozen=True)
class Credentials:
    """Spotify app credentials for the authorization-code flow."""
    client_id: str
    client_secret: str
    redirect_uri: str


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read the app credentials from the environment.

    Raises ConfigError naming every variable that is missing or empty.
    """
    if environ is None:
        environ = os.environ

    names = (CLIENT_ID_VAR, CLIENT_SECRET_VAR, REDIRECT_URI_VAR)
    values = {name: environ.get(name, "").strip() for name in names}
    missing = [name for name in names if not values[name]]

    if missing:
        raise ConfigError(
            f"Missing Spotify credentials: {', '.join(missing)}. "
            "Get credentials at https://developer.spotify.com/dashboard"
        )

    logger.debug("Loaded credentials for client %s", values[CLIENT_ID_VAR][:6])
    return Credentials(
        client_id=values[CLIENT_ID_VAR],
        client_secret=values[CLIENT_SECRET_VAR],
        redirect_uri=values[REDIRECT_URI_VAR],
    )
