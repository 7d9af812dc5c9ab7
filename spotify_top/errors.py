class SpotifyTopError(Exception):
    """Base class for errors that end the program with a diagnostic."""


class ConfigError(SpotifyTopError):
    """Required configuration is missing."""


class AuthError(SpotifyTopError):
    """The OAuth exchange with Spotify failed."""


class FetchFailed(SpotifyTopError):
    """Spotify returned an error while fetching top items.

    The client library's exception is kept as ``__cause__``.
    """
