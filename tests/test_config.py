import pytest

from spotify_top.config import Credentials, load_credentials
from spotify_top.errors import ConfigError

ENV = {
    "RSPOTIFY_CLIENT_ID": "client-id",
    "RSPOTIFY_CLIENT_SECRET": "client-secret",
    "RSPOTIFY_REDIRECT_URI": "http://127.0.0.1:8080/callback",
}


def test_load_credentials_reads_all_three():
    creds = load_credentials(ENV)
    assert creds == Credentials("client-id", "client-secret", "http://127.0.0.1:8080/callback")


def test_missing_values_are_all_named():
    env = {"RSPOTIFY_CLIENT_ID": "client-id", "RSPOTIFY_CLIENT_SECRET": "  "}

    with pytest.raises(ConfigError) as exc_info:
        load_credentials(env)

    message = str(exc_info.value)
    assert "RSPOTIFY_CLIENT_SECRET" in message
    assert "RSPOTIFY_REDIRECT_URI" in message
    assert "RSPOTIFY_CLIENT_ID" not in message


def test_defaults_to_process_environment(monkeypatch):
    for name, value in ENV.items():
        monkeypatch.setenv(name, value)

    assert load_credentials().client_id == "client-id"
