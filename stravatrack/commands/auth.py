"""CLI command auth: exchange a Strava authorization code for an access token."""

import os
import urllib.parse
import webbrowser

from stravalib.client import Client

from stravatrack.appconfig import load_config

REDIRECT_URI = "https://localhost"
SCOPE = ["read_all", "activity:read_all"]


def _credentials(config) -> tuple[int, str]:
    strava_cfg = config.get("strava") or {}
    client_id_raw = str(os.environ.get("STRAVA_CLIENT_ID") or strava_cfg.get("client_id") or "").strip()
    client_secret = str(os.environ.get("STRAVA_CLIENT_SECRET") or strava_cfg.get("client_secret") or "").strip()
    if not client_id_raw or not client_secret:
        raise RuntimeError(
            "Strava client_id and client_secret must be set, either as STRAVA_CLIENT_ID and "
            "STRAVA_CLIENT_SECRET or under 'strava' in stravatrack_config.json."
        )
    try:
        return int(client_id_raw), client_secret
    except ValueError as e:
        raise ValueError(f"Strava client_id must be a number, got {client_id_raw!r}") from e


def parse_code(value: str) -> str:
    """Accept either a bare code or the whole URL Strava redirected to."""
    value = value.strip()
    if "code=" not in value:
        return value
    query = urllib.parse.urlparse(value).query or value.split("?", 1)[-1]
    codes = urllib.parse.parse_qs(query).get("code")
    if not codes:
        raise ValueError("No authorization code found in the redirect URL.")
    return codes[0]


def run(code: str | None = None, redirect_uri: str = REDIRECT_URI) -> None:
    client_id, client_secret = _credentials(load_config())
    client = Client()

    if not code:
        authorize_url = client.authorization_url(client_id=client_id, redirect_uri=redirect_uri, scope=SCOPE)
        print("Opening browser for Strava authorization...")
        webbrowser.open(authorize_url)
        print(f"If your browser does not open, visit this URL: {authorize_url}")
        code = input("Paste the code (or the whole URL) Strava redirected you to: ")

    token_dict = client.exchange_code_for_token(
        client_id=client_id,
        client_secret=client_secret,
        code=parse_code(code),
    )
    print("✓ Strava authorization complete. Add this line to your .env file:")
    print(f"STRAVA_ACCESS_TOKEN={token_dict['access_token']}")
    if token_dict.get("refresh_token"):
        print(f"Refresh token: {token_dict['refresh_token']}")
    if token_dict.get("expires_at"):
        print(f"Expires at: {token_dict['expires_at']}")
