from unittest.mock import Mock

import pytest

import stravatrack.commands.auth as auth_command
from stravatrack.__main__ import main
from stravatrack.commands.auth import parse_code


@pytest.fixture
def mock_client(monkeypatch):
    client = Mock()
    client.authorization_url.return_value = "https://www.strava.com/oauth/authorize?client_id=123"
    client.exchange_code_for_token.return_value = {
        "access_token": "new-access",
        "refresh_token": "new-refresh",
        "expires_at": 1700000000,
    }
    monkeypatch.setattr(auth_command, "Client", Mock(return_value=client))
    monkeypatch.setattr(auth_command.webbrowser, "open", Mock())
    return client


@pytest.fixture
def credentials(monkeypatch):
    monkeypatch.setenv("STRAVA_CLIENT_ID", "123")
    monkeypatch.setenv("STRAVA_CLIENT_SECRET", "shh")


def test_exchange_code_from_argument(mock_client, credentials, capsys):
    assert main(["auth", "--code", "abc"]) == 0

    mock_client.exchange_code_for_token.assert_called_once_with(client_id=123, client_secret="shh", code="abc")
    mock_client.authorization_url.assert_not_called()
    out = capsys.readouterr().out
    assert "STRAVA_ACCESS_TOKEN=new-access" in out
    assert "new-refresh" in out


def test_prompts_for_code_after_printing_url(mock_client, credentials, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "https://localhost/?state=&code=xyz&scope=read_all")

    auth_command.run()

    mock_client.authorization_url.assert_called_once_with(
        client_id=123, redirect_uri="https://localhost", scope=["read_all", "activity:read_all"]
    )
    auth_command.webbrowser.open.assert_called_once_with("https://www.strava.com/oauth/authorize?client_id=123")
    assert mock_client.exchange_code_for_token.call_args.kwargs["code"] == "xyz"
    assert "https://www.strava.com/oauth/authorize?client_id=123" in capsys.readouterr().out


def test_credentials_from_config(mock_client, isolated_config):
    isolated_config.write_text('{"strava": {"client_id": "456", "client_secret": "cfg"}}', encoding="utf-8")

    auth_command.run(code="abc")

    mock_client.exchange_code_for_token.assert_called_once_with(client_id=456, client_secret="cfg", code="abc")


def test_missing_credentials_is_an_error(mock_client, capsys):
    assert main(["auth", "--code", "abc"]) == 1

    assert "client_id and client_secret" in capsys.readouterr().err
    mock_client.exchange_code_for_token.assert_not_called()


@pytest.mark.parametrize(
    "value,expected",
    [
        ("abc", "abc"),
        ("  abc\n", "abc"),
        ("https://localhost/?state=&code=xyz&scope=read_all", "xyz"),
        ("code=xyz&scope=read_all", "xyz"),
    ],
)
def test_parse_code(value, expected):
    assert parse_code(value) == expected
