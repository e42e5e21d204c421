from pathlib import Path

import pytest

from gsheetfeeds.access import gdata

@pytest.fixture(autouse=True)
def clean_access():
    gdata.reset()
    yield
    gdata.reset()

def test_scopes():
    assert(gdata.get_scope("feeds") == "https://spreadsheets.google.com/feeds")
    assert(gdata.get_scope("https://www.googleapis.com/auth/drive") == "https://www.googleapis.com/auth/drive")
    assert(gdata.get_scope("calendar") == "")
    assert(gdata.get_scope("https://example.com/scope") == "")

def test_set_scopes_unconnected():
    gdata.scopes = ["feeds", "bogus", "spreadsheets", "feeds"]
    assert(gdata.scopes == ["https://spreadsheets.google.com/feeds",
                            "https://www.googleapis.com/auth/spreadsheets"])
    assert(not gdata)
    assert(gdata.session_scopes == [])
    gdata.scopes = "drive"
    assert(gdata.scopes == ["https://www.googleapis.com/auth/drive"])
    gdata.scopes = None
    assert(gdata.scopes == [])

def test_config_round_trip(tmp_path):
    config = {
        'secrets': str(tmp_path / "secrets.json"),
        'cache': str(tmp_path / "tokens.json"),
        'scopes': ["feeds"],
        'server': "127.0.0.1",
        'port': "8765",
    }
    gdata.config = config
    assert(gdata.client_secrets == tmp_path / "secrets.json")
    assert(gdata.cred_cache == tmp_path / "tokens.json")
    assert(gdata.auth_port == 8765)
    c = gdata.config
    assert(c['server'] == "127.0.0.1")
    assert(c['scopes'] == ["https://spreadsheets.google.com/feeds"])
    assert(c['secrets'] == str(tmp_path / "secrets.json"))

def test_connect_without_scopes():
    assert(gdata.connect() is False)
    assert(gdata.get_session() is None)

def test_reset_defaults():
    gdata.client_secrets = "/tmp/elsewhere.json"
    gdata.reset()
    assert(gdata.client_secrets == (Path.home() / "gws_client_secrets.json").absolute())
    assert(gdata.creds is None)
