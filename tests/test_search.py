"""
tests/test_search.py
"""
from __future__ import annotations

import pytest
import requests

from localmedia.main import CONFIG_HINT
from localmedia.youtube_client import MAX_RESULTS, YOUTUBE_SEARCH_URL


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text="", json_error=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self.text = text
        self._payload = payload
        self._json_error = json_error

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class FakeSession:
    """Stands in for requests.Session; records every call."""

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse(payload={"items": []})
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


ITEMS = {
    "items": [
        {
            "id": {"kind": "youtube#video", "videoId": "abc123"},
            "snippet": {
                "title": "Lo-fi beats",
                "channelTitle": "Chill",
                "thumbnails": {
                    "default": {"url": "https://i.ytimg.com/d.jpg"},
                    "medium": {"url": "https://i.ytimg.com/m.jpg"},
                },
            },
        },
        {
            "id": {"videoId": "def456"},
            "snippet": {
                "title": "Only default",
                "channelTitle": "Other",
                "thumbnails": {"default": {"url": "https://i.ytimg.com/d2.jpg"}},
            },
        },
        {
            "id": {"videoId": "ghi789"},
            "snippet": {"title": "No thumbs", "channelTitle": "None", "thumbnails": {}},
        },
    ]
}


@pytest.fixture
def keyed(settings):
    settings.yt_api_key = "secret key"
    return settings


def _use(app, session):
    app.state.http = session
    return session


def test_missing_query_is_400(client, keyed):
    resp = client.get("/api/search-youtube")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing query (q)"}

    assert client.get("/api/search-youtube?q=").status_code == 400


def test_missing_key_is_400_with_hint(client, app):
    session = _use(app, FakeSession())
    resp = client.get("/api/search-youtube", params={"q": "cats"})
    assert resp.status_code == 400
    assert resp.json() == {"error": CONFIG_HINT}
    assert "YT_API_KEY" in resp.json()["error"]
    assert session.calls == []


def test_query_checked_before_key(client):
    resp = client.get("/api/search-youtube")
    assert resp.json() == {"error": "Missing query (q)"}


def test_missing_transport_is_500(client, app, keyed):
    app.state.http = None
    resp = client.get("/api/search-youtube", params={"q": "cats"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server missing HTTP transport"}


def test_success_reshapes_items(client, app, keyed):
    session = _use(app, FakeSession(FakeResponse(payload=ITEMS)))
    resp = client.get("/api/search-youtube", params={"q": "lofi & chill"})
    assert resp.status_code == 200
    assert resp.json() == [
        {"id": "abc123", "title": "Lo-fi beats", "channel": "Chill", "thumbnail": "https://i.ytimg.com/m.jpg"},
        {"id": "def456", "title": "Only default", "channel": "Other", "thumbnail": "https://i.ytimg.com/d2.jpg"},
        {"id": "ghi789", "title": "No thumbs", "channel": "None", "thumbnail": None},
    ]

    call = session.calls[0]
    assert call["url"] == YOUTUBE_SEARCH_URL
    assert call["params"] == {
        "part": "snippet",
        "type": "video",
        "maxResults": MAX_RESULTS,
        "q": "lofi & chill",
        "key": "secret key",
    }
    assert call["timeout"] == keyed.yt_timeout
    assert MAX_RESULTS == 8


def test_no_items_is_empty_list(client, app, keyed):
    _use(app, FakeSession(FakeResponse(payload={})))
    assert client.get("/api/search-youtube", params={"q": "x"}).json() == []


def test_upstream_403_is_502(client, app, keyed):
    _use(app, FakeSession(FakeResponse(status_code=403, text='{"error": "quotaExceeded"}')))
    resp = client.get("/api/search-youtube", params={"q": "cats"})
    assert resp.status_code == 502
    body = resp.json()
    assert body["error"] == "YouTube API error"
    assert body["status"] == 403
    assert body["body"] == '{"error": "quotaExceeded"}'


def test_network_error_is_500(client, app, keyed):
    _use(app, FakeSession(error=requests.ConnectionError("boom")))
    resp = client.get("/api/search-youtube", params={"q": "cats"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "failed"}


def test_malformed_json_is_500(client, app, keyed):
    _use(app, FakeSession(FakeResponse(json_error=ValueError("bad json"))))
    resp = client.get("/api/search-youtube", params={"q": "cats"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "failed"}


def test_non_object_fields_read_as_missing(client, app, keyed):
    weird = {"items": [
        {"id": "plainstring", "snippet": {"title": "T", "channelTitle": "C", "thumbnails": "none"}},
        "not-an-item",
    ]}
    _use(app, FakeSession(FakeResponse(payload=weird)))
    resp = client.get("/api/search-youtube", params={"q": "x"})
    assert resp.status_code == 200
    assert resp.json() == [
        {"id": None, "title": "T", "channel": "C", "thumbnail": None},
        {"id": None, "title": None, "channel": None, "thumbnail": None},
    ]
