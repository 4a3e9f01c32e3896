# localmedia/youtube_client.py
import logging

log = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
MAX_RESULTS = 8

class UpstreamError(Exception):
    """The search API answered with a non-success status."""

    def __init__(self, status, body):
        super().__init__(f"YouTube API returned {status}")
        self.status = status
        self.body = body

def _obj(value):
    # non-object values read as empty
    return value if isinstance(value, dict) else {}

def _reshape(item):
    item = _obj(item)
    snippet = _obj(item.get("snippet"))
    thumbs = _obj(snippet.get("thumbnails"))
    thumb = _obj(thumbs.get("medium")).get("url") or _obj(thumbs.get("default")).get("url")
    return {
        "id": _obj(item.get("id")).get("videoId"),
        "title": snippet.get("title"),
        "channel": snippet.get("channelTitle"),
        "thumbnail": thumb,
    }

def search_videos(session, api_key, query, timeout=30):
    """Run a video search and return reduced result records.

    Raises UpstreamError on a non-2xx answer; network and JSON errors
    propagate from requests.
    """
    r = session.get(
        YOUTUBE_SEARCH_URL,
        params={
            "part": "snippet",
            "type": "video",
            "maxResults": MAX_RESULTS,
            "q": query,
            "key": api_key,
        },
        timeout=timeout,
    )
    if not r.ok:
        try:
            text = r.text
        except Exception:
            text = None
        log.error("YouTube API returned error %s %s", r.status_code, text)
        raise UpstreamError(r.status_code, text)

    data = r.json()
    return [_reshape(it) for it in (data.get("items") or [])]
