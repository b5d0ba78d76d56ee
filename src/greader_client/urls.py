"""URL construction for Google Reader API endpoints."""

from urllib.parse import quote

import httpx

from .exceptions import ConfigError

READ_STATE = "user/-/state/com.google/read"
STARRED_STATE = "user/-/state/com.google/starred"
READING_LIST = ("user", "-", "state", "com.google", "reading-list")

LOGIN_PATH = ("accounts", "ClientLogin")
TOKEN_PATH = ("reader", "api", "0", "token")
STREAM_CONTENTS_PATH = ("reader", "api", "0", "stream", "contents", *READING_LIST)
EDIT_TAG_PATH = ("reader", "api", "0", "edit-tag")
UNREAD_COUNT_PATH = ("reader", "api", "0", "unread-count")

# r=n: newest first. xt: exclude items already in the read state.
UNREAD_QUERY = f"r=n&xt={READ_STATE}"


def parse_server_url(server_url: str) -> httpx.URL:
    """Normalize and validate the server URL a session is built from.

    Trailing slashes are stripped so that ``https://x/api/greader.php/`` and
    ``https://x/api/greader.php`` produce the same endpoints.

    Raises:
        ConfigError: If the URL is not an absolute http(s) URL with a host.
    """
    try:
        url = httpx.URL(server_url.rstrip("/"))
    except (httpx.InvalidURL, TypeError) as e:
        raise ConfigError(f"Failed to parse server URL {server_url!r}: {e}") from e

    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigError(f"Server URL must be an absolute http(s) URL, got {server_url!r}")
    if url.query or url.fragment:
        raise ConfigError(f"Server URL must not carry a query or fragment, got {server_url!r}")
    return url


def build_url(base: httpx.URL, *segments: str, query: str | None = None) -> httpx.URL:
    """Append path segments to ``base`` and optionally set a query string.

    Each segment is percent-encoded on its own, so a ``/`` inside a segment
    never introduces an extra path level. ``query`` is used as-is and must
    already be encoded.
    """
    path = base.raw_path.split(b"?", 1)[0].decode("ascii").rstrip("/")
    for segment in segments:
        path += "/" + quote(segment, safe="-._~")
    raw_path = path or "/"
    if query:
        raw_path = f"{raw_path}?{query}"
    return base.copy_with(raw_path=raw_path.encode("ascii"))


def unread_query(continuation: str | None = None) -> str:
    """Query string for the unread stream, with the cursor placed first."""
    if continuation is None:
        return UNREAD_QUERY
    return f"c={quote(continuation, safe='')}&{UNREAD_QUERY}"


def auth_headers(auth_token: str) -> dict[str, str]:
    return {"Authorization": f"GoogleLogin auth={auth_token}"}
