"""Async session for the Google Reader API (FreshRSS and compatible servers)."""

import logging
import re

import httpx
from pydantic import ValidationError

from .config import Config
from .exceptions import AuthError, GoogleReaderError, ParseError, TokenNotFoundError, TransportError
from .models import AuthToken, ListResponse, WriteToken
from .urls import (
    EDIT_TAG_PATH,
    LOGIN_PATH,
    READ_STATE,
    STARRED_STATE,
    STREAM_CONTENTS_PATH,
    TOKEN_PATH,
    UNREAD_COUNT_PATH,
    auth_headers,
    build_url,
    parse_server_url,
    unread_query,
)

logger = logging.getLogger(__name__)

AUTH_PATTERN = re.compile(r"Auth=(?P<auth>\S+)")

MAX_COUNT = 2**64 - 1
MAX_COUNT_DIGITS = len(str(MAX_COUNT))


class GoogleReaderClient:
    """Async client for one Google Reader account.

    The server URL is the API root, e.g. ``https://example.com/api/greader.php``
    for FreshRSS. Both tokens are fetched lazily on first use and cached for
    the lifetime of the object; call ``clear_tokens()`` to force a new login.

    Not safe for concurrent use: two operations racing on a missing token
    will each fetch one. Serialize calls on a shared instance.
    """

    def __init__(
        self,
        username: str,
        password: str,
        server_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.server_url = parse_server_url(server_url)
        self.username = username
        self._password = password
        self._auth_token: AuthToken | None = None
        self._write_token: WriteToken | None = None
        self._client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "GoogleReaderClient":
        return cls(
            config.username,
            config.password.get_secret_value(),
            config.server_url,
            timeout=config.timeout,
            **kwargs,
        )

    @property
    def auth_token(self) -> AuthToken | None:
        return self._auth_token

    @property
    def write_token(self) -> WriteToken | None:
        return self._write_token

    def clear_tokens(self) -> None:
        """Forget both cached tokens so the next call logs in again."""
        self._auth_token = None
        self._write_token = None

    async def login(self) -> AuthToken:
        """Do the ClientLogin exchange and cache the auth token.

        Any previously cached auth token is overwritten.

        Returns:
            The new auth token

        Raises:
            TokenNotFoundError: If the response has no ``Auth=`` line
            TransportError: If the request could not be sent
        """
        url = build_url(self.server_url, *LOGIN_PATH)
        logger.debug("Logging in to %s", url)

        response = await self._send(
            "login",
            "POST",
            url,
            data={"Email": self.username, "Passwd": self._password},
        )

        match = AUTH_PATTERN.search(response.text)
        if match is None:
            raise TokenNotFoundError(
                f"No Auth token in login response (HTTP {response.status_code})",
                operation="login",
            )

        self._auth_token = AuthToken(match.group("auth"))
        logger.info("Logged in to %s as %s", self.server_url, self.username)
        return self._auth_token

    async def get_write_token(self) -> WriteToken:
        """Fetch a write token for state-changing calls and cache it."""
        url = build_url(self.server_url, *TOKEN_PATH)
        response = await self._authed_request("get_write_token", "GET", url)

        body = response.text
        if body.endswith("\n"):
            body = body[:-1]

        self._write_token = WriteToken(body)
        logger.debug("Got write token")
        return self._write_token

    async def list_unread(self, continuation: str | None = None) -> ListResponse:
        """Fetch one page of unread items, newest first.

        Args:
            continuation: Cursor from the previous page's ``continuation``

        Returns:
            The page. If its ``continuation`` is set, call again with it to
            get the next page; otherwise the unread set is exhausted.
        """
        operation = "list_unread"
        url = build_url(self.server_url, *STREAM_CONTENTS_PATH, query=unread_query(continuation))
        response = await self._authed_request(operation, "GET", url)

        body = response.content
        try:
            page = ListResponse.model_validate_json(body)
        except ValidationError as e:
            raise ParseError(
                f"Failed to parse unread items response ({e.error_count()} errors)",
                operation=operation,
                endpoint=url.path,
                body_length=len(body),
            ) from e

        logger.info(
            "Fetched %d unread items (more pages: %s)",
            len(page.items),
            page.continuation is not None,
        )
        return page

    async def mark_item_read(self, item_id: str) -> str:
        """Mark an item as read. Returns the raw response body, normally ``OK``."""
        return await self._edit_tag("mark_item_read", item_id, add=READ_STATE)

    async def mark_item_unread(self, item_id: str) -> str:
        return await self._edit_tag("mark_item_unread", item_id, remove=READ_STATE)

    async def star_item(self, item_id: str) -> str:
        return await self._edit_tag("star_item", item_id, add=STARRED_STATE)

    async def unstar_item(self, item_id: str) -> str:
        return await self._edit_tag("unstar_item", item_id, remove=STARRED_STATE)

    async def unread_count(self) -> int:
        """Return the number of unread items.

        FreshRSS does not implement this endpoint; against it this raises
        ``ParseError``.
        """
        operation = "unread_count"
        url = build_url(self.server_url, *UNREAD_COUNT_PATH)
        response = await self._authed_request(operation, "GET", url)

        text = response.text.strip()
        # Bounded to 64 bits; the length check keeps int() under its digit limit.
        if text.isascii() and text.isdigit() and len(text) <= MAX_COUNT_DIGITS:
            count = int(text)
            if count <= MAX_COUNT:
                return count
        raise ParseError(
            f"Unread count is not an unsigned 64-bit integer: {text[:40]!r}",
            operation=operation,
            endpoint=url.path,
            body_length=len(response.content),
        )

    async def _edit_tag(
        self,
        operation: str,
        item_id: str,
        add: str | None = None,
        remove: str | None = None,
    ) -> str:
        """Add or remove a state tag on one item via edit-tag."""
        await self._ensure_auth(operation)

        write_token = self._write_token
        if write_token is None:
            try:
                write_token = await self.get_write_token()
            except GoogleReaderError as e:
                raise e.add_context(f"{operation}: failed to get write token")

        data: dict[str, str] = {}
        if add:
            data["a"] = add
        if remove:
            data["r"] = remove
        data["T"] = write_token
        data["i"] = item_id

        url = build_url(self.server_url, *EDIT_TAG_PATH)
        response = await self._authed_request(operation, "POST", url, data=data)
        logger.info("%s %s: %s", operation, item_id, response.text.strip())
        return response.text

    async def _ensure_auth(self, operation: str) -> AuthToken:
        if self._auth_token is not None:
            return self._auth_token
        try:
            return await self.login()
        except GoogleReaderError as e:
            raise e.add_context(f"{operation}: failed to login")

    async def _authed_request(
        self, operation: str, method: str, url: httpx.URL, **kwargs
    ) -> httpx.Response:
        """Send a request carrying the auth header, logging in first if needed."""
        auth_token = await self._ensure_auth(operation)
        response = await self._send(
            operation, method, url, headers=auth_headers(auth_token), **kwargs
        )
        if response.status_code in (401, 403):
            raise AuthError(
                f"Server rejected auth token (HTTP {response.status_code})",
                operation=operation,
            )
        return response

    async def _send(
        self, operation: str, method: str, url: httpx.URL, **kwargs
    ) -> httpx.Response:
        logger.debug("%s %s %s", operation, method, url)
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(
                f"Failed to send {operation} request", operation=operation, cause=e
            ) from e

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GoogleReaderClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
