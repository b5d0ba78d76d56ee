"""Async client for the Google Reader sync API, as served by FreshRSS."""

from .client import GoogleReaderClient
from .exceptions import (
    AuthError,
    ConfigError,
    GoogleReaderError,
    ParseError,
    TokenNotFoundError,
    TransportError,
)
from .models import AuthToken, Item, Link, ListResponse, Summary, WriteToken
from .pagination import collect_unread, iter_unread_items, iter_unread_pages

__all__ = [
    "GoogleReaderClient",
    "GoogleReaderError",
    "ConfigError",
    "TransportError",
    "AuthError",
    "TokenNotFoundError",
    "ParseError",
    "AuthToken",
    "WriteToken",
    "Link",
    "Summary",
    "Item",
    "ListResponse",
    "iter_unread_pages",
    "iter_unread_items",
    "collect_unread",
]

__version__ = "0.1.0"
