"""Data models for Google Reader API responses."""

from typing import Annotated, NewType

from pydantic import BaseModel, ConfigDict, Field, StrictInt

AuthToken = NewType("AuthToken", str)
WriteToken = NewType("WriteToken", str)

# JSON numbers only, no numeric strings.
UnsignedInt = Annotated[StrictInt, Field(ge=0)]


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Link(_WireModel):
    """A link attached to an item (canonical or alternate)."""

    href: str


class Summary(_WireModel):
    content: str | None = None
    author: str | None = None


class Item(_WireModel):
    """A feed item as returned by the stream contents endpoint."""

    id: str
    crawl_time_msec: str | None = Field(default=None, alias="crawlTimeMsec")
    timestamp_usec: str | None = Field(default=None, alias="timestampUsec")
    updated: UnsignedInt | None = None
    published: UnsignedInt | None = None
    title: str
    canonical: list[Link]
    alternate: list[Link]
    categories: list[str]
    origin: dict[str, str]
    summary: Summary

    @property
    def url(self) -> str | None:
        """First canonical href, falling back to the first alternate."""
        for links in (self.canonical, self.alternate):
            if links:
                return links[0].href
        return None


class ListResponse(_WireModel):
    """One page of a stream.

    ``continuation`` is the cursor for the next page; ``None`` means the
    stream is exhausted.
    """

    id: str
    items: list[Item]
    updated: UnsignedInt
    continuation: str | None = None
