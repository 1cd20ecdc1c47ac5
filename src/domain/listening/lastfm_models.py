#!/usr/bin/env python
"""
Pydantic models for the Last.fm ``user.getrecenttracks`` JSON payload.

The API encodes text nodes under ``#text`` and metadata under ``@attr``,
sends numbers as strings, and collapses a one-element ``track`` list into a
bare object. The models accept all of that; anything they cannot accept is
reported as a validation error to the transformer.

Shape::

    {"recenttracks": {
        "track": [{"artist": {"#text": ..}, "album": {"#text": ..},
                   "name": .., "url": ..,
                   "image": [{"size": "small", "#text": ..}, ..],
                   "date": {"uts": "1700000000", "#text": ..},   # optional
                   "@attr": {"nowplaying": "true"}},             # optional
                  ..],
        "@attr": {"user": .., "page": .., "perPage": .., "totalPages": .., "total": ..}}}
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _WireModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


class TextNode(_WireModel):
    """An ``{"#text": ..., "mbid": ...}`` object (artist, album)."""

    text: str = Field(alias="#text")
    mbid: Optional[str] = None


class ImageVariant(_WireModel):
    size: Optional[str] = None
    url: Optional[str] = Field(default=None, alias="#text")


class PlayDate(_WireModel):
    uts: str
    formatted: Optional[str] = Field(default=None, alias="#text")


class TrackAttributes(_WireModel):
    nowplaying: Optional[str] = None


class RawTrack(_WireModel):
    """One entry of ``recenttracks.track``."""

    artist: TextNode
    album: TextNode
    name: str
    url: str = ""
    mbid: Optional[str] = None
    images: List[ImageVariant] = Field(default_factory=list, alias="image")
    date: Optional[PlayDate] = None
    attr: Optional[TrackAttributes] = Field(default=None, alias="@attr")

    @field_validator("images", mode="before")
    @classmethod
    def _images_as_list(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        if isinstance(value, list):
            # variants that are not objects have no size to match
            return [item for item in value if isinstance(item, dict)]
        return value


class PageAttributes(_WireModel):
    """Pagination metadata; parsed for completeness, never rendered."""

    user: Optional[str] = None
    page: Optional[str] = None
    per_page: Optional[str] = Field(default=None, alias="perPage")
    total_pages: Optional[str] = Field(default=None, alias="totalPages")
    total: Optional[str] = None


class RecentTracks(_WireModel):
    # Entries are kept raw here and validated one by one so a single bad
    # entry cannot reject the whole page.
    tracks: List[Any] = Field(alias="track")
    attr: Optional[PageAttributes] = Field(default=None, alias="@attr")

    @field_validator("tracks", mode="before")
    @classmethod
    def _single_track_as_list(cls, value: object) -> object:
        if isinstance(value, dict):
            return [value]
        return value


class RecentTracksResponse(_WireModel):
    recenttracks: RecentTracks


__all__ = [
    "TextNode",
    "ImageVariant",
    "PlayDate",
    "TrackAttributes",
    "RawTrack",
    "PageAttributes",
    "RecentTracks",
    "RecentTracksResponse",
]
