#!/usr/bin/env python
"""
Pydantic DTOs handed to the page template.

These are the display-side shapes only; the Last.fm wire schema lives in
src.domain.listening.lastfm_models and never reaches the template.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DisplayTrack(BaseModel):
    """One recently played track, ready to render."""

    model_config = ConfigDict(frozen=True)

    artist: str
    album: str
    name: str
    image_url: str
    time_ago: str


class Work(BaseModel):
    """A single work history entry from data/work.toml."""

    model_config = ConfigDict(extra="ignore")

    title: str
    company: str
    start: str
    end: str
    description: str


class Project(BaseModel):
    """A single project entry from data/projects.toml."""

    model_config = ConfigDict(extra="ignore")

    name: str
    description: str
    link: str


__all__ = ["DisplayTrack", "Work", "Project"]
