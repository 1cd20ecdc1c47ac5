from __future__ import annotations

import logging
from typing import List

from flask import Blueprint, current_app, render_template, send_from_directory

from src.models.dto import DisplayTrack

logger = logging.getLogger(__name__)

home_bp = Blueprint("home_bp", __name__)


def _recent_tracks() -> List[DisplayTrack]:
    provider = current_app.extensions.get("recent_tracks")
    if provider is None:
        return []
    return provider()


@home_bp.route("/")
def index():
    profile = current_app.extensions["profile_content"]
    recent_tracks = _recent_tracks()
    logger.debug("Rendering index with %s recent tracks", len(recent_tracks))
    return render_template(
        "index.html",
        age=profile.age(),
        work=profile.work(),
        projects=profile.projects(),
        recent_tracks=recent_tracks,
    )


@home_bp.route("/assets/<path:filename>")
def assets(filename: str):
    return send_from_directory(current_app.config["ASSETS_DIR"], filename)
