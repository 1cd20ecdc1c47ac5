from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    checks = {}

    settings = current_app.extensions.get("app_settings")
    if settings is not None and settings.lastfm_enabled:
        checks["lastfm"] = "configured"
    else:
        checks["lastfm"] = "disabled"

    profile = current_app.extensions.get("profile_content")
    missing = profile.missing_files() if profile is not None else []
    checks["content"] = "ok" if not missing else f"missing: {', '.join(missing)}"

    # Both integrations degrade softly, so the page is healthy either way
    return jsonify({"status": "ok", "checks": checks}), 200


@health_bp.route("/readyz")
def readyz():
    return jsonify({"status": "ready"}), 200
