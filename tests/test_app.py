import json
import logging
import os

import pytest


@pytest.mark.unit
def test_configure_logging_creates_file_and_is_idempotent(tmp_path, monkeypatch):
    import app as app_module

    monkeypatch.setattr(app_module.Config, "ENABLE_CONSOLE_LOGS", False, raising=True)

    root = logging.getLogger()
    old_handlers = list(root.handlers)
    old_level = root.level
    try:
        log_dir = tmp_path / "logs"
        path1 = app_module.configure_logging(str(log_dir))
        assert os.path.exists(path1)

        fhs = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(fhs) == 1
        assert os.path.abspath(fhs[0].baseFilename) == os.path.abspath(path1)

        # Second call should not duplicate handlers
        app_module.configure_logging(str(log_dir))
        fhs2 = [h for h in logging.getLogger().handlers if isinstance(h, logging.FileHandler)]
        assert len(fhs2) == 1
    finally:
        for handler in root.handlers:
            if handler not in old_handlers and isinstance(handler, logging.FileHandler):
                handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)


@pytest.mark.unit
def test_configure_logging_respects_console_toggle(tmp_path, monkeypatch):
    import app as app_module

    monkeypatch.setattr(app_module.Config, "ENABLE_CONSOLE_LOGS", True, raising=True)

    root = logging.getLogger()
    old_handlers = list(root.handlers)
    old_level = root.level
    try:
        app_module.configure_logging(str(tmp_path / "logs"))
        sh = [
            h for h in logging.getLogger().handlers
            if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        ]
        assert any(h.level == logging.WARNING for h in sh)
    finally:
        for handler in root.handlers:
            if handler not in old_handlers and isinstance(handler, logging.FileHandler):
                handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)


@pytest.mark.unit
def test_create_app_registers_blueprints_and_extensions(app):
    for bp in ("home_bp", "health_bp", "metrics_bp"):
        assert bp in app.blueprints

    assert "app_settings" in app.extensions
    assert "profile_content" in app.extensions
    assert callable(app.extensions["recent_tracks"])


@pytest.mark.unit
def test_recent_tracks_provider_is_disabled_without_key(app, monkeypatch):
    import src.domain.listening.fetcher as fetcher_module

    def _no_network(*args, **kwargs):
        raise AssertionError("no request expected without LAST_FM_KEY")

    monkeypatch.setattr(fetcher_module.requests, "get", _no_network)
    assert app.extensions["recent_tracks"]() == []


@pytest.mark.unit
def test_recent_tracks_provider_carries_settings(data_dir):
    import app as app_module

    application = app_module.create_app(
        {
            "lastfm_api_key": "secret",
            "lastfm_user": "someone",
            "lastfm_limit": 4,
            "lastfm_timeout_seconds": 2,
            "data_dir": str(data_dir),
        }
    )
    provider = application.extensions["recent_tracks"]
    assert provider.args == ("secret",)
    assert provider.keywords["user"] == "someone"
    assert provider.keywords["limit"] == 4
    assert provider.keywords["timeout"] == 2.0


@pytest.mark.unit
def test_json_formatter_includes_structured_extras():
    from src.observability.logging import JsonFormatter

    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "failed %s", ("once",), None)
    record.error_kind = "http_status"
    record.status_code = 503
    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "failed once"
    assert payload["level"] == "WARNING"
    assert payload["error_kind"] == "http_status"
    assert payload["status_code"] == 503
    assert payload["timestamp"].endswith("Z")


@pytest.mark.unit
def test_configure_logging_writes_structured_json_lines(tmp_path, monkeypatch):
    import app as app_module

    monkeypatch.setattr(app_module.Config, "ENABLE_CONSOLE_LOGS", False, raising=True)

    root = logging.getLogger()
    old_handlers = list(root.handlers)
    old_level = root.level
    try:
        path = app_module.configure_logging(str(tmp_path / "logs"))
        assert os.path.basename(path).startswith("homepage-")
        assert path.endswith(".log")

        logging.getLogger("homepage.test").warning(
            "Last.fm failed", extra={"error_kind": "http_status", "status_code": 503}
        )
        for handler in root.handlers:
            handler.flush()

        with open(path, encoding="utf-8") as fh:
            lines = [json.loads(line) for line in fh if line.strip()]
        entry = next(line for line in lines if line["message"] == "Last.fm failed")
        assert entry["level"] == "WARNING"
        assert entry["error_kind"] == "http_status"
        assert entry["status_code"] == 503
        assert entry["request_id"] is None
    finally:
        for handler in root.handlers:
            if handler not in old_handlers and isinstance(handler, logging.FileHandler):
                handler.close()
        root.handlers = old_handlers
        root.setLevel(old_level)


@pytest.mark.unit
@pytest.mark.parametrize(
    "debug, run_main, expected",
    [(False, None, True), (True, None, False), (True, "true", True)],
)
def test_file_logging_only_in_the_serving_process(debug, run_main, expected, monkeypatch):
    import app as app_module

    monkeypatch.setattr(app_module.Config, "DEBUG", debug, raising=True)
    if run_main is None:
        monkeypatch.delenv("WERKZEUG_RUN_MAIN", raising=False)
    else:
        monkeypatch.setenv("WERKZEUG_RUN_MAIN", run_main)

    assert app_module._serving_process() is expected
