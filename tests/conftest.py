import os
import shutil
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'src' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep a developer's real Last.fm key and .env values out of tests."""
    monkeypatch.delenv("LAST_FM_KEY", raising=False)
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
    yield


@pytest.fixture
def data_dir(tmp_path):
    """A private copy of the shipped content files."""
    target = tmp_path / "data"
    shutil.copytree(os.path.join(_ROOT_DIR, "data"), target)
    return target


@pytest.fixture
def app(data_dir):
    import app as app_module

    application = app_module.create_app(
        {
            "lastfm_api_key": None,
            "data_dir": str(data_dir),
            "birth_date": "2005-04-24",
        }
    )
    application.config.update(TESTING=True)
    yield application


@pytest.fixture
def client(app):
    return app.test_client()
