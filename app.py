import os
import logging
from datetime import datetime
from functools import partial
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from flask import Flask, request, g

from config import Config
from src.domain.listening import get_recent_display_tracks
from src.domain.profile import ProfileContent
from src.interfaces.http.routes import home_bp, health_bp
from src.observability import configure_structured_logging, metrics_blueprint, init_tracing
from src.observability.logging import JsonFormatter, RequestContextFilter
from src.settings import load_app_settings


logger = logging.getLogger(__name__)


LOG_FILE_PREFIX = "homepage"


def configure_logging(log_dir: str) -> str:
    """Write this run's records as JSON lines to ``<log_dir>/homepage-<stamp>.log``.

    The file carries the same structured fields as the stdout stream
    (request id, ``error_kind``, ``status_code``...). A file handler from an
    earlier call is closed and replaced. When ``ENABLE_CONSOLE_LOGS`` is set,
    WARNING and above are also echoed to the console in plain text.
    Returns the path of the log file.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, f"{LOG_FILE_PREFIX}-{datetime.now():%Y%m%d-%H%M%S}.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for stale in [h for h in root.handlers if isinstance(h, logging.FileHandler)]:
        root.removeHandler(stale)
        stale.close()

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(JsonFormatter())
    file_handler.addFilter(RequestContextFilter())
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
        root.addHandler(console_handler)

    # werkzeug access lines go to the run file instead of its own console handler
    werkzeug_logger = logging.getLogger('werkzeug')
    werkzeug_logger.handlers = []
    werkzeug_logger.propagate = True

    return log_path


def create_app(settings_overrides=None):
    app = Flask(
        __name__,
        static_folder=Config.STATIC_DIR,
        static_url_path='/static',
        template_folder='templates',
    )
    app.config.from_object(Config)
    configure_structured_logging(app)
    init_tracing(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    csp_policy = app.config.get('CONTENT_SECURITY_POLICY')
    if csp_policy:

        @app.after_request
        def _apply_csp(response):
            response.headers.setdefault('Content-Security-Policy', csp_policy)
            return response

    settings = load_app_settings(settings_overrides)
    app.extensions['app_settings'] = settings
    app.extensions['profile_content'] = ProfileContent(
        data_dir=settings.data_dir,
        birth_date=settings.birth_date,
    )

    if settings.lastfm_enabled:
        app.logger.info(
            "Last.fm recent tracks enabled for user %s (limit=%s, timeout=%ss)",
            settings.lastfm_user, settings.lastfm_limit, settings.lastfm_timeout_seconds,
        )
    else:
        app.logger.info("LAST_FM_KEY not set; recent tracks widget disabled.")

    # The page route calls this once per view; every failure inside is absorbed
    app.extensions['recent_tracks'] = partial(
        get_recent_display_tracks,
        settings.lastfm_api_key,
        user=settings.lastfm_user,
        limit=settings.lastfm_limit,
        timeout=settings.lastfm_timeout_seconds,
        api_url=settings.lastfm_api_url,
    )

    # --- Register Blueprints ---
    app.register_blueprint(home_bp)
    app.register_blueprint(metrics_blueprint)
    app.register_blueprint(health_bp)

    return app


def _serving_process() -> bool:
    # Under the debug reloader the parent only watches files; the child serves
    return not Config.DEBUG or os.environ.get('WERKZEUG_RUN_MAIN') == 'true'


def main() -> None:
    if _serving_process():
        log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'log')
        logger.info("File logging initialized at %s", configure_logging(log_dir))

    app = create_app()
    app.logger.handlers = []
    app.logger.propagate = True
    logger.info("Serving home page on port %s", Config.PORT)
    # Threaded so a slow Last.fm call only holds up its own page view
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=Config.PORT, threaded=True)


if __name__ == '__main__':
    main()
