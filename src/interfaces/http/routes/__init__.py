"""Route blueprints exposed via Flask."""

from .home import home_bp
from .health import health_bp

__all__ = [
    "home_bp",
    "health_bp",
]
