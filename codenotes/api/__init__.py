"""Web widget and JSON API for saved snippets."""

from .server import create_app
from .service import ApiSettings
from .state import WidgetState

__all__ = ["ApiSettings", "WidgetState", "create_app"]
