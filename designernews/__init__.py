"""Designer News service package bootstrap."""

from .service import SERVICE_META, DesignerNewsService, create_service  # noqa: F401
from .settings import Settings, get_settings, reset_settings_cache  # noqa: F401

__all__ = [
    "DesignerNewsService",
    "SERVICE_META",
    "Settings",
    "create_service",
    "get_settings",
    "reset_settings_cache",
]
