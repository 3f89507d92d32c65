"""
Configuration package for the TourHub favorites service.
"""

from .settings import (
    Settings,
    Environment,
    LogLevel,
    DatabaseSettings,
    SecuritySettings,
    FavoritesSettings,
    ClientSettings,
    settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "Settings",
    "Environment",
    "LogLevel",
    "DatabaseSettings",
    "SecuritySettings",
    "FavoritesSettings",
    "ClientSettings",
    "settings",
    "get_settings",
    "reload_settings",
]
