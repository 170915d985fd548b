"""Configuration package."""

from budget_allocator.config.settings import (
    AppSettings,
    DisplaySettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "DisplaySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
