"""Domain layer: errors and constants."""

from .errors import AppError, ConfigError, ErrorCodes, SettingsError, ViewError

__all__ = [
    "AppError",
    "ConfigError",
    "SettingsError",
    "ViewError",
    "ErrorCodes",
]
