"""Configuration package."""

from reimbursements.config.settings import (
    AppSettings,
    NotificationSettings,
    ServiceSettings,
    Settings,
    StorageSettings,
    UploadSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "NotificationSettings",
    "ServiceSettings",
    "Settings",
    "StorageSettings",
    "UploadSettings",
    "get_settings",
    "validate_all_settings",
]
