"""
Configuration Management for the Reimbursement Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, artificial latency, toast behaviour and upload limits
are all visible in one place and validated at startup.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REIMBURSEMENT_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(memory|file)$",
        description="Storage backend: 'memory' or 'file'"
    )
    path: Path = Field(
        default=Path(".reimbursements/storage.json"),
        description="Path of the JSON file used by the 'file' backend"
    )
    collection_key: str = Field(
        default="reimbursements",
        min_length=1,
        description="Storage key holding the serialized reimbursement list"
    )
    # Browsers give an origin roughly 5M characters of local storage
    quota_chars: int = Field(
        default=5 * 1024 * 1024,
        ge=1,
        description="Maximum total characters (keys + values) the store accepts"
    )


class ServiceSettings(BaseSettings):
    """Reimbursement data service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="REIMBURSEMENT_SERVICE_",
        extra="ignore"
    )

    # Artificial latency, in milliseconds, applied before each operation
    list_delay_ms: int = Field(default=300, ge=0)
    get_delay_ms: int = Field(default=200, ge=0)
    create_delay_ms: int = Field(default=500, ge=0)
    delete_delay_ms: int = Field(default=300, ge=0)

    default_page_size: int = Field(
        default=6,
        ge=1,
        description="Page size used by list() when no limit is given"
    )


class NotificationSettings(BaseSettings):
    """Toast notification configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TOAST_",
        extra="ignore"
    )

    limit: int = Field(
        default=1,
        ge=1,
        description="Maximum number of toasts kept in the active sequence"
    )
    remove_delay_ms: int = Field(
        default=1_000_000,
        ge=0,
        description="Delay between dismissing a toast and removing it"
    )

    @property
    def remove_delay_seconds(self) -> float:
        return self.remove_delay_ms / 1000


class UploadSettings(BaseSettings):
    """Receipt upload limits and form rules."""

    model_config = SettingsConfigDict(
        env_prefix="RECEIPT_",
        extra="ignore"
    )

    max_size_mb: int = Field(
        default=5,
        ge=1,
        le=50,
        description="Maximum receipt size in MB"
    )
    accepted_types: str = Field(
        default="image/jpeg,image/png,application/pdf",
        description="Comma-separated list of accepted MIME types"
    )
    accepted_extensions: str = Field(
        default=".jpg,.jpeg,.png,.pdf",
        description="Comma-separated list of accepted file extensions"
    )
    min_name_length: int = Field(
        default=3,
        ge=1,
        description="Minimum length of the requester name"
    )

    @property
    def accepted_types_list(self) -> list[str]:
        """Get accepted MIME types as a list."""
        return [t.strip().lower() for t in self.accepted_types.split(",") if t.strip()]

    @property
    def accepted_extensions_list(self) -> list[str]:
        """Get accepted extensions as a list."""
        return [e.strip().lower() for e in self.accepted_extensions.split(",") if e.strip()]

    @property
    def max_size_bytes(self) -> int:
        """Get max receipt size in bytes."""
        return self.max_size_mb * 1024 * 1024


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        description="Log level name for the stdlib root logger"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept any case, reject unknown level names."""
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily so a bad section only fails when used

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def service(self) -> ServiceSettings:
        return ServiceSettings()

    @property
    def notifications(self) -> NotificationSettings:
        return NotificationSettings()

    @property
    def upload(self) -> UploadSettings:
        return UploadSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings sections.

    Returns a dict of {section_name: is_valid}, plus
    {section_name}_error entries for the sections that failed.
    """
    results = {}
    settings = get_settings()

    for section in ("storage", "service", "notifications", "upload", "app"):
        try:
            getattr(settings, section)
            results[section] = True
        except Exception as e:
            results[section] = False
            results[f"{section}_error"] = str(e)

    return results
