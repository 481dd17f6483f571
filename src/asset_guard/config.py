"""Configuration management for asset-guard using pydantic-settings.

Supports hierarchical configuration from:
1. Environment variables (highest priority)
2. JSON config file
3. Default values (lowest priority)

Environment variables use the format: ASSET_GUARD_<SECTION>__<FIELD>
Example: ASSET_GUARD_VERSION_CONTROL__BACKEND=file_permissions
"""

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

APP_NAME = "asset-guard"


class JsonConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source for loading from JSON file."""

    def __init__(self, settings_cls: type[BaseSettings], json_file: Path):
        super().__init__(settings_cls)
        self.json_file = json_file

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get field value - required by base class but not used in v2."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from JSON file, dropping comment keys."""
        if self.json_file.exists():
            with open(self.json_file, encoding="utf-8") as f:
                return _strip_comment_fields(json.load(f))
        return {}


class ProcessorsConfig(BaseModel):
    """Where asset modification processors are discovered."""

    modules: list[str] = Field(default_factory=list)  # Dotted module names imported at discovery
    entry_point_group: str | None = "asset_guard.processors"


class VersionControlConfig(BaseModel):
    """Version-control backend section."""

    backend: Literal["none", "file_permissions"] = "none"
    project_root: str = "."
    read_only_folders: list[str] = Field(default_factory=list)

    @field_validator("project_root")
    @classmethod
    def project_root_must_not_be_empty(cls, v: str) -> str:
        """Validate that project_root is not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError("project_root must be a non-empty string")
        return v


class PreferencesConfig(BaseModel):
    """User preferences the pipeline reads but never writes."""

    verify_saving_assets: bool = False
    overwrite_failed_checkout_assets: bool = False
    explicit_save_extensions: list[str] = Field(default_factory=lambda: [".unity", ".prefab"])


class LicenseConfig(BaseModel):
    """License state of the process."""

    has_team_license: bool = True


class LoggingConfig(BaseModel):
    """Logging and audit section."""

    log_level: str = "INFO"
    log_dir: str | None = None  # None = console only
    audit_enabled: bool = False
    audit_log_dir: str | None = None

    @field_validator("log_level")
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level


# Module-level variables
_json_config_file: Path | None = None  # For settings_customise_sources
_settings_cache: "Settings | None" = None  # For singleton pattern


def _strip_comment_fields(data: Any) -> Any:
    """Recursively strip keys starting with _ or $ from dict.

    Args:
        data: Dictionary to clean (or any other type, which is returned as-is)

    Returns:
        Dictionary with comment fields removed, or original value if not a dict
    """
    if not isinstance(data, dict):
        return data
    return {
        k: _strip_comment_fields(v) if isinstance(v, dict) else v
        for k, v in data.items()
        if not k.startswith('_') and not k.startswith('$')
    }


class Settings(BaseSettings):
    """Root configuration model with nested sections.

    Loads configuration from (in priority order):
    1. Environment variables with ASSET_GUARD_ prefix
    2. JSON config file (if provided)
    3. Default values
    """

    processors: ProcessorsConfig = Field(default_factory=ProcessorsConfig)
    version_control: VersionControlConfig = Field(default_factory=VersionControlConfig)
    preferences: PreferencesConfig = Field(default_factory=PreferencesConfig)
    license: LicenseConfig = Field(default_factory=LicenseConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="ASSET_GUARD_",
        env_nested_delimiter="__",
    )

    @classmethod
    def from_file(cls, config_path: Path | str) -> "Settings":
        """Load settings from a JSON config file.

        Values in the file take precedence; fields the file omits still come
        from ``ASSET_GUARD_*`` environment variables, then defaults.

        Args:
            config_path: Path to JSON config file

        Returns:
            Settings instance loaded from file, or default Settings if file doesn't exist
        """
        path = Path(config_path)
        if not path.exists():
            return cls()
        raw = json.loads(path.read_text(encoding='utf-8'))
        cleaned = _strip_comment_fields(raw)
        return cls(**cleaned)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add JSON config file support.

        Priority order (highest to lowest):
        1. Environment variables
        2. JSON config file (if _json_config_file module variable is set)
        3. Default values
        """
        if _json_config_file is not None:
            json_source = JsonConfigSettingsSource(settings_cls, json_file=_json_config_file)
            return (init_settings, env_settings, json_source)
        return (init_settings, env_settings)


def get_settings(config_path: Path | str | None = None, *, _force_reload: bool = False) -> Settings:
    """Load settings from optional JSON config file and environment variables.

    Implements singleton pattern - returns cached settings unless _force_reload=True
    or config_path is provided.

    Args:
        config_path: Optional path to JSON config file. If provided, bypasses cache.
        _force_reload: If True, bypasses cache and creates fresh Settings instance

    Returns:
        Settings instance with merged configuration
    """
    global _json_config_file, _settings_cache

    if _settings_cache is not None and not _force_reload and config_path is None:
        return _settings_cache

    if config_path:
        _json_config_file = Path(config_path)
        try:
            settings = Settings()
        finally:
            _json_config_file = None  # Reset after use
    else:
        settings = Settings()

    # Cache the settings if no config_path was provided
    if config_path is None:
        _settings_cache = settings

    return settings
