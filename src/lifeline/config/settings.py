"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with LIFELINE_ prefix
3. .env file (if LIFELINE_ENV_FILE points to one)
4. Layered YAML config files:
   - Project config: .lifeline/config.yaml (highest)
   - User config: ~/.config/lifeline/config.yaml
   - Built-in defaults: bundled defaults/config.yaml (lowest)

Nested config uses double underscore delimiter:
  LIFELINE_HTTP__TIMEOUT=30
  LIFELINE_CREDENTIALS__FILE=~/.config/lifeline/credentials.json
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import lifeline.config.sources as sources
import lifeline.config.types as types


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only LIFELINE_ENV_FILE is honoured; without it, configuration comes from
    environment variables and YAML files alone.
    """
    if env_file := _os.environ.get("LIFELINE_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    Lifeline configuration settings.

    All settings can be overridden via environment variables with LIFELINE_ prefix.
    For nested config, use double underscore: LIFELINE_HTTP__TIMEOUT=30
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="LIFELINE_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # LIFELINE_HTTP__TIMEOUT
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (LIFELINE_* env vars)
        3. dotenv_settings (.env file)
        4. YAML config files
        5. defaults via Field definitions, lowest
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.YamlSettingsSource(settings_cls, _pathlib.Path.cwd()),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings without loading any .env file.

        Useful for test isolation and for reproducing issues without .env
        interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Nested config sections
    # =========================================================================

    preferences: types.PreferencesConfig = _pydantic.Field(
        default_factory=types.PreferencesConfig
    )
    """Where the selected provider is stored."""

    credentials: types.CredentialsConfig = _pydantic.Field(
        default_factory=types.CredentialsConfig
    )
    """API key file and environment fallback."""

    http: types.HttpConfig = _pydantic.Field(default_factory=types.HttpConfig)
    """Transport settings."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    # =========================================================================
    # Directory settings (computed at runtime)
    # =========================================================================

    @property
    def config_dir(self) -> _pathlib.Path:
        """User configuration directory (~/.config/lifeline/)."""
        return sources.get_user_config_dir()

    @property
    def preferences_path(self) -> _pathlib.Path:
        """Preferences JSON file."""
        if self.preferences.file:
            return _pathlib.Path(_os.path.expanduser(self.preferences.file))
        return self.config_dir / "preferences.json"

    # =========================================================================
    # Introspection
    # =========================================================================

    def collect_all_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Collect unknown fields from Settings and nested configs.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"http.timout": 30, "colour": "blue"}
        """
        result: dict[str, _typing.Any] = dict(self.model_extra) if self.model_extra else {}
        for field_name in ["preferences", "credentials", "http", "logging"]:
            nested = getattr(self, field_name)
            result.update(nested.collect_all_extra_fields(prefix=field_name))
        return result

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert settings to dictionary (for JSON output)."""
        return {
            "config_dir": str(self.config_dir),
            "preferences_file": str(self.preferences_path),
            "credentials_file": self.credentials.file,
            "credentials_env_prefix": self.credentials.env_prefix,
            "http_timeout": self.http.timeout,
            "log_level": self.logging.level,
        }
