"""Configuration type definitions for Lifeline settings.

This module defines the Pydantic models used to represent configuration
sections nested within the main Settings class:

- PreferencesConfig: where the selected provider is persisted
- CredentialsConfig: API key file and environment fallback prefix
- HttpConfig: transport settings
- LoggingConfig: log level

All types use `extra="allow"` to preserve unknown fields, so typos in a
config file can be reported instead of silently dropped.
"""

import typing as _typing

import pydantic as _pydantic

import lifeline.constants as _constants

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    Unknown fields are preserved rather than silently dropped.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}

    def collect_all_extra_fields(
        self,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Recursively collect extra fields from this config and nested configs.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"http.timout": 30}
        """
        result: dict[str, _typing.Any] = {}

        for key, value in self.get_extra_fields().items():
            path = f"{prefix}.{key}" if prefix else key
            result[path] = value

        for field_name in self.__class__.model_fields:
            value = getattr(self, field_name, None)
            if isinstance(value, ConfigBase):
                child_prefix = f"{prefix}.{field_name}" if prefix else field_name
                result.update(value.collect_all_extra_fields(child_prefix))

        return result


# =============================================================================
# Preferences
# =============================================================================


class PreferencesConfig(ConfigBase):
    """
    Preference storage settings.

    YAML section: preferences.*
    """

    file: str | None = None
    """Preferences JSON file. None = <config dir>/preferences.json."""


# =============================================================================
# Credentials
# =============================================================================


class CredentialsConfig(ConfigBase):
    """
    API key lookup settings.

    YAML section: credentials.*
    """

    file: str | None = None
    """JSON file mapping credential names to keys. None = use preferences storage."""

    env_prefix: str = _constants.CREDENTIAL_ENV_PREFIX
    """Prefix of fallback environment variables (<prefix><NAME>_API_KEY)."""


# =============================================================================
# HTTP
# =============================================================================


class HttpConfig(ConfigBase):
    """
    Transport settings.

    YAML section: http.*
    """

    timeout: float = _pydantic.Field(default=_constants.DEFAULT_HTTP_TIMEOUT, gt=0)
    """Request timeout in seconds."""


# =============================================================================
# Logging
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level."""
