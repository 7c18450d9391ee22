"""
Credential stores for provider API keys.

A credential store maps a provider's credential key (e.g. "gemini") to an
API key. Two stores are provided:

- StorageCredentialStore: keys kept in the preferences storage as
  ``api_key_<name>`` items.
- JsonCredentialStore: keys read from a JSON file such as
  ``{"gemini": "...", "openai": "..."}``.

The environment fallback (VITE_<NAME>_API_KEY) is applied by the
preference store, not here.
"""

from __future__ import annotations

import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing

import lifeline.constants as _constants

if _typing.TYPE_CHECKING:
    import lifeline.preferences.storage as storage


class CredentialStore(_typing.Protocol):
    """Anything that can look up an API key by name."""

    def get_api_key(self, name: str) -> str | None: ...


def credential_env_var(name: str, prefix: str = _constants.CREDENTIAL_ENV_PREFIX) -> str:
    """
    Name of the environment variable holding the fallback key for name.

    Example:
        >>> credential_env_var("gemini")
        'VITE_GEMINI_API_KEY'
    """
    return f"{prefix}{name.upper()}_API_KEY"


def load_credentials_from_path(path: str) -> dict[str, _typing.Any]:
    """
    Load credentials from a JSON file.

    Args:
        path: Path to credentials JSON file. Supports ~ and $VAR expansion.

    Returns:
        Dict containing credentials (e.g., {"gemini": "..."}).

    Raises:
        ValueError: If file cannot be read or parsed.

    Example:
        >>> creds = load_credentials_from_path("~/.config/lifeline/credentials.json")
        >>> api_key = creds.get("gemini")
    """
    # Expand ~ and environment variables
    expanded_path = _os.path.expandvars(_os.path.expanduser(path))
    creds_path = _pathlib.Path(expanded_path)

    if not creds_path.exists():
        raise ValueError(f"Credentials file not found: {expanded_path}")

    try:
        content = creds_path.read_text(encoding="utf-8")
        credentials = _json.loads(content)
        if not isinstance(credentials, dict):
            raise ValueError(
                f"Credentials file must contain a JSON object: {expanded_path}"
            )
        return credentials
    except PermissionError as e:
        raise ValueError(
            f"Permission denied reading credentials file: {expanded_path}"
        ) from e
    except _json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in credentials file {expanded_path}: {e}"
        ) from e


class JsonCredentialStore:
    """
    Credential store backed by a JSON file.

    The file is re-read on every lookup so edits take effect without a
    restart. Values that are not strings are ignored.
    """

    def __init__(self, path: str | _pathlib.Path) -> None:
        self._path = str(path)

    @property
    def path(self) -> str:
        return self._path

    def get_api_key(self, name: str) -> str | None:
        value = load_credentials_from_path(self._path).get(name)
        return value if isinstance(value, str) else None


class StorageCredentialStore:
    """Credential store that keeps API keys in a key-value storage."""

    def __init__(self, storage: storage.KeyValueStore) -> None:
        self._storage = storage

    @staticmethod
    def storage_key(name: str) -> str:
        return f"{_constants.API_KEY_STORAGE_PREFIX}{name}"

    def get_api_key(self, name: str) -> str | None:
        return self._storage.get_item(self.storage_key(name))

    def set_api_key(self, name: str, api_key: str) -> None:
        self._storage.set_item(self.storage_key(name), api_key)
