"""
Configuration module for Lifeline.

Uses pydantic-settings for environment variable loading.
"""

from lifeline.config.settings import Settings
from lifeline.config.sources import ConfigFileError

__all__ = ["ConfigFileError", "Settings"]
