"""
Lifeline - first-aid assistant LLM dispatcher

Routes a prompt to the user's preferred LLM provider (Google Gemini,
DeepSeek or OpenAI) and returns the generated text.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("lifeline")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Lifeline Contributors"

from lifeline.api import Dispatcher, LifelineAPIError, create_dispatcher  # noqa: E402
from lifeline.config import Settings  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "Dispatcher",
    "LifelineAPIError",
    "Settings",
    "create_dispatcher",
]
