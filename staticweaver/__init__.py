"""
StaticWeaver - delimiter-based template rendering with an expiring page cache.

Renders ``{{key}}`` style templates from a key-value Context in a single
pass and memoizes rendered pages behind a TTL and capacity bounded cache.
"""

__version__ = "0.1.0"
__author__ = "StaticWeaver Team"

from .cache import ExpiringCache
from .config.settings import Config
from .context import Context
from .engine import Engine, PageOptions
from .errors import (
    DownloadTimeoutError,
    EngineError,
    InvalidTemplateError,
    RenderError,
    RequestError,
    ResourceNotFoundError,
    TemplateIOError,
)
from .main import main

__all__ = [
    "main",
    "Config",
    "Context",
    "Engine",
    "ExpiringCache",
    "PageOptions",
    "EngineError",
    "TemplateIOError",
    "ResourceNotFoundError",
    "RequestError",
    "DownloadTimeoutError",
    "RenderError",
    "InvalidTemplateError",
]
