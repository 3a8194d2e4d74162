"""
Rendering engine for StaticWeaver.

Substitutes delimiter-bounded tags with context values in a single
left-to-right pass and caches rendered pages per (layout, context).
"""

import logging
from datetime import timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Union

from .cache import ExpiringCache
from .config.constants import (
    DEFAULT_CACHE_TTL,
    DEFAULT_CLOSE_DELIM,
    DEFAULT_OPEN_DELIM,
    DEFAULT_TEMPLATE_URL,
    TEMPLATE_EXTENSION,
)
from .context import Context
from .downloader import TemplateDownloader
from .errors import (
    InvalidTemplateError,
    RenderError,
    ResourceNotFoundError,
    TemplateIOError,
)

if TYPE_CHECKING:
    from .config.settings import Config

logger = logging.getLogger(__name__)


def is_url(path: str) -> bool:
    """Check whether path is an http(s) URL."""
    return path.startswith("http://") or path.startswith("https://")


class PageOptions:
    """Page-level string options (title, description, ...)."""

    def __init__(self, elements: Optional[Mapping[str, str]] = None):
        self.elements: Dict[str, str] = dict(elements) if elements else {}

    def set(self, key: str, value: str) -> None:
        self.elements[key] = value

    def get(self, key: str) -> Optional[str]:
        return self.elements.get(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PageOptions):
            return NotImplemented
        return self.elements == other.elements

    def __repr__(self) -> str:
        return f"PageOptions({self.elements!r})"


class Engine:
    """
    Template engine with a per-instance render cache.

    Tags are written ``<open><key><close>`` (``{{name}}`` by default). The
    grammar is flat: no nesting, no escaping, and the key is matched
    against the context exactly, whitespace included.

    Example:
        engine = Engine("templates", timedelta(seconds=60))
        context = Context({"title": "Home"})
        html = engine.render_page(context, "index")

    Not thread-safe: guard a shared engine with a single lock.
    """

    def __init__(
        self,
        template_path: Union[str, Path] = "",
        cache_ttl: Union[timedelta, float, int] = DEFAULT_CACHE_TTL,
        cache_capacity: Optional[int] = None,
        downloader: Optional[TemplateDownloader] = None,
    ):
        """
        Initialize engine.

        Args:
            template_path: Directory holding ``<layout>.html`` files
            cache_ttl: Lifetime of rendered pages in the cache
            cache_capacity: Maximum number of cached pages (None for unbounded)
            downloader: Used by create_template_folder for remote bundles
        """
        self.template_path = str(template_path)
        self.render_cache: ExpiringCache[str, str] = ExpiringCache(cache_ttl, cache_capacity)
        self.open_delim = DEFAULT_OPEN_DELIM
        self.close_delim = DEFAULT_CLOSE_DELIM
        self.downloader = downloader or TemplateDownloader()

    @classmethod
    def from_config(cls, config: "Config") -> "Engine":
        """Build an engine from configuration settings."""
        engine = cls(
            config.template_path,
            timedelta(seconds=config.cache_ttl),
            cache_capacity=config.cache_capacity,
            downloader=TemplateDownloader(timeout=config.download_timeout),
        )
        engine.set_delimiters(config.open_delim, config.close_delim)
        return engine

    def render_page(self, context: Context, layout: str) -> str:
        """
        Render ``<template_path>/<layout>.html`` with context, using the cache.

        Cached pages are returned as-is until their TTL elapses; the file is
        not re-read on a hit.

        Args:
            context: Values to substitute
            layout: Template name without extension

        Returns:
            Rendered page

        Raises:
            TemplateIOError: If the template file cannot be read
            InvalidTemplateError: If the template is malformed
            RenderError: If a tag has no value in context
        """
        cache_key = f"{layout}:{context.hash()}"

        cached = self.render_cache.get(cache_key)
        if cached is not None:
            logger.debug(f"Cache hit: {cache_key}")
            return cached

        logger.debug(f"Cache miss: {cache_key}")
        template_file = Path(self.template_path) / f"{layout}{TEMPLATE_EXTENSION}"
        try:
            template = template_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateIOError(f"Cannot read template {template_file}: {e}") from e

        rendered = self.render_template(template, context)
        self.render_cache.insert(cache_key, rendered)
        return rendered

    def render_template(
        self,
        template: str,
        context: Union[Context, Mapping[str, str]],
    ) -> str:
        """
        Substitute every tag in template with its context value.

        Args:
            template: Raw template text
            context: Context or plain mapping of tag keys to values

        Returns:
            Rendered text

        Raises:
            InvalidTemplateError: Empty template, lone delimiter character,
                unclosed or nested tag
            RenderError: If a tag key is missing from context
        """
        values = context.elements if isinstance(context, Context) else context
        open_delim, close_delim = self.open_delim, self.close_delim

        if not template.strip():
            raise InvalidTemplateError("Template is empty")

        # Heuristic: a lone first delimiter character usually means a typo
        # such as {name} for {{name}}. Can reject legitimate literal braces.
        if open_delim[0] in template and open_delim not in template:
            raise InvalidTemplateError(
                f"Invalid template syntax: single '{open_delim[0]}' are not allowed"
            )

        parts = []
        last_end = 0

        while True:
            start = template.find(open_delim, last_end)
            if start == -1:
                break

            key_start = start + len(open_delim)
            end = template.find(close_delim, key_start)
            if end == -1:
                raise InvalidTemplateError("Unclosed template tag")

            # Another tag opening before this one closes
            if template.find(open_delim, key_start, end) != -1:
                raise InvalidTemplateError("Nested delimiters are not allowed")

            key = template[key_start:end]
            if key not in values:
                raise RenderError(f"Unresolved template tag: {key}")

            parts.append(template[last_end:start])
            parts.append(values[key])
            last_end = end + len(close_delim)

        parts.append(template[last_end:])
        return "".join(parts)

    def set_delimiters(self, open_delim: str, close_delim: str) -> None:
        """
        Replace both tag delimiters for subsequent renders.

        Already-cached pages are not affected.

        Raises:
            ValueError: If either delimiter is empty
        """
        if not open_delim or not close_delim:
            raise ValueError("Delimiters must be non-empty strings")
        self.open_delim = open_delim
        self.close_delim = close_delim

    def create_template_folder(self, template_path: Optional[str] = None) -> str:
        """
        Resolve a template directory.

        Args:
            template_path: URL of a bundle to download, a directory relative
                to the current working directory, or None for the default
                bundle URL

        Returns:
            Path of the directory holding the templates

        Raises:
            ResourceNotFoundError: If a local directory does not exist
            RequestError: If a download fails
        """
        if template_path is None:
            return str(self.downloader.download_bundle(DEFAULT_TEMPLATE_URL))

        if is_url(template_path):
            return str(self.downloader.download_bundle(template_path))

        local_path = Path.cwd() / template_path
        if not local_path.is_dir():
            raise ResourceNotFoundError(f"Template directory not found: {template_path}")
        return str(local_path)

    def clear_cache(self) -> None:
        self.render_cache.clear()
        logger.info("Cleared render cache")

    def set_max_cache_size(self, max_size: int) -> None:
        """Clear the whole render cache if it stores more than max_size pages."""
        if len(self.render_cache) > max_size:
            self.clear_cache()
