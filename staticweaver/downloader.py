"""
Template Downloader - Fetches template bundles over HTTP.

Each file of the bundle is requested once with a fixed timeout. Failures
surface immediately as EngineError subclasses; retrying is left to callers.
"""

import logging
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

import requests

from .config.constants import DOWNLOAD_TIMEOUT, TEMPLATE_BUNDLE_FILES
from .errors import DownloadTimeoutError, RenderError, RequestError, TemplateIOError

logger = logging.getLogger(__name__)


class TemplateDownloader:
    """
    Downloads template bundles into a local directory.

    Example:
        >>> downloader = TemplateDownloader()
        >>> template_dir = downloader.download_bundle(
        ...     "https://example.com/templates/"
        ... )
        >>> print(f"Templates in: {template_dir}")
    """

    def __init__(
        self,
        files: Optional[List[str]] = None,
        timeout: float = DOWNLOAD_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Initialize downloader.

        Args:
            files: Bundle file names (defaults to TEMPLATE_BUNDLE_FILES)
            timeout: Per-request timeout in seconds
            headers: Custom HTTP headers
        """
        self.files = list(files) if files is not None else list(TEMPLATE_BUNDLE_FILES)
        self.timeout = timeout
        self.headers = headers or {}

    def download_bundle(
        self,
        url: str,
        target_dir: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Download every bundle file from url.

        Args:
            url: Base URL of the bundle
            target_dir: Destination directory (a new temp dir if None)

        Returns:
            Directory holding the downloaded files
        """
        if target_dir is None:
            target = Path(tempfile.mkdtemp(prefix="staticweaver-"))
        else:
            target = Path(target_dir)
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise TemplateIOError(f"Cannot create {target}: {e}") from e

        logger.info(f"Downloading {len(self.files)} template files from {url}")
        for name in self.files:
            self.download_file(url, name, target)

        return target

    def download_file(self, url: str, name: str, target_dir: Union[str, Path]) -> Path:
        """
        Download a single file of the bundle.

        Args:
            url: Base URL of the bundle
            name: File name appended to url
            target_dir: Directory to write into

        Returns:
            Path to saved file

        Raises:
            DownloadTimeoutError: If the request times out
            RequestError: On any other transport failure
            RenderError: If the server answers with a non-success status
            TemplateIOError: If the file cannot be written
        """
        file_url = f"{url.rstrip('/')}/{name}"
        output_path = Path(target_dir) / name

        try:
            response = requests.get(file_url, headers=self.headers, timeout=self.timeout)
        except requests.Timeout as e:
            raise DownloadTimeoutError(f"Fetching {file_url}: {e}") from e
        except requests.RequestException as e:
            raise RequestError(str(e)) from e

        if not response.ok:
            raise RenderError(f"Failed to download {name}: HTTP {response.status_code}")

        try:
            output_path.write_bytes(response.content)
        except OSError as e:
            raise TemplateIOError(f"Cannot write {output_path}: {e}") from e

        logger.info(f"Downloaded: {file_url} → {output_path}")
        logger.debug(f"   Size: {len(response.content)} bytes")
        return output_path
