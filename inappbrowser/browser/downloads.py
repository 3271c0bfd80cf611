import logging
import os
import time
from dataclasses import dataclass

import requests

from inappbrowser.browser.content_probe import normalize_content_type
from inappbrowser.browser.errors import BrowserDownloadError
from inappbrowser.constants import (
    DOWNLOAD_CHUNK_BYTES,
    HTTP_CONNECT_TIMEOUT_SEC,
    HTTP_READ_TIMEOUT_SEC,
    PDF_SCRATCH_PREFIX,
    PDF_SCRATCH_SUFFIX,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadResult:
    url: str
    local_path: str
    size_bytes: int
    content_type: str | None = None
    status_code: int | None = None


class PdfCache:
    """Streams confirmed PDFs into the scratch directory for the viewer."""

    def __init__(
        self,
        cache_dir: str,
        session=None,
        timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC),
    ):
        self.cache_dir = cache_dir
        self.session = session or requests.Session()
        self.timeout = timeout

    def _open_target(self):
        os.makedirs(self.cache_dir, exist_ok=True)
        stamp = time.time_ns()
        while True:
            path = os.path.join(self.cache_dir, f"{PDF_SCRATCH_PREFIX}{stamp}{PDF_SCRATCH_SUFFIX}")
            try:
                return path, open(path, "xb")
            except FileExistsError:
                stamp += 1

    def download(self, url: str) -> DownloadResult:
        try:
            response = self.session.get(url, allow_redirects=True, timeout=self.timeout, stream=True)
        except requests.RequestException as exc:
            raise BrowserDownloadError(f"Download failed: {exc}") from exc

        target_path = None
        size = 0
        with response:
            try:
                response.raise_for_status()
                target_path, handle = self._open_target()
                with handle:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
                        if chunk:
                            handle.write(chunk)
                            size += len(chunk)
            except (requests.RequestException, OSError) as exc:
                self.discard(target_path)
                raise BrowserDownloadError(f"Download failed: {exc}") from exc

            logger.debug("Cached PDF %s (%d bytes) at %s", url, size, target_path)
            return DownloadResult(
                url=url,
                local_path=target_path,
                size_bytes=size,
                content_type=normalize_content_type(response.headers.get("Content-Type")) or None,
                status_code=response.status_code,
            )

    @staticmethod
    def discard(path: str | None) -> None:
        if path and os.path.isfile(path):
            try:
                os.remove(path)
            except OSError as exc:
                logger.debug("Could not delete scratch PDF %s: %s", path, exc)


__all__ = ["DownloadResult", "PdfCache"]
