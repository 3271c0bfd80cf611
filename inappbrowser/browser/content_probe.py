import logging

import requests

from inappbrowser.browser.errors import BrowserProbeError
from inappbrowser.constants import HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC, PDF_MIME_TYPE

logger = logging.getLogger(__name__)

FIRST_BYTE_RANGE = "bytes=0-0"


def normalize_content_type(value: str | None) -> str:
    return (value or "").split(";", 1)[0].strip().lower()


class ContentTypeProbe:
    """Detects whether a URL serves a PDF without downloading its body.

    A HEAD request is tried first. Servers that do not implement HEAD or only
    report the real type for GET get a second chance through a one-byte ranged
    GET. Any failure counts as "not a PDF" so the page still loads normally.
    """

    def __init__(self, session=None, timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC)):
        self.session = session or requests.Session()
        self.timeout = timeout

    def probe(self, url: str) -> bool:
        for method in ("HEAD", "GET"):
            try:
                if self.check_by_request(url, method):
                    return True
            except BrowserProbeError as exc:
                logger.debug("PDF probe %s failed for %s: %s", method, url, exc)
            except Exception:
                logger.exception("Unexpected PDF probe failure for %s", url)
        return False

    def check_by_request(self, url: str, method: str) -> bool:
        headers = {"Range": FIRST_BYTE_RANGE} if method == "GET" else {}
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                allow_redirects=True,
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as exc:
            raise BrowserProbeError(f"{method} request failed: {exc}") from exc

        with response:
            content_type = normalize_content_type(response.headers.get("Content-Type"))
            if content_type == PDF_MIME_TYPE:
                return True
            disposition = (response.headers.get("Content-Disposition") or "").lower()
            return not content_type and ".pdf" in disposition


__all__ = ["ContentTypeProbe", "normalize_content_type"]
