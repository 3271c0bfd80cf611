import logging
import os
import re
import tempfile
from datetime import datetime
from pathlib import Path
from urllib.parse import quote, unquote, urlparse

from inappbrowser.constants import APP_ID, FILE_PROVIDER_SUFFIX, SCRATCH_TIMESTAMP_FORMAT
from inappbrowser.errors import ValidationError
from inappbrowser.paths import SCRATCH_DIR

logger = logging.getLogger(__name__)

CONTENT_SCHEME = "content"
CACHE_PATH_SEGMENT = "cache"
_DRIVE_PATH = re.compile(r"^/[A-Za-z]:")


def local_path_from_file_uri(uri: str) -> str:
    """Local path for a file URI, keeping drive letters and UNC hosts intact."""
    parsed = urlparse(uri)
    path = unquote(parsed.path)
    if _DRIVE_PATH.match(path):
        return path[1:]
    if parsed.netloc and parsed.netloc.lower() != "localhost":
        return f"//{parsed.netloc}{path}"
    return path


class ScratchStorage:
    """Local scratch directory with content-provider style references to its files."""

    def __init__(self, cache_dir: str | None = None, authority: str | None = None):
        self.cache_dir = cache_dir or SCRATCH_DIR
        self.authority = authority or f"{APP_ID}{FILE_PROVIDER_SUFFIX}"
        os.makedirs(self.cache_dir, exist_ok=True)

    def create_unique_file(self, prefix: str, suffix: str) -> str:
        timestamp = datetime.now().strftime(SCRATCH_TIMESTAMP_FORMAT)
        fd, path = tempfile.mkstemp(prefix=f"{prefix}{timestamp}_", suffix=suffix, dir=self.cache_dir)
        os.close(fd)
        return path

    def content_uri_for(self, path: str) -> str:
        name = os.path.basename(path)
        if os.path.dirname(os.path.abspath(path)) != os.path.abspath(self.cache_dir):
            raise ValidationError(f"File is outside the scratch directory: {path}")
        return f"{CONTENT_SCHEME}://{self.authority}/{CACHE_PATH_SEGMENT}/{quote(name)}"

    def resolve_content_uri(self, uri: str) -> str | None:
        parsed = urlparse(uri or "")
        if parsed.scheme == "file":
            return local_path_from_file_uri(uri)
        if parsed.scheme != CONTENT_SCHEME or parsed.netloc != self.authority:
            return None
        segment, _, name = parsed.path.lstrip("/").partition("/")
        decoded = unquote(name)
        if segment != CACHE_PATH_SEGMENT or decoded in ("", ".", ".."):
            return None
        if os.path.basename(decoded) != decoded:
            return None
        return os.path.join(self.cache_dir, decoded)

    @staticmethod
    def file_size(path: str | None) -> int:
        if not path:
            return 0
        try:
            return os.path.getsize(path)
        except OSError:
            return 0

    @staticmethod
    def local_file_uri(path: str) -> str:
        return Path(path).resolve().as_uri()

    @staticmethod
    def discard(path: str | None) -> None:
        if path and os.path.isfile(path):
            try:
                os.remove(path)
            except OSError as exc:
                logger.debug("Could not delete scratch file %s: %s", path, exc)
