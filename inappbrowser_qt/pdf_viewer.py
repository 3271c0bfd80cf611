import logging
import os
from pathlib import Path

from inappbrowser.constants import PDF_VIEWER_FILE_QUERY, PDFJS_VIEWER_PATH
from inappbrowser_qt.constants import PDFJS_DIR_ENV

logger = logging.getLogger(__name__)

BUNDLED_PDFJS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "pdfjs")


def find_pdfjs_viewer(candidates):
    """First ``viewer.html`` found under the candidate pdf.js directories."""
    for base in candidates:
        if not base:
            continue
        for path in (os.path.join(base, *PDFJS_VIEWER_PATH), os.path.join(base, PDFJS_VIEWER_PATH[-1])):
            if os.path.isfile(path):
                return path
    return None


def resolve_pdf_viewer_prefix(config, environ=None) -> str:
    """Viewer prefix for cached PDFs; empty when the built-in Chromium viewer must be used.

    An explicit ``pdf_viewer_url_prefix`` option wins. Otherwise pdf.js is looked
    up in the ``pdfjs_dir`` option, the INAPPBROWSER_PDFJS_DIR environment
    variable and the copy installed by ``fetch_pdfjs.py``.
    """
    configured = (config.get("pdf_viewer_url_prefix") or "").strip()
    if configured:
        return configured

    environ = os.environ if environ is None else environ
    viewer = find_pdfjs_viewer([config.get("pdfjs_dir"), environ.get(PDFJS_DIR_ENV), BUNDLED_PDFJS_DIR])
    if viewer is None:
        logger.info("pdf.js not found; PDFs open in the built-in viewer")
        return ""
    return Path(viewer).resolve().as_uri() + PDF_VIEWER_FILE_QUERY


__all__ = ["BUNDLED_PDFJS_DIR", "find_pdfjs_viewer", "resolve_pdf_viewer_prefix"]
