"""Download the pdf.js viewer used for cached PDFs into inappbrowser_qt/pdfjs."""

import io
import os
import sys
import zipfile

import requests

from inappbrowser.constants import HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC
from inappbrowser_qt.constants import PDFJS_DIST_URL
from inappbrowser_qt.pdf_viewer import BUNDLED_PDFJS_DIR, find_pdfjs_viewer


def extract_viewer(archive_bytes, target_dir):
    os.makedirs(target_dir, exist_ok=True)
    root = os.path.realpath(target_dir)
    with zipfile.ZipFile(io.BytesIO(archive_bytes)) as archive:
        for member in archive.namelist():
            destination = os.path.realpath(os.path.join(root, member))
            if os.path.commonpath([root, destination]) != root:
                raise ValueError(f"Archive member escapes target directory: {member}")
        archive.extractall(root)
    return find_pdfjs_viewer([root])


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    target_dir = argv[0] if argv else BUNDLED_PDFJS_DIR
    existing = find_pdfjs_viewer([target_dir])
    if existing:
        print(f"pdf.js already installed: {existing}")
        return 0

    print(f"Downloading {PDFJS_DIST_URL}")
    try:
        response = requests.get(PDFJS_DIST_URL, timeout=(HTTP_CONNECT_TIMEOUT_SEC, HTTP_READ_TIMEOUT_SEC))
        response.raise_for_status()
    except requests.RequestException as exc:
        print(f"Failed to download pdf.js: {exc}")
        return 1

    viewer = extract_viewer(response.content, target_dir)
    if viewer is None:
        print("Archive did not contain web/viewer.html")
        return 1
    print(f"pdf.js viewer installed: {viewer}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
