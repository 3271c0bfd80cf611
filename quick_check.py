import subprocess
import sys
from pathlib import Path


ROOT = Path(__file__).resolve().parent
PY_FILES = [
    "inappbrowser_app.py",
    "inappbrowser/paths.py",
    "inappbrowser/constants.py",
    "inappbrowser/errors.py",
    "inappbrowser/infra/config_store.py",
    "inappbrowser/infra/scratch_store.py",
    "inappbrowser/browser/content_probe.py",
    "inappbrowser/browser/downloads.py",
    "inappbrowser/browser/routing.py",
    "inappbrowser/browser/permissions.py",
    "inappbrowser/browser/file_chooser.py",
    "inappbrowser/browser/navigation.py",
    "inappbrowser/browser/host.py",
    "inappbrowser_qt/pdf_viewer.py",
    "fetch_pdfjs.py",
    "inappbrowser_qt/browser_page.py",
    "inappbrowser_qt/browser_window.py",
    "inappbrowser_qt/platform.py",
]


def run(cmd):
    print("> " + " ".join(cmd))
    result = subprocess.run(cmd, cwd=ROOT)
    if result.returncode != 0:
        raise SystemExit(result.returncode)


def main():
    run([sys.executable, "-m", "py_compile", *PY_FILES])
    run([sys.executable, "-c", "import inappbrowser, inappbrowser_app; print('imports ok')"])
    run([sys.executable, "-m", "pytest", "-q"])
    print("All automated checks passed.")


if __name__ == "__main__":
    main()
