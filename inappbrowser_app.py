import faulthandler
import logging
import sys

faulthandler.enable()  # Dump traceback on segfault/crash to stderr

try:
    from PySide6.QtWidgets import QApplication
except ImportError as exc:
    print("PySide6 is required. Install with: pip install PySide6")
    raise

from inappbrowser.browser import BrowserFeatureUnavailableError, require_browser_runtime
from inappbrowser.constants import APP_NAME
from inappbrowser.infra.config_store import Config
from inappbrowser_qt.browser_window import BrowserWindow
from inappbrowser_qt.constants import DEFAULT_START_URL


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        require_browser_runtime()
    except BrowserFeatureUnavailableError as exc:
        print(exc)
        return 1

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    config = Config()
    if config.load_error:
        logging.getLogger(__name__).warning("Using default options: %s", config.load_error)
    window = BrowserWindow(config=config)
    window.show()
    window.open(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_START_URL)
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
