import logging
from pathlib import Path

from PySide6.QtCore import QTimer, QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QFileDialog, QMessageBox

from inappbrowser.browser.errors import ChooserLaunchError, RouteLaunchError
from inappbrowser.browser.events import ChooserResult, PermissionsResult
from inappbrowser.browser.intents import ACTION_GET_CONTENT
from inappbrowser_qt.constants import FILE_DIALOG_TITLE, PERMISSION_DIALOG_TITLE
from inappbrowser_qt.webview_utils import describe_permissions, file_dialog_filter

logger = logging.getLogger(__name__)

FALLBACK_URL_EXTRA = "browser_fallback_url"


class QtPermissionSystem:
    """Desktop stand-in for OS permissions: prompts with a dialog and remembers grants."""

    def __init__(self, config, parent=None):
        self.config = config
        self.parent = parent
        self._dispatch = None

    def attach(self, dispatch):
        self._dispatch = dispatch

    def check_granted(self, permission):
        return permission in (self.config.get("granted_permissions") or [])

    def is_declared(self, permission):
        return permission in (self.config.get("declared_permissions") or [])

    def request_permissions(self, permissions, request_code):
        permissions = tuple(permissions)
        QTimer.singleShot(0, lambda: self._prompt(permissions, request_code))

    def _prompt(self, permissions, request_code):
        answer = QMessageBox.question(
            self.parent,
            PERMISSION_DIALOG_TITLE,
            f"Allow this page to use your {describe_permissions(permissions)}?",
            QMessageBox.Yes | QMessageBox.No,
        )
        granted = answer == QMessageBox.Yes
        if granted:
            remembered = list(self.config.get("granted_permissions") or [])
            remembered.extend(p for p in permissions if p not in remembered)
            self.config.set("granted_permissions", remembered)
        if self._dispatch is not None:
            self._dispatch(PermissionsResult(request_code, permissions, tuple(granted for _ in permissions)))


class QtIntentLauncher:
    """Hands external intents to the desktop and serves content picks with a file dialog."""

    def __init__(self, parent=None):
        self.parent = parent

    def start_external_activity(self, intent):
        candidates = [intent.data, (intent.extras or {}).get(FALLBACK_URL_EXTRA)]
        for uri in candidates:
            if uri and QDesktopServices.openUrl(QUrl(uri)):
                return True
        raise RouteLaunchError(f"No application can handle {intent.data or intent.action}")

    def launch_for_result(self, intent, on_result):
        target = intent.target if intent.is_chooser and intent.target is not None else intent
        if target.action != ACTION_GET_CONTENT:
            # No capture applications on the desktop.
            raise ChooserLaunchError(f"Unsupported chooser action: {target.action}")
        QTimer.singleShot(0, lambda: self._pick_files(target, on_result))

    def _pick_files(self, intent, on_result):
        try:
            paths, _ = QFileDialog.getOpenFileNames(
                self.parent,
                FILE_DIALOG_TITLE,
                "",
                file_dialog_filter(intent.mime_type),
            )
        except Exception as exc:
            logger.debug("File dialog failed: %s", exc)
            paths = []
        uris = tuple(Path(path).resolve().as_uri() for path in paths or ())
        on_result(ChooserResult(ok=bool(uris), uris=uris))


__all__ = ["QtIntentLauncher", "QtPermissionSystem"]
