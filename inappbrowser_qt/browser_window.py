import logging
import os
from uuid import uuid4

from PySide6.QtCore import QEvent, Qt, QThreadPool
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWebEngineCore import QWebEnginePage, QWebEngineSettings
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QLabel, QMainWindow, QPushButton, QStackedWidget, QVBoxLayout, QWidget

from inappbrowser.browser import BrowserController, EventBus
from inappbrowser.browser.navigation import ScreenState
from inappbrowser.constants import APP_NAME
from inappbrowser.infra.scratch_store import ScratchStorage
from inappbrowser_qt.browser_page import BrowserPage, QtRenderer
from inappbrowser_qt.constants import (
    BROWSER_ID_ENV,
    ERROR_RELOAD_TEXT,
    ERROR_TITLE_TEXT,
    LOADING_TEXT,
    QT_THREAD_POOL_MAX_WORKERS,
    QT_WINDOW_DEFAULT_SIZE,
)
from inappbrowser_qt.helpers.worker_manager import WorkerManager
from inappbrowser_qt.pdf_viewer import resolve_pdf_viewer_prefix
from inappbrowser_qt.platform import QtIntentLauncher, QtPermissionSystem

logger = logging.getLogger(__name__)


class BrowserWindow(QMainWindow):
    def __init__(self, config, event_bus=None, browser_id=None):
        super().__init__()
        self.config = config
        self.event_bus = event_bus or EventBus()
        self.browser_id = browser_id or os.getenv(BROWSER_ID_ENV) or f"browser-{uuid4().hex[:10]}"
        self.setWindowTitle(APP_NAME)
        self.resize(*QT_WINDOW_DEFAULT_SIZE)

        self.thread_pool = QThreadPool(self)
        self.thread_pool.setMaxThreadCount(QT_THREAD_POOL_MAX_WORKERS)
        self.workers = WorkerManager(self.thread_pool)
        self.storage = ScratchStorage(
            cache_dir=config.get("scratch_dir"),
            authority=config.get("file_provider_authority"),
        )
        self.pdf_viewer_prefix = resolve_pdf_viewer_prefix(config)

        self.view = QWebEngineView()
        self.page = BrowserPage(resolve_uri=self.storage.resolve_content_uri, parent=self.view)
        self.view.setPage(self.page)
        self._apply_settings()

        self.permission_system = QtPermissionSystem(config, parent=self)
        self.controller = BrowserController(
            browser_id=self.browser_id,
            renderer=QtRenderer(self.view),
            permission_system=self.permission_system,
            launcher=QtIntentLauncher(parent=self),
            storage=self.storage,
            event_bus=self.event_bus,
            task_runner=self.workers,
            config=config,
            on_screen_changed=self._on_screen_changed,
            pdf_viewer_prefix=self.pdf_viewer_prefix,
        )
        self.page.attach(self.controller.dispatch)
        self.permission_system.attach(self.controller.dispatch)

        self.stack = QStackedWidget()
        self.loading_view = QLabel(LOADING_TEXT)
        self.loading_view.setAlignment(Qt.AlignCenter)
        self.error_view = self._build_error_view()
        self.stack.addWidget(self.view)
        self.stack.addWidget(self.loading_view)
        self.stack.addWidget(self.error_view)
        self.setCentralWidget(self.stack)

        QShortcut(QKeySequence(QKeySequence.Back), self, activated=self._on_back_requested)
        QShortcut(QKeySequence(QKeySequence.Forward), self, activated=self.controller.go_forward)

    def open(self, url, headers=None):
        self.controller.open(url, headers)

    def _apply_settings(self):
        profile = self.page.profile()
        user_agent = (self.config.get("custom_user_agent") or "").strip()
        if user_agent:
            profile.setHttpUserAgent(user_agent)
        if self.config.get("clear_cache"):
            profile.clearHttpCache()
            profile.cookieStore().deleteAllCookies()
        elif self.config.get("clear_session_cache"):
            profile.cookieStore().deleteSessionCookies()
        if not self.config.get("allow_zoom", True):
            self.page.loadFinished.connect(lambda _ok: self.page.setZoomFactor(1.0))
        settings = self.view.settings()
        settings.setAttribute(QWebEngineSettings.JavascriptEnabled, True)
        settings.setAttribute(QWebEngineSettings.LocalStorageEnabled, True)
        settings.setAttribute(QWebEngineSettings.LocalContentCanAccessFileUrls, True)
        settings.setAttribute(
            QWebEngineSettings.PlaybackRequiresUserGesture,
            bool(self.config.get("media_playback_requires_user_action")),
        )
        if not self.pdf_viewer_prefix:
            settings.setAttribute(QWebEngineSettings.PluginsEnabled, True)
            settings.setAttribute(QWebEngineSettings.PdfViewerEnabled, True)

    def _build_error_view(self):
        container = QWidget()
        layout = QVBoxLayout(container)
        layout.addStretch(1)
        message = QLabel(ERROR_TITLE_TEXT)
        message.setAlignment(Qt.AlignCenter)
        layout.addWidget(message)
        reload_btn = QPushButton(ERROR_RELOAD_TEXT)
        reload_btn.setObjectName("primaryButton")
        reload_btn.clicked.connect(self.controller.reload)
        layout.addWidget(reload_btn, 0, Qt.AlignHCenter)
        layout.addStretch(1)
        return container

    def _on_screen_changed(self, state):
        if state == ScreenState.LOADING:
            self.stack.setCurrentWidget(self.loading_view)
        elif state == ScreenState.ERROR:
            self.stack.setCurrentWidget(self.error_view)
        else:
            self.stack.setCurrentWidget(self.view)

    def _on_back_requested(self):
        if self.controller.back_navigation_enabled():
            self.controller.go_back()
            return
        self.close()

    def changeEvent(self, event):
        if event.type() == QEvent.Type.WindowStateChange and self.config.get("pause_media", True):
            state = (
                QWebEnginePage.LifecycleState.Frozen
                if self.isMinimized()
                else QWebEnginePage.LifecycleState.Active
            )
            if self.page.lifecycleState() != state:
                self.page.setLifecycleState(state)
        super().changeEvent(event)

    def closeEvent(self, event):
        self.controller.close()
        self.workers.shutdown()
        super().closeEvent(event)


__all__ = ["BrowserWindow"]
