import logging

from inappbrowser.browser.content_probe import ContentTypeProbe
from inappbrowser.browser.downloads import PdfCache
from inappbrowser.browser.errors import BrowserDownloadError
from inappbrowser.browser.events import (
    BrowserFinished,
    ChooserResult,
    FileChooserRequested,
    GeolocationPromptRequested,
    LoadFailed,
    NavigationRequested,
    PageFinished,
    PageStarted,
    PermissionRequested,
    PermissionsResult,
)
from inappbrowser.browser.file_chooser import FileChooserCoordinator
from inappbrowser.browser.navigation import BrowserSession, NavigationController
from inappbrowser.browser.permissions import PermissionBroker
from inappbrowser.browser.routing import RouteKind, UrlRouter, validate_url
from inappbrowser.constants import CLEAR_WEB_STORAGE_JS, PDF_VIEWER_URL_PREFIX

logger = logging.getLogger(__name__)


class BrowserController:
    """Owns one browser session and routes renderer events to its components.

    Every method runs on the owner (UI) thread. PDF detection and download run
    through ``task_runner.submit(fn, on_result, on_error)``, which must call
    back on the owner thread.
    """

    def __init__(
        self,
        browser_id,
        renderer,
        permission_system,
        launcher,
        storage,
        event_bus,
        task_runner,
        config=None,
        probe=None,
        pdf_cache=None,
        on_screen_changed=None,
        pdf_viewer_prefix=None,
    ):
        self.browser_id = browser_id or ""
        self.renderer = renderer
        self.launcher = launcher
        self.storage = storage
        self.event_bus = event_bus
        self.task_runner = task_runner
        self.config = config
        self.probe = probe or ContentTypeProbe()
        self.pdf_cache = pdf_cache or PdfCache(storage.cache_dir)
        self.router = UrlRouter(launcher)
        self.broker = PermissionBroker(permission_system)
        self.file_chooser = FileChooserCoordinator(self.broker, launcher, storage)
        self.session = BrowserSession(browser_id=self.browser_id)
        self.navigation = NavigationController(
            self.session,
            event_bus,
            pdf_viewer_prefix=(
                pdf_viewer_prefix
                if pdf_viewer_prefix is not None
                else self._option("pdf_viewer_url_prefix", PDF_VIEWER_URL_PREFIX)
            ),
            on_screen_changed=on_screen_changed,
        )
        self._load_sequence = 0
        self._finished = False
        self._handlers = {
            PageStarted: lambda event: self.navigation.on_page_started(event.url),
            PageFinished: self._on_page_finished,
            LoadFailed: lambda event: self.navigation.on_received_error(event.code, event.url),
            NavigationRequested: lambda event: self.should_override_url_loading(event.url),
            PermissionRequested: lambda event: self.broker.request_standard(event.resources, event.callback),
            GeolocationPromptRequested: lambda event: self.broker.request_geolocation(event.origin, event.callback),
            FileChooserRequested: lambda event: self.file_chooser.open(
                event.accept_types, event.capture_enabled, event.callback
            ),
            PermissionsResult: lambda event: self.broker.on_permissions_result(
                event.request_code, event.permissions, event.grant_results
            ),
            ChooserResult: self.file_chooser.on_activity_result,
        }

    def _option(self, key, default=None):
        if self.config is None:
            return default
        return self.config.get(key, default)

    def dispatch(self, event):
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported renderer event: {type(event).__name__}")
        return handler(event)

    def open(self, url: str, headers: dict | None = None) -> None:
        safe_url = validate_url(url)
        self.handle_load_url(safe_url, headers)
        self.navigation.show_loading()

    def handle_load_url(self, url: str, headers: dict | None = None) -> int:
        self._load_sequence += 1
        sequence = self._load_sequence

        self.task_runner.submit(
            lambda: self._fetch_pdf(url),
            lambda result: self._on_pdf_resolved(sequence, url, headers, result),
            lambda error: self._on_pdf_failed(sequence, url, headers, error),
        )
        return sequence

    def _fetch_pdf(self, url: str):
        """Runs off the owner thread."""
        if not self.probe.probe(url):
            return None
        try:
            return self.pdf_cache.download(url)
        except BrowserDownloadError as exc:
            logger.debug("PDF download failed for %s, loading directly: %s", url, exc)
            return None

    def _on_pdf_resolved(self, sequence, url, headers, result) -> None:
        if sequence != self._load_sequence:
            logger.debug("Dropping superseded load of %s", url)
            if result is not None:
                self.storage.discard(result.local_path)
            return
        if result is None:
            self.renderer.load_url(url, dict(headers or {}))
            return
        self.renderer.stop_loading()
        viewer_url = self.navigation.pdf_viewer_url_for(url, result.local_path)
        self.renderer.load_url(viewer_url, {})

    def _on_pdf_failed(self, sequence, url, headers, error) -> None:
        logger.warning("PDF detection failed for %s: %s", url, error)
        self._on_pdf_resolved(sequence, url, headers, None)

    def should_override_url_loading(self, url: str) -> bool:
        decision = self.router.classify(url)
        if decision.kind == RouteKind.LOAD_EMBEDDED:
            self.handle_load_url(decision.url)
            return True
        if decision.kind == RouteKind.LAUNCH_EXTERNAL:
            return self.router.launch(decision)
        return False

    def _on_page_finished(self, event: PageFinished):
        published = self.navigation.on_page_finished(event.url)
        if self.navigation.is_pdf_viewer_url(event.url) and self._option("clear_cache", False):
            self.renderer.evaluate_script(CLEAR_WEB_STORAGE_JS)
        return published

    def reload(self) -> bool:
        if not self.session.current_url:
            return False
        self.handle_load_url(self.session.current_url)
        self.navigation.show_loading()
        return True

    def go_back(self) -> bool:
        if not self.renderer.can_go_back():
            return False
        self.navigation.hide_error()
        self.renderer.go_back()
        return True

    def go_forward(self) -> bool:
        if not self.renderer.can_go_forward():
            return False
        self.renderer.go_forward()
        return True

    def back_navigation_enabled(self) -> bool:
        return bool(self._option("hardware_back", True)) and self.renderer.can_go_back()

    def close(self) -> None:
        if self._finished:
            return
        self._finished = True
        self._load_sequence += 1
        self.file_chooser.cancel()
        self.broker.cancel_all()
        self.event_bus.publish(BrowserFinished(self.browser_id))


__all__ = ["BrowserController"]
