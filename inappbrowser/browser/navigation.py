import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import quote

from inappbrowser.browser.events import (
    BrowserPageLoaded,
    BrowserPageNavigationCompleted,
    LoadErrorCode,
)
from inappbrowser.constants import PDF_VIEWER_URL_PREFIX

logger = logging.getLogger(__name__)

# Only failures that leave nothing useful on screen; a broken inline image is not one of them.
HANDLED_ERROR_CODES = frozenset(
    {
        LoadErrorCode.HOST_LOOKUP,
        LoadErrorCode.UNSUPPORTED_SCHEME,
        LoadErrorCode.BAD_URL,
    }
)


class NavigationPhase(str, Enum):
    IDLE = "IDLE"
    LOADING = "LOADING"
    LOADED = "LOADED"
    ERRORED = "ERRORED"


class ScreenState(str, Enum):
    LOADING = "LOADING"
    CONTENT = "CONTENT"
    ERROR = "ERROR"


@dataclass
class BrowserSession:
    browser_id: str
    current_url: str | None = None
    original_url: str | None = None
    is_first_load: bool = True
    has_load_error: bool = False
    last_finished_url: str | None = None
    pdf_viewer_url: str | None = None


def build_pdf_viewer_url(local_path: str, prefix: str = PDF_VIEWER_URL_PREFIX) -> str:
    file_uri = Path(local_path).resolve().as_uri()
    if not prefix:
        return file_uri
    return prefix + quote(file_uri, safe="!*'()")


class NavigationController:
    """Page-load lifecycle for one browser session."""

    def __init__(self, session: BrowserSession, event_bus, pdf_viewer_prefix=PDF_VIEWER_URL_PREFIX, on_screen_changed=None):
        self.session = session
        self.event_bus = event_bus
        self.pdf_viewer_prefix = pdf_viewer_prefix
        self.on_screen_changed = on_screen_changed
        self.phase = NavigationPhase.IDLE
        self.screen = ScreenState.CONTENT

    def is_pdf_viewer_url(self, url: str | None) -> bool:
        if not url:
            return False
        if self.pdf_viewer_prefix:
            return url.startswith(self.pdf_viewer_prefix)
        return url == self.session.pdf_viewer_url

    def pdf_viewer_url_for(self, original_url: str, local_path: str) -> str:
        viewer_url = build_pdf_viewer_url(local_path, self.pdf_viewer_prefix)
        self.session.original_url = original_url
        self.session.pdf_viewer_url = viewer_url
        return viewer_url

    def resolve_reported_url(self, url: str | None) -> str | None:
        if url is None:
            return None
        if self.is_pdf_viewer_url(url) and self.session.original_url is not None:
            return self.session.original_url
        return url

    def show_loading(self):
        self._set_screen(ScreenState.LOADING)

    def hide_error(self):
        if self.screen == ScreenState.ERROR:
            self._set_screen(ScreenState.CONTENT)

    def on_page_started(self, url: str | None) -> None:
        self.phase = NavigationPhase.LOADING
        if self.screen == ScreenState.LOADING:
            self._set_screen(ScreenState.CONTENT)
        if not self.session.has_load_error:
            self.hide_error()

    def on_page_finished(self, url: str | None):
        """Returns the event published for this finish, or None when nothing was published."""
        session = self.session
        if url is not None and url == session.last_finished_url and self.is_pdf_viewer_url(url):
            # The PDF viewer reports several finishes for one document.
            return None
        session.last_finished_url = url
        reported_url = self.resolve_reported_url(url)

        event = None
        if not session.has_load_error:
            if session.is_first_load:
                event = BrowserPageLoaded(session.browser_id)
                session.is_first_load = False
            else:
                event = BrowserPageNavigationCompleted(session.browser_id, reported_url)
            self.event_bus.publish(event)
            self.phase = NavigationPhase.LOADED

        session.has_load_error = False
        session.current_url = url
        return event

    def on_received_error(self, code, url: str | None = None) -> bool:
        try:
            code = LoadErrorCode(code)
        except ValueError:
            code = LoadErrorCode.UNKNOWN
        if code not in HANDLED_ERROR_CODES:
            return False
        logger.debug("Load failed for %s: %s", url, code.value)
        self.session.has_load_error = True
        self.phase = NavigationPhase.ERRORED
        self._set_screen(ScreenState.ERROR)
        return True

    def _set_screen(self, state: ScreenState) -> None:
        if self.screen == state:
            return
        self.screen = state
        if self.on_screen_changed is not None:
            self.on_screen_changed(state)


__all__ = [
    "BrowserSession",
    "HANDLED_ERROR_CODES",
    "NavigationController",
    "NavigationPhase",
    "ScreenState",
    "build_pdf_viewer_url",
]
