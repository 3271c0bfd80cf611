"""Renderer event channel and event-bus payloads.

Renderer adapters translate their native callbacks into the frozen events
below and hand them to ``BrowserController.dispatch``. Bus payloads are
published to subscribers of ``EventBus`` with fire-and-forget semantics.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class LoadErrorCode(str, Enum):
    HOST_LOOKUP = "HOST_LOOKUP"
    UNSUPPORTED_SCHEME = "UNSUPPORTED_SCHEME"
    BAD_URL = "BAD_URL"
    CONNECT = "CONNECT"
    TIMEOUT = "TIMEOUT"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    UNKNOWN = "UNKNOWN"


# Renderer -> core


@dataclass(frozen=True)
class PageStarted:
    url: str


@dataclass(frozen=True)
class PageFinished:
    url: str | None


@dataclass(frozen=True)
class LoadFailed:
    code: LoadErrorCode
    url: str | None = None


@dataclass(frozen=True)
class NavigationRequested:
    url: str


@dataclass(frozen=True)
class PermissionRequested:
    resources: tuple[str, ...]
    callback: Callable = field(compare=False)


@dataclass(frozen=True)
class GeolocationPromptRequested:
    origin: str
    callback: Callable = field(compare=False)


@dataclass(frozen=True)
class FileChooserRequested:
    accept_types: tuple[str, ...]
    capture_enabled: bool
    callback: Callable = field(compare=False)


@dataclass(frozen=True)
class PermissionsResult:
    request_code: int
    permissions: tuple[str, ...]
    grant_results: tuple[bool, ...]


@dataclass(frozen=True)
class ChooserResult:
    ok: bool
    uris: tuple[str, ...] = ()


# Core -> event bus


@dataclass(frozen=True)
class BrowserPageLoaded:
    browser_id: str


@dataclass(frozen=True)
class BrowserPageNavigationCompleted:
    browser_id: str
    url: str | None


@dataclass(frozen=True)
class BrowserFinished:
    browser_id: str


class EventBus:
    def __init__(self):
        self._subscribers = []

    def subscribe(self, callback: Callable[[object], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def publish(self, event) -> None:
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception("Event subscriber failed for %s", type(event).__name__)


__all__ = [
    "BrowserFinished",
    "BrowserPageLoaded",
    "BrowserPageNavigationCompleted",
    "ChooserResult",
    "EventBus",
    "FileChooserRequested",
    "GeolocationPromptRequested",
    "LoadErrorCode",
    "LoadFailed",
    "NavigationRequested",
    "PageFinished",
    "PageStarted",
    "PermissionRequested",
    "PermissionsResult",
]
