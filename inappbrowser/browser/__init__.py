"""Browser subsystem: content classification, routing and resource arbitration."""

from inappbrowser.browser.content_probe import ContentTypeProbe
from inappbrowser.browser.downloads import DownloadResult, PdfCache
from inappbrowser.browser.errors import (
    BrowserDownloadError,
    BrowserFeatureUnavailableError,
    BrowserNavigationError,
    BrowserProbeError,
    BrowserRuntimeError,
    CallbackAlreadyResolvedError,
    ChooserLaunchError,
    RouteLaunchError,
)
from inappbrowser.browser.events import EventBus
from inappbrowser.browser.file_chooser import FileChooserCoordinator, FileChooserRequest
from inappbrowser.browser.host import BrowserController
from inappbrowser.browser.navigation import BrowserSession, NavigationController
from inappbrowser.browser.permissions import PermissionBroker
from inappbrowser.browser.routing import RouteDecision, RouteKind, UrlRouter
from inappbrowser.browser.runtime import (
    BrowserRuntimeInfo,
    BrowserRuntimeStatus,
    detect_browser_runtime,
    require_browser_runtime,
)

__all__ = [
    "BrowserController",
    "BrowserDownloadError",
    "BrowserFeatureUnavailableError",
    "BrowserNavigationError",
    "BrowserProbeError",
    "BrowserRuntimeError",
    "BrowserRuntimeInfo",
    "BrowserRuntimeStatus",
    "BrowserSession",
    "CallbackAlreadyResolvedError",
    "ChooserLaunchError",
    "ContentTypeProbe",
    "DownloadResult",
    "EventBus",
    "FileChooserCoordinator",
    "FileChooserRequest",
    "NavigationController",
    "PdfCache",
    "PermissionBroker",
    "RouteDecision",
    "RouteKind",
    "RouteLaunchError",
    "UrlRouter",
    "detect_browser_runtime",
    "require_browser_runtime",
]
