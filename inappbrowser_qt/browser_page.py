import logging

from PySide6.QtCore import QByteArray, QEventLoop, QUrl
from PySide6.QtWebEngineCore import QWebEngineHttpRequest, QWebEngineLoadingInfo, QWebEnginePage

from inappbrowser.browser.events import (
    FileChooserRequested,
    GeolocationPromptRequested,
    LoadFailed,
    NavigationRequested,
    PageFinished,
    PageStarted,
    PermissionRequested,
)
from inappbrowser_qt.constants import GEOLOCATION_FEATURE
from inappbrowser_qt.webview_utils import feature_resources, map_load_error

logger = logging.getLogger(__name__)


class BrowserPage(QWebEnginePage):
    """Translates Qt WebEngine callbacks into renderer events for a BrowserController."""

    def __init__(self, resolve_uri=None, parent=None):
        super().__init__(parent)
        self._dispatch = None
        self._resolve_uri = resolve_uri
        self.loadingChanged.connect(self._on_loading_changed)
        self.featurePermissionRequested.connect(self._on_feature_permission_requested)

    def attach(self, dispatch):
        self._dispatch = dispatch

    def acceptNavigationRequest(self, url, nav_type, is_main_frame):
        if (
            self._dispatch is None
            or not is_main_frame
            or nav_type != QWebEnginePage.NavigationType.NavigationTypeLinkClicked
        ):
            return super().acceptNavigationRequest(url, nav_type, is_main_frame)
        overridden = self._dispatch(NavigationRequested(url.toString(QUrl.ComponentFormattingOption.FullyEncoded)))
        return not overridden

    def _on_loading_changed(self, info):
        if self._dispatch is None:
            return
        status = info.status()
        url = info.url().toString(QUrl.ComponentFormattingOption.FullyEncoded)
        if status == QWebEngineLoadingInfo.LoadStatus.LoadStartedStatus:
            self._dispatch(PageStarted(url))
        elif status == QWebEngineLoadingInfo.LoadStatus.LoadSucceededStatus:
            self._dispatch(PageFinished(url))
        elif status == QWebEngineLoadingInfo.LoadStatus.LoadFailedStatus:
            self._dispatch(LoadFailed(map_load_error(info.errorCode()), url))
            self._dispatch(PageFinished(url))

    def _on_feature_permission_requested(self, security_origin, feature):
        def _apply(granted):
            policy = (
                QWebEnginePage.PermissionPolicy.PermissionGrantedByUser
                if granted
                else QWebEnginePage.PermissionPolicy.PermissionDeniedByUser
            )
            self.setFeaturePermission(security_origin, feature, policy)

        if self._dispatch is None:
            _apply(False)
            return

        feature_name = getattr(feature, "name", str(feature))
        if feature_name == GEOLOCATION_FEATURE:
            self._dispatch(
                GeolocationPromptRequested(
                    security_origin.toString(),
                    lambda _origin, allow, _retain: _apply(allow),
                )
            )
            return

        resources = feature_resources(feature_name)
        if not resources:
            _apply(False)
            return
        self._dispatch(PermissionRequested(resources, lambda granted, _resources: _apply(granted)))

    def chooseFiles(self, mode, old_files, accepted_mime_types):
        if self._dispatch is None:
            return []

        outcome = {"done": False, "uris": None}
        loop = QEventLoop()

        def _deliver(uris):
            outcome["done"] = True
            outcome["uris"] = uris
            loop.quit()

        self._dispatch(FileChooserRequested(tuple(accepted_mime_types or ()), False, _deliver))
        if not outcome["done"]:
            loop.exec()
        return self._to_local_paths(outcome["uris"])

    def _to_local_paths(self, uris):
        paths = []
        for uri in uris or ():
            path = self._resolve_uri(uri) if self._resolve_uri is not None else QUrl(uri).toLocalFile()
            if path:
                paths.append(path)
        return paths


class QtRenderer:
    """Renderer collaborator backed by a QWebEngineView."""

    def __init__(self, view):
        self.view = view

    def load_url(self, url, headers=None):
        request = QWebEngineHttpRequest(QUrl(url))
        for name, value in (headers or {}).items():
            request.setHeader(QByteArray(str(name).encode("utf-8")), QByteArray(str(value).encode("utf-8")))
        self.view.load(request)

    def stop_loading(self):
        self.view.stop()

    def can_go_back(self):
        return self.view.history().canGoBack()

    def can_go_forward(self):
        return self.view.history().canGoForward()

    def go_back(self):
        self.view.back()

    def go_forward(self):
        self.view.forward()

    def evaluate_script(self, script):
        self.view.page().runJavaScript(script)


__all__ = ["BrowserPage", "QtRenderer"]
