from inappbrowser.errors import ExternalServiceError, ProjectError


class BrowserRuntimeError(ExternalServiceError):
    """Base browser subsystem error."""


class BrowserFeatureUnavailableError(BrowserRuntimeError):
    """Raised when browser features are unavailable on this machine."""


class BrowserNavigationError(BrowserRuntimeError):
    """Raised for invalid or failed navigation requests."""


class BrowserDownloadError(BrowserRuntimeError):
    """Raised when a PDF could not be fetched into scratch storage."""


class BrowserProbeError(BrowserRuntimeError):
    """Raised for network failures while detecting the content type of a URL."""


class RouteLaunchError(BrowserRuntimeError):
    """Raised when no external handler accepts an intent, or the intent URI is malformed."""


class ChooserLaunchError(BrowserRuntimeError):
    """Raised when the file chooser or a capture activity cannot be launched."""


class CallbackAlreadyResolvedError(ProjectError):
    """Raised when a single-shot completion is delivered a second time."""


__all__ = [
    "BrowserDownloadError",
    "BrowserFeatureUnavailableError",
    "BrowserNavigationError",
    "BrowserProbeError",
    "BrowserRuntimeError",
    "CallbackAlreadyResolvedError",
    "ChooserLaunchError",
    "RouteLaunchError",
]
