from dataclasses import dataclass
from enum import Enum
import importlib

from inappbrowser.browser.errors import BrowserFeatureUnavailableError

WEB_ENGINE_MODULES = ("PySide6.QtWebEngineCore", "PySide6.QtWebEngineWidgets")


class BrowserRuntimeStatus(str, Enum):
    READY = "READY"
    MISSING_RUNTIME = "MISSING_RUNTIME"
    INIT_FAILED = "INIT_FAILED"


@dataclass(frozen=True)
class BrowserRuntimeInfo:
    status: BrowserRuntimeStatus
    detail: str
    engine: str = "qtwebengine"


def detect_browser_runtime() -> BrowserRuntimeInfo:
    missing = []
    for module_name in WEB_ENGINE_MODULES:
        try:
            importlib.import_module(module_name)
        except ImportError as exc:
            missing.append(f"{module_name}: {exc}")
        except Exception as exc:
            return BrowserRuntimeInfo(
                status=BrowserRuntimeStatus.INIT_FAILED,
                detail=f"Runtime check failed: {exc}",
            )

    if missing:
        return BrowserRuntimeInfo(
            status=BrowserRuntimeStatus.MISSING_RUNTIME,
            detail="Qt WebEngine is missing. Install it with: pip install PySide6 (" + "; ".join(missing) + ")",
        )

    return BrowserRuntimeInfo(
        status=BrowserRuntimeStatus.READY,
        detail="Qt WebEngine runtime detected.",
    )


def require_browser_runtime() -> BrowserRuntimeInfo:
    info = detect_browser_runtime()
    if info.status != BrowserRuntimeStatus.READY:
        raise BrowserFeatureUnavailableError(info.detail)
    return info
