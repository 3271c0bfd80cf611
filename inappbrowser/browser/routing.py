import logging
from dataclasses import dataclass
from enum import Enum

from inappbrowser.browser.errors import BrowserNavigationError, RouteLaunchError
from inappbrowser.browser.intents import (
    ACTION_DIAL,
    ACTION_SENDTO,
    ACTION_VIEW,
    IntentSpec,
    parse_intent_uri,
)
from inappbrowser.constants import PLAY_STORE_PACKAGE, PLAY_STORE_URL_PREFIX

logger = logging.getLogger(__name__)


class RouteKind(str, Enum):
    LOAD_EMBEDDED = "LOAD_EMBEDDED"
    LAUNCH_EXTERNAL = "LAUNCH_EXTERNAL"
    UNHANDLED = "UNHANDLED"


@dataclass(frozen=True)
class RouteDecision:
    kind: RouteKind
    url: str | None = None
    intent: IntentSpec | None = None

    @classmethod
    def load_embedded(cls, url: str) -> "RouteDecision":
        return cls(kind=RouteKind.LOAD_EMBEDDED, url=url)

    @classmethod
    def launch_external(cls, url: str, intent: IntentSpec) -> "RouteDecision":
        return cls(kind=RouteKind.LAUNCH_EXTERNAL, url=url, intent=intent)

    @classmethod
    def unhandled(cls, url: str | None = None) -> "RouteDecision":
        return cls(kind=RouteKind.UNHANDLED, url=url)


def _dial(url):
    return IntentSpec(action=ACTION_DIAL, data=url)


def _send_to(url):
    return IntentSpec(action=ACTION_SENDTO, data=url)


def _view(url):
    return IntentSpec(action=ACTION_VIEW, data=url)


def _store(url):
    return IntentSpec(action=ACTION_VIEW, data=url, package=PLAY_STORE_PACKAGE)


# Most specific prefixes first: the store URL must win over plain https.
EXTERNAL_ROUTES = (
    ("tel:", _dial),
    ("sms:", _send_to),
    ("mailto:", _send_to),
    ("geo:", _view),
    ("intent:", parse_intent_uri),
    (PLAY_STORE_URL_PREFIX, _store),
    ("market:", _store),
)
EMBEDDED_PREFIXES = ("http:", "https:")


def validate_url(url: str) -> str:
    normalized = (url or "").strip()
    if not normalized:
        raise BrowserNavigationError("Empty URL cannot be opened.")
    return normalized


class UrlRouter:
    """Decides whether a navigation stays in the renderer or leaves the app."""

    def __init__(self, launcher=None):
        self.launcher = launcher

    @staticmethod
    def classify(url: str) -> RouteDecision:
        value = url or ""
        for prefix, build_intent in EXTERNAL_ROUTES:
            if value.startswith(prefix):
                try:
                    return RouteDecision.launch_external(value, build_intent(value))
                except RouteLaunchError as exc:
                    logger.debug("Cannot route %s externally: %s", value, exc)
                    return RouteDecision.unhandled(value)
        if value.startswith(EMBEDDED_PREFIXES):
            return RouteDecision.load_embedded(value)
        return RouteDecision.unhandled(value or None)

    def launch(self, decision: RouteDecision) -> bool:
        """Start the external activity for a decision; False means the renderer keeps the URL."""
        if decision.kind != RouteKind.LAUNCH_EXTERNAL or self.launcher is None:
            return False
        try:
            started = self.launcher.start_external_activity(decision.intent)
        except Exception as exc:
            logger.debug("Failed to launch intent for %s: %s", decision.url, exc)
            return False
        return bool(started)


__all__ = [
    "EMBEDDED_PREFIXES",
    "EXTERNAL_ROUTES",
    "RouteDecision",
    "RouteKind",
    "UrlRouter",
    "validate_url",
]
