import logging
from dataclasses import dataclass, field
from urllib.parse import unquote

from inappbrowser.browser.errors import RouteLaunchError

logger = logging.getLogger(__name__)

ACTION_VIEW = "android.intent.action.VIEW"
ACTION_DIAL = "android.intent.action.DIAL"
ACTION_SENDTO = "android.intent.action.SENDTO"
ACTION_GET_CONTENT = "android.intent.action.GET_CONTENT"
ACTION_CHOOSER = "android.intent.action.CHOOSER"
ACTION_IMAGE_CAPTURE = "android.media.action.IMAGE_CAPTURE"
ACTION_VIDEO_CAPTURE = "android.media.action.VIDEO_CAPTURE"
CATEGORY_OPENABLE = "android.intent.category.OPENABLE"

INTENT_URI_PREFIX = "intent:"
INTENT_FRAGMENT_START = "#Intent;"
INTENT_FRAGMENT_END = "end"

_EXTRA_PARSERS = {
    "S": lambda raw: raw,
    "B": lambda raw: raw.lower() == "true",
    "i": int,
    "l": int,
    "f": float,
    "d": float,
}


@dataclass(frozen=True)
class IntentSpec:
    action: str | None = ACTION_VIEW
    data: str | None = None
    package: str | None = None
    mime_type: str | None = None
    component: str | None = None
    categories: tuple[str, ...] = ()
    extras: dict = field(default_factory=dict, compare=False)
    output_uri: str | None = None
    target: "IntentSpec | None" = None
    initial_intents: tuple["IntentSpec", ...] = ()

    @property
    def is_chooser(self) -> bool:
        return self.action == ACTION_CHOOSER

    @property
    def is_capture(self) -> bool:
        return self.action in (ACTION_IMAGE_CAPTURE, ACTION_VIDEO_CAPTURE)


def parse_intent_uri(uri: str) -> IntentSpec:
    """Parse an ``intent:`` URI of the form ``intent://host/path#Intent;key=value;...;end``."""
    value = (uri or "").strip()
    if not value.lower().startswith(INTENT_URI_PREFIX):
        raise RouteLaunchError(f"Not an intent URI: {uri}")

    head, marker, tail = value.partition(INTENT_FRAGMENT_START)
    if not marker:
        raise RouteLaunchError(f"Intent URI has no #Intent fragment: {uri}")
    parts = tail.split(";")
    if INTENT_FRAGMENT_END not in parts:
        raise RouteLaunchError(f"Intent URI is not terminated: {uri}")
    parts = parts[: parts.index(INTENT_FRAGMENT_END)]

    fields = {"action": ACTION_VIEW}
    categories = []
    extras = {}
    scheme = None
    for part in parts:
        if not part:
            continue
        key, sep, raw = part.partition("=")
        if not sep:
            # Markers such as SEL carry no value.
            logger.debug("Skipping intent marker %s in %s", part, uri)
            continue
        raw = unquote(raw)
        if key == "scheme":
            scheme = raw
        elif key == "category":
            categories.append(raw)
        elif key in ("action", "package", "component"):
            fields[key] = raw
        elif key == "type":
            fields["mime_type"] = raw
        elif key == "launchFlags":
            continue
        elif len(key) > 2 and key[1] == "." and key[0] in _EXTRA_PARSERS:
            try:
                extras[unquote(key[2:])] = _EXTRA_PARSERS[key[0]](raw)
            except ValueError as exc:
                raise RouteLaunchError(f"Malformed intent extra '{part}' in {uri}") from exc
        else:
            logger.debug("Skipping intent component %s in %s", key, uri)

    data = head[len(INTENT_URI_PREFIX):]
    if data and scheme:
        data = f"{scheme}:{data}"
    elif not data or data == "//":
        data = None

    return IntentSpec(
        data=data,
        categories=tuple(categories),
        extras=extras,
        **fields,
    )


__all__ = [
    "ACTION_CHOOSER",
    "ACTION_DIAL",
    "ACTION_GET_CONTENT",
    "ACTION_IMAGE_CAPTURE",
    "ACTION_SENDTO",
    "ACTION_VIDEO_CAPTURE",
    "ACTION_VIEW",
    "CATEGORY_OPENABLE",
    "IntentSpec",
    "parse_intent_uri",
]
