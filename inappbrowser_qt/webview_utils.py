from inappbrowser.browser.events import LoadErrorCode
from inappbrowser.constants import RESOURCE_AUDIO_CAPTURE, RESOURCE_VIDEO_CAPTURE
from inappbrowser_qt.constants import (
    FILE_DIALOG_ALL_FILTER,
    FILE_DIALOG_FILTERS,
    NET_ERROR_CODES,
    PERMISSION_LABELS,
)

FEATURE_RESOURCES = {
    "MediaAudioCapture": (RESOURCE_AUDIO_CAPTURE,),
    "MediaVideoCapture": (RESOURCE_VIDEO_CAPTURE,),
    "MediaAudioVideoCapture": (RESOURCE_AUDIO_CAPTURE, RESOURCE_VIDEO_CAPTURE),
}


def map_load_error(error_code):
    try:
        code = abs(int(error_code))
    except (TypeError, ValueError):
        return LoadErrorCode.UNKNOWN
    return LoadErrorCode(NET_ERROR_CODES.get(code, LoadErrorCode.UNKNOWN.value))


def feature_resources(feature_name):
    return FEATURE_RESOURCES.get(feature_name or "", ())


def describe_permissions(permissions):
    labels = []
    for permission in permissions or ():
        label = PERMISSION_LABELS.get(permission, permission)
        if label not in labels:
            labels.append(label)
    return ", ".join(labels)


def file_dialog_filter(mime_type):
    selected = FILE_DIALOG_FILTERS.get((mime_type or "").strip().lower())
    if selected is None:
        return FILE_DIALOG_ALL_FILTER
    return f"{selected};;{FILE_DIALOG_ALL_FILTER}"


__all__ = [
    "describe_permissions",
    "feature_resources",
    "file_dialog_filter",
    "map_load_error",
]
