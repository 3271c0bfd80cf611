DEFAULT_START_URL = "https://www.example.com"
QT_THREAD_POOL_MAX_WORKERS = 4
QT_WINDOW_DEFAULT_SIZE = (1000, 760)
BROWSER_ID_ENV = "INAPPBROWSER_ID"
PDFJS_DIR_ENV = "INAPPBROWSER_PDFJS_DIR"
PDFJS_VERSION = "3.11.174"
PDFJS_DIST_URL = f"https://github.com/mozilla/pdf.js/releases/download/v{PDFJS_VERSION}/pdfjs-{PDFJS_VERSION}-dist.zip"

LOADING_TEXT = "Loading..."
ERROR_TITLE_TEXT = "This page could not be loaded."
ERROR_RELOAD_TEXT = "Reload"
PERMISSION_DIALOG_TITLE = "Permission Request"
FILE_DIALOG_TITLE = "Choose Files"

# Chromium net error codes as reported by QWebEngineLoadingInfo.errorCode().
NET_ERROR_CODES = {
    6: "FILE_NOT_FOUND",
    7: "TIMEOUT",
    102: "CONNECT",
    104: "CONNECT",
    105: "HOST_LOOKUP",
    106: "CONNECT",
    118: "TIMEOUT",
    137: "HOST_LOOKUP",
    300: "BAD_URL",
    301: "UNSUPPORTED_SCHEME",
    302: "UNSUPPORTED_SCHEME",
}

GEOLOCATION_FEATURE = "Geolocation"

PERMISSION_LABELS = {
    "android.permission.CAMERA": "camera",
    "android.permission.RECORD_AUDIO": "microphone",
    "android.permission.MODIFY_AUDIO_SETTINGS": "audio settings",
    "android.permission.ACCESS_FINE_LOCATION": "precise location",
    "android.permission.ACCESS_COARSE_LOCATION": "approximate location",
}

FILE_DIALOG_FILTERS = {
    "image/*": "Images (*.png *.jpg *.jpeg *.gif *.bmp *.webp *.heic)",
    "video/*": "Videos (*.mp4 *.mov *.webm *.mkv *.avi)",
}
FILE_DIALOG_ALL_FILTER = "All Files (*)"
