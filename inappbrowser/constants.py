APP_NAME = "In-App Browser"
APP_ID = "com.inappbrowser"
HTTP_CONNECT_TIMEOUT_SEC = 10
HTTP_READ_TIMEOUT_SEC = 45
DOWNLOAD_CHUNK_BYTES = 64 * 1024

PDF_MIME_TYPE = "application/pdf"
# Empty prefix: the renderer shows the cached file with its own PDF viewer.
PDF_VIEWER_URL_PREFIX = ""
PDFJS_VIEWER_PATH = ("web", "viewer.html")
PDF_VIEWER_FILE_QUERY = "?file="
PDF_SCRATCH_PREFIX = "temp_"
PDF_SCRATCH_SUFFIX = ".pdf"
CLEAR_WEB_STORAGE_JS = "localStorage.clear(); sessionStorage.clear();"

PLAY_STORE_URL_PREFIX = "https://play.google.com/store"
PLAY_STORE_PACKAGE = "com.android.vending"
FILE_PROVIDER_SUFFIX = ".fileprovider"

PHOTO_SCRATCH_PREFIX = "IMG_"
PHOTO_SCRATCH_SUFFIX = ".jpg"
VIDEO_SCRATCH_PREFIX = "VID_"
VIDEO_SCRATCH_SUFFIX = ".mp4"
SCRATCH_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"

PERMISSION_CAMERA = "android.permission.CAMERA"
PERMISSION_RECORD_AUDIO = "android.permission.RECORD_AUDIO"
PERMISSION_MODIFY_AUDIO_SETTINGS = "android.permission.MODIFY_AUDIO_SETTINGS"
PERMISSION_FINE_LOCATION = "android.permission.ACCESS_FINE_LOCATION"
PERMISSION_COARSE_LOCATION = "android.permission.ACCESS_COARSE_LOCATION"

REQUEST_STANDARD_PERMISSION = 622
REQUEST_LOCATION_PERMISSION = 623
REQUEST_CAMERA_PERMISSION = 624

RESOURCE_VIDEO_CAPTURE = "android.webkit.resource.VIDEO_CAPTURE"
RESOURCE_AUDIO_CAPTURE = "android.webkit.resource.AUDIO_CAPTURE"

RESOURCE_PERMISSIONS = {
    RESOURCE_VIDEO_CAPTURE: (PERMISSION_CAMERA,),
    RESOURCE_AUDIO_CAPTURE: (PERMISSION_RECORD_AUDIO, PERMISSION_MODIFY_AUDIO_SETTINGS),
}
LOCATION_PERMISSIONS = (PERMISSION_FINE_LOCATION, PERMISSION_COARSE_LOCATION)
