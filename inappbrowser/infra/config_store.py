import json
import os

from inappbrowser.constants import APP_ID, FILE_PROVIDER_SUFFIX, PDF_VIEWER_URL_PREFIX
from inappbrowser.paths import CONFIG_DIR, CONFIG_FILE, SCRATCH_DIR

DEFAULT_OPTIONS = {
    "clear_cache": False,
    "clear_session_cache": False,
    "custom_user_agent": "",
    "hardware_back": True,
    "pause_media": True,
    "allow_zoom": True,
    "media_playback_requires_user_action": False,
    "pdf_viewer_url_prefix": PDF_VIEWER_URL_PREFIX,
    "pdfjs_dir": "",
    "scratch_dir": SCRATCH_DIR,
    "file_provider_authority": f"{APP_ID}{FILE_PROVIDER_SUFFIX}",
    "declared_permissions": [],
    "granted_permissions": [],
}


class Config:
    """Browser options persisted as a JSON object.

    Saved values overlay the defaults. A saved value whose type differs from its
    default is ignored and reported through ``load_error``.
    """

    def __init__(self):
        self.load_error = None
        self.data = {key: list(value) if isinstance(value, list) else value for key, value in DEFAULT_OPTIONS.items()}
        self.load()

    def load(self):
        self.load_error = None
        if not os.path.exists(CONFIG_FILE):
            return
        try:
            with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                saved = json.load(f)
            if not isinstance(saved, dict):
                raise ValueError("Config payload must be a JSON object.")
        except (OSError, json.JSONDecodeError, TypeError, ValueError) as exc:
            self.load_error = str(exc)
            return

        rejected = []
        for key, value in saved.items():
            default = DEFAULT_OPTIONS.get(key)
            if default is not None and type(value) is not type(default):
                rejected.append(key)
                continue
            self.data[key] = value
        if rejected:
            self.load_error = "Ignored options with the wrong type: " + ", ".join(sorted(rejected))

    def save(self):
        os.makedirs(CONFIG_DIR, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def set(self, key, value):
        self.data[key] = value
        self.save()
