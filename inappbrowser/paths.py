import os
import tempfile


ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_DIR = os.path.join(ROOT_DIR, "browser_config")
CONFIG_FILE = os.path.join(CONFIG_DIR, "config.json")
SCRATCH_DIR = os.path.join(tempfile.gettempdir(), "inappbrowser_cache")
