import os
import json
from typing import Dict, Any, Optional
from pydantic import Field
from pydantic_settings import BaseSettings

# ==============================================================================
# CONSTANTS & PATHS
# ==============================================================================

HOME_DIR = os.path.expanduser("~")
DEFAULT_API_URL = "http://localhost:8080"

# Support container mounts via environment variables
_SETTINGS_FILE_OVERRIDE = os.getenv("RURUSHI_SETTINGS_FILE")

if _SETTINGS_FILE_OVERRIDE:
    SETTINGS_FILE = _SETTINGS_FILE_OVERRIDE
else:
    SETTINGS_FILE = os.path.join(HOME_DIR, ".rurushi", "panel_settings.json")

STALE_POLICIES = ("latest_issued", "last_resolved")

# Default Settings (with documentation keys)
DEFAULT_SETTINGS_JSON = {
    "_comment_api_url": "Base address of the Rurushi HLS server.",
    "api_url": DEFAULT_API_URL,
    "_comment_refetch_delay": "Seconds to wait before re-reading config after folder/stream/subtitle changes.",
    "refetch_delay_sec": 0.1,
    "_comment_timeout": "Optional request timeout in seconds (null = wait forever).",
    "request_timeout_sec": None,
    "_comment_max_files": "Number of files shown in the play list.",
    "max_visible_files": 20,
    "_comment_stale_policy": "latest_issued drops out-of-order fetch results, last_resolved keeps whichever lands last.",
    "stale_policy": "latest_issued",
}

# ==============================================================================
# SETTINGS MODEL
# ==============================================================================

class PanelSettings(BaseSettings):
    """
    Pydantic model for control panel settings.
    Loads from env vars (RURUSHI_*) or defaults.
    File loading is handled manually to preserve JSON comments.
    """
    api_url: str = Field(DEFAULT_API_URL)
    refetch_delay_sec: float = Field(0.1, ge=0)
    request_timeout_sec: Optional[float] = Field(None)
    max_visible_files: int = Field(20, ge=0)
    stale_policy: str = Field("latest_issued")

    class Config:
        env_prefix = "RURUSHI_"
        extra = "ignore"

    @property
    def base_url(self) -> str:
        return self.api_url.rstrip("/")

# ==============================================================================
# CONFIG MANAGER
# ==============================================================================

class ConfigManager:
    def __init__(self, settings_file: Optional[str] = None):
        self.settings_file = settings_file or SETTINGS_FILE
        self.settings = self._load_settings()

    def _read_raw(self) -> Dict[str, Any]:
        with open(self.settings_file, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings file must contain a JSON object")
        return data

    def _load_settings(self) -> PanelSettings:
        file_data = {}
        if os.path.exists(self.settings_file):
            try:
                file_data = self._read_raw()
            except Exception as e:
                print(f"⚠️ Warning: Could not read {self.settings_file}: {e}")
                file_data = {}

        # Env vars take priority over the file
        file_data = {k: v for k, v in file_data.items()
                     if not k.startswith("_") and f"RURUSHI_{k.upper()}" not in os.environ}

        settings = PanelSettings(**file_data)
        if settings.stale_policy not in STALE_POLICIES:
            print(f"⚠️ Unknown stale_policy '{settings.stale_policy}', using latest_issued")
            settings.stale_policy = "latest_issued"
        return settings

    def _save_json_raw(self, data: Dict[str, Any]):
        directory = os.path.dirname(self.settings_file)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def save(self, updates: Dict[str, Any]) -> bool:
        """
        Updates current settings with new values and saves to disk.
        Preserves existing keys (like comments).
        """
        try:
            current_raw = dict(DEFAULT_SETTINGS_JSON)
            if os.path.exists(self.settings_file):
                current_raw.update(self._read_raw())

            current_raw.update(updates)
            self._save_json_raw(current_raw)

            self.settings = self._load_settings()
            return True
        except Exception as e:
            print(f"❌ Save failed: {e}")
            return False

    @property
    def api_url(self) -> str:
        return self.settings.base_url

    @property
    def refetch_delay(self) -> float:
        return self.settings.refetch_delay_sec

# Global Instance
config = ConfigManager()
