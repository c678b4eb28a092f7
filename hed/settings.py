"""User settings stored as JSON in the platform config directory."""

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Editor options a user may change without touching code."""
    show_debug_line: bool = False  # Draw the cursor/debug line under the command line
    key_log: bool = False  # Append every keystroke to the key log file


class SettingsStore:
    """Loads and saves ``Settings`` from a JSON file.

    Unknown keys are ignored and values of the wrong type fall back to the
    defaults, so a hand-edited file never prevents the editor from starting.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir else Path(
            platformdirs.user_config_dir(EditorConstants.APP_NAME))
        self._settings_file = self._config_dir / EditorConstants.SETTINGS_FILENAME

    @property
    def path(self) -> Path:
        return self._settings_file

    def _read(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def load(self) -> Settings:
        data = self._read()
        settings = Settings()
        for f in fields(Settings):
            if f.name not in data:
                continue
            value = data[f.name]
            if isinstance(value, bool):
                setattr(settings, f.name, value)
            else:
                logger.warning(f"Setting {f.name!r} must be true or false, ignoring {value!r}")
        return settings

    def save(self, settings: Settings) -> bool:
        """Write settings atomically; returns False on failure."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")
            return False

        temp_file = self._settings_file.with_suffix(EditorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump({f.name: getattr(settings, f.name) for f in fields(Settings)}, f, indent=2)
            temp_file.replace(self._settings_file)
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False
