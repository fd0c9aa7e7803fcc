from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from battlesim.core.logging import logger, LEVELS

SETTINGS_FILENAME = ".battlesim_settings.json"
SETTINGS_ENV = "BATTLESIM_SETTINGS"

@dataclass
class SettingsData:
    log_level: str = "WARN"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Echo state changes in the terminal UI and log at DEBUG
    travel_delay: float = 0.62     # seconds between submitting a move and its outcome
    recovery_delay: float = 0.30   # seconds after an outcome before the next submission
    opponent_delay: float = 0.90   # seconds the automated side waits before choosing
    seed: Optional[int] = None     # fixed seed for reproducible battles

    def normalize(self):
        if self.log_level not in LEVELS:
            self.log_level = "WARN"
        defaults = SettingsData.__dataclass_fields__
        for name in ("travel_delay", "recovery_delay", "opponent_delay"):
            try:
                value = float(getattr(self, name))
            except (TypeError, ValueError):
                value = defaults[name].default
            setattr(self, name, max(0.0, value))
        if self.seed is not None:
            try:
                self.seed = int(self.seed)
            except (TypeError, ValueError):
                self.seed = None
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        override = os.environ.get(SETTINGS_ENV)
        if override:
            return Path(override)
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
        logger.debug("SettingsSaved", path=str(self.path))

    def apply(self):
        """Push logging-related settings into the global logger."""
        self.data.normalize()
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)  # type: ignore[arg-type]
