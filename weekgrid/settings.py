"""
Display settings for the timetable.

Settings live in a small JSON file (default: ~/.weekgrid/settings.json):

    {
      "showWeekends": false,
      "startWithSunday": false,
      "dynamicTimeRange": true,
      "startHour": 7,
      "endHour": 22,
      "slotDuration": 30
    }

The loader never crashes: a missing or corrupt file gives the defaults,
and any single invalid value falls back to its default.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Any, Dict

from weekgrid.model import TimeRange

logger = logging.getLogger(__name__)

SLOT_DURATIONS = (30, 60)

# camelCase key in the JSON file -> dataclass field
_KEYS = {
    "showWeekends": "show_weekends",
    "startWithSunday": "start_with_sunday",
    "dynamicTimeRange": "dynamic_time_range",
    "startHour": "start_hour",
    "endHour": "end_hour",
    "slotDuration": "slot_duration",
}


@dataclass(frozen=True)
class TimetableSettings:
    show_weekends: bool = False
    start_with_sunday: bool = False
    dynamic_time_range: bool = True
    start_hour: int = 7
    end_hour: int = 22
    slot_duration: int = 30

    @property
    def manual_range(self) -> TimeRange:
        return TimeRange(start_hour=self.start_hour, end_hour=self.end_hour)

    def to_dict(self) -> Dict[str, Any]:
        fields = asdict(self)
        return {camel: fields[snake] for camel, snake in _KEYS.items()}


DEFAULT_SETTINGS = TimetableSettings()


def _default_settings_path() -> Path:
    """
    Return the settings path, overridable with WEEKGRID_SETTINGS.
    """
    env = os.environ.get("WEEKGRID_SETTINGS")
    if env:
        return Path(env)
    return Path.home() / ".weekgrid" / "settings.json"


def _valid_hour(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 23


def settings_from_dict(data: Dict[str, Any]) -> TimetableSettings:
    """
    Build settings from a dict with camelCase or snake_case keys.

    Unknown keys are ignored; invalid values keep their default.
    """
    values: Dict[str, Any] = {}
    for key, raw in data.items():
        name = _KEYS.get(key, key)
        if name not in _KEYS.values():
            continue
        values[name] = raw

    out: Dict[str, Any] = {}
    for name in ("show_weekends", "start_with_sunday", "dynamic_time_range"):
        if name in values:
            if isinstance(values[name], bool):
                out[name] = values[name]
            else:
                logger.warning("ignoring non-boolean setting %s=%r", name, values[name])

    if "slot_duration" in values:
        slot = values["slot_duration"]
        if isinstance(slot, int) and not isinstance(slot, bool) and slot in SLOT_DURATIONS:
            out["slot_duration"] = slot
        else:
            logger.warning("ignoring slot duration %r (allowed: 30, 60)", values["slot_duration"])

    start = values.get("start_hour", DEFAULT_SETTINGS.start_hour)
    end = values.get("end_hour", DEFAULT_SETTINGS.end_hour)
    if _valid_hour(start) and _valid_hour(end) and start < end:
        out["start_hour"] = start
        out["end_hour"] = end
    elif "start_hour" in values or "end_hour" in values:
        logger.warning("ignoring hour range %r-%r", start, end)

    return replace(DEFAULT_SETTINGS, **out)


def load_settings(path: str | Path | None = None) -> TimetableSettings:
    """
    Load settings from JSON. Missing or unreadable files give the defaults.
    """
    settings_path = Path(path) if path is not None else _default_settings_path()

    if not settings_path.exists():
        return DEFAULT_SETTINGS

    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("could not read settings %s: %s", settings_path, exc)
        return DEFAULT_SETTINGS

    if not isinstance(data, dict):
        logger.warning("settings file %s is not a JSON object", settings_path)
        return DEFAULT_SETTINGS

    return settings_from_dict(data)


def save_settings(settings: TimetableSettings, path: str | Path | None = None) -> None:
    """
    Save settings as JSON. Creates parent directories if needed.
    """
    settings_path = Path(path) if path is not None else _default_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)
    settings_path.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")
