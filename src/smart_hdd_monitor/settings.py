# Author: PB & Claude
# Maintainer: PB
# Original date: 2025.05.13
# Copyright (C) 2025 HRDAG https://hrdag.org
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along
# with this program; if not, see <https://www.gnu.org/licenses/>.
#
# ------
# smart-hdd-monitor/src/smart_hdd_monitor/settings.py

"""JSON-backed key/value store for host settings."""

import json
from pathlib import Path

from loguru import logger

from .errors import SettingsError


class Settings:
    """String key/value settings, optionally persisted to a JSON file.

    Sensors keep their visibility and display-name overrides here under
    keys like ``/hdd/0/temperature/0/hidden``.
    """

    def __init__(self, values: dict[str, str] | None = None,
                 path: Path | None = None):
        self._values: dict[str, str] = dict(values or {})
        self.path = path

    @classmethod
    def load(cls, path: str | Path) -> "Settings":
        path = Path(path)
        if not path.exists():
            logger.debug(f"Settings file {path} not found, using defaults")
            return cls(path=path)

        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SettingsError(f"Cannot read settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file must hold a JSON object: {path}")
        return cls({str(k): str(v) for k, v in data.items()}, path=path)

    def contains(self, name: str) -> bool:
        return name in self._values

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._values.get(name, default)

    def get_bool(self, name: str, default: bool) -> bool:
        value = self._values.get(name)
        if value is None:
            return default
        return value.lower() == "true"

    def set(self, name: str, value: str | bool) -> None:
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._values[name] = value

    def remove(self, name: str) -> None:
        self._values.pop(name, None)

    def save(self, path: str | Path | None = None) -> None:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise SettingsError("No path to save settings to")
        with open(target, "w") as f:
            json.dump(self._values, f, indent=2, sort_keys=True)
        logger.debug(f"Saved {len(self._values)} settings to {target}")
