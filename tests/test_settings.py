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
# smart-hdd-monitor/tests/test_settings.py

import json

import pytest

from conftest import FakeTransport
from smart_hdd_monitor import Harddrive, Settings, SettingsError


class TestSettings:
    """Test the JSON settings store."""

    def test_missing_file_gives_defaults(self, tmp_path):
        settings = Settings.load(tmp_path / "settings.json")
        assert settings.get("anything") is None
        assert settings.get_bool("flag", True) is True

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "settings.json"
        settings = Settings(path=path)
        settings.set("/hdd/0/temperature/0/hidden", True)
        settings.set("/hdd/0/temperature/0/name", "Disk temp")
        settings.save()

        loaded = Settings.load(path)
        assert loaded.get_bool("/hdd/0/temperature/0/hidden", False) is True
        assert loaded.get("/hdd/0/temperature/0/name") == "Disk temp"
        assert json.loads(path.read_text())["/hdd/0/temperature/0/hidden"] == "true"

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2]")
        with pytest.raises(SettingsError):
            Settings.load(path)

    def test_rejects_malformed_json(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        with pytest.raises(SettingsError):
            Settings.load(path)

    def test_save_without_path(self):
        with pytest.raises(SettingsError):
            Settings().save()


class TestSensorOverrides:
    """Test sensor name and visibility overrides."""

    def test_name_override_round_trip(self, generic_drive):
        settings = Settings()
        drive = Harddrive.create_instance(
            FakeTransport({0: generic_drive}), 0, settings
        )
        sensor = drive.sensors[0]

        sensor.name = "Disk temp"
        assert sensor.name == "Disk temp"
        assert settings.get("/hdd/0/temperature/0/name") == "Disk temp"

        sensor.name = ""
        assert sensor.name == "Temperature"

    def test_hidden_setter(self, generic_drive):
        settings = Settings()
        drive = Harddrive.create_instance(
            FakeTransport({0: generic_drive}), 0, settings
        )
        sensor = drive.sensors[0]
        assert not sensor.hidden

        sensor.hidden = True
        assert sensor.hidden
        assert sensor.to_dict()['hidden'] is True
