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
# smart-hdd-monitor/tests/test_display.py

"""Tests for rich display functionality."""

from io import StringIO

from rich.console import Console

from conftest import FakeTransport
from smart_hdd_monitor import Harddrive
from smart_hdd_monitor.display import (
    create_attributes_table,
    create_sensors_table,
    display_drives,
    format_sensor_value,
    get_life_color,
    get_temp_color,
)


def build(fake):
    drive = Harddrive.create_instance(FakeTransport({0: fake}), 0)
    drive.update()
    return drive


class TestDisplayHelpers:
    """Test display helper functions."""

    def test_get_temp_color(self):
        """Test temperature color logic."""
        assert get_temp_color(30, 50, 60) == "green"
        assert get_temp_color(46, 50, 60) == "yellow"
        assert get_temp_color(50, 50, 60) == "orange1"
        assert get_temp_color(60, 50, 60) == "red"
        assert get_temp_color(None, 50, 60) == "dim"

    def test_get_life_color(self):
        assert get_life_color(97) == "green"
        assert get_life_color(15) == "yellow"
        assert get_life_color(5) == "red"
        assert get_life_color(None) == "dim"

    def test_format_sensor_value(self, sandforce_drive):
        drive = build(sandforce_drive)
        formatted = {s.identifier: format_sensor_value(s).plain
                     for s in drive.sensors}
        assert formatted["/hdd/0/temperature/0"] == "30°C"
        assert formatted["/hdd/0/level/0"] == "97%"
        assert formatted["/hdd/0/data/0"] == "300 GB"
        assert formatted["/hdd/0/factor/0"] == "3.00"


class TestTables:
    """Test table creation."""

    def test_sensors_table_hides_hidden_sensors(self, sandforce_drive):
        drive = build(sandforce_drive)
        table = create_sensors_table([drive])
        assert table.title == "Drive Sensors"
        assert table.row_count == 5  # Temperature is hidden by default

        table = create_sensors_table([drive], show_hidden=True)
        assert table.row_count == 6

    def test_sensors_table_render(self, generic_drive):
        drive = build(generic_drive)
        console = Console(file=StringIO(), width=200)
        console.print(create_sensors_table([drive]))
        output = console.file.getvalue()
        assert "WDC WD10EZEX-08WN4A0" in output
        assert "GenericHardDisk" in output
        assert "35°C" in output

    def test_attributes_table(self, generic_drive):
        drive = build(generic_drive)
        table = create_attributes_table(drive, drive.attribute_frame())
        assert table.row_count == 3

        console = Console(file=StringIO(), width=200)
        console.print(table)
        output = console.file.getvalue()
        assert "Power-On Hours (POH)" in output
        assert "10000" in output
        assert "C2" in output

    def test_display_without_drives(self):
        console = Console(file=StringIO(), width=200)
        display_drives([], console)
        assert "No supported drives found" in console.file.getvalue()

    def test_full_display(self, generic_drive):
        console = Console(file=StringIO(), width=200)
        display_drives([build(generic_drive)], console)
        output = console.file.getvalue()
        assert "Drive Sensors" in output
        assert "Legend" in output
