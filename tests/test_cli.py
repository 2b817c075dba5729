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
# smart-hdd-monitor/tests/test_cli.py

import json

import pytest
from typer.testing import CliRunner

from conftest import FakeTransport
from smart_hdd_monitor import cli

runner = CliRunner()


@pytest.fixture
def transport(monkeypatch, generic_drive, sandforce_drive):
    fake = FakeTransport({0: generic_drive, 1: sandforce_drive})
    monkeypatch.setattr(cli, "_make_transport", lambda ssh_host: fake)
    monkeypatch.setattr(cli.time, "sleep", lambda seconds: None)
    return fake


class TestCommands:
    """Test the CLI against an in-memory transport."""

    def test_report(self, transport):
        result = runner.invoke(cli.app, ["report"])
        assert result.exit_code == 0
        assert "GenericHardDisk" in result.output
        assert "SandforceSSD" in result.output
        assert "Drive name: OCZ-VERTEX3" in result.output
        assert transport.open_handles == {}

    def test_sensors_json(self, transport):
        result = runner.invoke(cli.app, ["sensors", "--json"])
        assert result.exit_code == 0

        drives = json.loads(result.output)
        assert [d['model'] for d in drives] == ["GenericHardDisk", "SandforceSSD"]
        temperature = drives[0]['sensors'][0]
        assert temperature['identifier'] == "/hdd/0/temperature/0"
        assert temperature['value'] == 35

    def test_attributes_json(self, transport):
        result = runner.invoke(cli.app, ["attributes", "0", "--json"])
        assert result.exit_code == 0
        rows = json.loads(result.output)
        assert [row['id'] for row in rows] == [0x01, 0x09, 0xC2]

    def test_attributes_unsupported_drive(self, transport):
        result = runner.invoke(cli.app, ["attributes", "5"])
        assert result.exit_code == 1

    def test_watch(self, transport, tmp_path):
        settings_file = tmp_path / "settings.json"
        result = runner.invoke(cli.app, [
            "watch", "--ticks", "31", "--interval", "0",
            "--settings", str(settings_file),
        ])
        assert result.exit_code == 0
        assert result.output.count("Drive Sensors") == 2
        # Probe, construction and two refreshes per drive
        assert transport.record_reads == 2 * 4
        assert settings_file.exists()

    def test_malformed_settings_file(self, transport, tmp_path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text("{not json")

        for command in ("report", "sensors", "watch"):
            result = runner.invoke(cli.app, [command, "--settings", str(settings_file)])
            assert result.exit_code == 1
            assert not isinstance(result.exception, ValueError)
        assert transport.open_handles == {}
