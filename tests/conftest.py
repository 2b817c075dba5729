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
# smart-hdd-monitor/tests/conftest.py

"""Shared fixtures: an in-memory SMART transport."""

from dataclasses import dataclass, field

import pytest

from smart_hdd_monitor import RawAttributeRecord, ThresholdRecord, TransportError


def record(identifier: int, raw: list[int] | None = None, value: int = 100,
           worst: int = 100) -> RawAttributeRecord:
    """Build an attribute record, padding the raw payload to six bytes."""
    payload = bytes((raw or []) + [0] * (6 - len(raw or [])))
    return RawAttributeRecord(identifier=identifier, value=value,
                              worst=worst, raw=payload)


@dataclass
class FakeDrive:
    name: str
    firmware: str = "FW1.0"
    records: list[RawAttributeRecord] = field(default_factory=list)
    thresholds: list[ThresholdRecord] = field(default_factory=list)
    name_valid: bool = True
    smart_enabled: bool = True
    # Attribute reads beyond this many raise TransportError
    fail_after_reads: int | None = None
    reads: int = 0


class FakeTransport:
    """SMART transport over a dict of drive index -> FakeDrive."""

    invalid_handle = -1

    def __init__(self, drives: dict[int, FakeDrive]):
        self.drives = drives
        self.open_handles: dict[int, int] = {}
        self.open_calls = 0
        self.close_calls = 0
        self.record_reads = 0
        self.threshold_reads = 0
        self._next_handle = 100

    def open(self, device_index: int) -> int:
        self.open_calls += 1
        if device_index not in self.drives:
            return self.invalid_handle
        handle = self._next_handle
        self._next_handle += 1
        self.open_handles[handle] = device_index
        return handle

    def _drive(self, handle: int) -> FakeDrive:
        if handle not in self.open_handles:
            raise TransportError(f"Handle {handle} is not open")
        return self.drives[self.open_handles[handle]]

    def enable_health_reporting(self, handle: int, device_index: int) -> bool:
        return self._drive(handle).smart_enabled

    def read_name(self, handle: int,
                  device_index: int) -> tuple[bool, str, str]:
        drive = self._drive(handle)
        return drive.name_valid, drive.name, drive.firmware

    def read_attribute_records(self, handle: int,
                               device_index: int) -> list[RawAttributeRecord]:
        self.record_reads += 1
        drive = self._drive(handle)
        drive.reads += 1
        if drive.fail_after_reads is not None and drive.reads > drive.fail_after_reads:
            raise TransportError(f"Read {drive.reads} of {drive.name} failed")
        return list(drive.records)

    def read_threshold_records(self, handle: int,
                               device_index: int) -> list[ThresholdRecord]:
        self.threshold_reads += 1
        return list(self._drive(handle).thresholds)

    def close(self, handle: int) -> None:
        self.close_calls += 1
        self._drive(handle)
        del self.open_handles[handle]


@pytest.fixture
def generic_drive() -> FakeDrive:
    return FakeDrive(
        name="WDC WD10EZEX-08WN4A0",
        firmware="01.01A01",
        records=[
            record(0x01, [0, 0, 0, 0], value=200, worst=200),
            record(0x09, [0x10, 0x27, 0, 0], value=87, worst=87),
            record(0xC2, [35, 0, 18, 0, 40, 0], value=108, worst=95),
        ],
        thresholds=[
            ThresholdRecord(0x01, 51),
            ThresholdRecord(0x09, 0),
        ],
    )


@pytest.fixture
def sandforce_drive() -> FakeDrive:
    return FakeDrive(
        name="OCZ-VERTEX3",
        records=[
            record(0xAB, [0]),
            record(0xB1, [5]),
            record(0xC2, [30], value=100, worst=100),
            record(0xE7, value=97, worst=97),
            record(0xE9, [0x2C, 0x01]),  # 300
            record(0xEA, [100]),
            record(0xF1, [100]),
            record(0xF2, [50]),
        ],
    )
