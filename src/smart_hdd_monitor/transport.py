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
# smart-hdd-monitor/src/smart_hdd_monitor/transport.py

"""Health-data transports.

``SmartTransport`` is the capability a drive needs from the platform: open a
handle for a drive index, switch SMART reporting on, and read the drive name
and its attribute and threshold tables. ``SmartctlTransport`` provides it on
top of smartmontools' JSON output, locally or through an SSH executor.
"""

import json
import shlex
import subprocess
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from loguru import logger

from .errors import TransportError
from .smart import RAW_PAYLOAD_SIZE, RawAttributeRecord, ThresholdRecord

Handle = Any

_RAW_MASK = (1 << (8 * RAW_PAYLOAD_SIZE)) - 1


class SmartTransport(Protocol):
    invalid_handle: Handle

    def open(self, device_index: int) -> Handle:
        """Open drive ``device_index``, or return ``invalid_handle``."""

    def enable_health_reporting(self, handle: Handle,
                                device_index: int) -> bool:
        ...

    def read_name(self, handle: Handle,
                  device_index: int) -> tuple[bool, str, str]:
        """Return (valid, name, firmware revision)."""

    def read_attribute_records(self, handle: Handle,
                               device_index: int
                               ) -> Sequence[RawAttributeRecord]:
        ...

    def read_threshold_records(self, handle: Handle,
                               device_index: int
                               ) -> Sequence[ThresholdRecord]:
        ...

    def close(self, handle: Handle) -> None:
        ...


class SmartctlTransport:
    """Transport backed by ``smartctl --json``.

    Args:
        ssh_command: Optional function to execute commands via SSH.
                     Should accept a command string and return its stdout.
        smartctl: Name or path of the smartctl executable.

    Drive indices refer to the order of ``smartctl --scan``; the handle is
    the device path reported there.
    """

    invalid_handle: Handle = None

    def __init__(self, ssh_command: Callable[[str], str] | None = None,
                 smartctl: str = "smartctl"):
        self.ssh_command = ssh_command
        self.smartctl = smartctl
        self._devices: list[str] | None = None
        self._open_handles: set[str] = set()

    def _run(self, args: list[str]) -> str:
        command = [self.smartctl, *args]
        if self.ssh_command:
            return self.ssh_command(shlex.join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False
            )
        except OSError as e:
            raise TransportError(f"Cannot run {self.smartctl}: {e}") from e
        return result.stdout

    def _run_json(self, args: list[str]) -> dict:
        output = self._run([*args, "--json"])
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            raise TransportError(
                f"Unparseable smartctl output for {' '.join(args)}: {e}"
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"Unexpected smartctl output for {' '.join(args)}"
            )
        return data

    def _check_open(self, handle: Handle) -> str:
        if handle not in self._open_handles:
            raise TransportError(f"Handle {handle!r} is not open")
        return handle

    def scan(self) -> list[str]:
        """List device paths known to smartctl."""
        data = self._run_json(["--scan"])
        devices = [
            entry["name"] for entry in data.get("devices", [])
            if entry.get("name")
        ]
        logger.debug(f"smartctl --scan found {len(devices)} devices")
        return devices

    def open(self, device_index: int) -> Handle:
        if self._devices is None:
            self._devices = self.scan()
        if not 0 <= device_index < len(self._devices):
            return self.invalid_handle

        device = self._devices[device_index]
        self._open_handles.add(device)
        return device

    def enable_health_reporting(self, handle: Handle,
                                device_index: int) -> bool:
        device = self._check_open(handle)
        data = self._run_json(["-s", "on", device])
        return bool(data.get("smart_support", {}).get("enabled", False))

    def read_name(self, handle: Handle,
                  device_index: int) -> tuple[bool, str, str]:
        device = self._check_open(handle)
        data = self._run_json(["-i", device])
        name = str(data.get("model_name", "")).strip()
        firmware = str(data.get("firmware_version", "")).strip()
        return bool(name), name, firmware

    def _attribute_table(self, device: str) -> list[dict]:
        data = self._run_json(["-A", device])
        return data.get("ata_smart_attributes", {}).get("table", [])

    def read_attribute_records(self, handle: Handle,
                               device_index: int) -> list[RawAttributeRecord]:
        device = self._check_open(handle)
        records = []
        for entry in self._attribute_table(device):
            raw_value = int(entry.get("raw", {}).get("value", 0)) & _RAW_MASK
            records.append(RawAttributeRecord(
                identifier=int(entry["id"]),
                value=int(entry.get("value", 0)),
                worst=int(entry.get("worst", 0)),
                raw=raw_value.to_bytes(RAW_PAYLOAD_SIZE, "little"),
                flags=int(entry.get("flags", {}).get("value", 0)),
            ))
        return records

    def read_threshold_records(self, handle: Handle,
                               device_index: int) -> list[ThresholdRecord]:
        device = self._check_open(handle)
        return [
            ThresholdRecord(int(entry["id"]), int(entry["thresh"]))
            for entry in self._attribute_table(device)
            if "thresh" in entry
        ]

    def close(self, handle: Handle) -> None:
        self._check_open(handle)
        self._open_handles.discard(handle)
