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
# smart-hdd-monitor/src/smart_hdd_monitor/harddrive.py

"""SMART-capable drives exposed as hardware nodes with live sensors."""

import threading
from collections.abc import Callable, Sequence
from typing import Final, NamedTuple

import polars as pl
from loguru import logger

from .catalogs import DriveModel, classify, profile_for
from .errors import DeviceClosedError, TransportError
from .hardware import Hardware, Sensor
from .report import attribute_frame, render_report
from .settings import Settings
from .smart import (
    AttributeDefinition,
    RawAttributeRecord,
    SensorType,
    ThresholdRecord,
    raw_to_int,
)
from .transport import SmartTransport

# Refresh SMART data only on every 30th update call
UPDATE_DIVIDER: Final[int] = 30

MAX_DRIVES: Final[int] = 32

WRITE_AMPLIFICATION: Final[str] = "Write Amplification"
ATTR_CONTROLLER_WRITES_TO_NAND: Final[int] = 0xE9
ATTR_HOST_WRITES_TO_CONTROLLER: Final[int] = 0xEA


class Harddrive(Hardware):
    """One drive, bound to a single model variant for its whole lifetime.

    The drive owns a transport handle from construction until ``close()``.
    ``update()``, ``get_report()`` and ``attribute_frame()`` each read from
    that handle; an internal lock serialises those reads, so a report may
    be requested from another thread while the host keeps calling
    ``update()``. Everything else assumes a single caller per drive.
    """

    def __init__(self, transport: SmartTransport, model: DriveModel,
                 name: str, firmware_revision: str, index: int,
                 settings: Settings | None = None):
        super().__init__(name, f"/hdd/{index}", settings)
        self.transport = transport
        self.model = model
        self.profile = profile_for(model)
        self.firmware_revision = firmware_revision
        self.index = index
        self.count = 0
        self.attribute_sensors: dict[AttributeDefinition, Sensor] = {}
        self.extra_sensors: dict[str, Sensor] = {}
        self._lock = threading.Lock()
        self._closed = False

        self._handle = transport.open(index)
        if self._handle == transport.invalid_handle:
            raise TransportError(f"Cannot open drive {index}")
        try:
            transport.enable_health_reporting(self._handle, index)
            self._create_sensors()
            hooks = ADDITIONAL_SENSORS.get(model)
            if hooks is not None:
                hooks.create(self)
        except BaseException:
            transport.close(self._handle)
            self._closed = True
            raise

    @classmethod
    def create_instance(cls, transport: SmartTransport, index: int,
                        settings: Settings | None = None
                        ) -> "Harddrive | None":
        """Probe drive ``index`` and build it as the matching model.

        Returns None when the drive cannot be opened, has no valid name, or
        matches no model.
        """
        handle = transport.open(index)
        if handle == transport.invalid_handle:
            return None

        try:
            name_valid, name, firmware_revision = transport.read_name(
                handle, index
            )
            smart_enabled = transport.enable_health_reporting(handle, index)
            records: Sequence[RawAttributeRecord] = []
            if smart_enabled:
                records = transport.read_attribute_records(handle, index)
        finally:
            transport.close(handle)

        if not name_valid or not name:
            logger.warning(f"Drive {index} reported no valid name, skipping")
            return None

        model = classify(name, (record.identifier for record in records))
        if model is None:
            logger.warning(f"No model matches drive {index} ({name})")
            return None

        logger.info(f"Drive {index} ({name}) classified as {model.value}")
        return cls(transport, model, name, firmware_revision, index, settings)

    @property
    def closed(self) -> bool:
        return self._closed

    def _read_records(self) -> list[RawAttributeRecord]:
        if self._closed:
            raise DeviceClosedError(f"{self.identifier} is closed")
        return list(self.transport.read_attribute_records(
            self._handle, self.index
        ))

    def _read_thresholds(self) -> list[ThresholdRecord]:
        if self._closed:
            raise DeviceClosedError(f"{self.identifier} is closed")
        return list(self.transport.read_threshold_records(
            self._handle, self.index
        ))

    def _create_sensors(self) -> None:
        with self._lock:
            records = self._read_records()
        present = {record.identifier for record in records}

        bound: set[tuple[SensorType, int]] = set()
        for attribute in self.profile.catalog:
            if attribute.sensor_type is None:
                continue
            if attribute.identifier not in present:
                continue

            pair = (attribute.sensor_type, attribute.sensor_channel)
            if pair in bound:
                continue

            sensor = Sensor(
                attribute.display_name,
                attribute.sensor_channel,
                attribute.sensor_type,
                self,
                default_hidden=attribute.default_hidden,
                settings=self.settings,
            )
            self.attribute_sensors[attribute] = sensor
            self.activate_sensor(sensor)
            bound.add(pair)

        logger.debug(
            f"{self.identifier}: bound {len(self.attribute_sensors)} sensors"
        )

    def update(self) -> None:
        """Advance one host tick, refreshing sensors on every 30th call."""
        if self._closed:
            raise DeviceClosedError(f"{self.identifier} is closed")

        if self.count == 0:
            with self._lock:
                records = self._read_records()
            by_id = {record.identifier: record for record in records}

            for attribute, sensor in self.attribute_sensors.items():
                record = by_id.get(attribute.identifier)
                if record is not None:
                    sensor.push(attribute.convert(record))

            hooks = ADDITIONAL_SENSORS.get(self.model)
            if hooks is not None:
                hooks.update(self, records)

        self.count = (self.count + 1) % UPDATE_DIVIDER

    def get_report(self) -> str:
        with self._lock:
            records = self._read_records()
            thresholds = self._read_thresholds()
        return render_report(
            self.profile, self.name, self.firmware_revision,
            records, thresholds
        )

    def attribute_frame(self) -> pl.DataFrame:
        with self._lock:
            records = self._read_records()
            thresholds = self._read_thresholds()
        return attribute_frame(self.profile, records, thresholds)

    def close(self) -> None:
        """Release the transport handle. Closing twice is an error."""
        with self._lock:
            if self._closed:
                raise DeviceClosedError(
                    f"{self.identifier} is already closed"
                )
            self.transport.close(self._handle)
            self._closed = True
        logger.debug(f"{self.identifier}: closed")


def _create_write_amplification(drive: Harddrive) -> None:
    sensor = Sensor(WRITE_AMPLIFICATION, 0, SensorType.FACTOR, drive,
                    settings=drive.settings)
    drive.register_sensor(sensor)
    drive.extra_sensors[WRITE_AMPLIFICATION] = sensor


def _update_write_amplification(drive: Harddrive,
                                records: Sequence[RawAttributeRecord]
                                ) -> None:
    nand_writes = None
    host_writes = None
    for record in records:
        if record.identifier == ATTR_CONTROLLER_WRITES_TO_NAND:
            nand_writes = raw_to_int(record)
        if record.identifier == ATTR_HOST_WRITES_TO_CONTROLLER:
            host_writes = raw_to_int(record)

    if nand_writes is None or host_writes is None:
        return

    sensor = drive.extra_sensors[WRITE_AMPLIFICATION]
    sensor.push(nand_writes / host_writes if host_writes > 0 else 0.0)
    drive.activate_sensor(sensor)


class SensorHooks(NamedTuple):
    """Model specific sensors the catalogs cannot express."""
    create: Callable[[Harddrive], None]
    update: Callable[[Harddrive, Sequence[RawAttributeRecord]], None]


ADDITIONAL_SENSORS: Final[dict[DriveModel, SensorHooks]] = {
    DriveModel.SANDFORCE_SSD: SensorHooks(
        create=_create_write_amplification,
        update=_update_write_amplification,
    ),
}


def discover_drives(transport: SmartTransport,
                    settings: Settings | None = None,
                    max_drives: int = MAX_DRIVES) -> list[Harddrive]:
    """Probe drive indices and return every supported drive.

    A drive whose transport fails while probing is logged and skipped.
    """
    drives: list[Harddrive] = []
    try:
        for index in range(max_drives):
            try:
                drive = Harddrive.create_instance(transport, index, settings)
            except TransportError as e:
                logger.error(f"Skipping drive {index}: {e}")
                continue
            if drive is not None:
                drives.append(drive)
    except BaseException:
        for drive in drives:
            drive.close()
        raise
    logger.info(f"Discovered {len(drives)} supported drives")
    return drives
