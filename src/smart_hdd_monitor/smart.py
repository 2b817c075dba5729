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
# smart-hdd-monitor/src/smart_hdd_monitor/smart.py

"""SMART record shapes, attribute definitions and raw value conversions."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Final

# Identifier 0x00 terminates the valid part of an attribute table
END_OF_TABLE: Final[int] = 0x00

RAW_PAYLOAD_SIZE: Final[int] = 6


class SensorType(Enum):
    """Kind of host-visible sensor an attribute can feed."""
    TEMPERATURE = "temperature"
    LEVEL = "level"
    DATA = "data"
    FACTOR = "factor"


@dataclass(frozen=True)
class RawAttributeRecord:
    """One attribute entry as returned by the drive."""
    identifier: int
    value: int  # normalized current value
    worst: int
    raw: bytes
    flags: int = 0


@dataclass(frozen=True)
class ThresholdRecord:
    """Vendor threshold for the attribute with the same identifier."""
    identifier: int
    threshold: int


RawConversion = Callable[[RawAttributeRecord], float]


def raw_to_int(record: RawAttributeRecord) -> float:
    """Reassemble the first four raw payload bytes as a little-endian counter."""
    raw = record.raw
    return float((raw[3] << 24) | (raw[2] << 16) | (raw[1] << 8) | raw[0])


def raw_to_gb(record: RawAttributeRecord) -> float:
    """Counter reported in units of 32 MiB, as GB."""
    return raw_to_int(record) / 32


def raw_first_byte(record: RawAttributeRecord) -> float:
    """Temperatures live in the lowest raw byte; the rest is min/max history."""
    return float(record.raw[0])


def normalized_value(record: RawAttributeRecord) -> float:
    return float(record.value)


def raw_to_lba_gb(record: RawAttributeRecord) -> float:
    """48-bit count of 512 byte LBAs, as GiB."""
    lbas = int.from_bytes(record.raw[:RAW_PAYLOAD_SIZE], "little")
    return lbas * 512 / (1024 ** 3)


@dataclass(frozen=True)
class AttributeDefinition:
    """Catalog entry describing one attribute a drive model reports.

    An entry with a ``sensor_type`` feeds the sensor on
    (``sensor_type``, ``sensor_channel``). Without an explicit
    ``conversion`` such a sensor shows the normalized value.
    """
    identifier: int
    name: str
    conversion: RawConversion | None = None
    sensor_type: SensorType | None = None
    sensor_channel: int = 0
    sensor_name: str | None = None
    default_hidden: bool = False

    @property
    def has_raw_conversion(self) -> bool:
        return self.conversion is not None

    @property
    def has_physical_value(self) -> bool:
        return self.has_raw_conversion or self.sensor_type is not None

    @property
    def display_name(self) -> str:
        return self.sensor_name or self.name

    def convert(self, record: RawAttributeRecord) -> float:
        if self.conversion is not None:
            return self.conversion(record)
        return normalized_value(record)
