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
# smart-hdd-monitor/src/smart_hdd_monitor/catalogs.py

"""Drive model variants, their attribute catalogs, and model classification.

Variants are tried in ``CLASSIFICATION_ORDER``. A variant matches when every
one of its required attribute identifiers is present and the drive name
starts with one of its name prefixes. Vendor specific variants therefore
have to precede ``GENERIC_HARD_DISK``, which requires nothing and accepts
any name.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Final

from loguru import logger

from .smart import (
    AttributeDefinition,
    RawConversion,
    SensorType,
    raw_first_byte,
    raw_to_gb,
    raw_to_int,
    raw_to_lba_gb,
)

HOST_WRITES: Final[str] = "Host Writes"
HOST_READS: Final[str] = "Host Reads"
POWER_ON_HOURS: Final[str] = "Power-On Hours (POH)"
POWER_CYCLE_COUNT: Final[str] = "Power Cycle Count"
REMAINING_LIFE: Final[str] = "Remaining Life"
TEMPERATURE: Final[str] = "Temperature"
UNKNOWN: Final[str] = "Unknown"

# An empty prefix accepts any drive name
ANY_NAME: Final[str] = ""


class DriveModel(Enum):
    PLEXTOR_SSD = "PlextorSSD"
    INTEL_SSD = "IntelSSD"
    SANDFORCE_SSD = "SandforceSSD"
    INDILINX_SSD = "IndilinxSSD"
    SAMSUNG_SSD = "SamsungSSD"
    GENERIC_HARD_DISK = "GenericHardDisk"


@dataclass(frozen=True)
class ModelProfile:
    """Static matching rules and attribute catalog of one drive model."""
    model: DriveModel
    name_prefixes: tuple[str, ...]
    required_attributes: frozenset[int]
    catalog: tuple[AttributeDefinition, ...]

    def find(self, identifier: int) -> AttributeDefinition | None:
        for attribute in self.catalog:
            if attribute.identifier == identifier:
                return attribute
        return None


def _attr(identifier: int, name: str,
          conversion: RawConversion | None = None,
          sensor_type: SensorType | None = None, channel: int = 0,
          sensor_name: str | None = None,
          hidden: bool = False) -> AttributeDefinition:
    return AttributeDefinition(
        identifier=identifier,
        name=name,
        conversion=conversion,
        sensor_type=sensor_type,
        sensor_channel=channel,
        sensor_name=sensor_name,
        default_hidden=hidden,
    )


PLEXTOR_CATALOG: Final[tuple[AttributeDefinition, ...]] = (
    _attr(0x05, "Reallocated Sectors Count", raw_to_int),
    _attr(0x09, POWER_ON_HOURS, raw_to_int),
    _attr(0x0C, POWER_CYCLE_COUNT, raw_to_int),
    _attr(0xF1, HOST_WRITES, raw_to_gb, SensorType.DATA, 0),
    _attr(0xF2, HOST_READS, raw_to_gb, SensorType.DATA, 1),
)

INTEL_CATALOG: Final[tuple[AttributeDefinition, ...]] = (
    _attr(0x01, "Read Error Rate"),
    _attr(0x03, "Spin-Up Time"),
    _attr(0x04, "Start/Stop Count", raw_to_int),
    _attr(0x05, "Reallocated Sectors Count"),
    _attr(0x09, POWER_ON_HOURS, raw_to_int),
    _attr(0x0C, POWER_CYCLE_COUNT, raw_to_int),
    _attr(0xAA, "Available Reserved Space"),
    _attr(0xAB, "Program Fail Count"),
    _attr(0xAC, "Erase Fail Count"),
    _attr(0xB8, "End-to-End Error"),
    _attr(0xC0, "Unsafe Shutdown Count"),
    _attr(0xE1, HOST_WRITES, raw_to_gb, SensorType.DATA, 0),
    _attr(0xE8, REMAINING_LIFE, None, SensorType.LEVEL, 0),
    _attr(0xE9, "Media Wearout Indicator"),
    _attr(0xF1, HOST_WRITES, raw_to_gb, SensorType.DATA, 0),
    _attr(0xF2, HOST_READS, raw_to_gb, SensorType.DATA, 1),
)

SANDFORCE_CATALOG: Final[tuple[AttributeDefinition, ...]] = (
    _attr(0x01, "Raw Read Error Rate"),
    _attr(0x05, "Retired Block Count", raw_to_int),
    _attr(0x09, POWER_ON_HOURS, raw_to_int),
    _attr(0x0C, POWER_CYCLE_COUNT, raw_to_int),
    _attr(0xAB, "Program Fail Count", raw_to_int),
    _attr(0xAC, "Erase Fail Count", raw_to_int),
    _attr(0xAE, "Unexpected Power Loss Count", raw_to_int),
    _attr(0xB1, "Wear Range Delta", raw_to_int),
    _attr(0xB5, "Alternative Program Fail Count", raw_to_int),
    _attr(0xB6, "Alternative Erase Fail Count", raw_to_int),
    _attr(0xBB, "Uncorrectable Error Count", raw_to_int),
    _attr(0xC2, TEMPERATURE, raw_to_int, SensorType.TEMPERATURE, 0,
          hidden=True),
    _attr(0xC3, "Unrecoverable ECC"),
    _attr(0xC4, "Reallocation Event Count", raw_to_int),
    _attr(0xE7, REMAINING_LIFE, None, SensorType.LEVEL, 0),
    _attr(0xE9, "Controller Writes to NAND", raw_to_int, SensorType.DATA, 0),
    _attr(0xEA, "Host Writes to Controller", raw_to_int, SensorType.DATA, 1),
    _attr(0xF1, HOST_WRITES, raw_to_int, SensorType.DATA, 1),
    _attr(0xF2, HOST_READS, raw_to_int, SensorType.DATA, 2),
)

INDILINX_CATALOG: Final[tuple[AttributeDefinition, ...]] = (
    _attr(0x01, "Read Error Rate"),
    _attr(0x09, POWER_ON_HOURS),
    _attr(0x0C, POWER_CYCLE_COUNT),
    _attr(0xB8, "Initial Bad Block Count"),
    _attr(0xC3, "Program Failure"),
    _attr(0xC4, "Erase Failure"),
    _attr(0xC5, "Read Failure"),
    _attr(0xC6, "Sectors Read"),
    _attr(0xC7, "Sectors Written"),
    _attr(0xC8, "Read Commands"),
    _attr(0xC9, "Write Commands"),
    _attr(0xCA, "Error Bits from Flash"),
    _attr(0xCB, "Corrected Errors"),
    _attr(0xCC, "Bad Block Full Flag"),
    _attr(0xCD, "Max Cell Cycles"),
    _attr(0xCE, "Min Erase"),
    _attr(0xCF, "Max Erase"),
    _attr(0xD0, "Average Erase Count"),
    _attr(0xD1, REMAINING_LIFE, None, SensorType.LEVEL, 0),
    _attr(0xD2, "Unknown Unique"),
    _attr(0xD3, "SATA Error Count CRC"),
    _attr(0xD4, "SATA Error Count Handshake"),
)

SAMSUNG_CATALOG: Final[tuple[AttributeDefinition, ...]] = (
    _attr(0x09, POWER_ON_HOURS, raw_to_int),
    _attr(0x0C, POWER_CYCLE_COUNT, raw_to_int),
    _attr(0xAF, "Program Fail Count (Chip)", raw_to_int),
    _attr(0xB0, "Erase Fail Count (Chip)", raw_to_int),
    _attr(0xB1, "Wear Leveling Count", None, SensorType.LEVEL, 0,
          sensor_name=REMAINING_LIFE),
    _attr(0xB2, "Used Reserved Block Count (Chip)", raw_to_int),
    _attr(0xB3, "Used Reserved Block Count (Total)", raw_to_int),
    _attr(0xB4, "Unused Reserved Block Count (Total)", raw_to_int),
    _attr(0xB5, "Program Fail Count (Total)", raw_to_int),
    _attr(0xB6, "Erase Fail Count (Total)", raw_to_int),
    _attr(0xB7, "Runtime Bad Block (Total)", raw_to_int),
    _attr(0xBB, "Uncorrectable Error Count", raw_to_int),
    _attr(0xBE, TEMPERATURE, raw_first_byte, SensorType.TEMPERATURE, 0),
    _attr(0xC2, "Airflow Temperature"),
    _attr(0xC3, "ECC Rate"),
    _attr(0xC6, "Off-Line Uncorrectable Error Count", raw_to_int),
    _attr(0xC7, "CRC Error Count", raw_to_int),
    _attr(0xC9, "Supercap Status"),
    _attr(0xCA, "Exception Mode Status"),
    _attr(0xEB, "Power Recovery Count"),
    _attr(0xF1, "Total LBAs Written", raw_to_lba_gb, SensorType.DATA, 0,
          sensor_name="Total Bytes Written"),
)

GENERIC_CATALOG: Final[tuple[AttributeDefinition, ...]] = (
    _attr(0x01, "Read Error Rate"),
    _attr(0x02, "Throughput Performance"),
    _attr(0x03, "Spin-Up Time"),
    _attr(0x04, "Start/Stop Count", raw_to_int),
    _attr(0x05, "Reallocated Sectors Count"),
    _attr(0x06, "Read Channel Margin"),
    _attr(0x07, "Seek Error Rate"),
    _attr(0x08, "Seek Time Performance"),
    _attr(0x09, POWER_ON_HOURS, raw_to_int),
    _attr(0x0A, "Spin Retry Count"),
    _attr(0x0B, "Recalibration Retries"),
    _attr(0x0C, POWER_CYCLE_COUNT, raw_to_int),
    _attr(0x0D, "Soft Read Error Rate"),
    _attr(0xAA, UNKNOWN),
    _attr(0xAB, UNKNOWN),
    _attr(0xAC, UNKNOWN),
    _attr(0xB7, "SATA Downshift Error Count"),
    _attr(0xB8, "End-to-End Error"),
    _attr(0xB9, "Head Stability"),
    _attr(0xBA, "Induced Op-Vibration Detection"),
    _attr(0xBB, "Reported Uncorrectable Errors"),
    _attr(0xBC, "Command Timeout"),
    _attr(0xBD, "High Fly Writes"),
    _attr(0xBF, "G-Sense Error Rate"),
    _attr(0xC0, "Emergency Retract Cycle Count"),
    _attr(0xC1, "Load Cycle Count"),
    _attr(0xC3, "Hardware ECC Recovered"),
    _attr(0xC4, "Reallocation Event Count"),
    _attr(0xC5, "Current Pending Sector Count"),
    _attr(0xC6, "Uncorrectable Sector Count"),
    _attr(0xC7, "UltraDMA CRC Error Count"),
    _attr(0xC8, "Write Error Rate"),
    _attr(0xCA, "Data Address Mark errors"),
    _attr(0xCB, "Run Out Cancel"),
    _attr(0xCC, "Soft ECC Correction"),
    _attr(0xCD, "Thermal Asperity Rate (TAR)"),
    _attr(0xCE, "Flying Height"),
    _attr(0xCF, "Spin High Current"),
    _attr(0xD0, "Spin Buzz"),
    _attr(0xD1, "Offline Seek Performance"),
    _attr(0xD3, "Vibration During Write"),
    _attr(0xD4, "Shock During Write"),
    _attr(0xDC, "Disk Shift"),
    _attr(0xDD, "G-Sense Error Rate (Alternative)"),
    _attr(0xDE, "Loaded Hours"),
    _attr(0xDF, "Load/Unload Retry Count"),
    _attr(0xE0, "Load Friction"),
    _attr(0xE1, "Load/Unload Cycle Count"),
    _attr(0xE2, "Load-in Time"),
    _attr(0xE3, "Torque Amplification Count"),
    _attr(0xE4, "Power-Off Retract Cycle"),
    _attr(0xE6, "GMR Head Amplitude"),
    _attr(0xE8, "Endurance Remaining"),
    _attr(0xE9, POWER_ON_HOURS),
    _attr(0xF0, "Head Flying Hours"),
    _attr(0xF1, "Total LBAs Written"),
    _attr(0xF2, "Total LBAs Read"),
    _attr(0xFA, "Read Error Retry Rate"),
    _attr(0xFE, "Free Fall Protection"),

    _attr(0xC2, TEMPERATURE, raw_first_byte, SensorType.TEMPERATURE, 0),
    _attr(0xE7, TEMPERATURE, raw_first_byte, SensorType.TEMPERATURE, 0),
    _attr(0xBE, "Temperature Difference from 100", raw_first_byte,
          SensorType.TEMPERATURE, 0, sensor_name=TEMPERATURE),
)

PROFILES: Final[dict[DriveModel, ModelProfile]] = {
    DriveModel.PLEXTOR_SSD: ModelProfile(
        DriveModel.PLEXTOR_SSD, ("PLEXTOR",), frozenset({0x05}),
        PLEXTOR_CATALOG,
    ),
    DriveModel.INTEL_SSD: ModelProfile(
        DriveModel.INTEL_SSD, ("INTEL SSD",), frozenset({0xE1, 0xE8, 0xE9}),
        INTEL_CATALOG,
    ),
    DriveModel.SANDFORCE_SSD: ModelProfile(
        DriveModel.SANDFORCE_SSD, (ANY_NAME,), frozenset({0xAB, 0xB1}),
        SANDFORCE_CATALOG,
    ),
    DriveModel.INDILINX_SSD: ModelProfile(
        DriveModel.INDILINX_SSD, (ANY_NAME,),
        frozenset({0x01, 0x09, 0x0C, 0xD1, 0xCE, 0xCF}),
        INDILINX_CATALOG,
    ),
    DriveModel.SAMSUNG_SSD: ModelProfile(
        DriveModel.SAMSUNG_SSD, (ANY_NAME,),
        frozenset({0xB1, 0xB3, 0xB5, 0xB6, 0xB7, 0xBB, 0xC3, 0xC7}),
        SAMSUNG_CATALOG,
    ),
    DriveModel.GENERIC_HARD_DISK: ModelProfile(
        DriveModel.GENERIC_HARD_DISK, (ANY_NAME,), frozenset(),
        GENERIC_CATALOG,
    ),
}

CLASSIFICATION_ORDER: Final[tuple[DriveModel, ...]] = (
    DriveModel.PLEXTOR_SSD,
    DriveModel.INTEL_SSD,
    DriveModel.SANDFORCE_SSD,
    DriveModel.INDILINX_SSD,
    DriveModel.SAMSUNG_SSD,
    DriveModel.GENERIC_HARD_DISK,
)


def profile_for(model: DriveModel) -> ModelProfile:
    return PROFILES[model]


def classify(device_name: str,
             present_identifiers: Iterable[int]) -> DriveModel | None:
    """Pick the first model whose required attributes and name prefix match.

    Prefixes are compared case-sensitively. Returns None when nothing
    matches, which the caller treats as an unsupported drive.
    """
    present = frozenset(present_identifiers)
    for model in CLASSIFICATION_ORDER:
        profile = PROFILES[model]

        missing = profile.required_attributes - present
        if missing:
            logger.debug(
                f"{model.value} rejected for {device_name!r}: missing "
                f"{sorted(f'{i:02X}' for i in missing)}"
            )
            continue

        for prefix in profile.name_prefixes:
            if device_name.startswith(prefix):
                return model

    return None
