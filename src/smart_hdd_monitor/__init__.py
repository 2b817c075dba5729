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
# smart-hdd-monitor/src/smart_hdd_monitor/__init__.py

"""SMART drive monitoring.

Classify drives by model from their name and the SMART attributes they
report, expose selected attributes as live sensors, and render diagnostic
attribute reports.
"""

from .catalogs import DriveModel, ModelProfile, classify, profile_for
from .errors import (
    DeviceClosedError,
    SettingsError,
    SmartMonitorError,
    TransportError,
    UnsupportedDeviceError,
)
from .harddrive import UPDATE_DIVIDER, Harddrive, discover_drives
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
from .transport import SmartctlTransport, SmartTransport

__version__ = "0.1.0"

__all__ = [
    "AttributeDefinition",
    "DeviceClosedError",
    "DriveModel",
    "Harddrive",
    "Hardware",
    "ModelProfile",
    "RawAttributeRecord",
    "Sensor",
    "SensorType",
    "Settings",
    "SettingsError",
    "SmartMonitorError",
    "SmartTransport",
    "SmartctlTransport",
    "ThresholdRecord",
    "TransportError",
    "UPDATE_DIVIDER",
    "UnsupportedDeviceError",
    "attribute_frame",
    "classify",
    "discover_drives",
    "profile_for",
    "raw_to_int",
    "render_report",
]
