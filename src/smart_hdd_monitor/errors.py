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
# smart-hdd-monitor/src/smart_hdd_monitor/errors.py

"""Exceptions raised by the drive monitor."""


class SmartMonitorError(Exception):
    """Base error for smart_hdd_monitor."""


class TransportError(SmartMonitorError):
    """Raised when the health-data transport cannot open or read a drive."""


class DeviceClosedError(SmartMonitorError):
    """Raised on double close or on a read after the drive was closed."""


class UnsupportedDeviceError(SmartMonitorError):
    """Raised when a drive cannot be matched to any model variant."""


class SettingsError(SmartMonitorError):
    """Raised when the settings file cannot be read or written."""
