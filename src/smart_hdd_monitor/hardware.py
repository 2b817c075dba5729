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
# smart-hdd-monitor/src/smart_hdd_monitor/hardware.py

"""Sensors and the hosting hardware node they are registered with."""

from collections.abc import Callable, Iterator

from .settings import Settings
from .smart import SensorType


class Sensor:
    """A host-visible numeric value slot.

    Visibility and display name default to the values given at creation and
    can be overridden through ``Settings``.
    """

    def __init__(self, name: str, channel: int, sensor_type: SensorType,
                 hardware: "Hardware", default_hidden: bool = False,
                 settings: Settings | None = None):
        self.channel = channel
        self.sensor_type = sensor_type
        self.hardware = hardware
        self.default_name = name
        self.default_hidden = default_hidden
        self.settings = settings if settings is not None else Settings()
        self.identifier = (
            f"{hardware.identifier}/{sensor_type.value}/{channel}"
        )
        self.value: float | None = None
        self.min: float | None = None
        self.max: float | None = None

    @property
    def name(self) -> str:
        return self.settings.get(f"{self.identifier}/name", self.default_name)

    @name.setter
    def name(self, value: str) -> None:
        if value:
            self.settings.set(f"{self.identifier}/name", value)
        else:
            self.settings.remove(f"{self.identifier}/name")

    @property
    def hidden(self) -> bool:
        return self.settings.get_bool(
            f"{self.identifier}/hidden", self.default_hidden
        )

    @hidden.setter
    def hidden(self, value: bool) -> None:
        self.settings.set(f"{self.identifier}/hidden", value)

    def push(self, value: float) -> None:
        """Store a new reading and track the extremes seen so far."""
        self.value = value
        self.min = value if self.min is None else min(self.min, value)
        self.max = value if self.max is None else max(self.max, value)

    def accept(self, visitor: Callable[["Sensor"], None]) -> None:
        visitor(self)

    def to_dict(self) -> dict:
        return {
            'identifier': self.identifier,
            'name': self.name,
            'type': self.sensor_type.value,
            'channel': self.channel,
            'hidden': self.hidden,
            'value': self.value,
            'min': self.min,
            'max': self.max,
        }

    def __repr__(self) -> str:
        return f"Sensor({self.identifier!r}, {self.name!r}, value={self.value})"


class Hardware:
    """A hardware node owning a set of sensors.

    ``register_sensor`` makes a sensor known to the node; only activated
    sensors are visited by ``for_each_sensor``.
    """

    def __init__(self, name: str, identifier: str,
                 settings: Settings | None = None):
        self.name = name
        self.identifier = identifier
        self.settings = settings if settings is not None else Settings()
        self._registered: list[Sensor] = []
        self._active: list[Sensor] = []

    def register_sensor(self, sensor: Sensor) -> None:
        if sensor not in self._registered:
            self._registered.append(sensor)

    def activate_sensor(self, sensor: Sensor) -> None:
        self.register_sensor(sensor)
        if sensor not in self._active:
            self._active.append(sensor)

    @property
    def sensors(self) -> tuple[Sensor, ...]:
        return tuple(self._active)

    def __iter__(self) -> Iterator[Sensor]:
        return iter(self.sensors)

    def for_each_sensor(self, visitor: Callable[[Sensor], None]) -> None:
        for sensor in self.sensors:
            sensor.accept(visitor)
