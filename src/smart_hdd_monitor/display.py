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
# smart-hdd-monitor/src/smart_hdd_monitor/display.py

"""Rich tabular display for drive sensors."""

from collections.abc import Sequence

import polars as pl
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .harddrive import Harddrive
from .hardware import Sensor
from .report import format_number
from .smart import SensorType

TEMP_WARNING = 50.0
TEMP_CRITICAL = 60.0
LIFE_WARNING = 20.0
LIFE_CRITICAL = 10.0

UNITS = {
    SensorType.TEMPERATURE: "°C",
    SensorType.LEVEL: "%",
    SensorType.DATA: " GB",
    SensorType.FACTOR: "",
}


def get_temp_color(temp: float | None, warning: float | None,
                   critical: float | None) -> str:
    """Get color for temperature based on thresholds."""
    if temp is None:
        return "dim"

    if critical and temp >= critical:
        return "red"
    elif warning and temp >= warning:
        return "orange1"
    elif warning and temp >= (warning * 0.9):  # Within 10% of warning
        return "yellow"
    else:
        return "green"


def get_life_color(level: float | None) -> str:
    """Remaining life counts down, so low values are the bad ones."""
    if level is None:
        return "dim"
    if level < LIFE_CRITICAL:
        return "red"
    elif level < LIFE_WARNING:
        return "yellow"
    return "green"


def format_sensor_value(sensor: Sensor) -> Text:
    """Format a sensor reading with its unit and color."""
    if sensor.value is None:
        return Text("N/A", style="dim")

    unit = UNITS[sensor.sensor_type]
    if sensor.sensor_type == SensorType.TEMPERATURE:
        color = get_temp_color(sensor.value, TEMP_WARNING, TEMP_CRITICAL)
        return Text(f"{sensor.value:.0f}{unit}", style=color)
    if sensor.sensor_type == SensorType.LEVEL:
        return Text(f"{sensor.value:.0f}{unit}",
                    style=get_life_color(sensor.value))
    if sensor.sensor_type == SensorType.FACTOR:
        return Text(f"{sensor.value:.2f}")
    return Text(f"{sensor.value:,.0f}{unit}")


def create_sensors_table(drives: Sequence[Harddrive],
                         show_hidden: bool = False) -> Table:
    """Create a table of every active sensor of every drive."""
    table = Table(title="Drive Sensors", show_edge=True)

    table.add_column("Drive", style="cyan")
    table.add_column("Model", style="dim")
    table.add_column("Sensor")
    table.add_column("Type")
    table.add_column("Value", justify="right")
    table.add_column("Min", justify="right", style="dim")
    table.add_column("Max", justify="right", style="dim")

    for drive in drives:
        for sensor in drive.sensors:
            if sensor.hidden and not show_hidden:
                continue

            unit = UNITS[sensor.sensor_type]
            minimum = f"{sensor.min:g}{unit}" if sensor.min is not None else "-"
            maximum = f"{sensor.max:g}{unit}" if sensor.max is not None else "-"

            table.add_row(
                drive.name,
                drive.model.value,
                sensor.name,
                sensor.sensor_type.value,
                format_sensor_value(sensor),
                minimum,
                maximum,
                style="dim" if sensor.hidden else None
            )

    return table


def display_drives(drives: Sequence[Harddrive], console: Console | None = None,
                   show_hidden: bool = False):
    """Display drive sensors using rich tables."""
    if console is None:
        console = Console()

    if not drives:
        console.print("[dim]No supported drives found[/dim]")
        return

    console.print(create_sensors_table(drives, show_hidden=show_hidden))

    console.print("\n[dim]Legend:[/dim]")
    console.print(
        f"[dim]  Temp: orange from {TEMP_WARNING:.0f}°C, "
        f"red from {TEMP_CRITICAL:.0f}°C[/dim]"
    )
    console.print("[dim]  Data: GB written/read since manufacture[/dim]")


def create_attributes_table(drive: Harddrive, frame: pl.DataFrame) -> Table:
    """Create a table from a drive's attribute frame."""
    table = Table(title=f"{drive.name} ({drive.model.value})", show_edge=True)

    table.add_column("ID", style="cyan")
    table.add_column("Description")
    table.add_column("Raw Value", style="dim")
    table.add_column("Worst", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Thres", justify="right")
    table.add_column("Physical", justify="right")

    for row in frame.iter_rows(named=True):
        # Threshold 0 means the attribute can never fail
        failing = bool(row['threshold']) and row['value'] <= row['threshold']
        table.add_row(
            f"{row['id']:02X}",
            row['description'],
            row['raw'],
            str(row['worst']),
            Text(str(row['value']), style="red" if failing else ""),
            str(row['threshold']) if row['threshold'] is not None else "-",
            format_number(row['physical']) if row['physical'] is not None else "-",
            style="bold" if failing else None
        )

    return table
