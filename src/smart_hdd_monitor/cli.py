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
# smart-hdd-monitor/src/smart_hdd_monitor/cli.py

"""Command-line interface for SMART drive monitoring."""

import json
import subprocess
import time
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from .display import create_attributes_table, display_drives
from .errors import SmartMonitorError, UnsupportedDeviceError
from .harddrive import UPDATE_DIVIDER, Harddrive, discover_drives
from .settings import Settings
from .transport import SmartctlTransport

app = typer.Typer()

SSH_HOST_OPTION = typer.Option(
    None,
    "--ssh-host",
    help="SSH host to read SMART data from instead of the local machine"
)
SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    help="JSON file holding sensor name and visibility overrides"
)
VERBOSE_OPTION = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable verbose logging output"
)


def ssh_exec_factory(host: str):
    """Create an SSH command executor for a specific host."""
    def ssh_exec(command: str) -> str:
        result = subprocess.run(
            ["ssh", host, command],
            capture_output=True,
            text=True,
            check=False
        )
        return result.stdout
    return ssh_exec


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        logger.remove()
        logger.add(lambda _: None)  # Suppress all logging


def _make_transport(ssh_host: str | None) -> SmartctlTransport:
    if ssh_host:
        logger.info(f"Using SSH host {ssh_host} for SMART queries")
        return SmartctlTransport(ssh_command=ssh_exec_factory(ssh_host))
    return SmartctlTransport()


def _load_settings(path: Path | None) -> Settings:
    if path is None:
        return Settings()
    return Settings.load(path)


def _close_all(drives: list[Harddrive]) -> None:
    for drive in drives:
        if not drive.closed:
            drive.close()


@app.command()
def report(
    ssh_host: str | None = SSH_HOST_OPTION,
    settings_file: Path | None = SETTINGS_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Print the SMART attribute report of every supported drive."""
    _configure_logging(verbose)

    drives: list[Harddrive] = []
    try:
        drives = discover_drives(
            _make_transport(ssh_host), _load_settings(settings_file)
        )
        typer.echo("".join(drive.get_report() for drive in drives), nl=False)
    except SmartMonitorError as e:
        logger.error(f"Report failed: {e}")
        raise typer.Exit(1)
    finally:
        _close_all(drives)


@app.command()
def sensors(
    ssh_host: str | None = SSH_HOST_OPTION,
    settings_file: Path | None = SETTINGS_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON"
    ),
    show_hidden: bool = typer.Option(
        False,
        "--all",
        help="Include sensors hidden by default"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Refresh every drive once and show its sensors."""
    _configure_logging(verbose)

    drives: list[Harddrive] = []
    try:
        drives = discover_drives(
            _make_transport(ssh_host), _load_settings(settings_file)
        )
        for drive in drives:
            drive.update()

        if json_output:
            output = [
                {
                    'identifier': drive.identifier,
                    'name': drive.name,
                    'model': drive.model.value,
                    'firmware': drive.firmware_revision,
                    'sensors': [sensor.to_dict() for sensor in drive.sensors],
                }
                for drive in drives
            ]
            typer.echo(json.dumps(output, indent=2))
        else:
            display_drives(drives, Console(), show_hidden=show_hidden)
    except SmartMonitorError as e:
        logger.error(f"Sensor refresh failed: {e}")
        raise typer.Exit(1)
    finally:
        _close_all(drives)


@app.command()
def attributes(
    index: int = typer.Argument(..., help="Drive index as listed by smartctl --scan"),
    ssh_host: str | None = SSH_HOST_OPTION,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output results as JSON"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Show the decoded attribute table of one drive."""
    _configure_logging(verbose)

    drive = None
    try:
        drive = Harddrive.create_instance(_make_transport(ssh_host), index)
        if drive is None:
            raise UnsupportedDeviceError(
                f"Drive {index} is missing or unsupported"
            )

        frame = drive.attribute_frame()
        if json_output:
            typer.echo(json.dumps(frame.to_dicts(), indent=2))
        else:
            Console().print(create_attributes_table(drive, frame))
    except SmartMonitorError as e:
        logger.error(f"Attribute read failed: {e}")
        raise typer.Exit(1)
    finally:
        if drive is not None and not drive.closed:
            drive.close()


@app.command()
def watch(
    ssh_host: str | None = SSH_HOST_OPTION,
    settings_file: Path | None = SETTINGS_OPTION,
    ticks: int = typer.Option(
        3 * UPDATE_DIVIDER,
        "--ticks",
        help="Number of host ticks to run"
    ),
    interval: float = typer.Option(
        1.0,
        "--interval",
        help="Seconds between host ticks"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Poll drives like a monitoring host, redrawing after each refresh."""
    _configure_logging(verbose)

    settings: Settings | None = None
    drives: list[Harddrive] = []
    console = Console()
    try:
        settings = _load_settings(settings_file)
        drives = discover_drives(_make_transport(ssh_host), settings)
        for tick in range(ticks):
            for drive in drives:
                drive.update()
            if tick % UPDATE_DIVIDER == 0:
                display_drives(drives, console)
            time.sleep(interval)
    except SmartMonitorError as e:
        logger.error(f"Polling failed: {e}")
        raise typer.Exit(1)
    finally:
        _close_all(drives)
        if settings is not None and settings.path is not None:
            settings.save()


if __name__ == "__main__":
    app()
