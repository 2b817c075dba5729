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
# smart-hdd-monitor/src/smart_hdd_monitor/report.py

"""Diagnostic attribute report for a drive.

The text layout is a fixed-width table, one row per attribute in the order
the drive reported them, ending at the first 0x00 identifier.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import polars as pl

from .catalogs import ModelProfile
from .smart import END_OF_TABLE, RawAttributeRecord, ThresholdRecord

COLUMNS = (
    ("ID", 3),
    ("Description", 35),
    ("Raw Value", 13),
    ("Worst", 6),
    ("Value", 6),
    ("Thres", 6),
    ("Physical", 8),
)

PLACEHOLDER = "-"

FRAME_SCHEMA = {
    'id': pl.Int64,
    'description': pl.Utf8,
    'raw': pl.Utf8,
    'worst': pl.Int64,
    'value': pl.Int64,
    'threshold': pl.Int64,
    'physical': pl.Float64,
}


@dataclass(frozen=True)
class AttributeRow:
    identifier: int
    description: str
    raw: str
    worst: int
    value: int
    threshold: int | None
    physical: float | None


def format_number(value: float | int) -> str:
    """Format a number the same way regardless of the process locale."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.7g}"


def iter_rows(profile: ModelProfile,
              records: Sequence[RawAttributeRecord],
              thresholds: Sequence[ThresholdRecord]
              ) -> Iterator[AttributeRow]:
    threshold_by_id = {t.identifier: t.threshold for t in thresholds}

    for record in records:
        if record.identifier == END_OF_TABLE:
            break

        description = "Unknown"
        physical = None
        attribute = profile.find(record.identifier)
        if attribute is not None:
            description = attribute.name
            if attribute.has_physical_value:
                physical = attribute.convert(record)

        yield AttributeRow(
            identifier=record.identifier,
            description=description,
            raw=record.raw.hex().upper(),
            worst=record.worst,
            value=record.value,
            threshold=threshold_by_id.get(record.identifier),
            physical=physical,
        )


def _format_line(cells: Sequence[str]) -> str:
    return " " + "".join(
        cell.ljust(width) for cell, (_, width) in zip(cells, COLUMNS)
    )


def render_report(profile: ModelProfile, name: str, firmware_revision: str,
                  records: Sequence[RawAttributeRecord],
                  thresholds: Sequence[ThresholdRecord]) -> str:
    """Render the attribute table, or an empty string without records."""
    if not records:
        return ""

    lines = [
        profile.model.value,
        "",
        f"Drive name: {name}",
        f"Firmware version: {firmware_revision}",
        "",
        _format_line([title for title, _ in COLUMNS]),
    ]

    for row in iter_rows(profile, records, thresholds):
        lines.append(_format_line([
            f"{row.identifier:02X}",
            row.description,
            row.raw,
            format_number(row.worst),
            format_number(row.value),
            (format_number(row.threshold)
             if row.threshold is not None else PLACEHOLDER),
            (format_number(row.physical)
             if row.physical is not None else PLACEHOLDER),
        ]))

    lines.append("")
    return "\n".join(lines) + "\n"


def attribute_frame(profile: ModelProfile,
                    records: Sequence[RawAttributeRecord],
                    thresholds: Sequence[ThresholdRecord]) -> pl.DataFrame:
    """Same rows as the text report, as a polars DataFrame."""
    rows = [
        {
            'id': row.identifier,
            'description': row.description,
            'raw': row.raw,
            'worst': row.worst,
            'value': row.value,
            'threshold': row.threshold,
            'physical': row.physical,
        }
        for row in iter_rows(profile, records, thresholds)
    ]
    return pl.DataFrame(rows, schema=FRAME_SCHEMA)
