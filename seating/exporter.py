"""
Seating Export System

Flattens desk views into one record per seat and writes them as a roster
CSV that can be re-imported with the sequential allocator.
"""

import csv
import io
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .models import DeskView, Gender, SeatView
from .roster import DEFAULT_DISABLE_TOKEN, DEFAULT_EMPTY_TOKEN

UTF8_BOM = "\ufeff"


@dataclass
class SeatRecord:
    """One exported seat: a person (name + label) or a marker token"""
    seat_id: str
    name: Optional[str] = None
    gender_label: str = ""
    marker: Optional[str] = None

    @property
    def is_marker(self) -> bool:
        return self.name is None

    def as_row(self) -> List[str]:
        if self.is_marker:
            return [self.marker]
        return [self.name, self.gender_label]


@dataclass
class SeatingExport:
    """Export-ready seat records plus run metadata"""
    records: List[SeatRecord]
    metadata: Dict[str, Any] = field(default_factory=dict)


class SeatingExporter:
    """Exports desk views to a roster-style CSV"""

    def __init__(self,
                 male_label: str = "男",
                 female_label: str = "女",
                 disable_token: str = DEFAULT_DISABLE_TOKEN,
                 empty_token: str = DEFAULT_EMPTY_TOKEN):
        self.gender_labels = {
            Gender.MALE: male_label,
            Gender.FEMALE: female_label,
            Gender.UNKNOWN: "",
        }
        self.disable_token = disable_token
        self.empty_token = empty_token

    def seat_record(self, seat: SeatView) -> SeatRecord:
        if seat.occupant is not None:
            return SeatRecord(
                seat_id=seat.id,
                name=seat.occupant.name,
                gender_label=self.gender_labels[seat.occupant.gender],
            )
        marker = self.disable_token if seat.disabled else self.empty_token
        return SeatRecord(seat_id=seat.id, marker=marker)

    def create_export(self, desks: Sequence[DeskView]) -> SeatingExport:
        """
        Build seat records in traversal order.

        Trailing marker-only records after the last seated person are
        dropped so an empty tail of the room is not exported.
        """
        records = [self.seat_record(seat) for desk in desks for seat in desk.seats]

        last = len(records) - 1
        while last >= 0 and records[last].is_marker:
            last -= 1
        records = records[:last + 1]

        metadata = {
            'timestamp': datetime.now().isoformat(),
            'generator': 'seating',
            'desks': len(desks),
            'seated': sum(1 for r in records if not r.is_marker),
        }
        return SeatingExport(records=records, metadata=metadata)

    def export_lines(self, export: SeatingExport) -> List[str]:
        """CSV lines for the records, quoted the same way export_csv writes them"""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        for record in export.records:
            writer.writerow(record.as_row())
        return buffer.getvalue().splitlines()

    def export_csv(self, export: SeatingExport, output_path: str, bom: bool = True) -> str:
        """Write records as UTF-8 CSV (with a BOM so spreadsheet tools detect the encoding)"""
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, 'w', newline='', encoding='utf-8') as f:
            if bom:
                f.write(UTF8_BOM)
            writer = csv.writer(f, lineterminator='\n')
            for record in export.records:
                writer.writerow(record.as_row())

        return str(output_file)


def create_seating_file(desks: Sequence[DeskView],
                        output_name: Optional[str] = None,
                        exporter: Optional[SeatingExporter] = None,
                        bom: bool = True) -> str:
    """
    Convenience function to export a seating CSV under output/

    Args:
        desks: Desk views to export
        output_name: Base name for output file (timestamped if omitted)
        exporter: Configured exporter (default labels if omitted)
        bom: Prefix the file with a UTF-8 byte order mark

    Returns:
        Path to generated CSV file
    """
    if output_name is None:
        output_name = f"seating_{int(time.time())}"
    if exporter is None:
        exporter = SeatingExporter()

    export = exporter.create_export(desks)
    return exporter.export_csv(export, f"output/{output_name}.csv", bom=bom)
