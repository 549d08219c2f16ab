"""HousekeepingLog: an in-memory batch of decoded housekeeping records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import pandas as pd

from dshk.models.record import HousekeepingRecord


@dataclass
class HousekeepingLog:
    """Container for a batch of records decoded from one buffer or file."""

    records: list[HousekeepingRecord] = field(default_factory=list)
    metadata: dict[str, object] = field(default_factory=dict)

    def add_record(self, record: HousekeepingRecord) -> None:
        self.records.append(record)

    def records_by_apid(self, apid: int) -> list[HousekeepingRecord]:
        return [r for r in self.records if r.application_id == apid]

    def iter_records(self) -> Iterator[HousekeepingRecord]:
        yield from self.records

    # ------------------------------------------------------------------ #
    #  DataFrame export                                                     #
    # ------------------------------------------------------------------ #

    def to_dataframe(self) -> pd.DataFrame:
        """Return one row per record: header fields, time fields, counters.

        Records without a secondary header show zero seconds and
        subseconds and an empty ``time`` cell.
        """
        rows = []
        for r in self.records:
            h = r.primary_header
            t = r.time_header
            rows.append(
                {
                    "application_id": h.application_id,
                    "packet_type": h.packet_type.name,
                    "ccsds_version": h.ccsds_version.raw,
                    "has_secondary_header": h.has_secondary_header,
                    "sequence_count": h.sequence_count,
                    "segmentation_flags": int(h.segmentation_flags),
                    "length": h.declared_length,
                    "seconds": t.seconds,
                    "subseconds": t.subseconds,
                    "time": r.timestamp,
                    **r.payload.counters(),
                    "filter_tbl_filename": r.payload.filter_tbl_filename_text,
                }
            )
        return pd.DataFrame(rows)

    # ------------------------------------------------------------------ #
    #  Dunder helpers                                                       #
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return (
            f"HousekeepingLog("
            f"records={len(self.records)}, "
            f"metadata_keys={list(self.metadata.keys())})"
        )
