"""A decoded DS housekeeping telemetry record."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, model_validator

from dshk.models.header import (
    ABSENT_SECONDARY_HEADER,
    PRIMARY_HEADER_SIZE,
    SECONDARY_HEADER_SIZE,
    CCSDSPrimaryHeader,
    TelemetrySecondaryHeader,
)
from dshk.models.payload import PAYLOAD_SIZE, HousekeepingPayload


class HousekeepingRecord(BaseModel):
    """One cFE telemetry packet carrying a DS housekeeping payload.

    ``secondary_header`` is ``None`` when the primary header says the packet
    has none. Consumers that expect the time header to always be present
    should read ``time_header``, which substitutes zero seconds and
    subseconds for a missing one.
    """

    model_config = {"frozen": True}

    primary_header: CCSDSPrimaryHeader
    secondary_header: TelemetrySecondaryHeader | None = None
    payload: HousekeepingPayload

    @model_validator(mode="after")
    def _check_secondary_header_flag(self) -> HousekeepingRecord:
        present = self.secondary_header is not None
        if present != self.primary_header.has_secondary_header:
            raise ValueError(
                "Secondary header mismatch: primary header flag is "
                f"{self.primary_header.has_secondary_header}, secondary header "
                f"{'present' if present else 'absent'}"
            )
        return self

    @property
    def time_header(self) -> TelemetrySecondaryHeader:
        return self.secondary_header or ABSENT_SECONDARY_HEADER

    @property
    def timestamp(self) -> datetime | None:
        if self.secondary_header is None:
            return None
        return self.secondary_header.timestamp

    @property
    def size(self) -> int:
        """Number of bytes this record occupies on the wire."""
        size = PRIMARY_HEADER_SIZE + PAYLOAD_SIZE
        if self.secondary_header is not None:
            size += SECONDARY_HEADER_SIZE
        return size

    @property
    def application_id(self) -> int:
        return self.primary_header.application_id

    @property
    def sequence_count(self) -> int:
        return self.primary_header.sequence_count

    def to_bytes(self) -> bytes:
        sec = self.secondary_header.to_bytes() if self.secondary_header is not None else b""
        return self.primary_header.to_bytes() + sec + self.payload.to_bytes()
