"""Streaming decoder for back-to-back DS housekeeping records.

Wire layout of one record (big-endian throughout)::

    offset  size  field
    0       2     stream id word
    2       2     sequence word
    4       2     length word (total record length - 7)
    6       0/6   seconds (u32) + subseconds (u16), iff stream id bit 11 set
    6/12    8     eight u8 counters
    +8      8     four u16 counters
    +8      16    four u32 counters
    +16     32    NUL-padded filter table filename

Records have no outer framing. A record's extent is the primary header,
the optional time header and the fixed payload. The length word is only
used to check that enough bytes follow, never to skip ahead.
"""

from __future__ import annotations

import time
from collections.abc import Iterator

import structlog

from dshk.core.cursor import ByteCursor
from dshk.core.errors import DecodeError, IncompleteError
from dshk.models.header import CCSDSPrimaryHeader, TelemetrySecondaryHeader
from dshk.models.log import HousekeepingLog
from dshk.models.payload import COUNTER_FIELDS, FILENAME_SIZE, HousekeepingPayload
from dshk.models.record import HousekeepingRecord
from dshk.observability.metrics import DecodeMetrics

log = structlog.get_logger(__name__)

BytesLike = bytes | bytearray | memoryview


def _as_view(data: BytesLike) -> memoryview:
    view = memoryview(data)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


def _read_primary_header(cursor: ByteCursor) -> CCSDSPrimaryHeader:
    stream_id = cursor.read_u16("primary header stream id")
    sequence_word = cursor.read_u16("primary header sequence word")
    declared_length = cursor.read_u16("primary header length")
    return CCSDSPrimaryHeader.from_words(stream_id, sequence_word, declared_length)


def _read_secondary_header(cursor: ByteCursor) -> TelemetrySecondaryHeader:
    seconds = cursor.read_u32("secondary header seconds")
    subseconds = cursor.read_u16("secondary header subseconds")
    return TelemetrySecondaryHeader(seconds=seconds, subseconds=subseconds)


def _read_payload(cursor: ByteCursor) -> HousekeepingPayload:
    u8_fields, u16_fields, u32_fields = COUNTER_FIELDS[:8], COUNTER_FIELDS[8:12], COUNTER_FIELDS[12:]
    values: dict[str, object] = {}
    for name in u8_fields:
        values[name] = cursor.read_u8(name)
    for name in u16_fields:
        values[name] = cursor.read_u16(name)
    for name in u32_fields:
        values[name] = cursor.read_u32(name)
    values["filter_tbl_filename"] = bytes(cursor.take(FILENAME_SIZE, "filter_tbl_filename"))
    return HousekeepingPayload(**values)


def decode_record(data: BytesLike, offset: int = 0) -> tuple[HousekeepingRecord, memoryview]:
    """Decode exactly one record from the front of ``data``.

    Returns the record and a view of the bytes left after it. ``offset`` is
    only used to label errors with the record's position in a larger buffer.

    Raises
    ------
    TruncatedError
        A fixed-size field ran past the end of ``data``.
    IncompleteError
        The length word declares more bytes than ``data`` holds after the
        primary header. ``needed`` is the shortfall.
    """
    cursor = ByteCursor(_as_view(data), record_offset=offset)

    primary = _read_primary_header(cursor)
    if cursor.available < primary.declared_length:
        raise IncompleteError(
            needed=primary.declared_length - cursor.available,
            declared_length=primary.declared_length,
            offset=offset,
        )

    secondary = _read_secondary_header(cursor) if primary.has_secondary_header else None
    payload = _read_payload(cursor)

    record = HousekeepingRecord(
        primary_header=primary,
        secondary_header=secondary,
        payload=payload,
    )
    return record, cursor.remainder()


def iter_records(data: BytesLike) -> Iterator[HousekeepingRecord]:
    """Yield records until ``data`` is exhausted.

    The first failure propagates with ``offset`` set to the failing record's
    position in ``data``. There is no resynchronisation: the format has no
    sync marker or checksum to resync on.
    """
    remaining = _as_view(data)
    offset = 0
    while len(remaining):
        record, rest = decode_record(remaining, offset=offset)
        offset += len(remaining) - len(rest)
        remaining = rest
        yield record


def decode_all(data: BytesLike) -> list[HousekeepingRecord]:
    return list(iter_records(data))


class RecordDecoder:
    """Record loop with logging and optional metrics.

    Holds no decode state between calls; each ``decode`` walks its own
    buffer from the start.
    """

    def __init__(self, metrics: DecodeMetrics | None = None, source_id: str | None = None) -> None:
        self.metrics = metrics
        self.source_id = source_id

    def iter_decode(self, data: BytesLike) -> Iterator[HousekeepingRecord]:
        bound = log.bind(source=self.source_id)
        count = 0
        t0 = time.perf_counter()
        try:
            for record in iter_records(data):
                count += 1
                if self.metrics is not None:
                    self.metrics.record_decoded(record.application_id, record.size)
                bound.debug(
                    "decoder.record.decoded",
                    apid=record.application_id,
                    seq_count=record.sequence_count,
                    size=record.size,
                )
                yield record
        except DecodeError as exc:
            if self.metrics is not None:
                self.metrics.record_error(type(exc).__name__)
            bound.error(
                "decoder.failed",
                error=exc.message,
                kind=type(exc).__name__,
                offset=exc.offset,
                records=count,
            )
            raise
        bound.info(
            "decoder.complete",
            records=count,
            elapsed_s=round(time.perf_counter() - t0, 6),
        )

    def decode(self, data: BytesLike) -> HousekeepingLog:
        """Decode every record in ``data`` into a single HousekeepingLog."""
        hk_log = HousekeepingLog(metadata={"source": self.source_id, "decoder": "dshk"})
        for record in self.iter_decode(data):
            hk_log.add_record(record)
        return hk_log
