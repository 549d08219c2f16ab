"""Shared pytest fixtures for the dshk test suite."""

from __future__ import annotations

import struct
from pathlib import Path

import pytest
import structlog

from dshk.models.header import PacketSequenceFlags
from dshk.models.payload import COUNTER_FIELDS, FILENAME_SIZE, PAYLOAD_FORMAT

RECORD_SIZE = 70
RECORD_SIZE_WITH_TIME = 76


# --------------------------------------------------------------------------- #
#  Helper: build a DS housekeeping record as raw bytes                         #
# --------------------------------------------------------------------------- #


def make_raw_record(
    apid: int = 0x0B8,
    seq_count: int = 0,
    sec_hdr: bool = False,
    seconds: int = 0,
    subseconds: int = 0,
    filename: bytes = b"/cf/ds_filtfile.tbl",
    counters: dict[str, int] | None = None,
    version: int = 0,
    packet_type: int = 0,
    seq_flags: int = PacketSequenceFlags.UNSEGMENTED,
    declared_length: int | None = None,
) -> bytes:
    """Build one cFE telemetry packet carrying a DS housekeeping payload.

    Parameters
    ----------
    sec_hdr:
        Set the secondary header flag and emit a 6-byte time header.
    filename:
        Filter table filename; NUL-padded to 32 bytes.
    counters:
        Payload counter values by field name; unspecified counters are 0.
    declared_length:
        Override the length word. Defaults to the correct value,
        total record length - 7.
    """
    values = {name: 0 for name in COUNTER_FIELDS}
    values.update(counters or {})
    payload = struct.pack(
        PAYLOAD_FORMAT,
        *(values[name] for name in COUNTER_FIELDS),
        filename.ljust(FILENAME_SIZE, b"\x00"),
    )
    time_header = struct.pack(">IH", seconds, subseconds) if sec_hdr else b""

    if declared_length is None:
        declared_length = 6 + len(time_header) + len(payload) - 7

    word0 = (version << 13) | (packet_type << 12) | (int(sec_hdr) << 11) | (apid & 0x07FF)
    word1 = (seq_flags << 14) | (seq_count & 0x3FFF)
    return struct.pack(">HHH", word0, word1, declared_length) + time_header + payload


# --------------------------------------------------------------------------- #
#  Fixtures                                                                    #
# --------------------------------------------------------------------------- #


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def raw_record() -> bytes:
    return make_raw_record(
        apid=0x0B8,
        seq_count=42,
        counters={"cmd_accepted_counter": 3, "passed_pkt_counter": 1000},
    )


@pytest.fixture
def raw_record_with_time() -> bytes:
    return make_raw_record(
        apid=0x0B8,
        seq_count=43,
        sec_hdr=True,
        seconds=86400,
        subseconds=250,
    )


@pytest.fixture
def telemetry_dump(tmp_path: Path) -> Path:
    """Write a dump of 10 records alternating between two APIDs, all time-stamped."""
    outfile = tmp_path / "ds_tlm.bin"
    with open(outfile, "wb") as fh:
        for i in range(10):
            fh.write(make_raw_record(
                apid=0x0B8 if i % 2 == 0 else 0x0B9,
                seq_count=i,
                sec_hdr=True,
                seconds=1000 + i,
                counters={"passed_pkt_counter": i * 10},
            ))
    return outfile
