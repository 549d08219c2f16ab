"""cFE telemetry header models: CCSDS primary header and cFE time header.

Reference: CCSDS 133.0-B-2 (Space Packet Protocol), cFE MSG module.

All extraction helpers mask and shift; none of them reject a bit pattern.
Every value a 16-bit header word can hold decodes to something
representable, including CCSDS version numbers nobody has assigned yet.
"""

from __future__ import annotations

import struct
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Annotated

from pydantic import BaseModel, Field

PRIMARY_HEADER_SIZE = 6
SECONDARY_HEADER_SIZE = 6

# cFE mission epoch: 2000-01-01 11:58:55.816 UTC
MISSION_EPOCH = datetime(2000, 1, 1, 11, 58, 55, 816000, tzinfo=timezone.utc)


class PacketType(IntEnum):
    """CCSDS packet type (1 bit)."""

    TELEMETRY = 0
    COMMAND = 1


class PacketSequenceFlags(IntEnum):
    """CCSDS sequence flags (2 bits)."""

    CONTINUATION = 0b00
    FIRST_SEGMENT = 0b01
    LAST_SEGMENT = 0b10
    UNSEGMENTED = 0b11


class CcsdsVersion(BaseModel):
    """CCSDS version number (3 bits).

    Only raw values 0 and 1 have a name; the other six are kept as
    ``unknown(raw)`` instead of being treated as errors.
    """

    model_config = {"frozen": True}

    raw: Annotated[int, Field(ge=0, le=7)]

    @property
    def is_version_1(self) -> bool:
        return self.raw == 0

    @property
    def is_version_2(self) -> bool:
        return self.raw == 1

    @property
    def is_unknown(self) -> bool:
        return self.raw > 1

    @property
    def label(self) -> str:
        if self.is_version_1:
            return "version 1"
        if self.is_version_2:
            return "version 2"
        return f"unknown ({self.raw})"

    def __str__(self) -> str:
        return self.label


CCSDS_VERSION_1 = CcsdsVersion(raw=0)
CCSDS_VERSION_2 = CcsdsVersion(raw=1)


# --------------------------------------------------------------------------- #
#  Stream ID word                                                              #
#                                                                              #
#    0x07FF    0  : application ID                                             #
#    0x0800   11  : secondary header: 0 = absent, 1 = present                  #
#    0x1000   12  : packet type:      0 = TLM, 1 = CMD                         #
#    0xE000   13  : CCSDS version:    0 = ver 1, 1 = ver 2                     #
# --------------------------------------------------------------------------- #


def extract_application_id(stream_id: int) -> int:
    return stream_id & 0x07FF


def extract_has_secondary_header(stream_id: int) -> bool:
    return (stream_id & 0x0800) != 0


def extract_packet_type(stream_id: int) -> PacketType:
    return PacketType((stream_id & 0x1000) >> 12)


def extract_ccsds_version(stream_id: int) -> CcsdsVersion:
    return CcsdsVersion(raw=(stream_id & 0xE000) >> 13)


# --------------------------------------------------------------------------- #
#  Sequence word                                                               #
#                                                                              #
#    0x3FFF    0  : sequence count                                             #
#    0xC000   14  : segmentation flags: 3 = complete packet                    #
# --------------------------------------------------------------------------- #


def extract_sequence_count(sequence_word: int) -> int:
    return sequence_word & 0x3FFF


def extract_segmentation_flags(sequence_word: int) -> int:
    return (sequence_word & 0xC000) >> 14


def to_absolute_time(seconds: int, subseconds: int) -> datetime:
    """Convert a cFE (seconds, subseconds) pair to an absolute UTC time.

    ``subseconds`` counts whole milliseconds, not 1/65536 s ticks.
    """
    return MISSION_EPOCH + timedelta(seconds=seconds, milliseconds=subseconds)


class CCSDSPrimaryHeader(BaseModel):
    """6-byte CCSDS Space Packet primary header, as used by cFE.

    Bit layout (48 bits total):
        [3]  version    CCSDS version number
        [1]  type       0=telemetry, 1=command
        [1]  sec_hdr    secondary header present flag
        [11] apid       application ID
        [2]  seq_flags  segmentation flags
        [14] seq_count  packet sequence count (0-16383)
        [16] length     total packet length minus 7
    """

    model_config = {"frozen": True}

    application_id: Annotated[int, Field(ge=0, le=0x7FF)]
    has_secondary_header: bool = False
    packet_type: PacketType = PacketType.TELEMETRY
    ccsds_version: CcsdsVersion = CCSDS_VERSION_1
    sequence_count: Annotated[int, Field(ge=0, le=0x3FFF)] = 0
    segmentation_flags: PacketSequenceFlags = PacketSequenceFlags.UNSEGMENTED
    declared_length: Annotated[int, Field(ge=0, le=0xFFFF)] = 0

    @classmethod
    def from_words(
        cls, stream_id: int, sequence_word: int, declared_length: int
    ) -> CCSDSPrimaryHeader:
        """Build a header from the three big-endian words of the wire format."""
        return cls(
            application_id=extract_application_id(stream_id),
            has_secondary_header=extract_has_secondary_header(stream_id),
            packet_type=extract_packet_type(stream_id),
            ccsds_version=extract_ccsds_version(stream_id),
            sequence_count=extract_sequence_count(sequence_word),
            segmentation_flags=PacketSequenceFlags(extract_segmentation_flags(sequence_word)),
            declared_length=declared_length & 0xFFFF,
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> CCSDSPrimaryHeader:
        """Deserialise from the first 6 raw bytes."""
        if len(raw) < PRIMARY_HEADER_SIZE:
            raise ValueError(f"Primary header requires 6 bytes, got {len(raw)}")
        return cls.from_words(*struct.unpack_from(">HHH", raw))

    @property
    def stream_id(self) -> int:
        return (
            (self.ccsds_version.raw << 13)
            | (int(self.packet_type) << 12)
            | (int(self.has_secondary_header) << 11)
            | self.application_id
        )

    @property
    def sequence_word(self) -> int:
        return (int(self.segmentation_flags) << 14) | self.sequence_count

    def to_bytes(self) -> bytes:
        """Serialise back to 6 bytes."""
        return struct.pack(">HHH", self.stream_id, self.sequence_word, self.declared_length)

    @property
    def total_length(self) -> int:
        """Total packet length in bytes implied by the length word."""
        return self.declared_length + 7

    @property
    def is_complete(self) -> bool:
        """True for an unsegmented (complete) packet."""
        return self.segmentation_flags == PacketSequenceFlags.UNSEGMENTED


class TelemetrySecondaryHeader(BaseModel):
    """cFE telemetry secondary header: 4-byte seconds + 2-byte subseconds."""

    model_config = {"frozen": True}

    seconds: Annotated[int, Field(ge=0, le=0xFFFFFFFF)]
    subseconds: Annotated[int, Field(ge=0, le=0xFFFF)]

    @property
    def timestamp(self) -> datetime:
        return to_absolute_time(self.seconds, self.subseconds)

    def to_bytes(self) -> bytes:
        return struct.pack(">IH", self.seconds, self.subseconds)


# Shown in place of a secondary header the packet does not carry.
ABSENT_SECONDARY_HEADER = TelemetrySecondaryHeader(seconds=0, subseconds=0)
