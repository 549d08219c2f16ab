"""Typed data models for DS housekeeping telemetry records."""

from dshk.models.header import (
    ABSENT_SECONDARY_HEADER,
    CCSDS_VERSION_1,
    CCSDS_VERSION_2,
    MISSION_EPOCH,
    CCSDSPrimaryHeader,
    CcsdsVersion,
    PacketSequenceFlags,
    PacketType,
    TelemetrySecondaryHeader,
    extract_application_id,
    extract_ccsds_version,
    extract_has_secondary_header,
    extract_packet_type,
    extract_segmentation_flags,
    extract_sequence_count,
    to_absolute_time,
)
from dshk.models.log import HousekeepingLog
from dshk.models.payload import FILENAME_SIZE, PAYLOAD_SIZE, HousekeepingPayload
from dshk.models.record import HousekeepingRecord

__all__ = [
    "ABSENT_SECONDARY_HEADER",
    "CCSDS_VERSION_1",
    "CCSDS_VERSION_2",
    "MISSION_EPOCH",
    "CCSDSPrimaryHeader",
    "CcsdsVersion",
    "PacketSequenceFlags",
    "PacketType",
    "TelemetrySecondaryHeader",
    "extract_application_id",
    "extract_ccsds_version",
    "extract_has_secondary_header",
    "extract_packet_type",
    "extract_segmentation_flags",
    "extract_sequence_count",
    "to_absolute_time",
    "HousekeepingPayload",
    "FILENAME_SIZE",
    "PAYLOAD_SIZE",
    "HousekeepingRecord",
    "HousekeepingLog",
]
