"""Text rendering of decoded records.

Pure formatting; nothing here reads bytes.
"""

from __future__ import annotations

from rich.table import Table

from dshk.models.header import CCSDSPrimaryHeader, PacketType, TelemetrySecondaryHeader
from dshk.models.payload import HousekeepingPayload
from dshk.models.record import HousekeepingRecord


def render_primary_header(header: CCSDSPrimaryHeader) -> list[str]:
    return [
        f"stream_id: {header.stream_id}",
        f"application_id: {header.application_id}",
        f"has_secondary_header: {str(header.has_secondary_header).lower()}",
        f"packet_type: {'telemetry' if header.packet_type == PacketType.TELEMETRY else 'command'}",
        f"ccsds_v: {header.ccsds_version.label}",
        f"sequence: {header.sequence_word}",
        f"sequence count: {header.sequence_count}",
        f"sequence flags: {int(header.segmentation_flags)}",
        f"length: {header.declared_length}",
    ]


def render_secondary_header(header: TelemetrySecondaryHeader) -> list[str]:
    return [
        f"seconds: {header.seconds}",
        f"subseconds: {header.subseconds}",
        f"time: {format_time(header)}",
    ]


def format_time(header: TelemetrySecondaryHeader) -> str:
    ts = header.timestamp
    return ts.strftime("%Y-%m-%d %H:%M:%S.") + f"{ts.microsecond // 1000:03d} UTC"


def render_payload(payload: HousekeepingPayload) -> list[str]:
    lines = [f"{name}: {value}" for name, value in payload.counters().items()]
    lines.append(f"filter_tbl_filename: {payload.filter_tbl_filename_text}")
    return lines


def render_record(record: HousekeepingRecord) -> str:
    """Multi-line dump of a record, header first, then payload."""
    lines = ["telemetry_header:", "primary header:"]
    lines += render_primary_header(record.primary_header)
    if record.secondary_header is not None:
        lines.append("secondary header:")
        lines += render_secondary_header(record.secondary_header)
    else:
        lines.append("no secondary header")
    lines.append("payload:")
    lines += render_payload(record.payload)
    return "\n".join(lines)


def summary_table(records: list[HousekeepingRecord], title: str = "") -> Table:
    table = Table(title=title or None, show_lines=False)
    table.add_column("APID", style="cyan", justify="right", no_wrap=True)
    table.add_column("SeqCount", justify="right", no_wrap=True)
    table.add_column("Len", justify="right")
    table.add_column("Type")
    table.add_column("Time")
    table.add_column("Accepted", justify="right")
    table.add_column("Rejected", justify="right")
    table.add_column("Passed", justify="right")
    table.add_column("Filter table")

    for r in records:
        h = r.primary_header
        table.add_row(
            f"0x{h.application_id:04X}",
            str(h.sequence_count),
            str(h.declared_length),
            "TM" if h.packet_type == PacketType.TELEMETRY else "TC",
            format_time(r.secondary_header) if r.secondary_header is not None else "-",
            str(r.payload.cmd_accepted_counter),
            str(r.payload.cmd_rejected_counter),
            str(r.payload.passed_pkt_counter),
            r.payload.filter_tbl_filename_text,
        )
    return table
