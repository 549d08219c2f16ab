"""DS (Data Storage) housekeeping telemetry payload."""

from __future__ import annotations

import struct
from typing import Annotated

from pydantic import BaseModel, Field, field_validator

FILENAME_SIZE = 32

# 8 x u8, 4 x u16, 4 x u32, then the raw filename bytes
PAYLOAD_FORMAT = f">8B4H4I{FILENAME_SIZE}s"
PAYLOAD_SIZE = struct.calcsize(PAYLOAD_FORMAT)

U8 = Annotated[int, Field(ge=0, le=0xFF)]
U16 = Annotated[int, Field(ge=0, le=0xFFFF)]
U32 = Annotated[int, Field(ge=0, le=0xFFFFFFFF)]

COUNTER_FIELDS = (
    "cmd_accepted_counter",
    "cmd_rejected_counter",
    "dest_tbl_load_counter",
    "dest_tbl_err_counter",
    "filter_tbl_load_counter",
    "filter_tbl_err_counter",
    "app_enable_state",
    "spare8",
    "file_write_counter",
    "file_write_err_counter",
    "file_update_counter",
    "file_update_err_counter",
    "disabled_pkt_counter",
    "ignored_pkt_counter",
    "filtered_pkt_counter",
    "passed_pkt_counter",
)


def filename_text(raw: bytes) -> str:
    """Return the printable part of a NUL-padded fixed-width name field.

    Everything from the first NUL onward is dropped. A field with no NUL
    uses all its bytes. Bytes map one-to-one onto characters, so any
    content decodes.
    """
    end = raw.find(b"\x00")
    if end != -1:
        raw = raw[:end]
    return raw.decode("latin-1")


class HousekeepingPayload(BaseModel):
    """DS application housekeeping counters, in wire order."""

    model_config = {"frozen": True}

    cmd_accepted_counter: U8 = 0
    cmd_rejected_counter: U8 = 0
    dest_tbl_load_counter: U8 = 0
    dest_tbl_err_counter: U8 = 0
    filter_tbl_load_counter: U8 = 0
    filter_tbl_err_counter: U8 = 0
    app_enable_state: U8 = 0
    spare8: U8 = Field(default=0, description="Structure alignment padding")

    file_write_counter: U16 = 0
    file_write_err_counter: U16 = 0
    file_update_counter: U16 = 0
    file_update_err_counter: U16 = 0

    disabled_pkt_counter: U32 = Field(default=0, description="Packets discarded while DS was disabled")
    ignored_pkt_counter: U32 = Field(
        default=0,
        description="Packets discarded because a table failed to load or no filter entry matched",
    )
    filtered_pkt_counter: U32 = Field(default=0, description="Packets discarded by the filter test")
    passed_pkt_counter: U32 = Field(default=0, description="Packets that passed the filter test")

    filter_tbl_filename: bytes = Field(default=b"\x00" * FILENAME_SIZE, repr=False)

    @field_validator("filter_tbl_filename", mode="before")
    @classmethod
    def _coerce_filename(cls, v: object) -> bytes:
        if isinstance(v, (bytearray, memoryview)):
            v = bytes(v)
        if not isinstance(v, bytes):
            raise ValueError(f"Expected bytes-like, got {type(v)}")
        if len(v) != FILENAME_SIZE:
            raise ValueError(f"Filename field must be {FILENAME_SIZE} bytes, got {len(v)}")
        return v

    @classmethod
    def from_bytes(cls, raw: bytes) -> HousekeepingPayload:
        """Deserialise from the first ``PAYLOAD_SIZE`` raw bytes."""
        if len(raw) < PAYLOAD_SIZE:
            raise ValueError(f"Housekeeping payload requires {PAYLOAD_SIZE} bytes, got {len(raw)}")
        *counters, filename = struct.unpack_from(PAYLOAD_FORMAT, raw)
        return cls(**dict(zip(COUNTER_FIELDS, counters)), filter_tbl_filename=filename)

    def to_bytes(self) -> bytes:
        return struct.pack(
            PAYLOAD_FORMAT,
            *(getattr(self, name) for name in COUNTER_FIELDS),
            self.filter_tbl_filename,
        )

    @property
    def filter_tbl_filename_text(self) -> str:
        """Filter table filename, cut at the first NUL."""
        return filename_text(self.filter_tbl_filename)

    def counters(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in COUNTER_FIELDS}
