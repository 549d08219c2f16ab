"""Tests for the DS housekeeping payload model."""

from __future__ import annotations

import pytest

from dshk.models.payload import (
    FILENAME_SIZE,
    PAYLOAD_SIZE,
    HousekeepingPayload,
    filename_text,
)


class TestFilenameText:
    def test_nul_padded(self) -> None:
        raw = b"abc" + b"\x00" * 29
        assert filename_text(raw) == "abc"

    def test_no_nul_uses_all_32_bytes(self) -> None:
        raw = b"x" * 32
        assert filename_text(raw) == "x" * 32

    def test_bytes_after_first_nul_ignored(self) -> None:
        raw = b"ab\x00garbage".ljust(32, b"\x00")
        assert filename_text(raw) == "ab"

    def test_empty(self) -> None:
        assert filename_text(b"\x00" * 32) == ""

    def test_high_bytes_decode(self) -> None:
        assert filename_text(b"\xe9t\xe9".ljust(32, b"\x00")) == "été"


class TestHousekeepingPayload:
    def test_size(self) -> None:
        assert PAYLOAD_SIZE == 64
        assert FILENAME_SIZE == 32

    def test_from_bytes_field_order(self) -> None:
        raw = (
            bytes(range(1, 9))
            + b"\x01\x00\x02\x00\x03\x00\x04\x00"
            + b"\x00\x00\x00\x0a\x00\x00\x00\x0b\x00\x00\x00\x0c\x00\x00\x00\x0d"
            + b"/cf/filter.tbl".ljust(32, b"\x00")
        )
        payload = HousekeepingPayload.from_bytes(raw)
        assert payload.cmd_accepted_counter == 1
        assert payload.cmd_rejected_counter == 2
        assert payload.dest_tbl_load_counter == 3
        assert payload.dest_tbl_err_counter == 4
        assert payload.filter_tbl_load_counter == 5
        assert payload.filter_tbl_err_counter == 6
        assert payload.app_enable_state == 7
        assert payload.spare8 == 8
        assert payload.file_write_counter == 0x0100
        assert payload.file_write_err_counter == 0x0200
        assert payload.file_update_counter == 0x0300
        assert payload.file_update_err_counter == 0x0400
        assert payload.disabled_pkt_counter == 10
        assert payload.ignored_pkt_counter == 11
        assert payload.filtered_pkt_counter == 12
        assert payload.passed_pkt_counter == 13
        assert payload.filter_tbl_filename_text == "/cf/filter.tbl"
        assert payload.to_bytes() == raw

    def test_filename_bytes_preserved(self) -> None:
        raw_name = b"tbl\x00\xff\xfe".ljust(32, b"\x01")
        payload = HousekeepingPayload(filter_tbl_filename=raw_name)
        assert payload.filter_tbl_filename == raw_name
        assert payload.filter_tbl_filename_text == "tbl"

    def test_filename_wrong_size_rejected(self) -> None:
        with pytest.raises(ValueError, match="32 bytes"):
            HousekeepingPayload(filter_tbl_filename=b"short")

    def test_memoryview_filename_coerced(self) -> None:
        payload = HousekeepingPayload(filter_tbl_filename=memoryview(b"a" * 32))
        assert isinstance(payload.filter_tbl_filename, bytes)

    def test_from_bytes_too_short(self) -> None:
        with pytest.raises(ValueError, match="64 bytes"):
            HousekeepingPayload.from_bytes(b"\x00" * 63)

    def test_counters_in_wire_order(self) -> None:
        names = list(HousekeepingPayload().counters())
        assert names[0] == "cmd_accepted_counter"
        assert names[7] == "spare8"
        assert names[-1] == "passed_pkt_counter"
        assert len(names) == 16
