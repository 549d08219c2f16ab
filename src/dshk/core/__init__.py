"""Decoding engine: byte cursor, record decoder, file reader."""

from dshk.core.cursor import ByteCursor
from dshk.core.decoder import RecordDecoder, decode_all, decode_record, iter_records
from dshk.core.errors import DecodeError, IncompleteError, TruncatedError
from dshk.core.reader import ReaderConfig, RecordFileReader

__all__ = [
    "ByteCursor",
    "RecordDecoder",
    "decode_record",
    "decode_all",
    "iter_records",
    "DecodeError",
    "TruncatedError",
    "IncompleteError",
    "ReaderConfig",
    "RecordFileReader",
]
