"""
DS Housekeeping Telemetry Decoder (dshk)
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

Decodes back-to-back cFE telemetry packets carrying the cFS Data Storage
application's housekeeping payload into typed, immutable records.
"""

from dshk.__version__ import __version__
from dshk.core.decoder import RecordDecoder, decode_all, decode_record, iter_records
from dshk.core.errors import DecodeError, IncompleteError, TruncatedError
from dshk.models.record import HousekeepingRecord

__all__ = [
    "__version__",
    "decode_record",
    "decode_all",
    "iter_records",
    "RecordDecoder",
    "DecodeError",
    "TruncatedError",
    "IncompleteError",
    "HousekeepingRecord",
]
