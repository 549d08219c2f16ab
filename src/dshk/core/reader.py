"""File-backed reader: decodes a DS housekeeping dump into record batches.

The whole file is read into memory up front; records are decoded from a
view of that buffer without further copies.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Annotated

import structlog
from pydantic import BaseModel, Field

from dshk.core.decoder import RecordDecoder
from dshk.core.errors import DecodeError
from dshk.models.log import HousekeepingLog
from dshk.observability.metrics import DecodeMetrics

log = structlog.get_logger(__name__)


class ReaderConfig(BaseModel):
    path: Path = Field(description="Path to the binary telemetry file")
    batch_size: Annotated[int, Field(gt=0)] = 256
    apid_filter: list[int] | None = Field(
        default=None,
        description="If set, only yield records whose application ID is in this list",
    )
    max_records: Annotated[int, Field(gt=0)] | None = Field(
        default=None,
        description="Stop after this many records have been yielded",
    )
    source_id: str | None = None


class RecordFileReader:
    """Stream HousekeepingLog batches from a binary dump file.

    Records already decoded are yielded before a decode error propagates,
    so a caller sees everything up to the first bad record.
    """

    def __init__(self, config: ReaderConfig, metrics: DecodeMetrics | None = None) -> None:
        self.config = config
        self.metrics = metrics

    def _new_batch(self) -> HousekeepingLog:
        return HousekeepingLog(
            metadata={"source": str(self.config.path), "reader": "binary"}
        )

    def read(self) -> Iterator[HousekeepingLog]:
        path = self.config.path
        if not path.exists():
            raise FileNotFoundError(f"Telemetry file not found: {path}")

        data = path.read_bytes()
        log.info("reader.opened", path=str(path), size=len(data))

        decoder = RecordDecoder(metrics=self.metrics, source_id=self.config.source_id or str(path))
        apids = set(self.config.apid_filter) if self.config.apid_filter else None

        batch = self._new_batch()
        yielded = 0
        try:
            for record in decoder.iter_decode(data):
                if apids is not None and record.application_id not in apids:
                    continue
                batch.add_record(record)
                yielded += 1

                if self.config.max_records is not None and yielded >= self.config.max_records:
                    break

                if len(batch) >= self.config.batch_size:
                    log.debug("reader.batch", records=len(batch))
                    yield batch
                    batch = self._new_batch()
        except DecodeError:
            if batch.records:
                yield batch
            raise

        if batch.records:
            log.debug("reader.batch", records=len(batch))
            yield batch
