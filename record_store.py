"""
Read-only CSV record store.

An empty file (headers only) is a legitimate "no data" state and returns [].
Anything that prevents reading the store raises RecordStoreError.
"""

import logging
import os
from datetime import date

import pandas as pd

from daily_records import DailyRecord, filter_by_store, frame_to_records, parse_date

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """The record store could not be read. Distinct from an empty store."""


class CsvRecordStore:
    def __init__(self, path: str):
        self.path = path

    def _read_frame(self) -> pd.DataFrame:
        if not os.path.isfile(self.path):
            logger.error("Record store not found: %s", self.path)
            raise RecordStoreError(f"Record store not found: {self.path}")
        try:
            return pd.read_csv(self.path)
        except pd.errors.EmptyDataError:
            return pd.DataFrame()
        except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
            logger.error("Failed to read record store %s: %s", self.path, e)
            raise RecordStoreError(f"Failed to read record store {self.path}: {e}") from e

    def list_records(
        self,
        store_id: str | None = None,
        start: str | date | None = None,
        end: str | date | None = None,
    ) -> list[DailyRecord]:
        df = self._read_frame()
        if df.empty:
            logger.info("Record store %s is empty", self.path)
            return []
        try:
            records = frame_to_records(df)
        except ValueError as e:
            logger.error("Record store %s has an invalid schema: %s", self.path, e)
            raise RecordStoreError(f"Invalid record store schema: {e}") from e

        records = filter_by_store(records, store_id)
        if start is not None:
            start_d = parse_date(start)
            records = [r for r in records if r.day >= start_d]
        if end is not None:
            end_d = parse_date(end)
            records = [r for r in records if r.day <= end_d]
        logger.info("Loaded %d records from %s", len(records), self.path)
        return records

    def list_stores(self) -> dict[str, str]:
        """Store directory: id -> name, in order of first appearance."""
        stores: dict[str, str] = {}
        for r in self.list_records():
            stores.setdefault(r.storeId, r.storeName)
        return stores
