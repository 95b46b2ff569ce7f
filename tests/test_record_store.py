import logging

import pytest

from chat_engine import analyze
from mode_definitions import NO_DATA_MESSAGE
from record_store import CsvRecordStore, RecordStoreError

CSV = """date,storeId,storeName,sales,purchase,laborCost,utilities,promotion,cleaning,misc,communication,others
2026-10-01,s1,Ekimae,1000,300,200,50,10,5,5,5,5
2026-10-02,s1,Ekimae,1100,320,210,50,10,5,5,5,5
2026-10-02,s2,Honten,900,280,260,40,10,5,5,5,5
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "daily_reports.csv"
    path.write_text(CSV, encoding="utf-8")
    return str(path)


def test_list_records(csv_path):
    records = CsvRecordStore(csv_path).list_records()
    assert len(records) == 3
    assert records[0].storeName == "Ekimae"
    assert records[0].total_expenses == 580


def test_filter_by_store_and_dates(csv_path):
    store = CsvRecordStore(csv_path)
    assert len(store.list_records(store_id="s1")) == 2
    assert [r.date for r in store.list_records(start="2026-10-02")] == ["2026-10-02", "2026-10-02"]
    assert [r.storeId for r in store.list_records(store_id="s1", end="2026-10-01")] == ["s1"]


def test_list_stores(csv_path):
    assert CsvRecordStore(csv_path).list_stores() == {"s1": "Ekimae", "s2": "Honten"}


def test_missing_file_raises(tmp_path, caplog):
    store = CsvRecordStore(str(tmp_path / "missing.csv"))
    with caplog.at_level(logging.ERROR, logger="record_store"):
        with pytest.raises(RecordStoreError, match="not found"):
            store.list_records()
    assert "missing.csv" in caplog.text


def test_invalid_schema_raises(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("day,amount\n2026-10-01,5\n", encoding="utf-8")
    with pytest.raises(RecordStoreError, match="schema"):
        CsvRecordStore(str(path)).list_records()


@pytest.mark.parametrize("content", ["", "date,storeId,storeName,sales\n"])
def test_empty_store_is_no_data_not_an_error(tmp_path, content, now):
    path = tmp_path / "empty.csv"
    path.write_text(content, encoding="utf-8")
    records = CsvRecordStore(str(path)).list_records()
    assert records == []
    assert analyze("summary", records, "all", now).narrative == NO_DATA_MESSAGE
