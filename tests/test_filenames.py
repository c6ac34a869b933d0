"""
Tests for export filename generation.
"""
from datetime import datetime, timezone

from finance_tracker.export.filenames import (
    FilenameScheme,
    generate_dated_filename,
    generate_export_filename,
    generate_filename,
)

NOW = datetime(2024, 1, 15, 10, 30, 45, 999000, tzinfo=timezone.utc)


def test_timestamped_filename():
    assert generate_export_filename("transactions", "csv", NOW) == "transactions_20240115_103045.csv"
    assert generate_export_filename("transactions", "json", NOW) == "transactions_20240115_103045.json"


def test_dated_filename():
    assert generate_dated_filename("transactions", "csv", NOW) == "transactions-2024-01-15.csv"


def test_same_second_collides():
    later = NOW.replace(microsecond=1000)
    assert generate_export_filename("t", "csv", NOW) == generate_export_filename("t", "csv", later)


def test_scheme_dispatch():
    assert generate_filename(FilenameScheme.TIMESTAMPED, "x", "csv", NOW) == "x_20240115_103045.csv"
    assert generate_filename(FilenameScheme.DATED, "x", "csv", NOW) == "x-2024-01-15.csv"


def test_default_now_shape():
    name = generate_export_filename("transactions", "csv")
    stamp = name[len("transactions_"):-len(".csv")]
    assert len(stamp) == 15
    assert stamp[8] == "_"
    assert stamp.replace("_", "").isdigit()
