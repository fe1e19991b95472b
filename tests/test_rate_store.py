import pytest

from strady.adapters.storage import read_rate_rows
from strady.domain.errors import RateFileError
from strady.domain.rates import RateTableStore

from fixtures.rates import RATES_CSV, RATES_CSV_WITH_BAD_ROWS, RATES_ROWS


def _write(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_missing_file_gives_empty_table(tmp_path):
    store = RateTableStore(tmp_path / "rates.csv")

    table = store.reload()

    assert table.rows == ()
    assert table.loaded_at is None
    assert store.get() is table


def test_store_starts_empty_before_first_reload(tmp_path):
    store = RateTableStore(tmp_path / "rates.csv")
    assert len(store.get()) == 0


def test_reload_reads_rows_in_file_order(tmp_path):
    path = _write(tmp_path / "rates.csv", RATES_CSV)
    store = RateTableStore(path)

    table = store.reload()

    assert list(table.rows) == RATES_ROWS
    assert [list(r.keys()) for r in table.rows] == [["duration", "rate", "bank"]] * 4
    assert table.skipped_rows == 0
    assert table.loaded_at is not None


def test_values_stay_strings(tmp_path):
    path = _write(tmp_path / "rates.csv", "code,rate,note\n007,3.10,\n010,3.00,NA\n")

    rows, skipped = read_rate_rows(path)

    assert skipped == 0
    assert rows == [
        {"code": "007", "rate": "3.10", "note": ""},
        {"code": "010", "rate": "3.00", "note": "NA"},
    ]


def test_reload_twice_is_identical(tmp_path):
    path = _write(tmp_path / "rates.csv", RATES_CSV)
    store = RateTableStore(path)

    first = store.reload()
    second = store.reload()

    assert first.rows == second.rows
    assert first is not second


def test_rows_with_extra_fields_are_skipped_and_counted(tmp_path):
    path = _write(tmp_path / "rates.csv", RATES_CSV_WITH_BAD_ROWS)
    store = RateTableStore(path)

    table = store.reload()

    assert [r["duration"] for r in table.rows] == ["10", "20", "30"]
    assert table.skipped_rows == 2


def test_empty_and_header_only_files(tmp_path):
    empty = _write(tmp_path / "empty.csv", "")
    header_only = _write(tmp_path / "header.csv", "duration,rate\n")

    assert RateTableStore(empty).reload().rows == ()
    assert RateTableStore(header_only).reload().rows == ()


def test_utf8_bom_is_stripped_from_header(tmp_path):
    path = tmp_path / "rates.csv"
    path.write_bytes("\ufeffduration,rate\n20,3.40\n".encode("utf-8"))

    rows, _ = read_rate_rows(path)

    assert rows == [{"duration": "20", "rate": "3.40"}]


def test_reload_swaps_table_without_touching_old_snapshot(tmp_path):
    path = _write(tmp_path / "rates.csv", RATES_CSV)
    store = RateTableStore(path)
    old = store.reload()

    _write(path, "duration,rate\n30,3.90\n")
    new = store.reload()

    assert store.get() is new
    assert list(old.rows) == RATES_ROWS
    assert list(new.rows) == [{"duration": "30", "rate": "3.90"}]


def test_file_removed_after_load_empties_table(tmp_path):
    path = _write(tmp_path / "rates.csv", RATES_CSV)
    store = RateTableStore(path)
    store.reload()

    path.unlink()

    assert store.reload().rows == ()


def test_short_rows_are_skipped_and_counted(tmp_path):
    path = _write(tmp_path / "rates.csv", "duration,rate,bank\n10,3.10,KBC\n15\n20,3.40\n25,3.55,ING\n")

    table = RateTableStore(path).reload()

    assert [r["duration"] for r in table.rows] == ["10", "25"]
    assert table.skipped_rows == 2


def test_unclosed_quote_counts_lost_rows(tmp_path):
    path = _write(tmp_path / "rates.csv", 'a,b\n1,2\n"3,4\n5,6\n')

    table = RateTableStore(path).reload()

    assert list(table.rows) == [{"a": "1", "b": "2"}]
    assert table.skipped_rows == 2


def test_quoted_fields_are_unquoted(tmp_path):
    path = _write(tmp_path / "rates.csv", 'bank,rate\n"BNP Paribas, Fortis",3.55\n')

    rows, skipped = read_rate_rows(path)

    assert rows == [{"bank": "BNP Paribas, Fortis", "rate": "3.55"}]
    assert skipped == 0


def test_invalid_utf8_raises_rate_file_error(tmp_path):
    path = tmp_path / "rates.csv"
    path.write_bytes(b"a,b\n1,\xff\n")

    with pytest.raises(RateFileError, match="UTF-8"):
        read_rate_rows(path)


def test_invalid_utf8_gives_empty_table_instead_of_crashing(tmp_path):
    path = tmp_path / "rates.csv"
    path.write_bytes(b"a,b\n1,\xff\n")
    store = RateTableStore(path)

    table = store.reload()

    assert table.rows == ()
    assert store.get() is table
