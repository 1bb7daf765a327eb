import json

import pytest

from namebuckets.data.formats import FrequencyEntry
from namebuckets.data.table import FrequencyTable
from namebuckets.errors import TableError


def test_from_frequencies_sorts_and_accumulates():
    table = FrequencyTable.from_frequencies([("SMITH", 5), ("ADAMS", 2), ("JONES", 3)])
    assert list(table.keys) == ["ADAMS", "JONES", "SMITH"]
    assert list(table.counts) == [2, 5, 10]
    assert table.total == 10
    assert len(table) == 3
    assert table[1] == FrequencyEntry(5, "JONES")


def test_repeated_key_keeps_last_frequency():
    table = FrequencyTable.from_frequencies([("BROWN", 4), ("ALLEN", 1), ("BROWN", 7)])
    assert list(table) == [FrequencyEntry(1, "ALLEN"), FrequencyEntry(8, "BROWN")]


def test_zero_frequency_keys_are_kept():
    table = FrequencyTable.from_frequencies([("A", 0), ("B", 5), ("C", 0)])
    assert list(table.counts) == [0, 5, 5]


def test_from_csv_reads_surname_layout(tmp_path):
    src = tmp_path / "surnames.csv"
    src.write_text("rank,name,frequency\n1,SMITH,120\n2,JONES,80\n\n3,ADAMS,15\n")
    table = FrequencyTable.from_csv(str(src))
    assert list(table.keys) == ["ADAMS", "JONES", "SMITH"]
    assert list(table.counts) == [15, 95, 215]


def test_from_csv_custom_columns(tmp_path):
    src = tmp_path / "names.csv"
    src.write_text("name,count\nLEE,3\nKIM,4\n")
    table = FrequencyTable.from_csv(str(src), key_column=0, frequency_column=1)
    assert list(table) == [FrequencyEntry(4, "KIM"), FrequencyEntry(7, "LEE")]


def test_from_csv_rejects_bad_frequency(tmp_path):
    src = tmp_path / "bad.csv"
    src.write_text("rank,name,frequency\n1,SMITH,lots\n")
    with pytest.raises(TableError) as exc:
        FrequencyTable.from_csv(str(src))
    assert "line 2" in str(exc.value)


def test_save_and_load_manifest(tmp_path):
    path = tmp_path / "table.json"
    table = FrequencyTable.from_frequencies([("BAKER", 3), ("ABBOTT", 2)])
    table.save(str(path))

    data = json.loads(path.read_text())
    assert data[0] == {"cumulative_count": 2, "key": "ABBOTT"}
    assert list(FrequencyTable.load(str(path))) == list(table)


def test_load_rejects_malformed_manifest(tmp_path):
    path = tmp_path / "table.json"
    path.write_text(json.dumps([{"count": 1, "name": "A"}]))
    with pytest.raises(TableError):
        FrequencyTable.load(str(path))


def test_load_rejects_non_json(tmp_path):
    path = tmp_path / "table.json"
    path.write_text("{not json")
    with pytest.raises(TableError, match="malformed table manifest"):
        FrequencyTable.load(str(path))


def test_load_rejects_non_integer_count(tmp_path):
    path = tmp_path / "table.json"
    path.write_text(json.dumps([{"cumulative_count": "x", "key": "A"}]))
    with pytest.raises(TableError, match="non-integer cumulative count"):
        FrequencyTable.load(str(path))


@pytest.mark.parametrize("entries", [
    [],
    [(5, "A"), (3, "B")],
    [(1, "B"), (2, "A")],
    [(1, "A"), (2, "A")],
    [(-1, "A"), (2, "B")],
    [(1, ""), (2, "B")],
])
def test_invariants_enforced(entries):
    with pytest.raises(TableError):
        FrequencyTable(entries)


def test_negative_frequency_rejected():
    with pytest.raises(TableError):
        FrequencyTable.from_frequencies([("A", 3), ("B", -1)])
