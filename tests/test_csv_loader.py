import pytest

from chartscope.core.csv_loader import (
    normalize_row,
    is_valid_row,
    read_records,
    load_dataset,
    load_dataset_bytes,
    load_datasets,
)
from chartscope.core.errors import DatasetNotFoundError, CSVParseError

from tests.conftest import write_csv


def test_normalize_strips_bom_and_whitespace():
    row = {"\ufeffTitle ": " Espresso ", " Artist": "Sabrina Carpenter", "extra": None}
    assert normalize_row(row) == {
        "Title": "Espresso",
        "Artist": "Sabrina Carpenter",
        "extra": None,
    }


def test_normalize_passes_non_text_values_through():
    overflow = ["a", "b"]
    cleaned = normalize_row({"title": "x", None: overflow})
    assert cleaned[None] is overflow


@pytest.mark.parametrize("row", [
    {"\ufeff title": " A "},
    {"\ufeff\ufeffgenre\t": "\tPop\n"},
    {" \ufeffartist": "Drake"},
    {"title \ufeff": " x \ufeff\ufeff"},
    {"title": ""},
])
def test_normalize_is_idempotent(row):
    once = normalize_row(row)
    assert normalize_row(once) == once


def test_validator_accepts_partial_column_names():
    assert is_valid_row({"Song_Title": "Espresso"})
    assert is_valid_row({"Primary_Genre": "Pop", "rank": ""})
    assert is_valid_row({"ARTIST NAME": "Drake"})


def test_validator_rejects_rows_without_identifying_values():
    assert not is_valid_row({})
    assert not is_valid_row({"rank": "1", "streams": "100"})
    assert not is_valid_row({"title": "", "artist": "", "genre": ""})
    assert not is_valid_row({"title": None})


def test_load_dataset_normalizes_and_filters(chart_dir):
    records = load_dataset(chart_dir / "spotify_top_2024.csv")

    assert len(records) == 3
    assert list(records[0].keys()) == ["title", "artist", "genre", "streams"]
    assert records[0]["title"] == "Espresso"
    assert all(is_valid_row(r) for r in records)


def test_load_dataset_strips_header_bom(chart_dir):
    records = load_dataset(chart_dir / "billboard_2024_analysis.csv")

    assert list(records[0].keys()) == ["Rank", "Title", "Artist", "Primary_Genre"]
    assert [r["Rank"] for r in records] == ["1", "2", "3", "4", "5"]


def test_load_dataset_missing_file(tmp_path):
    with pytest.raises(DatasetNotFoundError) as excinfo:
        load_dataset(tmp_path / "missing.csv")

    assert isinstance(excinfo.value, FileNotFoundError)
    assert "missing.csv" in str(excinfo.value)


def test_load_dataset_malformed_csv(tmp_path):
    path = write_csv(tmp_path, "broken.csv", 'title,artist\n"Espresso"x,Sabrina\n')

    with pytest.raises(CSVParseError) as excinfo:
        load_dataset(path)
    assert excinfo.value.path == str(path)


def test_load_dataset_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes("title,artist\nCaf\xe9,Someone\n".encode("latin-1"))

    with pytest.raises(CSVParseError):
        load_dataset(path)


def test_short_rows_keep_missing_cells_as_none():
    records = read_records(["title,artist,genre\n", "Espresso,Sabrina Carpenter\n"])
    assert records == [{"title": "Espresso", "artist": "Sabrina Carpenter", "genre": None}]


def test_header_only_file_is_empty(tmp_path):
    path = write_csv(tmp_path, "empty.csv", "title,artist,genre\n")
    assert load_dataset(path) == []


def test_load_dataset_bytes():
    data = "\ufefftitle,artist\nAnti-Hero,Taylor Swift\n".encode("utf-8")
    assert load_dataset_bytes(data) == [{"title": "Anti-Hero", "artist": "Taylor Swift"}]


def test_load_datasets_isolates_failures(chart_dir):
    results = load_datasets([
        ("Billboard", str(chart_dir / "billboard_2024_analysis.csv")),
        ("Collaborations", str(chart_dir / "cross_genre_collaborations_2024.csv")),
        ("TikTok", str(chart_dir / "tiktok_viral_2024.csv")),
    ], max_workers=2)

    assert [r.platform for r in results] == ["Billboard", "Collaborations", "TikTok"]
    assert results[0].ok and results[0].count == 5
    assert not results[1].ok
    assert results[1].records == []
    assert "File not found" in results[1].error
    assert results[2].ok and results[2].count == 3


def test_load_datasets_empty():
    assert load_datasets([]) == []


def test_normalize_strips_bom_at_both_ends():
    row = {"title\ufeff": "\ufeff Espresso \ufeff", "artist \ufeff ": "Sabrina Carpenter\ufeff"}
    cleaned = normalize_row(row)

    assert cleaned == {"title": "Espresso", "artist": "Sabrina Carpenter"}
    assert normalize_row(cleaned) == cleaned
