from chartscope.core.genre_analyzer import genre_distribution
from chartscope.core.csv_loader import load_dataset


def as_pairs(distribution):
    return [(g.genre, g.count) for g in distribution]


def test_missing_genre_is_unknown():
    records = [{"genre": "Pop"}, {"genre": "Pop"}, {"genre": "Rock"}, {}]
    assert as_pairs(genre_distribution(records)) == [("Pop", 2), ("Rock", 1), ("Unknown", 1)]


def test_empty_genre_is_unknown():
    records = [{"genre": ""}, {"genre": None}, {"genre": "Jazz"}]
    assert as_pairs(genre_distribution(records)) == [("Unknown", 2), ("Jazz", 1)]


def test_ties_keep_first_seen_order():
    records = [{"genre": g} for g in ["Rock", "Pop", "Jazz", "Pop", "Rock", "Jazz"]]
    assert as_pairs(genre_distribution(records)) == [("Rock", 2), ("Pop", 2), ("Jazz", 2)]


def test_custom_field(chart_dir):
    records = load_dataset(chart_dir / "billboard_2024_analysis.csv")
    distribution = genre_distribution(records, "Primary_Genre")

    assert as_pairs(distribution) == [("Pop", 2), ("Country", 1), ("Hip-Hop", 1), ("Unknown", 1)]
    assert sum(g.count for g in distribution) == len(records)


def test_field_is_case_sensitive():
    records = [{"Genre": "Pop"}]
    assert as_pairs(genre_distribution(records)) == [("Unknown", 1)]


def test_empty_input():
    assert genre_distribution([]) == []


def test_to_dict():
    assert genre_distribution([{"genre": "Pop"}])[0].to_dict() == {"genre": "Pop", "count": 1}
