from chartscope.core.chart_store import Dataset
from chartscope.core.cross_platform import cross_platform_artists, extract_artist


def test_same_artist_on_two_platforms():
    records = [{"artist": "Drake", "genre": "Rap"}, {"artist": "Drake", "genre": "Rap"}]
    overlaps = cross_platform_artists([("Billboard", records), ("Spotify", list(records))])

    assert [o.to_dict() for o in overlaps] == [
        {"artist": "Drake", "platforms": ["Billboard", "Spotify"], "platformCount": 2},
    ]


def test_single_platform_artists_are_excluded():
    overlaps = cross_platform_artists([
        ("Billboard", [{"artist": "Drake"}, {"artist": "SZA"}]),
        ("TikTok", [{"artist": "Drake"}]),
    ])
    assert [o.artist for o in overlaps] == ["Drake"]
    assert all(o.platform_count > 1 for o in overlaps)


def test_sorted_by_platform_count_then_first_seen():
    overlaps = cross_platform_artists([
        ("Billboard", [{"artist": "SZA"}, {"artist": "Drake"}, {"artist": "Doechii"}]),
        ("TikTok", [{"artist": "SZA"}, {"artist": "Doechii"}]),
        ("Spotify", [{"artist": "Drake"}, {"artist": "Doechii"}]),
    ])
    assert [(o.artist, o.platform_count) for o in overlaps] == [
        ("Doechii", 3),
        ("SZA", 2),
        ("Drake", 2),
    ]


def test_artist_key_fallback_is_exact():
    assert extract_artist({"artist": "Drake", "Artist": "Other"}) == "Drake"
    assert extract_artist({"artist": "", "Artist": "Drake"}) == "Drake"
    assert extract_artist({"ARTIST": "Drake"}) is None
    assert extract_artist({"artist_name": "Drake"}) is None


def test_artist_names_match_exactly():
    # Case and whitespace differences are treated as different artists
    overlaps = cross_platform_artists([
        ("Billboard", [{"artist": "Drake"}]),
        ("Spotify", [{"Artist": "drake"}]),
        ("TikTok", [{"artist": "Drake "}]),
    ])
    assert overlaps == []


def test_unlabeled_datasets_get_index_names():
    overlaps = cross_platform_artists([
        Dataset(platform="", records=[{"artist": "SZA"}]),
        Dataset(platform="", records=[{"artist": "SZA"}]),
    ])
    assert overlaps[0].platforms == ["Platform_0", "Platform_1"]


def test_repeated_runs_are_identical():
    datasets = [
        ("Billboard", [{"artist": a} for a in ["A", "B", "C", "D"]]),
        ("TikTok", [{"artist": a} for a in ["D", "C", "B"]]),
        ("Spotify", [{"Artist": a} for a in ["B", "A"]]),
    ]
    first = [o.to_dict() for o in cross_platform_artists(datasets)]
    second = [o.to_dict() for o in cross_platform_artists(datasets)]
    assert first == second
    assert first[0] == {"artist": "B", "platforms": ["Billboard", "TikTok", "Spotify"], "platformCount": 3}


def test_loaded_charts(chart_dir):
    from chartscope.core.csv_loader import load_dataset

    datasets = [
        ("Billboard", load_dataset(chart_dir / "billboard_2024_analysis.csv")),
        ("TikTok", load_dataset(chart_dir / "tiktok_viral_2024.csv")),
        ("Spotify", load_dataset(chart_dir / "spotify_top_2024.csv")),
    ]
    overlaps = {o.artist: o.platforms for o in cross_platform_artists(datasets)}

    assert overlaps["Sabrina Carpenter"] == ["Billboard", "TikTok", "Spotify"]
    assert overlaps["Kendrick Lamar"] == ["Billboard", "TikTok"]
    assert overlaps["Benson Boone"] == ["Billboard", "Spotify"]
    assert "Taylor Swift" not in overlaps
