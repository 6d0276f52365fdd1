"""Shared fixtures: small chart files written into a temporary data dir."""

import pytest

from chartscope.config import create_default_config

BILLBOARD = (
    "\ufeffRank,Title,Artist,Primary_Genre\n"
    "1,Lose Control,Teddy Swims,Pop\n"
    "2,A Bar Song (Tipsy),Shaboozey,Country\n"
    "3,Beautiful Things,Benson Boone,Pop\n"
    "4,Not Like Us,Kendrick Lamar,Hip-Hop\n"
    "5,Espresso,Sabrina Carpenter,\n"
)

TIKTOK = (
    "title,artist,genre,views\n"
    "Espresso,Sabrina Carpenter,Pop,120M\n"
    "Not Like Us,Kendrick Lamar,Hip-Hop,98M\n"
    "Apple,Charli xcx,Electropop,44M\n"
)

SPOTIFY = (
    " title , artist ,genre,streams\n"
    " Espresso ,Sabrina Carpenter,Pop,1500000000\n"
    "Anti-Hero,Taylor Swift,Pop,1200000000\n"
    ",,,\n"
    "Beautiful Things,Benson Boone,Pop Rock,1100000000\n"
)


def write_csv(directory, name, content):
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def chart_dir(tmp_path):
    """Data dir with Billboard, TikTok and Spotify charts (no collaborations file)."""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    write_csv(data_dir, "billboard_2024_analysis.csv", BILLBOARD)
    write_csv(data_dir, "tiktok_viral_2024.csv", TIKTOK)
    write_csv(data_dir, "spotify_top_2024.csv", SPOTIFY)
    return data_dir


@pytest.fixture
def config(chart_dir, tmp_path):
    return create_default_config(data_dir=str(chart_dir), upload_dir=str(tmp_path / "uploads"))
