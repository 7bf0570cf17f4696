import pytest

from release_tracker.utils.title_matching import (
    calculate_game_similarity, extract_sequel_number, is_sequel_difference
)


@pytest.mark.parametrize("title, expected", [
    ("risk of rain 2", ("risk of rain", 2)),
    ("grand theft auto v", ("grand theft auto", 5)),
    ("final fantasy xii", ("final fantasy", 12)),
    ("borderlands", None),
    ("hades", None),
])
def test_extract_sequel_number(title, expected):
    assert extract_sequel_number(title) == expected


def test_is_sequel_difference():
    assert is_sequel_difference("2")
    assert is_sequel_difference("knights")
    assert not is_sequel_difference("remastered")
    assert not is_sequel_difference("definitive edition")
    assert not is_sequel_difference("")


@pytest.mark.parametrize("title1, title2, expected", [
    ("Hades", "Hades v1.38 - FitGirl Repack", 1.0),
    ("Risk of Rain", "Risk of Rain 2", 0.3),
    ("Borderlands 2", "Borderlands 3", 0.3),
    ("Borderlands 2", "Borderlands II", 1.0),
    ("Hades", "Hades II", 0.3),
    ("Portal", "Portal Knights", 0.3),
    ("Dark Souls", "Dark Souls Remastered", 0.85),
    ("Celeste", "Hollow Knight", 0.0),
    ("Tomb Raider Legend", "Tomb Raider Anniversary", 0.5),
])
def test_calculate_game_similarity(title1, title2, expected):
    assert calculate_game_similarity(title1, title2) == pytest.approx(expected)


def test_similarity_is_symmetric():
    assert calculate_game_similarity("Risk of Rain 2", "Risk of Rain") == 0.3
    assert calculate_game_similarity("Dark Souls Remastered", "Dark Souls") == 0.85
