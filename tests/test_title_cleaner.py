import pytest

from release_tracker.utils.title_cleaner import (
    clean_title, clean_title_preserve_edition, extract_release_group
)


@pytest.mark.parametrize("raw, expected", [
    ("Palworld v0.6.6 Build 12345-CODEX (2024)", "palworld"),
    ("Assassin's Creed: Valhalla - Complete Edition", "assassins creed valhalla"),
    ("Final Fantasy VII", "final fantasy 7"),
    ("Life is Strange Part Two", "life is strange part 2"),
    ("Street Fighter vs Tekken", "street fighter vs tekken"),
    ("Marvel vs. Capcom", "marvel vs capcom"),
    ("Dragon Ball Sparking 0", "dragon ball sparking zero"),
    ("Hades (2020)", "hades"),
    ("Cyberpunk 2077", "cyberpunk 2077"),
    ("Tom Clancy’s Rainbow Six® Siege", "tom clancys rainbow 6 siege"),
    ("Ratchet and Clank", "ratchet & clank"),
    ("Lord of the Rings", "lord of rings"),
    ("Elden Ring + All DLC", "elden ring"),
    ("Elden Ring Season Pass", "elden ring"),
    ("Hollow Knight-TENOKE", "hollow knight"),
    ("Hades v1.38 - FitGirl Repack", "hades"),
])
def test_clean_title_strips_noise(raw, expected):
    assert clean_title(raw) == expected


def test_clean_title_is_idempotent():
    titles = [
        "Palworld v0.6.6 Build 12345-CODEX (2024)",
        "Assassin's Creed: Valhalla - Complete Edition",
        "Tom Clancy’s Rainbow Six® Siege",
        "Dragon Ball Sparking 0",
        "Grand Theft Auto V [FitGirl Repack]",
        "Cyberpunk 2077 Ultimate Edition v2.1",
        "Hades_Cracked",
        "Hollow Knight-CODEX.",
        "Game Update One",
        "Game_Update_1",
        "Game Update-2",
    ]
    for title in titles:
        once = clean_title(title)
        assert clean_title(once) == once


def test_clean_title_matches_noise_only_as_whole_words():
    assert clean_title("Codexia Adventure") == "codexia adventure"
    assert clean_title("Dodie's Diner") == "dodies diner"


def test_roman_five_never_eats_vs():
    assert clean_title("Alien vs Predator") == "alien vs predator"
    assert clean_title("Grand Theft Auto V") == "grand theft auto 5"


def test_clean_title_of_pure_noise_is_empty():
    assert clean_title("[FitGirl Repack]") == ""
    assert clean_title("") == ""


def test_preserve_edition_keeps_version_markers():
    title = "Cyberpunk 2077 Ultimate Edition v2.1"
    assert clean_title(title) == "cyberpunk 2077 ultimate edition"
    assert clean_title_preserve_edition(title) == "cyberpunk 2077 ultimate v2 1"
    assert clean_title(title, preserve_edition=True) == clean_title_preserve_edition(title)


def test_date_version_is_stripped_from_search_title():
    assert clean_title("Cyberpunk 2077 v20250115 GOG") == "cyberpunk 2077 gog"


def test_extract_release_group_trailing_tag():
    assert extract_release_group("Palworld v0.6.6-TENOKE") == ("TENOKE", "Palworld v0.6.6")
    assert extract_release_group("Hades - CODEX") == ("CODEX", "Hades")


def test_extract_release_group_source_tag_anywhere():
    assert extract_release_group("Hades GOG Edition") == ("GOG", "Hades Edition")


def test_extract_release_group_unknown():
    assert extract_release_group("Stardew Valley") == ("UNKNOWN", "Stardew Valley")


@pytest.mark.parametrize("raw, expected", [
    ("Hades_Cracked", "hades"),
    ("Hollow Knight-CODEX.", "hollow knight"),
    ("Game Update One", "game"),
    ("Game_Update_1", "game"),
    ("Celeste Update 1.5", "celeste"),
])
def test_noise_next_to_punctuation_is_stripped_in_one_pass(raw, expected):
    assert clean_title(raw) == expected
