# ===== IMPORTS & DEPENDENCIES =====
import re
import logging
from typing import Optional, Tuple

from release_tracker.config import EDITION_NOISE_WORDS
from release_tracker.utils.title_cleaner import clean_title

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# Roman numerals that commonly appear in game titles
ROMAN_MAP = {
    "i": 1, "ii": 2, "iii": 3, "iv": 4, "v": 5,
    "vi": 6, "vii": 7, "viii": 8, "ix": 9, "x": 10,
    "xi": 11, "xii": 12, "xiii": 13, "xiv": 14, "xv": 15,
}

_EDITION_NOISE = re.compile(r"^(?:" + "|".join(EDITION_NOISE_WORDS) + r")$", re.IGNORECASE)

# ===== UTILITY FUNCTIONS =====

def extract_sequel_number(title: str) -> Optional[Tuple[str, int]]:
    """
    Splits a trailing sequel number off a cleaned, lower-cased title.

    "risk of rain 2" -> ("risk of rain", 2)
    "grand theft auto v" -> ("grand theft auto", 5)
    "borderlands" -> None
    """
    words = title.split()
    if len(words) < 2:
        return None

    last = words[-1]
    if re.match(r"^\d{1,2}$", last) and 1 <= int(last) <= 99:
        return " ".join(words[:-1]), int(last)
    if last in ROMAN_MAP:
        return " ".join(words[:-1]), ROMAN_MAP[last]
    return None


def is_sequel_difference(remaining: str) -> bool:
    """True if the extra text one title has over the other makes it a different game."""
    words = remaining.split()
    if not words:
        return False
    if re.match(r"^\d{1,2}\b", words[0]) or words[0] in ROMAN_MAP:
        return True

    meaningful = [w for w in words if len(w) > 1 and not _EDITION_NOISE.match(w)]
    return len(meaningful) > 0


def calculate_game_similarity(title1: str, title2: str) -> float:
    """
    Scores how likely two titles name the same game, from 0.0 to 1.0.

    A title that only adds a sequel number or subtitle to the other scores low
    (0.3), so "Risk of Rain" never matches "Risk of Rain 2". A title that only
    adds edition noise still scores 0.85.
    """
    clean1, clean2 = clean_title(title1), clean_title(title2)

    if clean1 == clean2:
        return 1.0

    seq1, seq2 = extract_sequel_number(clean1), extract_sequel_number(clean2)
    if seq1 and seq2 and seq1[0] == seq2[0]:
        return 1.0 if seq1[1] == seq2[1] else 0.3
    if seq1 and not seq2 and seq1[0] == clean2:
        return 0.3
    if seq2 and not seq1 and seq2[0] == clean1:
        return 0.3

    if clean2 in clean1 or clean1 in clean2:
        longer, shorter = (clean1, clean2) if clean2 in clean1 else (clean2, clean1)
        remaining = longer.replace(shorter, "", 1).strip()
        if is_sequel_difference(remaining):
            logger.debug(f"[calculate_game_similarity] '{remaining}' separates '{clean1}' and '{clean2}'")
            return 0.3
        return 0.85

    words1 = {w for w in clean1.split() if len(w) > 1}
    words2 = {w for w in clean2.split() if len(w) > 1}
    if not words1 or not words2:
        return 0.0
    return len(words1 & words2) / len(words1 | words2)
