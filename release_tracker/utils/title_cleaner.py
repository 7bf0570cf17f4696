# ===== IMPORTS & DEPENDENCIES =====
import re
import logging
from typing import Tuple

from release_tracker.config import (
    PIRACY_TAGS, NOISE_PHRASES, DLC_PHRASES, RELEASE_GROUPS, TITLE_OVERRIDES
)
from release_tracker.utils.pattern_cascade import apply_replacements, compile_rules

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# Underscores separate words the same way spaces do
_SEPARATOR_RULES = compile_rules([
    (r"_+", ' '),
])

# A token only counts as a whole word if it is not glued to letters, digits or hyphens
def _whole_words(alternatives) -> str:
    return r"(?<![\w-])(?:" + "|".join(alternatives) + r")(?![\w-])"

_RELEASE_TAG_RULES = compile_rules([
    (_whole_words(PIRACY_TAGS), ''),
    (_whole_words(NOISE_PHRASES), ''),
])

_DLC_RULES = compile_rules([
    (_whole_words(DLC_PHRASES), ''),
    (r"\+\s*(?:all\s+)?dlcs?\b", ''),
])

# Longest first: v1.2.3.4-CODEX must be consumed before v1.2 can match part of it
_VERSION_RULES = compile_rules([
    (r"\bv\d+(?:\.\d+){3,}-[a-z0-9]+", ''),
    (r"\bv\d+(?:\.\d+)+-[a-z0-9]+", ''),
    (r"\bv\d+(?:\.\d+){2,}", ''),
    (r"\bv\d+\.\d+", ''),
    (r"\bv\d{4}[-.]\d{2}[-.]\d{2}\b", ''),
    (r"\bv\d{6}(?:\d{2})?\b", ''),
    (r"\bversion\s*\d+(?:\.\d+)*", ''),
    (r"\bver\.?\s*\d+(?:\.\d+)*", ''),
    (r"\bbuild\s*\d+", ''),
    (r"\bb\d{4,}", ''),
    (r"\bupdate\s*\d+(?:\.\d+)*", ''),
])

_EDITION_RULES = compile_rules([
    (r"\s+edition\b", ''),
])

_YEAR_TAG_RULES = compile_rules([
    (r"\(20\d{2}\)", ''),
    (r"\[20\d{2}\]", ''),
])

_SCENE_GROUP_RULES = compile_rules([
    (r"-[a-z0-9]{3,}(?=[^a-z0-9]|$)", ' '),
])

_BRACKET_RULES = compile_rules([
    (r"\[[^\]]*\]", ''),
    (r"\([^)]*\)", ''),
])

_GLYPH_RULES = compile_rules([
    (r"[®™©]", ''),
])

_OVERRIDE_RULES = compile_rules(TITLE_OVERRIDES)

_NUMBER_RULES = compile_rules([
    (r"\bone\b", '1'),
    (r"\btwo\b", '2'),
    (r"\bthree\b", '3'),
    (r"\bfour\b", '4'),
    (r"\bfive\b", '5'),
    (r"\bsix\b", '6'),
    (r"\bseven\b", '7'),
    (r"\beight\b", '8'),
    (r"\bnine\b", '9'),
    (r"\bii\b", '2'),
    (r"\biii\b", '3'),
    (r"\biv\b", '4'),
    (r"\bv(?!\w)", '5'),  # never "vs"
    (r"\bvi\b", '6'),
    (r"\bvii\b", '7'),
    (r"\bviii\b", '8'),
    (r"\bix\b", '9'),
    (r"\bx(?!\w)", '10'),
])

_WORDING_RULES = compile_rules([
    (r"\band\b", '&'),
    (r"\bvs\.?(?!\w)", 'vs'),
    (r"\bof the\b", 'of'),
])

_PUNCTUATION_RULES = compile_rules([
    (r"['’]", ''),
    (r"[-:]", ' '),
    (r"[^a-z0-9\s&]", ' '),
    (r"\s+", ' '),
])

_RELEASE_GROUP_PATTERN = re.compile(
    r"[-\s]+(" + "|".join(re.escape(g) for g in RELEASE_GROUPS) + r")[-\s]*$",
    re.IGNORECASE
)

# ===== UTILITY FUNCTIONS =====

def clean_title(title: str, preserve_edition: bool = False) -> str:
    """
    Strips release noise from a scraped post title and returns a lower-cased,
    whitespace-collapsed title for matching and display.

    The stages run in a fixed order, each one assuming the noise removed by the
    previous ones is already gone. With `preserve_edition` the version/build
    markers are kept and only the word "edition" is dropped, so that
    "Deluxe Edition" and the standard release stay distinguishable.
    """
    if not title:
        return ""

    cleaned = title.lower()
    cleaned = apply_replacements(cleaned, _SEPARATOR_RULES)
    cleaned = apply_replacements(cleaned, _RELEASE_TAG_RULES)
    cleaned = apply_replacements(cleaned, _DLC_RULES)

    if preserve_edition:
        cleaned = apply_replacements(cleaned, _EDITION_RULES)
    else:
        cleaned = apply_replacements(cleaned, _VERSION_RULES)

    cleaned = apply_replacements(cleaned, _YEAR_TAG_RULES)
    cleaned = apply_replacements(cleaned, _SCENE_GROUP_RULES)
    cleaned = apply_replacements(cleaned, _BRACKET_RULES)
    cleaned = apply_replacements(cleaned, _GLYPH_RULES)
    cleaned = apply_replacements(cleaned, _OVERRIDE_RULES)
    cleaned = apply_replacements(cleaned, _NUMBER_RULES)
    cleaned = apply_replacements(cleaned, _WORDING_RULES)
    cleaned = apply_replacements(cleaned, _PUNCTUATION_RULES).strip()

    logger.debug(f"[clean_title] '{title}' -> '{cleaned}' (preserve_edition={preserve_edition})")
    return cleaned


def clean_title_preserve_edition(title: str) -> str:
    """Edition-preserving variant of clean_title."""
    return clean_title(title, preserve_edition=True)


def extract_release_group(title: str) -> Tuple[str, str]:
    """
    Splits a trailing release group tag off a title.
    Returns (release_group, title_without_group); the group is 'UNKNOWN' if none is found.
    """
    match = _RELEASE_GROUP_PATTERN.search(title)
    if match:
        release_group = match.group(1).upper()
        stripped = title[:match.start()].strip()
        logger.debug(f"[extract_release_group] Found '{release_group}' in '{title}'")
        return release_group, stripped

    # Fall back to source tags that show up anywhere in the title
    for tag in ("GOG", "P2P"):
        pattern = re.compile(r"[-\s]*\b" + tag + r"\b[-\s]*", re.IGNORECASE)
        if pattern.search(title):
            return tag, re.sub(r"\s+", " ", pattern.sub(" ", title, count=1)).strip()

    return "UNKNOWN", title
