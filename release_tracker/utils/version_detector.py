# ===== IMPORTS & DEPENDENCIES =====
import re
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from release_tracker.config import (
    DATE_VERSION_STALE_DAYS, BUILD_YEAR_RANGE, DATE_BUILD_YEAR_RANGE,
    MIN_BUILD_DIGITS, MIN_AMBIGUOUS_BUILD_DIGITS, VERSION_SUFFIX_TAGS, VERSION_QUALIFIERS
)
from release_tracker.models.detection import (
    VersionDetection, BuildDetection, Suggestions, TitleAnalysis
)
from release_tracker.utils.pattern_cascade import compile_rules, first_match, group

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

_SUFFIX = "|".join(VERSION_SUFFIX_TAGS)
_QUALIFIER = "|".join(VERSION_QUALIFIERS)

# Regular versions, most specific first. First pattern to match wins.
REGULAR_VERSION_RULES = compile_rules([
    # v1.0a, v2.1b, v1.5-beta, v1.0rc2
    (r"\bv(\d+(?:\.\d+)*(?:[a-z]|-?(?:" + _SUFFIX + r")\d*))\b", group()),
    # v1.2, v1.2.3 (first segment capped so v20250929 never lands here)
    (r"\bv(\d{1,2}(?:\.\d+)+)\b", group()),
    # v2, v15
    (r"\bv(\d{1,3})\b(?!\.\d)", group()),
    # Version 1.2, Ver. 1.2, Update 5, Patch 1.1, Hotfix 2, Rev 3, R1.5
    (r"\b(?:version|ver|update|patch|hotfix|rev|r)[\s\-.]?(\d+(?:\.\d+)*)\b", group()),
    # [v1.2.3], -v1.2.3-, _v1.2.3_
    (r"[\[\-_]v(\d+(?:\.\d+)+)[\]\-_]", group()),
    # 1.2.3 REPACK, PROPER 1.2
    (r"(?<![\d.])(\d{1,3}(?:\.\d{1,4})+)\s*[-_]?\s*(?:" + _QUALIFIER + r")\b", group()),
    (r"\b(?:" + _QUALIFIER + r")\s*[-_]?\s*(\d{1,3}(?:\.\d{1,4})+)(?![\d.])", group()),
    # Last resort: bare 1.2.3 with short segments, so dates do not match
    (r"(?<![\d.])(\d{1,2}(?:\.\d{1,3}){1,3})(?![\d.])", group()),
])

# Date-encoded versions: (pattern, has_four_digit_year)
DATE_VERSION_PATTERNS = [
    (re.compile(r"\bv(\d{4})[-.](\d{2})[-.](\d{2})\b", re.IGNORECASE), True),  # v2025.09.29
    (re.compile(r"\bv(\d{4})(\d{2})(\d{2})\b", re.IGNORECASE), True),          # v20250929
    (re.compile(r"\bv(\d{2})[-.](\d{2})[-.](\d{2})\b", re.IGNORECASE), False), # v25.09.29
    (re.compile(r"\bv(\d{2})(\d{2})(\d{2})\b", re.IGNORECASE), False),         # v250929
]


def _valid_build(match: "re.Match[str]") -> Optional[str]:
    digits = match.group(1)
    if len(digits) < MIN_BUILD_DIGITS:
        return None
    if len(digits) == 4 and BUILD_YEAR_RANGE[0] <= int(digits) <= BUILD_YEAR_RANGE[1]:
        return None
    return digits


# Builds that carry an unambiguous marker
EXPLICIT_BUILD_RULES = compile_rules([
    (r"\bsteam\s*build(?:\s*id)?[\s#:\-]*(\d+)\b", _valid_build),
    (r"\bbuild(?:\s*(?:no\.?|number|id))?[\s#:\-.]*(\d+)\b", _valid_build),
    (r"\brev(?:ision)?[\s#:\-.]*(\d+)\b", _valid_build),
    (r"\brelease[\s#:\-]*(\d+)\b", _valid_build),
    (r"\bdepot[\s#:\-]*(\d+)\b", _valid_build),
    (r"\bb(\d{4,})\b", _valid_build),
    (r"#(\d{4,})\b", _valid_build),
    (r"\((\d{6,})\)", _valid_build),
    (r"\[(?:b|build\s*)(\d+)\]", _valid_build),
    (r"[-_]b(\d+)[-_]", _valid_build),
])

AMBIGUOUS_BUILD_PATTERN = re.compile(r"\b(\d{%d,})\b" % MIN_AMBIGUOUS_BUILD_DIGITS)

# ===== HELPER FUNCTIONS =====

def _to_date(year: int, month: int, day: int) -> Optional[datetime]:
    try:
        return datetime(year, month, day)
    except ValueError:
        return None


def _find_date_version(title: str, now: datetime) -> Optional[Tuple[VersionDetection, Tuple[int, int]]]:
    """Returns the first date-encoded version that is an actual calendar date, with its span."""
    for pattern, four_digit_year in DATE_VERSION_PATTERNS:
        for match in pattern.finditer(title):
            year, month, day = (int(part) for part in match.groups())
            if not four_digit_year:
                year += 2000 if year < 50 else 1900
            date_value = _to_date(year, month, day)
            if date_value is None:
                continue

            age_days = (now.date() - date_value.date()).days
            token = match.group(0)[1:]
            logger.debug(f"[detect_version] Date version '{token}' ({date_value:%Y-%m-%d}, {age_days} days old)")
            detection: VersionDetection = {
                'found': True,
                'version': token,
                'is_date_version': True,
                'is_stale_date_version': age_days > DATE_VERSION_STALE_DAYS,
                'date_value': date_value,
                'date_version': token
            }
            return detection, match.span()
    return None


def contains_date_version(title: str) -> bool:
    """True if the title contains any date-version shape, valid calendar date or not."""
    return any(pattern.search(title) for pattern, _ in DATE_VERSION_PATTERNS)


def _looks_like_date_digits(digits: str) -> bool:
    """YYYYMMDD within the configured years, or a 6-digit run whose last four digits read as MMDD."""
    if len(digits) == 8:
        year, month, day = int(digits[:4]), int(digits[4:6]), int(digits[6:8])
        return DATE_BUILD_YEAR_RANGE[0] <= year <= DATE_BUILD_YEAR_RANGE[1] and 1 <= month <= 12 and 1 <= day <= 31
    if len(digits) == 6:
        month, day = int(digits[2:4]), int(digits[4:6])
        return 1 <= month <= 12 and 1 <= day <= 31
    return False


def _find_explicit_build(title: str) -> Optional[Tuple[str, Tuple[int, int]]]:
    result = first_match(EXPLICIT_BUILD_RULES, title)
    if result is None:
        return None
    build, match = result
    return build, match.span(1)


def _find_ambiguous_build(title: str, skip_spans: List[Tuple[int, int]]) -> Optional[Tuple[str, bool]]:
    """
    Looks for a bare run of digits with no marker. Returns (build, is_date_based).
    When the title also carries a date version, digit runs that read as a date
    are rejected so one date is never reported as both a version and a build.
    """
    has_date_version = contains_date_version(title)
    for match in AMBIGUOUS_BUILD_PATTERN.finditer(title):
        start, end = match.span(1)
        if any(start >= s and end <= e for s, e in skip_spans):
            continue

        digits = match.group(1)
        date_like = _looks_like_date_digits(digits)
        if date_like and has_date_version:
            logger.debug(f"[detect_build] Rejected '{digits}': reads as a date and the title has a date version")
            continue
        return digits, date_like
    return None

# ===== CORE BUSINESS LOGIC =====

def detect_version(title: str, now: Optional[datetime] = None) -> VersionDetection:
    """
    Detects a version in a raw post title.

    Two passes run over the untouched title: a cascade of regular version
    patterns and a set of date-encoded shapes (v20250929, v25.09.29, ...).
    A date token is never read as a regular version, even where a regular
    pattern would fit it (v25.09.29, [v2025.09.29]). A separate regular
    version outranks a date version; the date is still reported alongside it
    so staleness can be displayed.
    """
    if not title:
        return {'found': False}

    now = now or datetime.now()
    date_match = _find_date_version(title, now)
    dated, date_span = date_match if date_match else (None, None)
    regular = first_match(REGULAR_VERSION_RULES, title, skip_spans=[date_span] if date_span else ())

    if regular and dated:
        version = regular[0]
        logger.debug(f"[detect_version] Preferring regular version '{version}' over date version '{dated['version']}'")
        return {
            'found': True,
            'version': version,
            'is_date_version': False,
            'is_stale_date_version': dated['is_stale_date_version'],
            'date_value': dated['date_value'],
            'date_version': dated['date_version'],
            'has_preferred_version': True
        }
    if regular:
        logger.debug(f"[detect_version] Regular version '{regular[0]}' in '{title}'")
        return {'found': True, 'version': regular[0], 'is_date_version': False}
    if dated:
        return dated
    return {'found': False}


def detect_build(title: str) -> BuildDetection:
    """
    Detects a build number in a raw post title.

    Explicit builds (Build 12345, b12345, #12345, ...) win over a bare digit
    run. A 4-digit number that could be a year is never a build.
    """
    if not title:
        return {'found': False}

    explicit = _find_explicit_build(title)
    skip_spans = [explicit[1]] if explicit else []
    ambiguous = _find_ambiguous_build(title, skip_spans)

    if explicit and ambiguous:
        logger.debug(f"[detect_build] Preferring explicit build '{explicit[0]}' over '{ambiguous[0]}'")
        return {'found': True, 'build': explicit[0], 'is_explicit': True, 'has_preferred_build': True}
    if explicit:
        logger.debug(f"[detect_build] Explicit build '{explicit[0]}' in '{title}'")
        return {'found': True, 'build': explicit[0], 'is_explicit': True}
    if ambiguous:
        build, is_date_based = ambiguous
        logger.debug(f"[detect_build] Unmarked build '{build}' in '{title}' (date based: {is_date_based})")
        return {'found': True, 'build': build, 'is_explicit': False, 'is_date_based_build': is_date_based}
    return {'found': False}


def _build_suggestions(version: VersionDetection, build: BuildDetection) -> Suggestions:
    if version['found'] and build['found']:
        return {
            'should_ask_for_build': False,
            'should_ask_for_version': False,
            'message': f"Detected version \"{version['version']}\" and build \"{build['build']}\"."
        }
    if version['found']:
        return {
            'should_ask_for_build': True,
            'should_ask_for_version': False,
            'message': f"Detected version \"{version['version']}\" - you can also add the build number from SteamDB for more precise tracking."
        }
    if build['found']:
        return {
            'should_ask_for_build': False,
            'should_ask_for_version': True,
            'message': f"Detected build \"{build['build']}\" - you can also add the version number for complete tracking."
        }
    return {
        'should_ask_for_build': False,
        'should_ask_for_version': True,
        'message': "No version information detected in title - you can add version numbers and/or build numbers for better update tracking."
    }


def analyze_title(title: str, now: Optional[datetime] = None) -> TitleAnalysis:
    """Runs both detectors and describes what is missing for precise tracking."""
    version = detect_version(title, now=now)
    build = detect_build(title)
    return {
        'has_version_number': version['found'],
        'has_build_number': build['found'],
        'detected_version': version.get('version'),
        'detected_build': build.get('build'),
        'version': version,
        'build': build,
        'suggestions': _build_suggestions(version, build)
    }
