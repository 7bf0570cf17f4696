# ===== TYPES & INTERFACES =====

from datetime import datetime
from typing import TypedDict, Optional

class VersionDetection(TypedDict, total=False):
    """
    Outcome of scanning a title for a version token.

    Attributes:
        found (bool): True if any version (regular or date-encoded) was found.
        version (str): The detected version, without a leading 'v'.
        is_date_version (bool): True if `version` itself is a calendar date.
        is_stale_date_version (bool): True if the date is older than the stale window.
        date_value (datetime): The calendar date encoded in the title, if any.
        date_version (str): The date-encoded token, kept even when a regular version wins.
        has_preferred_version (bool): True if a regular version outranked a date version.
    """
    found: bool
    version: str
    is_date_version: bool
    is_stale_date_version: bool
    date_value: datetime
    date_version: str
    has_preferred_version: bool


class BuildDetection(TypedDict, total=False):
    """
    Outcome of scanning a title for a build identifier.

    Attributes:
        found (bool): True if a build was found.
        build (str): The detected build digits.
        is_explicit (bool): True if the build carried a marker ('build', 'b', '#', ...).
        is_date_based_build (bool): True if an unmarked build reads as a calendar date.
        has_preferred_build (bool): True if an explicit build outranked an unmarked one.
    """
    found: bool
    build: str
    is_explicit: bool
    is_date_based_build: bool
    has_preferred_build: bool


class Suggestions(TypedDict, total=False):
    should_ask_for_build: bool
    should_ask_for_version: bool
    message: str


class TitleAnalysis(TypedDict):
    has_version_number: bool
    has_build_number: bool
    detected_version: Optional[str]
    detected_build: Optional[str]
    version: VersionDetection
    build: BuildDetection
    suggestions: Suggestions


class ValidationResult(TypedDict, total=False):
    valid: bool
    error: str


class ReconciliationResult(TypedDict, total=False):
    """
    Decision on whether a candidate release replaces the tracked one.

    Attributes:
        decision (str): 'replace', 'reject' or 'duplicate'.
        reason (str): Short human-readable reason (e.g., 'higher version').
        should_replace (bool): True only for 'replace'.
        version_comparison (Optional[int]): compare_versions(candidate, existing), if consulted.
        build_comparison (Optional[int]): Integer build ordering, if consulted.
    """
    decision: str
    reason: str
    should_replace: bool
    version_comparison: Optional[int]
    build_comparison: Optional[int]
