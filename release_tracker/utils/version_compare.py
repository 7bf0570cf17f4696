# ===== IMPORTS & DEPENDENCIES =====
import re
import logging
from typing import List, Optional

from release_tracker.models.detection import ReconciliationResult
from release_tracker.utils.validation import normalize_version_number

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

_SEGMENT_SEPARATORS = re.compile(r"[._-]")

# ===== UTILITY FUNCTIONS =====

def _segments(version: str) -> List[int]:
    cleaned = re.sub(r"^v", "", version.strip(), flags=re.IGNORECASE).lower()
    # Non-numeric segments (alpha, beta, 0a, ...) count as 0
    return [int(part) if part.isdecimal() else 0 for part in _SEGMENT_SEPARATORS.split(cleaned)]


def compare_versions(a: str, b: str) -> int:
    """
    Compares two dotted version strings segment by segment.
    Returns 1 if a > b, -1 if a < b and 0 if equal. Missing trailing segments
    count as 0, so "1.2" equals "1.2.0". Suffix tags are not ranked:
    "1.0-beta" equals "1.0".
    """
    left, right = _segments(a), _segments(b)
    for i in range(max(len(left), len(right))):
        left_part = left[i] if i < len(left) else 0
        right_part = right[i] if i < len(right) else 0
        if left_part != right_part:
            return 1 if left_part > right_part else -1
    return 0


def compare_builds(a: str, b: str) -> Optional[int]:
    """
    Compares two build numbers as integers after dropping non-digit characters.
    Returns None if either side has no digits at all.
    """
    left, right = re.sub(r"\D", "", a or ""), re.sub(r"\D", "", b or "")
    if not left or not right:
        return None
    left_value, right_value = int(left), int(right)
    if left_value == right_value:
        return 0
    return 1 if left_value > right_value else -1


def _result(decision: str, reason: str, version_comparison: Optional[int] = None,
            build_comparison: Optional[int] = None) -> ReconciliationResult:
    return {
        'decision': decision,
        'reason': reason,
        'should_replace': decision == 'replace',
        'version_comparison': version_comparison,
        'build_comparison': build_comparison
    }


def reconcile(existing_version: Optional[str], existing_build: Optional[str],
              candidate_version: Optional[str], candidate_build: Optional[str]) -> ReconciliationResult:
    """
    Decides whether a candidate release replaces the tracked one.

    A differing version decides on its own. Otherwise, if both sides carry a
    build, the builds decide. Without positive evidence of a newer release the
    candidate is never accepted.
    """
    version_comparison = None
    if existing_version and candidate_version:
        version_comparison = compare_versions(
            normalize_version_number(candidate_version),
            normalize_version_number(existing_version)
        )
        if version_comparison > 0:
            logger.debug(f"[reconcile] Version {candidate_version} > {existing_version}")
            return _result('replace', 'higher version', version_comparison)
        if version_comparison < 0:
            logger.debug(f"[reconcile] Version {candidate_version} < {existing_version}")
            return _result('reject', 'lower version', version_comparison)

    if existing_build and candidate_build:
        build_comparison = compare_builds(candidate_build, existing_build)
        if build_comparison is None:
            logger.debug(f"[reconcile] Builds '{candidate_build}' / '{existing_build}' are not comparable")
            return _result('reject', 'malformed build', version_comparison)
        if build_comparison > 0:
            return _result('replace', 'higher build', version_comparison, build_comparison)
        if build_comparison < 0:
            return _result('reject', 'lower build', version_comparison, build_comparison)
        return _result('duplicate', 'same build', version_comparison, build_comparison)

    if version_comparison == 0:
        return _result('duplicate', 'same version', version_comparison)
    return _result('duplicate', 'no comparable version or build')
