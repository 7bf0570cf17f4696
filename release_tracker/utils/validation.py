# ===== IMPORTS & DEPENDENCIES =====
import re

from release_tracker.config import BUILD_MIN_LENGTH, BUILD_MAX_LENGTH
from release_tracker.models.detection import ValidationResult

# ===== CONFIGURATION & CONSTANTS =====

# Formats accepted for a user-supplied version
VALID_VERSION_PATTERNS = [
    re.compile(r"^\d+$"),                                              # 1
    re.compile(r"^\d+\.\d+$"),                                         # 1.2
    re.compile(r"^\d+\.\d+\.\d+$"),                                    # 1.2.3
    re.compile(r"^\d+\.\d+\.\d+\.\d+$"),                               # 1.2.3.4
    re.compile(r"^v\d+(?:\.\d+)*$"),                                   # v1.2.3
    re.compile(r"^\d+(?:\.\d+)*[a-z]$"),                               # 1.2a
    re.compile(r"^\d+(?:\.\d+)*-(?:alpha|beta|rc|final|release)$"),    # 1.2-beta
    re.compile(r"^\d{8}$"),                                            # 20250922
    re.compile(r"^\d{4}[-.]\d{2}[-.]\d{2}$"),                          # 2025-09-22
    re.compile(r"^v\d{8}$"),                                           # v20250922
    re.compile(r"^v\d{4}[-.]\d{2}[-.]\d{2}$"),                         # v2025.09.22
]

_DASHED_DATE = re.compile(r"^\d{4}[-.]\d{2}[-.]\d{2}$")

# ===== UTILITY FUNCTIONS =====

def validate_version_number(version: str) -> ValidationResult:
    """Checks the shape of a version typed in by a user before it is stored."""
    if not version or not version.strip():
        return {'valid': False, 'error': 'Version number is required'}

    trimmed = version.strip()
    if not any(pattern.match(trimmed) for pattern in VALID_VERSION_PATTERNS):
        return {
            'valid': False,
            'error': 'Invalid version format. Examples: 1.2, v1.2.3, 2.0.1, 1.5a, 2.0-beta, 20250922, v20250922'
        }
    return {'valid': True}


def validate_build_number(build: str) -> ValidationResult:
    """Checks the shape of a build number typed in by a user before it is stored."""
    if not build or not build.strip():
        return {'valid': False, 'error': 'Build number is required'}

    trimmed = build.strip()
    if not re.match(r"^\d+$", trimmed):
        return {'valid': False, 'error': 'Build number should contain only digits'}
    if len(trimmed) < BUILD_MIN_LENGTH:
        return {'valid': False, 'error': f'Build number seems too short (minimum {BUILD_MIN_LENGTH} digits)'}
    if len(trimmed) > BUILD_MAX_LENGTH:
        return {'valid': False, 'error': f'Build number seems too long (maximum {BUILD_MAX_LENGTH} digits)'}
    return {'valid': True}


def normalize_version_number(version: str) -> str:
    """Lower-cases, drops a leading 'v' and collapses dashed dates to YYYYMMDD."""
    normalized = re.sub(r"^v", "", version.strip().lower())
    if _DASHED_DATE.match(normalized):
        return re.sub(r"[-.]", "", normalized)
    return normalized


def normalize_build_number(build: str) -> str:
    return build.strip()
