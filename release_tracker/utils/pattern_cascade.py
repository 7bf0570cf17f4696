# ===== IMPORTS & DEPENDENCIES =====
import re
from typing import Callable, List, Optional, Pattern, Sequence, Tuple, TypeVar, Union

# ===== TYPES & INTERFACES =====
T = TypeVar("T")

Extractor = Callable[["re.Match[str]"], Optional[T]]
PatternLike = Union[str, Pattern[str]]
Span = Tuple[int, int]

# ===== UTILITY FUNCTIONS =====

def compile_rules(rules: Sequence[Tuple[PatternLike, T]], flags: int = re.IGNORECASE) -> List[Tuple[Pattern[str], T]]:
    """Compiles the pattern side of an ordered rule table, keeping order."""
    return [
        (pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags), value)
        for pattern, value in rules
    ]


def overlaps(span: Span, others: Sequence[Span]) -> bool:
    start, end = span
    return any(start < other_end and other_start < end for other_start, other_end in others)


def first_match(
    rules: Sequence[Tuple[Pattern[str], Extractor]],
    text: str,
    skip_spans: Sequence[Span] = ()
) -> Optional[Tuple[T, "re.Match[str]"]]:
    """
    Runs an ordered list of (pattern, extractor) pairs against `text`.

    Rules are tried in list order and, within a rule, matches are tried left to
    right. An extractor returns None to reject a match, in which case the search
    moves on. Matches touching any of `skip_spans` are ignored. The first
    accepted value wins, together with the match it came from.
    """
    for pattern, extractor in rules:
        for match in pattern.finditer(text):
            if skip_spans and overlaps(match.span(), skip_spans):
                continue
            value = extractor(match)
            if value is not None:
                return value, match
    return None


def apply_replacements(text: str, rules: Sequence[Tuple[Pattern[str], str]]) -> str:
    """Applies an ordered list of (pattern, replacement) substitutions."""
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def group(index: int = 1) -> Extractor:
    """Extractor returning a capture group unchanged."""
    return lambda match: match.group(index)
