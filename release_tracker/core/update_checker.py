# ===== IMPORTS & DEPENDENCIES =====
import logging
from functools import cmp_to_key
from typing import Iterable, List, Optional

from release_tracker.config import SIMILARITY_THRESHOLD
from release_tracker.models.detection import TitleAnalysis
from release_tracker.models.game import GameData, TrackedGame, UpdateCandidate
from release_tracker.utils.title_matching import calculate_game_similarity
from release_tracker.utils.validation import normalize_version_number
from release_tracker.utils.version_compare import compare_builds, compare_versions, reconcile
from release_tracker.utils.version_detector import analyze_title

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== UTILITY FUNCTIONS =====

def _comparable_version(analysis: TitleAnalysis) -> Optional[str]:
    """Detected version of a title, with date versions spelled YYYYMMDD whatever their shape."""
    version = analysis['version']
    if version.get('is_date_version') and version.get('date_value'):
        return f"{version['date_value']:%Y%m%d}"
    return analysis['detected_version']

# ===== CORE BUSINESS LOGIC =====
class UpdateChecker:
    """
    Decides which scraped posts are newer releases of a tracked game.

    Each post is paired with the tracked game by title similarity, its title is
    analyzed for a version and build, and the result is reconciled against the
    release currently tracked. The checker holds no state between calls;
    callers must not run two checks for the same tracked game concurrently if
    they need exactly-once replacement.
    """

    def __init__(self, similarity_threshold: float = SIMILARITY_THRESHOLD):
        self.similarity_threshold = similarity_threshold

    def _is_tracked_post(self, tracked: TrackedGame, post: GameData) -> bool:
        if tracked.get('link') and post.get('link') == tracked['link']:
            return True
        return bool(tracked.get('game_id')) and post.get('id') == tracked['game_id']

    def evaluate(self, tracked: TrackedGame, post: GameData) -> Optional[UpdateCandidate]:
        """Returns an UpdateCandidate if `post` supersedes the tracked release, else None."""
        if self._is_tracked_post(tracked, post):
            return None

        similarity = calculate_game_similarity(tracked.get('title', ''), post.get('title', ''))
        if similarity < self.similarity_threshold:
            return None

        analysis = analyze_title(post.get('title', ''))
        result = reconcile(
            tracked.get('current_version'), tracked.get('current_build'),
            _comparable_version(analysis), analysis['detected_build']
        )
        logger.debug(
            f"[{self.__class__.__name__}] '{post.get('title')}' vs '{tracked.get('title')}': "
            f"{result['decision']} ({result['reason']}, similarity {similarity:.2f})"
        )
        if not result['should_replace']:
            return None

        return {
            'game_id': tracked.get('game_id', ''),
            'post': post,
            'similarity': similarity,
            'analysis': analysis,
            'reconciliation': result
        }

    @staticmethod
    def _compare_candidates(a: UpdateCandidate, b: UpdateCandidate) -> int:
        """Orders newest release first: version, then build, then similarity."""
        version_a, version_b = _comparable_version(a['analysis']), _comparable_version(b['analysis'])
        if version_a and version_b:
            order = compare_versions(normalize_version_number(version_a), normalize_version_number(version_b))
            if order:
                return -order

        build_a, build_b = a['analysis']['detected_build'], b['analysis']['detected_build']
        if build_a and build_b:
            order = compare_builds(build_a, build_b)
            if order:
                return -order

        if a['similarity'] == b['similarity']:
            return 0
        return -1 if a['similarity'] > b['similarity'] else 1

    def check(self, tracked: TrackedGame, posts: Iterable[GameData]) -> List[UpdateCandidate]:
        """Returns every post that supersedes the tracked release, newest first."""
        candidates = [c for c in (self.evaluate(tracked, post) for post in posts) if c]
        candidates.sort(key=cmp_to_key(self._compare_candidates))
        if candidates:
            logger.info(f"✅ [{self.__class__.__name__}] {len(candidates)} update(s) found for '{tracked.get('title')}'.")
        return candidates

    def best_update(self, tracked: TrackedGame, posts: Iterable[GameData]) -> Optional[UpdateCandidate]:
        candidates = self.check(tracked, posts)
        return candidates[0] if candidates else None
