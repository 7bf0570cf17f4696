# ===== TYPES & INTERFACES =====

from typing import TypedDict, Optional

from release_tracker.models.detection import (
    VersionDetection, BuildDetection, TitleAnalysis, ReconciliationResult
)

class GameData(TypedDict, total=False):
    """
    Defines the structure of a scraped release post throughout the pipeline.
    `total=False` means keys are optional, since a post is progressively
    enriched after it is fetched.

    Attributes:
        id (str): Post identifier, prefixed with the site type (e.g., 'steamrip_1234').
        title (str): Post title with HTML entities decoded.
        raw_title (str): Post title exactly as the WordPress API rendered it.
        link (str): Permalink of the post.
        date (Optional[str]): Publication date as reported by WordPress (ISO 8601).
        source (str): Display name of the site (e.g., 'SteamRip').
        site_type (str): Configuration key of the site (e.g., 'steamrip').
        image_url (Optional[str]): Featured image of the post, if any.
        description (Optional[str]): Plain-text excerpt.

        clean_title (str): Search-form cleaned title used for matching.
        release_group (str): Release group tag, or 'UNKNOWN'.
        version (VersionDetection): Version detected in the title.
        build (BuildDetection): Build detected in the title.
    """
    # Core fields
    id: str
    title: str
    raw_title: str
    link: str
    date: Optional[str]
    source: str
    site_type: str
    image_url: Optional[str]
    description: Optional[str]

    # Derived fields
    clean_title: str
    release_group: str
    version: VersionDetection
    build: BuildDetection


class TrackedGame(TypedDict, total=False):
    """
    A game a user tracks, as handed over by the persistence layer.

    Attributes:
        game_id (str): External identifier of the tracked post.
        title (str): Title the game was tracked under.
        link (Optional[str]): Permalink of the tracked post.
        current_version (Optional[str]): Version currently tracked.
        current_build (Optional[str]): Build currently tracked.
    """
    game_id: str
    title: str
    link: Optional[str]
    current_version: Optional[str]
    current_build: Optional[str]


class UpdateCandidate(TypedDict):
    """
    A scraped post accepted as a newer release of a tracked game.

    Attributes:
        game_id (str): External identifier of the tracked game.
        post (GameData): The scraped post.
        similarity (float): Title similarity between the tracked game and the post.
        analysis (TitleAnalysis): Version/build analysis of the post title.
        reconciliation (ReconciliationResult): Why the post supersedes the tracked release.
    """
    game_id: str
    post: GameData
    similarity: float
    analysis: TitleAnalysis
    reconciliation: ReconciliationResult
