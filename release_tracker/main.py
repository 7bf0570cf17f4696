# ===== IMPORTS & DEPENDENCIES =====
import asyncio
import logging
import os
import json
import aiohttp
from typing import List, Optional, Sequence

# --- Configuration ---
from release_tracker.config import LOG_LEVEL, SITE_CONFIGS, TRACKED_GAMES_FILE, UPDATES_FILE

# --- Core Components ---
from release_tracker.core.update_checker import UpdateChecker

# --- Data Models ---
from release_tracker.models.game import GameData, TrackedGame, UpdateCandidate

# --- Data Sources ---
from release_tracker.sources.wordpress import WordPressSource

# ===== CONFIGURATION & CONSTANTS =====
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC / PIPELINE =====
class UpdatePipeline:
    """Orchestrates fetching release posts and checking tracked games for updates."""

    def __init__(self, sources: Sequence[WordPressSource], checker: Optional[UpdateChecker] = None,
                 tracked_games_file: str = TRACKED_GAMES_FILE, updates_file: str = UPDATES_FILE):
        self.sources = list(sources)
        self.checker = checker or UpdateChecker()
        self.tracked_games_file = tracked_games_file
        self.updates_file = updates_file

    def _load_tracked_games(self) -> List[TrackedGame]:
        """Loads the tracked games exported by the persistence layer."""
        logger.info("--- Step 1: Loading tracked games ---")
        if not os.path.exists(self.tracked_games_file):
            logger.warning(f"⚠️ Tracked games file not found: {self.tracked_games_file}")
            return []

        try:
            with open(self.tracked_games_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"❌ Failed to read tracked games from {self.tracked_games_file}: {e}", exc_info=True)
            return []

        if not isinstance(data, list):
            logger.error(f"❌ Expected a list of tracked games in {self.tracked_games_file}.")
            return []

        tracked = [game for game in data if isinstance(game, dict) and game.get('title')]
        logger.info(f"Loaded {len(tracked)} tracked games.")
        return tracked

    async def _fetch_posts(self) -> List[GameData]:
        """Fetches recent posts from all configured sites in parallel."""
        logger.info("--- Step 2: Fetching recent posts from all sites ---")
        tasks = [source.fetch_recent_posts() for source in self.sources]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        all_posts: List[GameData] = []
        for source, result in zip(self.sources, results):
            if isinstance(result, list):
                all_posts.extend(result)
                logger.info(f"✅ Found {len(result)} posts on {source.name}.")
            else:
                logger.error(f"❌ Failed to fetch from {source.name}: {result}", exc_info=result)

        logger.info(f"Total posts fetched: {len(all_posts)}")
        return all_posts

    def _check_updates(self, tracked_games: List[TrackedGame], posts: List[GameData]) -> List[UpdateCandidate]:
        """Keeps the newest accepted release for each tracked game."""
        logger.info("--- Step 3: Checking tracked games for updates ---")
        updates = []
        for tracked in tracked_games:
            best = self.checker.best_update(tracked, posts)
            if best:
                reason = best['reconciliation']['reason']
                logger.info(f"✅ Update for '{tracked['title']}': '{best['post']['title']}' ({reason}).")
                updates.append(best)
            else:
                logger.info(f"ℹ️ No update for '{tracked['title']}'.")
        return updates

    def _save_updates(self, updates: List[UpdateCandidate]) -> None:
        """Saves the found updates to a JSON file for the web front-end and notifiers."""
        logger.info("--- Step 4: Saving found updates ---")
        directory = os.path.dirname(self.updates_file)
        if directory:
            os.makedirs(directory, exist_ok=True)

        try:
            with open(self.updates_file, 'w', encoding='utf-8') as f:
                json.dump(updates, f, ensure_ascii=False, indent=4, default=str)
            logger.info(f"💾 Saved {len(updates)} updates to {self.updates_file}")
        except (OSError, TypeError) as e:
            logger.error(f"❌ Failed to save updates to {self.updates_file}: {e}", exc_info=True)

    async def run(self) -> List[UpdateCandidate]:
        """Executes the complete update check."""
        logger.info("🚀 Starting release update check")

        tracked_games = self._load_tracked_games()
        if not tracked_games:
            logger.info("No tracked games. Saving empty list and exiting.")
            self._save_updates([])
            return []

        posts = await self._fetch_posts()
        if not posts:
            logger.info("No posts found. Saving empty list and exiting.")
            self._save_updates([])
            return []

        updates = self._check_updates(tracked_games, posts)
        self._save_updates(updates)

        logger.info("🏁 Update check finished")
        return updates

# ===== INITIALIZATION & STARTUP =====
async def main():
    """Initializes and runs the UpdatePipeline against every configured site."""
    async with aiohttp.ClientSession() as session:
        sources = [WordPressSource(site_key, session) for site_key in SITE_CONFIGS]
        pipeline = UpdatePipeline(sources)
        try:
            await pipeline.run()
        except Exception as e:
            logger.critical(f"🔥 A critical error occurred in the update pipeline: {e}", exc_info=True)

if __name__ == "__main__":
    if os.name == 'nt':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(main())
