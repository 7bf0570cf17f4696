# ===== IMPORTS & DEPENDENCIES =====
import logging
import aiohttp
import os
from typing import List, Optional, Dict, Any

from release_tracker.core.base_client import BaseWebClient
from release_tracker.models.game import GameData
from release_tracker.config import SITE_CONFIGS, MAX_POSTS_PER_SITE, DEFAULT_CACHE_TTL, CACHE_DIR
from release_tracker.utils.html_utils import rendered_text
from release_tracker.utils.title_cleaner import clean_title, extract_release_group
from release_tracker.utils.version_detector import detect_version, detect_build

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class WordPressSource(BaseWebClient):
    """
    Fetches release posts from a WordPress site through its REST API
    (`/wp-json/wp/v2/posts`) and turns them into GameData entries with a
    cleaned title and the version/build found in the post title.
    """

    def __init__(self, site_key: str, session: aiohttp.ClientSession, cache_ttl: int = DEFAULT_CACHE_TTL,
                 cache_dir: str = CACHE_DIR):
        if site_key not in SITE_CONFIGS:
            raise ValueError(f"Unknown site '{site_key}'. Known sites: {', '.join(SITE_CONFIGS)}")
        super().__init__(
            cache_dir=os.path.join(cache_dir, site_key),
            cache_ttl=cache_ttl,
            session=session
        )
        self.site_key = site_key
        self.site = SITE_CONFIGS[site_key]

    @property
    def name(self) -> str:
        return self.site['name']

    def _default_limit(self) -> int:
        return MAX_POSTS_PER_SITE.get(self.site_key, MAX_POSTS_PER_SITE['default'])

    def _extract_image(self, post: Dict[str, Any]) -> Optional[str]:
        """Picks the featured image from whichever field the site's plugins fill in."""
        image = post.get('jetpack_featured_media_url') or post.get('featured_image_src')
        if image:
            return image
        og_images = (post.get('yoast_head_json') or {}).get('og_image') or []
        if og_images and isinstance(og_images[0], dict):
            return og_images[0].get('url')
        return None

    def _parse_post(self, post: Dict[str, Any]) -> Optional[GameData]:
        """Maps a WordPress REST post onto GameData. Returns None for posts without a title."""
        title_field = post.get('title')
        raw_title = (title_field.get('rendered') or '') if isinstance(title_field, dict) else str(title_field or '')
        title = rendered_text(raw_title)
        if not title:
            logger.debug(f"[{self.__class__.__name__}] Skipping post {post.get('id')} without a title.")
            return None

        release_group, _ = extract_release_group(title)
        game: GameData = {
            'id': f"{self.site['type']}_{post.get('id')}",
            'title': title,
            'raw_title': raw_title,
            'link': post.get('link', ''),
            'date': post.get('date'),
            'source': self.site['name'],
            'site_type': self.site['type'],
            'image_url': self._extract_image(post),
            'description': rendered_text(post.get('excerpt')),
            'clean_title': clean_title(title),
            'release_group': release_group,
            'version': detect_version(title),
            'build': detect_build(title)
        }
        return game

    def _parse_posts(self, posts: Any) -> List[GameData]:
        if not isinstance(posts, list):
            logger.warning(f"⚠️ [{self.__class__.__name__}] Unexpected response from {self.name}: expected a list of posts.")
            return []

        games = []
        for post in posts:
            if not isinstance(post, dict):
                continue
            game = self._parse_post(post)
            if game:
                games.append(game)
        return games

    async def fetch_recent_posts(self, limit: Optional[int] = None) -> List[GameData]:
        """Fetches the latest posts of the site."""
        params = {'per_page': limit or self._default_limit()}
        posts = await self._fetch_json(self.site['base_url'], params=params)
        if posts is None:
            logger.warning(f"[{self.__class__.__name__}] No posts fetched from {self.name}.")
            return []

        games = self._parse_posts(posts)
        logger.info(f"✅ [{self.__class__.__name__}] Parsed {len(games)} posts from {self.name}.")
        return games

    async def search_posts(self, query: str, limit: Optional[int] = None) -> List[GameData]:
        """Searches the site for posts matching `query`."""
        query = query.strip()
        if not query:
            return []

        params = {'search': query, 'per_page': limit or self._default_limit()}
        posts = await self._fetch_json(self.site['base_url'], params=params)
        if posts is None:
            logger.warning(f"[{self.__class__.__name__}] Search for '{query}' on {self.name} returned nothing.")
            return []

        games = self._parse_posts(posts)
        logger.info(f"✅ [{self.__class__.__name__}] Found {len(games)} posts for '{query}' on {self.name}.")
        return games
