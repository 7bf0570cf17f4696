# ===== IMPORTS & DEPENDENCIES =====
import logging
import asyncio
import aiohttp
import os
import hashlib
import time
import json
from typing import Optional, Any, Dict

from release_tracker.config import COMMON_HEADERS, REQUEST_TIMEOUT

# ===== CONFIGURATION & CONSTANTS =====
logger = logging.getLogger(__name__)

# ===== CORE BUSINESS LOGIC =====
class BaseWebClient:
    """A base class for web clients providing a file cache with an injected TTL."""

    def __init__(self, cache_dir: str, cache_ttl: int, session: aiohttp.ClientSession):
        self._session = session
        self._cache_dir = cache_dir
        self._cache_ttl = cache_ttl
        os.makedirs(self._cache_dir, exist_ok=True)
        logger.debug(f"[{self.__class__.__name__}] Initialized with cache dir: {self._cache_dir} and TTL: {self._cache_ttl}s")

    def _get_cache_path(self, key: str, extension: str = "json") -> str:
        """Generates a cache file path from a given key."""
        hashed_key = hashlib.sha256(key.encode('utf-8')).hexdigest()
        return os.path.join(self._cache_dir, f"{hashed_key}.{extension}")

    def _is_cache_valid(self, cache_path: str) -> bool:
        """Checks if a cache file exists and has not expired."""
        if not os.path.exists(cache_path):
            return False

        file_mod_time = os.path.getmtime(cache_path)
        if (time.time() - file_mod_time) > self._cache_ttl:
            logger.debug(f"[{self.__class__.__name__}] Cache file expired: {cache_path}")
            return False

        logger.debug(f"[{self.__class__.__name__}] Cache file is valid: {cache_path}")
        return True

    def _read_cache(self, cache_path: str) -> Optional[Any]:
        with open(cache_path, 'r', encoding='utf-8') as f:
            content = f.read()
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Invalid JSON in cache file {cache_path}. Deleting and re-fetching.")
            os.remove(cache_path)
            return None

    async def _fetch_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Optional[Any]:
        """
        Fetches a JSON document with caching. A single attempt is made;
        any failure is logged and reported as None.
        """
        cache_key = f"{url}?{json.dumps(params, sort_keys=True)}" if params else url
        cache_path = self._get_cache_path(cache_key)

        if self._is_cache_valid(cache_path):
            logger.info(f"✅ [{self.__class__.__name__}] Loading content from cache: {cache_path}")
            cached = self._read_cache(cache_path)
            if cached is not None:
                return cached

        logger.info(f"➡️ [{self.__class__.__name__}] Fetching from network: {url}")
        request_headers = headers or COMMON_HEADERS
        timeout = aiohttp.ClientTimeout(total=REQUEST_TIMEOUT)

        try:
            async with self._session.get(url, params=params, headers=request_headers, timeout=timeout) as response:
                response.raise_for_status()
                # content_type=None handles WordPress installs with non-standard content-types
                content = await response.json(content_type=None)
        except aiohttp.ClientResponseError as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] HTTP error on {url}: Status {e.status}")
            return None
        except (asyncio.TimeoutError, aiohttp.ClientConnectorError) as e:
            logger.warning(f"⚠️ [{self.__class__.__name__}] Network error on {url}: {type(e).__name__}")
            return None
        except Exception as e:
            logger.error(f"❌ [{self.__class__.__name__}] Unexpected error fetching {url}: {e}", exc_info=True)
            return None

        with open(cache_path, 'w', encoding='utf-8') as f:
            json.dump(content, f, ensure_ascii=False, indent=4)
        logger.info(f"💾 [{self.__class__.__name__}] Content saved to cache: {cache_path}")
        return content
