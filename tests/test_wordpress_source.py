import asyncio
import json
import os

import pytest

from release_tracker.config import SITE_CONFIGS
from release_tracker.sources.wordpress import WordPressSource

BASE_URL = SITE_CONFIGS['steamrip']['base_url']

POST = {
    'id': 101,
    'title': {'rendered': 'Hollow Knight &#8211; Silksong v1.0.1-TENOKE'},
    'link': 'https://steamrip.com/hollow-knight-silksong/',
    'date': '2025-09-05T10:00:00',
    'excerpt': {'rendered': '<p>Free download &amp; play</p>'},
    'jetpack_featured_media_url': 'https://steamrip.com/silksong.jpg',
}


class _FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        pass

    async def json(self, content_type=None):
        return self._payload


class _FakeRequest:
    def __init__(self, payload=None, error=None):
        self._payload = payload
        self._error = error

    async def __aenter__(self):
        if self._error:
            raise self._error
        return _FakeResponse(self._payload)

    async def __aexit__(self, *exc):
        return False


class _FakeSession:
    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return _FakeRequest(self.payload, self.error)


@pytest.fixture
def source(tmp_path):
    return WordPressSource('steamrip', session=None, cache_dir=str(tmp_path))


def test_unknown_site_is_rejected(tmp_path):
    with pytest.raises(ValueError):
        WordPressSource('nosuchsite', session=None, cache_dir=str(tmp_path))


def test_parse_post(source):
    game = source._parse_post(POST)
    assert game['id'] == 'steamrip_101'
    assert game['title'] == 'Hollow Knight – Silksong v1.0.1-TENOKE'
    assert game['raw_title'] == 'Hollow Knight &#8211; Silksong v1.0.1-TENOKE'
    assert game['source'] == 'SteamRip'
    assert game['site_type'] == 'steamrip'
    assert game['image_url'] == 'https://steamrip.com/silksong.jpg'
    assert game['description'] == 'Free download & play'
    assert game['clean_title'] == 'hollow knight silksong'
    assert game['release_group'] == 'TENOKE'
    assert game['version']['version'] == '1.0.1'
    assert game['build']['found'] is False


def test_parse_post_without_title(source):
    assert source._parse_post({'id': 5, 'title': {'rendered': ''}}) is None
    assert source._parse_post({'id': 6}) is None


def test_image_falls_back_to_yoast(source):
    post = {'id': 7, 'title': 'Celeste', 'yoast_head_json': {'og_image': [{'url': 'https://x/celeste.png'}]}}
    assert source._parse_post(post)['image_url'] == 'https://x/celeste.png'
    assert source._parse_post({'id': 8, 'title': 'Celeste'})['image_url'] is None


def test_parse_posts_ignores_unexpected_payloads(source):
    assert source._parse_posts({'code': 'rest_no_route'}) == []
    assert len(source._parse_posts([POST, 'junk', {'id': 9}])) == 1


def test_fetch_recent_posts_reads_fresh_cache(source):
    cache_path = source._get_cache_path(f"{BASE_URL}?{json.dumps({'per_page': 10}, sort_keys=True)}")
    with open(cache_path, 'w', encoding='utf-8') as f:
        json.dump([POST], f)

    games = asyncio.run(source.fetch_recent_posts(limit=10))
    assert [g['id'] for g in games] == ['steamrip_101']


def test_fetch_recent_posts_writes_cache(tmp_path):
    session = _FakeSession(payload=[POST])
    source = WordPressSource('steamrip', session=session, cache_dir=str(tmp_path))

    games = asyncio.run(source.fetch_recent_posts())
    assert len(games) == 1
    url, kwargs = session.calls[0]
    assert url == BASE_URL
    assert kwargs['params'] == {'per_page': 40}

    cache_path = source._get_cache_path(f"{BASE_URL}?{json.dumps({'per_page': 40}, sort_keys=True)}")
    assert os.path.exists(cache_path)

    # Second call is served from the cache
    asyncio.run(source.fetch_recent_posts())
    assert len(session.calls) == 1


def test_network_failure_yields_no_posts(tmp_path):
    session = _FakeSession(error=asyncio.TimeoutError())
    source = WordPressSource('steamrip', session=session, cache_dir=str(tmp_path))
    assert asyncio.run(source.fetch_recent_posts()) == []


def test_search_posts(tmp_path):
    session = _FakeSession(payload=[POST])
    source = WordPressSource('steamrip', session=session, cache_dir=str(tmp_path))

    assert asyncio.run(source.search_posts('  ')) == []
    assert session.calls == []

    games = asyncio.run(source.search_posts('silksong', limit=5))
    assert games[0]['title'].startswith('Hollow Knight')
    assert session.calls[0][1]['params'] == {'search': 'silksong', 'per_page': 5}
