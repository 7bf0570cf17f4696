import asyncio
import json

import pytest

from release_tracker.main import UpdatePipeline


class _FakeSource:
    def __init__(self, name, posts):
        self.name = name
        self._posts = posts

    async def fetch_recent_posts(self):
        return self._posts


class _BrokenSource:
    name = 'Broken'

    async def fetch_recent_posts(self):
        raise RuntimeError("site is down")


@pytest.fixture
def tracked_file(tmp_path):
    path = tmp_path / 'tracked_games.json'
    path.write_text(json.dumps([
        {'game_id': 'steamrip_1', 'title': 'Palworld', 'current_version': '0.6.5'},
        {'game_id': 'steamrip_2', 'title': 'Hades', 'current_version': '1.38'},
        {'game_id': 'broken'},
    ]), encoding='utf-8')
    return path


def _pipeline(sources, tracked_file, tmp_path):
    return UpdatePipeline(
        sources,
        tracked_games_file=str(tracked_file),
        updates_file=str(tmp_path / 'out' / 'updates.json')
    )


def test_run_saves_best_update_per_game(tracked_file, tmp_path):
    posts = [
        {'id': 'steamrip_10', 'title': 'Palworld v0.6.6', 'link': 'https://steamrip.com/10/'},
        {'id': 'steamrip_11', 'title': 'Palworld v0.7.0', 'link': 'https://steamrip.com/11/'},
        {'id': 'steamrip_12', 'title': 'Hades v1.38', 'link': 'https://steamrip.com/12/'},
    ]
    pipeline = _pipeline([_FakeSource('SteamRip', posts), _BrokenSource()], tracked_file, tmp_path)

    updates = asyncio.run(pipeline.run())
    assert [u['post']['id'] for u in updates] == ['steamrip_11']

    saved = json.loads((tmp_path / 'out' / 'updates.json').read_text(encoding='utf-8'))
    assert len(saved) == 1
    assert saved[0]['game_id'] == 'steamrip_1'
    assert saved[0]['reconciliation']['decision'] == 'replace'


def test_run_without_tracked_games_saves_empty_list(tmp_path):
    pipeline = _pipeline([_FakeSource('SteamRip', [])], tmp_path / 'missing.json', tmp_path)
    assert asyncio.run(pipeline.run()) == []
    assert json.loads((tmp_path / 'out' / 'updates.json').read_text(encoding='utf-8')) == []


def test_run_without_posts_saves_empty_list(tracked_file, tmp_path):
    pipeline = _pipeline([_BrokenSource()], tracked_file, tmp_path)
    assert asyncio.run(pipeline.run()) == []


def test_invalid_tracked_games_file(tmp_path):
    path = tmp_path / 'tracked_games.json'
    path.write_text('{not json', encoding='utf-8')
    pipeline = _pipeline([], path, tmp_path)
    assert pipeline._load_tracked_games() == []
