import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.core.torrent_files import TorrentFile  # noqa: E402


@pytest.fixture(scope="function")
def album_files() -> list[TorrentFile]:
    return [
        TorrentFile(index=0, name="album/track01.mp3", size=1000, progress=0.5, priority=1),
        TorrentFile(index=1, name="album/track02.mp3", size=2000, progress=1, priority=1),
        TorrentFile(index=2, name="cover.jpg", size=500, progress=1, priority=1),
    ]


@pytest.fixture(scope="function")
def album_rows() -> list[dict]:
    return [
        {"index": 0, "name": "album/track01.mp3", "size": 1000, "progress": 0.5, "priority": 1},
        {"index": 1, "name": "album/track02.mp3", "size": 2000, "progress": 1, "priority": 1},
        {"index": 2, "name": "cover.jpg", "size": 500, "progress": 1, "priority": 1},
    ]


@pytest.fixture(scope="function")
def test_client(monkeypatch):
    monkeypatch.delenv("FILETREE_STRICT_PATHS", raising=False)
    monkeypatch.delenv("FILETREE_AUTO_EXPAND_MAX_FILES", raising=False)
    from apps.api.main import app

    yield TestClient(app)
