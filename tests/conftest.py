import os
import sys
import uuid
import warnings
from pathlib import Path

import pytest

# Ignore warnings from app.shared
warnings.filterwarnings("ignore", category=DeprecationWarning, module="app.shared.*")

# Keep test runs quiet and independent of a developer's env.local
os.environ.setdefault("DEBUG", "false")

# Ensure the project root is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

# Import database fixtures so they are available to all tests
from app.domain.live.watch.watch_models import WatchSettings  # noqa: E402
from tests.fixtures.memory_store import InMemoryRecordStore  # noqa: E402
from tests.fixtures.mongo_fixtures import *  # noqa: E402, F403


@pytest.fixture
def memory_store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def channel_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def fast_settings() -> WatchSettings:
    """Timer settings short enough to observe several ticks in a test."""
    return WatchSettings(
        caption_interval=0.02,
        mood_interval=0.03,
        peer_chat_interval=0.02,
        peer_chat_admit_probability=1.0,
        peer_chat_enabled=True,
    )


@pytest.fixture
def idle_settings() -> WatchSettings:
    """Timer settings that never fire during a test."""
    return WatchSettings(
        caption_interval=3600,
        mood_interval=3600,
        peer_chat_interval=3600,
        peer_chat_admit_probability=1.0,
        peer_chat_enabled=True,
    )
