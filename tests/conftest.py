"""
Configuration for pytest to set up the import path and shared fixtures.
"""

import sys
from pathlib import Path
import pytest

# Add the parent directory to Python path so we can import traversal, adapters, etc.
parent_dir = Path(__file__).parent.parent
sys.path.insert(0, str(parent_dir))

# Import after path setup
from adapters import Scheduler, set_scheduler
from models import reset_settings


class RecordingScheduler(Scheduler):
    """Scheduler that stores thunks instead of running them"""

    def __init__(self):
        self.scheduled = []

    def call_later(self, seconds, thunk):
        self.scheduled.append((seconds, thunk))

    def run_all(self):
        pending, self.scheduled = self.scheduled, []
        for _, thunk in pending:
            thunk()
        return len(pending)


@pytest.fixture(autouse=True)
def isolated_state():
    """Each test starts with fresh settings and the default scheduler."""
    reset_settings()
    yield
    reset_settings()
    set_scheduler(None)


@pytest.fixture
def recording_scheduler():
    scheduler = RecordingScheduler()
    set_scheduler(scheduler)
    return scheduler


@pytest.fixture
def sample_mapping():
    return {"a": 1, "b": 2, "c": 3}


@pytest.fixture
def sample_sequence():
    return [3, 5, 7, 5, 3]
