"""Shared pytest fixtures for all test suites."""

from datetime import date
from pathlib import Path

import pytest

from tripbook.config import Settings
from tripbook.state.container import TripStateContainer
from tripbook.state.storage import InMemoryStorage

TRIP_START = date(2025, 12, 15)
TRIP_END = date(2026, 1, 5)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pinned to the default trip, ignoring any local .env file."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        trip_start=TRIP_START,
        trip_end=TRIP_END,
        openai_api_key=None,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def container(storage: InMemoryStorage, settings: Settings) -> TripStateContainer:
    """Freshly loaded container over empty in-memory storage."""
    container = TripStateContainer(storage, settings)
    container.load()
    return container
