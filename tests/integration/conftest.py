"""Pytest configuration and fixtures for integration tests."""

import pytest

from src.entity_store.data_provider import DataProvider
from src.entity_store.dispatcher import ResourceDispatcher
from src.entity_store.models import ProviderConfig
from tests.fixtures.fake_store import FakeStore
from tests.fixtures.sample_entities import USERS_FILES


@pytest.fixture
def store() -> FakeStore:
    """Repository holding two users under data/users."""
    return FakeStore(USERS_FILES)


@pytest.fixture
def config() -> ProviderConfig:
    return ProviderConfig(project_id="group/project", ref="master", tree_per_page=2)


@pytest.fixture
def data_provider(store: FakeStore, config: ProviderConfig) -> DataProvider:
    return DataProvider(ResourceDispatcher(store, config))
