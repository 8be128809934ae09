"""Fixtures for the view-model tests."""
import pytest
from helpers import Events, FakeGitHubService, RecordingRepository


@pytest.fixture
def service():
    return FakeGitHubService()


@pytest.fixture
def repository():
    return RecordingRepository()


@pytest.fixture
def events():
    return Events()
