"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from fakes import API, FakeSession
from repo_explorer.domain.repository import Repository
from repo_explorer.infrastructure.github_client import GitHubRESTClient

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def client(fake_session):
    """GitHub client wired to the fake session."""
    return GitHubRESTClient(session=fake_session, base_url=API, timeout=5)


@pytest.fixture
def make_repo():
    """Factory for Repository entities with sensible defaults."""
    counter = {"next_id": 1}

    def _make(name, stars=0, forks=0, private=False, fork=False, archived=False,
              language=None, description=None, updated_days=0):
        repo_id = counter["next_id"]
        counter["next_id"] += 1
        return Repository(
            id=repo_id,
            name=name,
            full_name=f"octocat/{name}",
            private=private,
            fork=fork,
            archived=archived,
            stars=stars,
            forks=forks,
            language=language,
            description=description,
            url=f"https://github.com/octocat/{name}",
            updated_at=BASE_TIME + timedelta(days=updated_days),
        )

    return _make
