"""Application service combining the GitHub client with the filter engine."""

import logging
import re
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from repo_explorer.application.filter_engine import process_repositories
from repo_explorer.domain.cancellation import CancellationToken
from repo_explorer.domain.criteria import Criteria
from repo_explorer.domain.repository import Repository, User
from repo_explorer.domain.results import INVALID_USERNAME_MESSAGE, FetchError
from repo_explorer.infrastructure.github_client import GitHubRESTClient

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]{0,37}[a-zA-Z0-9])?$")


def validate_username(username: str) -> Optional[FetchError]:
    """Return a FetchError if username cannot be a GitHub login, else None."""
    username = (username or "").strip()
    if not username:
        return FetchError.invalid_input()
    if not USERNAME_PATTERN.match(username):
        return FetchError.invalid_input(INVALID_USERNAME_MESSAGE)
    return None


@dataclass(frozen=True)
class SearchResult:
    """Outcome of one search: profile, filtered view, full fetched list, error."""
    
    user: Optional[User] = None
    repositories: List[Repository] = field(default_factory=list)
    fetched: List[Repository] = field(default_factory=list)
    error: Optional[FetchError] = None


class SearchService:
    """Service for searching a user's repositories and re-applying criteria."""
    
    def __init__(
        self,
        github_client: GitHubRESTClient,
        max_pages: Optional[int] = None,
        executor: Optional[Executor] = None,
    ):
        """
        Initialize search service.
        
        Args:
            github_client: GitHub API client
            max_pages: Repository page cap passed to the client (None = client default)
            executor: If given, user and repository fetches are submitted to it
                concurrently. The service never creates a pool of its own.
        """
        self.github_client = github_client
        self.max_pages = max_pages
        self.executor = executor
    
    def _fetch_both(self, username: str, token: Optional[CancellationToken]):
        if self.executor is None:
            user_result = self.github_client.fetch_user(username, token=token)
            repos_result = self.github_client.fetch_repositories(
                username, max_pages=self.max_pages, token=token
            )
            return user_result, repos_result
        
        user_future = self.executor.submit(self.github_client.fetch_user, username, token=token)
        repos_future = self.executor.submit(
            self.github_client.fetch_repositories, username, max_pages=self.max_pages, token=token
        )
        return user_future.result(), repos_future.result()
    
    def search(
        self,
        username: str,
        criteria: Criteria,
        token: Optional[CancellationToken] = None,
    ) -> SearchResult:
        """
        Fetch a user and their repositories, then filter and sort them.
        
        Args:
            username: GitHub login
            criteria: Filter and sort parameters
            token: Token of this request; a cancelled token yields a superseded error
        
        Returns:
            SearchResult. A user error clears everything; a repository error
            keeps the user but returns no repositories.
        """
        invalid = validate_username(username)
        if invalid is not None:
            return SearchResult(error=invalid)
        
        username = username.strip()
        logger.info(f"Searching repositories of {username}")
        user_result, repos_result = self._fetch_both(username, token)
        
        if token is not None and token.cancelled:
            logger.info(f"Discarding stale results for {username} (generation {token.generation})")
            return SearchResult(error=FetchError.superseded())
        
        if not user_result.ok:
            return SearchResult(error=user_result.error)
        if not repos_result.ok:
            return SearchResult(user=user_result.value, error=repos_result.error)
        
        fetched = repos_result.value
        view = process_repositories(fetched, criteria)
        logger.info(f"{len(view)} of {len(fetched)} repositories match for {username}")
        return SearchResult(user=user_result.value, repositories=view, fetched=list(fetched))
    
    def refilter(self, repositories: Sequence[Repository], criteria: Criteria) -> List[Repository]:
        """Re-apply criteria to an already fetched list without touching the network."""
        return process_repositories(repositories, criteria)
