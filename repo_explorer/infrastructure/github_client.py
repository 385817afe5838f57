"""GitHub REST API client for user profiles and repository listings."""

import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from repo_explorer.domain.cancellation import CancellationToken
from repo_explorer.domain.repository import Repository, User
from repo_explorer.domain.results import FetchError, FetchResult

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised for any failed GitHub API call."""
    
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class UserNotFound(GitHubAPIError):
    """Raised when the requested user does not exist."""
    pass


class RequestSuperseded(GitHubAPIError):
    """Raised when the caller cancelled the request mid-flight."""
    pass


class GitHubRESTClient:
    """Stateless client for the public (unauthenticated) GitHub REST API."""
    
    # Unauthenticated access allows 60 requests per hour, so only a couple of
    # pages are fetched per search by default
    
    DEFAULT_API_URL = "https://api.github.com"
    PAGE_SIZE = 100
    DEFAULT_MAX_PAGES = 2
    DEFAULT_TIMEOUT_SECONDS = 30
    
    def __init__(
        self,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize GitHub REST client.
        
        Args:
            session: HTTP session to issue requests with. If None, a new requests.Session is used.
            base_url: API base URL. If None, uses GITHUB_API_URL env var.
            timeout: Per-request timeout in seconds. If None, uses GITHUB_TIMEOUT_SECONDS env var.
        """
        if base_url is None:
            base_url = os.getenv("GITHUB_API_URL", self.DEFAULT_API_URL)
        if timeout is None:
            timeout = float(os.getenv("GITHUB_TIMEOUT_SECONDS", str(self.DEFAULT_TIMEOUT_SECONDS)))
        
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
        }
    
    def _get_json(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        token: Optional[CancellationToken] = None,
    ) -> Any:
        """
        Execute a GET request and decode the JSON body.
        
        Args:
            path: Path below the API base URL
            params: Query parameters
            token: Cancellation token checked before and after the call
        
        Returns:
            Decoded JSON response body
        
        Raises:
            RequestSuperseded: If the token was cancelled
            UserNotFound: On HTTP 404
            RateLimitExceeded: On HTTP 403
            GitHubAPIError: On any other non-2xx status
            requests.RequestException: If the request itself fails
        """
        if token is not None and token.cancelled:
            raise RequestSuperseded("Request cancelled before it was sent")
        
        url = f"{self.base_url}{path}"
        response = self.session.get(url, params=params, headers=self.headers, timeout=self.timeout)
        
        if token is not None and token.cancelled:
            raise RequestSuperseded("Request cancelled while in flight")
        
        if response.status_code == 404:
            raise UserNotFound(f"Not found: {url}", 404)
        elif response.status_code == 403:
            remaining = response.headers.get("X-RateLimit-Remaining")
            logger.warning(f"GitHub returned 403 for {url} (rate limit remaining: {remaining})")
            raise RateLimitExceeded("Rate limit exceeded", 403)
        elif not 200 <= response.status_code < 300:
            raise GitHubAPIError(f"Request failed ({response.status_code})", response.status_code)
        
        return response.json()
    
    def _run(self, operation: str, call, token: Optional[CancellationToken]) -> FetchResult:
        """Run a fetch and translate every expected failure into a FetchError."""
        try:
            return FetchResult.success(call())
        except RequestSuperseded:
            logger.warning(f"{operation} superseded (generation {token.generation if token else '?'})")
            return FetchResult.failure(FetchError.superseded())
        except UserNotFound:
            logger.warning(f"{operation}: user not found")
            return FetchResult.failure(FetchError.not_found())
        except RateLimitExceeded:
            return FetchResult.failure(FetchError.rate_limited())
        except GitHubAPIError as e:
            logger.error(f"{operation} failed: {e}")
            return FetchResult.failure(FetchError.transport(str(e), e.status_code))
        except requests.exceptions.RequestException as e:
            logger.error(f"{operation} failed: {e}")
            return FetchResult.failure(FetchError.transport(str(e) or "Network error"))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            # Malformed JSON or an unexpected payload shape
            logger.error(f"{operation} returned a malformed response: {e!r}")
            return FetchResult.failure(FetchError.transport(f"Malformed response: {e}"))
    
    def fetch_user(self, username: str, token: Optional[CancellationToken] = None) -> FetchResult:
        """
        Fetch a user's public profile.
        
        Args:
            username: GitHub login; surrounding whitespace is ignored
            token: Optional cancellation token
        
        Returns:
            FetchResult holding a User, or a FetchError
        """
        username = (username or "").strip()
        if not username:
            return FetchResult.failure(FetchError.invalid_input())
        
        def call() -> User:
            data = self._get_json(f"/users/{quote(username, safe='')}", token=token)
            user = parse_user(data)
            logger.info(f"Fetched user {user.login} ({user.public_repos} public repositories)")
            return user
        
        return self._run(f"Fetching user {username}", call, token)
    
    def fetch_repositories(
        self,
        username: str,
        max_pages: Optional[int] = None,
        token: Optional[CancellationToken] = None,
    ) -> FetchResult:
        """
        Fetch up to max_pages pages of a user's repositories.
        
        Pages are requested one after another starting at page 1 and
        concatenated in page order. Fetching stops at the first short page.
        A failure on any page discards the pages already fetched.
        
        Args:
            username: GitHub login; surrounding whitespace is ignored
            max_pages: Page cap. If None, uses GITHUB_MAX_PAGES env var.
            token: Optional cancellation token
        
        Returns:
            FetchResult holding a list of Repository, or a FetchError
        """
        username = (username or "").strip()
        if not username:
            return FetchResult.failure(FetchError.invalid_input())
        if max_pages is None:
            max_pages = int(os.getenv("GITHUB_MAX_PAGES", str(self.DEFAULT_MAX_PAGES)))
        
        def call() -> List[Repository]:
            repositories: List[Repository] = []
            pages = 0
            for page in range(1, max_pages + 1):
                data = self._get_json(
                    f"/users/{quote(username, safe='')}/repos",
                    params={"per_page": self.PAGE_SIZE, "page": page, "sort": "updated"},
                    token=token,
                )
                if not isinstance(data, list):
                    raise TypeError(f"Expected a list of repositories, got {type(data).__name__}")
                pages += 1
                repositories.extend(parse_repository(node) for node in data)
                
                if len(data) < self.PAGE_SIZE:
                    break
            
            logger.info(f"Fetched {len(repositories)} repositories for {username} over {pages} page(s)")
            return repositories
        
        return self._run(f"Fetching repositories of {username}", call, token)


def _parse_datetime(value: str) -> datetime:
    if not isinstance(value, str):
        raise TypeError(f"Expected an ISO 8601 timestamp, got {type(value).__name__}")
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def parse_user(node: Dict[str, Any]) -> User:
    """Build a User from a /users/{username} payload."""
    return User(
        login=node["login"],
        name=node.get("name"),
        avatar_url=node.get("avatar_url", ""),
        url=node.get("html_url", ""),
        public_repos=int(node.get("public_repos") or 0),
    )


def parse_repository(node: Dict[str, Any]) -> Repository:
    """Build a Repository from one element of a /users/{username}/repos payload."""
    return Repository(
        id=int(node["id"]),
        name=node["name"],
        full_name=node["full_name"],
        private=bool(node.get("private", False)),
        fork=bool(node.get("fork", False)),
        archived=bool(node.get("archived", False)),
        stars=int(node.get("stargazers_count") or 0),
        forks=int(node.get("forks_count") or 0),
        language=node.get("language"),
        description=node.get("description"),
        url=node.get("html_url", ""),
        updated_at=_parse_datetime(node["updated_at"]),
    )
