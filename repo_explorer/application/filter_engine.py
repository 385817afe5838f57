"""Client-side filtering and sorting of a fetched repository list.

Everything here is pure: inputs are never mutated and the output is always a
subsequence of the input. Sorting relies on ``sorted`` being stable, so
repositories with equal keys keep their fetch order.
"""

from typing import Callable, Dict, List, Sequence

from repo_explorer.domain.criteria import SORT_FORKS, SORT_STARS, SORT_UPDATED, Criteria
from repo_explorer.domain.repository import Repository

SORT_KEY_FUNCTIONS: Dict[str, Callable[[Repository], object]] = {
    SORT_STARS: lambda repo: repo.stars,
    SORT_FORKS: lambda repo: repo.forks,
    SORT_UPDATED: lambda repo: repo.updated_at,
}


def _matches_type(repo: Repository, criteria: Criteria) -> bool:
    return (
        (criteria.include_public and not repo.private)
        or (criteria.include_private and repo.private)
        or (criteria.include_forked and repo.fork)
    )


def matches_criteria(repo: Repository, criteria: Criteria) -> bool:
    """Return True if a single repository passes every filter in criteria."""
    if not criteria.include_archived and repo.archived:
        return False
    
    if criteria.min_stars > 0 and repo.stars < criteria.min_stars:
        return False
    
    if criteria.language and (repo.language or "").lower() != criteria.language.lower():
        return False
    
    if not _matches_type(repo, criteria):
        return False
    
    if criteria.keywords:
        haystack = f"{repo.name} {repo.description or ''}".lower()
        if not any(keyword in haystack for keyword in criteria.keywords):
            return False
    
    return True


def filter_repositories(repositories: Sequence[Repository], criteria: Criteria) -> List[Repository]:
    return [repo for repo in repositories if matches_criteria(repo, criteria)]


def sort_repositories(repositories: Sequence[Repository], sort_by: str) -> List[Repository]:
    """
    Sort repositories, highest first.
    
    Args:
        repositories: Repositories in fetch order
        sort_by: One of "stars", "forks" or "updated" (most recent first)
    
    Returns:
        New list; ties keep their relative input order
    """
    try:
        key = SORT_KEY_FUNCTIONS[sort_by]
    except KeyError:
        raise ValueError(f"Unknown sort key: {sort_by!r}") from None
    # reverse=True keeps stability for equal keys
    return sorted(repositories, key=key, reverse=True)


def process_repositories(repositories: Sequence[Repository], criteria: Criteria) -> List[Repository]:
    """Filter, then sort, a repository list according to criteria."""
    return sort_repositories(filter_repositories(repositories, criteria), criteria.sort_by)
