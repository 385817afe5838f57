"""Summary statistics over a repository list for dashboard-style views."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from repo_explorer.domain.repository import Repository

TOP_LANGUAGES = 6
TOP_STARRED = 10


@dataclass(frozen=True)
class RepositoryStats:
    total_repositories: int = 0
    total_stars: int = 0
    total_forks: int = 0
    languages: List[Tuple[str, int]] = field(default_factory=list)
    top_starred: List[Repository] = field(default_factory=list)


def language_distribution(repositories: Sequence[Repository], limit: int = TOP_LANGUAGES) -> List[Tuple[str, int]]:
    """
    Count repositories per language, most common first.
    
    Repositories without a language are skipped. Equal counts keep the order
    in which each language first appears.
    """
    counts = Counter(repo.language for repo in repositories if repo.language)
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def top_starred(repositories: Sequence[Repository], limit: int = TOP_STARRED) -> List[Repository]:
    """Repositories with at least one star, highest first."""
    starred = [repo for repo in repositories if repo.stars > 0]
    return sorted(starred, key=lambda repo: repo.stars, reverse=True)[:limit]


def repository_stats(repositories: Sequence[Repository]) -> RepositoryStats:
    return RepositoryStats(
        total_repositories=len(repositories),
        total_stars=sum(repo.stars for repo in repositories),
        total_forks=sum(repo.forks for repo in repositories),
        languages=language_distribution(repositories),
        top_starred=top_starred(repositories),
    )


def stats_to_dict(stats: RepositoryStats) -> Dict[str, Any]:
    return {
        "total_repositories": stats.total_repositories,
        "total_stars": stats.total_stars,
        "total_forks": stats.total_forks,
        "languages": [{"name": name, "count": count} for name, count in stats.languages],
        "top_starred": [{"name": repo.name, "stars": repo.stars} for repo in stats.top_starred],
    }
