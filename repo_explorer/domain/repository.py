"""Domain entities for GitHub users and repositories."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Immutable GitHub user profile."""
    
    login: str
    name: Optional[str]
    avatar_url: str
    url: str
    public_repos: int


@dataclass(frozen=True)
class Repository:
    """Immutable repository entity."""
    
    id: int
    name: str
    full_name: str
    private: bool
    fork: bool
    archived: bool
    stars: int
    forks: int
    language: Optional[str]
    description: Optional[str]
    url: str
    updated_at: datetime
