"""Filter and sort criteria applied to a fetched repository list."""

from dataclasses import dataclass
from typing import Iterable, Tuple

SORT_STARS = "stars"
SORT_FORKS = "forks"
SORT_UPDATED = "updated"
SORT_KEYS = (SORT_STARS, SORT_FORKS, SORT_UPDATED)

REPO_TYPE_PUBLIC = "public"
REPO_TYPE_PRIVATE = "private"
REPO_TYPE_FORKED = "forked"
REPO_TYPES = (REPO_TYPE_PUBLIC, REPO_TYPE_PRIVATE, REPO_TYPE_FORKED)


def parse_keywords(text: str) -> Tuple[str, ...]:
    """
    Split a comma-separated keyword string.
    
    Args:
        text: Raw user input, e.g. "cli, Web ,"
    
    Returns:
        Lower-cased, trimmed keywords with empty entries removed
    """
    if not text:
        return ()
    return tuple(k.strip().lower() for k in text.split(",") if k.strip())


@dataclass(frozen=True)
class Criteria:
    """User-selected filter and sort parameters."""
    
    keywords: Tuple[str, ...] = ()
    min_stars: int = 0
    language: str = ""
    include_public: bool = True
    include_private: bool = True
    include_forked: bool = True
    include_archived: bool = False
    sort_by: str = SORT_STARS
    
    def __post_init__(self):
        if self.sort_by not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {self.sort_by!r} (expected one of {SORT_KEYS})")
        keywords = self.keywords
        if isinstance(keywords, str):
            keywords = keywords.split(",")
        # Keywords match case-insensitively, store them trimmed and folded
        object.__setattr__(
            self, "keywords", tuple(k.strip().lower() for k in keywords if k and k.strip())
        )
    
    @classmethod
    def from_repo_types(cls, repo_types: Iterable[str], **kwargs) -> "Criteria":
        """
        Build criteria from a list of repository type names.
        
        An empty list places no restriction on repository type.
        """
        selected = set(repo_types)
        unknown = selected - set(REPO_TYPES)
        if unknown:
            raise ValueError(f"Unknown repository types: {sorted(unknown)}")
        if not selected:
            selected = set(REPO_TYPES)
        return cls(
            include_public=REPO_TYPE_PUBLIC in selected,
            include_private=REPO_TYPE_PRIVATE in selected,
            include_forked=REPO_TYPE_FORKED in selected,
            **kwargs,
        )
