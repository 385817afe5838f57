"""Render repository lists as JSON or CSV."""

import csv
import json
import logging
from typing import Any, Dict, List, Sequence, TextIO

from repo_explorer.domain.repository import Repository

logger = logging.getLogger(__name__)

FIELDNAMES = [
    "id",
    "full_name",
    "stars",
    "forks",
    "language",
    "private",
    "fork",
    "archived",
    "updated_at",
    "url",
]


def repositories_to_rows(repositories: Sequence[Repository]) -> List[Dict[str, Any]]:
    return [
        {
            "id": repo.id,
            "full_name": repo.full_name,
            "stars": repo.stars,
            "forks": repo.forks,
            "language": repo.language or "",
            "private": repo.private,
            "fork": repo.fork,
            "archived": repo.archived,
            "updated_at": repo.updated_at.isoformat(),
            "url": repo.url,
        }
        for repo in repositories
    ]


def write_json(repositories: Sequence[Repository], stream: TextIO):
    """Write repositories to stream as a JSON array."""
    rows = repositories_to_rows(repositories)
    json.dump(rows, stream, indent=2)
    stream.write("\n")
    logger.debug(f"Exported {len(rows)} repositories to JSON")


def write_csv(repositories: Sequence[Repository], stream: TextIO):
    """Write repositories to stream as CSV with a header row."""
    rows = repositories_to_rows(repositories)
    writer = csv.DictWriter(stream, fieldnames=FIELDNAMES)
    writer.writeheader()
    writer.writerows(rows)
    logger.debug(f"Exported {len(rows)} repositories to CSV")
