#!/usr/bin/env python3
"""Script to search and filter a GitHub user's repositories."""

import argparse
import json
import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from repo_explorer.application.export import write_csv, write_json
from repo_explorer.application.pagination import DEFAULT_PER_PAGE, paginate
from repo_explorer.application.search_service import SearchService
from repo_explorer.application.stats import repository_stats, stats_to_dict
from repo_explorer.domain.criteria import SORT_KEYS, SORT_STARS, Criteria, parse_keywords
from repo_explorer.infrastructure.github_client import GitHubRESTClient

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Search a GitHub user's repositories.")
    parser.add_argument("username")
    parser.add_argument("--keywords", default="", help="Comma-separated keywords matched against name and description")
    parser.add_argument("--min-stars", type=int, default=0)
    parser.add_argument("--language", default="")
    parser.add_argument("--types", default="", help="Comma-separated subset of public,private,forked (default: all)")
    parser.add_argument("--include-archived", action="store_true")
    parser.add_argument("--sort", choices=SORT_KEYS, default=SORT_STARS)
    parser.add_argument("--max-pages", type=int, default=None)
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--per-page", type=int, default=DEFAULT_PER_PAGE)
    parser.add_argument("--format", choices=("table", "json", "csv"), default="table")
    parser.add_argument("--stats", action="store_true", help="Print summary statistics of the matching repositories instead of the list")
    return parser.parse_args(argv)


def print_table(result, page):
    user = result.user
    print(f"{user.login} ({user.name or '-'}) - {user.public_repos} public repositories - {user.url}")
    print(f"{len(result.repositories)} of {len(result.fetched)} repositories match "
          f"(page {page.page}/{page.total_pages or 1})")
    for repo in page.items:
        flags = ",".join(flag for flag, on in (("private", repo.private), ("fork", repo.fork), ("archived", repo.archived)) if on)
        print(f"  {repo.full_name:<40} *{repo.stars:<6} forks {repo.forks:<5} "
              f"{repo.language or '-':<12} {repo.updated_at:%Y-%m-%d} {flags}")


def print_stats(stats):
    print(f"{stats.total_repositories} repositories, {stats.total_stars} stars, {stats.total_forks} forks")
    print("Languages:")
    for name, count in stats.languages:
        print(f"  {name:<20} {count}")
    print("Top starred:")
    for repo in stats.top_starred:
        print(f"  {repo.name:<40} *{repo.stars}")


def main(argv=None, client=None):
    """Search a user's repositories and print the filtered result."""
    args = parse_args(argv)
    if args.per_page <= 0:
        logger.error(f"--per-page must be positive, got {args.per_page}")
        return 1
    if args.stats and args.format == "csv":
        logger.error("--stats supports table and json output only")
        return 1
    
    try:
        types = [t.strip() for t in args.types.split(",") if t.strip()]
        criteria = Criteria.from_repo_types(
            types,
            keywords=parse_keywords(args.keywords),
            min_stars=args.min_stars,
            language=args.language,
            include_archived=args.include_archived,
            sort_by=args.sort,
        )
    except ValueError as e:
        logger.error(f"Invalid criteria: {e}")
        return 1
    
    service = SearchService(client or GitHubRESTClient(), max_pages=args.max_pages)
    result = service.search(args.username, criteria)
    
    if result.error is not None:
        logger.error(f"Search failed: {result.error.message}")
        return 1
    
    if args.stats:
        stats = repository_stats(result.repositories)
        if args.format == "json":
            json.dump(stats_to_dict(stats), sys.stdout, indent=2)
            sys.stdout.write("\n")
        else:
            print_stats(stats)
        return 0
    
    if args.format == "json":
        write_json(result.repositories, sys.stdout)
    elif args.format == "csv":
        write_csv(result.repositories, sys.stdout)
    else:
        print_table(result, paginate(result.repositories, args.page, args.per_page))
    return 0


if __name__ == "__main__":
    sys.exit(main())
