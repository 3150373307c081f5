#!/usr/bin/env python3
"""
Dependabot PR Dashboard - Main CLI entrypoint

Collects open Dependabot pull requests across a GitHub organization, adds
each repository's language and topics, and writes a static HTML report
that can be filtered in the browser.

Usage:
    python main.py                                   # Uses .env / defaults (org: agrc)
    python main.py --org agrc --output prs.html
    python main.py --language Python --topic infra   # Preselect filters in the page
"""

import argparse
import sys
from typing import Optional

import requests

from fetchers.github import GitHubAPIError, GitHubFetcher
from models.config_models import Config
from report.aggregator import build_report_view, parse_search_result, unique_repositories
from report.renderer import render_report, write_report
from utils.config_loader import load_config
from utils.logger import setup_logger

logger = setup_logger()


def generate_dashboard(
    config: Config,
    fetcher: Optional[GitHubFetcher] = None,
    language: Optional[str] = None,
    topics: Optional[list[str]] = None,
) -> bool:
    """
    Fetch, aggregate, render and write the report.

    The search call is fatal: if it fails nothing is written. Repository
    detail failures only degrade that repository to default metadata.

    Args:
        config: Validated configuration
        fetcher: GitHubFetcher instance (optional, will create if not provided)
        language: Language to preselect in the page filters
        topics: Topics to preselect in the page filters

    Returns:
        bool: True if the report was written, False otherwise
    """
    if fetcher is None:
        fetcher = GitHubFetcher(
            token=config.credentials.github_token,
            user_agent=config.user_agent,
        )

    logger.info("=" * 80)
    logger.info(f"DEPENDABOT PRs: {config.organization} (author: {config.author})")
    logger.info("=" * 80)

    # Step 1: Search (fatal on failure)
    try:
        data = fetcher.search_pull_requests(config.organization, config.author)
        search = parse_search_result(data)
    except (GitHubAPIError, requests.RequestException, ValueError) as e:
        logger.error(f"✗ Failed to search pull requests: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return False

    logger.info(f"✓ Search returned {len(search.items)} PRs (total_count: {search.total_count})")

    # Step 2: Repository details, one at a time
    repo_names = unique_repositories(search.items)
    metadata = fetcher.fetch_repository_metadata(repo_names)

    # Step 3: Aggregate and render
    logger.info("Generating HTML...")
    view = build_report_view(
        search,
        metadata,
        organization=config.organization,
        author=config.author,
    )

    try:
        html = render_report(view, language=language, topics=topics)
        write_report(html, config.output_path)
    except Exception as e:
        logger.error(f"✗ Failed to write report: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return False

    logger.info(
        f"✓ Generated {config.output_path} with {view.repo_count} repositories "
        f"and {view.total_count} PRs"
    )
    return True


def main():
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="Dependabot PR Dashboard - HTML report of open Dependabot PRs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report for the organization configured in .env (default: agrc)
  python main.py

  # Another organization, custom output file
  python main.py --org my-org --output my-org-prs.html

  # Open the report with filters already applied
  python main.py --language Python --topic infra --topic web
        """
    )
    parser.add_argument("--org", help="GitHub organization to search (overrides DASHBOARD_ORG)")
    parser.add_argument("--author", help="PR author to search for (default: dependabot[bot])")
    parser.add_argument("--output", help="Output HTML file (default: dependabot-prs.html)")
    parser.add_argument("--language", help="Language to preselect in the report filters")
    parser.add_argument(
        "--topic",
        action="append",
        default=[],
        help="Topic to preselect in the report filters (repeatable)"
    )
    parser.add_argument("--log-level", help="Logging level (overrides LOG_LEVEL)")

    args = parser.parse_args()

    config = load_config()

    overrides = {
        "organization": args.org,
        "author": args.author,
        "output_path": args.output,
        "log_level": args.log_level,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if overrides:
        try:
            config = Config.model_validate({**config.model_dump(), **overrides})
        except ValueError as e:
            print(f"Error: invalid arguments: {e}", file=sys.stderr)
            sys.exit(1)

    setup_logger(config.log_level)

    success = generate_dashboard(
        config,
        language=args.language,
        topics=args.topic,
    )

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
