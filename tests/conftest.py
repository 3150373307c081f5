"""Shared pytest fixtures and configuration."""

from datetime import datetime, timezone
import pytest

from models.data_models import PullRequestRecord, ReportView, RepositoryGroup, RepositoryMetadata
from report.aggregator import compute_facets


def make_search_item(number, repo, title=None, updated_at="2025-01-15T10:30:00Z"):
    """Build a raw search item as returned by /search/issues."""
    return {
        "number": number,
        "title": title or f"Bump dependency #{number}",
        "html_url": f"https://github.com/{repo}/pull/{number}",
        "repository_url": f"https://api.github.com/repos/{repo}",
        "created_at": "2025-01-10T09:00:00Z",
        "updated_at": updated_at,
        "state": "open",
        "user": {"login": "dependabot[bot]"},
    }


@pytest.fixture
def test_env(monkeypatch):
    """
    Set valid environment variables so config can be loaded during tests.
    """
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test_token_1234567890")
    monkeypatch.setenv("DASHBOARD_ORG", "test-org")
    monkeypatch.setenv("DASHBOARD_OUTPUT", "test-report.html")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    return {
        "github_token": "ghp_test_token_1234567890",
        "organization": "test-org",
        "output_path": "test-report.html",
        "log_level": "DEBUG",
    }


@pytest.fixture
def invalid_env(monkeypatch):
    """
    Set up invalid environment variables for testing validation.
    """
    monkeypatch.setenv("DASHBOARD_ORG", "")
    monkeypatch.setenv("LOG_LEVEL", "VERBOSE")


@pytest.fixture
def search_response():
    """Search page: 3 PRs on org/repo1, 1 on org/repo2, 1 on org/repo3."""
    return {
        "total_count": 5,
        "incomplete_results": False,
        "items": [
            make_search_item(1, "org/repo2"),
            make_search_item(2, "org/repo1"),
            make_search_item(3, "org/repo1"),
            make_search_item(4, "org/repo3"),
            make_search_item(5, "org/repo1"),
        ],
    }


@pytest.fixture
def filter_view():
    """
    Three repositories for filter tests:
    A (Go, infra), B (Go, no topics), C (Python, infra + web).
    """
    def group(name, language, topics, pr_numbers):
        prs = [
            PullRequestRecord.model_validate(make_search_item(n, f"org/{name}"))
            for n in pr_numbers
        ]
        return RepositoryGroup(
            full_name=f"org/{name}",
            name=name,
            url=f"https://github.com/org/{name}",
            language=language,
            topics=topics,
            prs=prs,
        )

    groups = [
        group("A", "Go", ["infra"], [1, 2, 3]),
        group("B", "Go", [], [4, 5]),
        group("C", "Python", ["infra", "web"], [6]),
    ]
    return ReportView(
        groups=groups,
        facets=compute_facets(groups),
        total_count=6,
        shown_count=6,
        organization="org",
        author="dependabot[bot]",
        generated_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def go_metadata():
    return {"org/repo1": RepositoryMetadata(language="Go", topics=["ci"])}


@pytest.fixture
def search_item():
    """Factory for raw search items."""
    return make_search_item
