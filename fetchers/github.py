"""GitHub API client for collecting open Dependabot pull requests.

Two kinds of calls are made:
- Search: one bounded page of open PRs for an author across an organization
- Repository details: language and topics, fetched one repository at a time
"""

import logging
from typing import Any, Iterable, Optional

import requests

from models.data_models import RepositoryMetadata

logger = logging.getLogger(__name__)

SEARCH_PAGE_SIZE = 100


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with anything other than 200."""

    def __init__(self, status_code: int, message: str = ""):
        self.status_code = status_code
        super().__init__(f"GitHub API error: {status_code}" + (f" - {message}" if message else ""))


class GitHubFetcher:
    """Fetch PR search results and repository details from GitHub API.

    Calls are made one at a time and never retried. A hung request blocks
    the caller; there is no timeout.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        user_agent: str = "dependabot-pr-dashboard",
        base_url: str = "https://api.github.com",
    ):
        """Initialize GitHub API client.

        Args:
            token: Optional personal access token. Without one the API is
                used anonymously (lower rate limit).
            user_agent: Identifying User-Agent header value (required by GitHub)
            base_url: API host
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": user_agent,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def fetch_json(self, path: str, params: Optional[dict] = None) -> Any:
        """GET an API path and return the parsed JSON body.

        Args:
            path: API path starting with "/", e.g. "/repos/agrc/api"
            params: Optional query parameters

        Returns:
            Parsed JSON value

        Raises:
            GitHubAPIError: On any non-200 status
            ValueError: If a 200 response body is not valid JSON
            requests.RequestException: On transport errors (DNS, connection)
        """
        url = f"{self.base_url}{path}"
        response = requests.get(url, headers=self.headers, params=params)

        remaining = response.headers.get("X-RateLimit-Remaining")
        limit = response.headers.get("X-RateLimit-Limit")
        if remaining and limit:
            logger.debug(f"Rate limit: {remaining}/{limit} remaining")

        if response.status_code != 200:
            logger.debug(f"GET {path} failed: {response.status_code} - {response.text[:200]}")
            raise GitHubAPIError(response.status_code)

        return response.json()

    def search_pull_requests(
        self,
        org: str,
        author: str,
        per_page: int = SEARCH_PAGE_SIZE,
    ) -> dict[str, Any]:
        """Search open PRs by an author across an organization.

        Only the first page is fetched. Archived repositories are excluded
        by the query itself.

        Args:
            org: Organization login (e.g., "agrc")
            author: Author login (e.g., "dependabot[bot]")
            per_page: Page size (GitHub caps this at 100)

        Returns:
            Raw search response: {"total_count": int, "items": [...]}
        """
        query = f"org:{org} author:{author} is:pull-request is:open archived:false"
        logger.info(f"Searching open PRs: {query}")

        # Shape is not checked here; parse_search_result validates it
        return self.fetch_json("/search/issues", params={"q": query, "per_page": per_page})

    def fetch_repository(self, owner: str, repo: str) -> dict[str, Any]:
        """Fetch repository details.

        Args:
            owner: Repository owner (e.g., "agrc")
            repo: Repository name (e.g., "api")

        Returns:
            Raw repository object; "language" and "topics" are the fields used.
        """
        return self.fetch_json(f"/repos/{owner}/{repo}")

    def fetch_repository_metadata(
        self,
        full_names: Iterable[str],
    ) -> dict[str, RepositoryMetadata]:
        """Fetch metadata for each repository, one request after another.

        A failure for one repository is logged and replaced with default
        metadata; the remaining repositories are still fetched.

        Args:
            full_names: Distinct "owner/name" identifiers, in the order to fetch

        Returns:
            Mapping of "owner/name" to RepositoryMetadata, one entry per input
        """
        full_names = list(full_names)
        metadata: dict[str, RepositoryMetadata] = {}
        failed = 0

        logger.info(f"Fetching details for {len(full_names)} repositories...")

        for i, full_name in enumerate(full_names, 1):
            owner, repo = full_name.split("/", 1)
            try:
                details = self.fetch_repository(owner, repo)
                metadata[full_name] = RepositoryMetadata.model_validate(details)
                logger.info(f"  [{i}/{len(full_names)}] {full_name}: {metadata[full_name].language}")
            except (GitHubAPIError, requests.RequestException, ValueError) as e:
                # ValueError covers malformed JSON and pydantic validation errors
                logger.warning(f"  [{i}/{len(full_names)}] Could not fetch details for {full_name}: {e}")
                metadata[full_name] = RepositoryMetadata()
                failed += 1

        logger.info(f"Fetched details for {len(full_names) - failed} repositories, {failed} failed")
        return metadata
