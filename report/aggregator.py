"""Group search results by repository and derive filter facets.

Everything here is a pure transformation of already-fetched data: no
network calls, no mutation of the inputs.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from models.data_models import (
    Facets,
    PullRequestRecord,
    ReportView,
    RepositoryGroup,
    RepositoryMetadata,
    SearchResult,
)

logger = logging.getLogger(__name__)


def parse_search_result(data: Any) -> SearchResult:
    """
    Validate a raw search response into a SearchResult.

    Items are validated one by one; an item that fails validation (for
    example a missing or malformed repository_url) is skipped with a warning
    instead of failing the whole run.

    Raises:
        ValueError: If the payload is not a search response at all
    """
    if not isinstance(data, dict) or "total_count" not in data or not isinstance(data.get("items"), list):
        raise ValueError("Unexpected search response: expected total_count and items")

    records = []
    skipped = 0
    for index, item in enumerate(data["items"]):
        try:
            records.append(PullRequestRecord.model_validate(item))
        except ValidationError as e:
            number = item.get("number", "?") if isinstance(item, dict) else "?"
            logger.warning(f"Skipping malformed search item {index} (PR #{number}): {e.error_count()} errors")
            skipped += 1

    return SearchResult(total_count=data["total_count"], items=records, skipped=skipped)


def unique_repositories(records: Iterable[PullRequestRecord]) -> list[str]:
    """Distinct repository identifiers in first-seen order."""
    return list(dict.fromkeys(pr.repo_full_name for pr in records))


def group_pull_requests(
    records: Iterable[PullRequestRecord],
    metadata: dict[str, RepositoryMetadata],
) -> list[RepositoryGroup]:
    """
    Group PRs by repository, most PRs first.

    Metadata is attached when a group is created; repositories missing from
    ``metadata`` get the "Unknown" language and no topics. PRs keep their
    input order inside each group, and groups with equal PR counts keep the
    order in which their first PR appeared.
    """
    groups: dict[str, RepositoryGroup] = {}

    for pr in records:
        full_name = pr.repo_full_name
        group = groups.get(full_name)
        if group is None:
            details = metadata.get(full_name) or RepositoryMetadata()
            group = RepositoryGroup(
                full_name=full_name,
                name=pr.repo_name,
                url=f"https://github.com/{full_name}",
                language=details.language,
                topics=list(details.topics),
            )
            groups[full_name] = group
        group.prs.append(pr)

    # sorted() is stable, so ties stay in first-seen order
    return sorted(groups.values(), key=lambda g: g.pr_count, reverse=True)


def compute_facets(groups: Iterable[RepositoryGroup]) -> Facets:
    groups = list(groups)
    return Facets(
        languages=sorted({g.language for g in groups}),
        topics=sorted({topic for g in groups for topic in g.topics}),
    )


def build_report_view(
    search: SearchResult,
    metadata: dict[str, RepositoryMetadata],
    organization: str = "",
    author: str = "",
    generated_at: Optional[datetime] = None,
) -> ReportView:
    """
    Build the complete view model for the renderer.

    Args:
        search: Parsed search result
        metadata: Repository metadata keyed by "owner/name" (may be partial)
        organization: Organization searched (shown in the page header)
        author: PR author searched
        generated_at: Timestamp shown in the footer (default: now, UTC)

    Returns:
        ReportView with sorted groups and facets
    """
    groups = group_pull_requests(search.items, metadata)
    view = ReportView(
        groups=groups,
        facets=compute_facets(groups),
        total_count=search.total_count,
        shown_count=len(search.items),
        skipped_count=search.skipped,
        organization=organization,
        author=author,
        generated_at=generated_at or datetime.now(timezone.utc),
    )

    if view.truncated:
        logger.warning(
            f"Search reported {view.total_count} PRs but only {view.shown_count} were returned; "
            f"the report covers the first page only"
        )

    return view
