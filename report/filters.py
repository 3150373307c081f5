"""Language/topic visibility rule shared by the rendered page and its script.

The inline script in ``templates/report.html.j2`` implements the same rule;
keep the two in step.
"""

from typing import Iterable, Optional

from models.data_models import ReportView, RepositoryGroup


def matches_filters(
    group: RepositoryGroup,
    language: Optional[str] = None,
    topics: Optional[Iterable[str]] = None,
) -> bool:
    """
    Whether a repository is visible under the given filters.

    A repository is visible when no language is selected or its language
    equals the selection, and when no topics are selected or it has at
    least one of them.
    """
    selected_topics = set(topics or ())
    language_match = not language or group.language == language
    topic_match = not selected_topics or bool(selected_topics.intersection(group.topics))
    return language_match and topic_match


def visible_summary(
    view: ReportView,
    language: Optional[str] = None,
    topics: Optional[Iterable[str]] = None,
) -> tuple[int, int]:
    """
    Summary counts shown in the page header.

    Returns:
        (repository count, PR count). With no filters this is the unfiltered
        summary, using the total reported by the search API; otherwise the
        counts of the visible repositories.
    """
    topics = list(topics or ())
    if not language and not topics:
        return view.repo_count, view.total_count

    visible = [g for g in view.groups if matches_filters(g, language, topics)]
    return len(visible), sum(g.pr_count for g in visible)
