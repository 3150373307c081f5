"""Render the report view into a self-contained HTML page.

The page embeds the full dataset and a small script for filtering and
expanding repositories, so it works offline once generated (only the
Tailwind stylesheet is loaded from a CDN).
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional, Union

from jinja2 import Environment, FileSystemLoader

from models.data_models import ReportView
from report.filters import matches_filters, visible_summary

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.html.j2"
MAX_TOPIC_BADGES = 2


def format_date(value: Union[datetime, str, None]) -> str:
    """Format a timestamp as e.g. "Jan 15, 2025"."""
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%b %d, %Y")


def create_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["format_date"] = format_date
    return env


def _client_data(view: ReportView) -> list[dict]:
    """Dataset embedded in the page for the filter script."""
    return [
        {
            "name": group.name,
            "full_name": group.full_name,
            "url": group.url,
            "language": group.language,
            "topics": group.topics,
            "pr_count": group.pr_count,
            "prs": [
                {
                    "number": pr.number,
                    "title": pr.title,
                    "url": pr.html_url,
                    "created": pr.created_at.isoformat(),
                    "updated": pr.updated_at.isoformat(),
                }
                for pr in group.prs
            ],
        }
        for group in view.groups
    ]


def _known_selections(
    view: ReportView,
    language: Optional[str],
    topics: Optional[Iterable[str]],
) -> tuple[Optional[str], list[str]]:
    """Drop preselected values the page has no control for."""
    if language and language not in view.facets.languages:
        logger.warning(f"Ignoring language filter {language!r}: no repository uses it")
        language = None

    topics = list(topics or ())
    unknown = [t for t in topics if t not in view.facets.topics]
    if unknown:
        logger.warning(f"Ignoring topic filters {unknown}: no repository has them")
    return language, [t for t in topics if t in view.facets.topics]


def render_report(
    view: ReportView,
    language: Optional[str] = None,
    topics: Optional[Iterable[str]] = None,
) -> str:
    """
    Render the report page.

    Args:
        view: Aggregated report view
        language: Language to preselect in the filter (optional)
        topics: Topics to preselect in the filter (optional)

    Returns:
        Complete HTML document
    """
    language, topics = _known_selections(view, language, topics)
    repo_count, pr_count = visible_summary(view, language, topics)

    env = create_environment()
    template = env.get_template(TEMPLATE_NAME)
    html = template.render(
        view=view,
        repos=[(group, matches_filters(group, language, topics)) for group in view.groups],
        repos_data=_client_data(view),
        selected_language=language or "",
        selected_topics=topics,
        visible_repo_count=repo_count,
        visible_pr_count=pr_count,
        max_topic_badges=MAX_TOPIC_BADGES,
    )

    logger.debug(f"Rendered report: {len(view.groups)} repositories, {len(html)} characters")
    return html


def write_report(html: str, output_path: Union[str, Path]) -> Path:
    """Write the rendered page, returning the resolved path."""
    path = Path(output_path)
    path.write_text(html, encoding="utf-8")
    logger.info(f"Wrote report to {path.resolve()}")
    return path
