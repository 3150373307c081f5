"""Data models for Dependabot PR search results and the report view."""

from datetime import datetime
from typing import Optional
from urllib.parse import urlparse
from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_LANGUAGE = "Unknown"


def split_repository_url(repository_url: str) -> tuple[str, str]:
    """
    Split a repository API URL into its identifier and display name.

    Examples:
        "https://api.github.com/repos/agrc/api" -> ("agrc/api", "api")

    Raises:
        ValueError: If the URL has fewer than two path segments
    """
    segments = [s for s in urlparse(repository_url).path.split("/") if s]
    if len(segments) < 2:
        raise ValueError(f"Repository URL does not contain owner/name: {repository_url!r}")
    return "/".join(segments[-2:]), segments[-1]


class PullRequestRecord(BaseModel):
    """Open PR as returned by the issue search endpoint.

    Only the fields the report needs are kept; everything else in the
    search item is ignored.
    """
    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    html_url: str
    repository_url: str  # e.g., "https://api.github.com/repos/agrc/api"
    created_at: datetime
    updated_at: datetime

    @field_validator("repository_url")
    @classmethod
    def validate_repository_url(cls, v: str) -> str:
        """Repository URL must end in owner/name."""
        split_repository_url(v)
        return v

    @property
    def repo_full_name(self) -> str:
        """Repository identifier, e.g. "agrc/api"."""
        return split_repository_url(self.repository_url)[0]

    @property
    def repo_name(self) -> str:
        return split_repository_url(self.repository_url)[1]


class SearchResult(BaseModel):
    """Single page of search results."""

    total_count: int
    items: list[PullRequestRecord] = Field(default_factory=list)
    skipped: int = 0  # Items dropped because they failed validation

    @property
    def truncated(self) -> bool:
        """True when the API reports more PRs than this page contains."""
        return self.total_count > len(self.items) + self.skipped


class RepositoryMetadata(BaseModel):
    """Repository details used for filtering.

    The API returns null for repositories without a detected language,
    so null values fall back to the same defaults as a failed fetch.
    """
    language: str = UNKNOWN_LANGUAGE
    topics: list[str] = Field(default_factory=list)

    @field_validator("language", mode="before")
    @classmethod
    def default_language(cls, v: Optional[str]) -> str:
        return v or UNKNOWN_LANGUAGE

    @field_validator("topics", mode="before")
    @classmethod
    def default_topics(cls, v: Optional[list[str]]) -> list[str]:
        return v or []


class RepositoryGroup(BaseModel):
    """All open PRs for one repository plus its metadata."""

    full_name: str
    name: str
    url: str
    language: str = UNKNOWN_LANGUAGE
    topics: list[str] = Field(default_factory=list)
    prs: list[PullRequestRecord] = Field(default_factory=list)

    @property
    def pr_count(self) -> int:
        return len(self.prs)


class Facets(BaseModel):
    """Sorted, de-duplicated filter values."""
    languages: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)


class ReportView(BaseModel):
    """Everything the renderer needs, already grouped and sorted."""

    groups: list[RepositoryGroup] = Field(default_factory=list)
    facets: Facets = Field(default_factory=Facets)
    total_count: int = 0  # As reported by the search API
    shown_count: int = 0  # PRs actually grouped
    skipped_count: int = 0
    organization: str = ""
    author: str = ""
    generated_at: datetime

    @property
    def repo_count(self) -> int:
        return len(self.groups)

    @property
    def truncated(self) -> bool:
        return self.total_count > self.shown_count + self.skipped_count
