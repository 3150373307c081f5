"""Data models for the Dependabot PR dashboard."""

from models.config_models import Config, CredentialsConfig
from models.data_models import (
    Facets,
    PullRequestRecord,
    ReportView,
    RepositoryGroup,
    RepositoryMetadata,
    SearchResult,
)

__all__ = [
    "Config",
    "CredentialsConfig",
    "Facets",
    "PullRequestRecord",
    "ReportView",
    "RepositoryGroup",
    "RepositoryMetadata",
    "SearchResult",
]
