"""Gridfox issue source for status pages.

Fetches environment and open-issue records from the Gridfox data API and
maps them into a PageConfig using the same severity roll-up as the renderer.
"""

from statuspage.gridfox.adapter import (
    build_open_issue_filter,
    config_from_gridfox,
    map_environment,
)
from statuspage.gridfox.client import GridfoxClient, GridfoxResponseError
from statuspage.gridfox.config import (
    DEFAULT_API_URL,
    GridfoxConfig,
    IssueClassifier,
    field_value_classifier,
)
from statuspage.gridfox.redact import redact_headers


__all__ = [
    "DEFAULT_API_URL",
    "GridfoxClient",
    "GridfoxConfig",
    "GridfoxResponseError",
    "IssueClassifier",
    "build_open_issue_filter",
    "config_from_gridfox",
    "field_value_classifier",
    "map_environment",
    "redact_headers",
]
