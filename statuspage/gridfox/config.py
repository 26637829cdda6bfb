"""Configuration models for the Gridfox issue source."""

from collections.abc import Callable, Mapping
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from statuspage.status.models import Status


DEFAULT_API_URL = "https://api.gridfox.com"
DEFAULT_TIMEOUT_SECONDS = 30.0

IssueRecord = dict[str, object]
IssueClassifier = Callable[[IssueRecord], Status]


class GridfoxConfig(BaseModel):
    """Configuration for reading a status page from Gridfox tables.

    Attributes:
        api_key: Gridfox API key, sent as the ``gridfox-api-key`` header.
        environments_table_name: Table holding one record per environment.
        issues_table_name: Table holding issue records.
        issue_status_list_field_name: Issue field holding the workflow status.
        open_issue_list_items: Workflow values that count as open.
        issue_status_type: Maps an open issue record to a Status.
        proxy_api_url: Overrides the production Gridfox API URL.
        timeout_seconds: Per-request timeout.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_key: Annotated[str, Field(min_length=1, repr=False)]
    environments_table_name: Annotated[str, Field(min_length=1)]
    issues_table_name: Annotated[str, Field(min_length=1)]
    issue_status_list_field_name: Annotated[str, Field(min_length=1)]
    open_issue_list_items: Annotated[list[str], Field(min_length=1)]
    issue_status_type: IssueClassifier
    proxy_api_url: str = DEFAULT_API_URL
    timeout_seconds: Annotated[float, Field(gt=0, le=300.0)] = DEFAULT_TIMEOUT_SECONDS

    @field_validator("proxy_api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Ensure the API URL is an absolute HTTP(S) URL."""
        if not v.startswith(("http://", "https://")):
            msg = f"API URL must start with http:// or https://: {v}"
            raise ValueError(msg)
        return v.rstrip("/")


def field_value_classifier(
    field_name: str,
    mapping: Mapping[str, Status],
    default: Status = Status.NOISSUE,
) -> IssueClassifier:
    """Build an issue classifier that looks a field value up in a table.

    Args:
        field_name: Issue field to read (e.g. ``Severity``).
        mapping: Field value to Status.
        default: Status for missing or unmapped values.

    Returns:
        Classifier usable as ``GridfoxConfig.issue_status_type``.
    """
    table = dict(mapping)

    def classify(issue: IssueRecord) -> Status:
        value = issue.get(field_name)
        if value is None:
            return default
        return table.get(str(value), default)

    return classify
