"""Schemas for status page YAML files."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from statuspage.config.constants import VALID_URL_SCHEMES
from statuspage.gridfox.config import DEFAULT_API_URL, GridfoxConfig, field_value_classifier
from statuspage.renderer.models import PageConfig
from statuspage.status import Environment, Status, with_derived_status


class GridfoxSourceConfig(BaseModel):
    """Gridfox section of a page file.

    Issue classification is described as data: ``severity_field`` is read
    from each open issue and looked up in ``severity_map``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    environments_table: Annotated[str, Field(min_length=1)]
    issues_table: Annotated[str, Field(min_length=1)]
    issue_status_field: Annotated[str, Field(min_length=1)]
    open_issue_statuses: Annotated[list[str], Field(min_length=1)]
    severity_field: Annotated[str, Field(min_length=1)]
    severity_map: dict[str, Status] = Field(default_factory=dict)
    default_status: Status = Status.NOISSUE
    api_url: str | None = None
    timeout_seconds: Annotated[float, Field(gt=0, le=300.0)] = 30.0

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str | None) -> str | None:
        """Ensure the API URL uses http or https."""
        if v is not None and not v.startswith(VALID_URL_SCHEMES):
            msg = f"URL must start with http:// or https://: {v}"
            raise ValueError(msg)
        return v

    def to_gridfox_config(
        self, api_key: str, api_url_override: str | None = None
    ) -> GridfoxConfig:
        """Build the adapter configuration.

        Args:
            api_key: Gridfox API key.
            api_url_override: API URL taken from the environment, if any.

        Returns:
            GridfoxConfig for config_from_gridfox.
        """
        return GridfoxConfig(
            api_key=api_key,
            environments_table_name=self.environments_table,
            issues_table_name=self.issues_table,
            issue_status_list_field_name=self.issue_status_field,
            open_issue_list_items=list(self.open_issue_statuses),
            issue_status_type=field_value_classifier(
                self.severity_field, self.severity_map, self.default_status
            ),
            proxy_api_url=api_url_override or self.api_url or DEFAULT_API_URL,
            timeout_seconds=self.timeout_seconds,
        )


class PageFileConfig(BaseModel):
    """Top-level schema of a page YAML file.

    ``current_status`` may be omitted, in which case it is derived from the
    services. When a ``gridfox`` section is present the environments come
    from Gridfox and must not be listed in the file.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = ""
    logo: str = ""
    current_status: Status | None = None
    environments: list[Environment] = Field(default_factory=list)
    custom_css: str | None = None
    gridfox: GridfoxSourceConfig | None = None

    @model_validator(mode="after")
    def validate_single_source(self) -> "PageFileConfig":
        """Reject static page data next to a Gridfox source."""
        if self.gridfox is None:
            return self
        if self.environments:
            msg = "environments must not be listed when a gridfox source is configured"
            raise ValueError(msg)
        if self.current_status is not None:
            msg = "current_status must be omitted when a gridfox source is configured"
            raise ValueError(msg)
        return self

    def to_page_config(self) -> PageConfig:
        """Build the PageConfig described by this file.

        Returns:
            PageConfig with current_status derived when it was omitted.
        """
        page = PageConfig(
            title=self.title,
            logo=self.logo,
            current_status=self.current_status or Status.NOISSUE,
            environments=list(self.environments),
            custom_css=self.custom_css or "",
        )
        if self.current_status is None:
            return with_derived_status(page)
        return page
