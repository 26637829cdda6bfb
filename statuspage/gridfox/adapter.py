"""Build a PageConfig from Gridfox environment and issue tables."""

from collections.abc import Sequence

import structlog

from statuspage.gridfox.client import GridfoxClient
from statuspage.gridfox.config import GridfoxConfig, IssueClassifier, IssueRecord
from statuspage.renderer.models import PageConfig
from statuspage.status import Environment, Service, aggregate, worst_status


logger = structlog.get_logger()

# Environment record fields
ENVIRONMENT_NAME_FIELD = "name"
ENVIRONMENT_SERVICES_FIELD = "services"
SERVICE_REFERENCE_FIELD = "referenceFieldValue"

# Issue record fields used for the join
ISSUE_SERVICE_FIELD = "service"
ISSUE_ENVIRONMENT_FIELD = "environment"


def build_open_issue_filter(field_name: str, open_items: Sequence[str]) -> str:
    """Build the ``$filter`` expression selecting open issues.

    Args:
        field_name: Issue status field.
        open_items: Status values that count as open.

    Returns:
        Filter such as ``Status in ('Open','In Progress')``.
    """
    quoted = ",".join(f"'{item}'" for item in open_items)
    return f"{field_name} in ({quoted})"


def map_environment(
    record: IssueRecord,
    issues: Sequence[IssueRecord],
    classify: IssueClassifier,
) -> Environment:
    """Map one environment record and the open issues to an Environment.

    An issue belongs to a service when its service field equals the
    service's reference value and its environment field equals the
    environment name. A service takes the worst status of its issues.

    Args:
        record: Environment record.
        issues: Open issue records.
        classify: Maps an issue record to a Status.

    Returns:
        Environment with derived service statuses.
    """
    name = str(record[ENVIRONMENT_NAME_FIELD])
    service_refs = record.get(ENVIRONMENT_SERVICES_FIELD) or []

    services: list[Service] = []
    for ref in service_refs:  # type: ignore[attr-defined]
        service_name = ref[SERVICE_REFERENCE_FIELD]
        scoped = [
            issue
            for issue in issues
            if issue.get(ISSUE_SERVICE_FIELD) == service_name
            and issue.get(ISSUE_ENVIRONMENT_FIELD) == name
        ]
        services.append(
            Service(
                name=str(service_name),
                status=worst_status(classify(issue) for issue in scoped),
            )
        )

    return Environment(name=name, services=services)


def _fetch_tables(
    client: GridfoxClient, config: GridfoxConfig
) -> tuple[list[IssueRecord], list[IssueRecord]]:
    environment_records = client.fetch_records(
        config.environments_table_name,
        {"paged": "false"},
    )
    issue_records = client.fetch_records(
        config.issues_table_name,
        {
            "paged": "false",
            "$filter": build_open_issue_filter(
                config.issue_status_list_field_name,
                config.open_issue_list_items,
            ),
        },
    )
    return environment_records, issue_records


def config_from_gridfox(
    config: GridfoxConfig,
    client: GridfoxClient | None = None,
) -> PageConfig:
    """Fetch Gridfox data and transform it into a PageConfig.

    Environments are fetched first, then open issues. Title and logo are
    left empty for the caller to fill in.

    Args:
        config: Gridfox project details.
        client: Optional client. One is created and closed when omitted.

    Returns:
        PageConfig with derived service, environment and page statuses.
    """
    log = logger.bind(
        component="gridfox",
        environments_table=config.environments_table_name,
        issues_table=config.issues_table_name,
    )

    if client is None:
        with GridfoxClient(
            api_key=config.api_key,
            api_url=config.proxy_api_url,
            timeout_seconds=config.timeout_seconds,
        ) as owned:
            environment_records, issue_records = _fetch_tables(owned, config)
    else:
        environment_records, issue_records = _fetch_tables(client, config)

    environments = [
        map_environment(record, issue_records, config.issue_status_type)
        for record in environment_records
    ]
    result = aggregate(environments)

    log.info(
        "gridfox_config_built",
        environments=len(environments),
        open_issues=len(issue_records),
        current_status=result.status.value,
    )

    return PageConfig(
        title="",
        logo="",
        current_status=result.status,
        environments=environments,
    )
