"""Unit tests for the Gridfox adapter."""

from typing import Any

import httpx
import pytest

from statuspage.gridfox import (
    GridfoxClient,
    GridfoxConfig,
    GridfoxResponseError,
    build_open_issue_filter,
    config_from_gridfox,
    field_value_classifier,
    map_environment,
)
from statuspage.status import Status


API_URL = "https://gridfox.test"

ENVIRONMENT_RECORDS = [
    {
        "name": "Production",
        "services": [
            {"referenceFieldValue": "API"},
            {"referenceFieldValue": "Web App"},
        ],
    },
    {"name": "Staging", "services": [{"referenceFieldValue": "API"}]},
    {"name": "Development", "services": []},
]

ISSUE_RECORDS = [
    {
        "service": "API",
        "environment": "Production",
        "Status": "Open",
        "Severity": "Critical",
    },
    {
        "service": "Web App",
        "environment": "Staging",
        "Status": "In Progress",
        "Severity": "Minor",
    },
]

CLASSIFIER = field_value_classifier(
    "Severity", {"Critical": Status.OUTAGE, "Minor": Status.INCIDENT}
)


def _gridfox_config() -> GridfoxConfig:
    return GridfoxConfig(
        api_key="secret-key",
        environments_table_name="Environments",
        issues_table_name="Issues",
        issue_status_list_field_name="Status",
        open_issue_list_items=["Open", "In Progress"],
        issue_status_type=CLASSIFIER,
        proxy_api_url=API_URL,
    )


class RecordingHandler:
    """MockTransport handler serving fixed tables and recording requests."""

    def __init__(self, tables: dict[str, object], status_code: int = 200) -> None:
        self.tables = tables
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        table = request.url.path.rsplit("/", 1)[-1]
        if table not in self.tables:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(self.status_code, json=self.tables[table])


class TrackingClient(GridfoxClient):
    """GridfoxClient that records its arguments and whether it was closed."""

    def __init__(self, **kwargs: Any) -> None:
        self.init_kwargs = kwargs
        self.closed = False
        super().__init__(**kwargs)

    def close(self) -> None:
        self.closed = True
        super().close()


def _client(handler: RecordingHandler) -> GridfoxClient:
    return GridfoxClient(
        api_key="secret-key",
        api_url=API_URL,
        transport=httpx.MockTransport(handler),
    )


class TestBuildOpenIssueFilter:
    """Tests for build_open_issue_filter."""

    @pytest.mark.unit
    def test_quotes_each_value(self) -> None:
        """Values are single-quoted and comma separated."""
        assert (
            build_open_issue_filter("Status", ["Open", "In Progress"])
            == "Status in ('Open','In Progress')"
        )

    @pytest.mark.unit
    def test_single_value(self) -> None:
        """A single value still uses the in-list form."""
        assert build_open_issue_filter("State", ["Open"]) == "State in ('Open')"


class TestFieldValueClassifier:
    """Tests for field_value_classifier."""

    @pytest.mark.unit
    def test_mapped_value(self) -> None:
        """Mapped field values return their status."""
        assert CLASSIFIER({"Severity": "Critical"}) is Status.OUTAGE
        assert CLASSIFIER({"Severity": "Minor"}) is Status.INCIDENT

    @pytest.mark.unit
    def test_unmapped_and_missing_values(self) -> None:
        """Unknown or missing values fall back to the default."""
        assert CLASSIFIER({"Severity": "Cosmetic"}) is Status.NOISSUE
        assert CLASSIFIER({}) is Status.NOISSUE

    @pytest.mark.unit
    def test_custom_default(self) -> None:
        """The default status is configurable."""
        classify = field_value_classifier("Level", {}, default=Status.INCIDENT)

        assert classify({"Level": "anything"}) is Status.INCIDENT


class TestMapEnvironment:
    """Tests for map_environment."""

    @pytest.mark.unit
    def test_joins_on_service_and_environment(self) -> None:
        """Issues only count for the matching service in the matching environment."""
        production = map_environment(ENVIRONMENT_RECORDS[0], ISSUE_RECORDS, CLASSIFIER)
        staging = map_environment(ENVIRONMENT_RECORDS[1], ISSUE_RECORDS, CLASSIFIER)

        assert [(s.name, s.status) for s in production.services] == [
            ("API", Status.OUTAGE),
            ("Web App", Status.NOISSUE),
        ]
        assert [(s.name, s.status) for s in staging.services] == [
            ("API", Status.NOISSUE),
        ]

    @pytest.mark.unit
    def test_worst_issue_wins(self) -> None:
        """A service takes the most severe status among its issues."""
        issues = [
            {"service": "API", "environment": "Production", "Severity": "Minor"},
            {"service": "API", "environment": "Production", "Severity": "Critical"},
            {"service": "API", "environment": "Production", "Severity": "Minor"},
        ]

        env = map_environment(ENVIRONMENT_RECORDS[0], issues, CLASSIFIER)

        assert env.services[0].status is Status.OUTAGE

    @pytest.mark.unit
    def test_missing_services_field(self) -> None:
        """An environment record without services maps to an empty environment."""
        env = map_environment({"name": "Empty", "services": None}, [], CLASSIFIER)

        assert env.name == "Empty"
        assert env.services == []


class TestConfigFromGridfox:
    """Tests for config_from_gridfox."""

    @pytest.mark.unit
    def test_outage_scenario(self) -> None:
        """One outage issue marks its service, environment and page as outage."""
        handler = RecordingHandler(
            {
                "Environments": {"records": ENVIRONMENT_RECORDS},
                "Issues": {"records": ISSUE_RECORDS},
            }
        )

        page = config_from_gridfox(_gridfox_config(), client=_client(handler))

        assert page.current_status is Status.OUTAGE
        assert [env.name for env in page.environments] == [
            "Production",
            "Staging",
            "Development",
        ]
        production = page.environments[0]
        assert production.services[0].name == "API"
        assert production.services[0].status is Status.OUTAGE
        assert page.title == ""
        assert page.logo == ""

    @pytest.mark.unit
    def test_requests(self) -> None:
        """Environments are fetched first, then open issues with a filter."""
        handler = RecordingHandler(
            {
                "Environments": {"records": ENVIRONMENT_RECORDS},
                "Issues": {"records": ISSUE_RECORDS},
            }
        )

        config_from_gridfox(_gridfox_config(), client=_client(handler))

        env_request, issue_request = handler.requests
        assert env_request.method == "GET"
        assert env_request.url.path == "/data/Environments"
        assert env_request.url.params["paged"] == "false"
        assert "$filter" not in env_request.url.params
        assert issue_request.url.path == "/data/Issues"
        assert issue_request.url.params["paged"] == "false"
        assert (
            issue_request.url.params["$filter"] == "Status in ('Open','In Progress')"
        )
        for request in handler.requests:
            assert request.headers["gridfox-api-key"] == "secret-key"
            assert request.headers["content-type"] == "application/json"

    @pytest.mark.unit
    def test_query_is_percent_encoded(self) -> None:
        """Query values use %20 for spaces and keep $filter literal."""
        handler = RecordingHandler(
            {
                "Environments": {"records": []},
                "Issues": {"records": []},
            }
        )

        config_from_gridfox(_gridfox_config(), client=_client(handler))

        env_request, issue_request = handler.requests
        assert env_request.url.query == b"paged=false"
        assert issue_request.url.query == (
            b"paged=false&$filter=Status%20in%20(%27Open%27,%27In%20Progress%27)"
        )

    @pytest.mark.unit
    def test_owned_client_is_closed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A client created by the adapter is built from the config and closed."""
        handler = RecordingHandler(
            {
                "Environments": {"records": ENVIRONMENT_RECORDS},
                "Issues": {"records": ISSUE_RECORDS},
            }
        )
        created: list[TrackingClient] = []

        def make_client(**kwargs: Any) -> TrackingClient:
            transport = httpx.MockTransport(handler)
            client = TrackingClient(transport=transport, **kwargs)
            created.append(client)
            return client

        monkeypatch.setattr("statuspage.gridfox.adapter.GridfoxClient", make_client)

        page = config_from_gridfox(_gridfox_config())

        assert page.current_status is Status.OUTAGE
        assert len(created) == 1
        assert created[0].init_kwargs["api_url"] == API_URL
        assert created[0].init_kwargs["api_key"] == "secret-key"
        assert created[0].closed

    @pytest.mark.unit
    def test_owned_client_closed_on_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """The adapter closes its own client when a request fails."""
        handler = RecordingHandler({"Environments": {"records": []}}, status_code=503)
        created: list[TrackingClient] = []

        def make_client(**kwargs: Any) -> TrackingClient:
            transport = httpx.MockTransport(handler)
            client = TrackingClient(transport=transport, **kwargs)
            created.append(client)
            return client

        monkeypatch.setattr("statuspage.gridfox.adapter.GridfoxClient", make_client)

        with pytest.raises(httpx.HTTPStatusError):
            config_from_gridfox(_gridfox_config())

        assert created[0].closed

    @pytest.mark.unit
    def test_passed_client_left_open(self) -> None:
        """A client supplied by the caller is not closed."""
        handler = RecordingHandler(
            {
                "Environments": {"records": []},
                "Issues": {"records": []},
            }
        )
        client = TrackingClient(
            api_key="secret-key", api_url=API_URL, transport=httpx.MockTransport(handler)
        )

        config_from_gridfox(_gridfox_config(), client=client)

        assert not client.closed

    @pytest.mark.unit
    def test_no_issues(self) -> None:
        """Without open issues every status is noissue."""
        handler = RecordingHandler(
            {
                "Environments": {"records": ENVIRONMENT_RECORDS},
                "Issues": {"records": []},
            }
        )

        page = config_from_gridfox(_gridfox_config(), client=_client(handler))

        assert page.current_status is Status.NOISSUE
        assert all(
            service.status is Status.NOISSUE
            for env in page.environments
            for service in env.services
        )

    @pytest.mark.unit
    def test_http_error_propagates(self) -> None:
        """Non-2xx responses are raised to the caller."""
        handler = RecordingHandler({"Environments": {"records": []}}, status_code=500)

        with pytest.raises(httpx.HTTPStatusError):
            config_from_gridfox(_gridfox_config(), client=_client(handler))

    @pytest.mark.unit
    def test_missing_records_propagates(self) -> None:
        """A body without a records list is reported."""
        handler = RecordingHandler({"Environments": {"items": []}})

        with pytest.raises(GridfoxResponseError) as exc_info:
            config_from_gridfox(_gridfox_config(), client=_client(handler))

        assert exc_info.value.table_name == "Environments"

    @pytest.mark.unit
    def test_invalid_json_propagates(self) -> None:
        """Malformed JSON is not swallowed."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, content=b"not json")
        )
        client = GridfoxClient(api_key="k", api_url=API_URL, transport=transport)

        with pytest.raises(ValueError):
            config_from_gridfox(_gridfox_config(), client=client)

    @pytest.mark.unit
    def test_network_error_propagates(self) -> None:
        """Transport failures are not caught."""

        def fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = GridfoxClient(
            api_key="k", api_url=API_URL, transport=httpx.MockTransport(fail)
        )

        with pytest.raises(httpx.ConnectError):
            config_from_gridfox(_gridfox_config(), client=client)


class TestGridfoxClient:
    """Tests for GridfoxClient."""

    @pytest.mark.unit
    def test_proxy_url_with_path(self) -> None:
        """A proxy URL with a path prefix is kept."""
        handler = RecordingHandler({"Issues": {"records": [{"id": 1}]}})
        client = GridfoxClient(
            api_key="k",
            api_url="https://proxy.test/gridfox/",
            transport=httpx.MockTransport(handler),
        )

        with client:
            records = client.fetch_records("Issues")

        assert records == [{"id": 1}]
        assert str(handler.requests[0].url) == "https://proxy.test/gridfox/data/Issues"


class TestGridfoxConfig:
    """Tests for GridfoxConfig."""

    @pytest.mark.unit
    def test_default_api_url(self) -> None:
        """The production API is used by default."""
        config = GridfoxConfig(
            api_key="k",
            environments_table_name="Environments",
            issues_table_name="Issues",
            issue_status_list_field_name="Status",
            open_issue_list_items=["Open"],
            issue_status_type=CLASSIFIER,
        )

        assert config.proxy_api_url == "https://api.gridfox.com"

    @pytest.mark.unit
    def test_api_key_not_in_repr(self) -> None:
        """The API key is hidden from repr."""
        assert "secret-key" not in repr(_gridfox_config())

    @pytest.mark.unit
    def test_invalid_url_rejected(self) -> None:
        """Non-HTTP URLs are rejected."""
        with pytest.raises(ValueError):
            GridfoxConfig(
                api_key="k",
                environments_table_name="Environments",
                issues_table_name="Issues",
                issue_status_list_field_name="Status",
                open_issue_list_items=["Open"],
                issue_status_type=CLASSIFIER,
                proxy_api_url="ftp://gridfox.test",
            )

    @pytest.mark.unit
    def test_classifier_must_be_callable(self) -> None:
        """issue_status_type must be callable."""
        with pytest.raises(ValueError):
            GridfoxConfig(
                api_key="k",
                environments_table_name="Environments",
                issues_table_name="Issues",
                issue_status_list_field_name="Status",
                open_issue_list_items=["Open"],
                issue_status_type="outage",  # type: ignore[arg-type]
            )
