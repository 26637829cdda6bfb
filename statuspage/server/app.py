"""HTTP server that regenerates the status page on every request."""

import uuid
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, HTTPServer

import structlog

from statuspage.config.constants import COMPONENT_SERVER
from statuspage.config.provider import PageProvider
from statuspage.observability import bind_request_context, clear_request_context
from statuspage.renderer import create_status_page


logger = structlog.get_logger()

ERROR_BODY = b"Internal Server Error"


class StatusPageHandler(BaseHTTPRequestHandler):
    """Serves the rendered page for any path and method.

    HEAD gets the same status and headers without a body. Request bodies
    are read and discarded.

    The page provider is attached to the server as ``page_provider``.
    """

    server: "StatusPageServer"

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Route request logging through structlog."""
        logger.debug(
            "http_access",
            component=COMPONENT_SERVER,
            client=self.client_address[0],
            message=format % args,
        )

    def do_GET(self) -> None:  # noqa: N802
        """Render and return the status page."""
        self._handle(send_body=True)

    def do_HEAD(self) -> None:  # noqa: N802
        """Return the headers of the page without the body."""
        self._handle(send_body=False)

    # Every method answers with the page.
    do_POST = do_GET  # noqa: N815
    do_PUT = do_GET  # noqa: N815
    do_PATCH = do_GET  # noqa: N815
    do_DELETE = do_GET  # noqa: N815

    def _handle(self, *, send_body: bool) -> None:
        bind_request_context(uuid.uuid4().hex[:12])
        self._discard_request_body()
        try:
            self._serve_page(send_body)
        finally:
            clear_request_context()

    def _discard_request_body(self) -> None:
        length = int(self.headers.get("Content-Length") or 0)
        if length > 0:
            self.rfile.read(length)

    def _serve_page(self, send_body: bool) -> None:
        log = logger.bind(
            component=COMPONENT_SERVER, method=self.command, path=self.path
        )
        try:
            response = create_status_page(self.server.page_provider())
        except Exception:
            log.exception("page_request_failed")
            self._send(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"Content-Type": "text/plain; charset=utf-8"},
                ERROR_BODY,
                send_body,
            )
            return

        body = response.encode()
        headers = dict(response.headers)
        headers["Content-Type"] = f"{response.content_type}; charset=utf-8"
        self._send(HTTPStatus(response.status_code), headers, body, send_body)
        log.info("page_served", status_code=response.status_code, bytes=len(body))

    def _send(
        self,
        status: HTTPStatus,
        headers: dict[str, str],
        body: bytes,
        send_body: bool,
    ) -> None:
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        if send_body:
            self.wfile.write(body)


class StatusPageServer(HTTPServer):
    """Single-threaded HTTP server bound to a page provider."""

    def __init__(self, address: tuple[str, int], page_provider: PageProvider) -> None:
        """Initialize the server.

        Args:
            address: (host, port) to bind. Port 0 picks a free port.
            page_provider: Produces the PageConfig for each request.
        """
        super().__init__(address, StatusPageHandler)
        self.page_provider = page_provider


def create_server(
    page_provider: PageProvider,
    host: str = "127.0.0.1",
    port: int = 8000,
) -> StatusPageServer:
    """Create a status page server.

    Args:
        page_provider: Produces the PageConfig for each request.
        host: Interface to bind.
        port: Port to bind. 0 picks a free port.

    Returns:
        Bound, not yet serving, server.
    """
    server = StatusPageServer((host, port), page_provider)
    logger.info(
        "server_created",
        component=COMPONENT_SERVER,
        host=server.server_address[0],
        port=server.server_address[1],
    )
    return server
