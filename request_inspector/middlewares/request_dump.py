"""Middleware logging a text report of every incoming request."""

from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from request_inspector.common.request_context import get_request_context
from request_inspector.config.log import get_logger
from request_inspector.config.models import InspectorConfig
from request_inspector.observability.dump_writer import DumpWriter
from request_inspector.report.dumper import RequestDumper
from request_inspector.report.starlette_view import HeaderSanitizer, StarletteRequestView

logger = get_logger(__name__)


class RequestDumpMiddleware(BaseHTTPMiddleware):
    """Renders each request before it is handled.

    The report is logged at DEBUG when ``log_requests`` is on and written to
    ``dump_dir`` when one is configured. Request bodies are not read, so only
    query string parameters are reported.
    """

    def __init__(self, app, dumper: RequestDumper, config: InspectorConfig, writer: Optional[DumpWriter] = None):
        super().__init__(app)
        self.dumper = dumper
        self.config = config
        self.writer = writer or DumpWriter(config)
        self.sanitizer = HeaderSanitizer(config.redact_headers)

    @property
    def active(self) -> bool:
        return self.config.log_requests or self.writer.enabled

    def render(self, request: Request) -> str:
        view = StarletteRequestView(
            request,
            sanitizer=self.sanitizer,
            session_cookie=self.config.session_cookie,
            client_cert_header=self.config.client_cert_header,
        )
        return self.dumper.dump(view)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if self.active:
            try:
                report = self.render(request)
            except Exception as e:
                logger.error(f'Failed to render request report: {e}', path=request.url.path, exc_info=True)
            else:
                context = get_request_context()
                if self.writer.enabled:
                    context.dump_path = self.writer.write(report)
                if self.config.log_requests:
                    logger.debug('request dump', report=report, **context.to_dict())

        return await call_next(request)
