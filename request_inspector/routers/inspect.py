"""Echo endpoint returning the report of the request it receives."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse
from starlette.datastructures import FormData

from request_inspector.config.log import get_logger
from request_inspector.config.models import ConfigModel
from request_inspector.dependencies import get_config_dependency, get_request_dumper
from request_inspector.report.dumper import RequestDumper
from request_inspector.report.starlette_view import HeaderSanitizer, StarletteRequestView

router = APIRouter()
log = get_logger(__name__)

FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')
METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']


async def _read_form(request: Request) -> Optional[FormData]:
    content_type = request.headers.get('content-type', '')
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return None
    return await request.form()


@router.api_route('/inspect', methods=METHODS, response_class=PlainTextResponse)
@router.api_route('/inspect/{path:path}', methods=METHODS, response_class=PlainTextResponse)
async def inspect_request(
    request: Request,
    dumper: Annotated[RequestDumper, Depends(get_request_dumper)],
    config: Annotated[ConfigModel, Depends(get_config_dependency)],
) -> PlainTextResponse:
    form = await _read_form(request)
    inspector = config.inspector
    view = StarletteRequestView(
        request,
        form=form,
        sanitizer=HeaderSanitizer(inspector.redact_headers),
        session_cookie=inspector.session_cookie,
        client_cert_header=inspector.client_cert_header,
    )
    report = dumper.dump(view)
    log.debug('inspect endpoint rendered report', path=request.url.path, size=len(report))
    return PlainTextResponse(report)
