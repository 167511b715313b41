"""Common dependency injection functions for FastAPI."""

from fastapi import Request

from request_inspector.config import ConfigurationService
from request_inspector.config.models import ConfigModel
from request_inspector.report.dumper import RequestDumper


def get_config_service_dependency(request: Request) -> ConfigurationService:
    """Get configuration service from app state for dependency injection."""
    return request.app.state.config_service


def get_config_dependency(request: Request) -> ConfigModel:
    return get_config_service_dependency(request).get_config()


def get_request_dumper(request: Request) -> RequestDumper:
    """Shared dumper stored on the app, built from the layout config on first use."""
    dumper = getattr(request.app.state, 'dumper', None)
    if dumper is None:
        dumper = RequestDumper(get_config_dependency(request).layout.to_layout())
        request.app.state.dumper = dumper
    return dumper
