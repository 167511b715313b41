import logging
from pprint import pprint
from typing import Optional

from fastapi import FastAPI

from request_inspector.config import ConfigurationService, setup_config
from request_inspector.config.log import configure_structlog
from request_inspector.config.models import ConfigModel
from request_inspector.middlewares.request_context import RequestContextMiddleware
from request_inspector.middlewares.request_dump import RequestDumpMiddleware
from request_inspector.observability.dump_writer import DumpWriter
from request_inspector.report.dumper import RequestDumper
from request_inspector.routers.health import router as health_router
from request_inspector.routers.inspect import router as inspect_router


def create_app(config: Optional[ConfigModel] = None) -> FastAPI:
    """Application factory for creating FastAPI instances.

    Args:
        config: Optional configuration. If None, the user config is created if
            missing and loaded from disk.

    Returns:
        Configured FastAPI application instance.
    """
    if config is None:
        setup_config()
        config_service = ConfigurationService()
        config = config_service.get_config()
    else:
        config_service = ConfigurationService(config=config)

    configure_structlog(config)

    app = FastAPI(title='request-inspector', version='0.1.0')

    # One shared, immutable dumper for every request
    dumper = RequestDumper(config.layout.to_layout())
    app.state.config = config
    app.state.config_service = config_service
    app.state.dumper = dumper

    for k in logging.root.manager.loggerDict.keys():
        if any(k.startswith(v) for v in {'fastapi', 'uvicorn'}):
            logging.getLogger(k).setLevel('INFO')

    app.include_router(health_router, prefix='/api', tags=['health'])
    if config.inspector.endpoint_enabled:
        app.include_router(inspect_router, tags=['inspect'])

    # Middlewares run LIFO: the request context must exist before dumping
    app.add_middleware(RequestDumpMiddleware, dumper=dumper, config=config.inspector, writer=DumpWriter(config.inspector))
    app.add_middleware(RequestContextMiddleware)

    if config.dev:
        pprint(config.model_dump())

    return app


if __name__ == '__main__':
    import uvicorn

    app = create_app()
    config = app.state.config

    uvicorn.run(app, host=config.host, port=config.port)
