import logging
import logging.handlers
import re
from pathlib import Path

import orjson
import structlog
from structlog.types import FilteringBoundLogger

from request_inspector.common.utils import get_app_dir
from request_inspector.config.models import ConfigModel, LoggingConfig

_DEFAULT_MAX_BYTES = 10 * 1024 * 1024
_SIZE_MULTIPLIERS = {'': 1024**2, 'B': 1, 'KB': 1024, 'MB': 1024**2, 'GB': 1024**3, 'TB': 1024**4}


def _orjson_serializer(*args, **kwargs) -> str:
    return orjson.dumps(*args, **kwargs).decode('utf-8')


def parse_file_size(value: str) -> int:
    """Parse sizes such as ``10MB`` or ``512 KB`` into bytes, defaulting to 10MB."""
    size_match = re.fullmatch(r'\s*(\d+)\s*([KMGT]?B?)\s*', value.upper())
    if not size_match:
        return _DEFAULT_MAX_BYTES
    size_num, size_unit = int(size_match.group(1)), size_match.group(2)
    # A bare unit letter ("10M") means the same as "10MB"
    if size_unit and not size_unit.endswith('B'):
        size_unit += 'B'
    return size_num * _SIZE_MULTIPLIERS[size_unit]


def _create_log_handlers(log_config: LoggingConfig, log_dir: Path) -> list:
    """Create logging handlers based on configuration."""
    handlers = []

    if log_config.console_enabled:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, structlog.processors.format_exc_info, structlog.dev.ConsoleRenderer()]
        )
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    if log_config.file_enabled:
        formatter = structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(serializer=_orjson_serializer),
            ]
        )
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / 'app.log', maxBytes=parse_file_size(log_config.max_file_size), backupCount=log_config.backup_count
        )
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    return handlers


def _correlation_id_processor(logger, method_name, event_dict):
    """Add correlation ID to log events if available in context."""
    from request_inspector.common.request_context import get_correlation_id

    if 'correlation_id' not in event_dict:
        event_dict['correlation_id'] = get_correlation_id()

    return event_dict


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a configured structlog logger."""
    return structlog.get_logger(name)


def configure_structlog(config: ConfigModel) -> None:
    """Configure structlog with console and rotating file output on top of standard library logging."""
    log_config = config.logging

    log_dir = Path(log_config.log_file_dir) if log_config.log_file_dir else get_app_dir() / 'logs'
    if log_config.file_enabled:
        if log_dir.exists() and not log_dir.is_dir():
            raise ValueError(f'Log directory {log_dir} is not a directory')
        log_dir.mkdir(exist_ok=True, parents=True)

    level = getattr(logging, log_config.level.upper())
    logging.basicConfig(
        level=level,
        handlers=_create_log_handlers(log_config, log_dir),
        format='%(message)s',  # structlog will handle formatting
        force=True,
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt='ISO', utc=True),
        _correlation_id_processor,
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
