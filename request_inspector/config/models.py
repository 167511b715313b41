import os
from typing import List

import yaml
from pydantic import BaseModel, ConfigDict, Field

from request_inspector.common.utils import get_app_dir
from request_inspector.common.yaml_utils import safe_load_with_env
from request_inspector.report.layout import LayoutConfig


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default='INFO', description='Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)')
    console_enabled: bool = Field(default=True, description='Enable console logging')
    file_enabled: bool = Field(default=False, description='Enable file logging')
    log_file_dir: str | None = Field(default=None, description='Log directory (defaults to ~/.request-inspector/logs)')
    max_file_size: str = Field(default='10MB', description='Maximum log file size before rotation')
    backup_count: int = Field(default=4, description='Number of backup files to keep')


class LayoutSettings(BaseModel):
    """Separators used when rendering request reports."""

    line_end: str = Field(default='\n')
    indent: str = Field(default='  ')
    section_break: str = Field(default='\n== ')
    name_value_separator: str = Field(default='=')
    value_separator: str = Field(default=';')

    def to_layout(self) -> LayoutConfig:
        return LayoutConfig(
            line_end=self.line_end,
            indent=self.indent,
            section_break=self.section_break,
            name_value_separator=self.name_value_separator,
            value_separator=self.value_separator,
        )


class InspectorConfig(BaseModel):
    """Controls how live requests are adapted, logged and dumped."""

    log_requests: bool = Field(default=False, description='Log a report for every request at DEBUG level')
    dump_dir: str | None = Field(default=None, description='Write every report to this directory')
    redact_headers: List[str] = Field(default_factory=lambda: ['authorization', 'x-api-key', 'cookie', 'set-cookie'])
    session_cookie: str = Field(default='session', description='Cookie holding the requested session id')
    client_cert_header: str | None = Field(default=None, description='Header carrying a PEM client certificate chain from a TLS-terminating proxy')
    endpoint_enabled: bool = Field(default=True, description='Expose the /inspect echo endpoint')


class ConfigModel(BaseModel):
    """Configuration model with validation."""

    model_config = ConfigDict(extra='allow')

    version: str = Field(default='1', description='Config version')
    host: str = Field(default='127.0.0.1')
    port: int = Field(default=8000, ge=1, le=65535)
    dev: bool = Field(default=False)
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    inspector: InspectorConfig = Field(default_factory=InspectorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description='Logging configuration')

    @classmethod
    def load(cls, config_path: str | None = None) -> 'ConfigModel':
        """Load configuration from YAML file.

        Tries multiple locations in order:
        1. Explicit config_path if provided
        2. ~/.request-inspector/config.yaml in user home directory
        3. ./config.yaml in current directory
        """
        config_paths = []
        if config_path:
            config_paths.append(config_path)
        else:
            home_config = get_app_dir() / 'config.yaml'
            if home_config.exists():
                config_paths.append(str(home_config))
            config_paths.append('config.yaml')

        data = {}
        for path in config_paths:
            try:
                with open(path, 'r') as f:
                    # Later files override earlier ones
                    data.update(safe_load_with_env(f) or {})
            except FileNotFoundError:
                continue
            except yaml.YAMLError as e:
                raise ValueError(f'Invalid YAML in config file {path}: {e}')
            except ValueError:
                raise
            except Exception as e:
                raise ValueError(f'Error reading config file {path}: {e}')

        return cls(**data)

    def save(self, config_path: str) -> None:
        """Save configuration to YAML file."""
        directory = os.path.dirname(config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False, sort_keys=False, indent=2)
