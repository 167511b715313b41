"""YAML loading with ``!env`` environment variable tags."""

import os
from typing import Any

import yaml


def _env_name(loader: yaml.SafeLoader, node: yaml.Node, value: Any) -> str:
    if not isinstance(value, str):
        raise yaml.constructor.ConstructorError(None, None, f'Environment variable name must be a string, got {type(value).__name__}', node.start_mark)
    return value


def _env_constructor(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    """Resolve an ``!env`` tag.

    ``!env VAR`` requires the variable to be set. ``!env [VAR, default]``
    falls back to ``default``, keeping its YAML type when the variable is
    missing. Values read from the environment are always strings; pydantic
    coerces them when the config model is built.
    """
    if isinstance(node, yaml.ScalarNode):
        var_name = _env_name(loader, node, loader.construct_scalar(node))
        value = os.getenv(var_name)
        if value is None:
            raise ValueError(f"Required environment variable '{var_name}' is not set")
        return value

    if isinstance(node, yaml.SequenceNode):
        values = loader.construct_sequence(node)
        if len(values) != 2:
            raise yaml.constructor.ConstructorError(None, None, f'!env sequence must have exactly 2 elements [var_name, default], got {len(values)}', node.start_mark)
        var_name, default_value = values
        return os.getenv(_env_name(loader, node, var_name), default_value)

    raise yaml.constructor.ConstructorError(None, None, f'!env tag expects scalar (var_name) or sequence ([var_name, default]), got {type(node).__name__}', node.start_mark)


yaml.add_constructor('!env', _env_constructor, yaml.SafeLoader)


def safe_load_with_env(stream) -> Any:
    """Drop-in replacement for ``yaml.safe_load`` that understands ``!env``."""
    return yaml.safe_load(stream)
