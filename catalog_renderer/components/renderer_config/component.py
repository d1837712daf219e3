"""
Renderer configuration component - Reads renderer configuration documents.

Invariants:
- The returned configuration is immutable and safe to share across renders
- An absent or unusable configuration is reported, never raised
"""

from __future__ import annotations

from catalog_renderer.domain.errors import ConfigurationUnavailableError

from ._impl import load_renderer_config, parse_renderer_config
from .models import ConfigOutput, ConfigValidationError, LoadConfigInput, ParseConfigInput


def _unavailable(message: str) -> ConfigOutput:
    return ConfigOutput(
        config=None,
        errors=[ConfigValidationError(code="configuration_unavailable", message=message)],
        success=False,
    )


def run_parse(inp: ParseConfigInput) -> ConfigOutput:
    """
    Parse a decoded renderer configuration document.

    Args:
        inp: Input containing the document.

    Returns:
        ConfigOutput with the configuration or a configuration_unavailable error.
    """
    try:
        config = parse_renderer_config(inp.document)
    except ConfigurationUnavailableError as e:
        return _unavailable(str(e))

    return ConfigOutput(config=config, errors=[], success=True)


def run_load(inp: LoadConfigInput) -> ConfigOutput:
    """
    Load a renderer configuration from a source.

    Args:
        inp: Input containing the source.

    Returns:
        ConfigOutput with the configuration or a configuration_unavailable error.
    """
    config = load_renderer_config(inp.source)
    if config is None:
        return _unavailable(f"Renderer configuration unavailable from {inp.source.describe()}")

    return ConfigOutput(config=config, errors=[], success=True)


def run(inp: ParseConfigInput | LoadConfigInput) -> ConfigOutput:
    """
    Main entry point for the renderer configuration component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ParseConfigInput):
        return run_parse(inp)
    elif isinstance(inp, LoadConfigInput):
        return run_load(inp)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
