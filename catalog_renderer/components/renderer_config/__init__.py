"""
Renderer configuration component - Template and styling-hint documents.
"""

from ._impl import load_renderer_config, parse_renderer_config
from .component import run, run_load, run_parse
from .models import ConfigOutput, ConfigValidationError, LoadConfigInput, ParseConfigInput
from .ports import RendererConfigSource

__all__ = [
    # Entry points
    "run",
    "run_load",
    "run_parse",
    # Input models
    "LoadConfigInput",
    "ParseConfigInput",
    # Output models
    "ConfigOutput",
    "ConfigValidationError",
    # Ports
    "RendererConfigSource",
    # Functions
    "load_renderer_config",
    "parse_renderer_config",
]
