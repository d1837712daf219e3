"""
Template component - Mustache-style template engine.
"""

from ._impl import (
    DEFAULT_TEMPLATE_RULES,
    Literal,
    Section,
    Variable,
    build_binding_context,
    format_scalar,
    parse_template,
    render,
    render_nodes,
    resolve_path,
    rewrite_helpers,
)
from .component import run, run_render
from .models import RenderTemplateInput, RenderTemplateOutput, RenderValidationError
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_render",
    # Models
    "RenderTemplateInput",
    "RenderTemplateOutput",
    "RenderValidationError",
    # Ports
    "RulesPort",
    # Engine
    "DEFAULT_TEMPLATE_RULES",
    "Literal",
    "Section",
    "Variable",
    "build_binding_context",
    "format_scalar",
    "parse_template",
    "render",
    "render_nodes",
    "resolve_path",
    "rewrite_helpers",
]
