"""
Template component - Binds one item and its catalog into a template.

Invariants:
- Output is deterministic for a given (template, item, catalog)
- Bound scalars are escaped; unresolved paths render as ""
- A malformed template yields a failed output, never an exception
"""

from __future__ import annotations

import logging

from catalog_renderer.domain.errors import TemplateRenderError

from ._impl import DEFAULT_TEMPLATE_RULES, render
from .models import RenderTemplateInput, RenderTemplateOutput, RenderValidationError
from .ports import RulesPort

logger = logging.getLogger(__name__)


def run_render(
    inp: RenderTemplateInput,
    *,
    rules: RulesPort | None = None,
) -> RenderTemplateOutput:
    """
    Render a template for one item.

    Args:
        inp: Input containing template source, item and owning catalog.
        rules: Optional rules port for template configuration.

    Returns:
        RenderTemplateOutput with the markup, or errors if the template failed.
    """
    config = rules.get_template_rules() if rules else DEFAULT_TEMPLATE_RULES

    try:
        markup = render(inp.template, inp.item, inp.catalog, config)
    except TemplateRenderError as e:
        logger.exception("Error rendering template for item %s", inp.item.id)
        return RenderTemplateOutput(
            markup=None,
            errors=[
                RenderValidationError(
                    code="template_render_failure",
                    message=str(e),
                    field="template",
                )
            ],
            success=False,
        )

    return RenderTemplateOutput(markup=markup, errors=[], success=True)


def run(
    inp: RenderTemplateInput,
    *,
    rules: RulesPort | None = None,
) -> RenderTemplateOutput:
    """Main entry point for the template component."""
    if isinstance(inp, RenderTemplateInput):
        return run_render(inp, rules=rules)
    raise ValueError(f"Unknown input type: {type(inp)}")
