"""
Catalog view component - Renders items and catalogs through the full pipeline.

Invariants:
- Template engine output is parsed and styled before it is returned
- Failures are contained per item; no exception escapes a catalog render
- No state is carried between items or between render cycles
"""

from __future__ import annotations

from ._impl import (
    DEFAULT_PIPELINE_RULES,
    PipelineRules,
    render_catalog,
    render_discover_response,
    render_item,
)
from .models import (
    CatalogViewOutput,
    DiscoverViewOutput,
    RenderCatalogInput,
    RenderDiscoverInput,
    RenderedCard,
    RenderItemInput,
)
from .ports import RulesPort


def _build_rules(rules: RulesPort | None) -> PipelineRules:
    """Build pipeline rules from rules port."""
    if rules is None:
        return DEFAULT_PIPELINE_RULES

    return PipelineRules(
        template=rules.get_template_rules(),
        styling=rules.get_styling_rules(),
        presentation=rules.get_presentation_rules(),
    )


# --- Component Entry Points ---


def run_render_item(
    inp: RenderItemInput,
    *,
    rules: RulesPort | None = None,
) -> RenderedCard:
    """
    Render a single item card.

    Args:
        inp: Input containing the item, its catalog, config and view type.
        rules: Optional rules port.

    Returns:
        RenderedCard; a loading card when the item could not be rendered.
    """
    return render_item(inp.item, inp.catalog, inp.config, inp.view_type, _build_rules(rules))


def run_render_catalog(
    inp: RenderCatalogInput,
    *,
    rules: RulesPort | None = None,
) -> CatalogViewOutput:
    """
    Render a catalog with its header and item grid.

    Args:
        inp: Input containing the catalog, config and view type.
        rules: Optional rules port.

    Returns:
        CatalogViewOutput with one card per item, or the not-configured view.
    """
    return render_catalog(inp.catalog, inp.config, inp.view_type, _build_rules(rules))


def run_render_discover(
    inp: RenderDiscoverInput,
    *,
    rules: RulesPort | None = None,
) -> DiscoverViewOutput:
    """
    Render every catalog of a discover response.

    Args:
        inp: Input containing the response, config and view type.
        rules: Optional rules port.

    Returns:
        DiscoverViewOutput with one view per catalog.
    """
    return render_discover_response(
        inp.response, inp.config, inp.view_type, _build_rules(rules)
    )


def run(
    inp: RenderItemInput | RenderCatalogInput | RenderDiscoverInput,
    *,
    rules: RulesPort | None = None,
) -> RenderedCard | CatalogViewOutput | DiscoverViewOutput:
    """
    Main entry point for the catalog view component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, RenderItemInput):
        return run_render_item(inp, rules=rules)
    elif isinstance(inp, RenderCatalogInput):
        return run_render_catalog(inp, rules=rules)
    elif isinstance(inp, RenderDiscoverInput):
        return run_render_discover(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
