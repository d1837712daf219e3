"""
CatalogView - Per-item render pipeline and catalog list composition.

Pipeline per item: template -> parse -> style -> serialize. Every step completes
before the next starts, and nothing is carried between items or render cycles.

Key behaviors:
- A failing item renders as a loading card; its siblings are unaffected
- A failing styling pass leaves the rendered markup visible, unstyled
- A missing configuration degrades the whole catalog to a not-configured message
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field

from catalog_renderer.components.styling import apply_styling
from catalog_renderer.components.template import render
from catalog_renderer.domain.entities import Catalog, DiscoverResponse, Item, RendererConfig
from catalog_renderer.domain.markup import parse_fragment
from catalog_renderer.rules.models import PresentationRules, StylingRules, TemplateRules

from .models import (
    CARD_LOADING,
    CARD_RENDERED,
    CARD_UNSTYLED,
    CatalogHeader,
    CatalogViewError,
    CatalogViewOutput,
    DiscoverViewOutput,
    RenderedCard,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineRules:
    """Rules sections used by one render pass."""

    template: TemplateRules = field(default_factory=TemplateRules)
    styling: StylingRules = field(default_factory=StylingRules)
    presentation: PresentationRules = field(default_factory=PresentationRules)


DEFAULT_PIPELINE_RULES = PipelineRules()


# --- Markup Composition ---


def wrap_card(markup: str, view_type: str) -> str:
    view_class = html.escape(view_type, quote=True)
    return f'<div class="item-card item-card-{view_class}">{markup}</div>'


def loading_card(presentation: PresentationRules) -> str:
    return f"<div>{html.escape(presentation.loading_text)}</div>"


def not_configured_view(presentation: PresentationRules) -> str:
    return f"<div>{html.escape(presentation.not_configured_text)}</div>"


def compose_catalog(header: CatalogHeader, cards: tuple[RenderedCard, ...]) -> str:
    title = html.escape(header.title)
    short_desc = html.escape(header.short_desc)
    items = "".join(card.markup for card in cards)
    return (
        '<div class="catalog-view">'
        f'<div class="catalog-header"><h2>{title}</h2><p>{short_desc}</p></div>'
        f'<div class="items-grid">{items}</div>'
        "</div>"
    )


# --- Item Pipeline ---


def _loading(
    item: Item,
    rules: PipelineRules,
    errors: tuple[CatalogViewError, ...] = (),
) -> RenderedCard:
    return RenderedCard(
        item_id=item.id,
        status=CARD_LOADING,
        markup=loading_card(rules.presentation),
        errors=errors,
    )


def render_item(
    item: Item,
    catalog: Catalog,
    config: RendererConfig | None,
    view_type: str | None = None,
    rules: PipelineRules = DEFAULT_PIPELINE_RULES,
) -> RenderedCard:
    """
    Render one item card. Never raises.
    """
    view_type = view_type or rules.presentation.default_view_type

    if config is None:
        error = CatalogViewError(
            code="configuration_unavailable",
            message="No renderer configuration",
            field=item.id,
        )
        return _loading(item, rules, (error,))

    template = config.template_for(view_type)
    if template is None:
        logger.debug("No template configured for view type %s", view_type)
        error = CatalogViewError(
            code="template_missing",
            message=f"No template for view type '{view_type}'",
            field=item.id,
        )
        return _loading(item, rules, (error,))

    try:
        markup = render(template, item, catalog, rules.template)
    except Exception as e:
        logger.exception("Error rendering template for item %s", item.id)
        error = CatalogViewError(
            code="template_render_failure",
            message=str(e),
            field=item.id,
        )
        return _loading(item, rules, (error,))

    if not markup:
        return _loading(item, rules)

    try:
        result = apply_styling(parse_fragment(markup), item, config, rules.styling)
    except Exception as e:
        logger.exception("Error applying styling hints for item %s", item.id)
        error = CatalogViewError(
            code="styling_application_failure",
            message=str(e),
            field=item.id,
        )
        return RenderedCard(
            item_id=item.id,
            status=CARD_UNSTYLED,
            markup=wrap_card(markup, view_type),
            errors=(error,),
        )

    errors = tuple(
        CatalogViewError(
            code="styling_application_failure",
            message=str(failure),
            field=item.id,
        )
        for failure in result.failures
    )
    return RenderedCard(
        item_id=item.id,
        status=CARD_RENDERED,
        markup=wrap_card(result.fragment.serialize(), view_type),
        errors=errors,
    )


# --- Catalog ---


def render_catalog(
    catalog: Catalog,
    config: RendererConfig | None,
    view_type: str | None = None,
    rules: PipelineRules = DEFAULT_PIPELINE_RULES,
) -> CatalogViewOutput:
    """
    Render every item of a catalog, in order, under the catalog header.
    """
    if config is None or not config.has_templates:
        return CatalogViewOutput(
            catalog_id=catalog.id,
            configured=False,
            markup=not_configured_view(rules.presentation),
            errors=[
                CatalogViewError(
                    code="configuration_unavailable",
                    message="Renderer configuration has no templates",
                )
            ],
            success=False,
        )

    seen: set[str] = set()
    for item in catalog.items:
        if item.id is not None and item.id in seen:
            logger.warning("Duplicate item id %s in catalog %s", item.id, catalog.id)
        if item.id is not None:
            seen.add(item.id)

    header = CatalogHeader(
        title=catalog.name or rules.presentation.default_catalog_title,
        short_desc=catalog.short_desc or "",
    )
    cards = tuple(render_item(item, catalog, config, view_type, rules) for item in catalog.items)
    errors = [error for card in cards for error in card.errors]

    return CatalogViewOutput(
        catalog_id=catalog.id,
        configured=True,
        markup=compose_catalog(header, cards),
        header=header,
        cards=cards,
        errors=errors,
        success=True,
    )


def render_discover_response(
    response: DiscoverResponse,
    config: RendererConfig | None,
    view_type: str | None = None,
    rules: PipelineRules = DEFAULT_PIPELINE_RULES,
) -> DiscoverViewOutput:
    """Render every catalog of a discover response."""
    views = tuple(
        render_catalog(catalog, config, view_type, rules) for catalog in response.catalogs
    )
    return DiscoverViewOutput(
        catalogs=views,
        markup="".join(view.markup for view in views),
        errors=[error for view in views for error in view.errors],
        success=all(view.success for view in views),
    )
