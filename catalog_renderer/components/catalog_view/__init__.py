"""
Catalog view component - Item cards and catalog list rendering.
"""

from ._impl import (
    DEFAULT_PIPELINE_RULES,
    PipelineRules,
    compose_catalog,
    loading_card,
    not_configured_view,
    render_catalog,
    render_discover_response,
    render_item,
    wrap_card,
)
from .component import run, run_render_catalog, run_render_discover, run_render_item
from .models import (
    CARD_LOADING,
    CARD_RENDERED,
    CARD_UNSTYLED,
    CatalogHeader,
    CatalogViewError,
    CatalogViewOutput,
    DiscoverViewOutput,
    RenderCatalogInput,
    RenderDiscoverInput,
    RenderedCard,
    RenderItemInput,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_render_catalog",
    "run_render_discover",
    "run_render_item",
    # Input models
    "RenderCatalogInput",
    "RenderDiscoverInput",
    "RenderItemInput",
    # Output models
    "CARD_LOADING",
    "CARD_RENDERED",
    "CARD_UNSTYLED",
    "CatalogHeader",
    "CatalogViewError",
    "CatalogViewOutput",
    "DiscoverViewOutput",
    "RenderedCard",
    # Ports
    "RulesPort",
    # Pipeline
    "DEFAULT_PIPELINE_RULES",
    "PipelineRules",
    "compose_catalog",
    "loading_card",
    "not_configured_view",
    "render_catalog",
    "render_discover_response",
    "render_item",
    "wrap_card",
]
