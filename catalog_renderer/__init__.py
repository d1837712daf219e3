"""
catalog-renderer - Declarative template rendering and styling hints for catalog items.
"""

from catalog_renderer.components.catalog_view import (
    render_catalog,
    render_discover_response,
    render_item,
)
from catalog_renderer.components.renderer_config import (
    load_renderer_config,
    parse_renderer_config,
)
from catalog_renderer.components.styling import apply_styling
from catalog_renderer.components.template import render
from catalog_renderer.domain.entities import (
    Catalog,
    DiscoverResponse,
    Item,
    RendererConfig,
    StyleHint,
)

__version__ = "0.1.0"

__all__ = [
    "apply_styling",
    "load_renderer_config",
    "parse_renderer_config",
    "render",
    "render_catalog",
    "render_discover_response",
    "render_item",
    "Catalog",
    "DiscoverResponse",
    "Item",
    "RendererConfig",
    "StyleHint",
]
