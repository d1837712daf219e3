"""
Catalog view component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_renderer.domain.entities import Catalog, DiscoverResponse, Item, RendererConfig

CARD_RENDERED = "rendered"
CARD_LOADING = "loading"
CARD_UNSTYLED = "unstyled"

# --- Validation Error ---


@dataclass(frozen=True)
class CatalogViewError:
    """Catalog view error; `field` holds the item id when the error is per item."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderItemInput:
    """Input for rendering one item card."""

    item: Item
    catalog: Catalog
    config: RendererConfig | None
    view_type: str | None = None


@dataclass(frozen=True)
class RenderCatalogInput:
    """Input for rendering every item of one catalog."""

    catalog: Catalog
    config: RendererConfig | None
    view_type: str | None = None


@dataclass(frozen=True)
class RenderDiscoverInput:
    """Input for rendering every catalog of a discover response."""

    response: DiscoverResponse
    config: RendererConfig | None
    view_type: str | None = None


# --- Output Models ---


@dataclass(frozen=True)
class RenderedCard:
    """
    One item's presentation.

    `status` is "rendered", "unstyled" (styling pass failed, markup shown
    as rendered) or "loading" (no template or the template failed).
    """

    item_id: str | None
    status: str
    markup: str
    errors: tuple[CatalogViewError, ...] = ()


@dataclass(frozen=True)
class CatalogHeader:
    title: str
    short_desc: str = ""


@dataclass(frozen=True)
class CatalogViewOutput:
    """Output containing a rendered catalog."""

    catalog_id: str | None
    configured: bool
    markup: str
    header: CatalogHeader | None = None
    cards: tuple[RenderedCard, ...] = ()
    errors: list[CatalogViewError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class DiscoverViewOutput:
    """Output containing every rendered catalog of a discover response."""

    catalogs: tuple[CatalogViewOutput, ...]
    markup: str
    errors: list[CatalogViewError] = field(default_factory=list)
    success: bool = True
