"""
Template component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_renderer.domain.entities import Catalog, Item

# --- Validation Error ---


@dataclass(frozen=True)
class RenderValidationError:
    """Render error record carried by component outputs."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class RenderTemplateInput:
    """Input for rendering one template against one item."""

    template: str
    item: Item
    catalog: Catalog | None = None


# --- Output Models ---


@dataclass(frozen=True)
class RenderTemplateOutput:
    """Output containing the rendered markup."""

    markup: str | None
    errors: list[RenderValidationError] = field(default_factory=list)
    success: bool = True
