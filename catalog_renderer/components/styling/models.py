"""
Styling component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from catalog_renderer.domain.entities import Item, RendererConfig
from catalog_renderer.domain.markup import Fragment

# --- Validation Error ---


@dataclass(frozen=True)
class StylingValidationError:
    """Styling error record; `field` names the failed category."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ApplyStylingInput:
    """Input for styling an already parsed fragment."""

    fragment: Fragment
    item: Item
    config: RendererConfig


@dataclass(frozen=True)
class StyleMarkupInput:
    """Input for styling a rendered markup string."""

    markup: str
    item: Item
    config: RendererConfig


# --- Output Models ---


@dataclass(frozen=True)
class StylingOutput:
    """Output containing the styled fragment and its serialized markup."""

    fragment: Fragment
    markup: str
    applied: tuple[str, ...] = ()
    errors: list[StylingValidationError] = field(default_factory=list)
    success: bool = True
