"""
Styling hint applier - Data-driven badge and rating styling for rendered fragments.

Pure transform: (fragment, item, renderer config) -> styled fragment. The input
tree is never mutated; untouched elements are shared with the output and
serialize exactly as rendered.

Key behaviors:
- Badge categories dispatch through a table: category -> (matcher, applier)
- Hint lookup is an exact match on the value as templates render it; a missing
  table, value or hint is a no-op
- Exclusive categories (station status) only style the element carrying the
  value-specific class
- Star k of a rating row is full if rating >= k, half if rating >= k - 0.5,
  empty otherwise
- Categories apply independently; one failing category does not stop the others
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from enum import Enum

from catalog_renderer.components.template import format_scalar
from catalog_renderer.domain.entities import Item, RendererConfig, StyleHint
from catalog_renderer.domain.errors import StylingApplicationError
from catalog_renderer.domain.markup import Element, Fragment, map_elements
from catalog_renderer.rules.models import CategoryRule, RatingRules, StylingRules

logger = logging.getLogger(__name__)

DEFAULT_STYLING_RULES = StylingRules()

RATING_CATEGORY = "rating"

Matcher = Callable[[Element], bool]
Applier = Callable[[Element], Element]


# --- Star Rating ---


class StarState(str, Enum):
    FULL = "full"
    HALF = "half"
    EMPTY = "empty"


def star_state(rating: float, index: int) -> StarState:
    """State of star `index` (1-indexed) for a decimal rating."""
    if rating >= index:
        return StarState.FULL
    if rating >= index - 0.5:
        return StarState.HALF
    return StarState.EMPTY


def star_states(rating: float, count: int = 5) -> tuple[StarState, ...]:
    return tuple(star_state(rating, k) for k in range(1, count + 1))


def parse_rating(value: object) -> float | None:
    """Parse a rating from an attribute or item value; None if not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rating = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(rating):
        return None
    return rating


# --- Dispatch Table ---


@dataclass(frozen=True)
class CategoryDispatch:
    """Resolved matcher/applier pair for one badge category of one item."""

    category: str
    value: str
    matcher: Matcher
    applier: Applier


def marker_matcher(marker_class: str) -> Matcher:
    def matches(element: Element) -> bool:
        return element.has_class(marker_class)

    return matches


def value_marker_matcher(marker_class: str, value_class: str) -> Matcher:
    def matches(element: Element) -> bool:
        return element.has_class(marker_class) and element.has_class(value_class)

    return matches


def style_applier(hint: StyleHint) -> Applier:
    declarations = hint.to_css()

    def apply(element: Element) -> Element:
        if not declarations:
            return element
        return element.with_style(declarations)

    return apply


def build_matcher(rule: CategoryRule, value: str) -> Matcher:
    if rule.value_class_prefix is not None:
        return value_marker_matcher(rule.marker_class, f"{rule.value_class_prefix}{value}")
    return marker_matcher(rule.marker_class)


def hint_key(value: object) -> str | None:
    """
    Lookup key for an attribute value, formatted the way templates render it.

    None, empty strings and containers have no key.
    """
    if value is None or isinstance(value, (Mapping, list, tuple, set)):
        return None
    key = format_scalar(value)
    return key or None


def resolve_category(
    category: str,
    rule: CategoryRule,
    item: Item,
    config: RendererConfig,
) -> CategoryDispatch | None:
    """
    Resolve the matcher/applier pair for one category, or None for a no-op.

    No-op when the item has no scalar value for the category's attribute, or
    the config has no readable table or hint for that value.
    """
    value = hint_key(item.attribute(rule.attribute))
    if value is None:
        return None

    if not config.hints_for(category):
        logger.debug("No styling hints for category %s", category)
        return None

    hint = config.hint_for(category, value)
    if hint is None:
        logger.debug("No styling hint for %s=%s", category, value)
        return None

    return CategoryDispatch(
        category=category,
        value=value,
        matcher=build_matcher(rule, value),
        applier=style_applier(hint),
    )


def resolve_dispatch(
    item: Item,
    config: RendererConfig,
    rules: StylingRules = DEFAULT_STYLING_RULES,
) -> list[CategoryDispatch]:
    """Resolve every badge category that applies to this item, in rules order."""
    dispatch: list[CategoryDispatch] = []
    for category, rule in rules.categories.items():
        entry = resolve_category(category, rule, item, config)
        if entry is not None:
            dispatch.append(entry)
    return dispatch


def apply_dispatch(fragment: Fragment, entry: CategoryDispatch) -> Fragment:
    def visit(element: Element) -> Element:
        if entry.matcher(element):
            return entry.applier(element)
        return element

    return fragment.map_elements(visit)


# --- Rating ---


def _style_stars(container: Element, rating: float, rules: RatingRules) -> Element:
    colors = {
        StarState.FULL: rules.colors.full,
        StarState.HALF: rules.colors.half,
        StarState.EMPTY: rules.colors.empty,
    }
    index = 0

    def visit(element: Element) -> Element:
        nonlocal index
        if not element.has_class(rules.star_class):
            return element
        index += 1
        return element.with_style({"color": colors[star_state(rating, index)]})

    children = map_elements(container.children, visit)
    if children is container.children:
        return container
    return replace(container, children=children)


def apply_rating(fragment: Fragment, item: Item, rules: RatingRules) -> Fragment:
    """
    Color each star row by its rating.

    The rating comes from the container's data attribute, falling back to the
    item's rating attribute. Rows without a parsable rating are left alone.
    """
    fallback = parse_rating(item.attribute(rules.item_attribute)) if rules.item_attribute else None

    def visit(element: Element) -> Element:
        if not element.has_class(rules.container_class):
            return element
        raw = element.get(rules.value_attribute)
        rating = parse_rating(raw) if raw else fallback
        if rating is None:
            logger.debug("Skipping rating row without a numeric rating: %r", raw)
            return element
        return _style_stars(element, rating, rules)

    return fragment.map_elements(visit)


# --- Main Entry Point ---


@dataclass(frozen=True)
class StylingResult:
    """Styled fragment plus the categories applied and the ones that failed."""

    fragment: Fragment
    applied: tuple[str, ...] = ()
    failures: tuple[StylingApplicationError, ...] = ()


def apply_styling(
    fragment: Fragment,
    item: Item,
    config: RendererConfig,
    rules: StylingRules = DEFAULT_STYLING_RULES,
) -> StylingResult:
    """
    Apply every styling category to a rendered fragment.

    Each category runs on the output of the previous one. A failing category is
    logged and recorded; the fragment keeps whatever was already applied.
    """
    applied: list[str] = []
    failures: list[StylingApplicationError] = []

    for category, rule in rules.categories.items():
        try:
            entry = resolve_category(category, rule, item, config)
            if entry is None:
                continue
            fragment = apply_dispatch(fragment, entry)
        except Exception as e:
            logger.exception("Error applying styling hints for category %s", category)
            failures.append(StylingApplicationError(category, str(e)))
        else:
            applied.append(category)

    if rules.rating.enabled:
        try:
            fragment = apply_rating(fragment, item, rules.rating)
        except Exception as e:
            logger.exception("Error applying rating styling")
            failures.append(StylingApplicationError(RATING_CATEGORY, str(e)))
        else:
            applied.append(RATING_CATEGORY)

    return StylingResult(fragment=fragment, applied=tuple(applied), failures=tuple(failures))
