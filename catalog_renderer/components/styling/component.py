"""
Styling component - Applies styling hints to a rendered fragment.

Invariants:
- Pure: the input fragment is never mutated
- A category/value pair absent from the hint table leaves elements unchanged
- Status-like categories only style the element carrying the exact value class
- Failures are contained: the output always carries a displayable fragment
"""

from __future__ import annotations

import logging

from catalog_renderer.domain.errors import StylingApplicationError
from catalog_renderer.domain.markup import Fragment, parse_fragment

from ._impl import DEFAULT_STYLING_RULES, apply_styling
from .models import (
    ApplyStylingInput,
    StyleMarkupInput,
    StylingOutput,
    StylingValidationError,
)
from .ports import RulesPort

logger = logging.getLogger(__name__)


def _convert_errors(
    failures: tuple[StylingApplicationError, ...],
) -> list[StylingValidationError]:
    """Convert styling failures to component errors."""
    return [
        StylingValidationError(
            code="styling_application_failure",
            message=str(f),
            field=f.category,
        )
        for f in failures
    ]


def run_apply(
    inp: ApplyStylingInput,
    *,
    rules: RulesPort | None = None,
) -> StylingOutput:
    """
    Style a parsed fragment.

    Args:
        inp: Input containing the fragment, its item and the renderer config.
        rules: Optional rules port for the category table.

    Returns:
        StylingOutput with the styled fragment; success is False when any
        category failed (the fragment still carries what was applied).
    """
    config = rules.get_styling_rules() if rules else DEFAULT_STYLING_RULES
    result = apply_styling(inp.fragment, inp.item, inp.config, config)
    errors = _convert_errors(result.failures)

    return StylingOutput(
        fragment=result.fragment,
        markup=result.fragment.serialize(),
        applied=result.applied,
        errors=errors,
        success=not errors,
    )


def run_style_markup(
    inp: StyleMarkupInput,
    *,
    rules: RulesPort | None = None,
) -> StylingOutput:
    """
    Parse rendered markup and style it.

    Args:
        inp: Input containing the markup, its item and the renderer config.
        rules: Optional rules port for the category table.

    Returns:
        StylingOutput; on a parse failure the original markup is returned unstyled.
    """
    try:
        fragment = parse_fragment(inp.markup)
    except Exception as e:
        logger.exception("Error parsing rendered markup for item %s", inp.item.id)
        return StylingOutput(
            fragment=Fragment(),
            markup=inp.markup,
            errors=[
                StylingValidationError(
                    code="styling_application_failure",
                    message=str(e),
                    field="markup",
                )
            ],
            success=False,
        )

    return run_apply(
        ApplyStylingInput(fragment=fragment, item=inp.item, config=inp.config),
        rules=rules,
    )


def run(
    inp: ApplyStylingInput | StyleMarkupInput,
    *,
    rules: RulesPort | None = None,
) -> StylingOutput:
    """
    Main entry point for the styling component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, ApplyStylingInput):
        return run_apply(inp, rules=rules)
    elif isinstance(inp, StyleMarkupInput):
        return run_style_markup(inp, rules=rules)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
