"""
Styling component - Styling hint applier.
"""

from ._impl import (
    DEFAULT_STYLING_RULES,
    RATING_CATEGORY,
    CategoryDispatch,
    StarState,
    StylingResult,
    apply_dispatch,
    apply_rating,
    apply_styling,
    build_matcher,
    hint_key,
    marker_matcher,
    parse_rating,
    resolve_category,
    resolve_dispatch,
    star_state,
    star_states,
    style_applier,
    value_marker_matcher,
)
from .component import run, run_apply, run_style_markup
from .models import (
    ApplyStylingInput,
    StyleMarkupInput,
    StylingOutput,
    StylingValidationError,
)
from .ports import RulesPort

__all__ = [
    # Entry points
    "run",
    "run_apply",
    "run_style_markup",
    # Input models
    "ApplyStylingInput",
    "StyleMarkupInput",
    # Output models
    "StylingOutput",
    "StylingValidationError",
    # Ports
    "RulesPort",
    # Applier
    "DEFAULT_STYLING_RULES",
    "RATING_CATEGORY",
    "CategoryDispatch",
    "StarState",
    "StylingResult",
    "apply_dispatch",
    "apply_rating",
    "apply_styling",
    "build_matcher",
    "hint_key",
    "marker_matcher",
    "parse_rating",
    "resolve_category",
    "resolve_dispatch",
    "star_state",
    "star_states",
    "style_applier",
    "value_marker_matcher",
]
