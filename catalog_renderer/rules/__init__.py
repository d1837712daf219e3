from catalog_renderer.rules.loader import RULES_PATH_ENV, load_default_rules, load_rules
from catalog_renderer.rules.models import (
    CategoryRule,
    PresentationRules,
    RatingRules,
    RenderRules,
    StarColors,
    StylingRules,
    TemplateRules,
)

__all__ = [
    "RULES_PATH_ENV",
    "load_default_rules",
    "load_rules",
    "CategoryRule",
    "PresentationRules",
    "RatingRules",
    "RenderRules",
    "StarColors",
    "StylingRules",
    "TemplateRules",
]
