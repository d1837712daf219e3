"""
Catalog view component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from catalog_renderer.rules.models import PresentationRules, StylingRules, TemplateRules


class RulesPort(Protocol):
    """Port for accessing every rules section the render pipeline uses."""

    def get_template_rules(self) -> TemplateRules:
        """Get raw-binding policy and helper dialect settings."""
        ...

    def get_styling_rules(self) -> StylingRules:
        """Get the badge category table and rating settings."""
        ...

    def get_presentation_rules(self) -> PresentationRules:
        """Get placeholder texts and view defaults."""
        ...
