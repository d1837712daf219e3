"""
Styling component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from catalog_renderer.rules.models import StylingRules


class RulesPort(Protocol):
    """Port for accessing styling rules configuration."""

    def get_styling_rules(self) -> StylingRules:
        """Get the badge category table and rating settings."""
        ...
