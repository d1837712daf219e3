"""
Template component port definitions.
"""

from __future__ import annotations

from typing import Protocol

from catalog_renderer.rules.models import TemplateRules


class RulesPort(Protocol):
    """Port for accessing template rules configuration."""

    def get_template_rules(self) -> TemplateRules:
        """Get raw-binding policy and helper dialect settings."""
        ...
