"""
Render error taxonomy.

Every failure raised inside the render pipeline derives from RenderError so that
callers rendering a list can contain it per item.
"""

from __future__ import annotations


class RenderError(Exception):
    """Base class for render pipeline failures."""


class ConfigurationUnavailableError(RenderError):
    """Raised when no usable renderer configuration can be read."""


class TemplateRenderError(RenderError):
    """Raised when a template cannot be rendered for one item."""


class TemplateSyntaxError(TemplateRenderError):
    """
    Raised for a malformed template (unclosed tag, mismatched section).

    Carries the underlying tokenizer message.
    """

    def __init__(self, message: str, template: str | None = None) -> None:
        self.template = template
        super().__init__(message)


class StylingApplicationError(RenderError):
    """Raised when a styling category fails to apply to a fragment."""

    def __init__(self, category: str, message: str) -> None:
        self.category = category
        super().__init__(f"Styling category '{category}' failed: {message}")
