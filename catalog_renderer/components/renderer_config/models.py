"""
Renderer configuration component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from catalog_renderer.domain.entities import RendererConfig

from .ports import RendererConfigSource

# --- Validation Error ---


@dataclass(frozen=True)
class ConfigValidationError:
    """Renderer configuration error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class ParseConfigInput:
    """Input for parsing an already decoded configuration document."""

    document: Any


@dataclass(frozen=True)
class LoadConfigInput:
    """Input for loading a configuration from a source."""

    source: RendererConfigSource


# --- Output Models ---


@dataclass(frozen=True)
class ConfigOutput:
    """Output containing the configuration, or None when not configured."""

    config: RendererConfig | None
    errors: list[ConfigValidationError] = field(default_factory=list)
    success: bool = True

    @property
    def is_configured(self) -> bool:
        return self.config is not None and self.config.has_templates
