"""
Renderer configuration - Reads the template + styling-hint document.

The document is read, not validated: unknown keys are kept, a missing
`templates` section is the "not configured" state rather than an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from catalog_renderer.domain.entities import RendererConfig
from catalog_renderer.domain.errors import ConfigurationUnavailableError

from .ports import RendererConfigSource

logger = logging.getLogger(__name__)


def parse_renderer_config(document: Any) -> RendererConfig:
    """
    Parse a renderer configuration document.

    Raises:
        ConfigurationUnavailableError: If the document is not an object or its
            templates/stylingHints sections cannot be read.
    """
    if not isinstance(document, Mapping):
        raise ConfigurationUnavailableError(
            f"Renderer configuration must be an object, got {type(document).__name__}"
        )

    try:
        return RendererConfig.model_validate(dict(document))
    except ValidationError as e:
        raise ConfigurationUnavailableError(f"Unreadable renderer configuration:\n{e}") from e


def load_renderer_config(source: RendererConfigSource) -> RendererConfig | None:
    """
    Load and parse a renderer configuration from a source.

    Returns None (the not-configured state) when the source fails or the
    document is unreadable; the failure is logged.
    """
    try:
        document = source.load()
    except (OSError, ValueError) as e:
        logger.error("Error loading renderer configuration from %s: %s", source.describe(), e)
        return None

    try:
        config = parse_renderer_config(document)
    except ConfigurationUnavailableError:
        logger.exception("Renderer configuration from %s is unusable", source.describe())
        return None

    if not config.has_templates:
        logger.warning("Renderer configuration from %s has no templates", source.describe())
    return config
