"""
Render rules loader.

Rules drive the parts of rendering that are policy rather than data: the badge
category dispatch table, star colors, raw binding policy and placeholder texts.
Without a rules file the built-in defaults apply.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from catalog_renderer.rules.models import RenderRules

logger = logging.getLogger(__name__)

RULES_PATH_ENV = "CATALOG_RENDERER_RULES_PATH"


def load_rules(path: Path) -> RenderRules:
    """
    Load and validate a rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    content = path.read_text()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    try:
        return RenderRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e


def load_default_rules() -> RenderRules:
    """
    Load rules from $CATALOG_RENDERER_RULES_PATH, or the built-in defaults.
    """
    env_path = os.environ.get(RULES_PATH_ENV)
    if not env_path:
        return RenderRules()

    rules = load_rules(Path(env_path))
    logger.info("Render rules loaded from %s", env_path)
    return rules
