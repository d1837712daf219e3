import json
from pathlib import Path

import pytest

from catalog_renderer.domain.entities import Catalog, DiscoverResponse, RendererConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURES_DIR / name, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def renderer_document() -> dict:
    """EV charger renderer configuration as decoded JSON."""
    return load_fixture("ev-charger-renderer.json")


@pytest.fixture
def renderer_config(renderer_document: dict) -> RendererConfig:
    return RendererConfig.model_validate(renderer_document)


@pytest.fixture
def discover_response() -> DiscoverResponse:
    """Discover response with one catalog of three charging stations."""
    return DiscoverResponse.model_validate(load_fixture("ev-charging-catalog.json"))


@pytest.fixture
def catalog(discover_response: DiscoverResponse) -> Catalog:
    return discover_response.catalogs[0]
