from pydantic import BaseModel, ConfigDict, Field

from catalog_renderer.domain.entities import DEFAULT_VIEW_TYPE, ViewType


class TemplateRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    # Raw mustache tags ({{{x}}}, {{& x}}) are escaped unless explicitly allowed
    allow_raw_bindings: bool = False
    handlebars_helpers: bool = True


class CategoryRule(BaseModel):
    """
    One badge category of the styling dispatch table.

    The item's `attribute` value selects a hint from the renderer config's
    `stylingHints[<category>]` table; the hint is applied to every element
    carrying `marker_class`. With `value_class_prefix` set, the element must
    additionally carry `<prefix><value>`.
    """

    model_config = ConfigDict(frozen=True)

    attribute: str
    marker_class: str
    value_class_prefix: str | None = None


class StarColors(BaseModel):
    model_config = ConfigDict(frozen=True)

    full: str = "#fbbf24"
    half: str = "#fcd34d"
    empty: str = "#e5e7eb"


class RatingRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    container_class: str = "rating-stars-container"
    star_class: str = "star"
    value_attribute: str = "data-rating"
    item_attribute: str | None = "rating"
    colors: StarColors = Field(default_factory=StarColors)


def _default_categories() -> dict[str, CategoryRule]:
    return {
        "dietaryBadge": CategoryRule(
            attribute="dietaryClassification",
            marker_class="dietary-badge",
        ),
        "chargingSpeedBadge": CategoryRule(
            attribute="chargingSpeed",
            marker_class="charging-speed-badge",
        ),
        "stationStatus": CategoryRule(
            attribute="stationStatus",
            marker_class="status-badge",
            value_class_prefix="status-",
        ),
    }


class StylingRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: dict[str, CategoryRule] = Field(default_factory=_default_categories)
    rating: RatingRules = Field(default_factory=RatingRules)


class PresentationRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    loading_text: str = "Loading..."
    not_configured_text: str = "Renderer configuration not available"
    default_catalog_title: str = "Catalog"
    default_view_type: ViewType = DEFAULT_VIEW_TYPE


class RenderRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    rules_version: str = "1"
    template: TemplateRules = Field(default_factory=TemplateRules)
    styling: StylingRules = Field(default_factory=StylingRules)
    presentation: PresentationRules = Field(default_factory=PresentationRules)
