import logging
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# --- Enums / Literals ---
ViewType = Literal["discoveryCard", "detailView", "compactCard"]

DEFAULT_VIEW_TYPE: ViewType = "discoveryCard"

_DOCUMENT_CONFIG = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

# --- Catalog Documents ---

class Descriptor(BaseModel):
    model_config = _DOCUMENT_CONFIG

    name: str | None = Field(default=None, alias="schema:name")
    short_desc: str | None = Field(default=None, alias="beckn:shortDesc")


class Item(BaseModel):
    """
    One catalog entry.

    Keys other than the id and the attributes bag (descriptor, price, media...)
    are kept as extra fields so templates can bind to them.
    """

    model_config = _DOCUMENT_CONFIG

    id: str | None = Field(default=None, alias="beckn:id")
    attributes: dict[str, Any] = Field(default_factory=dict, alias="beckn:itemAttributes")

    def attribute(self, key: str) -> Any:
        return self.attributes.get(key)

    def to_document(self) -> dict[str, Any]:
        """Rebuild the document the item was read from, using its original keys."""
        doc: dict[str, Any] = dict(self.model_extra or {})
        if self.id is not None:
            doc["beckn:id"] = self.id
        if "attributes" in self.model_fields_set:
            doc["beckn:itemAttributes"] = self.attributes
        return doc


class Catalog(BaseModel):
    model_config = _DOCUMENT_CONFIG

    id: str | None = Field(default=None, alias="beckn:id")
    descriptor: Descriptor | None = Field(default=None, alias="beckn:descriptor")
    items: list[Item] = Field(default_factory=list, alias="beckn:items")

    @property
    def name(self) -> str | None:
        return self.descriptor.name if self.descriptor else None

    @property
    def short_desc(self) -> str | None:
        return self.descriptor.short_desc if self.descriptor else None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = dict(self.model_extra or {})
        if self.id is not None:
            doc["beckn:id"] = self.id
        if self.descriptor is not None:
            doc["beckn:descriptor"] = self.descriptor.model_dump(by_alias=True, exclude_none=True)
        doc["beckn:items"] = [item.to_document() for item in self.items]
        return doc


# --- Discover Response ---

class DiscoverMessage(BaseModel):
    model_config = _DOCUMENT_CONFIG

    catalogs: list[Catalog] = Field(default_factory=list)


class DiscoverResponse(BaseModel):
    model_config = _DOCUMENT_CONFIG

    message: DiscoverMessage = Field(default_factory=DiscoverMessage)

    @property
    def catalogs(self) -> list[Catalog]:
        return self.message.catalogs


# --- Renderer Configuration ---

class StyleHint(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    background_color: str | None = Field(default=None, alias="backgroundColor")
    color: str | None = None

    def to_css(self) -> dict[str, str]:
        declarations: dict[str, str] = {}
        if self.background_color:
            declarations["background-color"] = self.background_color
        if self.color:
            declarations["color"] = self.color
        return declarations


class ViewTemplate(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    html: str | None = None


class RendererConfig(BaseModel):
    """
    Templates per view type plus styling-hint tables per category.

    Shared read-only by every render of a session. Hint tables are kept as
    read and only interpreted on lookup; an entry that cannot be read is
    treated as "no hint".
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    templates: dict[str, ViewTemplate] | None = None
    styling_hints: dict[str, Any] = Field(
        default_factory=dict, alias="stylingHints"
    )

    @property
    def has_templates(self) -> bool:
        # An empty templates object is still configured; each view type is then missing
        return self.templates is not None

    def template_for(self, view_type: str) -> str | None:
        if not self.templates:
            return None
        template = self.templates.get(view_type)
        if template is None or not template.html:
            return None
        return template.html

    def hints_for(self, category: str) -> Mapping[str, Any] | None:
        table = self.styling_hints.get(category)
        if table is None:
            return None
        if not isinstance(table, Mapping):
            logger.debug("Ignoring unreadable styling hint table %s: %r", category, table)
            return None
        return table

    def hint_for(self, category: str, value: str) -> StyleHint | None:
        table = self.hints_for(category)
        if not table:
            return None
        raw = table.get(value)
        if raw is None:
            return None
        try:
            return StyleHint.model_validate(raw)
        except ValidationError:
            logger.debug("Ignoring unreadable styling hint %s=%s: %r", category, value, raw)
            return None
