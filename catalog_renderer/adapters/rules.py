from catalog_renderer.rules.models import (
    PresentationRules,
    RenderRules,
    StylingRules,
    TemplateRules,
)


class StaticRulesAdapter:
    """
    Serves one loaded RenderRules document to every component rules port.
    """

    def __init__(self, rules: RenderRules | None = None):
        self.rules = rules or RenderRules()

    def get_template_rules(self) -> TemplateRules:
        return self.rules.template

    def get_styling_rules(self) -> StylingRules:
        return self.rules.styling

    def get_presentation_rules(self) -> PresentationRules:
        return self.rules.presentation
