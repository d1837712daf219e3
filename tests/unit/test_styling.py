"""
Tests for the styling hint applier.

Covers badge dispatch, status exclusivity, star ratings, the no-op law and
per-category failure containment.
"""

from __future__ import annotations

import pytest

from catalog_renderer.components.styling import (
    ApplyStylingInput,
    StarState,
    StyleMarkupInput,
    apply_styling,
    hint_key,
    parse_rating,
    resolve_dispatch,
    run,
    run_style_markup,
    star_states,
)
from catalog_renderer.components.styling import _impl as styling_impl
from catalog_renderer.domain.entities import Item, RendererConfig
from catalog_renderer.domain.markup import parse_fragment
from catalog_renderer.rules.models import CategoryRule, RatingRules, StylingRules

STARS = "".join("<span class='star'>&#9733;</span>" for _ in range(5))

BADGES = (
    "<div>"
    "<span class='charging-speed-badge'>fast</span>"
    "<span class='status-badge status-active'>active</span>"
    "<span class='status-badge status-offline'>offline</span>"
    "</div>"
)


def make_item(**attributes: object) -> Item:
    return Item.model_validate({"beckn:id": "ev-001", "beckn:itemAttributes": attributes})


def star_colors(markup: str) -> list[str | None]:
    return [star.style.get("color") for star in parse_fragment(markup).find_by_class("star")]


# --- Rating Math ---


class TestStarStates:
    def test_half_rating(self) -> None:
        F, H, E = StarState.FULL, StarState.HALF, StarState.EMPTY
        assert star_states(3.5) == (F, F, F, H, E)

    def test_full_rating(self) -> None:
        assert star_states(5.0) == (StarState.FULL,) * 5

    def test_zero_rating(self) -> None:
        assert star_states(0) == (StarState.EMPTY,) * 5

    def test_just_below_half(self) -> None:
        F, E = StarState.FULL, StarState.EMPTY
        assert star_states(4.4) == (F, F, F, F, E)


class TestParseRating:
    @pytest.mark.parametrize("value,expected", [("3.5", 3.5), (4, 4.0), (" 2 ", 2.0)])
    def test_numeric(self, value: object, expected: float) -> None:
        assert parse_rating(value) == expected

    @pytest.mark.parametrize("value", [None, True, "abc", "", "nan", "inf", [4]])
    def test_not_a_rating(self, value: object) -> None:
        assert parse_rating(value) is None


# --- Badges ---


class TestBadgeStyling:
    def test_badges_styled_from_hints(self, renderer_config: RendererConfig) -> None:
        item = make_item(chargingSpeed="fast", stationStatus="active")
        result = apply_styling(parse_fragment(BADGES), item, renderer_config)

        assert result.fragment.serialize() == (
            "<div>"
            '<span class="charging-speed-badge" '
            'style="background-color: #dcfce7; color: #166534">fast</span>'
            '<span class="status-badge status-active" '
            'style="background-color: #dcfce7; color: #15803d">active</span>'
            "<span class='status-badge status-offline'>offline</span>"
            "</div>"
        )
        assert result.applied == ("chargingSpeedBadge", "stationStatus", "rating")
        assert result.failures == ()

    def test_status_styles_only_matching_value_class(
        self, renderer_config: RendererConfig
    ) -> None:
        item = make_item(stationStatus="offline")
        fragment = apply_styling(parse_fragment(BADGES), item, renderer_config).fragment

        styled = [el for el in fragment.find_by_class("status-badge") if el.has_attr("style")]
        assert len(styled) == 1
        assert styled[0].has_class("status-offline")
        assert styled[0].style == {"background-color": "#fee2e2", "color": "#b91c1c"}

    def test_every_marker_element_styled(self, renderer_config: RendererConfig) -> None:
        markup = "<b class='charging-speed-badge'>a</b><i class='x charging-speed-badge'>b</i>"
        item = make_item(chargingSpeed="slow")
        fragment = apply_styling(parse_fragment(markup), item, renderer_config).fragment
        badges = fragment.find_by_class("charging-speed-badge")
        assert [badge.style.get("color") for badge in badges] == ["#854d0e", "#854d0e"]

    def test_dietary_badge(self) -> None:
        config = RendererConfig.model_validate(
            {"stylingHints": {"dietaryBadge": {"veg": {"backgroundColor": "#0f0"}}}}
        )
        item = make_item(dietaryClassification="veg")
        fragment = apply_styling(
            parse_fragment("<span class='dietary-badge'>veg</span>"), item, config
        ).fragment
        assert fragment.serialize() == (
            '<span class="dietary-badge" style="background-color: #0f0">veg</span>'
        )

    def test_category_added_through_rules(self) -> None:
        rules = StylingRules(
            categories={"accessBadge": CategoryRule(attribute="access", marker_class="access")}
        )
        config = RendererConfig.model_validate(
            {"stylingHints": {"accessBadge": {"public": {"color": "#123456"}}}}
        )
        item = make_item(access="public")
        result = apply_styling(parse_fragment("<em class='access'>p</em>"), item, config, rules)
        assert result.fragment.serialize() == '<em class="access" style="color: #123456">p</em>'

    def test_numeric_value_matches_rendered_key(self) -> None:
        config = RendererConfig.model_validate(
            {
                "stylingHints": {
                    "chargingSpeedBadge": {"50": {"color": "#166534"}},
                    "stationStatus": {"true": {"color": "#15803d"}},
                }
            }
        )
        markup = (
            "<span class='charging-speed-badge'>50</span>"
            "<span class='status-badge status-true'>true</span>"
        )
        for speed in (50, 50.0):
            item = make_item(chargingSpeed=speed, stationStatus=True)
            fragment = apply_styling(parse_fragment(markup), item, config).fragment
            assert fragment.serialize() == (
                '<span class="charging-speed-badge" style="color: #166534">50</span>'
                '<span class="status-badge status-true" style="color: #15803d">true</span>'
            )

    @pytest.mark.parametrize(
        "value,expected",
        [("fast", "fast"), (50, "50"), (2.5, "2.5"), (False, "false"), ("", None), (None, None)],
    )
    def test_hint_key(self, value: object, expected: str | None) -> None:
        assert hint_key(value) == expected

    @pytest.mark.parametrize("value", [["fast"], {"tier": "fast"}])
    def test_container_values_have_no_key(self, value: object) -> None:
        assert hint_key(value) is None

    def test_stray_hint_entries_ignored(self) -> None:
        config = RendererConfig.model_validate(
            {
                "stylingHints": {
                    "_comment": "badge colors",
                    "chargingSpeedBadge": {"fast": {"color": 42}},
                    "stationStatus": {"active": {"color": "#15803d"}},
                }
            }
        )
        item = make_item(chargingSpeed="fast", stationStatus="active")
        result = apply_styling(parse_fragment(BADGES), item, config)

        assert result.failures == ()
        assert not result.fragment.find_by_class("charging-speed-badge")[0].has_attr("style")
        assert result.fragment.find_by_class("status-active")[0].style == {"color": "#15803d"}

    def test_resolve_dispatch_lists_matching_categories(
        self, renderer_config: RendererConfig
    ) -> None:
        item = make_item(chargingSpeed="fast", stationStatus="unknown", dietaryClassification="veg")
        entries = resolve_dispatch(item, renderer_config)
        assert [(e.category, e.value) for e in entries] == [("chargingSpeedBadge", "fast")]


class TestNoOpLaw:
    """A value absent from the hint table leaves the markup byte-identical."""

    @pytest.mark.parametrize(
        "attributes",
        [
            {},
            {"chargingSpeed": "ultra-fast"},
            {"chargingSpeed": 5},
            {"chargingSpeed": ""},
            {"stationStatus": "maintenance"},
        ],
    )
    def test_unmatched_values_leave_markup_untouched(
        self, renderer_config: RendererConfig, attributes: dict
    ) -> None:
        fragment = parse_fragment(BADGES)
        result = apply_styling(fragment, make_item(**attributes), renderer_config)
        assert result.fragment is fragment
        assert result.fragment.serialize() == BADGES

    def test_no_hint_tables(self) -> None:
        fragment = parse_fragment(BADGES)
        item = make_item(chargingSpeed="fast", stationStatus="active")
        result = apply_styling(fragment, item, RendererConfig())
        assert result.fragment.serialize() == BADGES

    def test_input_fragment_not_mutated(self, renderer_config: RendererConfig) -> None:
        fragment = parse_fragment(BADGES)
        apply_styling(fragment, make_item(chargingSpeed="fast"), renderer_config)
        assert fragment.serialize() == BADGES


# --- Rating ---


class TestRatingStyling:
    def test_half_star_rating(self, renderer_config: RendererConfig) -> None:
        markup = f"<div class='rating-stars-container' data-rating='3.5'>{STARS}</div>"
        result = apply_styling(parse_fragment(markup), make_item(), renderer_config)
        assert star_colors(result.fragment.serialize()) == [
            "#fbbf24",
            "#fbbf24",
            "#fbbf24",
            "#fcd34d",
            "#e5e7eb",
        ]

    def test_five_stars(self, renderer_config: RendererConfig) -> None:
        markup = f"<div class='rating-stars-container' data-rating='5'>{STARS}</div>"
        result = apply_styling(parse_fragment(markup), make_item(), renderer_config)
        assert star_colors(result.fragment.serialize()) == ["#fbbf24"] * 5

    def test_zero_stars(self, renderer_config: RendererConfig) -> None:
        markup = f"<div class='rating-stars-container' data-rating='0'>{STARS}</div>"
        result = apply_styling(parse_fragment(markup), make_item(), renderer_config)
        assert star_colors(result.fragment.serialize()) == ["#e5e7eb"] * 5

    def test_falls_back_to_item_rating(self, renderer_config: RendererConfig) -> None:
        markup = f"<div class='rating-stars-container' data-rating=''>{STARS}</div>"
        result = apply_styling(parse_fragment(markup), make_item(rating=2), renderer_config)
        assert star_colors(result.fragment.serialize()) == [
            "#fbbf24",
            "#fbbf24",
            "#e5e7eb",
            "#e5e7eb",
            "#e5e7eb",
        ]

    def test_unparsable_rating_left_alone(self, renderer_config: RendererConfig) -> None:
        markup = f"<div class='rating-stars-container' data-rating='abc'>{STARS}</div>"
        result = apply_styling(parse_fragment(markup), make_item(), renderer_config)
        assert result.fragment.serialize() == markup

    def test_stars_outside_container_untouched(self, renderer_config: RendererConfig) -> None:
        markup = "<span class='star'>*</span>"
        result = apply_styling(parse_fragment(markup), make_item(rating=5), renderer_config)
        assert result.fragment.serialize() == markup

    def test_rating_disabled_by_rules(self, renderer_config: RendererConfig) -> None:
        rules = StylingRules(rating=RatingRules(enabled=False))
        markup = f"<div class='rating-stars-container' data-rating='4'>{STARS}</div>"
        result = apply_styling(parse_fragment(markup), make_item(), renderer_config, rules)
        assert result.fragment.serialize() == markup
        assert "rating" not in result.applied


# --- Failure Containment ---


class TestFailureContainment:
    @pytest.fixture
    def broken_speed_badge(self, monkeypatch: pytest.MonkeyPatch) -> None:
        original = styling_impl.apply_dispatch

        def apply_dispatch(fragment, entry):
            if entry.category == "chargingSpeedBadge":
                raise RuntimeError("boom")
            return original(fragment, entry)

        monkeypatch.setattr(styling_impl, "apply_dispatch", apply_dispatch)

    def test_other_categories_still_apply(
        self, renderer_config: RendererConfig, broken_speed_badge: None
    ) -> None:
        markup = BADGES + f"<div class='rating-stars-container' data-rating='5'>{STARS}</div>"
        item = make_item(chargingSpeed="fast", stationStatus="active")
        result = apply_styling(parse_fragment(markup), item, renderer_config)

        assert result.applied == ("stationStatus", "rating")
        assert [f.category for f in result.failures] == ["chargingSpeedBadge"]
        speed = result.fragment.find_by_class("charging-speed-badge")[0]
        assert not speed.has_attr("style")
        active = result.fragment.find_by_class("status-active")[0]
        assert active.style["color"] == "#15803d"
        assert star_colors(result.fragment.serialize()) == ["#fbbf24"] * 5

    def test_component_reports_failure(
        self, renderer_config: RendererConfig, broken_speed_badge: None
    ) -> None:
        item = make_item(chargingSpeed="fast", stationStatus="active")
        output = run_style_markup(StyleMarkupInput(markup=BADGES, item=item, config=renderer_config))
        assert not output.success
        assert output.errors[0].code == "styling_application_failure"
        assert output.errors[0].field == "chargingSpeedBadge"
        assert "status-active" in output.markup


# --- Component ---


class TestStylingComponent:
    def test_run_apply(self, renderer_config: RendererConfig) -> None:
        inp = ApplyStylingInput(
            fragment=parse_fragment(BADGES),
            item=make_item(chargingSpeed="fast"),
            config=renderer_config,
        )
        output = run(inp)
        assert output.success
        assert output.markup == output.fragment.serialize()
        assert "background-color: #dcfce7" in output.markup

    def test_run_style_markup(self, renderer_config: RendererConfig) -> None:
        inp = StyleMarkupInput(markup=BADGES, item=make_item(), config=renderer_config)
        output = run(inp)
        assert output.success
        assert output.markup == BADGES

    def test_unknown_input_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown input type"):
            run("markup")  # type: ignore[arg-type]
