"""Stylesheet rules over tree-sitter parse trees."""

from baseline_buddy.matchers.stylesheet_matcher import fallback_feature

from helpers import features, match_stylesheet


def test_has_selector():
    occurrences = match_stylesheet(".card:has(.x) {}")
    assert [(o.feature, o.line, o.column) for o in occurrences] == [("css-has-selector", 1, 0)]
    assert occurrences[0].message == ":has() selector is not widely supported"


def test_each_pseudo_class_contributes():
    occurrences = match_stylesheet("a:is(.x, .y):focus-visible { color: red; }")
    assert features(occurrences) == ["css-is-selector", "css-focus-visible"]


def test_at_rules():
    occurrences = match_stylesheet(
        """
        @layer base {
          .a { color: red; }
        }
        @container sidebar (min-width: 400px) {
          .b { color: blue; }
        }
        """
    )
    assert [(o.feature, o.line) for o in occurrences] == [
        ("css-cascade-layers", 2),
        ("css-container-queries", 5),
    ]


def test_property_rules():
    occurrences = match_stylesheet(".a { container-type: inline-size; rotate: 45deg; }")
    assert features(occurrences) == ["css-container-queries", "css-individual-transform-properties"]
    assert occurrences[1].message == "Individual transform property 'rotate' is not widely supported"


def test_value_rules():
    occurrences = match_stylesheet(
        """
        .grid {
          grid-template-columns: subgrid;
          background: color-mix(in srgb, red 50%, blue);
        }
        """
    )
    assert [(o.feature, o.line) for o in occurrences] == [("css-subgrid", 3), ("css-color-mix", 4)]


def test_fallback_lookup_reports_non_widely_features():
    occurrences = match_stylesheet(".a { color: oklch(70% 0.1 200); aspect-ratio: 16 / 9; }")
    assert features(occurrences) == ["css-oklch-color", "css-aspect-ratio"]
    assert occurrences[0].message == "color: oklch(70% 0.1 200) is not widely supported"


def test_fallback_skips_widely_features():
    assert match_stylesheet(".a { scroll-snap-type: x mandatory; display: grid; }") == []


def test_fallback_table_lookup():
    assert fallback_feature("gap", "1rem") == "css-gap"
    assert fallback_feature("color", "hwb(0 0% 0%)") == "css-hwb-color"
    assert fallback_feature("grid-template-rows", "masonry") == "css-masonry"
    assert fallback_feature("color", "red") is None


def test_declaration_position():
    (occurrence,) = match_stylesheet(".a {\n  inset: 0;\n}\n")
    assert (occurrence.feature, occurrence.line, occurrence.column) == ("css-inset", 2, 2)


def test_suppression():
    occurrences = match_stylesheet(
        """
        /* baseline-buddy-ignore */
        .a:has(.b) {}
        .c:has(.d) {}
        .e { translate: 1px; } /* baseline-buddy-ignore */
        """
    )
    assert [(o.feature, o.line) for o in occurrences] == [("css-has-selector", 4)]


def test_empty_and_comment_only():
    assert match_stylesheet("") == []
    assert match_stylesheet("/* nothing to see */\n") == []


def test_engines_come_from_catalog():
    (occurrence,) = match_stylesheet(".card:has(.x) {}")
    assert occurrence.engines == ("chrome", "firefox", "safari")
