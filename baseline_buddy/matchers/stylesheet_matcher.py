"""
Stylesheet (CSS/SCSS/Less) feature matching.
"""

from typing import Optional, Tuple

from tree_sitter import Node

from ..catalog import get_feature
from ..feature_tables import (
    STYLESHEET_AT_RULE_FEATURES,
    STYLESHEET_FALLBACK_FEATURES,
    STYLESHEET_FALLBACK_VALUE_TOKENS,
    STYLESHEET_PROPERTY_FEATURES,
    STYLESHEET_SELECTOR_FEATURES,
    STYLESHEET_VALUE_FEATURES,
)
from ..issue import SupportStatus
from ..matcher_base import BaseMatcher
from ..suppression import STYLESHEET


def fallback_feature(prop: str, value: str) -> Optional[str]:
    """Generic ``property:<name>`` then ``value:<value>`` lookup."""
    feature_id = STYLESHEET_FALLBACK_FEATURES.get(f"property:{prop}")
    if feature_id:
        return feature_id
    for token, token_feature in STYLESHEET_FALLBACK_VALUE_TOKENS:
        if token in value:
            return token_feature
    return STYLESHEET_FALLBACK_FEATURES.get(f"value:{value}")


class StylesheetMatcher(BaseMatcher):
    """Detects modern at-rules, selectors, properties and values."""

    kind = STYLESHEET

    def __init__(self):
        super().__init__()
        self.handlers = {
            "at_rule": self._check_at_rule,
            "rule_set": self._check_selectors,
            "declaration": self._check_declaration,
        }

    def _check_at_rule(self, node: Node):
        keyword = next((c for c in node.children if c.type == "at_keyword"), None)
        if keyword is None:
            return
        entry = STYLESHEET_AT_RULE_FEATURES.get(self._text(keyword).lstrip("@").lower())
        if entry:
            feature_id, message = entry
            self._add_occurrence(node, feature_id, message)

    def _check_selectors(self, node: Node):
        selectors = next((c for c in node.children if c.type == "selectors"), None)
        if selectors is None:
            return
        selector = self._text(selectors)
        for token, feature_id, message in STYLESHEET_SELECTOR_FEATURES:
            if token in selector:
                self._add_occurrence(node, feature_id, message)

    def _check_declaration(self, node: Node):
        prop, value = self._split_declaration(node)
        if not prop:
            return
        matched = False

        entry = STYLESHEET_PROPERTY_FEATURES.get(prop)
        if entry:
            feature_id, template = entry
            self._add_occurrence(node, feature_id, template.format(prop=prop))
            matched = True

        for token, feature_id, message in STYLESHEET_VALUE_FEATURES:
            if token in value:
                self._add_occurrence(node, feature_id, message)
                matched = True

        if matched:
            return
        feature_id = fallback_feature(prop, value)
        if not feature_id:
            return
        descriptor = get_feature(feature_id)
        if descriptor is None or descriptor.status is SupportStatus.WIDELY:
            return
        self._add_occurrence(
            node,
            feature_id,
            f"{prop}: {value} is not widely supported",
        )

    def _split_declaration(self, node: Node) -> Tuple[str, str]:
        """(property name, value text) of a declaration node."""
        prop = ""
        value_nodes = []
        seen_colon = False
        for child in node.children:
            if child.type == "property_name":
                prop = self._text(child).strip().lower()
            elif child.type == ":" and not seen_colon:
                seen_colon = True
            elif seen_colon and child.type not in (";", "comment"):
                value_nodes.append(child)
        if not value_nodes:
            return prop, ""
        value = self.parsed.slice(value_nodes[0].start_byte, value_nodes[-1].end_byte)
        return prop, value.strip()
