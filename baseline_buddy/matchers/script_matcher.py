"""
Script (JavaScript/TypeScript) feature matching.
"""

from typing import Callable, List, Optional, Tuple

from tree_sitter import Node

from ..catalog import get_feature
from ..feature_tables import (
    OBSERVER_V2_OPTIONS,
    SCRIPT_API_FEATURES,
    SCRIPT_CONSTRUCTOR_FEATURES,
    SCRIPT_GLOBAL_FEATURES,
    SCRIPT_METHOD_FEATURES,
)
from ..issue import SupportStatus
from ..matcher_base import BaseMatcher
from ..suppression import SCRIPT

# Node kinds that form an optional chain's spine.
CHAIN_TYPES = frozenset({"member_expression", "subscript_expression", "call_expression"})

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
    "generator_function",
    "generator_function_declaration",
})

FIELD_DEFINITION_TYPES = frozenset({"field_definition", "public_field_definition"})


def _spine_child(node: Node) -> Optional[Node]:
    field = "function" if node.type == "call_expression" else "object"
    return node.child_by_field_name(field)


def first_optional_token(node: Node) -> Optional[Node]:
    """The textually first ``?.`` token along a chain's spine, if any."""
    token = None
    current = node
    while current is not None and current.type in CHAIN_TYPES:
        for child in current.children:
            if child.type == "optional_chain":
                token = child
        current = _spine_child(current)
    return token


def continues_chain(node: Node) -> bool:
    """True if the parent extends the same access chain through ``node``."""
    parent = node.parent
    if parent is None or parent.type not in CHAIN_TYPES:
        return False
    return _spine_child(parent) == node


def _has_private_name(node: Node) -> bool:
    return any(child.type == "private_property_identifier" for child in node.children)


# Fixed access patterns checked before the generic tables:
# (predicate over (qualified name, trailing property), feature id, message template).
WEB_API_PATTERNS: List[Tuple[Callable[[str, str], bool], str, str]] = [
    (
        lambda name, prop: name in ("dialog.showModal", "dialog.close"),
        "dialog-element",
        "{name}() - Dialog element requires modern browsers",
    ),
    (
        lambda name, prop: "clipboard.write" in name
        or name in ("navigator.clipboard.read", "navigator.clipboard.readText"),
        "clipboard-api",
        "{name}() - Clipboard API requires modern browsers and user permission",
    ),
    (
        lambda name, prop: name == "navigator.share",
        "web-share",
        "navigator.share() - Web Share API is not widely supported",
    ),
    (
        lambda name, prop: name == "document.startViewTransition",
        "view-transitions",
        "document.startViewTransition() - View Transitions API requires modern browsers",
    ),
    (
        lambda name, prop: "attributeStyleMap" in name or "computedStyleMap" in name,
        "css-typed-om",
        "{name} - CSS Typed Object Model requires modern browsers",
    ),
    (
        lambda name, prop: "IntersectionObserver" in name and prop in OBSERVER_V2_OPTIONS,
        "intersection-observer-v2",
        "IntersectionObserver v2 features (trackVisibility, delay) require modern browsers",
    ),
]


class ScriptMatcher(BaseMatcher):
    """Detects modern script syntax and platform APIs."""

    kind = SCRIPT

    def __init__(self):
        super().__init__()
        self.handlers = {
            "member_expression": self._check_member,
            "subscript_expression": self._check_optional_chain,
            "call_expression": self._check_call,
            "new_expression": self._check_new,
            "binary_expression": self._check_nullish,
            "field_definition": self._check_private_field,
            "public_field_definition": self._check_private_field,
            "method_definition": self._check_private_method,
            "private_property_identifier": self._check_private_reference,
            "await_expression": self._check_await,
            "identifier": self._check_global,
        }

    # Syntax rules

    def _check_optional_chain(self, node: Node):
        """One occurrence per maximal optional chain, at its first ``?.``."""
        token = first_optional_token(node)
        if token is None or continues_chain(node):
            return
        self._add_occurrence(
            token, "optional-chaining", "Optional chaining (?.) requires modern browsers"
        )

    def _check_nullish(self, node: Node):
        operator = node.child_by_field_name("operator")
        if operator is None or operator.type != "??":
            return
        self._add_occurrence(
            operator, "nullish-coalescing", "Nullish coalescing (??) requires modern browsers"
        )

    def _check_private_field(self, node: Node):
        if _has_private_name(node):
            self._add_occurrence(
                node, "private-class-fields", "Private class fields require modern browsers"
            )

    def _check_private_method(self, node: Node):
        if _has_private_name(node):
            self._add_occurrence(
                node, "private-class-fields", "Private class methods require modern browsers"
            )

    def _check_private_reference(self, node: Node):
        parent = node.parent
        if parent is not None and (
            parent.type in FIELD_DEFINITION_TYPES or parent.type == "method_definition"
        ):
            return
        self._add_occurrence(
            node, "private-class-fields", "Private class field access requires modern browsers"
        )

    def _check_await(self, node: Node):
        """Flag await expressions outside of every function body."""
        current = node.parent
        while current is not None:
            if current.type in FUNCTION_TYPES:
                return
            current = current.parent
        self._add_occurrence(
            node, "top-level-await", "Top-level await requires modern browsers and module context"
        )

    # API rules

    def _check_member(self, node: Node):
        self._check_optional_chain(node)
        parent = node.parent
        if parent is not None:
            if parent.type == "call_expression" and parent.child_by_field_name("function") == node:
                return
            if parent.type == "new_expression" and parent.child_by_field_name("constructor") == node:
                return
            if parent.type == "member_expression" and parent.child_by_field_name("object") == node:
                return
        self._check_access(node, node)

    def _check_call(self, node: Node):
        self._check_optional_chain(node)
        function = node.child_by_field_name("function")
        if function is None:
            return
        if function.type == "import":
            self._add_occurrence(
                node, "dynamic-import", "Dynamic import() requires modern browsers"
            )
            return
        if function.type == "identifier":
            name = self._text(function)
            feature_id = SCRIPT_API_FEATURES.get(name)
            if feature_id:
                self._add_table_hit(node, feature_id, f"{name}()")
            return
        if function.type == "member_expression":
            self._check_access(node, function, "()")

    def _check_access(self, node: Node, member: Node, suffix: str = ""):
        """Look up a member access path; report at ``node``."""
        prop_node = member.child_by_field_name("property")
        if prop_node is None or prop_node.type == "private_property_identifier":
            return
        prop = self._text(prop_node)
        name = self._qualified_name(member)
        if name and self._check_web_api(node, name, prop):
            return
        feature_id = (SCRIPT_API_FEATURES.get(name) if name else None) or SCRIPT_METHOD_FEATURES.get(prop)
        if feature_id:
            self._add_table_hit(node, feature_id, f"{name or prop}{suffix}")

    def _check_new(self, node: Node):
        constructor = node.child_by_field_name("constructor")
        if constructor is None:
            return
        if constructor.type == "identifier":
            name = self._text(constructor)
        elif constructor.type == "member_expression":
            prop = constructor.child_by_field_name("property")
            name = self._text(prop) if prop is not None else ""
        else:
            return
        feature_id = SCRIPT_CONSTRUCTOR_FEATURES.get(name)
        if not feature_id:
            return
        if name == "IntersectionObserver" and self._has_observer_v2_options(node):
            self._add_occurrence(
                node,
                "intersection-observer-v2",
                "IntersectionObserver v2 features (trackVisibility, delay) require modern browsers",
            )
            return
        self._add_table_hit(node, feature_id, f"new {name}")

    def _check_global(self, node: Node):
        name = self._text(node)
        feature_id = SCRIPT_GLOBAL_FEATURES.get(name)
        if feature_id:
            self._add_table_hit(node, feature_id, name)

    def _check_web_api(self, node: Node, name: str, prop: str) -> bool:
        for predicate, feature_id, template in WEB_API_PATTERNS:
            if predicate(name, prop):
                self._add_occurrence(node, feature_id, template.format(name=name))
                return True
        return False

    def _add_table_hit(self, node: Node, feature_id: str, label: str):
        """Report a table match unless the catalog says it is widely supported."""
        descriptor = get_feature(feature_id)
        if descriptor is not None and descriptor.status is SupportStatus.WIDELY:
            return
        status = descriptor.status.value if descriptor else "unknown"
        self._add_occurrence(node, feature_id, f"{label} is not widely supported ({status})")

    def _has_observer_v2_options(self, node: Node) -> bool:
        arguments = node.child_by_field_name("arguments")
        if arguments is None:
            return False
        for argument in arguments.named_children:
            if argument.type != "object":
                continue
            for entry in argument.named_children:
                if entry.type == "pair":
                    key = entry.child_by_field_name("key")
                    if key is not None and self._text(key).strip("'\"") in OBSERVER_V2_OPTIONS:
                        return True
                elif entry.type == "shorthand_property_identifier":
                    if self._text(entry) in OBSERVER_V2_OPTIONS:
                        return True
        return False

    def _qualified_name(self, node: Node) -> Optional[str]:
        """Dotted name of an access path such as ``navigator.clipboard.writeText``."""
        if node is None:
            return None
        if node.type in ("identifier", "this", "property_identifier"):
            return self._text(node)
        if node.type == "member_expression":
            obj = self._qualified_name(node.child_by_field_name("object"))
            prop = node.child_by_field_name("property")
            if obj is None or prop is None or prop.type == "private_property_identifier":
                return None
            return f"{obj}.{self._text(prop)}"
        if node.type == "subscript_expression":
            obj = self._qualified_name(node.child_by_field_name("object"))
            index = node.child_by_field_name("index")
            if obj is None or index is None or index.type != "string":
                return None
            return f"{obj}.{self._text(index)[1:-1]}"
        return None
