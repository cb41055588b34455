"""
Static feature catalog: support status and per-engine minimum versions.

The catalog is a curated registry, not an exhaustive list of platform
features. Extending coverage means adding a descriptor here and a row in
feature_tables.py.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .issue import SupportStatus

MDN = "https://developer.mozilla.org/en-US/docs"


@dataclass(frozen=True)
class FeatureDescriptor:
    """Immutable metadata for one tracked feature."""
    id: str
    name: str
    description: str
    status: SupportStatus
    since: Optional[str] = None
    engines: Mapping[str, str] = field(default_factory=dict)
    mdn_url: Optional[str] = None

    @property
    def since_year(self) -> Optional[int]:
        """Year the feature became newly supported, if recorded."""
        if not self.since:
            return None
        return int(self.since.split("-")[0])


def _feature(
    feature_id: str,
    name: str,
    description: str,
    status: str,
    since: Optional[str] = None,
    engines: Optional[dict] = None,
    mdn: Optional[str] = None,
) -> FeatureDescriptor:
    return FeatureDescriptor(
        id=feature_id,
        name=name,
        description=description,
        status=SupportStatus(status),
        since=since,
        engines=MappingProxyType(dict(engines or {})),
        mdn_url=f"{MDN}/{mdn}" if mdn else None,
    )


_FEATURES = [
    # Script syntax
    _feature(
        "optional-chaining", "Optional chaining (?.)",
        "The ?. operator accesses a property or calls a function, short-circuiting to undefined on null or undefined.",
        "newly", "2022-03", {"chrome": "80", "firefox": "74", "safari": "13.1"},
        "Web/JavaScript/Reference/Operators/Optional_chaining",
    ),
    _feature(
        "nullish-coalescing", "Nullish coalescing (??)",
        "The ?? operator returns its right-hand operand when the left-hand operand is null or undefined.",
        "newly", "2022-03", {"chrome": "80", "firefox": "72", "safari": "13.1"},
        "Web/JavaScript/Reference/Operators/Nullish_coalescing",
    ),
    _feature(
        "private-class-fields", "Private class members (#name)",
        "Class fields, methods and accessors whose names start with # are only reachable from inside the class body.",
        "newly", "2022-03", {"chrome": "74", "firefox": "90", "safari": "14.1"},
        "Web/JavaScript/Reference/Classes/Private_properties",
    ),
    _feature(
        "top-level-await", "Top-level await",
        "The await keyword used at the top level of a module, outside of any async function.",
        "newly", "2023-03", {"chrome": "89", "firefox": "89", "safari": "15"},
        "Web/JavaScript/Reference/Operators/await",
    ),
    _feature(
        "dynamic-import", "Dynamic import()",
        "The import() call loads an ECMAScript module asynchronously at runtime.",
        "newly", "2022-03", {"chrome": "63", "edge": "79", "firefox": "67", "safari": "11.1"},
        "Web/JavaScript/Reference/Operators/import",
    ),
    _feature(
        "array-flat", "Array.prototype.flat()",
        "The flat() method creates a new array with all sub-array elements concatenated into it recursively up to the specified depth.",
        "newly", "2022-03", {"chrome": "69", "firefox": "62", "safari": "12"},
        "Web/JavaScript/Reference/Global_Objects/Array/flat",
    ),
    _feature(
        "array-flatmap", "Array.prototype.flatMap()",
        "The flatMap() method returns a new array formed by applying a given callback function to each element of the array.",
        "newly", "2022-03", {"chrome": "69", "firefox": "62", "safari": "12"},
        "Web/JavaScript/Reference/Global_Objects/Array/flatMap",
    ),
    _feature(
        "array-at", "Array.prototype.at()",
        "The at() method takes an integer value and returns the item at that index, allowing for positive and negative integers.",
        "newly", "2022-03", {"chrome": "92", "firefox": "90", "safari": "15.4"},
        "Web/JavaScript/Reference/Global_Objects/Array/at",
    ),
    _feature(
        "object-fromentries", "Object.fromEntries()",
        "The Object.fromEntries() method transforms a list of key-value pairs into an object.",
        "newly", "2022-03", {"chrome": "73", "firefox": "63", "safari": "12.1"},
        "Web/JavaScript/Reference/Global_Objects/Object/fromEntries",
    ),
    _feature(
        "string-matchall", "String.prototype.matchAll()",
        "The matchAll() method returns an iterator of all results matching a string against a regular expression.",
        "newly", "2022-03", {"chrome": "73", "firefox": "67", "safari": "13"},
        "Web/JavaScript/Reference/Global_Objects/String/matchAll",
    ),
    _feature(
        "bigint", "BigInt",
        "BigInt is a built-in object that provides a way to represent whole numbers larger than 2^53 - 1.",
        "newly", "2022-03", {"chrome": "67", "firefox": "68", "safari": "14"},
        "Web/JavaScript/Reference/Global_Objects/BigInt",
    ),
    _feature(
        "globalthis", "globalThis",
        "The globalThis global property contains the global this value, which is akin to the global object.",
        "newly", "2022-03", {"chrome": "71", "firefox": "65", "safari": "12.1"},
        "Web/JavaScript/Reference/Global_Objects/globalThis",
    ),
    # Web APIs
    _feature(
        "clipboard-api", "Clipboard API",
        "The Clipboard API provides the ability to respond to clipboard commands as well as to asynchronously read from and write to the system clipboard.",
        "limited", None, {"chrome": "76", "firefox": "127", "safari": "13.1"},
        "Web/API/Clipboard_API",
    ),
    _feature(
        "file-system-access", "File System Access API",
        "The File System Access API allows web apps to read or save changes directly to files and folders on the user's device.",
        "limited", None, {"chrome": "86", "edge": "86"},
        "Web/API/File_System_API",
    ),
    _feature(
        "view-transitions", "View Transitions API",
        "The View Transitions API provides a mechanism for easily creating animated transitions between different DOM states.",
        "limited", None, {"chrome": "111"},
        "Web/API/View_Transition_API",
    ),
    _feature(
        "web-share", "Web Share API",
        "The Web Share API shares text, links, files and other content to a destination of the user's choice.",
        "limited", None, {"chrome": "89", "safari": "14"},
        "Web/API/Web_Share_API",
    ),
    _feature(
        "web-locks", "Web Locks API",
        "The Web Locks API lets scripts in one tab or worker asynchronously acquire a lock, hold it while work is performed, then release it.",
        "limited",
        mdn="Web/API/Web_Locks_API",
    ),
    _feature(
        "dialog-element", "HTML Dialog Element",
        "The HTML <dialog> element represents a dialog box or other interactive component.",
        "newly", "2022-03", {"chrome": "37", "firefox": "98", "safari": "15.4"},
        "Web/HTML/Element/dialog",
    ),
    _feature(
        "css-typed-om", "CSS Typed Object Model",
        "The CSS Typed OM exposes CSS values as typed JavaScript objects through attributeStyleMap and computedStyleMap().",
        "limited", None, {"chrome": "66", "edge": "79", "safari": "16.4"},
        "Web/API/CSS_Typed_OM_API",
    ),
    _feature(
        "intersection-observer", "Intersection Observer API",
        "The Intersection Observer API observes changes in the intersection of a target element with an ancestor element or the viewport.",
        "newly", "2022-03", {"chrome": "51", "firefox": "55", "safari": "12.1"},
        "Web/API/Intersection_Observer_API",
    ),
    _feature(
        "intersection-observer-v2", "Intersection Observer v2",
        "The trackVisibility and delay options report whether a target is actually visible to the user.",
        "limited", None, {"chrome": "74", "edge": "79"},
    ),
    _feature(
        "resize-observer", "Resize Observer API",
        "The Resize Observer API provides a performant mechanism by which code can monitor an element for changes to its size.",
        "newly", "2023-03", {"chrome": "64", "firefox": "69", "safari": "13.1"},
        "Web/API/Resize_Observer_API",
    ),
    _feature(
        "broadcast-channel", "Broadcast Channel API",
        "The Broadcast Channel API allows basic communication between browsing contexts on the same origin.",
        "newly", "2022-03", {"chrome": "54", "firefox": "38", "safari": "15.4"},
        "Web/API/Broadcast_Channel_API",
    ),
    _feature(
        "fetch", "Fetch API", "Fetch API for network requests.", "widely", "2017-03",
        mdn="Web/API/Fetch_API",
    ),
    _feature("promises", "Promises", "JavaScript Promises.", "widely", "2016-03"),
    _feature("arrow-functions", "Arrow functions", "ES6 arrow functions.", "widely", "2016-03"),
    _feature("let-const", "let and const", "ES6 let and const declarations.", "widely", "2016-03"),
    _feature("template-literals", "Template literals", "ES6 template literals.", "widely", "2016-03"),
    _feature(
        "details-element", "HTML Details Element",
        "HTML <details> and <summary> elements.", "widely", "2020-03",
    ),
    # Stylesheets
    _feature(
        "css-has-selector", ":has() CSS selector",
        "The :has() pseudo-class represents an element if any of the relative selectors match when anchored against it.",
        "newly", "2023-12", {"chrome": "105", "firefox": "121", "safari": "15.4"},
        "Web/CSS/:has",
    ),
    _feature(
        "css-focus-visible", ":focus-visible CSS selector",
        "The :focus-visible pseudo-class applies while an element is focused and the user agent decides focus should be made evident.",
        "newly", "2023-03", {"chrome": "86", "firefox": "85", "safari": "15.4"},
        "Web/CSS/:focus-visible",
    ),
    _feature(
        "css-focus-within", ":focus-within CSS selector",
        "The :focus-within pseudo-class matches an element if it or any of its descendants has focus.",
        "newly", "2022-03", mdn="Web/CSS/:focus-within",
    ),
    _feature(
        "css-is-selector", ":is() CSS selector",
        "The :is() pseudo-class takes a selector list and selects any element that can be selected by one of them.",
        "newly", "2023-03", mdn="Web/CSS/:is",
    ),
    _feature(
        "css-where-selector", ":where() CSS selector",
        "The :where() pseudo-class works like :is() but always has zero specificity.",
        "newly", "2023-03", mdn="Web/CSS/:where",
    ),
    _feature(
        "css-container-queries", "CSS Container Queries",
        "Container queries apply styles to an element based on the size of the element's container.",
        "newly", "2023-02", {"chrome": "105", "firefox": "110", "safari": "16"},
        "Web/CSS/CSS_containment/Container_queries",
    ),
    _feature(
        "css-cascade-layers", "CSS Cascade Layers (@layer)",
        "The @layer at-rule declares a cascade layer and defines the order of precedence between layers.",
        "limited", mdn="Web/CSS/@layer",
    ),
    _feature(
        "css-subgrid", "CSS subgrid",
        "The subgrid value lets a nested grid use the tracks defined on its parent grid.",
        "limited", None, {"firefox": "71"},
        "Web/CSS/CSS_grid_layout/Subgrid",
    ),
    _feature(
        "css-masonry", "CSS masonry layout",
        "The masonry value for grid-template-rows or grid-template-columns creates a masonry layout.",
        "limited",
    ),
    _feature(
        "css-color-mix", "CSS color-mix() Function",
        "The color-mix() functional notation takes two color values and returns the result of mixing them in a given colorspace.",
        "limited", None, {"chrome": "111", "firefox": "113", "safari": "16.2"},
        "Web/CSS/color_value/color-mix",
    ),
    _feature(
        "css-oklch-color", "OKLCH Color Syntax",
        "The oklch() functional notation expresses a given color in the OKLCH color space.",
        "limited", None, {"chrome": "111", "firefox": "113", "safari": "15.4"},
        "Web/CSS/color_value/oklch",
    ),
    _feature(
        "css-oklab-color", "OKLab Color Syntax",
        "The oklab() functional notation expresses a given color in the OKLab color space.",
        "limited", mdn="Web/CSS/color_value/oklab",
    ),
    _feature(
        "css-hwb-color", "HWB Color Syntax",
        "The hwb() functional notation expresses a color by hue, whiteness and blackness.",
        "newly", "2022-03", mdn="Web/CSS/color_value/hwb",
    ),
    _feature(
        "css-relative-colors", "CSS relative color syntax",
        "Relative color syntax derives a new color from an existing one.",
        "limited",
    ),
    _feature(
        "css-aspect-ratio", "CSS aspect-ratio Property",
        "The aspect-ratio property sets a preferred aspect ratio for the box.",
        "newly", "2022-03", mdn="Web/CSS/aspect-ratio",
    ),
    _feature(
        "css-gap", "CSS gap Property for flexbox",
        "The gap property sets the gaps between rows and columns in flex, grid and multi-column layouts.",
        "newly", "2022-03", mdn="Web/CSS/gap",
    ),
    _feature(
        "css-inset", "CSS inset Property",
        "The inset shorthand sets top, right, bottom and left in one declaration.",
        "newly", "2022-03", mdn="Web/CSS/inset",
    ),
    _feature(
        "css-scroll-snap", "CSS Scroll Snap",
        "Scroll snapping locks the viewport to certain elements after a scroll operation.",
        "widely", "2020-03", mdn="Web/CSS/scroll-snap-type",
    ),
    _feature(
        "css-overscroll-behavior", "CSS overscroll-behavior Property",
        "The overscroll-behavior property sets what a browser does when reaching the boundary of a scrolling area.",
        "newly", "2022-09", mdn="Web/CSS/overscroll-behavior",
    ),
    _feature(
        "css-color-scheme", "CSS color-scheme Property",
        "The color-scheme property lets an element indicate which color schemes it can comfortably be rendered in.",
        "newly", "2022-03", mdn="Web/CSS/color-scheme",
    ),
    _feature(
        "css-accent-color", "CSS accent-color Property",
        "The accent-color property sets the accent color for user-interface controls generated by some elements.",
        "newly", "2022-03", {"chrome": "93", "firefox": "92", "safari": "15.4"},
        "Web/CSS/accent-color",
    ),
    _feature(
        "css-backdrop-filter", "CSS backdrop-filter Property",
        "The backdrop-filter property applies graphical effects such as blurring to the area behind an element.",
        "newly", "2022-03", {"chrome": "76", "firefox": "103", "safari": "9"},
        "Web/CSS/backdrop-filter",
    ),
    _feature(
        "css-scroll-behavior", "CSS scroll-behavior Property",
        "The scroll-behavior property sets the behavior for a scrolling box when scrolling is triggered by navigation or CSSOM scrolling APIs.",
        "newly", "2022-03", {"chrome": "61", "firefox": "36", "safari": "15.4"},
        "Web/CSS/scroll-behavior",
    ),
    _feature("css-grid", "CSS Grid Layout", "CSS Grid Layout.", "widely", "2020-03"),
    _feature("css-flexbox", "CSS Flexible Box Layout", "CSS Flexible Box Layout.", "widely", "2017-03"),
    _feature("css-variables", "CSS Custom Properties", "CSS Custom Properties (Variables).", "widely", "2020-03"),
]

CATALOG: Mapping[str, FeatureDescriptor] = MappingProxyType(
    {feature.id: feature for feature in _FEATURES}
)


def get_feature(feature_id: str) -> Optional[FeatureDescriptor]:
    """Look up a feature descriptor; None for ids the catalog does not track."""
    return CATALOG.get(feature_id)
