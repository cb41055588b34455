"""
Signature tables mapping raw syntax to feature ids.

Matchers only look things up here; they never hardcode catalog details.
"""

# Qualified member/call names (object chain + property).
SCRIPT_API_FEATURES = {
    # Clipboard API
    "navigator.clipboard.write": "clipboard-api",
    "navigator.clipboard.writeText": "clipboard-api",
    "navigator.clipboard.read": "clipboard-api",
    "navigator.clipboard.readText": "clipboard-api",
    # File System Access API
    "window.showOpenFilePicker": "file-system-access",
    "window.showSaveFilePicker": "file-system-access",
    "window.showDirectoryPicker": "file-system-access",
    # Modern web APIs
    "document.startViewTransition": "view-transitions",
    "navigator.share": "web-share",
    "navigator.locks.request": "web-locks",
    "dialog.showModal": "dialog-element",
    # Built-ins
    "Array.prototype.flat": "array-flat",
    "Array.prototype.flatMap": "array-flatmap",
    "Array.prototype.at": "array-at",
    "Object.fromEntries": "object-fromentries",
    "String.prototype.matchAll": "string-matchall",
    # Global functions
    "BigInt": "bigint",
    "fetch": "fetch",
}

# Trailing method names, used when the qualified name is not in the table.
SCRIPT_METHOD_FEATURES = {
    "flat": "array-flat",
    "flatMap": "array-flatmap",
    "at": "array-at",
    "fromEntries": "object-fromentries",
    "matchAll": "string-matchall",
}

SCRIPT_CONSTRUCTOR_FEATURES = {
    "IntersectionObserver": "intersection-observer",
    "ResizeObserver": "resize-observer",
    "BroadcastChannel": "broadcast-channel",
}

SCRIPT_GLOBAL_FEATURES = {
    "globalThis": "globalthis",
}

# Options that turn an IntersectionObserver into the v2 API.
OBSERVER_V2_OPTIONS = frozenset({"trackVisibility", "delay"})

STYLESHEET_AT_RULE_FEATURES = {
    "layer": ("css-cascade-layers", "@layer cascade layers are not widely supported"),
    "container": ("css-container-queries", "@container queries are not widely supported"),
}

STYLESHEET_SELECTOR_FEATURES = (
    (":has(", "css-has-selector", ":has() selector is not widely supported"),
    (":is(", "css-is-selector", ":is() selector is not widely supported"),
    (":where(", "css-where-selector", ":where() selector is not widely supported"),
    (":focus-visible", "css-focus-visible", ":focus-visible selector is not widely supported"),
    (":focus-within", "css-focus-within", ":focus-within selector is not widely supported"),
)

STYLESHEET_PROPERTY_FEATURES = {
    "container-type": ("css-container-queries", "Container query property '{prop}' is not widely supported"),
    "container-name": ("css-container-queries", "Container query property '{prop}' is not widely supported"),
    "container": ("css-container-queries", "Container query property '{prop}' is not widely supported"),
    "translate": ("css-individual-transform-properties", "Individual transform property '{prop}' is not widely supported"),
    "rotate": ("css-individual-transform-properties", "Individual transform property '{prop}' is not widely supported"),
    "scale": ("css-individual-transform-properties", "Individual transform property '{prop}' is not widely supported"),
}

# Substrings of a declaration value.
STYLESHEET_VALUE_FEATURES = (
    ("subgrid", "css-subgrid", "subgrid is not widely supported"),
    ("color-mix(", "css-color-mix", "color-mix() function is not widely supported"),
)

# Generic "property:<name>" / "value:<value>" lookups for declarations no
# direct rule matched.
STYLESHEET_FALLBACK_FEATURES = {
    "property:container-type": "css-container-queries",
    "property:container-name": "css-container-queries",
    "property:container": "css-container-queries",
    "property:aspect-ratio": "css-aspect-ratio",
    "property:gap": "css-gap",
    "property:inset": "css-inset",
    "property:scroll-behavior": "css-scroll-behavior",
    "property:scroll-snap-type": "css-scroll-snap",
    "property:overscroll-behavior": "css-overscroll-behavior",
    "property:color-scheme": "css-color-scheme",
    "property:accent-color": "css-accent-color",
    "property:backdrop-filter": "css-backdrop-filter",
    "value:subgrid": "css-subgrid",
    "value:masonry": "css-masonry",
}

STYLESHEET_FALLBACK_VALUE_TOKENS = (
    ("oklch(", "css-oklch-color"),
    ("oklab(", "css-oklab-color"),
    ("hwb(", "css-hwb-color"),
    ("color-mix(", "css-color-mix"),
)
