"""
Engine release table and compatibility-query resolution.

Resolves browserslist-style queries ("chrome >= 105", "last 2 versions")
into an explicit, deduplicated list of (engine, version) pairs.
Usage-share queries ("> 1%") need market data this package does not ship
and are rejected with QueryError.
"""

import re
from typing import Dict, Iterable, List, Sequence, Tuple

EnginePair = Tuple[str, str]


class QueryError(ValueError):
    """A compatibility query that cannot be resolved."""


def _numbered(first: int, last: int) -> List[str]:
    return [str(v) for v in range(first, last + 1)]


_SAFARI_RELEASES = [
    "3.1", "3.2", "4", "5", "5.1", "6", "6.1", "7", "7.1", "8", "9", "9.1",
    "10", "10.1", "11", "11.1", "12", "12.1", "13", "13.1", "14", "14.1",
    "15", "15.1", "15.2", "15.3", "15.4", "15.5", "15.6",
    "16.0", "16.1", "16.2", "16.3", "16.4", "16.5", "16.6",
    "17.0", "17.1", "17.2", "17.3", "17.4", "17.5", "17.6",
    "18.0", "18.1", "18.2", "18.3", "18.4", "18.5",
]

# Known releases per engine, oldest first.
ENGINE_RELEASES: Dict[str, Sequence[str]] = {
    "chrome": _numbered(4, 140),
    "edge": _numbered(12, 18) + _numbered(79, 140),
    "firefox": _numbered(2, 140),
    "safari": _SAFARI_RELEASES,
    "ios_saf": _SAFARI_RELEASES[1:],
    "and_chr": ["140"],
    "and_ff": ["140"],
}

ENGINE_ALIASES = {
    "ff": "firefox",
    "msedge": "edge",
    "ios": "ios_saf",
    "chromeandroid": "and_chr",
    "firefoxandroid": "and_ff",
}

# Mobile engines share version data with their desktop counterpart.
CATALOG_ENGINES = {
    "and_chr": "chrome",
    "and_ff": "firefox",
    "ios_saf": "safari",
}

_COMPARISON = re.compile(r"^(\w+)\s*(>=|<=|>|<)\s*(\d+(?:\.\d+)*)$")
_RANGE = re.compile(r"^(\w+)\s+(\d+(?:\.\d+)*)\s*-\s*(\d+(?:\.\d+)*)$")
_EXACT = re.compile(r"^(\w+)\s+(\d+(?:\.\d+)*)$")
_LAST_ALL = re.compile(r"^last\s+(\d+)\s+versions?$")
_LAST_ENGINE = re.compile(r"^last\s+(\d+)\s+(\w+)\s+versions?$")


def parse_version(version: str) -> Tuple[int, ...]:
    """'15.4' -> (15, 4, 0). Raises QueryError for non-numeric versions."""
    try:
        parts = [int(p) for p in str(version).strip().split(".")]
    except ValueError:
        raise QueryError(f"Invalid version: {version!r}")
    while len(parts) < 3:
        parts.append(0)
    return tuple(parts)


def compare_versions(left: str, right: str) -> int:
    """Return -1, 0 or 1 comparing two dotted versions numerically."""
    a, b = parse_version(left), parse_version(right)
    return (a > b) - (a < b)


def catalog_engine(engine: str) -> str:
    """Engine name used for catalog lookups."""
    return CATALOG_ENGINES.get(engine, engine)


def _engine(name: str) -> str:
    key = name.lower()
    key = ENGINE_ALIASES.get(key, key)
    if key not in ENGINE_RELEASES:
        raise QueryError(f"Unknown browser: {name!r}")
    return key


def _resolve_single(query: str) -> List[EnginePair]:
    text = " ".join(query.lower().split())

    if text == "defaults":
        text = "last 2 versions"

    match = _LAST_ALL.match(text)
    if match:
        count = int(match.group(1))
        return [
            (engine, version)
            for engine, releases in ENGINE_RELEASES.items()
            for version in releases[-count:]
        ]

    match = _LAST_ENGINE.match(text)
    if match:
        engine = _engine(match.group(2))
        return [(engine, v) for v in ENGINE_RELEASES[engine][-int(match.group(1)):]]

    match = _COMPARISON.match(text)
    if match:
        engine = _engine(match.group(1))
        operator, bound = match.group(2), match.group(3)
        accept = {
            ">=": lambda c: c >= 0,
            ">": lambda c: c > 0,
            "<=": lambda c: c <= 0,
            "<": lambda c: c < 0,
        }[operator]
        return [
            (engine, v) for v in ENGINE_RELEASES[engine]
            if accept(compare_versions(v, bound))
        ]

    match = _RANGE.match(text)
    if match:
        engine = _engine(match.group(1))
        low, high = match.group(2), match.group(3)
        return [
            (engine, v) for v in ENGINE_RELEASES[engine]
            if compare_versions(v, low) >= 0 and compare_versions(v, high) <= 0
        ]

    match = _EXACT.match(text)
    if match:
        engine = _engine(match.group(1))
        wanted = match.group(2)
        for v in ENGINE_RELEASES[engine]:
            if compare_versions(v, wanted) == 0:
                return [(engine, v)]
        raise QueryError(f"Unknown version {wanted} of {engine}")

    raise QueryError(f"Unsupported compatibility query: {query!r}")


def resolve_query(queries: Iterable[str]) -> List[EnginePair]:
    """Resolve a list of queries to deduplicated (engine, version) pairs.

    Items are unioned in order; an item may hold several comma-separated
    queries, and a "not ..." query removes matching pairs from what has
    been accumulated so far.
    """
    pairs: List[EnginePair] = []
    seen = set()
    for item in queries:
        for part in str(item).split(","):
            part = part.strip()
            if not part:
                continue
            if part.lower().startswith("not "):
                excluded = set(_resolve_single(part[4:]))
                pairs = [p for p in pairs if p not in excluded]
                seen -= excluded
                continue
            for pair in _resolve_single(part):
                if pair not in seen:
                    seen.add(pair)
                    pairs.append(pair)
    return pairs
