"""
Utility functions for the baseline checker.
"""

import re
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Iterable, Optional

from .suppression import SCRIPT, STYLESHEET

SCRIPT_EXTENSIONS = (".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx", ".mts", ".cts")
STYLESHEET_EXTENSIONS = (".css", ".scss", ".less")

SCRIPT_LANGUAGE_IDS = ("javascript", "typescript", "javascriptreact", "typescriptreact")
STYLESHEET_LANGUAGE_IDS = ("css", "scss", "less")


def detect_source_kind(filename: str, language_id: Optional[str] = None) -> Optional[str]:
    """Source kind from an editor language id, else the file extension."""
    lang = (language_id or "").lower()
    if lang in SCRIPT_LANGUAGE_IDS:
        return SCRIPT
    if lang in STYLESHEET_LANGUAGE_IDS:
        return STYLESHEET
    suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    if suffix in SCRIPT_EXTENSIONS:
        return SCRIPT
    if suffix in STYLESHEET_EXTENSIONS:
        return STYLESHEET
    return None


@lru_cache(maxsize=256)
def _glob_regex(pattern: str) -> "re.Pattern[str]":
    """Translate a glob with ``**`` support into a regex."""
    out = []
    i = 0
    while i < len(pattern):
        c = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
            continue
        if pattern.startswith("**", i):
            out.append(".*")
            i += 2
            continue
        if c == "*":
            out.append("[^/]*")
        elif c == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(c))
        i += 1
    return re.compile("^" + "".join(out) + "$")


def matches_glob(path: str, pattern: str) -> bool:
    """Match a path against a glob; slash-free patterns match the basename."""
    normalized = path.replace("\\", "/")
    if "/" not in pattern:
        return bool(_glob_regex(pattern).match(PurePosixPath(normalized).name))
    return bool(_glob_regex(pattern).match(normalized))


def is_excluded(path: str, patterns: Iterable[str]) -> bool:
    return any(matches_glob(path, pattern) for pattern in patterns)
