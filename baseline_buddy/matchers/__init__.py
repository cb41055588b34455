"""
Matchers package: one feature matcher per source kind.
"""

from .script_matcher import ScriptMatcher
from .stylesheet_matcher import StylesheetMatcher

__all__ = [
    'ScriptMatcher',
    'StylesheetMatcher',
]
