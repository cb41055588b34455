"""Shared test utilities."""

import textwrap

from baseline_buddy.config import EffectiveConfig
from baseline_buddy.main_checker import BaselineChecker, SourceDocument
from baseline_buddy.matchers import ScriptMatcher, StylesheetMatcher
from baseline_buddy.parsers import parse_script, parse_stylesheet, script_dialect


def match_script(source: str, filename: str = "input.js"):
    """Dedent, parse and run the script matcher."""
    source = textwrap.dedent(source)
    parsed = parse_script(source, filename, script_dialect(filename))
    return ScriptMatcher().match(parsed, source)


def match_stylesheet(source: str, filename: str = "input.css"):
    source = textwrap.dedent(source)
    return StylesheetMatcher().match(parse_stylesheet(source, filename), source)


def features(occurrences):
    return [o.feature for o in occurrences]


def check_source(source: str, filename: str, config: EffectiveConfig = None):
    """Run the full pipeline on one in-memory document."""
    checker = BaselineChecker(config or EffectiveConfig())
    return checker.check_units([SourceDocument(filename, textwrap.dedent(source))])
