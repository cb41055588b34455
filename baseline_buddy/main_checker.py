"""
Main checker that coordinates parsing, matching and baseline evaluation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

from .baseline import BaselineEvaluator
from .catalog import get_feature
from .config import ConfigLoader, EffectiveConfig
from .issue import Diagnostic, Fix, Occurrence
from .matchers import ScriptMatcher, StylesheetMatcher
from .parsers import parse_script, parse_stylesheet, script_dialect
from .suppression import SCRIPT, STYLESHEET
from .utils import detect_source_kind, is_excluded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """In-memory source text, e.g. an unsaved editor buffer."""
    filename: str
    content: str
    language_id: Optional[str] = None


Unit = Union[str, Path, SourceDocument, Mapping[str, Any]]


def _as_unit(item: Unit) -> Union[Path, SourceDocument]:
    if isinstance(item, (SourceDocument, Path)):
        return item
    if isinstance(item, str):
        return Path(item)
    return SourceDocument(
        filename=item["filename"],
        content=item["content"],
        language_id=item.get("languageId") or item.get("language_id"),
    )


class BaselineChecker:
    """Runs every unit through parser, matcher, configuration and evaluator."""

    def __init__(self, config: Optional[EffectiveConfig] = None):
        self.config = config or EffectiveConfig()
        self.evaluator = BaselineEvaluator(self.config.target)

    def find_occurrences(
        self, content: str, filename: str, language_id: Optional[str] = None
    ) -> List[Occurrence]:
        """Raw matcher output for one unit; unknown source kinds match nothing."""
        kind = detect_source_kind(filename, language_id)
        if kind == SCRIPT:
            parsed = parse_script(content, filename, script_dialect(filename, language_id))
            return ScriptMatcher().match(parsed, content)
        if kind == STYLESHEET:
            parsed = parse_stylesheet(content, filename)
            return StylesheetMatcher().match(parsed, content)
        return []

    def apply(self, occurrences: Iterable[Occurrence]) -> List[Diagnostic]:
        """Drop ignored and baseline occurrences; annotate the rest."""
        diagnostics = []
        for occurrence in occurrences:
            if self.config.is_ignored(occurrence.feature):
                continue
            evaluation = self.evaluator.evaluate(occurrence.feature)
            if evaluation.is_baseline:
                continue
            severity = self.config.severity_for(occurrence.feature) or occurrence.severity
            message = self.config.message_for(occurrence.feature) or occurrence.message
            descriptor = get_feature(occurrence.feature)
            fixes = ()
            if descriptor is not None and descriptor.mdn_url:
                fixes = (Fix("documentation", "Learn more on MDN", descriptor.mdn_url),)
            diagnostics.append(
                Diagnostic(
                    file=occurrence.file,
                    line=occurrence.line,
                    column=occurrence.column,
                    feature=occurrence.feature,
                    message=f"{message} - {evaluation.status_message}",
                    severity=severity,
                    baseline=evaluation.status,
                    browser_support=occurrence.engines,
                    fixes=fixes,
                )
            )
        return diagnostics

    def check_document(self, document: SourceDocument) -> List[Diagnostic]:
        try:
            occurrences = self.find_occurrences(
                document.content, document.filename, document.language_id
            )
            diagnostics = self.apply(occurrences)
        except Exception as e:
            logger.warning("Failed to check %s: %s", document.filename, e)
            return []
        logger.debug("%s: %d diagnostic(s)", document.filename, len(diagnostics))
        return diagnostics

    def check_file(self, file_path: Path) -> List[Diagnostic]:
        if detect_source_kind(str(file_path)) is None:
            return []
        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", file_path, e)
            return []
        return self.check_document(SourceDocument(str(file_path), content))

    def check_unit(self, unit: Unit) -> List[Diagnostic]:
        try:
            unit = _as_unit(unit)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping malformed input %r: %s", unit, e)
            return []
        if isinstance(unit, Path):
            return self.check_file(unit)
        return self.check_document(unit)

    def iter_units(self, units: Iterable[Unit]) -> Iterator[List[Diagnostic]]:
        """Yield each unit's diagnostics in input order; stop anytime."""
        for unit in self._included(units):
            yield self.check_unit(unit)

    def check_units(
        self, units: Iterable[Unit], max_workers: Optional[int] = None
    ) -> List[Diagnostic]:
        results: List[Diagnostic] = []
        if max_workers and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                for diagnostics in pool.map(self.check_unit, list(self._included(units))):
                    results.extend(diagnostics)
            return results
        for diagnostics in self.iter_units(units):
            results.extend(diagnostics)
        return results

    def _included(self, units: Iterable[Unit]) -> Iterator[Unit]:
        """File paths matching an exclude pattern are skipped; documents never are."""
        for unit in units:
            if isinstance(unit, (str, Path)) and is_excluded(str(unit), self.config.exclude):
                logger.debug("Excluded %s", unit)
                continue
            yield unit


def check_compatibility(
    inputs: Sequence[Unit],
    config_path: Optional[Union[str, Path]] = None,
    workspace_root: Optional[Union[str, Path]] = None,
    loader: Optional[ConfigLoader] = None,
    max_workers: Optional[int] = None,
) -> List[Diagnostic]:
    """Check file paths or in-memory documents and return the diagnostics.

    Only ConfigError escapes, and only before any unit is processed.
    """
    loader = loader or ConfigLoader()
    config = loader.load(workspace_root=workspace_root, config_path=config_path)
    return BaselineChecker(config).check_units(inputs, max_workers=max_workers)
