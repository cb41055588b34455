"""
Configuration loading, validation and caching.

Search order (first found wins): explicit path, <root>/baseline.config.json,
<root>/.baseline.json, the "baselineBuddy" key of <root>/package.json.
Without any of them the built-in defaults apply.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .issue import Severity

logger = logging.getLogger(__name__)

CONFIG_FILES = ("baseline.config.json", ".baseline.json", "package.json")
PACKAGE_JSON_KEY = "baselineBuddy"

DEFAULT_TARGET = "2024"
DEFAULT_EXCLUDE = (
    "**/node_modules/**",
    "**/dist/**",
    "**/build/**",
    "**/.git/**",
)

IGNORE = "ignore"

SeverityLevel = Literal["error", "warning", "info"]
FeatureSeverity = Literal["error", "warning", "info", "ignore"]


class ConfigError(Exception):
    """Fatal configuration problem; lists every violated field."""

    def __init__(self, path: Optional[Path], errors: List[str]):
        self.path = path
        self.errors = list(errors)
        location = str(path) if path else "configuration"
        lines = "\n".join(f"  - {e}" for e in self.errors)
        super().__init__(f"Configuration validation failed in {location}:\n{lines}")


# --- Schema ---


class BaselineSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target: Literal["2024", "2025", "custom"]
    browserslist: Optional[List[str]] = None

    @model_validator(mode="after")
    def _custom_needs_queries(self):
        if self.target == "custom" and not self.browserslist:
            raise ValueError("browserslist must be a non-empty list when target is 'custom'")
        return self


class SeveritySection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default: SeverityLevel
    features: Optional[Dict[str, FeatureSeverity]] = None


class RuleEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    severity: Optional[FeatureSeverity] = None
    message: Optional[str] = None


class ConfigFile(BaseModel):
    """User configuration as written in baseline.config.json."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_: Optional[str] = Field(default=None, alias="$schema")
    baseline: BaselineSection
    severity: SeveritySection
    include: Optional[List[str]] = None
    exclude: Optional[List[str]] = None
    rules: Optional[Dict[str, RuleEntry]] = None


# --- Effective configuration ---


@dataclass(frozen=True)
class YearTarget:
    year: str


@dataclass(frozen=True)
class CustomTarget:
    queries: Tuple[str, ...]

    def __post_init__(self):
        if not self.queries:
            raise ValueError("a custom target needs at least one compatibility query")


@dataclass(frozen=True)
class RuleOverride:
    severity: Optional[str] = None
    message: Optional[str] = None


@dataclass(frozen=True)
class EffectiveConfig:
    """Merged, validated, read-only policy for one run."""
    target: Union[YearTarget, CustomTarget] = YearTarget(DEFAULT_TARGET)
    default_severity: Optional[Severity] = None
    feature_severities: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    rules: Mapping[str, RuleOverride] = field(default_factory=lambda: MappingProxyType({}))
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = DEFAULT_EXCLUDE
    source: Optional[Path] = None

    def _override(self, feature_id: str) -> Optional[str]:
        rule = self.rules.get(feature_id)
        if rule is not None and rule.severity:
            return rule.severity
        return self.feature_severities.get(feature_id)

    def is_ignored(self, feature_id: str) -> bool:
        """An "ignore" at either override level wins over a severity at the other."""
        rule = self.rules.get(feature_id)
        if rule is not None and rule.severity == IGNORE:
            return True
        return self.feature_severities.get(feature_id) == IGNORE

    def severity_for(self, feature_id: str) -> Optional[Severity]:
        """rules entry > severity.features entry > severity.default; None if unset."""
        override = self._override(feature_id)
        if override and override != IGNORE:
            return Severity(override)
        return self.default_severity

    def message_for(self, feature_id: str) -> Optional[str]:
        rule = self.rules.get(feature_id)
        return rule.message if rule is not None and rule.message else None


def build_config(data: Dict[str, Any], source: Optional[Path] = None) -> EffectiveConfig:
    """Validate raw JSON data and merge it over the defaults."""
    try:
        parsed = ConfigFile.model_validate(data)
    except ValidationError as e:
        raise ConfigError(source, _format_errors(e))

    if parsed.baseline.target == "custom":
        target: Union[YearTarget, CustomTarget] = CustomTarget(tuple(parsed.baseline.browserslist))
    else:
        target = YearTarget(parsed.baseline.target)

    rules = {
        feature_id: RuleOverride(entry.severity, entry.message)
        for feature_id, entry in (parsed.rules or {}).items()
    }
    return EffectiveConfig(
        target=target,
        default_severity=Severity(parsed.severity.default),
        feature_severities=MappingProxyType(dict(parsed.severity.features or {})),
        rules=MappingProxyType(rules),
        include=tuple(parsed.include or ()),
        # An explicit exclude list replaces the defaults.
        exclude=tuple(parsed.exclude) if parsed.exclude is not None else DEFAULT_EXCLUDE,
        source=source,
    )


def _format_errors(error: ValidationError) -> List[str]:
    messages = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or "root"
        messages.append(f"{path}: {item['msg']}")
    return messages


class ConfigLoader:
    """Finds, loads and caches configuration by resolved path."""

    def __init__(self):
        self._cache: Dict[Optional[Path], EffectiveConfig] = {}

    def load(
        self,
        workspace_root: Optional[Union[str, Path]] = None,
        config_path: Optional[Union[str, Path]] = None,
    ) -> EffectiveConfig:
        if config_path is not None:
            path: Optional[Path] = Path(config_path).resolve()
            if not path.is_file():
                raise ConfigError(path, [f"config file not found: {config_path}"])
        else:
            path = self.find_config_file(workspace_root)

        if path in self._cache:
            return self._cache[path]

        if path is None:
            config = EffectiveConfig()
        else:
            config = build_config(self._read(path), source=path)
            logger.debug("Loaded configuration from %s", path)
        self._cache[path] = config
        return config

    def find_config_file(self, workspace_root: Optional[Union[str, Path]] = None) -> Optional[Path]:
        root = Path(workspace_root) if workspace_root else Path.cwd()
        for name in CONFIG_FILES:
            candidate = root / name
            if not candidate.is_file():
                continue
            if name == "package.json" and not self._has_package_key(candidate):
                continue
            return candidate.resolve()
        return None

    def clear_cache(self):
        self._cache.clear()

    def _read(self, path: Path) -> Dict[str, Any]:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(path, [f"could not read config file: {e}"])
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(path, [f"invalid JSON syntax: {e}"])
        if path.name == "package.json":
            data = data.get(PACKAGE_JSON_KEY, {}) if isinstance(data, dict) else {}
        if not isinstance(data, dict):
            raise ConfigError(path, ["root: configuration must be a JSON object"])
        return data

    def _has_package_key(self, path: Path) -> bool:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Skipping unreadable %s: %s", path, e)
            return False
        return isinstance(data, dict) and PACKAGE_JSON_KEY in data
