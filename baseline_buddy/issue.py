"""
Occurrence and diagnostic data models for the baseline checker.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Severity(Enum):
    """Diagnostic severity levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class SupportStatus(Enum):
    """How widely a feature is supported across engines."""
    WIDELY = "widely"
    NEWLY = "newly"
    LIMITED = "limited"


UNKNOWN_STATUS = "unknown"

# Severity a feature gets when configuration does not override it.
STATUS_SEVERITY = {
    SupportStatus.LIMITED: Severity.ERROR,
    SupportStatus.NEWLY: Severity.WARNING,
}


def default_severity(status: Optional[SupportStatus]) -> Severity:
    return STATUS_SEVERITY.get(status, Severity.WARNING)


@dataclass(frozen=True)
class Occurrence:
    """One detected usage of a feature, as emitted by a matcher."""
    feature: str
    file: str
    line: int
    column: int
    message: str
    severity: Severity = Severity.WARNING
    status: Optional[SupportStatus] = None
    engines: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.line < 1:
            raise ValueError(f"line numbers are 1-based, got {self.line}")


@dataclass(frozen=True)
class Fix:
    """A remediation hint attached to a diagnostic."""
    type: str
    description: str
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type, "description": self.description}
        if self.url:
            data["url"] = self.url
        return data


@dataclass(frozen=True)
class Diagnostic:
    """An occurrence after configuration and baseline evaluation."""
    file: str
    line: int
    column: int
    feature: str
    message: str
    severity: Severity
    baseline: str
    browser_support: Tuple[str, ...] = ()
    fixes: Tuple[Fix, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        """Boundary record handed to reporters, editors and CI integrations."""
        data: Dict[str, Any] = {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "feature": self.feature,
            "message": self.message,
            "severity": self.severity.value,
            "baseline": self.baseline,
            "browserSupport": list(self.browser_support),
        }
        if self.fixes:
            data["fixes"] = [fix.to_dict() for fix in self.fixes]
        return data
