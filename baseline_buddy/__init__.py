"""
Baseline Buddy: reports script and stylesheet features that are not
baseline for the configured browser targets.
"""

from .config import ConfigError, ConfigLoader, EffectiveConfig
from .issue import Diagnostic, Severity
from .main_checker import BaselineChecker, SourceDocument, check_compatibility

__all__ = [
    'BaselineChecker',
    'ConfigError',
    'ConfigLoader',
    'Diagnostic',
    'EffectiveConfig',
    'Severity',
    'SourceDocument',
    'check_compatibility',
]
