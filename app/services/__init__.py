"""Services wrapping the baseline checker."""

from .checker import CheckerService

__all__ = ["CheckerService"]
