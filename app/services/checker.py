"""Checker service: wraps baseline_buddy and maps to API models."""

from deps import Counter, List, Optional, Union

from baseline_buddy.config import ConfigLoader
from baseline_buddy.issue import Diagnostic, Severity
from baseline_buddy.main_checker import SourceDocument, check_compatibility

from ..config import get_default_config_path, get_workspace_root
from ..schemas import CheckRequest, CheckResponse, DiagnosticOut


def _diagnostic_to_out(d: Diagnostic) -> DiagnosticOut:
    return DiagnosticOut.model_validate(d.to_dict())


def summarize(diagnostics: List[Diagnostic]) -> dict:
    """Count diagnostics per severity (every severity present, possibly 0)."""
    counts = Counter(d.severity.value for d in diagnostics)
    return {s.value: counts.get(s.value, 0) for s in Severity}


class CheckerService:
    """Owns the configuration cache shared by all requests."""

    def __init__(self):
        self.loader = ConfigLoader()

    def check(self, req: CheckRequest) -> CheckResponse:
        """Run the checker. Raises ValueError when no input is given, ConfigError on bad config."""
        inputs: List[Union[str, SourceDocument]]
        if req.documents is not None:
            inputs = [
                SourceDocument(doc.filename, doc.content, doc.language_id)
                for doc in req.documents
            ]
        elif req.file_paths is not None:
            inputs = list(req.file_paths)
        else:
            raise ValueError("Provide either documents or filePaths.")

        config_path: Optional[str] = req.config_path or get_default_config_path() or None
        workspace_root: Optional[str] = req.workspace_root or get_workspace_root() or None
        diagnostics = check_compatibility(
            inputs,
            config_path=config_path,
            workspace_root=workspace_root,
            loader=self.loader,
        )
        return CheckResponse(
            diagnostics=[_diagnostic_to_out(d) for d in diagnostics],
            summary=summarize(diagnostics),
        )

    def clear_cache(self) -> None:
        self.loader.clear_cache()
