"""Pydantic request/response models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


# --- Request ---


class DocumentIn(BaseModel):
    """In-memory source text to check."""

    filename: str = Field(..., description="Identifier used for reporting and kind detection")
    content: str = Field(..., description="Source text")
    language_id: Optional[str] = Field(
        default=None,
        alias="languageId",
        description="Editor language id: javascript, typescript, css, scss, ...",
    )

    model_config = {"populate_by_name": True}


class CheckRequest(BaseModel):
    """Either in-memory documents or file paths, plus optional config location."""

    documents: Optional[List[DocumentIn]] = None
    file_paths: Optional[List[str]] = Field(default=None, alias="filePaths")
    config_path: Optional[str] = Field(default=None, alias="configPath")
    workspace_root: Optional[str] = Field(default=None, alias="workspaceRoot")

    model_config = {"populate_by_name": True}


# --- Diagnostic (response) ---


class FixOut(BaseModel):
    """Remediation hint."""

    type: str
    description: str
    url: Optional[str] = None


class DiagnosticOut(BaseModel):
    """Single non-baseline feature usage."""

    file: str
    line: int
    column: int
    feature: str
    message: str
    severity: str = Field(..., description="error, warning, or info")
    baseline: str = Field(..., description="limited, newly, or unknown")
    browser_support: List[str] = Field(default_factory=list, alias="browserSupport")
    fixes: Optional[List[FixOut]] = None

    model_config = {"populate_by_name": True}


# --- Responses ---


class CheckResponse(BaseModel):
    """Response for POST /check."""

    diagnostics: List[DiagnosticOut] = Field(default_factory=list)
    summary: Dict[str, int] = Field(default_factory=dict)
