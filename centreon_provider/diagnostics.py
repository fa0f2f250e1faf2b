"""User-facing diagnostics, the unit in which problems are reported."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class Diagnostic(BaseModel):
    """A problem report, optionally attributed to a single attribute."""

    severity: Severity = Field(Severity.ERROR, description="Error or warning")
    summary: str = Field(description="Short summary")
    detail: str = Field("", description="Detailed explanation")
    attribute: Optional[str] = Field(None, description="Attribute the diagnostic refers to")

    @classmethod
    def error(cls, summary: str, detail: str = "", attribute: Optional[str] = None) -> "Diagnostic":
        return cls(severity=Severity.ERROR, summary=summary, detail=detail, attribute=attribute)

    @classmethod
    def warning(cls, summary: str, detail: str = "", attribute: Optional[str] = None) -> "Diagnostic":
        return cls(severity=Severity.WARNING, summary=summary, detail=detail, attribute=attribute)

    def __str__(self):
        prefix = f"{self.attribute}: " if self.attribute else ""
        return f"{prefix}{self.summary}" + (f" - {self.detail}" if self.detail else "")


def has_errors(diagnostics: List[Diagnostic]) -> bool:
    return any(d.severity is Severity.ERROR for d in diagnostics)
