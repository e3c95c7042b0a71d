"""
Diagnostics and output formatting.

Handles:
- Diagnostic dataclass and severities
- LintResult accumulator (discovery order, append-only)
- Human-readable output
- JSON output
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Optional


class Severity(Enum):
    """Diagnostic severity. There are exactly two."""
    ERROR = "error"         # File could not be parsed
    WARNING = "warning"     # Field placed in the wrong sub-object


@dataclass(frozen=True)
class Diagnostic:
    """A single finding."""
    file: str
    line: int
    column: int
    message: str
    severity: Severity
    suggestion: Optional[str] = None

    @property
    def location(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"

    def __str__(self) -> str:
        prefix = "[ERROR]" if self.severity is Severity.ERROR else "[WARNING]"
        msg = f"{prefix} {self.location}: {self.message}"
        if self.suggestion:
            msg += f"\n    -> {self.suggestion}"
        return msg

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "file": self.file,
            "line": self.line,
            "column": self.column,
            "message": self.message,
            "severity": self.severity.value,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


def parse_error(file: str, message: str) -> Diagnostic:
    """The one error diagnostic emitted for a file that cannot be parsed."""
    return Diagnostic(
        file=file,
        line=1,
        column=1,
        message=f"Parse error: {message}",
        severity=Severity.ERROR,
    )


@dataclass
class LintResult:
    """Collects diagnostics for a run, in discovery order."""

    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_checked: int = 0

    def add(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    def merge(self, other: "LintResult") -> None:
        """Append another result (e.g. one file's) after this one."""
        self.diagnostics.extend(other.diagnostics)
        self.files_checked += other.files_checked

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def success(self) -> bool:
        """True iff there are no errors. Warnings never fail a run."""
        return not self.errors

    def render_human(self) -> str:
        """Render as text: errors first, then warnings, then a summary."""
        if not self.diagnostics:
            return "No issues found!"

        lines: list[str] = []
        for d in self.errors + self.warnings:
            lines.append(str(d))
            lines.append("")

        lines.append(f"Summary: {len(self.errors)} errors, {len(self.warnings)} warnings")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "files_checked": self.files_checked,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    def render_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
