# stylish_mapped/utils/metadata.py

"""
Data model shared by the resolver and the formatter.

  - Diagnostic: one lint finding as reported by an ESLint-style engine
      (message, severity, 1-based line/column that may be absent, rule id)
  - LintResult: the diagnostics reported for one file
  - Position: a (source, line, column) triple, before or after remapping
  - ReportSummary: running totals and the summary emphasis of a report
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from stylish_mapped.utils.settings import SEVERITY_ERROR, SEVERITY_WARNING


@dataclass(frozen=True)
class Diagnostic:
    message: str
    severity: int = SEVERITY_WARNING
    line: Optional[int] = None
    column: Optional[int] = None
    rule_id: Optional[str] = None
    fatal: bool = False

    @property
    def is_error(self) -> bool:
        return self.fatal or self.severity == SEVERITY_ERROR

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Diagnostic":
        """
        Build a Diagnostic from an ESLint JSON message object. `message` is
        required; a message object without it raises KeyError.
        """
        return cls(
            message=str(raw["message"]),
            severity=int(raw.get("severity") or 0),
            line=raw.get("line"),
            column=raw.get("column"),
            rule_id=raw.get("ruleId", raw.get("rule_id")),
            fatal=bool(raw.get("fatal", False)),
        )


@dataclass(frozen=True)
class LintResult:
    file_path: str
    messages: Tuple[Diagnostic, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "LintResult":
        file_path = raw.get("filePath", raw.get("file_path"))
        if file_path is None:
            raise KeyError("filePath")
        messages = tuple(
            m if isinstance(m, Diagnostic) else Diagnostic.from_dict(m)
            for m in raw.get("messages") or []
        )
        return cls(file_path=str(file_path), messages=messages)


@dataclass(frozen=True)
class Position:
    source: str
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass
class ReportSummary:
    total: int = 0
    errors: int = 0
    warnings: int = 0
    emphasis: str = "warning"

    def add(self, diagnostic: Diagnostic) -> None:
        self.total += 1
        if diagnostic.is_error:
            self.errors += 1
            self.emphasis = "error"
        else:
            self.warnings += 1
