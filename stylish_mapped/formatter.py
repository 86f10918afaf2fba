# stylish_mapped/formatter.py

"""
StylishFormatter renders lint results as the familiar "stylish" terminal
report: one underlined block per file with an aligned table of diagnostics,
followed by a one-line problem count.

Before grouping, every diagnostic position is passed through the
PositionResolver, so findings in generated code are reported against the
original sources named by their source maps.
"""

import dataclasses
import os
import re
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Union

from stylish_mapped.resolver import PositionResolver
from stylish_mapped.style import Styler
from stylish_mapped.text_table import render_table
from stylish_mapped.utils.logger import get_logger
from stylish_mapped.utils.metadata import Diagnostic, LintResult, Position, ReportSummary
from stylish_mapped.utils.settings import SUMMARY_GLYPH

LOG = get_logger(__name__)

ResultLike = Union[LintResult, Dict[str, Any]]

_POSITION_RE = re.compile(r"(\d+)\s+(\d+)")
_TABLE_ALIGN = ("", "r", "l")


def pluralize(word: str, count: int) -> str:
    """Return `word` with an "s" appended unless `count` is exactly one."""
    return word if count == 1 else word + "s"


def _coerce(results: Iterable[ResultLike]) -> List[LintResult]:
    return [r if isinstance(r, LintResult) else LintResult.from_dict(r) for r in results]


def _strip_period(message: str) -> str:
    return message[:-1] if message.endswith(".") else message


class StylishFormatter:
    """
    :param resolver: PositionResolver used to remap positions; one with a
        fresh cache is created if omitted
    :param styler: Styler for colors; defaults to an enabled Styler
    :param cwd: directory file paths are displayed relative to
    :param source_maps: when False positions are reported as given
    """

    def __init__(
        self,
        resolver: PositionResolver = None,
        styler: Styler = None,
        cwd: str = None,
        source_maps: bool = True,
    ):
        self.resolver = resolver or PositionResolver()
        self.styler = styler or Styler()
        self.cwd = cwd
        self.source_maps = source_maps

    @classmethod
    def from_config(cls, config, stream=None) -> "StylishFormatter":
        return cls(
            styler=Styler.for_stream(stream, config.color),
            cwd=config.cwd,
            source_maps=config.source_maps,
        )

    def _remap(self, file_path: str, diagnostic: Diagnostic) -> Position:
        position = Position(
            source=os.path.abspath(file_path),
            line=diagnostic.line,
            column=diagnostic.column,
        )
        if not self.source_maps:
            return position
        return self.resolver.resolve(position)

    def group_by_source(self, results: Iterable[ResultLike]) -> Dict[str, List[Diagnostic]]:
        """
        Remap every diagnostic and group the copies by resolved source path.
        Input diagnostics are left untouched.
        """
        grouped: Dict[str, List[Diagnostic]] = OrderedDict()
        for result in _coerce(results):
            for diagnostic in result.messages:
                position = self._remap(result.file_path, diagnostic)
                grouped.setdefault(position.source, []).append(
                    dataclasses.replace(diagnostic, line=position.line, column=position.column)
                )
        LOG.debug("Grouped diagnostics into %d file(s)", len(grouped))
        return grouped

    def _display_path(self, file_path: str) -> str:
        try:
            return os.path.relpath(file_path, self.cwd or os.getcwd())
        except ValueError:
            # Different drive on Windows
            return file_path

    def _render_rows(self, diagnostics: List[Diagnostic], summary: ReportSummary) -> str:
        rows = []
        for diagnostic in diagnostics:
            summary.add(diagnostic)
            if diagnostic.is_error:
                label = self.styler.error("error")
            else:
                label = self.styler.warning("warning")
            rows.append([
                "",
                diagnostic.line or 0,
                diagnostic.column or 0,
                label,
                _strip_period(diagnostic.message),
                self.styler.dim(diagnostic.rule_id or ""),
            ])

        table = render_table(rows, align=_TABLE_ALIGN, string_length=self.styler.visible_length)
        return "\n".join(
            _POSITION_RE.sub(
                lambda m: self.styler.dim(f"{m.group(1)}:{m.group(2)}"), line, count=1
            )
            for line in table.split("\n")
        )

    def _render_summary(self, summary: ReportSummary) -> str:
        text = (
            f"{SUMMARY_GLYPH} {summary.total} {pluralize('problem', summary.total)}"
            f" ({summary.errors} {pluralize('error', summary.errors)},"
            f" {summary.warnings} {pluralize('warning', summary.warnings)})\n"
        )
        return self.styler.emphasize(text, summary.emphasis)

    def summarize(self, results: Iterable[ResultLike]) -> ReportSummary:
        """Count problems the way `format` does, without rendering."""
        summary = ReportSummary()
        for diagnostics in self.group_by_source(results).values():
            for diagnostic in diagnostics:
                summary.add(diagnostic)
        return summary

    def format(self, results: Iterable[ResultLike]) -> str:
        """
        Return the stylish report for `results`, or "" when there is
        nothing to report.
        """
        grouped = self.group_by_source(results)
        summary = ReportSummary()
        output = "\n"

        for file_path in sorted(grouped):
            diagnostics = grouped[file_path]
            if not diagnostics:
                continue
            output += self.styler.underline(self._display_path(file_path)) + "\n"
            output += self._render_rows(diagnostics, summary) + "\n\n"

        if summary.total == 0:
            return ""
        return output + self._render_summary(summary)


def format_results(results: Iterable[ResultLike], **options) -> str:
    """Format `results` with a one-off StylishFormatter built from `options`."""
    return StylishFormatter(**options).format(results)


def summarize(results: Iterable[ResultLike], **options) -> ReportSummary:
    return StylishFormatter(**options).summarize(results)
