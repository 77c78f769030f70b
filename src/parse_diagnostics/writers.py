"""Output writers for validation diagnostics.

Provides writers for exporting collected issues and outcome reports to
JSON Lines, CSV and JSON files.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, Protocol, TextIO, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from parse_diagnostics.issues import Issue
    from parse_diagnostics.runner import ParseOutcome

__all__ = ["IssueReportWriter", "IssueWriter", "JSONLinesIssueWriter", "issue_record"]


def issue_record(issue: Issue) -> dict[str, Any]:
    """Flatten an issue into a JSON-friendly dict.

    ``path``, ``code`` and ``message`` come first; kind-specific payload
    fields follow.
    """
    payload = issue.model_dump(exclude={"path", "code", "message"}, exclude_none=True)
    return {"path": list(issue.path), "code": issue.code, "message": issue.message, **payload}


@runtime_checkable
class IssueWriter(Protocol):
    """Protocol for writing issues.

    Example:
        class MyCustomWriter:
            def write_all(self, issues: Iterable[Issue]) -> int:
                count = 0
                for issue in issues:
                    self._send(issue)
                    count += 1
                return count
    """

    def write_all(self, issues: Iterable[Issue]) -> int:
        """Write all issues.

        Args:
            issues: Issues to write, typically ``outcome.issues``.

        Returns:
            Number of issues written.
        """
        ...


class JSONLinesIssueWriter:
    """Write issues to a JSON Lines file, one issue per line.

    Example:
        writer = JSONLinesIssueWriter("issues.jsonl")
        count = writer.write_all(outcome.issues)

        # Or with context manager
        with JSONLinesIssueWriter("issues.jsonl", source="batch-7") as writer:
            for issue in outcome.issues:
                writer.write_one(issue)
    """

    def __init__(
        self,
        path: str | Path,
        *,
        source: str | None = None,
        append: bool = False,
    ) -> None:
        """Initialize the JSON Lines writer.

        Args:
            path: Path to the output file.
            source: Optional identifier added to every record.
            append: Append to an existing file instead of truncating it.
        """
        self._path = Path(path)
        self._source = source
        self._mode = "a" if append else "w"
        self._file: TextIO | None = None
        self._issues_written = 0

    def __enter__(self) -> JSONLinesIssueWriter:
        """Open the file for writing."""
        self._file = open(self._path, self._mode, encoding="utf-8")
        return self

    def __exit__(self, *args: object) -> None:
        """Close the file."""
        if self._file:
            self._file.close()
            self._file = None

    @property
    def issues_written(self) -> int:
        return self._issues_written

    def write_one(self, issue: Issue) -> None:
        """Write a single issue as a JSON line.

        Args:
            issue: The issue to write.
        """
        if self._file is None:
            raise RuntimeError("Writer not opened. Use 'with' statement or call __enter__")

        record = issue_record(issue)
        if self._source:
            record["source"] = self._source

        self._file.write(json.dumps(record, default=str) + "\n")
        self._issues_written += 1

    def write_all(self, issues: Iterable[Issue]) -> int:
        """Write all issues.

        Args:
            issues: Issues to write.

        Returns:
            Number of issues written.
        """
        with self:
            for issue in issues:
                self.write_one(issue)
        return self._issues_written


class IssueReportWriter:
    """Export a validation outcome as a CSV or JSON report.

    For CSV, writes a status summary row block followed by an issues
    table. For JSON, writes an object with ``summary`` and ``issues``.

    Example:
        writer = IssueReportWriter(outcome)
        writer.write("report.json")
        writer.write("report.csv", format="csv")
    """

    def __init__(self, outcome: ParseOutcome[Any]) -> None:
        self._outcome = outcome

    def summary(self) -> dict[str, Any]:
        """Summary of the outcome: status, success and issue counts by code."""
        by_code: dict[str, int] = {}
        for issue in self._outcome.issues:
            by_code[issue.code] = by_code.get(issue.code, 0) + 1
        return {
            "status": self._outcome.status.value,
            "success": self._outcome.success,
            "issue_count": len(self._outcome.issues),
            "issues_by_code": by_code,
        }

    def write(self, path: str | Path, *, format: Literal["json", "csv"] = "json") -> None:
        """Write the report.

        Args:
            path: Output file path.
            format: "json" or "csv".

        Raises:
            ValueError: If ``format`` is not supported.
        """
        if format == "json":
            self._write_json(Path(path))
        elif format == "csv":
            self._write_csv(Path(path))
        else:
            raise ValueError(f"Unsupported report format: {format!r}")

    def _write_json(self, path: Path) -> None:
        report = {
            "summary": self.summary(),
            "issues": [issue_record(issue) for issue in self._outcome.issues],
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=2, default=str)

    def _write_csv(self, path: Path) -> None:
        summary = self.summary()
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["metric", "value"])
            writer.writerow(["status", summary["status"]])
            writer.writerow(["success", summary["success"]])
            writer.writerow(["issue_count", summary["issue_count"]])
            writer.writerow([])
            writer.writerow(["path", "code", "message"])
            for issue in self._outcome.issues:
                writer.writerow([json.dumps(list(issue.path)), issue.code, issue.message])
