"""HTML report for a birdcheck run."""

import html
from pathlib import Path
from typing import Iterable, Optional

from .models import DiagnosticRecord
from .recorder import ResultsStore

REPORT_FILE = "report.html"

REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Bird recognition report</title>
<style>
  body {{ font-family: -apple-system, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; margin: 24px; color: #24292e; }}
  h1 {{ border-bottom: 2px solid #eaeaea; padding-bottom: 8px; }}
  table {{ border-collapse: collapse; width: 100%; }}
  th, td {{ border: 1px solid #d0d7de; padding: 6px 10px; text-align: left; vertical-align: top; }}
  th {{ background: #f6f8fa; }}
  .pass {{ color: #1a7f37; font-weight: bold; }}
  .fail {{ color: #cf222e; font-weight: bold; }}
  .thumb {{ max-width: 160px; max-height: 120px; border: 1px solid #ccc; }}
</style>
</head>
<body>
<h1>Bird recognition report</h1>
<p>{passed} passed, {failed} failed, {total} total</p>
<table>
<thead>
<tr><th>File</th><th>Expected</th><th>Detected</th><th>Score</th><th>Status</th><th>Reasons</th><th>Recommendation</th><th>Screenshot</th></tr>
</thead>
<tbody>
{rows}
</tbody>
</table>
</body>
</html>
"""

ROW_TEMPLATE = (
    "<tr><td>{file}</td><td>{expected}</td><td>{name}</td><td>{score}</td>"
    '<td class="{status_class}">{status}</td><td>{reasons}</td>'
    "<td>{recommendation}</td><td>{thumbnail}</td></tr>"
)


def format_score(score: float) -> str:
    return f"{score:g}%"


class ReportGenerator:
    """Renders the run summary as a self-contained HTML table."""

    def render(self, records: Iterable[DiagnosticRecord]) -> str:
        """Render records, in order, as a complete HTML document."""
        records = list(records)
        rows = "\n".join(self._render_row(record) for record in records)
        passed = sum(1 for record in records if record.passed)

        return REPORT_TEMPLATE.format(
            passed=passed,
            failed=len(records) - passed,
            total=len(records),
            rows=rows,
        )

    def generate(self, store: ResultsStore) -> Optional[Path]:
        """
        Write the report for the summary held by a results store.

        Returns:
            Path to the written report, or None when there is no summary
        """
        records = store.load_summary()
        if records is None:
            return None

        report_path = store.results_dir / REPORT_FILE
        report_path.write_text(self.render(records), encoding="utf-8")
        return report_path

    def _render_row(self, record: DiagnosticRecord) -> str:
        suggestions = record.suggestions
        reasons = ", ".join(suggestions.reasons) if suggestions else ""
        recommendation = suggestions.recommendation if suggestions else ""

        return ROW_TEMPLATE.format(
            file=html.escape(record.file),
            expected=html.escape(record.expected),
            name=html.escape(record.name or ""),
            score=html.escape(format_score(record.score)),
            status_class="pass" if record.passed else "fail",
            status="PASS" if record.passed else "FAIL",
            reasons=html.escape(reasons),
            recommendation=html.escape(recommendation),
            thumbnail=self._render_thumbnail(record),
        )

    def _render_thumbnail(self, record: DiagnosticRecord) -> str:
        if not record.screenshot:
            return ""
        src = html.escape(record.screenshot, quote=True)
        alt = html.escape(f"Screenshot for {record.file}", quote=True)
        return f'<a href="{src}"><img class="thumb" src="{src}" alt="{alt}"></a>'
