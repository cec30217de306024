"""CSV export writer for lint findings."""

from __future__ import annotations

import csv
import io
from pathlib import Path

from skillint.constants.reporting import CSV_COLUMNS, CSV_FINDINGS_FILENAME
from skillint.io import write_text_atomic
from skillint.model import Finding
from skillint.scanner.score import sorted_findings


def write_csv_findings(out_root: Path, findings: list[Finding]) -> Path:
    """Write findings.csv under the output root and return the path."""
    csv_path = out_root / CSV_FINDINGS_FILENAME
    write_text_atomic(
        path=csv_path,
        content=render_csv_string(findings),
        temp_prefix=".csv_tmp_",
        temp_suffix=".csv",
    )
    return csv_path


def render_csv_string(findings: list[Finding]) -> str:
    """Render findings as a CSV string."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_COLUMNS)
    for f in sorted_findings(findings):
        writer.writerow(
            (
                f.id,
                f.subject,
                f.category,
                f.rule_id,
                f.severity,
                f.score,
                f.evidence.path,
                f.evidence.line if f.evidence.line is not None else "",
                f.title,
                f.description,
                f.recommendation,
            )
        )
    return buf.getvalue()
