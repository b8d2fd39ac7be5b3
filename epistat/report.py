from __future__ import annotations

"""
epistat report generator
------------------------
This module generates a DOCX report for the current summary results.

Design goals:
- Keep epistat usable even if report dependencies are missing (lazy imports).
- Pick the chart that fits the result type: running totals read best as a
  line, per-group totals as bars.
- Record the selection and the commands that produced it, so the report can
  be reproduced from the same CSV file.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence
import os
import tempfile

from .summary import SummaryResult


# -----------------------------
# Configuration types
# -----------------------------

@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "epistat Summary Report"
    subtitle: str = "Daily epidemiological records, grouped totals"
    dataset_name: Optional[str] = None
    place: Optional[str] = None
    date_range: Optional[str] = None
    summary: Optional[str] = None
    # plot running totals as a line instead of bars
    cumulative: bool = False
    value_label: str = "Value"

    # How many result rows to show in the table (the rest are summarised)
    max_rows: int = 200

    # Optional: list of CLI commands used to create the current summary
    command_log: List[str] = field(default_factory=list)


# -----------------------------
# Main entry point used by CLI
# -----------------------------

def generate_docx_report(
    results: Sequence[SummaryResult],
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
) -> str:
    """
    Generate a DOCX report + chart for a list of summary results.

    The CSV dataset is never touched; the report is built from the in-memory
    results only.
    """
    config = config or ReportConfig()

    # Lazy imports: only required when "report" is used.
    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install with: python -m pip install matplotlib"
        ) from e

    if not results:
        raise ValueError("No results to report on (summary is empty).")

    labels = [str(r.date_range) for r in results]
    values = [r.value for r in results]

    # -----------------------------
    # 1) Chart (drawn into a temporary PNG, removed once embedded)
    # -----------------------------
    def _save_chart(chart_path: str) -> None:
        plt.figure(figsize=(8, 4))
        positions = list(range(len(values)))
        if config.cumulative:
            plt.plot(positions, values, marker="o")
        else:
            plt.bar(positions, values)
        # long selections get unreadable tick labels; label at most ~20 of them
        step = max(1, len(labels) // 20)
        plt.xticks(positions[::step], labels[::step], rotation=45, ha="right", fontsize=7)
        plt.title(config.summary or config.title)
        plt.ylabel(config.value_label)
        plt.tight_layout()
        plt.savefig(chart_path, dpi=200)
        plt.close()

    # -----------------------------
    # 2) Build DOCX report
    # -----------------------------
    doc = Document()

    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    if config.dataset_name:
        _kv("Dataset", config.dataset_name)
    if config.place:
        _kv("Place", config.place)
    if config.date_range:
        _kv("Date range", config.date_range)
    if config.summary:
        _kv("Summary", config.summary)
    _kv("Groups", str(len(results)))
    _kv("Largest value", f"{max(values):,}")

    doc.add_paragraph("")
    doc.add_heading("Chart", level=1)
    with tempfile.TemporaryDirectory(prefix="epistat_report_") as tmpdir:
        chart_path = os.path.join(tmpdir, "summary.png")
        _save_chart(chart_path)
        doc.add_picture(chart_path, width=Inches(6.5))

    doc.add_paragraph("")
    doc.add_heading("Results", level=1)
    t = doc.add_table(rows=1, cols=3)
    h = t.rows[0].cells
    h[0].text = "Range"
    h[1].text = "Days"
    h[2].text = config.value_label
    for r in list(results)[:config.max_rows]:
        row = t.add_row().cells
        row[0].text = str(r.date_range)
        row[1].text = str(r.date_range.days)
        row[2].text = f"{r.value:,}"
    if len(results) > config.max_rows:
        doc.add_paragraph(f"... {len(results) - config.max_rows} more row(s) not shown.")

    if config.command_log:
        doc.add_paragraph("")
        doc.add_heading("Command log (reproducibility)", level=1)
        doc.add_paragraph("These epistat commands produced this summary:")
        for line in config.command_log:
            doc.add_paragraph(line, style="List Bullet")

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_paragraph("")
    doc.add_heading("Reproducibility footer", level=1)

    from . import __version__ as epistat_version
    from datetime import datetime as _dt
    generated_at = _dt.now().isoformat(timespec="seconds")

    doc.add_paragraph(f"epistat version: {epistat_version}")
    doc.add_paragraph(f"Report generated at: {generated_at}")
    doc.add_paragraph(
        "Missing days in the dataset were filled with zero counts and the last "
        "known population before grouping."
    )

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    return out_path
