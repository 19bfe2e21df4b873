# src/reports/export.py
"""
Saved-deal exports: CSV, XLSX and PDF.

Public API
----------
- flatten(data) -> dict[str, str]             # nested dict -> dotted keys
- export_csv(deals, path) -> Path
- export_xlsx(deals, path) -> Path            # sheets: Summary, Inputs, Results
- export_pdf(deals, path) -> Path
- export_deals(deals, fmt, out_dir=".", filename=None) -> Path
- default_filename(fmt, today=None) -> str    # real_estate_deals_<YYYY-MM-DD>.<ext>

All writers raise ExportError when the target cannot be written.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from datetime import date
from pathlib import Path
from typing import Any, Literal

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.core.errors import ExportError, InvalidInputError
from src.schemas.models import SavedDeal

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "xlsx", "pdf"]
EXPORT_FORMATS: tuple[str, ...] = ("csv", "xlsx", "pdf")

SUMMARY_COLUMNS = ["ID", "Type", "Name", "Date"]
_HEADER_FILL = PatternFill(start_color="1F4E78", end_color="1F4E78", fill_type="solid")
_HEADER_FONT = Font(bold=True, color="FFFFFF")


# -----------------------
# Helpers
# -----------------------


def _fmt_value(v: Any) -> str:
    if v is None:
        return "N/A"
    if isinstance(v, bool):
        return "Yes" if v else "No"
    if isinstance(v, float):
        return f"{v:,.2f}"
    return str(v)


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """
    Flatten a nested inputs/results blob into dotted keys with display strings.

    Lists (schedules) are summarized by length rather than expanded.
    """
    out: dict[str, str] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            out.update(flatten(value, prefix=f"{name}."))
        elif isinstance(value, list):
            out[name] = f"[{len(value)} rows]"
        else:
            out[name] = _fmt_value(value)
    return out


def _joined(data: dict[str, Any]) -> str:
    return "; ".join(f"{k}: {v}" for k, v in flatten(data).items())


def default_filename(fmt: str, today: date | None = None) -> str:
    day = (today or date.today()).isoformat()
    return f"real_estate_deals_{day}.{fmt}"


# -----------------------
# Writers
# -----------------------


def export_csv(deals: Sequence[SavedDeal], path: str | Path) -> Path:
    """One row per deal: id, type, name, date, then inputs and results as 'key: value' lists."""
    p = Path(path)
    try:
        with p.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow([*SUMMARY_COLUMNS, "Inputs", "Results"])
            for d in deals:
                writer.writerow([d.id, d.type, d.name, d.date, _joined(d.inputs), _joined(d.results)])
    except OSError as e:
        raise ExportError(f"Could not write CSV to {p}: {e}") from e
    logger.info("exported %d deals to %s", len(deals), p)
    return p


def _style_header(ws) -> None:
    for cell in ws[1]:
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL


def export_xlsx(deals: Sequence[SavedDeal], path: str | Path) -> Path:
    """
    Workbook with three sheets:
      Summary  ID | Type | Name | Date
      Inputs   Deal ID | Name | Field | Value
      Results  Deal ID | Name | Metric | Value
    """
    p = Path(path)
    wb = Workbook()
    summary = wb.active
    summary.title = "Summary"
    summary.append(SUMMARY_COLUMNS)

    inputs_ws = wb.create_sheet("Inputs")
    inputs_ws.append(["Deal ID", "Name", "Field", "Value"])
    results_ws = wb.create_sheet("Results")
    results_ws.append(["Deal ID", "Name", "Metric", "Value"])

    for d in deals:
        summary.append([d.id, d.type, d.name, d.date])
        for field, value in flatten(d.inputs).items():
            inputs_ws.append([d.id, d.name, field, value])
        for metric, value in flatten(d.results).items():
            results_ws.append([d.id, d.name, metric, value])

    for ws in (summary, inputs_ws, results_ws):
        _style_header(ws)
        ws.freeze_panes = "A2"

    try:
        wb.save(p)
    except OSError as e:
        raise ExportError(f"Could not write XLSX to {p}: {e}") from e
    logger.info("exported %d deals to %s", len(deals), p)
    return p


def export_pdf(deals: Sequence[SavedDeal], path: str | Path) -> Path:
    """Title, a summary table of all deals, then per-deal detail lines."""
    p = Path(path)
    styles = getSampleStyleSheet()
    story: list[Any] = [
        Paragraph("Real Estate Deals", styles["Title"]),
        Paragraph(f"Generated {date.today().isoformat()} ({len(deals)} deals)", styles["Italic"]),
        Spacer(1, 0.25 * inch),
    ]

    table_data = [SUMMARY_COLUMNS] + [[d.id[:8], d.type, d.name, d.date[:10]] for d in deals]
    t = Table(table_data, colWidths=[1.0 * inch, 1.2 * inch, 3.0 * inch, 1.2 * inch])
    t.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#1F4E78")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.gray),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
            ]
        )
    )
    story.append(t)

    for d in deals:
        story.append(Spacer(1, 0.2 * inch))
        story.append(Paragraph(f"{d.name} ({d.type})", styles["Heading2"]))
        for section, blob in (("Inputs", d.inputs), ("Results", d.results)):
            story.append(Paragraph(section, styles["Heading4"]))
            for k, v in flatten(blob).items():
                story.append(Paragraph(f"{k}: {v}", styles["Normal"]))

    try:
        SimpleDocTemplate(str(p), pagesize=letter).build(story)
    except OSError as e:
        raise ExportError(f"Could not write PDF to {p}: {e}") from e
    logger.info("exported %d deals to %s", len(deals), p)
    return p


_WRITERS = {"csv": export_csv, "xlsx": export_xlsx, "pdf": export_pdf}


def export_deals(
    deals: Sequence[SavedDeal],
    fmt: str,
    out_dir: str | Path = ".",
    filename: str | None = None,
) -> Path:
    """Dispatch on format; the file lands in out_dir under the dated default name unless filename is given."""
    fmt = fmt.lower()
    writer = _WRITERS.get(fmt)
    if writer is None:
        raise InvalidInputError(f"Unsupported export format {fmt!r}; expected one of {', '.join(EXPORT_FORMATS)}")
    target = Path(out_dir) / (filename or default_filename(fmt))
    return writer(deals, target)
