"""
Excel Exporter — multi-tab XLSX for an outline and its draft analysis.
"""
import io
import logging
from datetime import datetime
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config.settings import EXCEL_STYLES
from core.models import ArticleOutline, DraftAnalysis

logger = logging.getLogger(__name__)

# ── style constants ─────────────────────────────────────────────────────────
_HEADER_FONT = Font(bold=True, color=EXCEL_STYLES["header_font_color"], size=11)
_HEADER_FILL = PatternFill(
    start_color=EXCEL_STYLES["header_color"], end_color=EXCEL_STYLES["header_color"], fill_type="solid"
)
_THIN_BORDER = Border(
    left=Side(style="thin"), right=Side(style="thin"),
    top=Side(style="thin"), bottom=Side(style="thin"),
)


def _style_header(ws, ncols: int) -> None:
    for c in range(1, ncols + 1):
        cell = ws.cell(row=1, column=c)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = _THIN_BORDER


def _autofit(ws) -> None:
    for col in ws.columns:
        ml = max((len(str(c.value or "")) for c in col), default=8)
        ws.column_dimensions[get_column_letter(col[0].column)].width = min(ml + 3, 60)


# ═══════════════════════════════════════════════════════════════════════════
# Sheet writers
# ═══════════════════════════════════════════════════════════════════════════

def _write_titles(wb: Workbook, outline: ArticleOutline) -> None:
    ws = wb.create_sheet("Titles")
    headers = ["#", "Suggested Title", "Target Word Count"]
    ws.append(headers)
    _style_header(ws, len(headers))
    for idx, title in enumerate(outline.suggested_titles, 1):
        ws.append([idx, title, outline.target_word_count if idx == 1 else ""])
    _autofit(ws)


def _write_structure(wb: Workbook, outline: ArticleOutline) -> None:
    ws = wb.create_sheet("Structure")
    headers = ["#", "Level", "Title", "Description", "Guidelines", "Source Competitor"]
    ws.append(headers)
    _style_header(ws, len(headers))
    for idx, node in enumerate(outline.structure, 1):
        ws.append([idx, node.level, node.title, node.description, node.guidelines, node.source_competitor or ""])
    _autofit(ws)


def _write_images(wb: Workbook, outline: ArticleOutline) -> None:
    ws = wb.create_sheet("Images")
    headers = ["#", "After Section", "Description", "AI Prompt"]
    ws.append(headers)
    _style_header(ws, len(headers))
    for idx, p in enumerate(outline.image_strategy.placements, 1):
        ws.append([idx, p.after_section, p.description, p.ai_prompt])
    _autofit(ws)


def _write_faqs(wb: Workbook, outline: ArticleOutline) -> None:
    ws = wb.create_sheet("FAQ")
    headers = ["Question", "Answer", "Rationale"]
    ws.append(headers)
    _style_header(ws, len(headers))
    for f in outline.faqs:
        ws.append([f.question, f.answer, f.rationale])
    _autofit(ws)


def _write_analysis(wb: Workbook, analysis: DraftAnalysis) -> None:
    ws = wb.create_sheet("Draft Analysis")
    headers = ["Category", "Item"]
    ws.append(headers)
    _style_header(ws, len(headers))
    ws.append(["Score", analysis.score])
    for s in analysis.missing_sections:
        ws.append(["Missing Section", s])
    for k in analysis.keyword_gaps:
        ws.append(["Keyword Gap", k])
    for s in analysis.suggestions:
        ws.append(["Suggestion", s])
    ws.append(["Readability", analysis.readability_feedback])
    _autofit(ws)


# ═══════════════════════════════════════════════════════════════════════════
# Public API
# ═══════════════════════════════════════════════════════════════════════════

def export_to_excel(
    *,
    outline: Optional[ArticleOutline] = None,
    analysis: Optional[DraftAnalysis] = None,
    filename: Optional[str] = None,
) -> bytes:
    """
    Build a multi-tab XLSX workbook and return raw bytes.
    If *filename* is given, also write to disk.
    """
    wb = Workbook()
    # Remove default sheet
    if wb.active:
        wb.remove(wb.active)

    if outline is not None:
        _write_titles(wb, outline)
        _write_structure(wb, outline)
        _write_images(wb, outline)
        _write_faqs(wb, outline)
    if analysis is not None:
        _write_analysis(wb, analysis)

    if not wb.sheetnames:
        ws = wb.create_sheet("Info")
        ws.append(["No data to export."])

    buf = io.BytesIO()
    wb.save(buf)
    raw = buf.getvalue()

    if filename:
        if not filename.endswith(".xlsx"):
            filename += ".xlsx"
        with open(filename, "wb") as f:
            f.write(raw)
        logger.info(f"Exported {filename} ({len(raw) // 1024} KB)")

    return raw


def default_filename(prefix: str = "seo_blueprint") -> str:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{ts}.xlsx"
