# pacecalc/report/render_pdf.py
from __future__ import annotations

import re
from html import escape
from pathlib import Path
from typing import BinaryIO, List, Union

from loguru import logger
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

_TABLE_RULE = re.compile(r'^\|[\s:|-]+\|$')
_BOLD = re.compile(r'\*\*(.+?)\*\*')
_ITALIC = re.compile(r'(?<![\w*])_(.+?)_(?![\w*])')


def _inline(text: str) -> str:
    # Escape first so ReportLab Paragraph doesn't choke on &, <, >
    safe = escape(text)
    safe = _BOLD.sub(r'<b>\1</b>', safe)
    return _ITALIC.sub(r'<i>\1</i>', safe)


def _cells(line: str) -> List[str]:
    return [c.strip() for c in line.strip().strip('|').split('|')]


def _table(lines: List[str]) -> Table:
    data = [_cells(line) for line in lines if not _TABLE_RULE.match(line)]
    table = Table(data, hAlign='LEFT')
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#F3E8EE')),
        ('LINEBELOW', (0, 0), (-1, -1), 0.25, colors.lightgrey),
        ('BOX', (0, 0), (-1, -1), 0.5, colors.grey),
        ('LEFTPADDING', (0, 0), (-1, -1), 8),
        ('RIGHTPADDING', (0, 0), (-1, -1), 8),
    ]))
    return table


def render_pdf(markdown_text: str, out_path: Union[Path, str, BinaryIO]) -> None:
    styles = getSampleStyleSheet()
    story = []
    table_lines: List[str] = []

    for raw in markdown_text.splitlines():
        line = raw.strip()

        if line.startswith('|'):
            table_lines.append(line)
            continue
        if table_lines:
            story.append(_table(table_lines))
            table_lines = []

        if not line:
            story.append(Spacer(1, 10))
            continue

        if line == '---':
            story.append(Spacer(1, 6))
        elif line.startswith("# "):
            story.append(Paragraph(f"<b>{escape(line[2:])}</b>", styles["Title"]))
        elif line.startswith("## "):
            story.append(Spacer(1, 12))
            story.append(Paragraph(f"<b>{escape(line[3:])}</b>", styles["Heading2"]))
        elif line.startswith("- "):
            story.append(Paragraph(f"• {_inline(line[2:])}", styles["Normal"]))
        else:
            story.append(Paragraph(_inline(line), styles["Normal"]))

    if table_lines:
        story.append(_table(table_lines))

    target = str(out_path) if isinstance(out_path, (str, Path)) else out_path
    doc = SimpleDocTemplate(
        target,
        pagesize=A4,
        rightMargin=36,
        leftMargin=36,
        topMargin=36,
        bottomMargin=36,
    )
    doc.build(story)
    logger.info(f"Wrote pace target PDF ({len(story)} blocks)")
