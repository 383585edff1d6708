# scramble_core/export_pdf.py
from __future__ import annotations
from typing import List, Optional
import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import letter, landscape
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .models import CriteriaField, ScrambleQuality, Team

TABLE_STYLE = TableStyle([
    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
    ("TEXTCOLOR", (0, 0), (-1, 0), colors.black),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 9),
    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ("ALIGN", (0, 0), (-1, -1), "LEFT"),
    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
])


def _team_table(team: Team, criteria: List[CriteriaField]) -> Table:
    data = [["Name"] + [c.label for c in criteria]]
    for m in team.members:
        data.append([m.display_name] + [m.criteria.get(c.key, "") for c in criteria])
    t = Table(data, repeatRows=1, hAlign="LEFT")
    t.setStyle(TABLE_STYLE)
    return t


def _quality_table(quality: ScrambleQuality) -> Table:
    data = [["Criterion", "Mode", "Score", "Limited"]]
    for q in quality.criteria:
        data.append([q.label, q.mode, f"{q.score:.0%}", "yes" if q.limited else ""])
    data.append(["Overall", "", f"{quality.overall:.0%}", ""])
    t = Table(data, hAlign="LEFT")
    t.setStyle(TABLE_STYLE)
    return t


def render_teams_pdf(
    teams: List[Team],
    criteria: List[CriteriaField],
    quality: Optional[ScrambleQuality] = None,
    title: str = "Teams",
) -> bytes:
    # base-14 fonts have no emoji glyphs, so team emoji are left out
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=landscape(letter), title=title)
    styles = getSampleStyleSheet()

    story = [Paragraph(escape(title), styles["Title"])]
    if quality is not None and quality.criteria:
        story += [Paragraph("Balance quality", styles["Heading2"]), _quality_table(quality), Spacer(1, 12)]
    for team in teams:
        heading = escape(f"{team.name} ({len(team.members)})")
        story += [Paragraph(heading, styles["Heading2"]), _team_table(team, criteria), Spacer(1, 12)]

    doc.build(story)
    return buf.getvalue()
