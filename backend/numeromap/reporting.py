from __future__ import annotations

from datetime import date, datetime, timezone
from io import BytesIO
from textwrap import wrap
from typing import Any

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .config import settings
from .interpretations import calculation_steps, interpret_map_value, synthesize
from .numerology_engine import NumerologyMap, Pillar

# The base-14 fonts only cover Latin-1
_TRANSLITERATIONS = {"→": "->", "—": "-", "–": "-", "’": "'", "“": '"', "”": '"'}

_MARGIN = 48


def _safe_text(value: Any) -> str:
    if value is None:
        return ""
    text = str(value).replace("\n", " ").strip()
    for src, dst in _TRANSLITERATIONS.items():
        text = text.replace(src, dst)
    return text.encode("latin-1", errors="replace").decode("latin-1")



def _draw_wrapped(c: canvas.Canvas, text: str, x: int, y: float, max_chars: int = 90, line_height: int = 14) -> float:
    lines = wrap(_safe_text(text), width=max_chars) or [""]
    for line in lines:
        c.drawString(x, y, line)
        y -= line_height
    return y


def _draw_footer(c: canvas.Canvas, page_no: int) -> None:
    c.setFont("Helvetica", 8)
    c.drawString(_MARGIN, 30, f"{settings.report_author} - page {page_no}")


def _draw_cover(c: canvas.Canvas, full_name: str, birth_date: date, numbers: NumerologyMap, current_year: int) -> None:
    _, height = A4
    y = height - 72
    c.setFont("Helvetica-Bold", 22)
    c.drawString(_MARGIN, y, "Numerology Map")

    y -= 30
    c.setFont("Helvetica", 10)
    c.drawString(_MARGIN, y, f"Generated UTC: {datetime.now(timezone.utc).isoformat(timespec='seconds')}")

    y -= 40
    c.setFont("Helvetica-Bold", 14)
    c.drawString(_MARGIN, y, "Personal report for:")
    y -= 24
    c.setFont("Helvetica-Bold", 18)
    c.drawString(_MARGIN, y, _safe_text(full_name))
    y -= 20
    c.setFont("Helvetica", 11)
    c.drawString(_MARGIN, y, f"Born {birth_date.isoformat()} - personal year {current_year}")

    y -= 40
    c.setFont("Helvetica-Bold", 12)
    c.drawString(_MARGIN, y, "The Five Pillars")
    y -= 20
    c.setFont("Helvetica", 11)
    for pillar in Pillar:
        reading = interpret_map_value(pillar, numbers.value_for(pillar))
        c.drawString(_MARGIN, y, f"{_safe_text(reading.title)}: {reading.number}")
        c.drawString(_MARGIN + 200, y, _safe_text(reading.subtitle))
        y -= 16


def _draw_pillar_page(
    c: canvas.Canvas,
    pillar: Pillar,
    full_name: str,
    birth_date: date,
    numbers: NumerologyMap,
    current_year: int,
) -> None:
    _, height = A4
    reading = interpret_map_value(pillar, numbers.value_for(pillar))
    steps = calculation_steps(pillar, numbers, birth_date, full_name=full_name, current_year=current_year)

    y = height - 72
    c.setFont("Helvetica-Bold", 18)
    c.drawString(_MARGIN, y, f"{_safe_text(reading.title)} - {reading.number}")
    y -= 24
    c.setFont("Helvetica-Oblique", 13)
    c.drawString(_MARGIN, y, _safe_text(reading.subtitle))

    y -= 28
    c.setFont("Helvetica", 11)
    y = _draw_wrapped(c, reading.description, _MARGIN, y)
    y -= 8
    y = _draw_wrapped(c, reading.essence, _MARGIN, y)

    y -= 18
    c.setFont("Helvetica-Bold", 12)
    c.drawString(_MARGIN, y, "Challenges")
    y -= 16
    c.setFont("Helvetica", 11)
    for challenge in reading.challenges:
        y = _draw_wrapped(c, f"- {challenge}", _MARGIN + 8, y)

    y -= 18
    c.setFont("Helvetica-Bold", 12)
    c.drawString(_MARGIN, y, "Gift")
    y -= 16
    c.setFont("Helvetica", 11)
    y = _draw_wrapped(c, reading.gift, _MARGIN, y)

    y -= 18
    c.setFont("Helvetica-Bold", 12)
    c.drawString(_MARGIN, y, "Calculation")
    y -= 16
    c.setFont("Courier", 10)
    _draw_wrapped(c, steps, _MARGIN, y, max_chars=80)


def _draw_synthesis(c: canvas.Canvas, numbers: NumerologyMap) -> None:
    _, height = A4
    y = height - 72
    c.setFont("Helvetica-Bold", 18)
    c.drawString(_MARGIN, y, "Synthesis")
    y -= 30
    c.setFont("Helvetica", 11)
    y = _draw_wrapped(c, synthesize(numbers), _MARGIN, y)
    y -= 30
    c.setFont("Helvetica-Oblique", 9)
    c.drawString(_MARGIN, y, "This report is a spiritual guide based on sacred vibrational frequencies.")


def build_numerology_report_pdf(
    *,
    full_name: str,
    birth_date: date,
    numbers: NumerologyMap,
    current_year: int,
) -> bytes:
    """Cover page, one page per pillar, then the synthesis page."""
    buffer = BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.setTitle(f"Numerology Map - {_safe_text(full_name)}")
    c.setAuthor(settings.report_author)

    page_no = 1
    _draw_cover(c, full_name, birth_date, numbers, current_year)
    _draw_footer(c, page_no)
    c.showPage()

    for pillar in Pillar:
        page_no += 1
        _draw_pillar_page(c, pillar, full_name, birth_date, numbers, current_year)
        _draw_footer(c, page_no)
        c.showPage()

    page_no += 1
    _draw_synthesis(c, numbers)
    _draw_footer(c, page_no)
    c.showPage()

    c.save()
    return buffer.getvalue()
