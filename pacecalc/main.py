# Main backend file for the pace calculator
from __future__ import annotations
import io
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse, Response
from loguru import logger

from pacecalc.config import load_settings
from pacecalc.core.models import Mode, TargetRow
from pacecalc.core.pace import format_pace, format_speed, kph_from_pace, pace_from_kph, parse_pace
from pacecalc.core.targets import compute_targets, row_to_dict, targets_to_frame
from pacecalc.log import configure_logging
from pacecalc.report.render_markdown import EMPTY_TARGETS_MESSAGE, render_markdown
from pacecalc.report.render_pdf import render_pdf

settings = load_settings()
configure_logging(settings.log_level, settings.log_file)

# Define FastAPI instance
app = FastAPI(title="Running Pace Tools")


def _finite(x: float) -> Optional[float]:
    # NaN/inf aren't valid JSON
    return x if math.isfinite(x) else None


def _targets(base_pace: Optional[str], percentages: Optional[str], mode: Optional[Mode]) -> Dict[str, Any]:
    base_pace = settings.default_base_pace if base_pace is None else base_pace
    percentages = settings.default_percentages if percentages is None else percentages
    mode = settings.default_mode if mode is None else mode
    rows = compute_targets(base_pace, percentages, mode)
    logger.info(f"targets base_pace={base_pace!r} mode={mode.value} rows={len(rows)}")
    return {"base_pace": base_pace, "mode": mode, "rows": rows}


def _report_markdown(t: Dict[str, Any]) -> str:
    return render_markdown({
        "generated_at": datetime.now().strftime("%Y-%m-%d %H:%M"),
        "base_pace": t["base_pace"],
        "mode": t["mode"],
        "rows": t["rows"],
    })


@app.get("/")
def root():
    return {"message": "pace calculator online"}


@app.get("/convert/speed")
def convert_speed(kph: Optional[float] = None):
    """
    Treadmill speed (km/h) -> pace per km.
    """
    kph = settings.default_kph if kph is None else kph
    seconds = pace_from_kph(kph)
    return {
        "kph": _finite(kph),
        "pace_s_per_km": _finite(seconds),
        "pace": format_pace(seconds),
    }


@app.get("/convert/pace")
def convert_pace(pace: Optional[str] = None):
    """
    Pace text ("5:30", "5m30", "330") -> treadmill speed, shown to one decimal.
    """
    pace = settings.default_pace if pace is None else pace
    kph = kph_from_pace(pace)
    return {
        "pace_text": pace,
        "pace_s_per_km": _finite(parse_pace(pace)),
        "kph": _finite(kph),
        "speed": format_speed(kph),
    }


@app.get("/targets")
def targets(base_pace: Optional[str] = None, percentages: Optional[str] = None, mode: Optional[Mode] = None):
    t = _targets(base_pace, percentages, mode)
    rows: List[TargetRow] = t["rows"]
    return {
        "base_pace": t["base_pace"],
        "base_pace_s_per_km": _finite(parse_pace(t["base_pace"])),
        "mode": t["mode"].value,
        "rows": [row_to_dict(r) for r in rows],
        "message": None if rows else EMPTY_TARGETS_MESSAGE,
    }


@app.get("/targets.csv")
def targets_csv(base_pace: Optional[str] = None, percentages: Optional[str] = None, mode: Optional[Mode] = None):
    t = _targets(base_pace, percentages, mode)
    csv_text = targets_to_frame(t["rows"]).to_csv(index=False)
    return Response(content=csv_text, media_type="text/csv")


@app.get("/targets/report.md", response_class=PlainTextResponse)
def targets_report_markdown(base_pace: Optional[str] = None, percentages: Optional[str] = None, mode: Optional[Mode] = None):
    t = _targets(base_pace, percentages, mode)
    return PlainTextResponse(_report_markdown(t), media_type="text/markdown")


@app.get("/targets/report.pdf")
def targets_report_pdf(base_pace: Optional[str] = None, percentages: Optional[str] = None, mode: Optional[Mode] = None):
    t = _targets(base_pace, percentages, mode)
    if not t["rows"]:
        raise HTTPException(status_code=400, detail=EMPTY_TARGETS_MESSAGE)

    buf = io.BytesIO()
    render_pdf(_report_markdown(t), buf)
    return Response(content=buf.getvalue(), media_type="application/pdf")
