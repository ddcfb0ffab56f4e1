from __future__ import annotations
from typing import Any, Dict, List

from pacecalc.core.models import Mode, TargetRow
from pacecalc.core.pace import format_pace, format_speed, kph_from_pace, parse_pace
from pacecalc.core.targets import format_percentage

EMPTY_TARGETS_MESSAGE = "Enter a base pace to see targets."


def _mode_label(mode: Any) -> str:
    try:
        return Mode(mode).label
    except (TypeError, ValueError):
        return Mode.SPEED.label


def _target_table(rows: List[TargetRow]) -> str:
    if not rows:
        return f"_{EMPTY_TARGETS_MESSAGE}_"
    lines = [
        "| % | Pace (min/km) | Treadmill (km/h) |",
        "|---|---|---|",
    ]
    for r in rows:
        lines.append(f"| {format_percentage(r.percentage)}% | {format_pace(r.pace_seconds)} | {format_speed(r.kph)} |")
    return '\n'.join(lines)


def render_markdown(payload: Dict[str, Any]) -> str:
    title = payload.get('title', "Pace Targets")
    generated_at = payload.get('generated_at', '')
    base_pace = payload.get('base_pace', '')
    mode = payload.get('mode', Mode.SPEED)
    rows = payload.get('rows', [])

    base_sec = parse_pace(base_pace)

    md = f"""# {title}

**Generated:** {generated_at}

---

## Base
- **Base pace:** {format_pace(base_sec)}
- **Base speed (km/h):** {format_speed(kph_from_pace(base_sec))}
- **Targets as:** {_mode_label(mode)}

---

## Targets
{_target_table(rows)}

---

Pace and speed use exact conversions (km/h x min/km = 60). Percent targets default to % of speed, so 110% is faster than base and 90% is slower.
"""
    return md
