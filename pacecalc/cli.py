from __future__ import annotations
import argparse
import pathlib
import sys
from datetime import datetime
from typing import List, Optional

from loguru import logger

from pacecalc.config import Settings, load_settings
from pacecalc.core.models import Mode, PLACEHOLDER
from pacecalc.core.pace import format_pace, format_speed, kph_from_pace, pace_from_kph, parse_speed
from pacecalc.core.targets import compute_targets, format_percentage, targets_to_frame
from pacecalc.log import configure_logging
from pacecalc.report.render_markdown import EMPTY_TARGETS_MESSAGE, render_markdown
from pacecalc.report.render_pdf import render_pdf


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='pacecalc', description="Running pace tools: treadmill speed <-> pace, percentage targets")

    parser.add_argument(
        "--log-level",
        action="store",
        type=str,
        default=settings.log_level,
        help="loguru level (DEBUG, INFO, WARNING...)")

    commands = parser.add_subparsers(dest="command", required=True)

    speed = commands.add_parser("speed", help="treadmill speed (km/h) to pace")
    speed.add_argument(
        "kph",
        nargs="?",
        default=str(settings.default_kph),
        help="speed in km/h, e.g. 12 or 12.5")

    pace = commands.add_parser("pace", help="pace (min:sec per km) to treadmill speed")
    pace.add_argument(
        "pace",
        nargs="?",
        default=settings.default_pace,
        help='pace, e.g. "5:30", "5m30" or "330"')

    targets = commands.add_parser("targets", help="target paces as percentages of a base pace")
    targets.add_argument(
        "base_pace",
        nargs="?",
        default=settings.default_base_pace,
        help='base pace, e.g. "6:00"')
    targets.add_argument(
        "-p", "--percentages",
        action="store",
        type=str,
        default=settings.default_percentages,
        help="comma or space separated, e.g. \"60, 70, 80, 90, 100, 110\"")
    targets.add_argument(
        "--mode",
        action="store",
        choices=[m.value for m in Mode],
        default=settings.default_mode.value,
        help="speed: %% of speed (recommended); pace: %% of pace time (less common)")
    targets.add_argument(
        "--csv",
        action="store",
        type=pathlib.Path,
        help="write the table as CSV")
    targets.add_argument(
        "--markdown",
        action="store",
        type=pathlib.Path,
        help="write a Markdown report")
    targets.add_argument(
        "--pdf",
        action="store",
        type=pathlib.Path,
        help="write a printable PDF report")

    return parser


def _speed_main(args: argparse.Namespace) -> int:
    pace = format_pace(pace_from_kph(parse_speed(args.kph)))
    print(f"Pace = {pace}")
    return 0 if pace != PLACEHOLDER else 1


def _pace_main(args: argparse.Namespace) -> int:
    speed = format_speed(kph_from_pace(args.pace))
    print(f"Set treadmill to ≈ {speed} km/h")
    return 0 if speed != PLACEHOLDER else 1


def _targets_main(args: argparse.Namespace) -> int:
    mode = Mode(args.mode)
    rows = compute_targets(args.base_pace, args.percentages, mode)
    if not rows:
        print(EMPTY_TARGETS_MESSAGE)
        return 1

    frame = targets_to_frame(rows)
    table = frame.assign(pct=frame['pct'].map(format_percentage))[['pct', 'pace', 'speed']]
    print(table.to_string(index=False))

    if args.csv:
        frame.to_csv(args.csv, index=False)
        logger.info(f"Wrote {args.csv}")

    if args.markdown or args.pdf:
        md = render_markdown({
            "generated_at": datetime.now().strftime("%Y-%m-%d %H:%M"),
            "base_pace": args.base_pace,
            "mode": mode,
            "rows": rows,
        })
        if args.markdown:
            args.markdown.write_text(md, encoding="utf-8")
            logger.info(f"Wrote {args.markdown}")
        if args.pdf:
            render_pdf(md, args.pdf)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level, settings.log_file)

    if args.command == "speed":
        return _speed_main(args)
    if args.command == "pace":
        return _pace_main(args)
    return _targets_main(args)


if __name__ == "__main__":
    sys.exit(main())
