#!/usr/bin/env python3
"""
cadence-coach CLI.

Cadence analysis and metronome for runners.

Usage:
    cadence-coach analyze run.json --height 175 --weight 70 --age 35 --experience moderate
    cadence-coach targets --height 175 --weight 70 --age 35 --experience advanced
    cadence-coach terrain --base 172 --grade 6
    cadence-coach race --distance 10k --target 45:00
    cadence-coach metronome --bpm 180 --seconds 30
"""

import argparse
import json
import logging
import threading
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from .config import get_settings
from .exceptions import CadenceCoachError
from .metrics.pacing import calculate_race_target, format_finish_time, format_pace
from .metrics.targets import calculate_personalized_targets
from .metrics.terrain import adjust_cadence_for_terrain, calculate_cadence_offset, classify_terrain
from .metrics.zones import CADENCE_ZONES
from .metronome.feedback import ToneSink
from .metronome.scheduler import CadenceScheduler
from .models.analysis import RecommendationKind
from .models.profile import ExperienceLevel, RunnerProfile
from .services.analyzer import CadenceAnalyzer

console = Console()
logger = logging.getLogger(__name__)


def get_kind_color(kind: RecommendationKind) -> str:
    """Get rich color for a recommendation kind."""
    colors = {
        RecommendationKind.SUCCESS: "green",
        RecommendationKind.IMPROVEMENT: "yellow",
        RecommendationKind.CAUTION: "red",
        RecommendationKind.INFO: "blue",
    }
    return colors.get(kind, "white")


def profile_from_args(args) -> Optional[RunnerProfile]:
    """Build a profile when height, weight and age are all given."""
    if args.height is None or args.weight is None or args.age is None:
        return None
    return RunnerProfile(
        height_cm=args.height,
        weight_kg=args.weight,
        age_years=args.age,
        experience_level=args.experience,
    )


def add_profile_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--height", type=float, help="Height in cm")
    parser.add_argument("--weight", type=float, help="Weight in kg")
    parser.add_argument("--age", type=float, help="Age in years")
    parser.add_argument(
        "--experience",
        choices=[level.value for level in ExperienceLevel],
        default=ExperienceLevel.MODERATE.value,
        help="Running experience",
    )


def print_targets(targets) -> None:
    table = Table(title="Cadence Targets", box=box.ROUNDED)
    table.add_column("Pace", style="cyan")
    table.add_column("Cadence (SPM)", justify="right", style="green")
    table.add_row("Base", str(targets.base_cadence))
    for name, value in targets.ladder().items():
        table.add_row(name.capitalize(), str(value))
    console.print(table)

    if targets.is_default:
        console.print("[dim]Default targets; pass --height, --weight and --age to personalize.[/dim]")
    else:
        adjustments = Table(title="Adjustments", box=box.SIMPLE, show_header=False)
        adjustments.add_column("Factor")
        adjustments.add_column("SPM", justify="right")
        adjustments.add_row("Height", f"{targets.height_adjustment:+d}")
        adjustments.add_row("Experience", f"{targets.experience_adjustment:+d}")
        adjustments.add_row("Age", f"{targets.age_adjustment:+d}")
        adjustments.add_row(f"BMI ({targets.bmi:.1f})", f"{targets.bmi_adjustment:+d}")
        console.print(adjustments)
    console.print()


def cmd_analyze(args):
    """Analyze a run from a JSON file of decoded samples."""
    console.print()
    console.print(Panel("[bold]cadence-coach - Run Analysis[/bold]"))
    console.print()

    path = Path(args.samples)
    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read samples from {path}: {e}[/red]")
        return 1
    if isinstance(records, dict):
        records = records.get("samples", [])

    analysis = CadenceAnalyzer().analyze(records, profile_from_args(args))
    s = analysis.summary

    summary = Table(title="Run Summary", box=box.ROUNDED, show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", justify="right")
    summary.add_row("Distance", f"{s.total_distance_m / 1000:.2f} km")
    summary.add_row("Duration", format_finish_time(s.total_time_s / 60, 1.0))
    if s.avg_pace_min_per_km > 0:
        summary.add_row("Avg pace", f"{format_pace(s.avg_pace_min_per_km)} /km")
    summary.add_row("Avg cadence", f"{s.avg_cadence_spm:.0f} SPM")
    summary.add_row("Cadence range", f"{s.min_cadence_spm:.0f}-{s.max_cadence_spm:.0f} SPM")
    summary.add_row("Cadence variability", f"{s.cadence_variability:.1f} SPM")
    if s.has_heart_rate:
        summary.add_row("Avg / max HR", f"{s.avg_heart_rate_bpm:.0f} / {s.max_heart_rate_bpm:.0f} bpm")
    summary.add_row("Elevation", f"+{s.elevation_gain_m:.0f} m / -{s.elevation_loss_m:.0f} m")
    console.print(summary)
    console.print()

    if analysis.note:
        console.print(f"[yellow]{analysis.note}[/yellow]")
        console.print()
    else:
        zone_values = analysis.zones.zones()
        zones = Table(title="Cadence Zones", box=box.ROUNDED)
        zones.add_column("Zone", style="cyan")
        zones.add_column("Range")
        zones.add_column("Share", justify="right")
        for key, label, lower, upper in CADENCE_ZONES:
            if lower is None:
                span = f"< {upper + 1}"
            elif upper is None:
                span = f"> {lower - 1}"
            else:
                span = f"{lower}-{upper}"
            zones.add_row(label, span, f"{zone_values[key]}%")
        console.print(zones)
        console.print(
            f"Optimal: [green]{analysis.zones.optimal}%[/green]  "
            f"Sub-optimal: [yellow]{analysis.zones.sub_optimal}%[/yellow]"
        )
        console.print()

    dist = analysis.terrain.distribution
    console.print(
        f"Terrain: flat {dist['flat']:.0f}%, uphill {dist['uphill']:.0f}%, "
        f"downhill {dist['downhill']:.0f}%  "
        f"(targets: flat {analysis.terrain_targets['flat']}, "
        f"uphill {analysis.terrain_targets['uphill']}, "
        f"downhill {analysis.terrain_targets['downhill']} SPM)"
    )
    console.print()

    print_targets(analysis.targets)

    for rec in analysis.recommendations:
        color = get_kind_color(rec.kind)
        console.print(Panel(rec.message, title=Text(rec.title, style=f"bold {color}"), border_style=color))
    console.print()
    return 0


def cmd_targets(args):
    """Show personalized cadence targets."""
    console.print()
    console.print(Panel("[bold]cadence-coach - Cadence Targets[/bold]"))
    console.print()
    print_targets(calculate_personalized_targets(profile_from_args(args)))
    return 0


def cmd_terrain(args):
    """Show the cadence target for a grade."""
    terrain = classify_terrain(args.grade)
    offset = calculate_cadence_offset(terrain, args.grade)
    adjusted = adjust_cadence_for_terrain(args.base, args.grade, terrain)
    console.print(
        f"{args.grade:+.1f}% grade is [cyan]{terrain.value}[/cyan]: "
        f"{args.base:g} {offset:+.1f} -> [bold green]{adjusted} SPM[/bold green]"
    )
    return 0


def cmd_race(args):
    """Show cadence and pace for a race goal."""
    console.print()
    console.print(Panel("[bold]cadence-coach - Race Target[/bold]"))
    console.print()

    target = calculate_race_target(args.distance, args.target, profile_from_args(args))

    table = Table(title=f"{target.distance_name} in {args.target}", box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Optimal cadence", f"{target.optimal_cadence} SPM")
    table.add_row("Target pace", f"{target.pace_formatted} /km")
    table.add_row("Stride length", f"{target.stride_length_m:.2f} m")
    console.print(table)
    console.print()
    return 0


def cmd_metronome(args):
    """Run the metronome for a fixed time."""
    settings = get_settings()
    sinks = []
    if args.bell:
        sinks.append(ToneSink(
            player=lambda frequency, duration_ms, volume: console.bell(),
            settings=settings,
        ))

    if not settings.metronome_min_bpm <= args.bpm <= settings.metronome_max_bpm:
        console.print(
            f"[yellow]{args.bpm:g} BPM is outside the usual running range "
            f"({settings.metronome_min_bpm}-{settings.metronome_max_bpm} BPM)[/yellow]"
        )

    def on_beat(beat_index: int, is_accent: bool) -> None:
        if is_accent:
            console.print(f"[bold magenta]{beat_index:>4}  TICK[/bold magenta]")
        else:
            console.print(f"[dim]{beat_index:>4}  tick[/dim]")

    done = threading.Event()
    with CadenceScheduler(sinks=sinks, settings=settings) as metronome:
        metronome.set_volume(args.volume)
        metronome.set_feedback_enabled(not args.no_feedback)
        metronome.start(args.bpm, on_beat)
        console.print(f"Metronome at [bold]{args.bpm:g} BPM[/bold] for {args.seconds:g}s (Ctrl+C to stop)")
        try:
            done.wait(args.seconds)
        except KeyboardInterrupt:
            console.print()
        metronome.stop()
    return 0


def configure_logging(level: str) -> None:
    """Send log records through rich; keep APScheduler's per-job chatter out."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    logging.getLogger("apscheduler").setLevel(logging.WARNING)


def main(argv=None) -> int:
    """Main CLI entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        prog="cadence-coach",
        description="cadence-coach - running cadence analysis and metronome",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cadence-coach analyze run.json --height 175 --weight 70 --age 35
  cadence-coach targets --height 182 --weight 78 --age 52 --experience advanced
  cadence-coach terrain --base 172 --grade -6
  cadence-coach race --distance half --target 1:45:00
  cadence-coach metronome --bpm 180 --seconds 30
        """,
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze command
    analyze_p = subparsers.add_parser("analyze", help="Analyze a run from decoded samples (JSON)")
    analyze_p.add_argument("samples", help="JSON file with a list of samples")
    add_profile_args(analyze_p)

    # Targets command
    targets_p = subparsers.add_parser("targets", help="Show personalized cadence targets")
    add_profile_args(targets_p)

    # Terrain command
    terrain_p = subparsers.add_parser("terrain", help="Cadence target for a grade")
    terrain_p.add_argument("--base", type=float, default=settings.default_bpm, help="Flat-ground cadence")
    terrain_p.add_argument("--grade", type=float, required=True, help="Grade in percent")

    # Race command
    race_p = subparsers.add_parser("race", help="Cadence and pace for a race goal")
    race_p.add_argument("--distance", required=True, help="Race distance (5k, 10k, half, marathon)")
    race_p.add_argument("--target", required=True, help="Target time (e.g., '1:45:00' or '25:00')")
    add_profile_args(race_p)

    # Metronome command
    metronome_p = subparsers.add_parser("metronome", help="Run the cadence metronome")
    presets = ", ".join(str(p) for p in settings.metronome_presets)
    metronome_p.add_argument(
        "--bpm",
        type=float,
        default=settings.default_bpm,
        help=f"Tempo in steps per minute (common: {presets})",
    )
    metronome_p.add_argument("--seconds", type=float, default=30.0, help="How long to run")
    metronome_p.add_argument("--volume", type=float, default=settings.volume, help="Volume 0-1")
    metronome_p.add_argument("--bell", action="store_true", help="Ring the terminal bell on each beat")
    metronome_p.add_argument("--no-feedback", action="store_true", help="Only print beats")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    commands = {
        "analyze": cmd_analyze,
        "targets": cmd_targets,
        "terrain": cmd_terrain,
        "race": cmd_race,
        "metronome": cmd_metronome,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except CadenceCoachError as e:
        console.print(f"[red]{e.message}[/red]")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
