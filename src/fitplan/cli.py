"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from fitplan.agent.response import AgentResponse, failure, respond
from fitplan.config import get_settings, reload_settings
from fitplan.data.loaders import PlanFile, load_body_stats, load_daily_logs, load_plan_file
from fitplan.planning.engine import (
    DerivedGoal,
    adjust_calorie_target,
    derive_goal,
    refeed_day_macros,
)
from fitplan.profiles.body_calc import (
    calculate_bmi,
    calculate_fat_mass,
    calculate_lean_mass,
    calculate_waist_to_height,
    estimate_navy_body_fat,
)
from fitplan.projection.trajectory import landing_rate, project_weight_loss, weeks_to_goal
from fitplan.tracking.adherence import AdherenceStatus, assess_adherence
from fitplan.tracking.ema import calculate_trend
from fitplan.tracking.progress import ProgressStatus, assess_progress

app = typer.Typer(
    help="Fitness transformation planning: calorie targets, projections and progress tracking",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show or create the configuration file")
app.add_typer(config_app, name="config")

STATUS_STYLES = {
    ProgressStatus.GATHERING.value: "blue",
    ProgressStatus.SLOW.value: "yellow",
    ProgressStatus.ON_TRACK.value: "green",
    ProgressStatus.FAST.value: "red",
    AdherenceStatus.ON_TRACK.value: "green",
    AdherenceStatus.NEEDS_ATTENTION.value: "yellow",
    AdherenceStatus.OFF_TRACK.value: "red",
}


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: AgentResponse) -> None:
    """Print a response envelope as JSON to stdout."""
    print(response.to_json())


def fail(command: str, error: Exception | str, json_output: bool) -> NoReturn:
    """Report an error and exit with status 1."""
    if json_output:
        output_json(failure(command, error))
    else:
        console.print(f"[red]Error:[/red] {error}")
    raise typer.Exit(1)


def parse_date_option(value: Optional[str], name: str) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise typer.BadParameter(f"{value!r} is not a YYYY-MM-DD date", param_hint=name)


def read_plan(command: str, plan_file: Path, json_output: bool) -> PlanFile:
    try:
        return load_plan_file(plan_file)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        fail(command, exc, json_output)


def derive_with_settings(plan: PlanFile) -> DerivedGoal:
    settings = get_settings()
    return derive_goal(
        plan.profile,
        plan.goal,
        multipliers=settings.activity.multipliers,
        min_calories=settings.safety.min_daily_calories,
    )


def render_plan(derived: DerivedGoal, title: str) -> None:
    table = Table(title=title)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("BMR", f"{derived.bmr} kcal")
    table.add_row("Maintenance", f"{derived.maintenance_calories} kcal")
    table.add_row("Activity (daily)", f"{derived.daily_activity_calories} kcal")
    table.add_row("Daily deficit", f"{derived.daily_deficit} kcal")
    table.add_row("Net deficit (with activity)", f"{derived.implied_daily_deficit} kcal")
    table.add_row("[bold]Calorie target[/bold]", f"[bold]{derived.daily_calorie_target} kcal[/bold]")
    table.add_row("Protein", f"{derived.protein_grams} g")
    table.add_row("Fat", f"{derived.fat_grams} g")
    table.add_row("Carbs", f"{derived.carb_grams} g")
    table.add_row("Refeed day", f"{derived.refeed_day_calories} kcal")
    table.add_row("Diet break", f"{derived.diet_break_calories} kcal")
    table.add_row("Fat loss / week", f"{derived.weekly_fat_loss_kg:.2f} kg")
    console.print(table)


# ============================================================================
# Main Commands
# ============================================================================


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to config.yaml (default: ~/.fitplan/config.yaml)"
    ),
) -> None:
    """Load configuration and set up logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    try:
        reload_settings(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(1)


@app.command()
def plan(
    plan_file: Path = typer.Argument(..., help="YAML file with profile and goal sections"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Derive calorie, deficit and macro targets for a goal."""
    data = read_plan("plan", plan_file, json_output)
    derived = derive_with_settings(data)
    refeed = refeed_day_macros(data.profile, data.goal, derived)

    warnings = []
    if derived.is_aggressive:
        warnings.append(
            "Goal needs a larger deficit than the safety cap allows; "
            "the target weight will take longer than the timeframe."
        )
    if derived.carb_grams == 0:
        warnings.append("Protein floor and fat use the whole calorie target; carbs are zero.")

    if json_output:
        output_json(respond(
            "plan",
            data={
                "profile": data.profile.to_dict(),
                "goal": data.goal.to_dict(),
                "derived": derived.to_dict(),
                "refeed_day_macros": refeed.to_dict(),
            },
            warnings=warnings,
            summary=(
                f"{derived.daily_calorie_target} kcal/day, "
                f"P{derived.protein_grams}/F{derived.fat_grams}/C{derived.carb_grams} g"
            ),
        ))
        return

    render_plan(derived, "Daily Plan")
    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def adjust(
    plan_file: Path = typer.Argument(..., help="YAML file with profile and goal sections"),
    calories: int = typer.Argument(..., help="Desired daily calorie target"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Apply a custom calorie target (never below the safety minimum)."""
    data = read_plan("adjust", plan_file, json_output)
    derived = derive_with_settings(data)
    adjusted = adjust_calorie_target(
        data.profile,
        data.goal,
        derived,
        calories,
        min_calories=get_settings().safety.min_daily_calories,
    )

    warnings = []
    if adjusted.daily_calorie_target != calories:
        warnings.append(
            f"Requested {calories} kcal raised to the safety minimum "
            f"of {adjusted.daily_calorie_target} kcal."
        )

    if json_output:
        output_json(respond(
            "adjust",
            data={"derived": adjusted.to_dict(), "requested_calories": calories},
            warnings=warnings,
            summary=f"Adjusted target: {adjusted.daily_calorie_target} kcal/day",
        ))
        return

    render_plan(adjusted, "Adjusted Plan")
    for warning in warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def project(
    plan_file: Path = typer.Argument(..., help="YAML file with profile and goal sections"),
    water: Optional[bool] = typer.Option(
        None, "--water/--no-water", help="Include week-1 water weight drop"
    ),
    fit_timeframe: bool = typer.Option(
        False,
        "--fit-timeframe",
        help="Use the rate that lands on target at the end of the timeframe instead of the goal's deficit rate",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Project the weekly weight curve for a goal."""
    data = read_plan("project", plan_file, json_output)
    settings = get_settings()
    goal = data.goal
    start = goal.resolve_current_weight(data.profile)
    include_water = settings.projection.include_water_weight if water is None else water
    if fit_timeframe:
        rate = landing_rate(start, goal.target_weight, goal.time_frame_weeks)
    else:
        rate = goal.effective_deficit_rate

    points = project_weight_loss(
        start_weight=start,
        target_weight=goal.target_weight,
        time_frame_weeks=goal.time_frame_weeks,
        deficit_rate=rate,
        include_water_weight=include_water,
        water_weight_fraction=settings.projection.water_weight_fraction,
    )
    weeks_needed = weeks_to_goal(start, goal.target_weight, goal.effective_deficit_rate)

    if json_output:
        output_json(respond(
            "project",
            data={
                "series": [p.to_dict() for p in points],
                "weekly_rate_percent": round(rate, 3),
                "weeks_to_goal_at_deficit_rate": weeks_needed,
            },
            summary=(
                f"{start:.1f} → {points[-1].projected_weight:.1f} kg "
                f"over {goal.time_frame_weeks} weeks"
            ),
        ))
        return

    table = Table(title=f"Projected Weight ({rate:.2f}%/week)")
    table.add_column("Week", justify="right", style="cyan")
    table.add_column("Weight (kg)", justify="right")
    table.add_column("", justify="right")
    previous = None
    for point in points:
        delta = "" if previous is None else f"{point.projected_weight - previous:+.1f}"
        previous = point.projected_weight
        table.add_row(str(point.week), f"{point.projected_weight:.1f}", delta)
    console.print(table)
    console.print(
        f"At {goal.effective_deficit_rate}%/week the target takes about "
        f"[bold]{weeks_needed}[/bold] weeks."
    )


@app.command()
def trend(
    stats_file: Path = typer.Argument(..., help="Body stats CSV (date,weight,...)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show daily weights with their smoothed trend."""
    try:
        loaded = load_body_stats(stats_file)
    except (OSError, ValueError) as exc:
        fail("trend", exc, json_output)

    trends = calculate_trend(
        [e.weight for e in loaded.entries], get_settings().tracking.smoothing
    )

    if json_output:
        output_json(respond(
            "trend",
            data={
                "entries": [
                    {"date": e.date.isoformat(), "weight": e.weight, "trend": round(t, 2)}
                    for e, t in zip(loaded.entries, trends)
                ],
                "skipped_entries": loaded.skipped,
            },
            warnings=loaded.warnings,
            summary=f"{len(trends)} entries",
        ))
        return

    if not loaded.entries:
        console.print("No weight entries found")
        return

    table = Table(title="Weight Trend")
    table.add_column("Date", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Trend", justify="right", style="blue")
    table.add_column("", justify="right")

    prev_trend = None
    for entry, value in zip(loaded.entries, trends):
        delta = "" if prev_trend is None else f"{value - prev_trend:+.2f}"
        prev_trend = value
        table.add_row(entry.date.isoformat(), f"{entry.weight:.1f}", f"{value:.1f}", delta)
    console.print(table)
    for warning in loaded.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def progress(
    plan_file: Path = typer.Argument(..., help="YAML file with profile and goal sections"),
    stats_file: Path = typer.Argument(..., help="Body stats CSV (date,weight,...)"),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Assess as of date (YYYY-MM-DD, default: today)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compare the recent weight trend with the planned rate."""
    data = read_plan("progress", plan_file, json_output)
    as_of_date = parse_date_option(as_of, "--as-of")
    try:
        loaded = load_body_stats(stats_file)
    except (OSError, ValueError) as exc:
        fail("progress", exc, json_output)

    tracking = get_settings().tracking
    assessment = assess_progress(
        loaded.entries,
        start_weight=data.goal.resolve_current_weight(data.profile),
        target_weight=data.goal.target_weight,
        time_frame_weeks=data.goal.time_frame_weeks,
        as_of=as_of_date,
        window_days=tracking.progress_window_days,
        min_days=tracking.progress_min_days,
        smoothing=tracking.smoothing,
    )
    result = assessment.to_dict()
    result["skipped_entries"] = loaded.skipped

    if json_output:
        output_json(respond(
            "progress",
            data=result,
            warnings=loaded.warnings,
            summary=assessment.message,
        ))
        return

    style = STATUS_STYLES[assessment.status.value]
    lines = [f"[{style}]{assessment.status.value}[/{style}]  {assessment.message}"]
    if assessment.weekly_loss is not None:
        lines.append(
            f"Trend: {assessment.weekly_loss:.2f} kg/week "
            f"(planned {assessment.expected_weekly_loss:.2f} kg/week)"
        )
    lines.append(f"Days logged in window: {assessment.days_in_window}")
    console.print(Panel("\n".join(lines), title="Progress"))
    for warning in loaded.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def adherence(
    plan_file: Path = typer.Argument(..., help="YAML file with profile and goal sections"),
    logs_file: Path = typer.Argument(..., help="Daily logs CSV (date,calories_in,...)"),
    start_date: Optional[str] = typer.Option(
        None, "--start-date", help="Plan start (YYYY-MM-DD, default: plan file or first log)"
    ),
    as_of: Optional[str] = typer.Option(None, "--as-of", help="Report as of date (YYYY-MM-DD, default: today)"),
    target: Optional[float] = typer.Option(None, "--target", help="Weekly adherence target in percent"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Score logging streaks and consistency."""
    data = read_plan("adherence", plan_file, json_output)
    as_of_date = parse_date_option(as_of, "--as-of")
    start = parse_date_option(start_date, "--start-date") or data.start_date
    try:
        loaded = load_daily_logs(logs_file)
    except (OSError, ValueError) as exc:
        fail("adherence", exc, json_output)

    if start is None:
        start = loaded.entries[0].date if loaded.entries else (as_of_date or date.today())

    tracking = get_settings().tracking
    derived = derive_with_settings(data)
    report = assess_adherence(
        loaded.entries,
        start_date=start,
        daily_calorie_target=derived.daily_calorie_target,
        weekly_adherence_target=target if target is not None else tracking.weekly_adherence_target,
        as_of=as_of_date,
        streak_window_days=tracking.streak_window_days,
    )
    result = report.to_dict()
    result["skipped_entries"] = loaded.skipped

    if json_output:
        output_json(respond(
            "adherence",
            data=result,
            warnings=loaded.warnings,
            summary=(
                f"{report.status.value}: {report.weekly_adherence}% this week, "
                f"{report.streak}-day streak"
            ),
        ))
        return

    style = STATUS_STYLES[report.status.value]
    table = Table(title="Adherence")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Status", f"[{style}]{report.status.value}[/{style}]")
    table.add_row("Streak", f"{report.streak} days")
    table.add_row("This week", f"{report.weekly_adherence}%")
    table.add_row("Since start", f"{report.total_adherence}%")
    table.add_row("Days logged", str(report.days_logged))
    table.add_row("Days on target", str(report.days_on_target))
    console.print(table)
    for warning in loaded.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")


@app.command()
def body(
    plan_file: Path = typer.Argument(..., help="YAML file with profile and goal sections"),
    waist: Optional[float] = typer.Option(None, "--waist", help="Waist circumference (cm)"),
    neck: Optional[float] = typer.Option(None, "--neck", help="Neck circumference (cm)"),
    hip: Optional[float] = typer.Option(None, "--hip", help="Hip circumference (cm), needed for women"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show body composition indicators for the profile."""
    data = read_plan("body", plan_file, json_output)
    profile = data.profile

    result: dict = {"bmi": calculate_bmi(profile.weight, profile.height)}
    body_fat = profile.body_fat_percentage
    if waist is not None:
        result["waist_to_height"] = calculate_waist_to_height(waist, profile.height)
        if neck is not None:
            estimate = estimate_navy_body_fat(profile.gender, waist, neck, profile.height, hip)
            result["navy_body_fat"] = estimate
            if body_fat is None:
                body_fat = estimate
    if body_fat is not None:
        result["body_fat_percentage"] = body_fat
        result["lean_mass"] = calculate_lean_mass(profile.weight, body_fat)
        result["fat_mass"] = calculate_fat_mass(profile.weight, body_fat)

    if json_output:
        output_json(respond("body", data=result, summary=f"BMI {result['bmi']}"))
        return

    table = Table(title="Body Composition")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in result.items():
        table.add_row(key.replace("_", " ").capitalize(), "-" if value is None else str(value))
    console.print(table)


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the active configuration."""
    settings = get_settings()
    if json_output:
        output_json(respond("config show", data=settings.to_dict()))
        return

    console.print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    path: Optional[Path] = typer.Option(None, "--path", help="Where to write config.yaml"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with the default values."""
    from fitplan.config.settings import Settings, default_config_path

    target = path or default_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]{target} already exists[/yellow] (use --force to overwrite)")
        raise typer.Exit(1)

    Settings().save(target)
    console.print(f"[green]Wrote[/green] {target}")


