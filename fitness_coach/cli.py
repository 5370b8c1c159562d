"""Command-line interface for the fitness coaching application."""

import argparse
import sqlite3
import sys
from datetime import date

from fitness_coach import backup, store
from fitness_coach.calculators import (
    cm_to_feet_inches,
    feet_inches_to_cm,
    format_targets,
    suggest_target_weight,
    validate_profile_inputs,
)
from fitness_coach.calibrator import run_calibration, set_manual_bias
from fitness_coach.config import (
    ACTIVITY_STYLES,
    CALIBRATION_HISTORY_LIMIT,
    DEFAULT_TIMEZONE,
    GOAL_MODES,
    SEXES,
    configure_logging,
)
from fitness_coach.db import init_db
from fitness_coach.models import GoalSettings, UserProfile
from fitness_coach.tracker import (
    compute_daily_targets,
    format_day_report,
    is_editable_date,
    local_now,
    progress_frame,
    rolling_average_weight,
    run_daily_pass,
    weekly_weight_averages,
)


def _get_profile() -> UserProfile:
    profile = store.get_user_profile()
    if not profile:
        print("No profile found. Create one first:")
        print("  python -m fitness_coach profile create")
        sys.exit(1)
    return profile


def _get_goals() -> GoalSettings:
    goals = store.get_goal_settings()
    if not goals:
        print("No goals set. Set them first:")
        print("  python -m fitness_coach goals set --mode fat-loss --rate 1 --activity standard")
        sys.exit(1)
    return goals


def _check_profile_inputs(age: int, weight: float, tz: str) -> None:
    errors = validate_profile_inputs(age, weight, tz)
    if errors:
        for message in errors.values():
            print(message)
        sys.exit(1)


def _parse_day(value) -> date:
    return date.fromisoformat(value) if value else local_now(store.get_user_profile()).date()


# --- Command handlers ---

def cmd_profile_create(args):
    _check_profile_inputs(args.age, args.weight, args.timezone)
    stamp = store.now_millis()
    profile = UserProfile(
        sex=args.sex,
        age_years=args.age,
        height_cm=feet_inches_to_cm(args.feet, args.inches),
        starting_weight_lb=args.weight,
        timezone=args.timezone,
        created_at=stamp,
        updated_at=stamp,
    )
    store.set_user_profile(profile)
    print("Profile saved.")


def cmd_profile_show(args):
    profile = _get_profile()
    ft, inches = cm_to_feet_inches(profile.height_cm)
    print(f"Sex:      {profile.sex}")
    print(f"Age:      {profile.age_years}")
    print(f"Height:   {ft}'{inches}\" ({profile.height_cm:.0f} cm)")
    print(f"Start:    {profile.starting_weight_lb:.1f} lb")
    print(f"Timezone: {profile.timezone}")


def cmd_profile_update(args):
    profile = _get_profile()
    if args.age is not None:
        profile.age_years = args.age
    if args.weight is not None:
        profile.starting_weight_lb = args.weight
    if args.feet is not None or args.inches is not None:
        ft, inches = cm_to_feet_inches(profile.height_cm)
        if args.feet is not None:
            ft = args.feet
        if args.inches is not None:
            inches = args.inches
        profile.height_cm = feet_inches_to_cm(ft, inches)
    if args.timezone is not None:
        profile.timezone = args.timezone

    _check_profile_inputs(profile.age_years, profile.starting_weight_lb, profile.timezone)
    profile.updated_at = store.now_millis()
    store.set_user_profile(profile)
    print("Profile updated.")


def cmd_goals_set(args):
    profile = _get_profile()
    current = store.get_goal_settings()

    if args.target_weight is not None:
        target_weight, customized = args.target_weight, True
    elif current and current.target_weight_customized and current.mode == args.mode:
        target_weight, customized = current.target_weight_lb, True
    else:
        target_weight = suggest_target_weight(args.mode, profile.starting_weight_lb)
        customized = False

    goals = GoalSettings(
        mode=args.mode,
        goal_rate=0 if args.mode == "maintenance" else abs(args.rate),
        activity_style=args.activity,
        target_weight_lb=target_weight,
        target_weight_customized=customized,
        target_phase_weeks=args.phase_weeks if args.mode == "maintenance" else None,
        start_date=current.start_date if current else local_now(profile).date().isoformat(),
        updated_at=store.now_millis(),
    )
    store.set_goal_settings(goals)
    print("Goals saved.")
    cmd_goals_show(args)


def cmd_goals_show(args):
    goals = _get_goals()
    print(f"Mode:     {goals.mode}")
    print(f"Rate:     {goals.goal_rate:g} lb/week")
    print(f"Activity: {goals.activity_style}")
    if goals.target_weight_lb is not None:
        suffix = " (custom)" if goals.target_weight_customized else " (suggested)"
        print(f"Target:   {goals.target_weight_lb:.1f} lb{suffix}")
    if goals.target_phase_weeks:
        print(f"Phase:    {goals.target_phase_weeks} weeks")
    if goals.start_date:
        print(f"Started:  {goals.start_date}")


def cmd_targets(args):
    profile = _get_profile()
    goals = _get_goals()
    day = _parse_day(args.date)
    model = store.get_adaptive_model()
    logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT)
    print(format_targets(compute_daily_targets(profile, goals, model, logs, day)))


def cmd_log_add(args):
    profile = _get_profile()
    day = _parse_day(args.date)
    if not is_editable_date(day, local_now(profile).date()):
        print("Logs can only be edited for today and the previous 7 days.")
        sys.exit(1)

    fields = {}
    if args.weight is not None:
        fields["weight_lb"] = args.weight if args.weight > 0 else None
    if args.calories is not None:
        fields["calories"] = args.calories
    if args.steps is not None:
        fields["steps"] = args.steps
    if args.azm is not None:
        fields["azm"] = args.azm
    if args.workout is not None:
        fields["workout_done"] = args.workout

    log = store.update_daily_log(day.isoformat(), **fields)
    weight = f"{log.weight_lb:.1f} lb" if log.weight_logged else "-"
    print(f"Logged {log.date_iso}: weight {weight}, {log.calories:.0f} kcal, "
          f"{log.steps} steps, {log.azm} AZM")


def cmd_log_list(args):
    logs = store.get_daily_logs(args.limit)
    if not logs:
        print("No logs yet.")
        return

    print(f"{'Date':<12}  {'Weight':>7}  {'Cal':>6}  {'Steps':>6}  {'AZM':>4}  {'Workout'}")
    print("-" * 52)
    for log in logs:
        weight = f"{log.weight_lb:.1f}" if log.weight_logged else "-"
        workout = "yes" if log.workout_done else ""
        print(f"{log.date_iso:<12}  {weight:>7}  {log.calories:>6.0f}  "
              f"{log.steps:>6}  {log.azm:>4}  {workout}")


def cmd_log_delete(args):
    day = date.fromisoformat(args.date)
    if store.delete_daily_log(day.isoformat()):
        print(f"Deleted log for {day.isoformat()}")
    else:
        print(f"No log found for {day.isoformat()}")


def cmd_today(args):
    day = date.fromisoformat(args.date) if args.date else None
    report, calibration = run_daily_pass(day)
    if report is None:
        print("Finish setup first: create a profile and set goals.")
        sys.exit(1)
    if calibration:
        print(calibration.message)
        print()
    print(format_day_report(report))


def cmd_progress(args):
    profile = _get_profile()
    goals = _get_goals()

    calibration = run_calibration(local_now(profile))
    if calibration:
        print(calibration.message)
        print()

    model = store.get_adaptive_model()
    logs = store.get_daily_logs(CALIBRATION_HISTORY_LIMIT)
    if not logs:
        print("No logs yet. Keep logging to see your trends.")
        return

    rolling = rolling_average_weight(logs)
    print(f"Rolling weight: {rolling:.1f} lb" if rolling else "Rolling weight: ---")
    print(f"Adaptive bias:  {model.tdee_bias:+.0f} kcal")
    if model.last_calibration_date:
        print(f"Last adjusted:  {model.last_calibration_date}")

    weekly = weekly_weight_averages(progress_frame(profile, goals, model, logs))
    if not weekly.empty:
        print(f"\n{'Week of':<12}  {'Avg lb':>7}  {'Weigh-ins':>9}")
        print("-" * 32)
        for row in weekly.itertuples(index=False):
            print(f"{row.Week.date().isoformat():<12}  {row.Weight:>7.1f}  {row[2]:>9}")


def cmd_bias_show(args):
    model = store.get_adaptive_model()
    print(f"TDEE bias: {model.tdee_bias:+.0f} kcal/day")
    print(f"Last calibration: {model.last_calibration_date or 'never'}")


def cmd_bias_set(args):
    model = set_manual_bias(args.value)
    print(f"TDEE bias set to {model.tdee_bias:+.0f} kcal/day")


def cmd_export(args):
    count = backup.write_export(args.file)
    print(f"Exported {count} daily logs to {args.file}")


def cmd_import(args):
    try:
        count = backup.read_import(args.file)
    except (OSError, ValueError) as e:
        print(f"Import failed: {e}")
        sys.exit(1)
    print(f"Imported backup with {count} daily logs.")


def cmd_reset(args):
    if not args.yes:
        print("This deletes every profile, goal and log. Re-run with --yes to confirm.")
        sys.exit(1)
    store.reset_all_data()
    print("All data deleted.")


# --- Argument parser ---

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fitness_coach",
        description="Adaptive calorie targets and daily coaching",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- profile ---
    profile_parser = subparsers.add_parser("profile", help="Manage user profile")
    profile_sub = profile_parser.add_subparsers(dest="subcommand")

    create_p = profile_sub.add_parser("create", help="Create the profile")
    create_p.add_argument("--age", type=int, required=True)
    create_p.add_argument("--weight", type=float, required=True, help="Starting weight in lbs")
    create_p.add_argument("--feet", type=int, required=True, help="Height (feet)")
    create_p.add_argument("--inches", type=int, required=True, help="Height (inches)")
    create_p.add_argument("--sex", choices=SEXES, required=True)
    create_p.add_argument("--timezone", default=DEFAULT_TIMEZONE)
    create_p.set_defaults(func=cmd_profile_create)

    show_p = profile_sub.add_parser("show", help="Show the profile")
    show_p.set_defaults(func=cmd_profile_show)

    update_p = profile_sub.add_parser("update", help="Update the profile")
    update_p.add_argument("--age", type=int)
    update_p.add_argument("--weight", type=float, help="Starting weight in lbs")
    update_p.add_argument("--feet", type=int, help="Height (feet)")
    update_p.add_argument("--inches", type=int, help="Height (inches)")
    update_p.add_argument("--timezone")
    update_p.set_defaults(func=cmd_profile_update)

    # --- goals ---
    goals_parser = subparsers.add_parser("goals", help="Manage goal settings")
    goals_sub = goals_parser.add_subparsers(dest="subcommand")

    set_g = goals_sub.add_parser("set", help="Replace the active goal")
    set_g.add_argument("--mode", choices=GOAL_MODES, required=True)
    set_g.add_argument("--rate", type=float, default=1.0, help="lb/week (ignored for maintenance)")
    set_g.add_argument("--activity", choices=ACTIVITY_STYLES, default="standard")
    set_g.add_argument("--target-weight", type=float, help="Target weight in lbs")
    set_g.add_argument("--phase-weeks", type=int, default=12, help="Maintenance phase length")
    set_g.set_defaults(func=cmd_goals_set)

    show_g = goals_sub.add_parser("show", help="Show the active goal")
    show_g.set_defaults(func=cmd_goals_show)

    # --- targets ---
    targets_p = subparsers.add_parser("targets", help="Show daily targets")
    targets_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    targets_p.set_defaults(func=cmd_targets)

    # --- log ---
    log_parser = subparsers.add_parser("log", help="Log daily metrics")
    log_sub = log_parser.add_subparsers(dest="subcommand")

    add_p = log_sub.add_parser("add", help="Log or update a day")
    add_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    add_p.add_argument("--weight", type=float, help="Weight in lbs (0 clears it)")
    add_p.add_argument("--calories", type=float)
    add_p.add_argument("--steps", type=int)
    add_p.add_argument("--azm", type=int, help="Active zone minutes")
    add_p.add_argument("--workout", action=argparse.BooleanOptionalAction, default=None)
    add_p.set_defaults(func=cmd_log_add)

    list_p = log_sub.add_parser("list", help="List recent logs")
    list_p.add_argument("--limit", type=int, default=14)
    list_p.set_defaults(func=cmd_log_list)

    delete_p = log_sub.add_parser("delete", help="Delete a day's log")
    delete_p.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    delete_p.set_defaults(func=cmd_log_delete)

    # --- today ---
    today_p = subparsers.add_parser("today", help="Show today's report and coach message")
    today_p.add_argument("--date", help="Date (YYYY-MM-DD), default: today")
    today_p.set_defaults(func=cmd_today)

    # --- progress ---
    progress_p = subparsers.add_parser("progress", help="Weekly trends and calibration")
    progress_p.set_defaults(func=cmd_progress)

    # --- bias ---
    bias_parser = subparsers.add_parser("bias", help="Adaptive TDEE bias")
    bias_sub = bias_parser.add_subparsers(dest="subcommand")

    bias_show = bias_sub.add_parser("show", help="Show the current bias")
    bias_show.set_defaults(func=cmd_bias_show)

    bias_set = bias_sub.add_parser("set", help="Manually override the bias")
    bias_set.add_argument("value", type=float, help="kcal/day, clamped to [-500, 500]")
    bias_set.set_defaults(func=cmd_bias_set)

    # --- backup ---
    export_p = subparsers.add_parser("export", help="Export all data to JSON")
    export_p.add_argument("file", help="Output JSON file path")
    export_p.set_defaults(func=cmd_export)

    import_p = subparsers.add_parser("import", help="Replace all data from a JSON backup")
    import_p.add_argument("file", help="JSON backup file")
    import_p.set_defaults(func=cmd_import)

    # --- reset ---
    reset_p = subparsers.add_parser("reset", help="Delete all data")
    reset_p.add_argument("--yes", action="store_true", help="Confirm deletion")
    reset_p.set_defaults(func=cmd_reset)

    return parser


def main(argv=None):
    configure_logging()
    init_db()
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    if hasattr(args, "func"):
        try:
            args.func(args)
        except sqlite3.Error as e:
            print(f"Storage error: {e}")
            sys.exit(1)
    elif args.command in ("profile", "goals", "log", "bias"):
        # Subcommand not specified
        sub = parser._subparsers._group_actions[0].choices[args.command]
        sub.print_help()
    else:
        parser.print_help()
