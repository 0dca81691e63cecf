#!/usr/bin/env python3
"""
Training Science Engine - CLI Entry Point

Usage:
    python main.py vdot --distance M --time SEC
    python main.py paces --vdot V
    python main.py plan --weeks N [--distance KM]
    python main.py load --duration SEC --avg-hr HR --resting-hr HR --max-hr HR
                        [--days N] [--params FILE]
"""

import argparse
import json
from datetime import date, timedelta
from typing import Optional

from training_science.banister import BanisterModel, BanisterParams
from training_science.pace_zones import generate_pace_table_text, is_valid_vdot
from training_science.periodization import recommend_start_stage
from training_science.vdot import calculate_vdot, paces, race_paces, training_paces


def load_params(path: Optional[str]) -> BanisterParams:
    """Load Banister constants from a JSON file (defaults if no path)."""
    if path is None:
        return BanisterParams()

    with open(path) as f:
        params = BanisterParams.from_dict(json.load(f))

    valid, message = params.validate()
    if not valid:
        raise ValueError(f"Invalid parameters in {path}: {message}")
    return params


def run_vdot(distance_m: float, time_sec: float) -> float:
    """Print VDOT, equivalent race times and training paces."""
    vdot = calculate_vdot(distance_m, time_sec)
    print(f"VDOT: {vdot:.1f}")
    if not is_valid_vdot(vdot):
        print("  (outside the usual 20-85 range)")

    print("\nEquivalent race times:")
    per_km = race_paces(vdot)
    for name, finish in paces(vdot).items():
        print(f"  {name:<14} {finish:>8}  ({per_km[name]}/km)")

    print("\nTraining paces (per km):")
    for zone, pace_range in training_paces(vdot).items():
        print(f"  {zone:<14} {pace_range}")

    return vdot


def run_paces(vdot: float) -> str:
    """Print the planner pace table."""
    text = generate_pace_table_text(vdot)
    print(text)
    return text


def run_plan(weeks: int, distance_km: float) -> dict:
    """Print a start-stage recommendation as JSON."""
    recommendation = recommend_start_stage(weeks, distance_km)
    result = recommendation.to_dict()
    print(json.dumps(result, indent=2))
    return result


def run_load(
    duration_sec: float,
    avg_hr: float,
    resting_hr: float,
    max_hr: float,
    days: int = 7,
    params_path: Optional[str] = None
) -> float:
    """Print TRIMP for a session and the projected performance after it."""
    model = BanisterModel(load_params(params_path))
    trimp = model.calculate_trimp(duration_sec, avg_hr, resting_hr, max_hr)

    today = date.today()
    model.update(today, trimp)

    print(f"TRIMP: {trimp:.1f}")
    print(f"Performance today: {model.performance():.2f}")
    for offset in range(1, days + 1):
        day = today + timedelta(days=offset)
        print(f"  +{offset}d: {model.get_performance_for_date(day):.2f}")

    return trimp


def main():
    parser = argparse.ArgumentParser(description='Training Science Engine')
    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # VDOT command
    vdot_parser = subparsers.add_parser('vdot', help='VDOT from a race result')
    vdot_parser.add_argument('--distance', type=float, required=True, help='Distance (m)')
    vdot_parser.add_argument('--time', type=float, required=True, help='Finish time (s)')

    # Paces command
    paces_parser = subparsers.add_parser('paces', help='Planner pace table')
    paces_parser.add_argument('--vdot', type=float, required=True, help='VDOT')

    # Plan command
    plan_parser = subparsers.add_parser('plan', help='Recommend a start stage')
    plan_parser.add_argument('--weeks', type=int, required=True, help='Weeks until race')
    plan_parser.add_argument('--distance', type=float, default=21.1, help='Race distance (km)')

    # Load command
    load_parser = subparsers.add_parser('load', help='TRIMP and performance projection')
    load_parser.add_argument('--duration', type=float, required=True, help='Duration (s)')
    load_parser.add_argument('--avg-hr', type=float, required=True, help='Average HR')
    load_parser.add_argument('--resting-hr', type=float, default=60, help='Resting HR')
    load_parser.add_argument('--max-hr', type=float, default=180, help='Max HR')
    load_parser.add_argument('--days', type=int, default=7, help='Days to project')
    load_parser.add_argument('--params', default=None, help='Banister params JSON')

    args = parser.parse_args()

    if args.command == 'vdot':
        run_vdot(args.distance, args.time)
    elif args.command == 'paces':
        run_paces(args.vdot)
    elif args.command == 'plan':
        run_plan(args.weeks, args.distance)
    elif args.command == 'load':
        run_load(args.duration, args.avg_hr, args.resting_hr, args.max_hr,
                 args.days, args.params)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
