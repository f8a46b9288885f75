"""
Production Limit Rules - CLI Entry Point
==========================================
Usage:
    python cli.py rules <file>
    python cli.py validate <file>
    python cli.py check <rules> <world> --player Multi0 [--unit tank ...]
    python cli.py export-json <rules> <out.json>
    python cli.py web [--port 8080]
"""

import argparse
import sys

from build_limits.io import load_rule_set, load_world, export_rule_set_json
from build_limits.limits import ConfigurationError
from build_limits.format import print_rule_set, print_limit_reports
from build_limits.production import evaluate_units


def _load_or_exit(filepath: str):
    try:
        return load_rule_set(filepath)
    except FileNotFoundError:
        print(f"[rules] Error: file not found: {filepath}")
        sys.exit(1)
    except ConfigurationError as e:
        print(f"[rules] Error in {filepath}: {e}")
        sys.exit(1)


def cmd_rules(args):
    rule_set = _load_or_exit(args.file)
    print_rule_set(rule_set, title=args.file)


def cmd_validate(args):
    rule_set = _load_or_exit(args.file)
    print(f"[rules] OK: {len(rule_set)} rule(s) in {args.file}")
    # Later rules for the same unit are never consulted
    seen = set()
    for rule in rule_set.rules:
        if rule.limited_unit is None:
            print("[rules] Warning: rule without LimitedBuilding never matches")
            continue
        key = rule.limited_unit.lower()
        if key in seen:
            print(f"[rules] Warning: duplicate rule for '{rule.limited_unit}' is shadowed")
        seen.add(key)


def cmd_check(args):
    rule_set = _load_or_exit(args.rules)
    try:
        world = load_world(args.world)
    except (FileNotFoundError, ConfigurationError) as e:
        print(f"[world] Error loading {args.world}: {e}")
        sys.exit(1)

    if args.player not in world.players():
        print(f"[world] Warning: player '{args.player}' owns no actors in {args.world}")

    reports = evaluate_units(rule_set, args.unit or [], world, args.player)
    print_limit_reports(reports, args.player)


def cmd_export_json(args):
    rule_set = _load_or_exit(args.rules)
    export_rule_set_json(rule_set, args.output)
    print(f"\nExported JSON to {args.output}")


def main():
    parser = argparse.ArgumentParser(
        description="Production Limit Rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", help="Command to run")

    # rules
    p_rules = sub.add_parser("rules", aliases=["ls"],
                             help="List the rules in a YAML file")
    p_rules.add_argument("file", help="Path to limit rules YAML file")

    # validate
    p_val = sub.add_parser("validate",
                           help="Check that a rules file loads")
    p_val.add_argument("file", help="Path to limit rules YAML file")

    # check
    p_chk = sub.add_parser("check", aliases=["eval"],
                           help="Evaluate rules against a world snapshot")
    p_chk.add_argument("rules", help="Path to limit rules YAML file")
    p_chk.add_argument("world", help="Path to world snapshot YAML file")
    p_chk.add_argument("--player", "-p", required=True,
                       help="Player whose actors are counted")
    p_chk.add_argument("--unit", "-u", action="append", default=None,
                       help="Unit to check (repeatable, default: every limited unit)")

    # export-json
    p_exp = sub.add_parser("export-json",
                           help="Export rules as JSON")
    p_exp.add_argument("rules", help="Path to limit rules YAML file")
    p_exp.add_argument("output", help="Output JSON path")

    # web
    p_web = sub.add_parser("web", aliases=["serve"],
                           help="Start the web service")
    p_web.add_argument("--port", type=int, default=8080,
                       help="Port to serve on (default: 8080)")

    args = parser.parse_args()

    if args.command in ("rules", "ls"):
        cmd_rules(args)
    elif args.command == "validate":
        cmd_validate(args)
    elif args.command in ("check", "eval"):
        cmd_check(args)
    elif args.command == "export-json":
        cmd_export_json(args)
    elif args.command in ("web", "serve"):
        from build_limits.web import start_server
        start_server(port=args.port)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
