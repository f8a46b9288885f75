"""
Production Limit Rules - Output Formatting
============================================
Pretty-printing for rule listings and limit reports.
"""

from typing import Hashable, List, Mapping, Optional

from build_limits.limits import BuildingLimit, RuleSet
from build_limits.models import LimitReport


def fmt_mode(aggregate_all: bool) -> str:
    return "ALL" if aggregate_all else "ANY"


def fmt_triggers(triggers: Optional[Mapping[str, int]]) -> str:
    if not triggers:
        return "-"
    return ", ".join(f"{name}>={n}" for name, n in triggers.items())


def fmt_bool(val: bool) -> str:
    return "yes" if val else "no"


def print_rule_set(rule_set: RuleSet, title: str = ""):
    print()
    print("=" * 70)
    print("  PRODUCTION LIMIT RULES")
    if title:
        print(f"  Source: {title}")
    print(f"  Rules: {len(rule_set)}")
    print("=" * 70)

    for i, rule in enumerate(rule_set.rules):
        print_rule(rule, i + 1)


def print_rule(rule: BuildingLimit, index: int):
    print()
    print(f" {index:>3}. {rule.limited_unit or '(unnamed)'}")
    print(f"      start [{fmt_mode(rule.aggregate_all_for_start)}]: {fmt_triggers(rule.start_triggers)}")
    print(f"      stop  [{fmt_mode(rule.aggregate_all_for_stop)}]: {fmt_triggers(rule.stop_triggers)}")


def print_limit_reports(reports: List[LimitReport], player: Hashable):
    print()
    print(f"--- LIMIT CHECK: player {player} ---")
    print(f" {'Unit':<18} {'Rule':>4} {'Start?':>7} {'Start met':>9} {'Stop?':>6} {'Stop met':>8} {'Build':>6}")
    print(f" {'----':<18} {'----':>4} {'------':>7} {'---------':>9} {'-----':>6} {'--------':>8} {'-----':>6}")

    for r in reports:
        print(f" {r.unit_name[:18]:<18} {fmt_bool(r.has_rule):>4} "
              f"{fmt_bool(r.has_start_limiters):>7} {fmt_bool(r.start_limits_met):>9} "
              f"{fmt_bool(r.has_stop_limiters):>6} {fmt_bool(r.stop_limits_met):>8} "
              f"{fmt_bool(r.production_allowed):>6}")

    counted = [r for r in reports if r.trigger_counts]
    if counted:
        print()
        print("--- TRIGGER COUNTS ---")
        for r in counted:
            counts = ", ".join(f"{t}={n}" for t, n in r.trigger_counts.items())
            print(f" {r.unit_name[:18]:<18} {counts}")
