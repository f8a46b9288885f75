"""
Production Limit Rules - Production Gate
==========================================
Combines the start and stop answers for one unit into a single
"may the AI queue this now" decision, the way the bot's production
loop consumes them.
"""

from typing import Hashable, Iterable, List

from build_limits.limits import RuleSet
from build_limits.models import LimitReport, WorldView


def production_allowed(rule_set: RuleSet, unit_name: str, world: WorldView, player: Hashable) -> bool:
    """False while stop limits are met, or while start limits are not yet met.

    Units without a rule are always allowed.
    """
    if rule_set.has_stop_limiters(unit_name) and rule_set.stop_limits_met(unit_name, world, player):
        return False
    if rule_set.has_start_limiters(unit_name) and not rule_set.start_limits_met(unit_name, world, player):
        return False
    return True


def evaluate_unit(rule_set: RuleSet, unit_name: str, world: WorldView, player: Hashable) -> LimitReport:
    rule = rule_set.lookup(unit_name)
    report = LimitReport(unit_name=unit_name, has_rule=rule is not None)
    if rule is not None:
        report.trigger_counts = {
            t: world.count_owned_actors_of_type(player, t) for t in rule.trigger_types()
        }
    report.has_start_limiters = rule_set.has_start_limiters(unit_name)
    report.has_stop_limiters = rule_set.has_stop_limiters(unit_name)
    report.start_limits_met = rule_set.start_limits_met(unit_name, world, player)
    report.stop_limits_met = rule_set.stop_limits_met(unit_name, world, player)
    report.production_allowed = production_allowed(rule_set, unit_name, world, player)
    return report


def evaluate_units(
    rule_set: RuleSet,
    unit_names: Iterable[str],
    world: WorldView,
    player: Hashable,
) -> List[LimitReport]:
    """Report on each unit in turn; defaults to every limited unit when empty."""
    names = list(unit_names) or rule_set.limited_units()
    return [evaluate_unit(rule_set, name, world, player) for name in names]


def filter_allowed(
    rule_set: RuleSet,
    candidates: Iterable[str],
    world: WorldView,
    player: Hashable,
) -> List[str]:
    """Drop candidates the limit rules currently hold back, keeping order."""
    return [name for name in candidates if production_allowed(rule_set, name, world, player)]
