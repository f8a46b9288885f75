"""Tests for the production gate and per-unit reports."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from build_limits.limits import BuildingLimit, RuleSet
from build_limits.models import ActorWorld
from build_limits.production import (
    production_allowed, evaluate_unit, evaluate_units, filter_allowed,
)


def test_unlimited_unit_always_allowed(skirmish_rules, empty_world, player):
    assert production_allowed(skirmish_rules, "e1", empty_world, player) is True


def test_start_limiters_hold_back_until_met(skirmish_rules, player):
    """Barracks need both power and a refinery."""
    world = ActorWorld.from_counts({player: {"powr": 1}})
    assert production_allowed(skirmish_rules, "barr", world, player) is False
    world.add_actor(player, "proc")
    assert production_allowed(skirmish_rules, "barr", world, player) is True


def test_stop_limiters_win_over_start(skirmish_rules, player):
    """Harvesters stop at 4 refineries even though the start trigger is met."""
    world = ActorWorld.from_counts({player: {"proc": 4}})
    assert skirmish_rules.start_limits_met("harv", world, player) is True
    assert production_allowed(skirmish_rules, "harv", world, player) is False


def test_stop_only_rule_ignores_vacuous_start(player):
    """A stop-only rule with ALL start semantics must not block on the empty start set."""
    rs = RuleSet(rules=(BuildingLimit(limited_unit="Tank", stop_triggers={"Refinery": 2},
                                      aggregate_all_for_start=True),))
    world = ActorWorld.from_counts({player: {"Refinery": 1}})
    assert production_allowed(rs, "Tank", world, player) is True
    world.add_actor(player, "Refinery")
    assert production_allowed(rs, "Tank", world, player) is False


def test_evaluate_unit_report(skirmish_rules, early_world, player):
    report = evaluate_unit(skirmish_rules, "harv", early_world, player)
    assert report.has_rule is True
    assert report.has_start_limiters is True
    assert report.has_stop_limiters is True
    assert report.start_limits_met is True
    assert report.stop_limits_met is False
    assert report.production_allowed is True
    assert report.trigger_counts == {"proc": 1}


def test_evaluate_unknown_unit(skirmish_rules, early_world, player):
    report = evaluate_unit(skirmish_rules, "e1", early_world, player)
    assert report.has_rule is False
    assert report.production_allowed is True
    assert report.trigger_counts == {}
    assert report.to_dict()["unit_name"] == "e1"


def test_evaluate_units_defaults_to_all_rules(skirmish_rules, early_world, player):
    reports = evaluate_units(skirmish_rules, [], early_world, player)
    assert [r.unit_name for r in reports] == ["harv", "barr", "silo"]
    reports = evaluate_units(skirmish_rules, ["silo"], early_world, player)
    assert [r.unit_name for r in reports] == ["silo"]


def test_filter_allowed_keeps_order(skirmish_rules, early_world, player):
    candidates = ["silo", "e1", "barr", "harv"]
    assert filter_allowed(skirmish_rules, candidates, early_world, player) == ["e1", "barr", "harv"]
