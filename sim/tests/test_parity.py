"""Tests for rule file parity constants."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from build_limits.parity import (
    RULE_KEY, QUALIFIER_SEPARATOR, CONTAINER_KEY,
    FIELD_NAMES, TRIGGER_FIELDS, FLAG_FIELDS, DEFAULT_AGGREGATE_ALL,
)
from build_limits.limits import BuildingLimit


def test_rule_key():
    """Must match the game's node name: BuildingLimit@<qualifier>."""
    assert RULE_KEY == "BuildingLimit"
    assert QUALIFIER_SEPARATOR == "@"
    assert CONTAINER_KEY == "LimitBuildingByActors"


def test_field_names_match_game():
    assert set(FIELD_NAMES) == {
        "LimitedBuilding",
        "StopProductionLimiters",
        "StartProductionLimiters",
        "CheckAllStopLimiters",
        "CheckAllStartLimiters",
    }


def test_field_names_map_to_rule_attributes():
    """Every mapped attribute must exist on BuildingLimit."""
    attrs = set(BuildingLimit.__dataclass_fields__)
    assert set(FIELD_NAMES.values()) == attrs
    assert set(TRIGGER_FIELDS) <= attrs
    assert set(FLAG_FIELDS) <= attrs


def test_default_is_any_semantics():
    assert DEFAULT_AGGREGATE_ALL is False
    rule = BuildingLimit(limited_unit="Tank", stop_triggers={"Refinery": 1})
    assert rule.aggregate_all_for_stop is DEFAULT_AGGREGATE_ALL
    assert rule.aggregate_all_for_start is DEFAULT_AGGREGATE_ALL
