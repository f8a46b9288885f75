"""Shared test fixtures for the production limit rules test suite."""

import sys
from pathlib import Path

import pytest

# Ensure sim/ is on the path so `build_limits` imports work
SIM_ROOT = Path(__file__).parent.parent
if str(SIM_ROOT) not in sys.path:
    sys.path.insert(0, str(SIM_ROOT))

from build_limits.limits import BuildingLimit, RuleSet
from build_limits.models import ActorWorld


PLAYER = "Multi0"
ENEMY = "Multi1"


@pytest.fixture
def player():
    return PLAYER


@pytest.fixture
def empty_world():
    return ActorWorld()


@pytest.fixture
def tank_stop_rule():
    """Stop tanks once the player owns 2 refineries."""
    return BuildingLimit(
        limited_unit="Tank",
        stop_triggers={"Refinery": 2},
        aggregate_all_for_stop=False,
    )


@pytest.fixture
def tank_start_rule():
    """Start tanks only once both a barracks and a power plant exist."""
    return BuildingLimit(
        limited_unit="Tank",
        start_triggers={"Barracks": 1, "PowerPlant": 1},
        aggregate_all_for_start=True,
    )


@pytest.fixture
def skirmish_rules():
    """A small rule set resembling the bundled skirmish file."""
    return RuleSet(rules=(
        BuildingLimit(
            limited_unit="harv",
            stop_triggers={"proc": 4},
            start_triggers={"proc": 1},
        ),
        BuildingLimit(
            limited_unit="barr",
            start_triggers={"powr": 1, "proc": 1},
            aggregate_all_for_start=True,
        ),
        BuildingLimit(
            limited_unit="silo",
            start_triggers={"proc": 2},
        ),
    ))


@pytest.fixture
def early_world():
    """Player owns a power plant and one refinery; the enemy owns more."""
    return ActorWorld.from_counts({
        PLAYER: {"fact": 1, "powr": 1, "proc": 1, "harv": 1},
        ENEMY: {"fact": 1, "powr": 2, "proc": 4, "barr": 1},
    })


@pytest.fixture
def rules_path():
    return SIM_ROOT / "data" / "rules" / "ra_skirmish.yaml"


@pytest.fixture
def world_path():
    return SIM_ROOT / "data" / "worlds" / "early_game.yaml"
