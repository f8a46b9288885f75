"""
Production Limit Rules - Rule File Parity Constants
=====================================================
Central registry of the names and defaults that must match the game's
AI rule files (LimitBuildingByActors / BuildingLimit blocks).
"""

# ---------------------------------------------------------------------------
# Top-level keys
# ---------------------------------------------------------------------------
# Each "BuildingLimit" or "BuildingLimit@<qualifier>" node is one rule.
# The game nests the rule nodes under the AI's LimitBuildingByActors field.

RULE_KEY = "BuildingLimit"
QUALIFIER_SEPARATOR = "@"
CONTAINER_KEY = "LimitBuildingByActors"

# ---------------------------------------------------------------------------
# BuildingLimit fields (game name -> attribute name)
# ---------------------------------------------------------------------------

FIELD_NAMES = {
    "LimitedBuilding":         "limited_unit",
    "StopProductionLimiters":  "stop_triggers",
    "StartProductionLimiters": "start_triggers",
    "CheckAllStopLimiters":    "aggregate_all_for_stop",
    "CheckAllStartLimiters":   "aggregate_all_for_start",
}

TRIGGER_FIELDS = ("stop_triggers", "start_triggers")
FLAG_FIELDS = ("aggregate_all_for_stop", "aggregate_all_for_start")

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
# Unset aggregation flags mean "any one trigger is enough".

DEFAULT_AGGREGATE_ALL = False
