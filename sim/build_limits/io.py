"""
Production Limit Rules - I/O
==============================
Load and save limit rule sets and world snapshots from YAML files.
"""

import json
import re
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from build_limits.limits import BuildingLimit, ConfigurationError, RuleSet
from build_limits.models import ActorWorld
from build_limits.parity import (
    RULE_KEY, QUALIFIER_SEPARATOR, CONTAINER_KEY,
    FIELD_NAMES, TRIGGER_FIELDS, FLAG_FIELDS, DEFAULT_AGGREGATE_ALL,
)

_ATTRIBUTE_NAMES = {attr: attr for attr in FIELD_NAMES.values()}
_GAME_NAMES = {attr: game for game, attr in FIELD_NAMES.items()}


def load_rule_set(filepath: str) -> RuleSet:
    with open(filepath, "r") as f:
        data = yaml.safe_load(f)
    return parse_rule_set(data)


def parse_rule_set(data: Any) -> RuleSet:
    """Build a RuleSet from an already-parsed YAML document."""
    if data is None:
        return RuleSet()
    if not isinstance(data, dict):
        raise ConfigurationError("rule document must be a mapping at the top level")

    # The game nests the rules under the AI's LimitBuildingByActors field
    if CONTAINER_KEY in data:
        container = data[CONTAINER_KEY]
        if container is not None and not isinstance(container, dict):
            raise ConfigurationError(f"{CONTAINER_KEY} must be a mapping of rule nodes")
        stray = [k for k in data if _is_rule_key(k)]
        if stray:
            raise ConfigurationError(
                f"{stray[0]}: rule nodes must all sit under {CONTAINER_KEY}"
            )
        data = container or {}

    rules = []
    for key, body in data.items():
        if not _is_rule_key(key):
            continue
        rules.append(_parse_rule(str(key), body))
    return RuleSet(rules=tuple(rules))


def save_rule_set(rule_set: RuleSet, filepath: str):
    data = {CONTAINER_KEY: rule_set_to_dict(rule_set)}
    with open(filepath, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


def rule_set_to_dict(rule_set: RuleSet) -> Dict[str, Dict[str, Any]]:
    """Serialize to BuildingLimit@<unit> nodes using the game's field names."""
    data: Dict[str, Dict[str, Any]] = {}
    for i, rule in enumerate(rule_set.rules):
        key = f"{RULE_KEY}{QUALIFIER_SEPARATOR}{rule.limited_unit or i}"
        if key in data:
            key = f"{key}-{i}"
        data[key] = _rule_to_dict(rule, game_names=True)
    return data


def export_rule_set_json(rule_set: RuleSet, filepath: str):
    """Export rules as a JSON array for consumers that don't read YAML."""
    with open(filepath, "w") as f:
        json.dump(rules_to_json(rule_set), f, indent=2)


def rules_to_json(rule_set: RuleSet) -> List[Dict[str, Any]]:
    return [_rule_to_dict(rule, game_names=False) for rule in rule_set.rules]


# ---------------------------------------------------------------------------
# World snapshots
# ---------------------------------------------------------------------------

def load_world(filepath: str) -> ActorWorld:
    with open(filepath, "r") as f:
        data = yaml.safe_load(f)
    return parse_world(data)


def parse_world(data: Any) -> ActorWorld:
    """Build an ActorWorld from {players: {player: {actor_type: count}}}."""
    if data is None:
        return ActorWorld()
    if not isinstance(data, dict):
        raise ConfigurationError("world document must be a mapping at the top level")

    players = data.get("players") or {}
    if not isinstance(players, dict):
        raise ConfigurationError("players must be a mapping of player to actor counts")

    counts: Dict[Any, Dict[str, int]] = {}
    for player, per_type in players.items():
        per_type = per_type or {}
        if not isinstance(per_type, dict):
            raise ConfigurationError(f"players.{player}: expected a mapping of actor type to count")
        counts[player] = {}
        for type_name, n in per_type.items():
            n = _coerce_count(f"players.{player}.{type_name}", n)
            if n < 0:
                raise ConfigurationError(f"players.{player}.{type_name}: count must be >= 0")
            counts[player][str(type_name)] = n
    return ActorWorld.from_counts(counts)


def save_world(world: ActorWorld, filepath: str):
    data = {"players": {p: world.counts_for(p) for p in world.players()}}
    with open(filepath, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# ---------------------------------------------------------------------------
# Rule field binding helpers
# ---------------------------------------------------------------------------

def _is_rule_key(key: Any) -> bool:
    return str(key).split(QUALIFIER_SEPARATOR)[0] == RULE_KEY


def _parse_rule(key: str, body: Any) -> BuildingLimit:
    """Bind one BuildingLimit node's fields by name."""
    if body is None:
        body = {}
    if not isinstance(body, dict):
        raise ConfigurationError(f"{key}: expected a mapping of fields")

    kwargs: Dict[str, Any] = {
        "aggregate_all_for_stop": DEFAULT_AGGREGATE_ALL,
        "aggregate_all_for_start": DEFAULT_AGGREGATE_ALL,
    }
    for field_name, value in body.items():
        attr = FIELD_NAMES.get(field_name) or _ATTRIBUTE_NAMES.get(field_name)
        if attr is None:
            raise ConfigurationError(f"{key}: unknown field '{field_name}'")

        if attr in TRIGGER_FIELDS:
            kwargs[attr] = _parse_triggers(f"{key}.{field_name}", value)
        elif attr in FLAG_FIELDS:
            kwargs[attr] = _parse_flag(f"{key}.{field_name}", value)
        else:
            if isinstance(value, (dict, list)):
                raise ConfigurationError(f"{key}.{field_name}: expected a unit name, got {value!r}")
            kwargs[attr] = None if value is None else str(value)

    try:
        return BuildingLimit(**kwargs)
    except ConfigurationError as e:
        raise ConfigurationError(f"{key}: {e}") from e


def _parse_triggers(where: str, value: Any) -> Optional[Dict[str, int]]:
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ConfigurationError(f"{where}: expected a mapping of actor type to count")
    return {str(actor_type): _coerce_count(f"{where}.{actor_type}", n) for actor_type, n in value.items()}


def _coerce_count(where: str, value: Any) -> int:
    # Game rule files carry every scalar as text
    if isinstance(value, str) and re.fullmatch(r"-?[0-9]+", value.strip()):
        return int(value.strip())
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{where}: count must be an integer, got {value!r}")
    return value


def _parse_flag(where: str, value: Any) -> bool:
    if value is None:
        return DEFAULT_AGGREGATE_ALL
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigurationError(f"{where}: expected true or false, got {value!r}")


def _rule_to_dict(rule: BuildingLimit, game_names: bool) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for attr in ("limited_unit", "stop_triggers", "start_triggers",
                 "aggregate_all_for_stop", "aggregate_all_for_start"):
        value = getattr(rule, attr)
        if value is None:
            continue
        if attr in TRIGGER_FIELDS:
            value = dict(value)
        out[_GAME_NAMES[attr] if game_names else attr] = value
    return out
