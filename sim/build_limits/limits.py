"""
Production Limit Rules - Limit Engine
=======================================
Per-unit BuildingLimit rules and the RuleSet that resolves them by name.

A rule holds two independent trigger sets (start, stop), each mapping an
actor type name to a threshold count. A set is "met" under ALL semantics
when no trigger is below its threshold, and under ANY semantics when at
least one trigger is at or above it. Counts are re-read from the world
view on every call.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Hashable, Iterator, List, Mapping, Optional, Tuple

from build_limits.models import WorldView


class ConfigurationError(ValueError):
    """A limit rule (or the document it came from) is malformed."""


# ---------------------------------------------------------------------------
# Trigger checks
# ---------------------------------------------------------------------------

def actor_below_limit(world: WorldView, player: Hashable, actor_type: str, limit: int) -> bool:
    return world.count_owned_actors_of_type(player, actor_type) < limit


def actor_at_or_above_limit(world: WorldView, player: Hashable, actor_type: str, limit: int) -> bool:
    return world.count_owned_actors_of_type(player, actor_type) >= limit


def all_triggers_met(triggers: Optional[Mapping[str, int]], world: WorldView, player: Hashable) -> bool:
    """True unless some trigger is below its threshold (vacuously True when empty)."""
    if triggers:
        for actor_type, limit in triggers.items():
            if actor_below_limit(world, player, actor_type, limit):
                return False
    return True


def any_trigger_met(triggers: Optional[Mapping[str, int]], world: WorldView, player: Hashable) -> bool:
    """True as soon as one trigger is at or above its threshold (False when empty)."""
    if triggers:
        for actor_type, limit in triggers.items():
            if actor_at_or_above_limit(world, player, actor_type, limit):
                return True
    return False


def _freeze_triggers(name: str, triggers: Optional[Mapping[str, int]]) -> Optional[Mapping[str, int]]:
    if triggers is None:
        return None
    if not isinstance(triggers, Mapping):
        raise ConfigurationError(f"{name} must be a mapping of actor type to count")

    frozen = {}
    for actor_type, limit in triggers.items():
        if not isinstance(actor_type, str) or not actor_type:
            raise ConfigurationError(f"{name}: actor type names must be non-empty strings")
        # bool is an int subclass; "true" is never a meaningful count
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ConfigurationError(f"{name}.{actor_type}: threshold must be an integer, got {limit!r}")
        if limit < 0:
            raise ConfigurationError(f"{name}.{actor_type}: threshold must be >= 0, got {limit}")
        frozen[actor_type] = limit
    return MappingProxyType(frozen)


# ---------------------------------------------------------------------------
# Single rule
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BuildingLimit:
    limited_unit: Optional[str] = None
    stop_triggers: Optional[Mapping[str, int]] = field(default=None, hash=False)    # actor type -> count that stops production
    start_triggers: Optional[Mapping[str, int]] = field(default=None, hash=False)   # actor type -> count that starts production
    aggregate_all_for_stop: bool = False                  # True = ALL, False = ANY
    aggregate_all_for_start: bool = False

    def __post_init__(self):
        if self.limited_unit is not None and not isinstance(self.limited_unit, str):
            raise ConfigurationError(f"limited_unit must be a string, got {self.limited_unit!r}")
        object.__setattr__(self, "stop_triggers", _freeze_triggers("stop_triggers", self.stop_triggers))
        object.__setattr__(self, "start_triggers", _freeze_triggers("start_triggers", self.start_triggers))

        if not self.stop_triggers and not self.start_triggers:
            raise ConfigurationError(
                f"BuildingLimit for {self.limited_unit!r}: start and stop triggers "
                f"cannot both be empty"
            )

    def has_start_limiters(self) -> bool:
        return bool(self.start_triggers)

    def has_stop_limiters(self) -> bool:
        return bool(self.stop_triggers)

    def stop_limits_met(self, world: WorldView, player: Hashable) -> bool:
        if self.aggregate_all_for_stop:
            return all_triggers_met(self.stop_triggers, world, player)
        return any_trigger_met(self.stop_triggers, world, player)

    def start_limits_met(self, world: WorldView, player: Hashable) -> bool:
        if self.aggregate_all_for_start:
            return all_triggers_met(self.start_triggers, world, player)
        return any_trigger_met(self.start_triggers, world, player)

    def trigger_types(self) -> List[str]:
        """Every actor type this rule reads, start triggers first, without repeats."""
        names: List[str] = []
        for triggers in (self.start_triggers, self.stop_triggers):
            for actor_type in (triggers or {}):
                if actor_type not in names:
                    names.append(actor_type)
        return names

    def matches(self, unit_name: Optional[str]) -> bool:
        if not unit_name or self.limited_unit is None:
            return False
        return self.limited_unit.lower() == unit_name.lower()


# ---------------------------------------------------------------------------
# Rule collection
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RuleSet:
    rules: Tuple[BuildingLimit, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[BuildingLimit]:
        return iter(self.rules)

    def lookup(self, unit_name: Optional[str]) -> Optional[BuildingLimit]:
        """First rule (in configuration order) governing unit_name, ignoring case."""
        if not unit_name:
            return None
        for rule in self.rules:
            if rule.matches(unit_name):
                return rule
        return None

    def limited_units(self) -> List[str]:
        return [r.limited_unit for r in self.rules if r.limited_unit is not None]

    def _resolve(self, unit_name: Optional[str], query: Callable[[BuildingLimit], bool]) -> bool:
        rule = self.lookup(unit_name)
        if rule is None:
            return False
        return query(rule)

    def has_start_limiters(self, unit_name: Optional[str]) -> bool:
        return self._resolve(unit_name, lambda r: r.has_start_limiters())

    def has_stop_limiters(self, unit_name: Optional[str]) -> bool:
        return self._resolve(unit_name, lambda r: r.has_stop_limiters())

    def stop_limits_met(self, unit_name: Optional[str], world: WorldView, player: Hashable) -> bool:
        """Should the AI stop producing unit_name? False when no rule governs it."""
        return self._resolve(unit_name, lambda r: r.stop_limits_met(world, player))

    def start_limits_met(self, unit_name: Optional[str], world: WorldView, player: Hashable) -> bool:
        """Should the AI start producing unit_name? Use as a "not yet" check when False."""
        return self._resolve(unit_name, lambda r: r.start_limits_met(world, player))
