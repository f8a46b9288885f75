"""
Production Limit Rules - Data Models
======================================
World-side dataclasses: actors, the in-memory world view, and the
per-unit report produced by the production gate.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Mapping, Protocol


# ---------------------------------------------------------------------------
# World view (consumed by the limit rules, never mutated by them)
# ---------------------------------------------------------------------------

class WorldView(Protocol):
    def count_owned_actors_of_type(self, player: Hashable, type_name: str) -> int:
        ...


@dataclass
class Actor:
    owner: Hashable
    name: str                      # actor type name, e.g. "proc", "barr"


@dataclass
class ActorWorld:
    """Live actors of every player. Satisfies WorldView."""
    actors: List[Actor] = field(default_factory=list)

    @classmethod
    def from_counts(cls, counts: Mapping[Hashable, Mapping[str, int]]) -> "ActorWorld":
        world = cls()
        for player, per_type in counts.items():
            for type_name, n in per_type.items():
                for _ in range(n):
                    world.actors.append(Actor(owner=player, name=type_name))
        return world

    def count_owned_actors_of_type(self, player: Hashable, type_name: str) -> int:
        return sum(1 for a in self.actors if a.owner == player and a.name == type_name)

    def add_actor(self, player: Hashable, type_name: str, count: int = 1):
        for _ in range(count):
            self.actors.append(Actor(owner=player, name=type_name))

    def remove_actor(self, player: Hashable, type_name: str) -> bool:
        """Remove one matching actor. Returns False if the player has none."""
        for i, a in enumerate(self.actors):
            if a.owner == player and a.name == type_name:
                del self.actors[i]
                return True
        return False

    def players(self) -> List[Hashable]:
        seen: List[Hashable] = []
        for a in self.actors:
            if a.owner not in seen:
                seen.append(a.owner)
        return seen

    def counts_for(self, player: Hashable) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for a in self.actors:
            if a.owner == player:
                counts[a.name] = counts.get(a.name, 0) + 1
        return counts


# ---------------------------------------------------------------------------
# Evaluation results
# ---------------------------------------------------------------------------

@dataclass
class LimitReport:
    unit_name: str
    has_rule: bool = False
    has_start_limiters: bool = False
    has_stop_limiters: bool = False
    start_limits_met: bool = False
    stop_limits_met: bool = False
    production_allowed: bool = True
    trigger_counts: Dict[str, int] = field(default_factory=dict)   # trigger type -> live count

    def to_dict(self) -> Dict[str, Any]:
        return {
            "unit_name": self.unit_name,
            "has_rule": self.has_rule,
            "has_start_limiters": self.has_start_limiters,
            "has_stop_limiters": self.has_stop_limiters,
            "start_limits_met": self.start_limits_met,
            "stop_limits_met": self.stop_limits_met,
            "production_allowed": self.production_allowed,
            "trigger_counts": dict(self.trigger_counts),
        }
