import logging
import time
from dataclasses import dataclass, fields
from enum import Enum

from topogeometry.Traversal.betweenness import betweenness_centrality
from topogeometry.Traversal.bfs import bfs_depth_limit
from topogeometry.Traversal.dijkstra import dijkstra_single_source

logger = logging.getLogger(__name__)


class Algorithm(Enum):
    """Traversals offered to the host, by display label."""
    BFS = "Breadth First Search"
    DIJKSTRA = "Dijkstra Single Source"
    BETWEENNESS = "Betweenness Centrality"


# host (camelCase) key -> field name
_MAPPING_KEYS = {
    "algorithm": "algorithm",
    "costName": "cost_name",
    "costLimit": "cost_limit",
    "stepLimit": "step_limit",
    "uTurnPenalty": "u_turn_penalty",
    "delay": "delay",
}


@dataclass
class TraversalSettings:
    algorithm: Algorithm = Algorithm.BFS
    cost_name: str = "step"
    cost_limit: float = 5
    step_limit: float = 0           # 0 disables the step limit
    u_turn_penalty: bool = False
    delay: float = 0                # milliseconds between progress batches

    def __post_init__(self):
        if not isinstance(self.algorithm, Algorithm):
            try:
                self.algorithm = Algorithm(self.algorithm)
            except ValueError:
                raise ValueError(f"unknown algorithm {self.algorithm!r}") from None
        if not isinstance(self.cost_name, str) or not self.cost_name:
            raise ValueError("cost_name must be a non-empty string")
        for name in ("cost_limit", "step_limit", "delay"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        self.u_turn_penalty = bool(self.u_turn_penalty)

    @classmethod
    def from_mapping(cls, mapping):
        """Build settings from host keys (costName, ...) or field names; unknown keys are ignored."""
        field_names = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in mapping.items():
            name = _MAPPING_KEYS.get(key, key)
            if name in field_names:
                kwargs[name] = value
            else:
                logger.debug("ignoring unknown traversal setting %r", key)
        return cls(**kwargs)

    def pace(self):
        """Sleep callback for the traversal generators, or None without a delay."""
        if self.delay <= 0:
            return None
        seconds = self.delay / 1000.0
        return lambda: time.sleep(seconds)


def traverse(graph, start_id, settings):
    """
    Run the traversal chosen in settings and return its generator.

    BFS takes cost_limit as its depth limit. Betweenness centrality covers
    the whole graph and ignores start_id.
    """
    if not isinstance(settings, TraversalSettings):
        settings = TraversalSettings.from_mapping(settings)

    pace = settings.pace()
    logger.debug("traverse %s from %s", settings.algorithm.value, start_id)

    if settings.algorithm is Algorithm.BFS:
        return bfs_depth_limit(graph, start_id, settings.cost_limit, pace=pace)
    if settings.algorithm is Algorithm.DIJKSTRA:
        return dijkstra_single_source(graph, start_id, settings.cost_name, settings.cost_limit,
                                      settings.u_turn_penalty, settings.step_limit, pace=pace)
    return betweenness_centrality(graph, settings.cost_name, settings.cost_limit,
                                  settings.u_turn_penalty, settings.step_limit, pace=pace)
