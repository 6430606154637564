from collections import namedtuple
from collections.abc import Mapping

# Progress records yielded by the traversal generators.
VisitRecord = namedtuple("VisitRecord", ["id", "predecessor", "depth"])
CostRecord = namedtuple("CostRecord", ["id", "predecessor", "value"])
PathsRecord = namedtuple("PathsRecord", ["id", "predecessors", "value", "path_count"])


def links_of(graph):
    """Accept an AdjacencyGraph or a bare {id1: {id2: attrs}} mapping."""
    links = getattr(graph, "links", graph)
    if not isinstance(links, Mapping):
        raise TypeError(f"expected a graph or a links mapping, got {type(graph).__name__}")
    return links
