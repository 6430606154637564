import logging
import math

from topogeometry.Traversal.dijkstra import dijkstra_all_shortest_paths
from topogeometry.Traversal.records import links_of

logger = logging.getLogger(__name__)


def betweenness_centrality(graph, cost_name, cost_limit=math.inf,
                           u_turn_penalty=False, step_limit=0, pace=None):
    """
    Brandes betweenness centrality, as a generator of partial results.

    Each node in turn is used as source for dijkstra_all_shortest_paths;
    dependencies are then accumulated in reverse settlement order. Scores
    are summed over ordered (source, target) pairs, so on an undirected
    graph every unordered pair counts twice.

    :yields: a copy of the {id: centrality} mapping after each accumulation
             step, and the complete mapping last
    """
    links = links_of(graph)
    centrality = {node_id: 0 for node_id in links}

    for source_id in list(links):
        predecessors = {}
        path_counts = {}
        settled = []
        for record in dijkstra_all_shortest_paths(links, source_id, cost_name, cost_limit,
                                                  u_turn_penalty, step_limit, settled=settled):
            predecessors[record.id] = record.predecessors
            path_counts[record.id] = record.path_count

        dependency = {node_id: 0 for node_id in settled}
        while settled:
            w = settled.pop()
            for v in predecessors[w]:
                dependency[v] += (path_counts[v] / path_counts[w]) * (1 + dependency[w])
            if w != source_id:
                centrality[w] = centrality.get(w, 0) + dependency[w]
            yield dict(centrality)

        if pace is not None:
            pace()

    logger.debug("betweenness centrality over %d nodes", len(centrality))
    yield dict(centrality)
