"""
Single source Dijkstra over an adjacency graph, as generators.

Both variants
  - stop expanding once a settled node costs more than cost_limit; links
    whose total would pass cost_limit are never taken,
  - optionally reject any single step costing more than step_limit,
  - optionally add U_TURN_PENALTY to a step that leaves a node through the
    same junction ('via') it was entered by, which on an edge graph means
    turning back along the edge just travelled,
  - do not initialise every node to infinity; nodes appear as they are
    reached and may be yielded again each time their cost improves.
"""
import logging
import math

from topogeometry.Traversal.priority_queue import PriorityQueue
from topogeometry.Traversal.records import CostRecord, PathsRecord, links_of

logger = logging.getLogger(__name__)

U_TURN_PENALTY = 180
# cost name meaning "one per link" when links carry no such attribute
STEP = "step"


def step_cost(links, current_id, predecessor_id, neighbour_id, cost_name, u_turn_penalty):
    """
    Cost of moving from current_id to neighbour_id, u-turn penalty included.
    Returns None if the link has no cost under cost_name.
    """
    costs = links[current_id][neighbour_id]
    cost = costs.get(cost_name, 1 if cost_name == STEP else None)
    if cost is None:
        logger.warning("link %s -> %s has no cost '%s', skipped", current_id, neighbour_id, cost_name)
        return None

    if u_turn_penalty and predecessor_id is not None:
        entry = links[current_id].get(predecessor_id)
        via = costs.get("via")
        if entry is not None and via is not None and entry.get("via") == via:
            cost += U_TURN_PENALTY
            logger.debug("u-turn penalty for %s -> %s via %s", current_id, neighbour_id, via)
    return cost


def dijkstra_single_source(graph, start_id, cost_name, cost_limit=math.inf,
                           u_turn_penalty=False, step_limit=0, pace=None):
    """
    Lowest cost paths from start_id, one predecessor per node.

    :param graph: AdjacencyGraph or links mapping
    :param start_id: id to start from
    :param cost_name: link attribute to use as cost, e.g. 'distance', 'bearing_change', 'step'
    :param cost_limit: maximum total cost from start_id
    :param u_turn_penalty: add U_TURN_PENALTY when leaving through the entry junction
    :param step_limit: if > 0, steps costing more than this are not taken
    :param pace: optional callable run before each node is settled
    :yields: CostRecord(id, predecessor, value), the start first
    """
    links = links_of(graph)
    total_costs = {start_id: 0}
    predecessors = {start_id: None}
    visited = set()
    pq = PriorityQueue()
    pq.enqueue(start_id, 0)

    logger.debug("dijkstra from %s, cost '%s' limit %s", start_id, cost_name, cost_limit)
    yield CostRecord(start_id, None, 0)

    while not pq.is_empty():
        if pace is not None:
            pace()

        current_id = pq.dequeue()
        if current_id in visited:
            continue
        visited.add(current_id)

        for neighbour_id in links.get(current_id, {}):
            cost = step_cost(links, current_id, predecessors[current_id], neighbour_id,
                             cost_name, u_turn_penalty)
            if cost is None:
                continue
            if step_limit > 0 and cost > step_limit:
                continue

            updated = total_costs[current_id] + cost
            if updated > cost_limit:
                continue

            if neighbour_id not in total_costs or updated < total_costs[neighbour_id]:
                total_costs[neighbour_id] = updated
                predecessors[neighbour_id] = current_id
                pq.enqueue(neighbour_id, updated)
                yield CostRecord(neighbour_id, current_id, updated)

        # checked after the neighbours, so those reachable within the limit are still yielded
        if total_costs[current_id] > cost_limit:
            logger.debug("cost limit %s exceeded at %s", cost_limit, current_id)
            return


def dijkstra_all_shortest_paths(graph, start_id, cost_name, cost_limit=math.inf,
                                u_turn_penalty=False, step_limit=0, pace=None, settled=None):
    """
    As dijkstra_single_source, but keeping every predecessor on a shortest
    path and the number of shortest paths reaching each node.

    Ties re-yield the node with its extended predecessor list. The u-turn
    check at a node uses its first recorded predecessor.

    :param settled: optional list; nodes are appended in the order they are settled
    :yields: PathsRecord(id, predecessors, value, path_count), the start first
    """
    links = links_of(graph)
    total_costs = {start_id: 0}
    predecessors = {start_id: []}
    path_counts = {start_id: 1}
    visited = set()
    pq = PriorityQueue()
    pq.enqueue(start_id, 0)

    yield PathsRecord(start_id, [], 0, 1)

    while not pq.is_empty():
        if pace is not None:
            pace()

        current_id = pq.dequeue()
        if current_id in visited:
            continue
        visited.add(current_id)
        if settled is not None:
            settled.append(current_id)

        preds = predecessors[current_id]
        entry_id = preds[0] if preds else None

        for neighbour_id in links.get(current_id, {}):
            cost = step_cost(links, current_id, entry_id, neighbour_id, cost_name, u_turn_penalty)
            if cost is None:
                continue
            if step_limit > 0 and cost > step_limit:
                continue

            updated = total_costs[current_id] + cost
            if updated > cost_limit:
                continue

            if neighbour_id not in total_costs or updated < total_costs[neighbour_id]:
                total_costs[neighbour_id] = updated
                path_counts[neighbour_id] = path_counts[current_id]
                predecessors[neighbour_id] = [current_id]
                pq.enqueue(neighbour_id, updated)
                yield PathsRecord(neighbour_id, [current_id], updated, path_counts[neighbour_id])

            # settled nodes are final; a zero-cost step back must not add a predecessor
            elif (updated == total_costs[neighbour_id] and neighbour_id not in visited
                  and current_id not in predecessors[neighbour_id]):
                path_counts[neighbour_id] += path_counts[current_id]
                predecessors[neighbour_id].append(current_id)
                yield PathsRecord(neighbour_id, list(predecessors[neighbour_id]), updated,
                                  path_counts[neighbour_id])

        if total_costs[current_id] > cost_limit:
            return


def shortest_path(graph, start_id, end_id, cost_name, cost_limit=math.inf,
                  u_turn_penalty=False, step_limit=0):
    """
    Lowest cost path between two nodes.

    :return: list of ids from start_id to end_id, or None if end_id cannot
             be reached within the limits
    """
    predecessors = {}
    for record in dijkstra_single_source(graph, start_id, cost_name, cost_limit,
                                         u_turn_penalty, step_limit):
        predecessors[record.id] = record.predecessor

    if end_id not in predecessors:
        logger.debug("no path from %s to %s under '%s'", start_id, end_id, cost_name)
        return None

    path = [end_id]
    while predecessors[path[-1]] is not None:
        path.append(predecessors[path[-1]])
    path.reverse()
    return path
