import logging

from topogeometry.Traversal.records import VisitRecord, links_of

logger = logging.getLogger(__name__)

# pace() is called once per this many dequeued nodes
PACE_EVERY = 10


def bfs_depth_limit(graph, start_id, limit, pace=None):
    """
    Breadth first search, as a generator, that does not expand past depth limit.

    Link costs are ignored and every reachable node within the limit is
    yielded exactly once, in level order.

    :param graph: AdjacencyGraph or links mapping
    :param start_id: id to start from, e.g. 'v0'
    :param limit: depth limit; nodes at this depth are yielded but not expanded
    :param pace: optional callable run between batches of nodes
    :yields: VisitRecord(id, predecessor, depth)
    """
    links = links_of(graph)
    visited = {start_id}
    queue = [(start_id, 0, None)]
    index = 0

    while index < len(queue):
        if pace is not None and index % PACE_EVERY == 0:
            pace()

        node_id, depth, predecessor = queue[index]
        index += 1

        if depth < limit:
            for neighbour_id in links.get(node_id, {}):
                if neighbour_id not in visited:
                    visited.add(neighbour_id)
                    queue.append((neighbour_id, depth + 1, node_id))

        yield VisitRecord(node_id, predecessor, depth)

    logger.debug("bfs from %s visited %d nodes (limit %s)", start_id, len(queue), limit)
