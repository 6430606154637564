from topogeometry.Graph.graph import AdjacencyGraph
from topogeometry.DCEL.geometry import absolute_bearing_difference


class EdgeGraph(AdjacencyGraph):
    """
    Edge to edge across the junctions they share.

    Each link carries
      distance        half of each edge's length (midpoint to midpoint)
      bearing_change  the turn, in degrees [0, 180], from one edge onto the other
      via             the id of the junction vertex

    Vertices on their own do not affect this graph.
    """

    def __init__(self, name="edge graph", **kwargs):
        super().__init__(name, **kwargs)

    def _junctions(self, edge):
        """
        Yield (arriving half-edge, leaving half-edge, junction) for every edge
        met at either end of edge, skipping the edge's own twin.
        """
        for he in edge.half_edges:
            junction = he.twin.origin
            for adj_he in junction.sorted_half_edges:
                if adj_he is he.twin:
                    continue
                yield he, adj_he, junction

    def created_edge(self, edge):
        self.set_link(edge.id)
        for he, adj_he, junction in self._junctions(edge):
            adj_edge = adj_he.edge
            self.set_symmetric_link(
                edge.id, adj_edge.id,
                {
                    "distance": edge.length / 2 + adj_edge.length / 2,
                    "bearing_change": absolute_bearing_difference(he.bearing, adj_he.bearing),
                    "via": junction.id,
                },
                edge.midpoint, adj_edge.midpoint,
            )

    def modified_edge(self, edge):
        for he, adj_he, junction in self._junctions(edge):
            adj_edge = adj_he.edge
            link = self.get_link(edge.id, adj_edge.id)
            if link is None:
                continue
            attrs = {
                "distance": edge.length / 2 + adj_edge.length / 2,
                "bearing_change": absolute_bearing_difference(he.bearing, adj_he.bearing),
            }
            self.set_link(edge.id, adj_edge.id, attrs)
            self.set_link(adj_edge.id, edge.id, attrs)
            self._move_handle(link, edge.midpoint, adj_edge.midpoint)

    def deleted_edge(self, edge):
        self.delete_link(edge.id)
