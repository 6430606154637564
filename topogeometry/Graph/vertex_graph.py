from topogeometry.Graph.graph import AdjacencyGraph


class VertexGraph(AdjacencyGraph):
    """
    Vertex to vertex along edges. Links are symmetric and carry the edge
    length as 'distance' and the edge id as 'via'.
    """

    def __init__(self, name="vertex graph", **kwargs):
        super().__init__(name, **kwargs)

    def created_vertex(self, vertex):
        self.set_link(vertex.id)

    def created_edge(self, edge):
        v1, v2 = edge.vertices
        self.set_symmetric_link(
            v1.id, v2.id,
            {"distance": edge.length, "via": edge.id},
            v1.position, v2.position,
        )

    def modified_edge(self, edge):
        v1, v2 = edge.vertices
        link = self.get_link(v1.id, v2.id)
        if link is None:
            return
        self._move_handle(link, v1.position, v2.position)
        # only refresh the link that runs along this edge, not a parallel one
        if link.get("via") == edge.id:
            self.set_link(v1.id, v2.id, {"distance": edge.length})
            self.set_link(v2.id, v1.id, {"distance": edge.length})

    def deleted_vertex(self, vertex):
        self.delete_link(vertex.id)

    def deleted_edge(self, edge):
        v1, v2 = edge.vertices
        link = self.links.get(v1.id, {}).get(v2.id)
        if link is None or link.get("via") != edge.id:
            return
        self.delete_link(v1.id, v2.id)
        self.delete_link(v2.id, v1.id)
