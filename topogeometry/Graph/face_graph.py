from topogeometry.Graph.graph import AdjacencyGraph


class FaceGraph(AdjacencyGraph):
    """
    Bounded face to bounded face across shared edges. Adjacency is binary:
    links carry no cost, only 'via', the id of a boundary half-edge whose twin
    lies in the other face.
    """

    def __init__(self, name="face graph", **kwargs):
        super().__init__(name, **kwargs)

    def _link_neighbours(self, face):
        for he in face.half_edges.values():
            adj_face = he.twin.face
            if adj_face is None or adj_face.is_unbounded or adj_face is face:
                continue
            self.set_symmetric_link(
                face.id, adj_face.id, {"via": he.id},
                face.representative_point, adj_face.representative_point,
            )

    def created_face(self, face):
        if face.is_unbounded:
            return
        self.set_link(face.id)
        self._link_neighbours(face)

    def modified_face(self, face):
        if face.is_unbounded:
            return
        # the boundary may have gained neighbours (e.g. a bridged island)
        self.delete_link(face.id)
        self.set_link(face.id)
        self._link_neighbours(face)

    def deleted_face(self, face):
        self.delete_link(face.id)
