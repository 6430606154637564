from topogeometry.DCEL.element import Element


class Vertex(Element):
    """
    A topology vertex.

    The rotational order of the half-edges leaving the vertex is not stored
    here as links; it is written into the next/prev pointers of the half-edges
    by update_half_edge_pointers().
    """

    def __init__(self, vertex_id: str, position, time_created=None):
        super().__init__(vertex_id, time_created)
        self.position = position
        self.half_edges = {}          # id -> HalfEdge leaving this vertex, insertion order
        self.sorted_half_edges = []   # same half-edges by ascending bearing

    def add_half_edge(self, half_edge):
        self.half_edges[half_edge.id] = half_edge

    def sort_half_edges(self):
        """
        Sort the outgoing half-edges by bearing. sorted() is stable, so
        half-edges with equal bearings keep their insertion order.
        """
        for he in self.half_edges.values():
            if he.bearing is None:
                raise RuntimeError(f"{he.id} has no bearing, twin not set?")
        self.sorted_half_edges = sorted(self.half_edges.values(), key=lambda he: he.bearing)
        return self.sorted_half_edges

    def update_half_edge_pointers(self):
        """
        Wire next/prev around this vertex from the sorted order.

        Arriving along prev_he.twin, a walk keeping its face on the left
        leaves along the next outgoing half-edge clockwise, i.e. the next one
        by bearing.
        """
        arr = self.sorted_half_edges
        n = len(arr)
        for i, current in enumerate(arr):
            prev_he = arr[(i - 1) % n]
            current.prev = prev_he.twin
            prev_he.twin.next = current
        return arr

    @property
    def degree(self) -> int:
        return len(self.half_edges)

    def __repr__(self):
        return f"Vertex({self.id}, {self.position[0]:.2f}, {self.position[1]:.2f})"
