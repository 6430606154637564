from topogeometry.DCEL.element import Element
from topogeometry.DCEL.halfedge import HalfEdge
from topogeometry.DCEL.geometry import distance, midpoint


class Edge(Element):
    """
    An undirected edge between two vertices, made of two twin half-edges.
    he1 leaves v1, he2 leaves v2. Both share the edge's creation time.
    """

    def __init__(self, edge_id: str, v1, v2, time_created=None):
        super().__init__(edge_id, time_created)
        self.length = None
        self.midpoint = None

        self.he1 = HalfEdge(f"{edge_id}_1", v1, time_created)
        self.he2 = HalfEdge(f"{edge_id}_2", v2, time_created)

        self.he1.edge = self
        self.he2.edge = self
        self.he1.twin = self.he2
        self.he2.twin = self.he1

        self.update()

    @property
    def half_edges(self):
        return self.he1, self.he2

    @property
    def vertices(self):
        return self.he1.origin, self.he2.origin

    def update(self):
        """Recompute bearings, length and midpoint from the end positions."""
        p1 = self.he1.origin.position
        p2 = self.he2.origin.position
        self.he1.update_bearing()
        self.he2.update_bearing()
        self.length = distance(p1, p2)
        self.midpoint = midpoint([p1, p2])
        return self

    def __repr__(self):
        return f"Edge({self.id}, {self.he1.origin.id}-{self.he2.origin.id})"
