from topogeometry.DCEL.element import Element
from topogeometry.DCEL.geometry import bearing


class HalfEdge(Element):
    """
    One directed side of an Edge. The face it bounds lies to its left, so
    bounded faces are walked counter-clockwise.
    """

    # A boundary longer than this means the next pointers never close.
    MAX_BOUNDARY = 1_000_000

    def __init__(self, half_edge_id: str, origin, time_created=None):
        super().__init__(half_edge_id, time_created)
        self.origin = origin      # Vertex
        self.twin = None          # opposite half-edge of the same edge
        self.next = None          # next half-edge around the face
        self.prev = None          # previous half-edge around the face
        self.edge = None          # parent Edge
        self.face = None          # Face to the left
        self.bearing = None       # degrees, from origin towards twin.origin

        origin.add_half_edge(self)

    @property
    def destination(self):
        return self.twin.origin

    def update_bearing(self):
        if self.twin is None:
            raise RuntimeError(f"{self.id}: cannot compute bearing before twin is set")
        self.bearing = bearing(self.origin.position, self.twin.origin.position)
        return self.bearing

    def boundary(self):
        """Yield the chain of next half-edges, starting with this one."""
        e = self
        steps = 0
        while True:
            yield e
            if e.next is None:
                raise RuntimeError(f"dangling next pointer at {e.id}")
            e = e.next
            if e is self:
                break
            steps += 1
            if steps > self.MAX_BOUNDARY:
                raise RuntimeError(f"boundary from {self.id} does not close")

    def __repr__(self):
        return f"HalfEdge({self.id}, origin={self.origin.id})"
