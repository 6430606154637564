from topogeometry.DCEL.element import Element
from topogeometry.DCEL.geometry import midpoint, signed_area

UNBOUNDED_FACE_ID = "f0"


class Face(Element):
    """
    A face of the planar subdivision (counter-clockwise boundary).

    half_edges is the ordered boundary map id -> HalfEdge. The unbounded face
    'f0' may touch several disconnected components, so its map collects every
    half-edge on the unbounded side rather than a single cycle.
    """

    def __init__(self, face_id: str, time_created=None):
        super().__init__(face_id, time_created)
        self.half_edges = {}
        self.representative_point = None
        self.handle = None  # visual resource owned by the host, if any

    @property
    def is_unbounded(self) -> bool:
        return self.id == UNBOUNDED_FACE_ID

    def set_boundary(self, boundary):
        """
        Adopt every half-edge of boundary (an ordered map id -> HalfEdge).

        Each half-edge is withdrawn from the face that listed it before, so a
        half-edge is only ever listed by the face it points to.
        """
        if self.is_unbounded:
            # drop entries that now belong to other faces, keep other components
            self.half_edges = {k: he for k, he in self.half_edges.items() if he.face is self}
        else:
            for he in self.half_edges.values():
                if he.face is self and he.id not in boundary:
                    he.face = None
            self.half_edges = {}

        for he_id, he in boundary.items():
            previous = he.face
            if previous is not None and previous is not self:
                previous.half_edges.pop(he_id, None)
            he.face = self
            self.half_edges[he_id] = he

        self.update_representative_point()
        return self

    def release_boundary(self):
        """Forget the boundary, clearing face pointers that still lead here."""
        for he in self.half_edges.values():
            if he.face is self:
                he.face = None
        self.half_edges = {}

    def vertices(self):
        return [he.origin for he in self.half_edges.values()]

    @property
    def signed_area(self) -> float:
        if self.is_unbounded or not self.half_edges:
            return 0.0
        return signed_area([v.position for v in self.vertices()])

    def update_representative_point(self):
        if self.is_unbounded or not self.half_edges:
            self.representative_point = None
        else:
            self.representative_point = midpoint([v.position for v in self.vertices()])
        return self.representative_point

    def __repr__(self):
        return f"Face({self.id}, {len(self.half_edges)} half-edges)"
