import logging
from collections import namedtuple

from topogeometry.DCEL.vertex import Vertex
from topogeometry.DCEL.edge import Edge
from topogeometry.DCEL.face import Face, UNBOUNDED_FACE_ID
from topogeometry.DCEL.geometry import as_position, signed_area_term

Notification = namedtuple("Notification", ["action", "element"])

CREATED = "created"
MODIFIED = "modified"
DELETED = "deleted"
VALID_ACTIONS = (CREATED, MODIFIED, DELETED)

# Signed areas closer to zero than this make the face split ambiguous.
AREA_TOLERANCE = 0.0001


def _same_rotation(half_edges):
    """True if sorting by the current bearings gives the same cyclic order."""
    if len(half_edges) < 3:
        return True
    resorted = sorted(half_edges, key=lambda he: he.bearing)
    k = resorted.index(half_edges[0])
    return resorted[k:] + resorted[:k] == list(half_edges)


class Topology:
    """
    Planar topology kept as a doubly-connected edge list.

    Vertices are added with create_vertex(); create_edge() links two of them
    and splits or extends faces as needed. Faces are never created directly.
    Every change is published to the subscribed observers as a
    Notification(action, element).
    """

    def __init__(self, release_handle=None, logger=None, max_notify_depth=64):
        self._time = 0
        self._counters = {"v": 0, "e": 0, "f": 0}
        self._dimension = None

        self.elements = {}
        self.vertices = {}
        self.edges = {}
        self.half_edges = {}
        self.faces = {}

        self.observers = []
        self._notify_depth = 0
        self.max_notify_depth = max_notify_depth

        self.release_handle = release_handle
        self.logger = logger if logger is not None else logging.getLogger(__name__)

        # unbounded face 'f0'
        self._create_face({})

    # ------------------------------------------------------------------
    # clock and ids
    # ------------------------------------------------------------------
    @property
    def current_time(self) -> int:
        return self._time

    def _tick(self) -> int:
        t = self._time
        self._time += 1
        return t

    def _next_id(self, prefix: str) -> str:
        n = self._counters[prefix]
        self._counters[prefix] += 1
        return f"{prefix}{n}"

    @property
    def unbounded_face(self) -> Face:
        return self.faces[UNBOUNDED_FACE_ID]

    # ------------------------------------------------------------------
    # vertices
    # ------------------------------------------------------------------
    def _check_position(self, position):
        p = as_position(position)
        if self._dimension is None:
            self._dimension = p.shape[0]
        elif p.shape[0] != self._dimension:
            raise ValueError(
                f"position has {p.shape[0]} coordinates, topology uses {self._dimension}"
            )
        return p

    def create_vertex(self, position) -> Vertex:
        vertex = Vertex(self._next_id("v"), self._check_position(position), self._tick())
        self.elements[vertex.id] = vertex
        self.vertices[vertex.id] = vertex
        self.notify(CREATED, vertex)
        return vertex

    def _get_vertex(self, vertex_id) -> Vertex:
        try:
            return self.vertices[vertex_id]
        except KeyError:
            raise KeyError(f"no vertex '{vertex_id}' in topology") from None

    def move_vertex(self, vertex_id, position) -> Vertex:
        """
        Move a vertex, refreshing every dependent length, midpoint and bearing.

        The rotational order around vertices is not rebuilt; a move that would
        change it is reported as ambiguous.
        """
        vertex = self._get_vertex(vertex_id)
        vertex.position = self._check_position(position)

        edges = [he.edge for he in vertex.sorted_half_edges]
        for edge in edges:
            edge.update()

        affected = [vertex] + [he.twin.origin for he in vertex.sorted_half_edges]
        for v in affected:
            if not _same_rotation(v.sorted_half_edges):
                self.logger.warning(
                    "moving %s changes the rotation order around %s; faces were not rebuilt",
                    vertex.id, v.id,
                )

        faces = {}
        for edge in edges:
            for he in edge.half_edges:
                if he.face is not None:
                    faces[he.face.id] = he.face

        self.notify(MODIFIED, vertex)
        for edge in edges:
            self.notify(MODIFIED, edge)
        for face in faces.values():
            face.update_representative_point()
            self.notify(MODIFIED, face)
        return vertex

    def delete_vertex(self, vertex_id):
        """Delete an isolated vertex. Vertices with edges cannot be deleted."""
        vertex = self._get_vertex(vertex_id)
        if vertex.half_edges:
            raise ValueError(f"{vertex.id} still has {vertex.degree} half-edges")
        vertex.mark_deleted(self._tick())
        self.notify(DELETED, vertex)
        del self.elements[vertex.id]
        del self.vertices[vertex.id]

    # ------------------------------------------------------------------
    # edges
    # ------------------------------------------------------------------
    def _walk(self, start_he):
        """
        Walk the boundary cycle from start_he once.
        :return: (ordered map id -> HalfEdge, total signed area)
        """
        boundary = {}
        total = 0.0
        for he in start_he.boundary():
            total += signed_area_term(he.origin.position, he.next.origin.position)
            boundary[he.id] = he
        return boundary, total

    def create_edge(self, id1, id2):
        """
        Insert an edge between two existing vertices and update the faces.

        Self-loops are ignored and return None.

        ---------- cases ----------
        1. hE1's cycle has length 2: an isolated segment, lying in 'f0'.
        2. hE2 is in hE1's cycle: the edge hangs into (or bridges within)
           one face, which keeps its identity with an extended boundary.
        3. otherwise the edge closes a ring and splits a face in two:
           - splitting 'f0', the clockwise (negative) cycle stays 'f0' and the
             other becomes a new face,
           - splitting a bounded face, both cycles become new faces and the
             old face is deleted.
        """
        if id1 == id2:
            return None
        v1 = self._get_vertex(id1)
        v2 = self._get_vertex(id2)

        # ---------- 1. edge, twins and bearings ----------
        edge = Edge(self._next_id("e"), v1, v2, self._tick())
        self.elements[edge.id] = edge
        self.edges[edge.id] = edge
        self.half_edges[edge.he1.id] = edge.he1
        self.half_edges[edge.he2.id] = edge.he2

        # ---------- 2. rotational order at both ends ----------
        for v in (v1, v2):
            v.sort_half_edges()
            v.update_half_edge_pointers()

        # ---------- 3. walk hE1's cycle ----------
        he1_boundary = {}
        he1_area = 0.0
        existing_face = None
        fallback_face = None
        for he in edge.he1.boundary():
            if he.face is not None:
                if fallback_face is None:
                    fallback_face = he.face
                if existing_face is None and not he.face.is_unbounded:
                    existing_face = he.face
            he1_area += signed_area_term(he.origin.position, he.next.origin.position)
            he1_boundary[he.id] = he
        if existing_face is None:
            existing_face = fallback_face if fallback_face is not None else self.unbounded_face
        he2_in_he1 = edge.he2.id in he1_boundary

        # ---------- 4. decide ----------
        if len(he1_boundary) == 2:
            unbounded = self.unbounded_face
            for he in edge.half_edges:
                he.face = unbounded
                unbounded.half_edges[he.id] = he

        elif he2_in_he1:
            existing_face.set_boundary(he1_boundary)
            self.notify(MODIFIED, existing_face)

        else:
            he2_boundary, he2_area = self._walk(edge.he2)

            if abs(he1_area) < AREA_TOLERANCE or abs(he2_area) < AREA_TOLERANCE:
                self.logger.warning(
                    "signed area below tolerance splitting %s with %s (%.6g, %.6g)",
                    existing_face.id, edge.id, he1_area, he2_area,
                )

            if existing_face.is_unbounded:
                if he1_area < 0:
                    outer, inner = he1_boundary, he2_boundary
                else:
                    outer, inner = he2_boundary, he1_boundary
                existing_face.set_boundary(outer)
                self.notify(MODIFIED, existing_face)
                self._create_face(inner)
            else:
                self._create_face(he1_boundary)
                self._create_face(he2_boundary)
                self._delete_face(existing_face)

        # ---------- 5. publish ----------
        self.notify(CREATED, edge)
        return edge

    # ------------------------------------------------------------------
    # faces (private: only edge insertion creates or deletes faces)
    # ------------------------------------------------------------------
    def _create_face(self, boundary) -> Face:
        face = Face(self._next_id("f"), self._tick())
        self.elements[face.id] = face
        self.faces[face.id] = face
        face.set_boundary(boundary)
        self.notify(CREATED, face)
        return face

    def _delete_face(self, face: Face):
        if face.is_unbounded:
            raise RuntimeError("the unbounded face cannot be deleted")
        if face.handle is not None and self.release_handle is not None:
            self.release_handle(face.handle)
        face.handle = None
        face.release_boundary()
        face.mark_deleted(self._tick())
        self.notify(DELETED, face)
        del self.elements[face.id]
        del self.faces[face.id]

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    def get_representative_point(self, element_id):
        """Position of a vertex, midpoint of an edge or representative point of a face."""
        if element_id in self.vertices:
            return self.vertices[element_id].position
        if element_id in self.edges:
            return self.edges[element_id].midpoint
        if element_id in self.faces:
            return self.faces[element_id].representative_point
        raise KeyError(f"no element '{element_id}' in topology")

    def load(self, coordinates, links):
        """
        Build from in-memory data: one vertex per coordinate, then one edge per
        (i, j) pair of coordinate indices.
        :return: list of the created vertex ids, in coordinate order
        """
        vertex_ids = [self.create_vertex(c).id for c in coordinates]
        for i, j in links:
            self.create_edge(vertex_ids[i], vertex_ids[j])
        return vertex_ids

    def check_integrity(self):
        """Raise RuntimeError at the first broken DCEL invariant."""
        for he in self.half_edges.values():
            if he.twin is None or he.twin.twin is not he:
                raise RuntimeError(f"twin mismatch at {he.id}")
            if he.next is None or he.prev is None:
                raise RuntimeError(f"dangling pointer at {he.id}")
            if he.next.prev is not he or he.prev.next is not he:
                raise RuntimeError(f"next/prev mismatch at {he.id}")
            if he.face is None:
                raise RuntimeError(f"{he.id} has no face")
            if he.face.half_edges.get(he.id) is not he:
                raise RuntimeError(f"{he.id} points to {he.face.id} which does not list it")
            seen = set()
            for e in he.boundary():
                if e.id in seen:
                    raise RuntimeError(f"cycle from {he.id} revisits {e.id}")
                seen.add(e.id)
        listed = 0
        for face in self.faces.values():
            for he_id, he in face.half_edges.items():
                if he.face is not face:
                    raise RuntimeError(f"{face.id} lists {he_id} which points to {he.face}")
            listed += len(face.half_edges)
        if listed != len(self.half_edges):
            raise RuntimeError(f"faces list {listed} half-edges, topology has {len(self.half_edges)}")

    # ------------------------------------------------------------------
    # observers
    # ------------------------------------------------------------------
    def subscribe(self, observer):
        """Register a callable taking a Notification(action, element)."""
        self.observers.append(observer)

    def unsubscribe(self, observer):
        self.observers = [o for o in self.observers if o != observer]

    def notify(self, action, element):
        """
        Call every observer synchronously, in subscription order.

        Observers may mutate the topology from inside the callback, which
        nests further notifications; nesting deeper than max_notify_depth
        raises RuntimeError.
        """
        if action not in VALID_ACTIONS:
            raise ValueError(f"{action!r} is not a valid action, expected one of {VALID_ACTIONS}")
        if self._notify_depth >= self.max_notify_depth:
            raise RuntimeError(
                f"notification nested deeper than {self.max_notify_depth} while {action} {element.id}"
            )
        notification = Notification(action, element)
        self._notify_depth += 1
        try:
            for observer in list(self.observers):
                observer(notification)
        finally:
            self._notify_depth -= 1

    def __repr__(self):
        return (f"Topology(vertices={len(self.vertices)}, edges={len(self.edges)}, "
                f"faces={len(self.faces)})")
