class Element:
    """
    Common identity for Vertex, HalfEdge, Edge and Face.

    id and time_created are fixed when the element is built; time_deleted is
    stamped once by the owning topology when the element is discarded.
    """

    def __init__(self, element_id: str, time_created=None):
        self._id = element_id
        self._time_created = time_created
        self._time_deleted = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def time_created(self):
        return self._time_created

    @property
    def time_deleted(self):
        return self._time_deleted

    @property
    def is_deleted(self) -> bool:
        return self._time_deleted is not None

    def mark_deleted(self, time):
        if self._time_deleted is not None:
            raise RuntimeError(f"{self._id} was already deleted at time {self._time_deleted}")
        self._time_deleted = time

    def __repr__(self):
        return f"{type(self).__name__}({self._id})"
