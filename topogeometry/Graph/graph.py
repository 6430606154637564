import logging
from collections.abc import Mapping

from topogeometry.DCEL.vertex import Vertex
from topogeometry.DCEL.edge import Edge
from topogeometry.DCEL.face import Face
from topogeometry.DCEL.topology import CREATED, MODIFIED, DELETED


class AdjacencyGraph:
    """
    Directed links between topology element ids, with named costs.

    links is kept as plain nested dicts so traversal algorithms can read it
    directly:

        {'e1': {'e2': {'distance': 43.0, 'bearing_change': 90.0, 'via': 'v1'},
                'e3': {'distance': 38.0, 'bearing_change': 56.0, 'via': 'v2'}},
         'e2': {...}}

    Links are one-way; symmetric relationships need both directions set.
    A link may carry a 'handle', a visual object owned by the host:
    create_handle(start, end) makes one for a new link between two points,
    update_handle(handle, start, end) moves it, release_handle(handle)
    disposes of it when its link is deleted. All three are optional.

    Subclasses fill the links by overriding the created_/modified_/deleted_
    hooks and subscribing observer() to a Topology.
    """

    def __init__(self, name=None, create_handle=None, update_handle=None,
                 release_handle=None, logger=None):
        self.name = name
        self._links = {}
        self.create_handle = create_handle
        self.update_handle = update_handle
        self.release_handle = release_handle
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    @property
    def links(self):
        return self._links

    def nodes(self):
        return list(self._links)

    def __contains__(self, node_id):
        return node_id in self._links

    def __len__(self):
        return len(self._links)

    # ------------------------------------------------------------------
    # topology observer
    # ------------------------------------------------------------------
    def observer(self, notification):
        """Dispatch a topology Notification(action, element) to the matching hook."""
        action, element = notification
        if isinstance(element, Vertex):
            kind = "vertex"
        elif isinstance(element, Edge):
            kind = "edge"
        elif isinstance(element, Face):
            kind = "face"
        else:
            return
        if action not in (CREATED, MODIFIED, DELETED):
            return
        getattr(self, f"{action}_{kind}")(element)

    def created_vertex(self, vertex):
        pass

    def created_edge(self, edge):
        pass

    def created_face(self, face):
        pass

    def modified_vertex(self, vertex):
        pass

    def modified_edge(self, edge):
        pass

    def modified_face(self, face):
        pass

    def deleted_vertex(self, vertex):
        pass

    def deleted_edge(self, edge):
        pass

    def deleted_face(self, face):
        pass

    # ------------------------------------------------------------------
    # links
    # ------------------------------------------------------------------
    def set_link(self, id1, id2=None, attrs=None):
        """
        Add or update a link from id1 to id2.

          set_link(id1)              ensure node id1 exists
          set_link(id1, id2)         ensure link id1 -> id2 exists
          set_link(id1, id2, attrs)  shallow-merge attrs into link id1 -> id2
        """
        if not isinstance(id1, str):
            raise TypeError(f"id1 must be a str, got {type(id1).__name__}")
        if id2 is not None and not isinstance(id2, str):
            raise TypeError(f"id2 must be a str, got {type(id2).__name__}")
        if attrs is not None and not isinstance(attrs, Mapping):
            raise TypeError(f"attrs must be a mapping, got {type(attrs).__name__}")
        if id2 is None and attrs is not None:
            raise ValueError("attrs can only be given together with id2")

        node = self._links.setdefault(id1, {})
        if id2 is None:
            return
        link = node.setdefault(id2, {})
        if attrs is not None:
            link.update(attrs)

    def get_link(self, id1, id2):
        """Attributes of link id1 -> id2, or None (with a warning) if there is none."""
        link = self._links.get(id1, {}).get(id2)
        if link is None:
            self.logger.warning("no link %s -> %s in graph %s", id1, id2, self.name)
        return link

    def set_symmetric_link(self, id1, id2, attrs, start=None, end=None):
        """
        Set id1 -> id2 and id2 -> id1 with the same attributes and one shared
        handle drawn from start to end. An existing handle is moved, not replaced.
        """
        attrs = dict(attrs)
        existing = self._links.get(id1, {}).get(id2)
        if existing is not None and existing.get("handle") is not None:
            self._move_handle(existing, start, end)
            attrs["handle"] = existing["handle"]
        else:
            handle = self._make_handle(start, end)
            if handle is not None:
                attrs["handle"] = handle
        self.set_link(id1, id2, attrs)
        self.set_link(id2, id1, attrs)

    def _make_handle(self, start, end):
        if self.create_handle is None or start is None or end is None:
            return None
        return self.create_handle(start, end)

    def _move_handle(self, link, start, end):
        handle = link.get("handle")
        if handle is not None and self.update_handle is not None:
            self.update_handle(handle, start, end)

    def _release(self, links):
        """Pass each distinct handle held by the removed links to release_handle."""
        if self.release_handle is None:
            return
        released = set()
        for link in links:
            handle = link.get("handle")
            if handle is not None and id(handle) not in released:
                released.add(id(handle))
                self.release_handle(handle)

    def delete_link(self, id1, id2=None):
        """
        With both ids, delete only the link id1 -> id2.
        With id1 alone, delete node id1 and every link to or from it.
        """
        if not isinstance(id1, str):
            raise TypeError(f"id1 must be a str, got {type(id1).__name__}")
        if id2 is not None and not isinstance(id2, str):
            raise TypeError(f"id2 must be a str, got {type(id2).__name__}")

        if id2 is not None:
            if id1 not in self._links:
                self.logger.warning("cannot delete link %s -> %s: %s not found", id1, id2, id1)
                return
            if id2 not in self._links[id1]:
                self.logger.warning("cannot delete link %s -> %s: %s not linked", id1, id2, id2)
                return
            link = self._links[id1].pop(id2)
            # the reverse link may still show the same handle
            reverse = self._links.get(id2, {}).get(id1)
            if reverse is None or reverse.get("handle") is not link.get("handle"):
                self._release([link])
            return

        if id1 not in self._links:
            self.logger.warning("cannot delete node %s: not found", id1)
            return
        removed = list(self._links.pop(id1).values())
        for node in self._links.values():
            link = node.pop(id1, None)
            if link is not None:
                removed.append(link)
        self._release(removed)

    def __repr__(self):
        n_links = sum(len(v) for v in self._links.values())
        return f"{type(self).__name__}(name={self.name!r}, nodes={len(self._links)}, links={n_links})"
