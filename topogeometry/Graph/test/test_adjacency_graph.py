# test/test_adjacency_graph.py

import logging
import unittest

from topogeometry.Graph.graph import AdjacencyGraph
from topogeometry.DCEL.topology import Topology, Notification, CREATED


class RecordingGraph(AdjacencyGraph):

    def __init__(self, **kwargs):
        super().__init__("recording", **kwargs)
        self.calls = []

    def created_vertex(self, vertex):
        self.calls.append(("created_vertex", vertex.id))


class TestAdjacencyGraph(unittest.TestCase):

    def setUp(self):
        self.graph = AdjacencyGraph("test")

    def test_set_link_forms(self):
        g = self.graph
        g.set_link("a")
        self.assertEqual(g.links, {"a": {}})
        g.set_link("a", "b")
        self.assertEqual(g.links["a"], {"b": {}})
        g.set_link("a", "b", {"distance": 2})
        g.set_link("a", "b", {"via": "x"})
        self.assertEqual(g.links["a"]["b"], {"distance": 2, "via": "x"})
        # links are one-way
        self.assertNotIn("b", g.links)
        self.assertEqual(g.nodes(), ["a"])
        self.assertIn("a", g)
        self.assertEqual(len(g), 1)

    def test_set_link_argument_errors(self):
        with self.assertRaises(TypeError):
            self.graph.set_link(1)
        with self.assertRaises(TypeError):
            self.graph.set_link("a", 2)
        with self.assertRaises(TypeError):
            self.graph.set_link("a", "b", [("distance", 1)])
        with self.assertRaises(ValueError):
            self.graph.set_link("a", None, {"distance": 1})
        with self.assertRaises(TypeError):
            self.graph.delete_link(None)

    def test_get_link(self):
        self.graph.set_link("a", "b", {"distance": 1})
        self.assertEqual(self.graph.get_link("a", "b"), {"distance": 1})
        with self.assertLogs("topogeometry.Graph.graph", level="WARNING"):
            self.assertIsNone(self.graph.get_link("b", "a"))

    def test_injected_logger(self):
        custom = logging.getLogger("host.graphs")
        graph = AdjacencyGraph("custom", logger=custom)
        with self.assertLogs("host.graphs", level="WARNING"):
            graph.get_link("x", "y")

    def test_delete_single_link(self):
        g = self.graph
        g.set_link("a", "b", {"distance": 1})
        g.set_link("b", "a", {"distance": 1})
        g.delete_link("a", "b")
        self.assertEqual(g.links["a"], {})
        self.assertIn("a", g.links["b"])

    def test_delete_missing_link_warns(self):
        self.graph.set_link("a")
        with self.assertLogs("topogeometry.Graph.graph", level="WARNING") as cm:
            self.graph.delete_link("z", "a")
            self.graph.delete_link("a", "z")
            self.graph.delete_link("z")
        self.assertEqual(len(cm.output), 3)
        self.assertEqual(self.graph.links, {"a": {}})

    def test_delete_node(self):
        g = self.graph
        g.set_link("a", "b", {"distance": 1})
        g.set_link("b", "a", {"distance": 1})
        g.set_link("c", "a", {"distance": 3})
        g.set_link("b", "c", {"distance": 2})
        g.delete_link("a")
        self.assertEqual(g.links, {"b": {"c": {"distance": 2}}, "c": {}})

    def test_handles(self):
        created, moved, released = [], [], []

        def create(start, end):
            handle = object()
            created.append((start, end))
            return handle

        g = AdjacencyGraph(
            "handles",
            create_handle=create,
            update_handle=lambda h, s, e: moved.append((s, e)),
            release_handle=released.append,
        )
        g.set_symmetric_link("a", "b", {"distance": 1}, (0, 0), (1, 0))
        g.set_symmetric_link("a", "c", {"distance": 1}, (0, 0), (0, 1))
        self.assertEqual(len(created), 2)
        self.assertIs(g.links["a"]["b"]["handle"], g.links["b"]["a"]["handle"])

        # re-setting an existing link moves its handle
        g.set_symmetric_link("a", "b", {"distance": 2}, (0, 0), (2, 0))
        self.assertEqual(len(created), 2)
        self.assertEqual(moved, [((0, 0), (2, 0))])
        self.assertEqual(g.links["b"]["a"]["distance"], 2)

        # one direction removed: the reverse still shows the handle
        g.delete_link("a", "c")
        self.assertEqual(released, [])

        g.delete_link("a")
        self.assertEqual(len(released), 2)
        self.assertEqual(len(set(map(id, released))), 2)

    def test_observer_dispatch(self):
        graph = RecordingGraph()
        topo = Topology()
        topo.subscribe(graph.observer)
        topo.load([(0, 0), (1, 0)], [(0, 1)])
        self.assertEqual(graph.calls, [("created_vertex", "v0"), ("created_vertex", "v1")])

        # anything that is not a topology element is ignored
        graph.observer(Notification(CREATED, "not an element"))
        self.assertEqual(len(graph.calls), 2)


if __name__ == "__main__":
    unittest.main()
