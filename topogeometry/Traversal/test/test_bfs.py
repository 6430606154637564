# test/test_bfs.py

import unittest

from topogeometry.DCEL.topology import Topology
from topogeometry.Graph.vertex_graph import VertexGraph
from topogeometry.Traversal.bfs import bfs_depth_limit
from topogeometry.Traversal.records import VisitRecord


def path_links(n):
    """v0 - v1 - ... - v(n-1), unit distances both ways."""
    links = {f"v{i}": {} for i in range(n)}
    for i in range(n - 1):
        links[f"v{i}"][f"v{i + 1}"] = {"distance": 1, "via": f"e{i}"}
        links[f"v{i + 1}"][f"v{i}"] = {"distance": 1, "via": f"e{i}"}
    return links


class TestBFS(unittest.TestCase):

    def test_depth_limit_on_path(self):
        records = list(bfs_depth_limit(path_links(5), "v0", 2))
        self.assertEqual({r.id: r.depth for r in records}, {"v0": 0, "v1": 1, "v2": 2})
        self.assertEqual(records[0], VisitRecord("v0", None, 0))
        self.assertEqual(records[2].predecessor, "v1")

    def test_limit_zero(self):
        self.assertEqual(list(bfs_depth_limit(path_links(3), "v1", 0)), [VisitRecord("v1", None, 0)])

    def test_each_node_once_in_level_order(self):
        links = {
            "a": {"b": {}, "c": {}},
            "b": {"a": {}, "d": {}},
            "c": {"a": {}, "d": {}},
            "d": {"b": {}, "c": {}},
        }
        records = list(bfs_depth_limit(links, "a", 10))
        self.assertEqual([r.id for r in records], ["a", "b", "c", "d"])
        self.assertEqual(records[-1], VisitRecord("d", "b", 2))

    def test_pace(self):
        calls = []
        list(bfs_depth_limit(path_links(25), "v0", 100, pace=lambda: calls.append(1)))
        self.assertEqual(len(calls), 3)

    def test_on_vertex_graph(self):
        topo = Topology()
        graph = VertexGraph()
        topo.subscribe(graph.observer)
        topo.load([(0, 0), (1, 0), (1, 1), (0, 1)], [(0, 1), (1, 2), (2, 3), (3, 0)])

        depths = {r.id: r.depth for r in bfs_depth_limit(graph, "v0", 5)}
        self.assertEqual(depths, {"v0": 0, "v1": 1, "v3": 1, "v2": 2})

    def test_not_a_graph(self):
        with self.assertRaises(TypeError):
            list(bfs_depth_limit([("v0", "v1")], "v0", 1))


if __name__ == "__main__":
    unittest.main()
