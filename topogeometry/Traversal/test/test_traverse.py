# test/test_traverse.py

import unittest
from unittest import mock

from topogeometry.Traversal.traverse import Algorithm, TraversalSettings, traverse
from topogeometry.Traversal.records import VisitRecord, CostRecord


def path_links(n):
    links = {f"v{i}": {} for i in range(n)}
    for i in range(n - 1):
        links[f"v{i}"][f"v{i + 1}"] = {"distance": 2}
        links[f"v{i + 1}"][f"v{i}"] = {"distance": 2}
    return links


class TestTraversalSettings(unittest.TestCase):

    def test_defaults(self):
        s = TraversalSettings()
        self.assertIs(s.algorithm, Algorithm.BFS)
        self.assertEqual(s.cost_name, "step")
        self.assertEqual(s.cost_limit, 5)
        self.assertEqual(s.step_limit, 0)
        self.assertFalse(s.u_turn_penalty)
        self.assertEqual(s.delay, 0)
        self.assertIsNone(s.pace())

    def test_from_host_mapping(self):
        s = TraversalSettings.from_mapping({
            "algorithm": "Dijkstra Single Source",
            "costName": "distance",
            "costLimit": 100,
            "stepLimit": 30,
            "uTurnPenalty": True,
            "delay": 20,
            "colour": "red",
        })
        self.assertIs(s.algorithm, Algorithm.DIJKSTRA)
        self.assertEqual(s.cost_name, "distance")
        self.assertEqual(s.cost_limit, 100)
        self.assertEqual(s.step_limit, 30)
        self.assertTrue(s.u_turn_penalty)
        self.assertEqual(s.delay, 20)

    def test_snake_case_keys(self):
        s = TraversalSettings.from_mapping({"algorithm": Algorithm.BETWEENNESS, "cost_limit": 3})
        self.assertIs(s.algorithm, Algorithm.BETWEENNESS)
        self.assertEqual(s.cost_limit, 3)

    def test_invalid(self):
        with self.assertRaises(ValueError):
            TraversalSettings(algorithm="Depth First Search")
        with self.assertRaises(ValueError):
            TraversalSettings(cost_limit=-1)
        with self.assertRaises(ValueError):
            TraversalSettings(step_limit="far")
        with self.assertRaises(ValueError):
            TraversalSettings(cost_name="")

    def test_delay_paces_with_sleep(self):
        pace = TraversalSettings(delay=250).pace()
        with mock.patch("topogeometry.Traversal.traverse.time.sleep") as sleep:
            pace()
        sleep.assert_called_once_with(0.25)


class TestTraverse(unittest.TestCase):

    def test_bfs_uses_cost_limit_as_depth(self):
        records = list(traverse(path_links(6), "v0", TraversalSettings(cost_limit=2)))
        self.assertEqual([r.id for r in records], ["v0", "v1", "v2"])
        self.assertIsInstance(records[0], VisitRecord)

    def test_dijkstra(self):
        settings = {"algorithm": "Dijkstra Single Source", "costName": "distance", "costLimit": 5}
        records = list(traverse(path_links(6), "v0", settings))
        self.assertIsInstance(records[0], CostRecord)
        self.assertEqual({r.id: r.value for r in records}, {"v0": 0, "v1": 2, "v2": 4})

    def test_betweenness_ignores_start(self):
        settings = TraversalSettings(algorithm=Algorithm.BETWEENNESS, cost_name="distance", cost_limit=float("inf"))
        final = list(traverse(path_links(3), None, settings))[-1]
        self.assertEqual(final, {"v0": 0, "v1": 2, "v2": 0})


if __name__ == "__main__":
    unittest.main()
