import unittest

from mazepath.base import (
    DuplicateEdgeDeclarationError,
    DuplicateIdentifierError,
    IdentifierNotFoundError,
    InconsistentEdgeCostError,
    ValidationFailure,
)
from mazepath.graph import UNREACHABLE_COST, DijkstraSolver, FastestPathRow, Neighbor, Node


def undirected_graph_nodes():
    return [
        Node("A", [Neighbor("B", 6), Neighbor("D", 1)]),
        Node("B", [Neighbor("A", 6), Neighbor("C", 5), Neighbor("D", 2), Neighbor("E", 2)]),
        Node("C", [Neighbor("B", 5), Neighbor("E", 5)]),
        Node("D", [Neighbor("A", 1), Neighbor("B", 2), Neighbor("E", 1)]),
        Node("E", [Neighbor("B", 2), Neighbor("C", 5), Neighbor("D", 1)]),
    ]


def directed_graph_nodes():
    # Drop D -> E so only E -> D remains.
    nodes = undirected_graph_nodes()
    node_d = next(node for node in nodes if node.id == "D")
    node_d.neighbors = [neighbor for neighbor in node_d.neighbors if neighbor.node_id != "E"]
    return nodes


class ComputeCostTableTests(unittest.TestCase):
    def setUp(self) -> None:
        self.solver = DijkstraSolver()

    def test_null_node_collection_fails_validation(self) -> None:
        with self.assertRaises(ValidationFailure):
            self.solver.compute_cost_table(None, "A")

    def test_blank_primary_node_id_fails_validation(self) -> None:
        nodes = undirected_graph_nodes()
        for primary in ("", None, "   "):
            with self.subTest(primary=primary):
                with self.assertRaises(ValidationFailure):
                    self.solver.compute_cost_table(nodes, primary)

    def test_gate_reports_every_violation(self) -> None:
        with self.assertRaises(ValidationFailure) as ctx:
            self.solver.compute_cost_table(None, " ")
        fields = {violation.field for violation in ctx.exception.violations}
        self.assertEqual(fields, {"nodes", "primary_node_id"})

    def test_negative_cost_fails_validation(self) -> None:
        nodes = undirected_graph_nodes()
        nodes[0].neighbors[0].cost = -1
        with self.assertRaises(ValidationFailure):
            self.solver.compute_cost_table(nodes, "A")

    def test_null_neighbor_fails_validation(self) -> None:
        with self.assertRaises(ValidationFailure) as ctx:
            self.solver.compute_cost_table([Node("A", [None])], "A")
        self.assertEqual([violation.field for violation in ctx.exception.violations], ["nodes[0].neighbors[0]"])

    def test_node_tuple_is_accepted(self) -> None:
        table = self.solver.compute_cost_table(tuple(undirected_graph_nodes()), "A")
        self.assertEqual(table.costs(), {"A": 0, "B": 3, "C": 7, "D": 1, "E": 2})

    def test_string_node_collection_fails_validation(self) -> None:
        with self.assertRaises(ValidationFailure):
            self.solver.compute_cost_table("AB", "A")

    def test_blank_node_id_fails_validation(self) -> None:
        nodes = undirected_graph_nodes()
        nodes[2].id = " "
        with self.assertRaises(ValidationFailure):
            self.solver.compute_cost_table(nodes, "A")

    def test_duplicate_node_ids_are_rejected(self) -> None:
        nodes = undirected_graph_nodes()
        nodes[3].id = "B"
        with self.assertRaises(DuplicateIdentifierError):
            self.solver.compute_cost_table(nodes, "A")

    def test_duplicate_neighbor_ids_are_rejected(self) -> None:
        nodes = undirected_graph_nodes()
        nodes[1].neighbors[1].node_id = nodes[1].neighbors[3].node_id
        with self.assertRaises(DuplicateEdgeDeclarationError) as ctx:
            self.solver.compute_cost_table(nodes, "A")
        # The renamed edge also disagrees with E -> B, and both problems are reported.
        kinds = [violation.kind for violation in ctx.exception.violations]
        self.assertEqual(kinds, ["duplicate_edge", "inconsistent_edge_cost"])

    def test_unmatching_reciprocal_costs_are_rejected(self) -> None:
        nodes = undirected_graph_nodes()
        nodes[1].neighbors[0].cost += 1
        with self.assertRaises(InconsistentEdgeCostError):
            self.solver.compute_cost_table(nodes, "A")

    def test_unknown_primary_node_id_is_rejected(self) -> None:
        with self.assertRaises(IdentifierNotFoundError):
            self.solver.compute_cost_table(undirected_graph_nodes(), "SOME_OTHER_NODE_ID")

    def test_neighbor_referencing_unknown_node_is_rejected(self) -> None:
        nodes = undirected_graph_nodes()
        nodes[2].neighbors.append(Neighbor("Z", 1))
        with self.assertRaises(IdentifierNotFoundError):
            self.solver.compute_cost_table(nodes, "A")

    def test_errors_are_value_errors(self) -> None:
        with self.assertRaises(ValueError):
            self.solver.compute_cost_table(undirected_graph_nodes(), "NOPE")

    def test_undirected_graph_table(self) -> None:
        table = self.solver.compute_cost_table(undirected_graph_nodes(), "A")

        self.assertEqual(table.primary_node_id, "A")
        self.assertEqual(
            table.rows,
            [
                FastestPathRow("A", 0, None),
                FastestPathRow("B", 3, "D"),
                FastestPathRow("C", 7, "E"),
                FastestPathRow("D", 1, "A"),
                FastestPathRow("E", 2, "D"),
            ],
        )

    def test_directed_graph_table(self) -> None:
        table = self.solver.compute_cost_table(directed_graph_nodes(), "A")

        self.assertEqual(table.costs(), {"A": 0, "B": 3, "C": 8, "D": 1, "E": 5})
        self.assertEqual(
            table.predecessors(),
            {"A": None, "B": "D", "C": "B", "D": "A", "E": "B"},
        )

    def test_unconnected_node_keeps_sentinel_cost(self) -> None:
        nodes = undirected_graph_nodes()
        nodes.append(Node("F", None))

        table = self.solver.compute_cost_table(nodes, "A")

        row = table.row("F")
        self.assertEqual(row.lowest_cost, UNREACHABLE_COST)
        self.assertIsNone(row.neighbor_node_id)
        self.assertFalse(row.is_reachable)
        self.assertEqual(table.row("C").lowest_cost, 7)

    def test_primary_row_is_zero_without_predecessor(self) -> None:
        nodes = undirected_graph_nodes()
        for node in nodes:
            with self.subTest(primary=node.id):
                row = self.solver.compute_cost_table(nodes, node.id).row(node.id)
                self.assertEqual(row.lowest_cost, 0)
                self.assertIsNone(row.neighbor_node_id)

    def test_single_node_graph(self) -> None:
        table = self.solver.compute_cost_table([Node("solo")], "solo")
        self.assertEqual(table.rows, [FastestPathRow("solo", 0, None)])

    def test_ties_resolve_to_first_declared_node(self) -> None:
        nodes = [
            Node("S", [Neighbor("X", 1), Neighbor("Y", 1)]),
            Node("Y", [Neighbor("S", 1), Neighbor("T", 1)]),
            Node("X", [Neighbor("S", 1), Neighbor("T", 1)]),
            Node("T", [Neighbor("X", 1), Neighbor("Y", 1)]),
        ]
        table = self.solver.compute_cost_table(nodes, "S")
        self.assertEqual(table.row("T").neighbor_node_id, "Y")
        self.assertEqual(table.row("T").lowest_cost, 2)

    def test_table_serializes_unreachable_cost_as_null(self) -> None:
        nodes = undirected_graph_nodes() + [Node("F")]
        payload = self.solver.compute_cost_table(nodes, "A").to_dict()
        self.assertEqual(payload["primaryNodeId"], "A")
        self.assertEqual(payload["rows"][-1], {"nodeId": "F", "lowestCost": None, "neighborNodeId": None})


class ComputePathTests(unittest.TestCase):
    def setUp(self) -> None:
        self.solver = DijkstraSolver()

    def test_null_node_collection_fails_validation(self) -> None:
        with self.assertRaises(ValidationFailure):
            self.solver.compute_path(None, "A", "B")

    def test_blank_endpoints_fail_validation(self) -> None:
        nodes = undirected_graph_nodes()
        with self.assertRaises(ValidationFailure):
            self.solver.compute_path(nodes, None, "B")
        with self.assertRaises(ValidationFailure):
            self.solver.compute_path(nodes, "A", " ")

    def test_unknown_start_node_is_rejected(self) -> None:
        with self.assertRaises(IdentifierNotFoundError):
            self.solver.compute_path(undirected_graph_nodes(), "NOT_THERE", "B")

    def test_unknown_end_node_is_rejected(self) -> None:
        with self.assertRaises(IdentifierNotFoundError):
            self.solver.compute_path(undirected_graph_nodes(), "A", "NOT_THERE")

    def test_same_start_and_end_yields_single_node(self) -> None:
        nodes = undirected_graph_nodes()
        for node in nodes:
            with self.subTest(node=node.id):
                self.assertEqual(self.solver.compute_path(nodes, node.id, node.id), [node.id])

    def test_undirected_graph_paths(self) -> None:
        nodes = undirected_graph_nodes()
        self.assertEqual(self.solver.compute_path(nodes, "A", "C"), ["A", "D", "E", "C"])
        self.assertEqual(self.solver.compute_path(nodes, "C", "A"), ["C", "E", "D", "A"])
        self.assertEqual(self.solver.compute_path(nodes, "E", "A"), ["E", "D", "A"])
        self.assertEqual(self.solver.compute_path(nodes, "B", "A"), ["B", "D", "A"])
        self.assertEqual(self.solver.compute_path(nodes, "C", "B"), ["C", "B"])

    def test_symmetric_graph_paths_reverse_each_other(self) -> None:
        nodes = undirected_graph_nodes()
        for start, end in (("A", "C"), ("A", "E"), ("A", "B")):
            with self.subTest(start=start, end=end):
                forward = self.solver.compute_path(nodes, start, end)
                backward = self.solver.compute_path(nodes, end, start)
                self.assertEqual(forward, list(reversed(backward)))

    def test_directed_graph_paths(self) -> None:
        nodes = directed_graph_nodes()
        # A -> D -> E uses the E -> D declaration against its direction.
        self.assertEqual(self.solver.compute_path(nodes, "A", "C"), ["A", "D", "E", "C"])
        self.assertEqual(self.solver.compute_path(nodes, "C", "A"), ["C", "B", "D", "A"])
        self.assertEqual(self.solver.compute_path(nodes, "E", "A"), ["E", "B", "D", "A"])
        self.assertEqual(self.solver.compute_path(nodes, "B", "A"), ["B", "D", "A"])
        self.assertEqual(self.solver.compute_path(nodes, "C", "B"), ["C", "B"])

    def test_missing_path_returns_none(self) -> None:
        nodes = undirected_graph_nodes()
        nodes.append(Node("F", [Neighbor("G", 1)]))
        nodes.append(Node("G", [Neighbor("F", 1)]))

        self.assertIsNone(self.solver.compute_path(nodes, "A", "F"))
        self.assertEqual(self.solver.compute_path(nodes, "F", "G"), ["F", "G"])
        self.assertIsNone(self.solver.compute_path(nodes, "G", "A"))


if __name__ == "__main__":
    unittest.main()
