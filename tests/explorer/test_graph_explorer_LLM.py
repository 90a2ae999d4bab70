"""Tests for GraphExplorer pattern interpretation, using a recording explorer."""

from __future__ import annotations

from collections.abc import Collection
from typing import Any

from graph_cloner.explorer.GraphExplorer import GraphExplorer, get_graph_explorer
from graph_cloner.pattern.compile_pattern import compile_pattern


class N:
    """A bare graph node; edges live in the RecordingExplorer."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"N({self.name})"


class RecordingExplorer:
    """EntityExplorer over an explicit edge table, recording every call."""

    def __init__(self, edges: dict[tuple[N, str], list[N | None]]) -> None:
        self.edges = edges
        self.calls: list[tuple[str, str]] = []

    def explore(self, entity: Any, relation: str) -> Collection[Any] | None:
        self.calls.append((entity.name, relation))
        return self.edges.get((entity, relation))


def names(objects: Any) -> list[str]:
    return [o.name for o in objects]


class TestNameAndSequence:
    """Tests for Name and Sequence nodes."""

    def test_name_explores_root(self) -> None:
        """A single name explores the root once and returns its targets."""
        root, a1, a2 = N("root"), N("a1"), N("a2")
        explorer = RecordingExplorer({(root, "a"): [a1, a2]})

        reached = GraphExplorer("a").explore(root, explorer)

        assert names(reached) == ["a1", "a2"]
        assert explorer.calls == [("root", "a")]

    def test_sequence_feeds_each_step(self) -> None:
        """Each step of a sequence runs on the previous step's output."""
        root, a1, a2, b = N("root"), N("a1"), N("a2"), N("b")
        explorer = RecordingExplorer({(root, "a"): [a1, a2], (a2, "b"): [b]})

        reached = GraphExplorer("a.b").explore(root, explorer)

        assert names(reached) == ["b"]
        assert explorer.calls == [("root", "a"), ("a1", "b"), ("a2", "b")]

    def test_sequence_stops_on_empty_set(self) -> None:
        """Nothing is explored once the working set is empty."""
        root = N("root")
        explorer = RecordingExplorer({})

        reached = GraphExplorer("a.b.c").explore(root, explorer)

        assert len(reached) == 0
        assert explorer.calls == [("root", "a")]

    def test_nulls_are_skipped(self) -> None:
        """None targets are not added to the working set."""
        root, a = N("root"), N("a")
        explorer = RecordingExplorer({(root, "a"): [None, a, None]})

        reached = GraphExplorer("a.b").explore(root, explorer)

        assert len(reached) == 0
        assert explorer.calls == [("root", "a"), ("a", "b")]

    def test_shared_target_explored_once_per_step(self) -> None:
        """A target reached twice in one step is explored once in the next."""
        root, x, y, shared = N("root"), N("x"), N("y"), N("shared")
        explorer = RecordingExplorer(
            {(root, "a"): [x, y], (x, "b"): [shared], (y, "b"): [shared]}
        )

        GraphExplorer("a.b.c").explore(root, explorer)

        assert explorer.calls.count(("shared", "c")) == 1

    def test_none_root(self) -> None:
        """A None root reaches nothing."""
        explorer = RecordingExplorer({})
        assert len(GraphExplorer("a").explore(None, explorer)) == 0
        assert explorer.calls == []


class TestAlternation:
    """Tests for Alternation and Group nodes."""

    def test_branches_share_input(self) -> None:
        """Every branch runs on the same input set."""
        root, b, c = N("root"), N("b"), N("c")
        explorer = RecordingExplorer({(root, "b"): [b], (root, "c"): [c]})

        reached = GraphExplorer("b|c").explore(root, explorer)

        assert names(reached) == ["b", "c"]
        assert explorer.calls == [("root", "b"), ("root", "c")]

    def test_merge_then_continue(self) -> None:
        """Steps after an alternation run on the merged output of all branches."""
        root, b, c, d1, d2 = N("root"), N("b"), N("c"), N("d1"), N("d2")
        explorer = RecordingExplorer(
            {(root, "b"): [b], (root, "c"): [c], (b, "d"): [d1], (c, "d"): [d2]}
        )

        reached = GraphExplorer("(b|c).d").explore(root, explorer)

        assert names(reached) == ["d1", "d2"]
        assert ("b", "d") in explorer.calls
        assert ("c", "d") in explorer.calls

    def test_alternation_matches_union_of_paths(self) -> None:
        """'a.(b|c).d' reaches the union of 'a.b.d' and 'a.c.d'."""
        root, a, b, c, d1, d2 = N("root"), N("a"), N("b"), N("c"), N("d1"), N("d2")
        edges: dict[tuple[N, str], list[N | None]] = {
            (root, "a"): [a],
            (a, "b"): [b],
            (a, "c"): [c],
            (b, "d"): [d1],
            (c, "d"): [d2, d1],
        }

        combined = GraphExplorer("a.(b|c).d").explore(root, RecordingExplorer(edges))
        left = GraphExplorer("a.b.d").explore(root, RecordingExplorer(edges))
        right = GraphExplorer("a.c.d").explore(root, RecordingExplorer(edges))

        assert set(names(combined)) == set(names(left)) | set(names(right))

    def test_nested_alternation_in_branch(self) -> None:
        """A branch may itself be a sequence that continues on its own."""
        root, a, b, x = N("root"), N("a"), N("b"), N("x")
        explorer = RecordingExplorer({(root, "a"): [a], (a, "x"): [x], (root, "b"): [b]})

        reached = GraphExplorer("a.x|b").explore(root, explorer)

        assert names(reached) == ["x", "b"]
        assert ("b", "x") not in explorer.calls


class TestRepetition:
    """Tests for Repetition fixed points."""

    def test_chain_reaches_every_node(self) -> None:
        """'next+' follows a chain to its end."""
        nodes = [N(f"n{i}") for i in range(50)]
        edges: dict[tuple[N, str], list[N | None]] = {
            (a, "next"): [b] for a, b in zip(nodes, nodes[1:])
        }
        explorer = RecordingExplorer(edges)

        reached = GraphExplorer("next+").explore(nodes[0], explorer)

        assert names(reached) == [n.name for n in nodes[1:]]
        assert len(explorer.calls) == len(nodes)

    def test_cycle_terminates(self) -> None:
        """A cycle is explored once around and then stops."""
        a, b, c = N("a"), N("b"), N("c")
        explorer = RecordingExplorer({(a, "next"): [b], (b, "next"): [c], (c, "next"): [a]})

        reached = GraphExplorer("next+").explore(a, explorer)

        assert set(names(reached)) == {"a", "b", "c"}
        # "a" is new in the third round, so it is asked once more before the fixed point.
        assert explorer.calls == [("a", "next"), ("b", "next"), ("c", "next"), ("a", "next")]

    def test_self_reference_terminates(self) -> None:
        """A node pointing at itself is reached, and the second round finds nothing new."""
        a = N("a")
        explorer = RecordingExplorer({(a, "next"): [a]})

        reached = GraphExplorer("next+").explore(a, explorer)

        assert names(reached) == ["a"]
        assert explorer.calls == [("a", "next"), ("a", "next")]

    def test_root_not_included_unless_reached(self) -> None:
        """One-or-more: the starting object is only in the result if a round reaches it."""
        a, b = N("a"), N("b")
        explorer = RecordingExplorer({(a, "next"): [b]})

        reached = GraphExplorer("next+").explore(a, explorer)

        assert names(reached) == ["b"]

    def test_repeated_sequence(self) -> None:
        """'(a.b)+' repeats the two-step hop."""
        n0, m0, n1, m1, n2 = N("n0"), N("m0"), N("n1"), N("m1"), N("n2")
        explorer = RecordingExplorer(
            {(n0, "a"): [m0], (m0, "b"): [n1], (n1, "a"): [m1], (m1, "b"): [n2]}
        )

        reached = GraphExplorer("(a.b)+").explore(n0, explorer)

        assert names(reached) == ["n1", "n2"]

    def test_repetition_then_step(self) -> None:
        """Steps after '+' run on everything the repetition reached."""
        root, d1, d2, e1, e2 = N("root"), N("d1"), N("d2"), N("e1"), N("e2")
        explorer = RecordingExplorer(
            {(root, "sub"): [d1], (d1, "sub"): [d2], (d1, "emp"): [e1], (d2, "emp"): [e2]}
        )

        reached = GraphExplorer("sub+.emp").explore(root, explorer)

        assert names(reached) == ["e1", "e2"]

    def test_branching_tree_with_diamond(self) -> None:
        """Objects reachable along several paths are explored once per repetition."""
        root, left, right, bottom = N("root"), N("left"), N("right"), N("bottom")
        explorer = RecordingExplorer(
            {(root, "c"): [left, right], (left, "c"): [bottom], (right, "c"): [bottom]}
        )

        reached = GraphExplorer("c+").explore(root, explorer)

        assert set(names(reached)) == {"left", "right", "bottom"}
        assert explorer.calls.count(("bottom", "c")) == 1


class TestExplorerCache:
    """Tests for get_graph_explorer() and precompiled patterns."""

    def test_cached_explorer(self) -> None:
        """The same pattern string yields the same GraphExplorer."""
        assert get_graph_explorer("p.q") is get_graph_explorer("p.q")

    def test_accepts_compiled_pattern(self) -> None:
        """A GraphExplorer can be built from an already compiled pattern."""
        explorer = GraphExplorer(compile_pattern("a|b"))
        assert explorer.pattern is compile_pattern("a|b")
        assert repr(explorer) == "GraphExplorer('a|b')"
