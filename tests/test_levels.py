from famtree.graph import build_family_graph
from famtree.levels import assign_levels, compute_levels, find_unreachable
from famtree.models import Person


def _levels(persons: list[Person]) -> dict[str, int]:
    graph = assign_levels(build_family_graph(persons))
    return {pid: node.level for pid, node in graph.nodes.items()}


def test_couple_with_child(couple_with_child: list[Person]) -> None:
    assert _levels(couple_with_child) == {"A": 0, "B": 0, "C": 1}


def test_three_generations(three_generations: list[Person]) -> None:
    levels = _levels(three_generations)

    assert levels["g1"] == levels["g2"] == 0
    assert levels["p1"] == levels["p2"] == 1
    # married in without recorded parents
    assert levels["s1"] == 0
    assert levels["c1"] == levels["c2"] == 2


def test_deeper_chain_wins_across_roots(make_person) -> None:
    # G -> F -> C, and M (a root) is C's mother
    levels = _levels(
        [
            make_person("G"),
            make_person("F", father_id="G"),
            make_person("M"),
            make_person("C", father_id="F", mother_id="M"),
        ]
    )

    assert levels == {"G": 0, "F": 1, "M": 0, "C": 2}


def test_deeper_chain_wins_from_single_root(make_person) -> None:
    # R is both the father of A and the mother-slot parent of C, A is C's father
    levels = _levels(
        [
            make_person("R"),
            make_person("A", father_id="R"),
            make_person("C", father_id="A", mother_id="R"),
        ]
    )

    assert levels == {"R": 0, "A": 1, "C": 2}


def test_child_always_below_parents(three_generations: list[Person]) -> None:
    graph = assign_levels(build_family_graph(three_generations))

    for node in graph.nodes.values():
        for child_id in node.children:
            assert graph.nodes[child_id].level > node.level


def test_self_parent_terminates_and_stays_at_zero(make_person) -> None:
    levels = _levels([make_person("A", father_id="A"), make_person("B")])

    assert levels == {"A": 0, "B": 0}


def test_cycle_below_a_root_terminates(make_person) -> None:
    # R -> A, A <-> B form a loop
    levels = _levels(
        [
            make_person("R"),
            make_person("A", father_id="R", mother_id="B"),
            make_person("B", father_id="A"),
            make_person("D", father_id="B"),
        ]
    )

    assert levels["R"] == 0
    assert levels["A"] == levels["B"] == 1
    assert levels["D"] == 2


def test_disconnected_cycle_falls_back_to_zero(make_person) -> None:
    graph = build_family_graph(
        [
            make_person("X", father_id="Y"),
            make_person("Y", father_id="X"),
            make_person("Z", father_id="X"),
            make_person("root"),
        ]
    )

    assert compute_levels(graph) == {"X": 0, "Y": 0, "Z": 0, "root": 0}
    assert find_unreachable(graph) == ["X", "Y", "Z"]


def test_assign_levels_returns_new_graph(couple_with_child: list[Person]) -> None:
    graph = build_family_graph(couple_with_child)
    leveled = assign_levels(graph)

    assert graph.nodes["C"].level == 0
    assert leveled.nodes["C"].level == 1
    assert leveled.root_ids == graph.root_ids
    assert list(leveled.nodes) == list(graph.nodes)


def test_empty_graph() -> None:
    graph = assign_levels(build_family_graph([]))

    assert graph.nodes == {}
