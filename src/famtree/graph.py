"""Family graph building and relationship queries."""

from collections import deque
from collections.abc import Iterable
from dataclasses import replace
import logging

import networkx as nx

from famtree.models import FamilyGraph, Person, Relations, TreeNode

logger = logging.getLogger(__name__)


def build_family_graph(persons: Iterable[Person]) -> FamilyGraph:
    """
    Build the family graph from a flat list of person records.

    Parent and spouse ids that do not resolve to a known person are treated as
    absent. Spouse links are made symmetric even when only one side of the
    pair declared ``spouse_id``. Levels are left at 0; see ``assign_levels``.
    """
    records: dict[str, Person] = {}
    for person in persons:
        if person.id in records:
            logger.warning("Duplicate person id %r, keeping the first record", person.id)
            continue
        records[person.id] = person

    children: dict[str, list[str]] = {pid: [] for pid in records}
    spouses: dict[str, list[str]] = {pid: [] for pid in records}
    root_ids: list[str] = []

    for pid, person in records.items():
        resolved_parents = 0
        for parent_id in (person.father_id, person.mother_id):
            if parent_id is None:
                continue
            if parent_id not in records:
                logger.debug("Dropping dangling parent link %s -> %r", pid, parent_id)
                continue
            resolved_parents += 1
            if pid not in children[parent_id]:
                children[parent_id].append(pid)

        if resolved_parents == 0:
            root_ids.append(pid)

        spouse_id = person.spouse_id
        if spouse_id is None:
            continue
        if spouse_id not in records or spouse_id == pid:
            logger.debug("Dropping spouse link %s -> %r", pid, spouse_id)
            continue
        if spouse_id not in spouses[pid]:
            spouses[pid].append(spouse_id)
        if pid not in spouses[spouse_id]:
            spouses[spouse_id].append(pid)

    nodes = {
        pid: TreeNode(person=person, children=tuple(children[pid]), spouses=tuple(spouses[pid]))
        for pid, person in records.items()
    }
    logger.debug("Built family graph with %d nodes and %d roots", len(nodes), len(root_ids))
    return FamilyGraph(nodes=nodes, root_ids=tuple(root_ids))


def _require(graph: FamilyGraph, person_id: str) -> TreeNode:
    if person_id not in graph.nodes:
        raise ValueError(f"Person ID {person_id} not found in graph")
    return graph.nodes[person_id]


def get_relations(graph: FamilyGraph, person_id: str) -> Relations:
    """
    Resolve the immediate family of a person.

    Args:
        graph: The family graph
        person_id: The selected person

    Returns:
        The person with their father, mother, first spouse, children and
        siblings (persons sharing at least one resolved parent).
    """
    node = _require(graph, person_id)

    father_id = graph.father_of(person_id)
    mother_id = graph.mother_of(person_id)
    spouse_id = node.spouses[0] if node.spouses else None

    parent_ids = graph.parents_of(person_id)
    sibling_ids: list[str] = []
    for parent_id in parent_ids:
        for child_id in graph.nodes[parent_id].children:
            if child_id != person_id and child_id not in sibling_ids:
                sibling_ids.append(child_id)

    return Relations(
        person=node.person,
        father=graph.person(father_id) if father_id else None,
        mother=graph.person(mother_id) if mother_id else None,
        spouse=graph.person(spouse_id) if spouse_id else None,
        children=tuple(graph.person(c) for c in node.children),
        siblings=tuple(graph.person(s) for s in sibling_ids),
    )


def _walk(start: str, neighbors, max_depth: int | None) -> set[str]:
    found: set[str] = set()
    visited = {start}
    queue = deque([(start, 0)])
    while queue:
        current, depth = queue.popleft()
        if max_depth is not None and depth >= max_depth:
            continue
        for nxt in neighbors(current):
            if nxt in visited:
                continue
            visited.add(nxt)
            found.add(nxt)
            queue.append((nxt, depth + 1))
    found.discard(start)
    return found


def get_descendants(graph: FamilyGraph, person_id: str, max_depth: int | None = None) -> set[str]:
    """Get all descendants, optionally limited to ``max_depth`` generations."""
    _require(graph, person_id)
    return _walk(person_id, lambda pid: graph.nodes[pid].children, max_depth)


def get_ancestors(graph: FamilyGraph, person_id: str, max_depth: int | None = None) -> set[str]:
    """Get all ancestors, optionally limited to ``max_depth`` generations."""
    _require(graph, person_id)
    return _walk(person_id, graph.parents_of, max_depth)


def get_subtree(graph: FamilyGraph, person_id: str) -> FamilyGraph:
    """
    Extract the tree hanging from one person.

    The subtree holds the person, every descendant and the spouses of all of
    them. Parent links leading outside the subtree are cut so the person
    becomes a root of the rebuilt graph.
    """
    _require(graph, person_id)

    members = {person_id} | get_descendants(graph, person_id)
    for pid in list(members):
        members.update(graph.nodes[pid].spouses)

    persons = []
    for pid, node in graph.nodes.items():
        if pid not in members:
            continue
        person = node.person
        if pid == person_id:
            person = _with_parents(person, None, None)
        else:
            person = _with_parents(
                person,
                person.father_id if person.father_id in members else None,
                person.mother_id if person.mother_id in members else None,
            )
        persons.append(person)

    return build_family_graph(persons)


def _with_parents(person: Person, father_id: str | None, mother_id: str | None) -> Person:
    if person.father_id == father_id and person.mother_id == mother_id:
        return person
    return replace(person, father_id=father_id, mother_id=mother_id)


def parent_child_digraph(graph: FamilyGraph) -> nx.DiGraph:
    """Directed graph with one parent -> child edge per resolved parent link."""
    G = nx.DiGraph()
    G.add_nodes_from(graph.nodes)
    for pid, node in graph.nodes.items():
        for child_id in node.children:
            G.add_edge(pid, child_id)
    return G


def to_networkx(graph: FamilyGraph) -> nx.DiGraph:
    """
    Convert the family graph into a NetworkX directed graph.

    Nodes carry the person attributes and level; edges carry a
    ``relationship_type`` of PARENT_OF (parent -> child) or SPOUSE_OF (one
    edge per couple, from the lexically smaller id).
    """
    G = nx.DiGraph()

    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for pid, node in graph.nodes.items():
        person = node.person
        G.add_node(
            pid,
            person_name=person.name,
            gender=person.gender.value if person.gender else "",
            birth_date=person.birth_date or "",
            death_date=person.death_date or "",
            level=node.level,
        )

    for pid, node in graph.nodes.items():
        for child_id in node.children:
            G.add_edge(pid, child_id, relationship_type="PARENT_OF")
        for spouse_id in node.spouses:
            if pid < spouse_id:
                G.add_edge(pid, spouse_id, relationship_type="SPOUSE_OF")

    return G
