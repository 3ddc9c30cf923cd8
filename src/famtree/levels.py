"""Generation level assignment."""

from collections import deque
from dataclasses import replace
import logging

import networkx as nx

from famtree.graph import parent_child_digraph
from famtree.models import FamilyGraph

logger = logging.getLogger(__name__)


def _reachable_from_roots(graph: FamilyGraph) -> list[str]:
    """Breadth-first walk over children edges from every root, in discovery order."""
    visited: set[str] = set()
    order: list[str] = []
    queue = deque()
    for root_id in graph.root_ids:
        if root_id not in visited:
            visited.add(root_id)
            queue.append(root_id)

    while queue:
        current = queue.popleft()
        order.append(current)
        for child_id in graph.nodes[current].children:
            if child_id not in visited:
                visited.add(child_id)
                queue.append(child_id)

    return order


def compute_levels(graph: FamilyGraph) -> dict[str, int]:
    """
    Compute the generation depth of every person.

    Roots are at level 0. A person reachable along several ancestor chains
    gets the deepest of them, so a child is always below each of its parents.
    Persons on a parent-child cycle share one level, and persons that cannot
    be reached from any root stay at 0.
    """
    levels = {pid: 0 for pid in graph.nodes}
    reachable = _reachable_from_roots(graph)
    if not reachable:
        return levels

    # Collapse cycles so the reachable part becomes a DAG, then take the
    # longest path from the roots in topological order.
    sub = parent_child_digraph(graph).subgraph(reachable)
    condensed = nx.condensation(sub)
    component_level: dict[int, int] = {}
    for component in nx.topological_sort(condensed):
        level = max(
            (component_level[parent] + 1 for parent in condensed.predecessors(component)),
            default=0,
        )
        component_level[component] = level
        for pid in condensed.nodes[component]["members"]:
            levels[pid] = level

    return levels


def assign_levels(graph: FamilyGraph) -> FamilyGraph:
    """Return a copy of the graph with every node's ``level`` populated."""
    levels = compute_levels(graph)
    nodes = {pid: replace(node, level=levels[pid]) for pid, node in graph.nodes.items()}
    if nodes:
        logger.debug("Assigned levels 0..%d to %d persons", max(levels.values()), len(nodes))
    return FamilyGraph(nodes=nodes, root_ids=graph.root_ids)


def find_unreachable(graph: FamilyGraph) -> list[str]:
    """Persons that no root reaches through children edges, in graph order."""
    reachable = set(_reachable_from_roots(graph))
    return [pid for pid in graph.nodes if pid not in reachable]
