"""Structural and date checks for family graph data."""

import networkx as nx

from famtree.graph import parent_child_digraph
from famtree.levels import find_unreachable
from famtree.models import FamilyGraph, Gender

REFERENCE_FIELDS = ("father_id", "mother_id", "spouse_id")


def find_dangling_references(graph: FamilyGraph) -> list[tuple[str, str, str]]:
    """Return (person_id, field, missing_id) for every link to an unknown person."""
    dangling = []
    for pid, node in graph.nodes.items():
        for field_name in REFERENCE_FIELDS:
            ref = getattr(node.person, field_name)
            if ref is not None and ref not in graph.nodes:
                dangling.append((pid, field_name, ref))
    return dangling


def find_parent_cycles(graph: FamilyGraph) -> list[list[str]]:
    """
    Find groups of persons that are (directly or indirectly) their own ancestors.

    Each group is a strongly connected component of the parent -> child graph
    with more than one member, or a single person listed as their own parent.
    Members are listed in graph order.
    """
    G = parent_child_digraph(graph)
    order = {pid: i for i, pid in enumerate(graph.nodes)}

    cycles = []
    for component in nx.strongly_connected_components(G):
        if len(component) == 1:
            (only,) = component
            if not G.has_edge(only, only):
                continue
        cycles.append(sorted(component, key=order.__getitem__))

    cycles.sort(key=lambda members: order[members[0]])
    return cycles


def validate_graph(graph: FamilyGraph) -> list[str]:
    """
    Validate the family graph for:
    - Dangling and self references
    - Cycles in parent-child relationships
    - Persons unreachable from any root
    - Father/mother slots that disagree with the recorded gender
    - Impossible ages (child born before parent) and date ordering issues

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    for pid, field_name, ref in find_dangling_references(graph):
        warnings.append(f"Dangling reference: {pid}.{field_name} points to unknown person {ref}")

    for pid, node in graph.nodes.items():
        person = node.person
        if pid in (person.father_id, person.mother_id):
            warnings.append(f"Self reference: {pid} is listed as their own parent")
        if person.spouse_id == pid:
            warnings.append(f"Self reference: {pid} is listed as their own spouse")

    for members in find_parent_cycles(graph):
        warnings.append(f"Cycle detected in parent-child relationships: {members}")

    roots = set(graph.root_ids)
    unreachable = [pid for pid in find_unreachable(graph) if pid not in roots]
    if unreachable:
        warnings.append(f"Unreachable from any root, placed at level 0: {unreachable}")

    for pid in graph.nodes:
        father_id = graph.father_of(pid)
        if father_id is not None and graph.person(father_id).gender == Gender.FEMALE:
            warnings.append(f"Suspicious: father {father_id} of {pid} is recorded as female")
        mother_id = graph.mother_of(pid)
        if mother_id is not None and graph.person(mother_id).gender == Gender.MALE:
            warnings.append(f"Suspicious: mother {mother_id} of {pid} is recorded as male")

    # Check for impossible ages (child born before parent)
    # birth_date is ISO format (YYYY-MM-DD) which can be compared as strings
    for pid, node in graph.nodes.items():
        parent = node.person
        for child_id in node.children:
            if child_id == pid:
                continue
            child = graph.person(child_id)
            if not (parent.birth_date and child.birth_date):
                continue

            if child.birth_date < parent.birth_date:
                warnings.append(f"Impossible: {child.name or child_id} born before parent {parent.name or pid}")
                continue

            # Check if parent was too young (< 12 years old)
            try:
                parent_year = int(parent.birth_date[:4])
                child_year = int(child.birth_date[:4])
            except ValueError:
                continue
            if child_year - parent_year < 12:
                warnings.append(
                    f"Suspicious: {parent.name or pid} was less than 12 years "
                    f"old when {child.name or child_id} was born"
                )

    # Check death before birth
    for pid, node in graph.nodes.items():
        birth = node.person.birth_date
        death = node.person.death_date
        if birth and death and death < birth:
            warnings.append(f"Impossible: {node.person.name or pid} died before being born")

    return warnings
