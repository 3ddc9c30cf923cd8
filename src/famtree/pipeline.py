"""Snapshot -> graph -> levels -> layout pipeline."""

from collections.abc import Sequence
from dataclasses import dataclass

from famtree.graph import build_family_graph, get_relations
from famtree.layout import DETAILED, Layout, LayoutConfig, compute_layout
from famtree.levels import assign_levels
from famtree.models import FamilyGraph, Person, Relations


@dataclass(frozen=True)
class TreeView:
    graph: FamilyGraph
    layout: Layout


def build_tree_view(persons: Sequence[Person], config: LayoutConfig = DETAILED) -> TreeView:
    """Run the whole pipeline over one complete snapshot of person records."""
    graph = assign_levels(build_family_graph(persons))
    return TreeView(graph=graph, layout=compute_layout(graph, config))


def select(view: TreeView, person_id: str) -> Relations:
    """Selection callback: the chosen person and their immediate family."""
    return get_relations(view.graph, person_id)


class TreeCache:
    """
    Remembers the last built view and reuses it while the caller keeps passing
    the same snapshot object and layout config.

    Snapshots are compared by identity; hand in a new list after any change.
    """

    def __init__(self):
        self._snapshot: Sequence[Person] | None = None
        self._config: LayoutConfig | None = None
        self._view: TreeView | None = None
        self.builds = 0

    def get(self, persons: Sequence[Person], config: LayoutConfig = DETAILED) -> TreeView:
        if self._view is None or persons is not self._snapshot or config != self._config:
            self._view = build_tree_view(persons, config)
            self._snapshot = persons
            self._config = config
            self.builds += 1
        return self._view

    def clear(self) -> None:
        self._snapshot = None
        self._config = None
        self._view = None
