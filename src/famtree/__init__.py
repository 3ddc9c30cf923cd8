"""famtree - family graph model and tree layout engine."""

from famtree.graph import build_family_graph, get_relations
from famtree.layout import COMPACT, DETAILED, Layout, LayoutConfig, compute_layout
from famtree.levels import assign_levels
from famtree.models import (
    Connector,
    ConnectorKind,
    FamilyGraph,
    Gender,
    LayoutPosition,
    Person,
    Relations,
    Status,
    TreeNode,
)
from famtree.pipeline import TreeCache, TreeView, build_tree_view
from famtree.viewport import Viewport, ViewportController

__all__ = [
    "COMPACT",
    "DETAILED",
    "Connector",
    "ConnectorKind",
    "FamilyGraph",
    "Gender",
    "Layout",
    "LayoutConfig",
    "LayoutPosition",
    "Person",
    "Relations",
    "Status",
    "TreeCache",
    "TreeNode",
    "TreeView",
    "Viewport",
    "ViewportController",
    "assign_levels",
    "build_family_graph",
    "build_tree_view",
    "compute_layout",
    "get_relations",
]
