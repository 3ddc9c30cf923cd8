"""Deterministic 2-D layout of a level-annotated family graph."""

from collections import defaultdict
from dataclasses import dataclass, field
import logging

from famtree.graph import get_ancestors
from famtree.models import Connector, ConnectorKind, FamilyGraph, LayoutPosition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = 224.0
    node_height: float = 160.0
    sibling_spacing: float = 520.0  # distance between slot centres within a level
    level_height: float = 240.0  # distance between level centres
    pair_gap: float = 256.0  # distance between the centres of two paired spouses
    # lay a parentless spouse out on their partner's deeper row
    align_married_in: bool = False


DETAILED = LayoutConfig()
COMPACT = LayoutConfig(
    node_width=112.0,
    node_height=104.0,
    sibling_spacing=280.0,
    level_height=160.0,
    pair_gap=136.0,
)


def config_for(compact: bool) -> LayoutConfig:
    return COMPACT if compact else DETAILED


@dataclass(frozen=True)
class Layout:
    positions: dict[str, LayoutPosition] = field(default_factory=dict)
    connectors: tuple[Connector, ...] = ()
    config: LayoutConfig = DETAILED

    def bounds(self) -> tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of all node footprints; zeros when empty."""
        if not self.positions:
            return (0.0, 0.0, 0.0, 0.0)
        half_w = self.config.node_width / 2
        half_h = self.config.node_height / 2
        xs = [p.x for p in self.positions.values()]
        ys = [p.y for p in self.positions.values()]
        return (min(xs) - half_w, min(ys) - half_h, max(xs) + half_w, max(ys) + half_h)


def _layout_rows(graph: FamilyGraph) -> dict[str, int]:
    """
    Row per person, moving each root down to the row of their first spouse
    when that spouse sits deeper and all of the root's children stay below it.
    """
    rows = {pid: node.level for pid, node in graph.nodes.items()}
    for root_id in graph.root_ids:
        node = graph.nodes[root_id]
        if not node.spouses:
            continue
        spouse_level = graph.nodes[node.spouses[0]].level
        if spouse_level <= node.level:
            continue
        if all(graph.nodes[c].level > spouse_level for c in node.children):
            rows[root_id] = spouse_level
    return rows


def _can_join_row(graph: FamilyGraph, spouse_id: str, positioned: set[str]) -> bool:
    """True when every ancestor of ``spouse_id`` already sits on a higher row."""
    return get_ancestors(graph, spouse_id) <= positioned


def _slots_for_level(
    graph: FamilyGraph, level_ids: list[str], positioned: set[str]
) -> list[tuple[str, ...]]:
    """Group one level into single or spouse-pair slots, left to right."""
    slots: list[tuple[str, ...]] = []
    claimed: set[str] = set()
    for pid in level_ids:
        if pid in positioned or pid in claimed:
            continue
        spouses = graph.nodes[pid].spouses
        if spouses:
            spouse_id = spouses[0]
            if (
                spouse_id not in positioned
                and spouse_id not in claimed
                and _can_join_row(graph, spouse_id, positioned)
            ):
                slots.append((pid, spouse_id))
                claimed.update((pid, spouse_id))
                continue
        slots.append((pid,))
        claimed.add(pid)
    return slots


def compute_positions(graph: FamilyGraph, config: LayoutConfig = DETAILED) -> dict[str, LayoutPosition]:
    """
    Place every person on a grid of generation bands.

    Each level is a horizontal band centred on x = 0, with ``level * level_height``
    as its y. Persons keep the graph's node order inside a band. A person whose
    first spouse has not been placed yet shares one slot with that spouse, the
    pair sitting half a ``pair_gap`` either side of the slot centre, on the row
    of whichever of the two is processed first. The spouse only joins that row
    when all of their own ancestors are already placed above it; otherwise both
    keep single slots on their own rows.
    """
    if config.align_married_in:
        rows = _layout_rows(graph)
    else:
        rows = {pid: node.level for pid, node in graph.nodes.items()}
    levels: dict[int, list[str]] = defaultdict(list)
    for pid in graph.nodes:
        levels[rows[pid]].append(pid)

    positions: dict[str, LayoutPosition] = {}
    positioned: set[str] = set()

    for level in sorted(levels):
        y = level * config.level_height
        slots = _slots_for_level(graph, levels[level], positioned)
        start_x = -(len(slots) * config.sibling_spacing) / 2 + config.sibling_spacing / 2

        for index, slot in enumerate(slots):
            slot_x = start_x + index * config.sibling_spacing
            if len(slot) == 2:
                left, right = slot
                positions[left] = LayoutPosition(left, slot_x - config.pair_gap / 2, y)
                positions[right] = LayoutPosition(right, slot_x + config.pair_gap / 2, y)
            else:
                positions[slot[0]] = LayoutPosition(slot[0], slot_x, y)
            positioned.update(slot)

    return positions


def _elbow(start: tuple[float, float], end: tuple[float, float]) -> tuple[tuple[float, float], ...]:
    mid_y = start[1] + (end[1] - start[1]) / 2
    return (start, (start[0], mid_y), (end[0], mid_y), end)


def _is_couple(graph: FamilyGraph, positions: dict[str, LayoutPosition], a: str, b: str) -> bool:
    return b in graph.nodes[a].spouses and positions[a].y == positions[b].y


def compute_connectors(
    graph: FamilyGraph, positions: dict[str, LayoutPosition], config: LayoutConfig = DETAILED
) -> tuple[Connector, ...]:
    """
    Build parent-child elbow paths and spouse lines for placed persons.

    A child whose father and mother are a couple on the same row gets one
    connector from the middle of the spouse line instead of one per parent.
    Spouse lines are emitted once per pair, from the lexically smaller id.
    """
    half_w = config.node_width / 2
    half_h = config.node_height / 2
    connectors: list[Connector] = []

    for pid, node in graph.nodes.items():
        pos = positions[pid]

        for child_id in node.children:
            if child_id == pid:
                continue
            child = positions[child_id]
            child_top = (child.x, child.y - half_h)

            father_id = graph.father_of(child_id)
            mother_id = graph.mother_of(child_id)
            if (
                father_id is not None
                and mother_id is not None
                and father_id != mother_id
                and _is_couple(graph, positions, father_id, mother_id)
            ):
                if pid != father_id:
                    continue
                mother = positions[mother_id]
                start = ((pos.x + mother.x) / 2, pos.y)
                connectors.append(
                    Connector(
                        from_id=pid,
                        to_id=child_id,
                        kind=ConnectorKind.PARENT_CHILD,
                        points=_elbow(start, child_top),
                        co_parent_id=mother_id,
                    )
                )
                continue

            start = (pos.x, pos.y + half_h)
            connectors.append(
                Connector(
                    from_id=pid,
                    to_id=child_id,
                    kind=ConnectorKind.PARENT_CHILD,
                    points=_elbow(start, child_top),
                )
            )

        for spouse_id in node.spouses:
            # Only draw once (from lower ID to higher ID)
            if not pid < spouse_id:
                continue
            spouse = positions[spouse_id]
            left, right = (pos, spouse) if pos.x <= spouse.x else (spouse, pos)
            connectors.append(
                Connector(
                    from_id=pid,
                    to_id=spouse_id,
                    kind=ConnectorKind.SPOUSE,
                    points=((left.x + half_w, left.y), (right.x - half_w, right.y)),
                )
            )

    return tuple(connectors)


def compute_layout(graph: FamilyGraph, config: LayoutConfig = DETAILED) -> Layout:
    """Lay out a level-annotated graph: positions first, then connector geometry."""
    positions = compute_positions(graph, config)
    connectors = compute_connectors(graph, positions, config)
    logger.debug("Laid out %d persons with %d connectors", len(positions), len(connectors))
    return Layout(positions=positions, connectors=connectors, config=config)
