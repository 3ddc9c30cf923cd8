"""Visualization functions for laid-out family trees."""

from pathlib import Path

import matplotlib.pyplot as plt
from matplotlib.patches import FancyBboxPatch
import pydot

from famtree.models import ConnectorKind, Gender, Person
from famtree.pipeline import TreeView

PARENT_CHILD_COLOR = "#cbd5e1"
SPOUSE_COLOR = "#f472b6"

# Graphviz positions are in points
POINTS_PER_INCH = 72.0


def fill_color(person: Person) -> str:
    # Color by gender
    if person.gender == Gender.MALE:
        return "lightblue"
    if person.gender == Gender.FEMALE:
        return "lightpink"
    return "lightgray"


def node_label(person: Person) -> str:
    birth_year = person.birth_date[:4] if person.birth_date else ""
    death_year = person.death_date[:4] if person.death_date else ""
    name = person.name or person.id
    if not (birth_year or death_year):
        return name
    return f"{name}\n{birth_year}-{death_year}"


def plot_layout(view: TreeView, output_path: Path | None = None):
    """
    Draw the laid-out tree with matplotlib.

    Nodes are boxes centred on their layout position, colored by gender and
    faded when the person is deceased. Connectors follow the computed paths.

    Args:
        view: Graph and layout to draw
        output_path: Path to save the output image (png, svg or pdf). If None,
            displays interactively.
    """
    layout = view.layout
    config = layout.config
    min_x, min_y, max_x, max_y = layout.bounds()

    width_in = max((max_x - min_x) / 100, 4)
    height_in = max((max_y - min_y) / 100, 3)
    fig, ax = plt.subplots(figsize=(width_in, height_in))

    for connector in layout.connectors:
        xs = [p[0] for p in connector.points]
        ys = [p[1] for p in connector.points]
        color = SPOUSE_COLOR if connector.kind == ConnectorKind.SPOUSE else PARENT_CHILD_COLOR
        ax.plot(xs, ys, color=color, linewidth=2, solid_capstyle="round", zorder=1)

    for pid, pos in layout.positions.items():
        person = view.graph.person(pid)
        box = FancyBboxPatch(
            (pos.x - config.node_width / 2, pos.y - config.node_height / 2),
            config.node_width,
            config.node_height,
            boxstyle="round,pad=0,rounding_size=12",
            facecolor=fill_color(person),
            edgecolor="darkgray",
            alpha=0.6 if person.is_deceased else 1.0,
            zorder=2,
        )
        ax.add_patch(box)
        ax.text(pos.x, pos.y, node_label(person), ha="center", va="center", fontsize=8, zorder=3)

    margin = 20
    ax.set_xlim(min_x - margin, max_x + margin)
    # Screen coordinates: y grows downward
    ax.set_ylim(max_y + margin, min_y - margin)
    ax.set_aspect("equal")
    ax.axis("off")
    fig.tight_layout()

    if output_path:
        output_path = Path(output_path)
        # Determine format from extension
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf"):
            ext = "png"
        fig.savefig(output_path, format=ext)
        plt.close(fig)
    else:
        plt.show()


def to_dot(view: TreeView) -> pydot.Dot:
    """
    Build a Graphviz graph with every node pinned at its layout position.

    Render with ``neato -n`` so Graphviz keeps the given coordinates.
    """
    layout = view.layout
    config = layout.config

    P = pydot.Dot(graph_type="digraph")
    P.set("layout", "neato")
    P.set("splines", "ortho")

    for pid, pos in layout.positions.items():
        person = view.graph.person(pid)
        style = "rounded,filled,dashed" if person.is_deceased else "rounded,filled"
        P.add_node(
            pydot.Node(
                pid,
                label=node_label(person),
                shape="box",
                style=style,
                fillcolor=fill_color(person),
                fontsize="10",
                width=f"{config.node_width / POINTS_PER_INCH:.3f}",
                height=f"{config.node_height / POINTS_PER_INCH:.3f}",
                fixedsize="true",
                # Graphviz y axis points up
                pos=f"{pos.x:.1f},{-pos.y:.1f}!",
            )
        )

    for connector in layout.connectors:
        if connector.kind == ConnectorKind.SPOUSE:
            P.add_edge(pydot.Edge(connector.from_id, connector.to_id, dir="none", color=SPOUSE_COLOR))
            continue
        P.add_edge(pydot.Edge(connector.from_id, connector.to_id, color="darkgray"))
        if connector.co_parent_id:
            P.add_edge(pydot.Edge(connector.co_parent_id, connector.to_id, color="darkgray"))

    return P


def write_dot(view: TreeView, output_path: Path) -> None:
    Path(output_path).write_text(to_dot(view).to_string(), encoding="utf-8")
