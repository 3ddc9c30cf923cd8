from pathlib import Path

from famtree.main import main
from famtree.models import Gender, Person
from famtree.pipeline import build_tree_view
from famtree.plotting import fill_color, node_label, plot_layout, to_dot, write_dot


def test_fill_color_by_gender(make_person) -> None:
    assert fill_color(make_person("a", gender=Gender.MALE)) == "lightblue"
    assert fill_color(make_person("b", gender=Gender.FEMALE)) == "lightpink"
    assert fill_color(make_person("c")) == "lightgray"


def test_node_label(make_person) -> None:
    assert node_label(make_person("x", name="Siti", birth_date="1945-08-22")) == "Siti\n1945-"
    assert node_label(make_person("y", name="")) == "y"


def test_plot_layout_writes_png(tmp_path: Path, three_generations: list[Person]) -> None:
    out = tmp_path / "tree.png"
    plot_layout(build_tree_view(three_generations), out)

    assert out.exists()
    assert out.stat().st_size > 0


def test_plot_empty_tree(tmp_path: Path) -> None:
    out = tmp_path / "empty.svg"
    plot_layout(build_tree_view([]), out)

    assert out.exists()


def test_to_dot_pins_positions(couple_with_child: list[Person]) -> None:
    dot = to_dot(build_tree_view(couple_with_child))

    assert {n.get_name() for n in dot.get_nodes()} >= {"A", "B", "C"}
    node_c = dot.get_node("C")[0]
    assert node_c.get("pos").strip('"') == "0.0,-240.0!"
    # spouse line, plus one edge from each parent of C
    assert len(dot.get_edges()) == 3


def test_write_dot(tmp_path: Path, couple_with_child: list[Person]) -> None:
    out = tmp_path / "tree.dot"
    write_dot(build_tree_view(couple_with_child), out)

    assert out.read_text(encoding="utf-8").startswith("digraph")


def test_cli_runs_on_json(tmp_path: Path, capsys) -> None:
    source = tmp_path / "family.json"
    source.write_text(
        '[{"id": "a", "gender": "male", "spouse_id": "b"},'
        ' {"id": "b", "gender": "female"},'
        ' {"id": "c", "father_id": "a", "mother_id": "b"}]',
        encoding="utf-8",
    )
    out = tmp_path / "tree.png"
    dot = tmp_path / "tree.dot"
    graphml = tmp_path / "tree.graphml"

    code = main([str(source), "-o", str(out), "--compact", "--dot", str(dot), "--graphml", str(graphml)])

    assert code == 0
    assert out.exists() and dot.exists() and graphml.exists()
    printed = capsys.readouterr().out
    assert "Found 3 persons" in printed
    assert "No validation issues found" in printed


def test_cli_reports_bad_input(tmp_path: Path, capsys) -> None:
    source = tmp_path / "family.json"
    source.write_text('[{"full_name": "nobody"}]', encoding="utf-8")

    assert main([str(source)]) == 1
    assert "Could not load persons" in capsys.readouterr().out
    assert main([str(tmp_path / "missing.json")]) == 1
