from datetime import date
import json
from pathlib import Path

import pytest

from famtree.layout import COMPACT, DETAILED
from famtree.models import Person, Status
from famtree.parsing import parse_date_string
from famtree.pipeline import TreeCache, build_tree_view, select
from famtree.repository import (
    GedcomPersonRepository,
    InMemoryPersonRepository,
    JsonPersonRepository,
    repository_for,
)


def test_build_tree_view_end_to_end(couple_with_child: list[Person]) -> None:
    view = build_tree_view(couple_with_child)

    assert view.graph.root_ids == ("A", "B")
    assert view.graph.nodes["C"].level == 1
    assert view.layout.positions["C"].x == 0.0
    assert len(view.layout.connectors) == 2


def test_pipeline_is_idempotent(three_generations: list[Person]) -> None:
    assert build_tree_view(three_generations) == build_tree_view(three_generations)


def test_select_returns_relations(couple_with_child: list[Person]) -> None:
    view = build_tree_view(couple_with_child)

    rel = select(view, "C")
    assert rel.father.id == "A"
    assert rel.mother.id == "B"


def test_cache_rebuilds_only_on_new_snapshot(couple_with_child: list[Person]) -> None:
    cache = TreeCache()

    first = cache.get(couple_with_child)
    assert cache.get(couple_with_child) is first
    assert cache.builds == 1

    cache.get(couple_with_child, COMPACT)
    assert cache.builds == 2

    cache.get(list(couple_with_child), COMPACT)
    assert cache.builds == 3

    cache.clear()
    cache.get(couple_with_child, DETAILED)
    assert cache.builds == 4


def test_in_memory_repository_feeds_pipeline(couple_with_child: list[Person], make_person) -> None:
    repo = InMemoryPersonRepository(couple_with_child)
    view = build_tree_view(repo.list_persons())
    assert len(view.graph) == 3

    repo.replace_all([make_person("solo")])
    assert [p.id for p in repo.list_persons()] == ["solo"]


def test_repository_for_extension(tmp_path: Path) -> None:
    assert isinstance(repository_for(tmp_path / "a.json"), JsonPersonRepository)
    assert isinstance(repository_for(tmp_path / "a.GED"), GedcomPersonRepository)
    with pytest.raises(ValueError):
        repository_for(tmp_path / "a.csv")


def test_json_repository(tmp_path: Path) -> None:
    path = tmp_path / "family.json"
    path.write_text(json.dumps([{"id": "a"}, {"id": "b", "father_id": "a"}]), encoding="utf-8")

    view = build_tree_view(JsonPersonRepository(path).list_persons())
    assert view.graph.nodes["b"].level == 1


def test_person_status_and_age(make_person) -> None:
    alive = make_person("a", birth_date="2000-06-15")
    dead = make_person("d", birth_date="1940-05-15", death_date="2010-03-20")

    assert alive.status == Status.ALIVE
    assert alive.age(today=date(2026, 6, 14)) == 25
    assert alive.age(today=date(2026, 6, 15)) == 26
    assert dead.status == Status.DECEASED
    assert dead.age() == 69
    assert make_person("u").age() is None


def test_impossible_gedcom_day_leaves_age_unknown(make_person) -> None:
    person = make_person("x", birth_date=parse_date_string("31 FEB 1900"))

    assert person.birth_date is None
    assert person.age() is None
