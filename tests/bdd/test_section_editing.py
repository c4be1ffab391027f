"""Behaviour tests for the full-replace editing workflow.

The scenarios store sections in a temporary YAML file, save edits through
:meth:`SectionStore.update_section`, and compose the result to show how table
identifiers follow table positions across edits.

Usage
-----
Run ``pytest tests/bdd/test_section_editing.py -v``.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from fundpages.content import compose_section
from fundpages.store import SectionStore

if typ.TYPE_CHECKING:
    from fundpages.content import ComposedSection

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "section_editing.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("an empty section store")
def given_empty_store(tmp_path: Path, scenario_state: ScenarioState) -> None:
    """Point a store at a file that does not exist yet."""
    scenario_state["store"] = SectionStore(tmp_path / "sections.yaml")


@given(parsers.parse('a stored section "{title}" with tables "{first}" and "{second}"'))
def given_stored_section(
    tmp_path: Path,
    scenario_state: ScenarioState,
    title: str,
    first: str,
    second: str,
) -> None:
    """Create a section with two tables in a fresh store."""
    store = SectionStore(tmp_path / "sections.yaml")
    section = store.create_section(
        {"title": title, "tables": [{"title": first}, {"title": second}]}
    )
    scenario_state["store"] = store
    scenario_state["section_id"] = section.id
    scenario_state["title"] = title


@given(parsers.parse('the description "{description}"'))
def given_description(scenario_state: ScenarioState, description: str) -> None:
    """Remember the description submitted with later edits."""
    scenario_state["description"] = description


@when(parsers.parse('the section is saved with only the "{table}" table'))
def when_saved_with_table(scenario_state: ScenarioState, table: str) -> None:
    """Submit an edit carrying a single table."""
    store = typ.cast("SectionStore", scenario_state["store"])
    store.update_section(
        {
            "id": scenario_state["section_id"],
            "title": scenario_state["title"],
            "description": scenario_state["description"],
            "tables": [{"title": table}],
        }
    )


@when("the stored section is composed")
def when_stored_composed(scenario_state: ScenarioState) -> None:
    """Reload and compose the edited section."""
    store = typ.cast("SectionStore", scenario_state["store"])
    section = store.get_section(section_id=scenario_state["section_id"])
    scenario_state["composed"] = compose_section(section)


@when(parsers.parse('a section "{title}" is saved with identifier "{section_id}"'))
def when_saved_unknown(
    scenario_state: ScenarioState, title: str, section_id: str
) -> None:
    """Submit an edit for a section the store has never seen."""
    store = typ.cast("SectionStore", scenario_state["store"])
    _, created = store.update_section({"id": section_id, "title": title})
    scenario_state["created"] = created


@then(parsers.parse('the "{table}" table has identifier "{table_id}"'))
def then_table_identifier(
    scenario_state: ScenarioState, table: str, table_id: str
) -> None:
    """Assert the remaining table's derived identifier."""
    composed = typ.cast("ComposedSection", scenario_state["composed"])
    actual = {item.title: item.table_id for item in composed.tables}
    assert actual.get(table) == table_id, f"unexpected identifiers {actual!r}"


@then(parsers.parse('the description is "{expected}"'))
def then_description_is(scenario_state: ScenarioState, expected: str) -> None:
    """Assert the stale placeholder is left verbatim."""
    composed = typ.cast("ComposedSection", scenario_state["composed"])
    assert composed.description == expected, (
        f"expected {expected!r}, got {composed.description!r}"
    )


@then(parsers.parse('the store holds one section titled "{title}"'))
def then_single_section(scenario_state: ScenarioState, title: str) -> None:
    """Assert the upsert created exactly one section."""
    store = typ.cast("SectionStore", scenario_state["store"])
    sections = store.list_sections()
    assert scenario_state["created"] is True, "expected the section to be created"
    assert [section.title for section in sections] == [title], (
        f"unexpected sections {sections!r}"
    )
