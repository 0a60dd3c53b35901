"""Unit tests for deterministic task synthesis."""

import json
import re

import pytest

from prdtasks.tasks.models import Section
from prdtasks.tasks.segmenter import segment
from prdtasks.tasks.synthesizer import (
    synthesize,
    task_tags,
    task_title,
    tasks_per_section,
)
from prdtasks.validation.graph import detect_cycles, validate_unique_ids

LONG_PARAGRAPH = "Lorem ipsum dolor sit amet. " * 25

SAMPLE_PRD = f"""# Sample Product

## Setup
- init repo
- add CI

## Build
{LONG_PARAGRAPH}
"""


def _bullets(count: int, prefix: str = "item") -> str:
    return "\n".join(f"- {prefix} {i}" for i in range(count))


@pytest.fixture
def sample_tasks():
    """Tasks synthesized from the sample PRD."""
    return synthesize(segment(SAMPLE_PRD))


def test_sample_prd_end_to_end(sample_tasks):
    """Test the two-section sample produces the expected tasks."""
    assert [t.id for t in sample_tasks] == ["T-001", "T-002", "T-003", "T-004"]
    assert [t.title for t in sample_tasks] == ["Setup", "Setup", "Build", "Build"]

    assert sample_tasks[0].steps == ["init repo", "add CI"]
    assert sample_tasks[0].deps == []
    assert sample_tasks[0].tags == ["feature"]

    assert sample_tasks[2].steps == [
        "Review Build requirements",
        "Design solution for Build",
        "Implement Build",
        "Test Build implementation",
        "Document Build changes",
    ]
    assert sample_tasks[3].deps == ["T-003"]


def test_tasks_per_section_rules():
    """Test per-section task counts follow the precedence rules."""
    assert tasks_per_section(Section("A", _bullets(5), 0), 10) == 3
    assert tasks_per_section(Section("A", _bullets(3), 0), 10) == 2
    assert tasks_per_section(Section("A", "x" * 501, 0), 10) == 2
    assert tasks_per_section(Section("A", "x" * 500, 0), 10) == 1
    assert tasks_per_section(Section("A", "short", 0), 3) == 2
    assert tasks_per_section(Section("A", "short", 0), 4) == 1


def test_implementation_suffix_on_later_tasks_of_a_section():
    """Test the suffix is added for a non-first task when the count is even."""
    tasks = synthesize([Section("Features", _bullets(5), 0)])

    assert [t.title for t in tasks] == ["Features", "Features", "Features - Implementation"]


def test_first_task_of_section_has_no_suffix():
    """Test the first task built from a section keeps the plain title."""
    assert task_title(Section("Build", "", 1), 0, 2) == "Build"
    assert task_title(Section("Build", "", 1), 1, 2) == "Build - Implementation"
    assert task_title(Section("Build", "", 1), 1, 3) == "Build"


def test_title_padding_and_truncation():
    """Test short titles are prefixed and long titles truncated."""
    assert task_title(Section("A", "", 0), 0, 0) == "Task: A"

    long_title = task_title(Section("X" * 200, "", 0), 0, 0)
    assert len(long_title) == 140
    assert long_title.endswith("...")


def test_dependencies_on_previous_and_foundational_task():
    """Test every third task and later sections gain backward dependencies."""
    sections = [Section(f"Section {i}", "short", i) for i in range(5)]

    tasks = synthesize(sections)

    assert [t.deps for t in tasks] == [
        [],
        [],
        [],
        ["T-003", "T-002"],
        ["T-002"],
    ]


def test_first_section_tasks_have_no_dependencies():
    """Test tasks from the first section never depend on anything."""
    tasks = synthesize([Section("Intro", _bullets(5), 0), Section("Next", "x", 1)])

    assert all(t.deps == [] for t in tasks[:3])
    assert tasks[3].deps == ["T-003"]


def test_tags_from_keyword_table():
    """Test tags follow the keyword table order."""
    section = Section(
        "API",
        "Fix the bug, add a test, update the readme, refactor the UI component.",
        0,
    )

    assert task_tags(section) == [
        "feature",
        "bug",
        "enhancement",
        "testing",
        "documentation",
        "refactor",
        "api",
        "ui",
    ]


def test_tags_match_whole_words_only():
    """Test keywords embedded in longer words do not add tags."""
    assert task_tags(Section("Additional", "newsletter address", 0)) == []


def test_steps_capped_at_twenty():
    """Test list-derived steps are capped."""
    tasks = synthesize([Section("Big", _bullets(25), 0)])

    assert all(len(t.steps) == 20 for t in tasks)


def test_default_limit_is_twenty():
    """Test synthesis stops at 20 tasks by default."""
    sections = [Section(f"Section {i}", _bullets(5), i) for i in range(10)]

    tasks = synthesize(sections)

    assert len(tasks) == 20
    assert tasks[-1].id == "T-020"


def test_max_tasks_limit():
    """Test synthesis stops once max_tasks is reached."""
    sections = [Section(f"Section {i}", _bullets(5), i) for i in range(10)]

    tasks = synthesize(sections, max_tasks=4)

    assert len(tasks) == 4


def test_zero_limit_still_yields_one_task():
    """Test at least one task is produced when sections exist."""
    tasks = synthesize([Section("Only", "content", 0)], max_tasks=0)

    assert len(tasks) == 1
    assert tasks[0].id == "T-001"
    assert tasks[0].title == "Only"


def test_no_sections_no_tasks():
    """Test an empty section list yields no tasks."""
    assert synthesize([]) == []


@pytest.mark.parametrize(
    "text",
    [
        SAMPLE_PRD,
        "Plain text without headings",
        "\n".join(f"## Part {i}\n{_bullets(i, 'step')}" for i in range(12)),
        "## Auth\n1. login\n2. logout\n## UI\n* header\n* footer\n## API\n- route\n## QA\ntest it",
    ],
)
def test_synthesized_collections_are_well_formed(text):
    """Test bounds, id pattern, uniqueness and acyclicity for any PRD."""
    tasks = synthesize(segment(text))

    assert 1 <= len(tasks) <= 20
    for task in tasks:
        assert re.match(r"^[A-Z]-\d{3}$", task.id)
        assert 1 <= len(task.steps) <= 20
        assert len(task.tags) <= 8
        assert len(task.deps) <= 16
        assert len(set(task.tags)) == len(task.tags)

    assert validate_unique_ids(tasks).valid
    assert not detect_cycles(tasks).has_cycle


def test_synthesis_is_deterministic():
    """Test identical input yields byte-identical output."""
    first = [t.model_dump(by_alias=True) for t in synthesize(segment(SAMPLE_PRD))]
    second = [t.model_dump(by_alias=True) for t in synthesize(segment(SAMPLE_PRD))]

    assert json.dumps(first) == json.dumps(second)
