"""Unit tests for PRD segmentation and markdown extraction."""

from prdtasks.tasks.parser import extract_bullet_points, extract_title
from prdtasks.tasks.segmenter import segment


def test_segment_by_level_two_headings():
    """Test each ## heading starts a section with trimmed content."""
    text = "# Product\n\nIntro\n\n## Setup\n- init repo\n\n## Build\nCompile it.\n"

    sections = segment(text)

    assert [s.title for s in sections] == ["Setup", "Build"]
    assert [s.order for s in sections] == [0, 1]
    assert sections[0].content == "- init repo"
    assert sections[1].content == "Compile it."


def test_segment_ignores_deeper_headings():
    """Test ### headings stay inside their parent section."""
    text = "## Parent\nintro\n### Child\ndetail\n## Next\nmore"

    sections = segment(text)

    assert [s.title for s in sections] == ["Parent", "Next"]
    assert "### Child" in sections[0].content
    assert "detail" in sections[0].content


def test_segment_without_headings_yields_overview():
    """Test headerless text becomes a single trimmed Overview section."""
    text = "\n  Just a paragraph describing the product.  \n"

    sections = segment(text)

    assert len(sections) == 1
    assert sections[0].title == "Overview"
    assert sections[0].content == text.strip()
    assert sections[0].order == 0


def test_segment_empty_text():
    """Test empty input still yields one section."""
    sections = segment("")

    assert len(sections) == 1
    assert sections[0].title == "Overview"
    assert sections[0].content == ""


def test_segment_is_deterministic():
    """Test the same input always produces the same sections."""
    text = "## A\n- one\n## B\n1. two\n"

    assert segment(text) == segment(text)


def test_extract_bullet_points_unordered_then_ordered():
    """Test unordered items come before ordered items."""
    content = "1. first numbered\n- dash\n* star\n+ plus\n2. second numbered"

    items = extract_bullet_points(content)

    assert items == ["dash", "star", "plus", "first numbered", "second numbered"]


def test_extract_bullet_points_nested_and_duplicates():
    """Test nested items are included and duplicates removed."""
    content = "- parent\n  - child\n    - parent\n- other"

    items = extract_bullet_points(content)

    assert items == ["parent", "child", "other"]


def test_extract_bullet_points_none():
    """Test plain prose has no list items."""
    assert extract_bullet_points("No lists here.\nJust text.") == []


def test_extract_bullet_points_requires_space_after_marker():
    """Test markers without trailing whitespace are not list items."""
    assert extract_bullet_points("-notalist\n3.14 is pi") == []


def test_extract_title():
    """Test first H1 heading is used as the PRD title."""
    assert extract_title("Intro\n# My Product\n## Section") == "My Product"
    assert extract_title("## Only sections") is None
