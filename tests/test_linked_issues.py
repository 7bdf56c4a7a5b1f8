"""Tests for the linked issue table."""

from __future__ import annotations

from typing import List

import click

from conftest import BLOCKS_LINK, RELATES_LINK, build_linked_issue
from issueview.linked_issues import (
    COLUMNS,
    collect_rows,
    compute_widths,
    format_linked_issue_row,
    group_rows,
    render_linked_issues,
)
from issueview.models import IssueLink, RenderTarget


def _links(*payloads: dict) -> List[IssueLink]:
    return [IssueLink.model_validate(payload) for payload in payloads]


def test_rows_use_directional_phrases() -> None:
    rows = collect_rows(_links(BLOCKS_LINK, RELATES_LINK))
    assert [(row.label, row.key) for row in rows] == [
        ("BLOCKS", "TEST-2"),
        ("RELATES TO", "TEST-3"),
    ]


def test_render_two_groups() -> None:
    rendered = render_linked_issues(_links(BLOCKS_LINK, RELATES_LINK))
    assert rendered == (
        "\n  BLOCKS\n\n"
        "    TEST-2 Something is broken   • Bug • High   • TO DO\n"
        "\n  RELATES TO\n\n"
        "    TEST-3 Everything is on fire • Bug • Urgent • Done \n"
    )


def test_groups_keep_first_seen_order() -> None:
    extra_blocker = {
        "type": BLOCKS_LINK["type"],
        "inwardIssue": build_linked_issue("TEST-4", "Later", "Low", "Open"),
    }
    rows = collect_rows(_links(BLOCKS_LINK, RELATES_LINK, extra_blocker))
    groups = group_rows(rows)
    assert [label for label, _ in groups] == ["BLOCKS", "RELATES TO"]
    assert [row.key for row in groups[0][1]] == ["TEST-2", "TEST-4"]


def test_columns_align_across_groups() -> None:
    long_key = {
        "type": RELATES_LINK["type"],
        "outwardIssue": build_linked_issue("LONGPROJ-1234", "x", "Medium", "In Review"),
    }
    links = _links(BLOCKS_LINK, RELATES_LINK, long_key)
    rows = collect_rows(links)
    widths = compute_widths(rows)
    rendered = [format_linked_issue_row(row, widths) for row in rows]

    assert len({len(line) for line in rendered}) == 1
    for row, line in zip(rows, rendered):
        cells = line.split(" • ")
        key, summary = cells[0][: widths["key"]], cells[0][widths["key"] + 1 :]
        assert key.rstrip() == row.key
        assert len(summary) == widths["summary"]
        assert len(cells[3]) == widths["status"]


def test_widths_are_column_maxima() -> None:
    rows = collect_rows(_links(BLOCKS_LINK, RELATES_LINK))
    assert compute_widths(rows) == {
        "key": 6,
        "summary": 21,
        "issue_type": 3,
        "priority": 6,
        "status": 5,
    }
    assert set(COLUMNS) == set(compute_widths(rows))


def test_no_links_renders_nothing() -> None:
    assert render_linked_issues([]) == ""


def test_missing_linked_fields_fall_back() -> None:
    link = IssueLink.model_validate(
        {"type": {"name": "clones", "outward": "clones"}, "outwardIssue": {"key": "TEST-5"}}
    )
    assert render_linked_issues([link]) == "\n  CLONES\n\n    TEST-5 None • None • None • None\n"


def test_colorized_rows_keep_alignment() -> None:
    rows = collect_rows(_links(BLOCKS_LINK, RELATES_LINK))
    widths = compute_widths(rows)
    colored = [click.unstyle(format_linked_issue_row(row, widths, RenderTarget.COLOR)) for row in rows]
    plain = [format_linked_issue_row(row, widths) for row in rows]
    assert colored == plain
