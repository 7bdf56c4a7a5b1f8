"""Linked issue table rendering.

Rows are collected first so that every column can be padded to its widest
value across the whole table, then rendered group by group.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import click

from issueview.field_format import FALLBACK, format_named
from issueview.models import IssueLink, RenderTarget

COLUMNS = ("key", "summary", "issue_type", "priority", "status")
CELL_SEPARATOR = "•"
GROUP_INDENT = "  "
ROW_INDENT = "    "


@dataclass(frozen=True)
class LinkedIssueRow:
    """One linked issue, flattened to the strings shown in the table."""

    label: str
    key: str
    summary: str
    issue_type: str
    priority: str
    status: str


def collect_rows(links: Iterable[IssueLink], fallback: str = FALLBACK) -> List[LinkedIssueRow]:
    """Flatten issue links into table rows in input order.

    Inward issues are labelled with the link type's inward phrase, outward
    issues with its outward phrase, uppercased.

    :param links: Issue links of the viewed issue.
    :type links: Iterable[IssueLink]
    :param fallback: Text for absent fields of the linked issue.
    :type fallback: str
    :return: Table rows.
    :rtype: List[LinkedIssueRow]
    """
    rows: List[LinkedIssueRow] = []
    for link in links:
        if link.inward_issue is not None:
            phrase, linked = link.link_type.inward, link.inward_issue
        else:
            phrase, linked = link.link_type.outward, link.outward_issue
        fields = linked.fields
        rows.append(
            LinkedIssueRow(
                label=(phrase or link.link_type.name or fallback).upper(),
                key=linked.key,
                summary=fields.summary or fallback,
                issue_type=format_named(fields.issue_type, fallback),
                priority=format_named(fields.priority, fallback),
                status=format_named(fields.status, fallback),
            )
        )
    return rows


def compute_widths(rows: Iterable[LinkedIssueRow]) -> Dict[str, int]:
    """Compute the widest value of every column across all rows."""

    widths = {column: 0 for column in COLUMNS}
    for row in rows:
        for column in COLUMNS:
            widths[column] = max(widths[column], len(getattr(row, column)))
    return widths


def group_rows(rows: Iterable[LinkedIssueRow]) -> List[Tuple[str, List[LinkedIssueRow]]]:
    """Group rows by label, keeping first-seen group order and row order."""

    groups: Dict[str, List[LinkedIssueRow]] = {}
    for row in rows:
        groups.setdefault(row.label, []).append(row)
    return list(groups.items())


def format_linked_issue_row(
    row: LinkedIssueRow,
    widths: Dict[str, int],
    target: RenderTarget = RenderTarget.PLAIN,
) -> str:
    """Render one row with every column padded to its table width.

    Padding is applied before styling so escape codes never affect
    alignment.
    """
    cells = [getattr(row, column).ljust(widths[column]) for column in COLUMNS]
    key, summary, issue_type, priority, status = cells
    separator = CELL_SEPARATOR
    if target.colorized:
        key = click.style(key, bold=True)
        separator = click.style(CELL_SEPARATOR, fg="bright_black")
    return f"{key} {summary} {separator} {issue_type} {separator} {priority} {separator} {status}"


def render_linked_issues(
    links: Sequence[IssueLink],
    target: RenderTarget = RenderTarget.PLAIN,
    fallback: str = FALLBACK,
) -> str:
    """Render the linked issue table.

    Each group starts with a blank line and its indented label, followed
    by a blank line and one indented row per linked issue.

    :param links: Issue links of the viewed issue.
    :type links: Sequence[IssueLink]
    :param target: Render target.
    :type target: RenderTarget
    :param fallback: Text for absent fields.
    :type fallback: str
    :return: Rendered table, empty when there are no links.
    :rtype: str
    """
    rows = collect_rows(links, fallback)
    if not rows:
        return ""
    widths = compute_widths(rows)

    lines: List[str] = []
    for label, group in group_rows(rows):
        heading = click.style(label, bold=True) if target.colorized else label
        lines.append(f"\n{GROUP_INDENT}{heading}\n\n")
        for row in group:
            lines.append(f"{ROW_INDENT}{format_linked_issue_row(row, widths, target)}\n")
    return "".join(lines)
