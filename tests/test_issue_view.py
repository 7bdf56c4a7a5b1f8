"""Tests for the issue detail view."""

from __future__ import annotations

import io

import pytest

from conftest import BLOCKS_LINK, build_issue_payload
from issueview.config_loader import default_display_configuration
from issueview.issue_view import format_header, format_issue_view, render_description, render_issue
from issueview.models import Issue, RenderTarget

KEY = "\U0001F511\ufe0f"
STOPWATCH = "\u23f1\ufe0f"
LABEL = "\U0001F3F7\ufe0f"

PLAIN_DOCUMENT_VIEW = (
    f"🐞 Bug  ✅ Done  ⌛ Sun, 13 Dec 20  👷 Person A  {KEY} TEST-1  💭 0 comments  🧵 0 linked issues\n"
    "# This is a test\n"
    f"{STOPWATCH}  Sun, 13 Dec 20  🔎 Person Z  🚀 High  📦 BE, FE  {LABEL}  None  👀 You + 3 watchers\n"
    "\n"
    "------------------------ Description ------------------------\n"
    "\n"
    "Test description\n"
    "\n"
)

PLAIN_LEGACY_VIEW = (
    f"🐞 Bug  ✅ Done  ⌛ Sun, 13 Dec 20  👷 Person A  {KEY} TEST-1  💭 3 comments  🧵 2 linked issues\n"
    "# This is a test\n"
    f"{STOPWATCH}  Sun, 13 Dec 20  🔎 Person Z  🚀 High  📦 BE, FE  {LABEL}  None  👀 0 watchers\n"
    "\n"
    "------------------------ Description ------------------------\n"
    "\n"
    "# Title\n"
    "## Subtitle\n"
    "This is a **bold** and _italic_ text with [a link](https://ankit.pl) in between.\n"
    "\n"
    "\n"
    "------------------------ Linked Issues ------------------------\n"
    "\n"
    "\n"
    "  BLOCKS\n"
    "\n"
    "    TEST-2 Something is broken   • Bug • High   • TO DO\n"
    "\n"
    "  RELATES TO\n"
    "\n"
    "    TEST-3 Everything is on fire • Bug • Urgent • Done \n"
    "\n"
)


class FailingSink:
    def __init__(self) -> None:
        self.calls = 0

    def write(self, text: str) -> int:
        self.calls += 1
        raise OSError("broken pipe")


def test_plain_view_with_document_description(document_issue: Issue) -> None:
    assert format_issue_view(document_issue, RenderTarget.PLAIN) == PLAIN_DOCUMENT_VIEW


def test_plain_view_with_legacy_description_and_links(legacy_issue: Issue) -> None:
    assert format_issue_view(legacy_issue, RenderTarget.PLAIN) == PLAIN_LEGACY_VIEW


def test_render_issue_writes_once_to_sink(legacy_issue: Issue) -> None:
    sink = io.StringIO()
    render_issue(legacy_issue, sink, plain=True)
    assert sink.getvalue() == PLAIN_LEGACY_VIEW


def test_render_issue_is_idempotent(legacy_issue: Issue) -> None:
    first = io.StringIO()
    second = io.StringIO()
    render_issue(legacy_issue, first, plain=False, xterm256=True)
    render_issue(legacy_issue, second, plain=False, xterm256=True)
    assert first.getvalue() == second.getvalue()


def test_render_issue_propagates_sink_errors(document_issue: Issue) -> None:
    sink = FailingSink()
    with pytest.raises(OSError, match="broken pipe"):
        render_issue(document_issue, sink, plain=True)
    assert sink.calls == 1


def test_plain_wins_over_256_color_support(document_issue: Issue) -> None:
    sink = io.StringIO()
    render_issue(document_issue, sink, plain=True, xterm256=True)
    assert "\x1b[" not in sink.getvalue()


def test_color_views_use_target_separators(document_issue: Issue) -> None:
    color = format_issue_view(document_issue, RenderTarget.COLOR)
    color_256 = format_issue_view(document_issue, RenderTarget.COLOR_256)
    assert "\x1b[0;90m" + "—" * 24 + " Description" in color
    assert "\x1b[38;5;242m" + "—" * 24 + " Description" in color_256
    assert "Test description\n" in color


def test_missing_fields_fall_back() -> None:
    issue = Issue.model_validate({"key": "TEST-9"})
    header = format_header(issue)
    assert header.splitlines() == [
        f"⭐ None  🚧 None  ⌛ None  👷 Unassigned  {KEY} TEST-9  💭 0 comments  🧵 0 linked issues",
        "# ",
        f"{STOPWATCH}  None  🔎 None  🚀 None  📦 None  {LABEL}  None  👀 0 watchers",
    ]


def test_absent_description_keeps_section() -> None:
    issue = Issue.model_validate(build_issue_payload())
    view = format_issue_view(issue)
    assert view.endswith(
        "------------------------ Description ------------------------\n\n\n"
    )
    assert "Linked Issues" not in view


def test_resolution_is_shown_when_present() -> None:
    issue = Issue.model_validate(build_issue_payload(resolution={"name": "Fixed"}))
    assert f"{LABEL}  Fixed  " in format_header(issue)


def test_configured_icons_replace_defaults() -> None:
    configuration = default_display_configuration().model_copy(
        update={"type_icons": {"Story": "📗"}, "status_icons": {"In Progress": "⏳"}}
    )
    issue = Issue.model_validate(
        build_issue_payload(issuetype={"name": "Story"}, status={"name": "In Progress"})
    )
    header = format_header(issue, configuration=configuration)
    assert header.startswith("📗 Story  ⏳ In Progress  ")


def test_render_description_dispatches_on_kind(
    document_issue: Issue, legacy_issue: Issue
) -> None:
    assert render_description(document_issue.fields) == "Test description\n"
    assert render_description(legacy_issue.fields).startswith("# Title\n")
    assert render_description(Issue.model_validate({"key": "X-1"}).fields) == ""


def test_linked_section_only_with_links() -> None:
    issue = Issue.model_validate(build_issue_payload(issuelinks=[BLOCKS_LINK]))
    view = format_issue_view(issue)
    assert "------------------------ Linked Issues ------------------------\n\n\n  BLOCKS\n" in view
    assert view.endswith("    TEST-2 Something is broken • Bug • High • TO DO\n\n")


def test_labels_are_parsed_but_not_displayed() -> None:
    issue = Issue.model_validate(build_issue_payload(labels=["backend-only"]))
    assert issue.fields.labels == ["backend-only"]
    assert "backend-only" not in format_issue_view(issue, RenderTarget.PLAIN)
