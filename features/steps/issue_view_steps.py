"""Behave steps for the issue detail view."""

from __future__ import annotations

import io

from behave import given, then, when

from issueview.issue_loader import load_issue
from issueview.issue_view import render_issue


def _linked_issue(key: str, summary: str) -> dict:
    return {
        "key": key,
        "fields": {
            "summary": summary,
            "issuetype": {"name": "Bug"},
            "priority": {"name": "High"},
            "status": {"name": "Done"},
        },
    }


def _decode(text: str) -> str:
    return text.replace("\\n", "\n")


def _render(context: object, plain: bool, xterm256: bool) -> None:
    context.payload["fields"]["issuelinks"] = context.links
    sink = io.StringIO()
    render_issue(load_issue(context.payload), sink, plain=plain, xterm256=xterm256)
    context.rendered = sink.getvalue()


@given('an issue "{key}" with summary "{summary}"')
def given_issue(context: object, key: str, summary: str) -> None:
    context.payload = {"key": key, "fields": {"summary": summary}}


@given('the issue has type "{issue_type}" and status "{status}"')
def given_type_and_status(context: object, issue_type: str, status: str) -> None:
    context.payload["fields"]["issuetype"] = {"name": issue_type}
    context.payload["fields"]["status"] = {"name": status}


@given("the issue is watched by me and {others:d} others")
def given_watched(context: object, others: int) -> None:
    context.payload["fields"]["watches"] = {"isWatching": True, "watchCount": others + 1}


@given('the issue has the legacy description "{markup}"')
def given_legacy_description(context: object, markup: str) -> None:
    context.payload["fields"]["description"] = _decode(markup)


@given('the issue is blocked by "{key}" with summary "{summary}"')
def given_blocked_by(context: object, key: str, summary: str) -> None:
    context.links.append(
        {
            "type": {"name": "Blocks", "inward": "blocks", "outward": "is blocked by"},
            "inwardIssue": _linked_issue(key, summary),
        }
    )


@given('the issue relates to "{key}" with summary "{summary}"')
def given_relates_to(context: object, key: str, summary: str) -> None:
    context.links.append(
        {
            "type": {"name": "Relates", "inward": "relates", "outward": "relates to"},
            "outwardIssue": _linked_issue(key, summary),
        }
    )


@when("I render the issue in plain mode")
def when_render_plain(context: object) -> None:
    _render(context, plain=True, xterm256=False)


@when("I render the issue in plain mode on a 256 color terminal")
def when_render_plain_256(context: object) -> None:
    _render(context, plain=True, xterm256=True)


@when("I render the issue in color mode on a 256 color terminal")
def when_render_color_256(context: object) -> None:
    _render(context, plain=False, xterm256=True)


@then('the output contains "{text}"')
def then_output_contains(context: object, text: str) -> None:
    assert _decode(text) in context.rendered, context.rendered


@then("the output contains no escape codes")
def then_output_plain(context: object) -> None:
    assert "\x1b[" not in context.rendered
