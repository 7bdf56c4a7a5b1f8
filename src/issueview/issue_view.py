"""Issue detail view composition."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, TextIO, Union

import click

from issueview.adf import render_document
from issueview.config_loader import default_display_configuration
from issueview.field_format import (
    format_comment_count,
    format_date,
    format_linked_count,
    format_named,
    format_names,
    format_person,
    format_watchers,
)
from issueview.linked_issues import render_linked_issues
from issueview.models import (
    DescriptionKind,
    DisplayConfiguration,
    Document,
    Issue,
    IssueFields,
    RenderTarget,
)
from issueview.separator import render_separator
from issueview.wiki_markup import render_wiki_markup

CREATED_ICON = "⌛"
ASSIGNEE_ICON = "👷"
KEY_ICON = "🔑️"
COMMENTS_ICON = "💭"
LINKS_ICON = "🧵"
UPDATED_ICON = "⏱️"
REPORTER_ICON = "🔎"
PRIORITY_ICON = "🚀"
COMPONENTS_ICON = "📦"
RESOLUTION_ICON = "🏷️"
WATCHERS_ICON = "👀"

DESCRIPTION_TITLE = "Description"
LINKED_ISSUES_TITLE = "Linked Issues"

DescriptionValue = Union[Document, str, None]

DESCRIPTION_RENDERERS: Dict[DescriptionKind, Callable[[DescriptionValue], str]] = {
    DescriptionKind.ABSENT: lambda _value: "",
    DescriptionKind.DOCUMENT: render_document,
    DescriptionKind.LEGACY: render_wiki_markup,
}


def render_description(fields: IssueFields) -> str:
    """Render the description through the renderer for its representation.

    :param fields: Issue fields holding the description.
    :type fields: IssueFields
    :return: Rendered description, empty when absent.
    :rtype: str
    """
    renderer = DESCRIPTION_RENDERERS[fields.description_kind]
    return renderer(fields.description)


def format_header(
    issue: Issue,
    target: RenderTarget = RenderTarget.PLAIN,
    configuration: Optional[DisplayConfiguration] = None,
) -> str:
    """Build the three header lines: metadata, summary, more metadata.

    :param issue: Issue to describe.
    :type issue: Issue
    :param target: Render target.
    :type target: RenderTarget
    :param configuration: Display configuration (defaults when None).
    :type configuration: Optional[DisplayConfiguration]
    :return: Header without a trailing newline.
    :rtype: str
    """
    configuration = configuration or default_display_configuration()
    fields = issue.fields
    fallback = configuration.fallback

    issue_type = format_named(fields.issue_type, fallback)
    type_icon = configuration.type_icons.get(issue_type, configuration.default_type_icon)
    status = format_named(fields.status, fallback)
    status_icon = configuration.status_icons.get(status, configuration.default_status_icon)
    created = format_date(fields.created, configuration.date_format, fallback)
    updated = format_date(fields.updated, configuration.date_format, fallback)
    assignee = format_person(fields.assignee, configuration.unassigned)
    reporter = format_person(fields.reporter, fallback)
    priority = format_named(fields.priority, fallback)
    components = format_names((item.name for item in fields.components), fallback)
    resolution = format_named(fields.resolution, fallback)
    comments = fields.comment.total if fields.comment else 0

    summary_line = f"# {fields.summary}"
    if target.colorized:
        summary_line = click.style(summary_line, bold=True)

    lines: List[str] = [
        f"{type_icon} {issue_type}  "
        f"{status_icon} {status}  "
        f"{CREATED_ICON} {created}  "
        f"{ASSIGNEE_ICON} {assignee}  "
        f"{KEY_ICON} {issue.key}  "
        f"{COMMENTS_ICON} {format_comment_count(comments)}  "
        f"{LINKS_ICON} {format_linked_count(len(fields.issue_links))}",
        summary_line,
        f"{UPDATED_ICON}  {updated}  "
        f"{REPORTER_ICON} {reporter}  "
        f"{PRIORITY_ICON} {priority}  "
        f"{COMPONENTS_ICON} {components}  "
        f"{RESOLUTION_ICON}  {resolution}  "
        f"{WATCHERS_ICON} {format_watchers(fields.watches)}",
    ]
    return "\n".join(lines)


def format_issue_view(
    issue: Issue,
    target: RenderTarget = RenderTarget.PLAIN,
    configuration: Optional[DisplayConfiguration] = None,
) -> str:
    """Format an issue as a multi-section terminal view.

    The description section is always present, with an empty body when
    the issue has no description. The linked issues section only appears
    when the issue has links.

    :param issue: Issue to display.
    :type issue: Issue
    :param target: Render target.
    :type target: RenderTarget
    :param configuration: Display configuration (defaults when None).
    :type configuration: Optional[DisplayConfiguration]
    :return: Rendered view.
    :rtype: str
    """
    configuration = configuration or default_display_configuration()
    half_width = configuration.separator_half_width

    fragments = [
        format_header(issue, target, configuration),
        "\n\n",
        render_separator(DESCRIPTION_TITLE, target, half_width),
        "\n\n",
        render_description(issue.fields),
        "\n",
    ]
    if issue.fields.issue_links:
        fragments.extend(
            [
                "\n",
                render_separator(LINKED_ISSUES_TITLE, target, half_width),
                "\n\n",
                render_linked_issues(
                    issue.fields.issue_links, target, configuration.fallback
                ),
                "\n",
            ]
        )
    return "".join(fragments)


def render_issue(
    issue: Issue,
    sink: TextIO,
    *,
    plain: bool = False,
    xterm256: bool = False,
    configuration: Optional[DisplayConfiguration] = None,
) -> None:
    """Render an issue and append it to ``sink`` in a single write.

    Errors raised by the sink propagate unchanged.

    :param issue: Issue to display.
    :type issue: Issue
    :param sink: Writable text stream.
    :type sink: TextIO
    :param plain: Disable ANSI output.
    :type plain: bool
    :param xterm256: Whether the terminal supports 256-color codes.
    :type xterm256: bool
    :param configuration: Display configuration (defaults when None).
    :type configuration: Optional[DisplayConfiguration]
    """
    target = RenderTarget.select(plain, xterm256)
    sink.write(format_issue_view(issue, target, configuration))
