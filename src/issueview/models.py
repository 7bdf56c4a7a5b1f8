"""Issueview data models."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class NamedValue(BaseModel):
    """Jira field carrying a single ``name`` (status, type, priority...)."""

    name: str = ""


class Person(BaseModel):
    """Jira user reference.

    :param name: Display name of the user.
    :type name: str
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="", alias="displayName")


class Watches(BaseModel):
    """Watcher information for an issue.

    :param is_watching: Whether the requesting user watches the issue.
    :type is_watching: bool
    :param watch_count: Number of watchers, including the requesting user.
    :type watch_count: int
    """

    model_config = ConfigDict(populate_by_name=True)

    is_watching: bool = Field(default=False, alias="isWatching")
    watch_count: int = Field(default=0, alias="watchCount")


class CommentSummary(BaseModel):
    """Comment totals attached to an issue."""

    total: int = 0


class DocumentMark(BaseModel):
    """Formatting mark applied to a text node (strong, em, link...)."""

    type: str = ""
    attrs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _null_type(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("attrs", mode="before")
    @classmethod
    def _null_attrs(cls, value: Any) -> Any:
        return {} if value is None else value


class DocumentNode(BaseModel):
    """Node of an Atlassian Document Format tree.

    Only ``text`` nodes carry literal text; every other kind is a container
    whose children live in ``content``.

    :param type: Node kind, e.g. ``paragraph`` or ``text``.
    :type type: str
    :param text: Literal text for text nodes.
    :type text: Optional[str]
    :param attrs: Node attributes (heading level, list order, ...).
    :type attrs: Dict[str, Any]
    :param marks: Marks applied to a text node.
    :type marks: List[DocumentMark]
    :param content: Child nodes in document order.
    :type content: List[DocumentNode]
    """

    type: str = ""
    text: Optional[str] = None
    attrs: Dict[str, Any] = Field(default_factory=dict)
    marks: List[DocumentMark] = Field(default_factory=list)
    content: List[DocumentNode] = Field(default_factory=list)

    @field_validator("type", mode="before")
    @classmethod
    def _null_type(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("attrs", mode="before")
    @classmethod
    def _null_attrs(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("marks", "content", mode="before")
    @classmethod
    def _null_children(cls, value: Any) -> Any:
        return [] if value is None else value


class Document(BaseModel):
    """Root of an Atlassian Document Format tree."""

    version: int = 1
    type: str = "doc"
    content: List[DocumentNode] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        return [] if value is None else value


class DescriptionKind(str, Enum):
    """Representation of an issue description."""

    ABSENT = "absent"
    DOCUMENT = "document"
    LEGACY = "legacy"


class RenderTarget(str, Enum):
    """Output mode for a single render pass."""

    PLAIN = "plain"
    COLOR = "color"
    COLOR_256 = "color-256"

    @classmethod
    def select(cls, plain: bool, xterm256: bool) -> RenderTarget:
        """Pick the render target from the caller's two flags.

        :param plain: Whether plain output was requested.
        :type plain: bool
        :param xterm256: Whether the terminal supports 256-color codes.
        :type xterm256: bool
        :return: Selected render target; plain always wins.
        :rtype: RenderTarget
        """
        if plain:
            return cls.PLAIN
        if xterm256:
            return cls.COLOR_256
        return cls.COLOR

    @property
    def colorized(self) -> bool:
        return self is not RenderTarget.PLAIN


class IssueLinkType(BaseModel):
    """Relation between two issues with its directional phrasing."""

    name: str = ""
    inward: str = ""
    outward: str = ""


class IssueLink(BaseModel):
    """Link from an issue to exactly one inward or outward issue.

    :param link_type: Relation label and phrasing.
    :type link_type: IssueLinkType
    :param inward_issue: Issue on the inward side of the relation.
    :type inward_issue: Optional[Issue]
    :param outward_issue: Issue on the outward side of the relation.
    :type outward_issue: Optional[Issue]
    """

    model_config = ConfigDict(populate_by_name=True)

    link_type: IssueLinkType = Field(default_factory=IssueLinkType, alias="type")
    inward_issue: Optional[Issue] = Field(default=None, alias="inwardIssue")
    outward_issue: Optional[Issue] = Field(default=None, alias="outwardIssue")

    @model_validator(mode="after")
    def _exactly_one_side(self) -> IssueLink:
        if (self.inward_issue is None) == (self.outward_issue is None):
            raise ValueError("issue link needs exactly one of inwardIssue or outwardIssue")
        return self


class IssueFields(BaseModel):
    """Field set of a Jira issue.

    Every field is optional; the view substitutes fallbacks for anything
    missing. Timestamps are kept as the raw strings Jira sends so the
    original offset survives until formatting. ``labels`` is parsed and
    kept in ``--json`` output but is not shown in the view; the header
    slot next to the label icon shows the resolution.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str = ""
    status: Optional[NamedValue] = None
    issue_type: Optional[NamedValue] = Field(default=None, alias="issuetype")
    priority: Optional[NamedValue] = None
    assignee: Optional[Person] = None
    reporter: Optional[Person] = None
    resolution: Optional[NamedValue] = None
    created: Optional[str] = None
    updated: Optional[str] = None
    watches: Optional[Watches] = None
    comment: Optional[CommentSummary] = None
    components: List[NamedValue] = Field(default_factory=list)
    labels: List[str] = Field(default_factory=list)
    description: Union[Document, str, None] = None
    issue_links: List[IssueLink] = Field(default_factory=list, alias="issuelinks")

    @property
    def description_kind(self) -> DescriptionKind:
        """Tag the description variant so callers dispatch on it once."""
        if isinstance(self.description, Document):
            return DescriptionKind.DOCUMENT
        if isinstance(self.description, str):
            return DescriptionKind.LEGACY
        return DescriptionKind.ABSENT


class Issue(BaseModel):
    """Issue record as returned by the Jira REST API.

    :param key: Issue key, e.g. ``TEST-1``.
    :type key: str
    :param fields: Issue field set.
    :type fields: IssueFields
    """

    key: str = Field(min_length=1)
    fields: IssueFields = Field(default_factory=IssueFields)


class DisplayConfiguration(BaseModel):
    """Display settings loaded from .issueview.yml.

    :param type_icons: Icon per issue type name.
    :type type_icons: Dict[str, str]
    :param default_type_icon: Icon for types missing from ``type_icons``.
    :type default_type_icon: str
    :param status_icons: Icon per status name.
    :type status_icons: Dict[str, str]
    :param default_status_icon: Icon for statuses missing from ``status_icons``.
    :type default_status_icon: str
    :param fallback: Text shown for absent fields.
    :type fallback: str
    :param unassigned: Text shown when the issue has no assignee.
    :type unassigned: str
    :param separator_half_width: Rule characters on each side of a banner label.
    :type separator_half_width: int
    :param date_format: strftime pattern for dates.
    :type date_format: str
    """

    model_config = ConfigDict(extra="forbid")

    type_icons: Dict[str, str] = Field(default_factory=dict)
    default_type_icon: str = Field(min_length=1)
    status_icons: Dict[str, str] = Field(default_factory=dict)
    default_status_icon: str = Field(min_length=1)
    fallback: str = Field(min_length=1)
    unassigned: str = Field(min_length=1)
    separator_half_width: int = Field(ge=0)
    date_format: str = Field(min_length=1)


IssueLink.model_rebuild()
IssueFields.model_rebuild()
Issue.model_rebuild()
