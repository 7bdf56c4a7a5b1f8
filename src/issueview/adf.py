"""Atlassian Document Format rendering.

Walks an ADF tree depth first and emits Markdown-flavoured text. Node kinds
without a handler are skipped so that new node types sent by Jira degrade
to missing text instead of a failed render.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from issueview.models import Document, DocumentNode

logger = logging.getLogger(__name__)

MARK_DELIMITERS: Dict[str, str] = {
    "strong": "**",
    "em": "_",
    "code": "`",
    "strike": "~~",
}

LIST_INDENT = "  "
MAX_HEADING_LEVEL = 6


def render_document(document: Optional[Document]) -> str:
    """Render an ADF document to Markdown-flavoured text.

    :param document: Document root, or None for an absent description.
    :type document: Optional[Document]
    :return: Rendered text; empty for a document without content.
    :rtype: str
    """
    if document is None:
        return ""
    parts: List[str] = []
    for node in document.content:
        _render(node, parts, 0)
    return "".join(parts)


def render_node(node: DocumentNode) -> str:
    """Render a single node (and its subtree) to text.

    :param node: Node to render.
    :type node: DocumentNode
    :return: Rendered text.
    :rtype: str
    """
    parts: List[str] = []
    _render(node, parts, 0)
    return "".join(parts)


def render_text(node: DocumentNode) -> str:
    """Wrap the literal text of a text node according to its marks.

    Marks are applied in the order they appear; a link mark always wraps
    last so that ``[**bold**](url)`` keeps the emphasis inside the label.
    """
    text = node.text or ""
    href: Optional[str] = None
    for mark in node.marks:
        if mark.type == "link":
            href = str(mark.attrs.get("href", ""))
            continue
        delimiter = MARK_DELIMITERS.get(mark.type)
        if delimiter is None:
            logger.debug("ignoring unsupported mark %s", mark.type)
            continue
        text = f"{delimiter}{text}{delimiter}"
    if href is not None:
        text = f"[{text}]({href})"
    return text


def _render(node: DocumentNode, parts: List[str], depth: int) -> None:
    handler = NODE_HANDLERS.get(node.type)
    if handler is None:
        logger.debug("skipping unsupported node %s", node.type)
        return
    handler(node, parts, depth)


def _render_children(node: DocumentNode, parts: List[str], depth: int) -> None:
    for child in node.content:
        _render(child, parts, depth)


def _render_to_string(node: DocumentNode, depth: int) -> str:
    parts: List[str] = []
    _render_children(node, parts, depth)
    return "".join(parts)


def _paragraph(node: DocumentNode, parts: List[str], depth: int) -> None:
    _render_children(node, parts, depth)
    parts.append("\n")


def _heading(node: DocumentNode, parts: List[str], depth: int) -> None:
    try:
        level = int(node.attrs.get("level", 1))
    except (TypeError, ValueError):
        level = 1
    level = min(max(level, 1), MAX_HEADING_LEVEL)
    parts.append("#" * level + " ")
    _render_children(node, parts, depth)
    parts.append("\n")


def _text(node: DocumentNode, parts: List[str], depth: int) -> None:
    parts.append(render_text(node))


def _hard_break(node: DocumentNode, parts: List[str], depth: int) -> None:
    parts.append("\n")


def _mention(node: DocumentNode, parts: List[str], depth: int) -> None:
    parts.append(str(node.attrs.get("text", "")))


def _emoji(node: DocumentNode, parts: List[str], depth: int) -> None:
    parts.append(str(node.attrs.get("text") or node.attrs.get("shortName", "")))


def _inline_card(node: DocumentNode, parts: List[str], depth: int) -> None:
    parts.append(str(node.attrs.get("url", "")))


def _rule(node: DocumentNode, parts: List[str], depth: int) -> None:
    parts.append("---\n")


def _code_block(node: DocumentNode, parts: List[str], depth: int) -> None:
    language = node.attrs.get("language") or ""
    body = "".join(child.text or "" for child in node.content if child.type == "text")
    parts.append(f"```{language}\n{body}\n```\n")


def _blockquote(node: DocumentNode, parts: List[str], depth: int) -> None:
    body = _render_to_string(node, depth)
    for line in body.splitlines():
        parts.append(f"> {line}\n" if line else ">\n")


def _bullet_list(node: DocumentNode, parts: List[str], depth: int) -> None:
    for item in node.content:
        _list_entry(item, "-", parts, depth)


def _ordered_list(node: DocumentNode, parts: List[str], depth: int) -> None:
    try:
        start = int(node.attrs.get("order", 1))
    except (TypeError, ValueError):
        start = 1
    for offset, item in enumerate(node.content):
        _list_entry(item, f"{start + offset}.", parts, depth)


def _list_item(node: DocumentNode, parts: List[str], depth: int) -> None:
    _list_entry(node, "-", parts, depth)


def _list_entry(item: DocumentNode, marker: str, parts: List[str], depth: int) -> None:
    if item.type != "listItem":
        _render(item, parts, depth)
        return
    # Nested lists inside the item render one level deeper.
    body = _render_to_string(item, depth + 1)
    if not body.endswith("\n"):
        body += "\n"
    parts.append(f"{LIST_INDENT * depth}{marker} {body}")


NODE_HANDLERS: Dict[str, Callable[[DocumentNode, List[str], int], None]] = {
    "paragraph": _paragraph,
    "heading": _heading,
    "text": _text,
    "hardBreak": _hard_break,
    "mention": _mention,
    "emoji": _emoji,
    "inlineCard": _inline_card,
    "rule": _rule,
    "codeBlock": _code_block,
    "blockquote": _blockquote,
    "bulletList": _bullet_list,
    "orderedList": _ordered_list,
    "listItem": _list_item,
}
