"""Legacy Jira wiki markup rendering.

Converts the wiki markup used by Jira REST API v2 descriptions into the
same Markdown-flavoured text the ADF renderer produces, line by line and
without building a tree. Unterminated markers are copied through.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"^h([1-6])\.\s*(.*)$")
BULLET_PATTERN = re.compile(r"^(\*+)\s+(.*)$")
ORDERED_PATTERN = re.compile(r"^(#+)\s+(.*)$")
QUOTE_PATTERN = re.compile(r"^bq\.\s*(.*)$")
RULE_PATTERN = re.compile(r"^-{4,}\s*$")
CODE_OPEN_PATTERN = re.compile(r"^\{(code|noformat)(?::([^}]*))?\}\s*$")

LIST_INDENT = "  "
URL_SCHEMES = ("http://", "https://", "mailto:", "ftp://")


def render_wiki_markup(markup: str) -> str:
    """Render wiki markup to Markdown-flavoured text.

    :param markup: Wiki markup description.
    :type markup: str
    :return: Rendered text, one ``\\n`` terminated line per non-blank line.
    :rtype: str
    """
    output: List[str] = []
    counters: List[int] = []
    fence: Optional[str] = None

    for line in markup.splitlines():
        if fence is not None:
            if line.strip() == "{" + fence + "}":
                output.append("```\n")
                fence = None
            else:
                output.append(f"{line}\n")
            continue

        code_open = CODE_OPEN_PATTERN.match(line)
        if code_open:
            fence = code_open.group(1)
            output.append(f"```{_code_language(code_open.group(2))}\n")
            counters = []
            continue

        ordered = ORDERED_PATTERN.match(line)
        if not ordered:
            counters = []

        if not line.strip():
            continue

        heading = HEADING_PATTERN.match(line)
        if heading:
            level = int(heading.group(1))
            output.append(f"{'#' * level} {render_inline(heading.group(2))}\n")
            continue

        bullet = BULLET_PATTERN.match(line)
        if bullet:
            depth = len(bullet.group(1)) - 1
            output.append(f"{LIST_INDENT * depth}- {render_inline(bullet.group(2))}\n")
            continue

        if ordered:
            level = len(ordered.group(1))
            del counters[level:]
            while len(counters) < level:
                counters.append(0)
            counters[level - 1] += 1
            indent = LIST_INDENT * (level - 1)
            output.append(f"{indent}{counters[level - 1]}. {render_inline(ordered.group(2))}\n")
            continue

        quote = QUOTE_PATTERN.match(line)
        if quote:
            output.append(f"> {render_inline(quote.group(1))}\n")
            continue

        if RULE_PATTERN.match(line):
            output.append("---\n")
            continue

        output.append(f"{render_inline(line)}\n")

    if fence is not None:
        logger.debug("unterminated {%s} block", fence)
        output.append("```\n")

    return "".join(output)


def render_inline(text: str) -> str:
    """Render inline wiki tokens (bold, links, monospace) in one line.

    ``_italic_`` is already Markdown and passes through unchanged.

    :param text: Line content without block prefix.
    :type text: str
    :return: Rendered line content.
    :rtype: str
    """
    output: List[str] = []
    index = 0
    length = len(text)

    while index < length:
        char = text[index]

        if char == "*":
            end = text.find("*", index + 1)
            inner = text[index + 1 : end] if end != -1 else ""
            if inner and not inner[0].isspace() and not inner[-1].isspace():
                output.append(f"**{render_inline(inner)}**")
                index = end + 1
                continue
            logger.debug("unterminated bold marker at column %d", index)

        elif text.startswith("{{", index):
            end = text.find("}}", index + 2)
            if end > index + 2:
                output.append(f"`{text[index + 2 : end]}`")
                index = end + 2
                continue

        elif char == "[":
            end = text.find("]", index + 1)
            link = _render_link(text[index + 1 : end]) if end != -1 else None
            if link is not None:
                output.append(link)
                index = end + 1
                continue

        output.append(char)
        index += 1

    return "".join(output)


def _render_link(inner: str) -> Optional[str]:
    label, separator, url = inner.rpartition("|")
    if separator:
        url = url.strip()
        if not url:
            return None
        return f"[{render_inline(label) or url}]({url})"
    if inner.startswith(URL_SCHEMES):
        return f"[{inner}]({inner})"
    return None


def _code_language(parameters: Optional[str]) -> str:
    if not parameters:
        return ""
    first = parameters.split("|", 1)[0].strip()
    return "" if "=" in first else first
