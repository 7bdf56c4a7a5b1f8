"""Horizontal rule banners between view sections."""

from __future__ import annotations

from typing import Dict, Tuple

from issueview.models import RenderTarget

PLAIN_RULE = "-"
COLOR_RULE = "—"
DEFAULT_HALF_WIDTH = 24

# Escape sequences wrapped around the whole rule, per render target.
TARGET_ESCAPES: Dict[RenderTarget, Tuple[str, str]] = {
    RenderTarget.PLAIN: ("", ""),
    RenderTarget.COLOR: ("\x1b[0;90m", "\x1b[0m"),
    RenderTarget.COLOR_256: ("\x1b[38;5;242m", "\x1b[m"),
}


def render_separator(
    body: str,
    target: RenderTarget = RenderTarget.PLAIN,
    half_width: int = DEFAULT_HALF_WIDTH,
) -> str:
    """Render a horizontal rule, optionally labelled in the middle.

    An empty body yields a solid rule of ``2 * half_width`` characters.
    Otherwise the body is inserted verbatim, padded by one space on each
    side, between two rules of ``half_width`` characters.

    :param body: Label to show inside the rule.
    :type body: str
    :param target: Render target selecting glyphs and colors.
    :type target: RenderTarget
    :param half_width: Rule characters on each side of the label.
    :type half_width: int
    :return: Rendered separator line without a trailing newline.
    :rtype: str
    """
    rule = PLAIN_RULE if target is RenderTarget.PLAIN else COLOR_RULE
    if body == "":
        line = rule * (half_width * 2)
    else:
        line = f"{rule * half_width} {body} {rule * half_width}"
    start, end = TARGET_ESCAPES[target]
    return f"{start}{line}{end}"
