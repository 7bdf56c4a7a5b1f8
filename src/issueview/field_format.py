"""Presentational strings derived from issue fields."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from issueview.models import NamedValue, Person, Watches

logger = logging.getLogger(__name__)

HUMAN_DATE_FORMAT = "%a, %d %b %y"
FALLBACK = "None"

JIRA_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%dT%H:%M:%S%z",
)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Jira timestamp such as ``2020-12-13T14:05:20.974+0100``.

    :param value: Raw timestamp.
    :type value: Optional[str]
    :return: Offset-aware datetime, or None when it cannot be parsed.
    :rtype: Optional[datetime]
    """
    if not value:
        return None
    for pattern in JIRA_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, pattern)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(
    value: Optional[str],
    date_format: str = HUMAN_DATE_FORMAT,
    fallback: str = FALLBACK,
) -> str:
    """Format a timestamp as e.g. ``Sun, 13 Dec 20`` in its own offset.

    :param value: Raw timestamp.
    :type value: Optional[str]
    :param date_format: strftime pattern.
    :type date_format: str
    :param fallback: Text for an absent timestamp.
    :type fallback: str
    :return: Short date; unparseable input is returned unchanged.
    :rtype: str
    """
    if not value:
        return fallback
    parsed = parse_timestamp(value)
    if parsed is None:
        logger.debug("could not parse timestamp %r", value)
        return value
    return parsed.strftime(date_format)


def format_comment_count(total: int) -> str:
    return f"{total} comments"


def format_linked_count(total: int) -> str:
    return f"{total} linked issues"


def format_watchers(watches: Optional[Watches]) -> str:
    """Describe the watchers of an issue.

    The watch count includes the requesting user when they are watching,
    so they are subtracted from the count shown next to "You".
    """
    if watches is None:
        return "0 watchers"
    if watches.is_watching:
        return f"You + {watches.watch_count - 1} watchers"
    return f"{watches.watch_count} watchers"


def format_names(values: Iterable[str], fallback: str = FALLBACK) -> str:
    names = [value for value in values if value]
    return ", ".join(names) if names else fallback


def format_named(value: Optional[NamedValue], fallback: str = FALLBACK) -> str:
    if value is None or not value.name:
        return fallback
    return value.name


def format_person(value: Optional[Person], fallback: str = FALLBACK) -> str:
    if value is None or not value.name:
        return fallback
    return value.name
