"""
Pytest configuration and shared issue fixtures.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from issueview.models import Issue  # noqa: E402


def build_issue_payload(**field_overrides: Any) -> Dict[str, Any]:
    """Build a Jira REST payload with every header field populated.

    :param field_overrides: Field values replacing the defaults.
    :type field_overrides: Any
    :return: Issue payload.
    :rtype: Dict[str, Any]
    """
    fields: Dict[str, Any] = {
        "summary": "This is a test",
        "issuetype": {"name": "Bug"},
        "status": {"name": "Done"},
        "priority": {"name": "High"},
        "assignee": {"displayName": "Person A"},
        "reporter": {"displayName": "Person Z"},
        "components": [{"name": "BE"}, {"name": "FE"}],
        "created": "2020-12-13T14:05:20.974+0100",
        "updated": "2020-12-13T14:07:20.974+0100",
    }
    fields.update(field_overrides)
    return {"key": "TEST-1", "fields": fields}


def build_linked_issue(key: str, summary: str, priority: str, status: str) -> Dict[str, Any]:
    return {
        "key": key,
        "fields": {
            "summary": summary,
            "issuetype": {"name": "Bug"},
            "priority": {"name": priority},
            "status": {"name": status},
        },
    }


BLOCKS_LINK: Dict[str, Any] = {
    "type": {"name": "blocks", "inward": "blocks", "outward": "is blocked by"},
    "inwardIssue": build_linked_issue("TEST-2", "Something is broken", "High", "TO DO"),
}

RELATES_LINK: Dict[str, Any] = {
    "type": {"name": "relates", "inward": "relates", "outward": "relates to"},
    "outwardIssue": build_linked_issue("TEST-3", "Everything is on fire", "Urgent", "Done"),
}


@pytest.fixture
def document_issue() -> Issue:
    payload = build_issue_payload(
        description={
            "version": 1,
            "type": "doc",
            "content": [
                {
                    "type": "paragraph",
                    "content": [{"type": "text", "text": "Test description"}],
                }
            ],
        },
        watches={"isWatching": True, "watchCount": 4},
    )
    return Issue.model_validate(payload)


@pytest.fixture
def legacy_issue() -> Issue:
    payload = build_issue_payload(
        description=(
            "h1. Title\nh2. Subtitle\n\nThis is a *bold* and _italic_ text "
            "with [a link|https://ankit.pl] in between."
        ),
        comment={"total": 3},
        issuelinks=[BLOCKS_LINK, RELATES_LINK],
    )
    return Issue.model_validate(payload)
