"""Validation of already-fetched issue payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from issueview.models import Issue


class IssueLoadError(RuntimeError):
    """Raised when an issue payload cannot be loaded."""


def load_issue(data: Mapping[str, Any]) -> Issue:
    """Validate a Jira REST API issue payload.

    :param data: Decoded issue JSON.
    :type data: Mapping[str, Any]
    :return: Issue record.
    :rtype: Issue
    :raises IssueLoadError: If the payload is not a valid issue.
    """
    if not isinstance(data, Mapping):
        raise IssueLoadError("issue payload must be a JSON object")
    try:
        return Issue.model_validate(dict(data))
    except ValidationError as error:
        raise IssueLoadError(str(error)) from error


def parse_issue_json(text: str) -> Issue:
    """Decode and validate an issue JSON document."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as error:
        raise IssueLoadError(f"invalid issue json: {error.msg}") from error
    return load_issue(data)


def read_issue_file(path: Path) -> Issue:
    """Read an issue JSON document from disk.

    :param path: Path to the issue JSON file.
    :type path: Path
    :return: Issue record.
    :rtype: Issue
    :raises IssueLoadError: If the file cannot be read or parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as error:
        raise IssueLoadError(str(error)) from error
    return parse_issue_json(text)
