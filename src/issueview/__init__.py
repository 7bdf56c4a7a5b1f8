"""Issueview: terminal rendering of Jira issues."""

__version__ = "0.1.0"
