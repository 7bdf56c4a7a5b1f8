"""
Display configuration defaults.
"""

from __future__ import annotations

from typing import Any, Dict

CONFIGURATION_FILE_NAME = ".issueview.yml"

DEFAULT_CONFIGURATION: Dict[str, Any] = {
    "type_icons": {"Bug": "🐞"},
    "default_type_icon": "⭐",
    "status_icons": {"Done": "✅"},
    "default_status_icon": "🚧",
    "fallback": "None",
    "unassigned": "Unassigned",
    "separator_half_width": 24,
    "date_format": "%a, %d %b %y",
}
