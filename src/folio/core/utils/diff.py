"""Unified diffs between JSON documents"""

import difflib
import json
from typing import Any


def json_text(document: Any) -> str:
    """Stable pretty-printed JSON for line-based comparison."""
    return json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def unified_diff(
    old: Any,
    new: Any,
    from_label: str = "version_a",
    to_label: str = "version_b",
    context: int = 3,
    ) -> list[str]:
    """Return unified diff lines comparing two documents. Empty list if identical.

    Lines already include newlines; join with '' for display.
    """
    return list(difflib.unified_diff(
        json_text(old).splitlines(keepends=True),
        json_text(new).splitlines(keepends=True),
        fromfile=from_label, tofile=to_label, n=context,
    ))
