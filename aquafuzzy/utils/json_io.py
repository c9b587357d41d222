"""
JSON helpers for the policy/config loaders.
"""
import json
import os
from typing import Any, Optional


def safe_get(d: dict, key: str, default: Any) -> Any:
    """Get dictionary value with default fallback."""
    return d[key] if key in d else default


def read_json(path: Optional[str]) -> Optional[dict]:
    """Return the parsed JSON object at `path`, or None when there is no file."""
    if path and os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return None
