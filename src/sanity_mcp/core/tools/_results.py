"""
Shared helpers for turning client results into tool payloads.
"""

from typing import Any, Dict

from pydantic import BaseModel

# Default and ceiling for list-style tools.
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def as_payload(model: BaseModel) -> Dict[str, Any]:
    """Dump a result model with Sanity's wire names, skipping fields never populated."""
    return model.model_dump(by_alias=True, exclude_unset=True)


def clamp_limit(limit: int, *, maximum: int = MAX_LIMIT) -> int:
    """Clamp limit into a safe range to avoid huge payloads."""
    return max(1, min(limit, maximum))
