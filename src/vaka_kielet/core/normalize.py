from __future__ import annotations

import re
from typing import Any

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(value: Any) -> str:
    """
    Matching key for an area name or a search query.

    None becomes "", everything else is stringified, trimmed, lowercased and
    has internal whitespace runs collapsed to a single space.
    """
    if value is None:
        return ""
    return _WHITESPACE_RUN.sub(" ", str(value).strip().lower())
