from __future__ import annotations

from typing import Optional

from vaka_kielet.core.data_loader import AreaRecord

ABOUT_EQUAL = "about-equal"
ABOVE = "above"
BELOW = "below"

# Percentage points; differences smaller than this count as "the same"
ABOUT_EQUAL_THRESHOLD = 0.5


def share_delta(selected: AreaRecord, baseline: AreaRecord) -> float:
    return selected.foreign_language_share - baseline.foreign_language_share


def _category_from_delta(delta: float) -> str:
    """
    Interpret a share difference as 'about-equal', 'above' or 'below'.
    """
    if abs(delta) < ABOUT_EQUAL_THRESHOLD:
        return ABOUT_EQUAL
    if delta > 0:
        return ABOVE
    return BELOW


def compare(selected: AreaRecord, baseline: AreaRecord) -> str:
    """
    Classify a municipality's foreign-language share against the national one.
    """
    return _category_from_delta(share_delta(selected, baseline))


def compare_optional(
    selected: Optional[AreaRecord],
    baseline: Optional[AreaRecord],
) -> Optional[str]:
    """
    Same as compare(), but skipped (None) when either side is missing.
    """
    if selected is None or baseline is None:
        return None
    return compare(selected, baseline)
