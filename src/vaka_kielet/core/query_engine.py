from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

import logging

from vaka_kielet.config import SUGGESTION_LIMIT
from vaka_kielet.core.data_loader import AreaRecord
from vaka_kielet.core.normalize import normalize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryResult:
    """
    Outcome of resolving one search string against the dataset.

    suggestions: substring matches in dataset order (at most SUGGESTION_LIMIT)
    selected:    exact key match if any, else the first suggestion, else None
    """
    query: str
    normalized_query: str
    suggestions: Tuple[AreaRecord, ...] = field(default_factory=tuple)
    selected: Optional[AreaRecord] = None


def candidate_pool(records: Iterable[AreaRecord]) -> List[AreaRecord]:
    """
    Records eligible for matching: everything except the KOKO MAA row.
    """
    return [r for r in records if not r.is_baseline]


def resolve(
    query: str,
    records: Iterable[AreaRecord],
    limit: int = SUGGESTION_LIMIT,
) -> QueryResult:
    """
    Resolve free text to suggestions and a single selection.

    Matching is substring containment on normalized keys only. The baseline
    row is filtered out before matching, so typing its exact name gives no
    selection.
    """
    nq = normalize(query)
    if not nq:
        return QueryResult(query=query or "", normalized_query="")

    pool = candidate_pool(records)

    suggestions = tuple(r for r in pool if nq in r.key)[:limit]

    selected = next((r for r in pool if r.key == nq), None)
    if selected is None and suggestions:
        selected = suggestions[0]

    logger.debug(
        "Resolved query %r: %d suggestions, selected=%s",
        nq, len(suggestions), selected.area_name if selected else None,
    )
    return QueryResult(
        query=query,
        normalized_query=nq,
        suggestions=suggestions,
        selected=selected,
    )
