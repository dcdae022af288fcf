"""
Application state for the lookup page.

The UI owns exactly one AppState and only changes it through transition().
Everything shown on screen is recomputed from the state by derive_view().
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

import logging

from vaka_kielet.core.comparison import compare_optional
from vaka_kielet.core.data_loader import (
    EMPTY_DATASET,
    AreaRecord,
    Dataset,
    LoadError,
    Source,
    timed_load_dataset,
)
from vaka_kielet.core.query_engine import resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppState:
    dataset: Dataset = EMPTY_DATASET
    load_error: Optional[str] = None
    load_error_detail: Optional[str] = None
    query: str = ""
    dataset_version: int = 0
    load_seconds: Optional[float] = None


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoadSucceeded:
    dataset: Dataset
    seconds: Optional[float] = None


@dataclass(frozen=True)
class LoadFailed:
    error: LoadError


@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class SuggestionClicked:
    area_name: str


Event = Union[LoadSucceeded, LoadFailed, QueryChanged, SuggestionClicked]


def transition(state: AppState, event: Event) -> AppState:
    """
    Pure state transition. Loads always replace the dataset wholesale;
    a failed load leaves an empty dataset behind, never the previous one.
    """
    if isinstance(event, LoadSucceeded):
        return replace(
            state,
            dataset=event.dataset,
            load_error=None,
            load_error_detail=None,
            dataset_version=state.dataset_version + 1,
            load_seconds=event.seconds,
        )
    if isinstance(event, LoadFailed):
        return replace(
            state,
            dataset=EMPTY_DATASET,
            load_error=event.error.user_message,
            load_error_detail=str(event.error),
            dataset_version=state.dataset_version + 1,
            load_seconds=None,
        )
    if isinstance(event, QueryChanged):
        return replace(state, query=event.query or "")
    if isinstance(event, SuggestionClicked):
        return replace(state, query=event.area_name)
    raise TypeError(f"Unknown event: {event!r}")


def run_load(state: AppState, source: Source) -> AppState:
    """
    Load `source` and fold the outcome into the state.
    """
    try:
        dataset, elapsed = timed_load_dataset(source)
    except LoadError as exc:
        logger.exception("Dataset load failed for %s", source)
        return transition(state, LoadFailed(exc))

    logger.info("Loaded %d records in %0.2fs", len(dataset), elapsed)
    return transition(state, LoadSucceeded(dataset, seconds=elapsed))


# ---------------------------------------------------------------------------
# Derived view
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ViewModel:
    query: str
    suggestions: Tuple[AreaRecord, ...] = field(default_factory=tuple)
    selected: Optional[AreaRecord] = None
    baseline: Optional[AreaRecord] = None
    comparison: Optional[str] = None
    load_error: Optional[str] = None
    missing_baseline: bool = False


def derive_view(state: AppState) -> ViewModel:
    dataset = state.dataset
    result = resolve(state.query, dataset.records)
    baseline = dataset.baseline

    return ViewModel(
        query=state.query,
        suggestions=result.suggestions,
        selected=result.selected,
        baseline=baseline,
        comparison=compare_optional(result.selected, baseline),
        load_error=state.load_error,
        missing_baseline=(
            state.load_error is None and not dataset.is_empty and baseline is None
        ),
    )
