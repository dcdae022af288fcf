from __future__ import annotations

from vaka_kielet.core.comparison import ABOVE
from vaka_kielet.core.data_loader import EMPTY_DATASET, LOAD_FAILED_MESSAGE, Dataset, FetchError
from vaka_kielet.core.state import (
    AppState,
    LoadFailed,
    LoadSucceeded,
    QueryChanged,
    SuggestionClicked,
    derive_view,
    run_load,
    transition,
)


def test_initial_state_is_empty():
    state = AppState()
    assert state.dataset.is_empty
    assert state.load_error is None
    assert state.query == ""
    assert state.dataset_version == 0


def test_load_succeeded_replaces_dataset(sample_dataset):
    state = transition(AppState(), LoadSucceeded(sample_dataset))
    assert state.dataset is sample_dataset
    assert state.load_error is None
    assert state.dataset_version == 1


def test_load_failed_clears_previous_dataset(sample_dataset):
    state = transition(AppState(), LoadSucceeded(sample_dataset))
    state = transition(state, LoadFailed(FetchError("CSV lataus epäonnistui (500)", status_code=500)))

    assert state.dataset is EMPTY_DATASET
    assert state.load_error == LOAD_FAILED_MESSAGE
    assert state.load_error_detail == "CSV lataus epäonnistui (500)"
    assert state.dataset_version == 2


def test_success_after_failure_clears_error(sample_dataset):
    state = transition(AppState(), LoadFailed(FetchError("nope")))
    state = transition(state, LoadSucceeded(sample_dataset))
    assert state.load_error is None
    assert state.load_error_detail is None
    assert len(state.dataset) == 2


def test_query_events_replace_query(sample_dataset):
    state = transition(AppState(), LoadSucceeded(sample_dataset))
    state = transition(state, QueryChanged("hel"))
    assert state.query == "hel"
    state = transition(state, SuggestionClicked("Helsinki"))
    assert state.query == "Helsinki"
    assert state.dataset is sample_dataset


def test_transitions_do_not_mutate_input(sample_dataset):
    before = AppState()
    after = transition(before, LoadSucceeded(sample_dataset))
    assert before.dataset.is_empty
    assert after is not before


def test_derive_view_full_pipeline(sample_dataset):
    state = transition(AppState(), LoadSucceeded(sample_dataset))
    state = transition(state, QueryChanged("helsin"))
    view = derive_view(state)

    assert [r.area_name for r in view.suggestions] == ["Helsinki"]
    assert view.selected.area_name == "Helsinki"
    assert view.baseline.area_name == "KOKO MAA"
    assert view.comparison == ABOVE
    assert not view.missing_baseline
    assert view.load_error is None


def test_derive_view_without_query(sample_dataset):
    view = derive_view(transition(AppState(), LoadSucceeded(sample_dataset)))
    assert view.selected is None
    assert view.comparison is None
    assert view.baseline is not None


def test_missing_baseline_warning_only_for_non_empty_successful_load(helsinki):
    state = transition(AppState(), LoadSucceeded(Dataset(records=(helsinki,))))
    state = transition(state, QueryChanged("Helsinki"))
    view = derive_view(state)
    assert view.missing_baseline
    assert view.selected is helsinki
    assert view.comparison is None

    empty = derive_view(transition(AppState(), LoadSucceeded(Dataset())))
    assert not empty.missing_baseline

    failed = derive_view(transition(AppState(), LoadFailed(FetchError("x"))))
    assert not failed.missing_baseline
    assert failed.load_error == LOAD_FAILED_MESSAGE


def test_run_load_success(sample_csv_path):
    state = run_load(AppState(), sample_csv_path)
    assert [r.area_name for r in state.dataset] == ["Helsinki", "KOKO MAA"]
    assert state.load_error is None


def test_run_load_failure_resets_to_empty(sample_csv_path, tmp_path):
    state = run_load(AppState(), sample_csv_path)
    state = run_load(state, tmp_path / "missing.csv")

    assert state.dataset.is_empty
    assert state.load_error == LOAD_FAILED_MESSAGE
    assert "missing.csv" in state.load_error_detail


def test_reload_with_empty_dataset_drops_previous_records(sample_csv_path, tmp_path):
    state = run_load(AppState(), sample_csv_path)
    assert len(state.dataset) == 2

    empty_path = tmp_path / "empty.csv"
    empty_path.write_text("alue;kaikki;vieraskieliset\n", encoding="utf-8")
    state = run_load(state, empty_path)

    assert state.dataset.is_empty
    assert state.load_error is None
    assert state.dataset_version == 2
    assert derive_view(transition(state, QueryChanged("helsinki"))).selected is None


def test_run_load_records_load_time(sample_csv_path, tmp_path):
    state = run_load(AppState(), sample_csv_path)
    assert state.load_seconds is not None
    assert state.load_seconds >= 0

    state = run_load(state, tmp_path / "missing.csv")
    assert state.load_seconds is None
