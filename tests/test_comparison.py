from vaka_kielet.core.comparison import (
    ABOUT_EQUAL,
    ABOVE,
    BELOW,
    _category_from_delta,
    compare,
    compare_optional,
    share_delta,
)
from vaka_kielet.core.data_loader import AreaRecord


def test_helsinki_above_whole_country(helsinki, koko_maa):
    assert abs(share_delta(helsinki, koko_maa) - 7.0) < 1e-9
    assert compare(helsinki, koko_maa) == ABOVE


def test_below_and_about_equal():
    baseline = AreaRecord("KOKO MAA", 8, 2)       # 25.0 %
    lower = AreaRecord("Pelkosenniemi", 8, 1)     # 12.5 %
    same = AreaRecord("Vantaa", 8, 2)             # 25.0 %
    assert compare(lower, baseline) == BELOW
    assert compare(same, baseline) == ABOUT_EQUAL


def test_threshold_boundaries():
    assert _category_from_delta(0.0) == ABOUT_EQUAL
    assert _category_from_delta(0.49) == ABOUT_EQUAL
    assert _category_from_delta(-0.49) == ABOUT_EQUAL
    assert _category_from_delta(0.5) == ABOVE
    assert _category_from_delta(-0.5) == BELOW


def test_compare_optional_skips_missing_side(helsinki, koko_maa):
    assert compare_optional(None, koko_maa) is None
    assert compare_optional(helsinki, None) is None
    assert compare_optional(helsinki, koko_maa) == ABOVE
