"""FieldConfig のテスト。"""

from __future__ import annotations

import pytest

from tricolorflow.core.color_zones import ColorZones
from tricolorflow.core.field_config import FieldConfig


def test_defaults_match_portrait_canvas() -> None:
    cfg = FieldConfig()
    assert cfg.line_count == 30
    assert cfg.segment_count == 100
    assert cfg.left_x == -540.0
    assert cfg.right_x == 540.0
    assert cfg.max_dist == 2160.0
    assert cfg.span == 1080.0
    assert cfg.zones == ColorZones()


def test_from_canvas_derives_range_and_max_dist() -> None:
    cfg = FieldConfig.from_canvas(800, 600, line_count=5, segment_count=20)
    assert cfg.left_x == -400.0
    assert cfg.right_x == 400.0
    assert cfg.max_dist == 1600.0
    assert cfg.line_count == 5
    assert cfg.segment_count == 20


def test_zero_lines_is_allowed() -> None:
    assert FieldConfig(line_count=0).line_count == 0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"line_count": -1},
        {"segment_count": 0},
        {"left_x": 10.0, "right_x": 10.0},
        {"left_x": float("inf")},
        {"max_dist": 0.0},
        {"curve_type": "linear"},
    ],
)
def test_invalid_config_raises(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        FieldConfig(**kwargs)


@pytest.mark.parametrize(("width", "height"), [(0, 100), (100, -1)])
def test_from_canvas_rejects_non_positive_size(width: float, height: float) -> None:
    with pytest.raises(ValueError):
        FieldConfig.from_canvas(width, height)


def test_from_canvas_overrides_take_precedence_over_derived_range() -> None:
    cfg = FieldConfig.from_canvas(1080, 1920, left_x=-10.0, max_dist=50.0)
    assert cfg.left_x == -10.0
    assert cfg.right_x == 540.0
    assert cfg.max_dist == 50.0


def test_from_canvas_overrides_are_still_validated() -> None:
    with pytest.raises(ValueError):
        FieldConfig.from_canvas(1080, right_x=-600.0)
