"""ColorZones（三色グラデーションの帯）のテスト群。"""

from __future__ import annotations

import logging

import numpy as np
import pytest

from tricolorflow.core.color import GREEN, SAFFRON, WHITE
from tricolorflow.core.color_zones import ColorZones, _band_fraction, normalized_positions


def test_default_zones_thresholds_and_derived_right_band() -> None:
    zones = ColorZones()
    z_a, z_b, z_c, z_d = zones.thresholds
    assert z_a == pytest.approx(0.28)
    assert z_b == pytest.approx(0.43)
    assert z_c == pytest.approx(0.45)
    assert z_d == pytest.approx(0.60)
    assert zones.right_solid == pytest.approx(0.40)
    total = zones.left_solid + zones.left_blend + zones.center_white + zones.right_blend
    assert total + zones.right_solid == pytest.approx(1.0)


def test_solid_bands_return_exact_colors() -> None:
    zones = ColorZones()
    z_a, _z_b, _z_c, z_d = zones.thresholds
    for tc in np.linspace(0.0, z_a, 11):
        assert zones.color_at(float(tc)) == SAFFRON
    for tc in np.linspace(z_d + 1e-9, 1.0, 11):
        assert zones.color_at(float(tc)) == GREEN
    assert zones.color_at(0.44) == WHITE


def test_blend_boundaries_are_continuous() -> None:
    zones = ColorZones()
    z_a, z_b, z_c, z_d = zones.thresholds
    assert zones.color_at(z_a) == SAFFRON
    assert zones.color_at(z_b) == pytest.approx(WHITE)
    assert zones.color_at(z_c) == WHITE
    assert zones.color_at(z_d) == pytest.approx(GREEN)


def test_blend_band_interpolates_linearly() -> None:
    zones = ColorZones()
    z_a, z_b, _z_c, _z_d = zones.thresholds
    mid = zones.color_at((z_a + z_b) / 2.0)
    expected = tuple((s + w) / 2.0 for s, w in zip(SAFFRON, WHITE))
    assert mid == pytest.approx(expected)


def test_color_channels_stay_in_unit_range() -> None:
    zones = ColorZones()
    for tc in np.linspace(-0.5, 1.5, 201):
        rgb = zones.color_at(float(tc))
        assert all(0.0 <= c <= 1.0 for c in rgb)


def test_zero_width_blend_band_does_not_divide_by_zero() -> None:
    zones = ColorZones(left_solid=0.3, left_blend=0.0, center_white=0.2, right_blend=0.0)
    assert zones.color_at(0.3) == SAFFRON
    assert zones.color_at(0.30001) == WHITE
    assert zones.color_at(0.5) == WHITE
    assert zones.color_at(0.50001) == GREEN
    assert _band_fraction(0.3, 0.3, 0.3) == 1.0


def test_over_full_widths_clamp_right_band_and_warn(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="tricolorflow.core.color_zones"):
        zones = ColorZones(left_solid=0.5, left_blend=0.4, center_white=0.2, right_blend=0.1)
    assert zones.right_solid == 0.0
    assert any("clamped" in r.getMessage() for r in caplog.records)
    # 閾値が 1 を超えても色付けは破綻しない。
    assert zones.color_at(1.0) == WHITE


def test_valid_widths_do_not_warn(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="tricolorflow.core.color_zones"):
        ColorZones()
    assert not caplog.records


@pytest.mark.parametrize(
    "kwargs",
    [
        {"left_solid": -0.1},
        {"left_blend": float("nan")},
        {"right_blend": -1.0},
        {"color1": (1.0, 0.0)},
        {"color2": (1.5, 0.0, 0.0)},
    ],
)
def test_invalid_zones_raise(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        ColorZones(**kwargs)


def test_gradient_matches_color_at_and_is_read_only() -> None:
    zones = ColorZones()
    grad = zones.gradient(100)
    assert grad.shape == (100, 3)
    assert not grad.flags.writeable
    for j in (0, 28, 35, 44, 52, 70, 99):
        assert tuple(grad[j]) == pytest.approx(zones.color_at(j / 99.0))
    assert zones.gradient(100) is grad


def test_normalized_positions() -> None:
    np.testing.assert_allclose(normalized_positions(5), [0.0, 0.25, 0.5, 0.75, 1.0])
    assert normalized_positions(1).tolist() == [0.0]
    with pytest.raises(ValueError):
        normalized_positions(0)
