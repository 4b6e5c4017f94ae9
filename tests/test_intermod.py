# tests/test_intermod.py
from __future__ import annotations

import pytest

from wireless_coord.config_models import Frequency, Range
from wireless_coord.intermod import (
    calculate_im3,
    calculate_im5,
    get_all_im_products,
    has_im_conflict,
    im_product_table,
    round_mhz,
)


def test_im3_and_im5_values():
    assert calculate_im3(500.0, 501.0) == [499.0, 502.0]
    assert calculate_im5(500.0, 501.0) == [498.0, 503.0]


@pytest.mark.parametrize(
    "f1, f2",
    [(500.0, 501.0), (470.525, 471.85), (512.5, 600.125), (550.0, 550.0)],
)
def test_im3_symmetric_as_set(f1, f2):
    assert sorted(calculate_im3(f1, f2)) == sorted(calculate_im3(f2, f1))
    assert sorted(calculate_im5(f1, f2)) == sorted(calculate_im5(f2, f1))


def test_get_all_im_products_dedups_across_pairs():
    """
    Three evenly spaced carriers: several pairs land on the same kHz and must
    appear once.
    """
    products = get_all_im_products([500.0, 501.0, 502.0])
    assert products == [496.0, 498.0, 499.0, 500.0, 502.0, 503.0, 504.0, 506.0]
    assert len(products) == len(set(products))


def test_get_all_im_products_drops_out_of_band():
    # 2*471 - 480 = 462 and 3*471 - 2*480 = 453 fall below 470 MHz
    products = get_all_im_products([471.0, 480.0])
    assert products == [489.0, 498.0]


def test_get_all_im_products_custom_band():
    products = get_all_im_products([500.0, 501.0], band=Range(499.0, 502.0))
    assert products == [499.0, 502.0]


def test_get_all_im_products_never_outside_band():
    freqs = [470.5, 471.2, 520.0, 560.4, 600.0, 607.5]
    products = get_all_im_products(freqs)
    assert products
    assert all(470.0 <= p <= 608.0 for p in products)


def test_get_all_im_products_needs_two_carriers():
    assert get_all_im_products([]) == []
    assert get_all_im_products([500.0]) == []


def test_get_all_im_products_accepts_frequency_objects():
    freqs = [Frequency(500.0, "mic"), Frequency(501.0, "iem")]
    assert get_all_im_products(freqs) == get_all_im_products([500.0, 501.0])


def test_round_mhz_half_away_from_zero():
    # exact binary halves round up
    assert round_mhz(500.0625) == 500.063
    assert round_mhz(500.1875) == 500.188
    assert round_mhz(470.1234) == 470.123
    assert round_mhz(470.1236) == 470.124
    assert round_mhz(500.0) == 500.0


def test_has_im_conflict_is_strict():
    assert has_im_conflict(500.0, [500.2])
    # exactly at the margin is not a conflict
    assert not has_im_conflict(500.0, [500.25])
    assert not has_im_conflict(500.0, [])
    assert has_im_conflict(500.0, [500.25], margin=0.3)


@pytest.mark.parametrize("freq", [499.0, 499.76, 500.1, 501.5, 503.9, 510.0])
def test_has_im_conflict_matches_min_distance(freq):
    products = [498.0, 500.0, 504.0]
    margin = 0.25
    expected = min(abs(freq - p) for p in products) < margin
    assert has_im_conflict(freq, products, margin) is expected


def test_im_product_table_keeps_pairs():
    rows = im_product_table([500.0, 501.0])
    assert [(r.product, r.order) for r in rows] == [
        (498.0, 5),
        (499.0, 3),
        (502.0, 3),
        (503.0, 5),
    ]
    assert all((r.f1, r.f2) == (500.0, 501.0) for r in rows)
