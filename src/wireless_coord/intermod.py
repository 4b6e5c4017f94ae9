# src/wireless_coord/intermod.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Sequence, Union

import numpy as np

from .config_models import Frequency, Range, UHF_BAND, MHz


FrequencyLike = Union[Frequency, float]

_KHZ = Decimal("0.001")


@dataclass(frozen=True)
class IMProduct:
    """One two-tone product, kept for the product ledger."""
    order: int
    f1: MHz
    f2: MHz
    product: MHz


def round_mhz(value: float) -> MHz:
    """
    Round to 1 kHz resolution with halves rounded away from zero.

    Works on the exact binary value of the float, so 500.0625 -> 500.063
    while 470.0245 (stored slightly below the half) -> 470.024.
    """
    return float(Decimal(float(value)).quantize(_KHZ, rounding=ROUND_HALF_UP))


def _values(frequencies: Iterable[FrequencyLike]) -> np.ndarray:
    return np.asarray(
        [f.value if isinstance(f, Frequency) else f for f in frequencies],
        dtype=float,
    )


def calculate_im3(f1: MHz, f2: MHz) -> List[MHz]:
    """Third-order products 2*f1 - f2 and 2*f2 - f1."""
    return [2 * f1 - f2, 2 * f2 - f1]


def calculate_im5(f1: MHz, f2: MHz) -> List[MHz]:
    """Fifth-order products 3*f1 - 2*f2 and 3*f2 - 2*f1."""
    return [3 * f1 - 2 * f2, 3 * f2 - 2 * f1]


def _pair_products(vals: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Vectorised IM3/IM5 outputs for every unordered pair (i < j).

    Returns (orders, f1, f2, products), each of length 4 * n_pairs.
    """
    i, j = np.triu_indices(len(vals), k=1)
    f1 = vals[i]
    f2 = vals[j]
    products = np.concatenate(
        [
            2 * f1 - f2,
            2 * f2 - f1,
            3 * f1 - 2 * f2,
            3 * f2 - 2 * f1,
        ]
    )
    n_pairs = len(i)
    orders = np.repeat([3, 3, 5, 5], n_pairs)
    return orders, np.tile(f1, 4), np.tile(f2, 4), products


def get_all_im_products(
    frequencies: Iterable[FrequencyLike],
    band: Range = UHF_BAND,
) -> List[MHz]:
    """
    Aggregate IM3 + IM5 product set for a collection of carriers.

    Products outside the band (inclusive) are dropped before rounding; the
    survivors are rounded to 1 kHz and deduplicated. The result is a set in
    meaning; it is returned sorted so runs are reproducible.
    """
    vals = _values(frequencies)
    if len(vals) < 2:
        return []

    _, _, _, products = _pair_products(vals)
    in_band = products[(products >= band.start) & (products <= band.stop)]
    return sorted({round_mhz(p) for p in in_band})


def has_im_conflict(
    freq: MHz,
    im_products: Sequence[MHz],
    margin: MHz = 0.250,
) -> bool:
    """True iff some product lies strictly closer than margin to freq."""
    return any(abs(freq - p) < margin for p in im_products)


def im_product_table(
    frequencies: Iterable[FrequencyLike],
    band: Range = UHF_BAND,
) -> List[IMProduct]:
    """
    Ledger of in-band products with the carrier pair that generated them.

    Unlike get_all_im_products this keeps duplicates, since two different
    pairs landing on the same kHz are both worth reporting.
    """
    vals = _values(frequencies)
    if len(vals) < 2:
        return []

    orders, f1s, f2s, products = _pair_products(vals)
    rows: List[IMProduct] = []
    for order, f1, f2, p in zip(orders, f1s, f2s, products):
        if band.contains(p):
            rows.append(
                IMProduct(
                    order=int(order),
                    f1=float(f1),
                    f2=float(f2),
                    product=round_mhz(p),
                )
            )
    rows.sort(key=lambda r: (r.product, r.order, r.f1, r.f2))
    return rows
