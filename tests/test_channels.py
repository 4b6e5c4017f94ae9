# tests/test_channels.py
from __future__ import annotations

import pytest

from wireless_coord.config_models import Range
from wireless_coord.channels import (
    US_UHF_TV_CHANNELS,
    channel_range,
    free_segments,
    is_in_channel,
    normalize_active_channels,
)


def test_channel_table_is_contiguous_6mhz_blocks():
    numbers = sorted(US_UHF_TV_CHANNELS)
    assert numbers == list(range(14, 37))
    assert US_UHF_TV_CHANNELS[14].min == 470.0
    assert US_UHF_TV_CHANNELS[36].max == 608.0
    for lo, hi in zip(numbers, numbers[1:]):
        a, b = US_UHF_TV_CHANNELS[lo], US_UHF_TV_CHANNELS[hi]
        assert a.max - a.min == pytest.approx(6.0)
        assert a.max == b.min


def test_channel_range_outside_uhf_is_none():
    assert channel_range(13) is None
    assert channel_range(37) is None
    r = channel_range(20)
    assert (r.start, r.stop) == (506.0, 512.0)


def test_is_in_channel_inclusive_edges():
    ch = is_in_channel(506.0, [20])
    assert ch is not None and ch.number == 20
    assert is_in_channel(512.0, [20]).number == 20
    assert is_in_channel(505.999, [20]) is None
    assert is_in_channel(509.0, []) is None


def test_is_in_channel_ascending_order_on_shared_edge():
    # 512.0 is the top of Ch 20 and the bottom of Ch 21; lower channel wins
    ch = is_in_channel(512.0, [21, 20])
    assert ch.number == 20


def test_is_in_channel_ignores_unknown_numbers():
    assert is_in_channel(509.0, [50, 2]) is None
    assert is_in_channel(509.0, [50, 20]).number == 20


def test_guard_band_not_applied_to_containment_by_default():
    """
    The guard band only moves the search past an occupied channel; a
    frequency just outside the raw channel edge is not a TV conflict.
    """
    assert is_in_channel(512.2, [20]) is None
    assert is_in_channel(505.8, [20]) is None
    # opt-in widening is available to callers that want stricter avoidance
    assert is_in_channel(512.2, [20], guard_band=0.5).number == 20
    assert is_in_channel(505.8, [20], guard_band=0.5).number == 20
    assert is_in_channel(512.6, [20], guard_band=0.5) is None


def test_normalize_active_channels():
    assert normalize_active_channels([32, 28, 28, "30"]) == [28, 30, 32]
    assert normalize_active_channels(None) == []


def test_free_segments():
    segs = free_segments(Range(500.0, 520.0), [20])
    assert [(s.start, s.stop) for s in segs] == [(500.0, 506.0), (512.0, 520.0)]

    assert free_segments(Range(506.0, 518.0), [21, 20]) == []

    segs = free_segments(Range(470.0, 480.0), [])
    assert [(s.start, s.stop) for s in segs] == [(470.0, 480.0)]
