# tests/test_markets.py
from __future__ import annotations

import pytest

from wireless_coord.markets import (
    VENUES,
    channels_for_location,
    find_market,
    find_venue,
    haversine_km,
    nearest_market,
)


def test_haversine_km():
    assert haversine_km(40.0, -74.0, 40.0, -74.0) == pytest.approx(0.0)
    # New York -> Los Angeles, roughly 3936 km great-circle
    d = haversine_km(40.7128, -74.0060, 34.0522, -118.2437)
    assert d == pytest.approx(3936.0, rel=0.01)


def test_nearest_market():
    # Ryman Auditorium
    assert nearest_market(36.1612, -86.7783).name == "Nashville"
    # Brooklyn
    assert nearest_market(40.7197, -73.9501).name == "New York"
    assert channels_for_location(47.6, -122.3) == [14, 20, 22, 27, 31]


def test_find_market_case_insensitive():
    assert find_market("los angeles").name == "Los Angeles"
    with pytest.raises(KeyError):
        find_market("Atlantis")


def test_venue_presets():
    ryman = find_venue("ryman")
    assert ryman.city == "Nashville"
    assert ryman.active_channels == (28, 29, 30, 31, 32)
    assert find_venue("gorge").active_channels == (24, 28, 32)
    assert find_venue("msg").active_channels == find_venue("brooklyn-steel").active_channels
    assert all(vid == v.venue_id for vid, v in VENUES.items())
    with pytest.raises(KeyError):
        find_venue("nowhere")
