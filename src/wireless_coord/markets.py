# src/wireless_coord/markets.py
"""
Static regional data used to pick a starting set of active TV channels.

These tables stand in for a live broadcast-station lookup. They are a
starting point only; engineers toggle channels after an on-site scan.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple


# Channels assumed active when nothing better is known about a location.
DEFAULT_ACTIVE_CHANNELS: Tuple[int, ...] = (24, 28, 32)


@dataclass(frozen=True)
class Market:
    name: str
    lat: float
    lon: float
    channels: Tuple[int, ...]


@dataclass(frozen=True)
class Venue:
    venue_id: str
    name: str
    city: str
    state: str
    zip_code: str
    lat: float
    lon: float
    capacity: int
    known_issues: Tuple[str, ...] = ()
    recommended_bands: Tuple[str, ...] = ()
    active_channels: Tuple[int, ...] = DEFAULT_ACTIVE_CHANNELS


MARKETS: List[Market] = [
    Market("New York", 40.7128, -74.0060, (14, 17, 20, 21, 24, 25, 28, 31, 33, 35)),
    Market("Los Angeles", 34.0522, -118.2437, (14, 18, 22, 24, 28, 30, 34, 36)),
    Market("Chicago", 41.8781, -87.6298, (14, 19, 20, 26, 29, 32, 35)),
    Market("Nashville", 36.1627, -86.7816, (14, 17, 25, 28, 30, 32)),
    Market("Atlanta", 33.7490, -84.3880, (14, 20, 25, 29, 32, 34)),
    Market("Dallas", 32.7767, -96.7970, (14, 19, 21, 27, 29, 33)),
    Market("Denver", 39.7392, -104.9903, (14, 17, 20, 24, 31, 35)),
    Market("San Francisco", 37.7749, -122.4194, (14, 19, 24, 27, 32, 36)),
    Market("Boston", 42.3601, -71.0589, (14, 20, 25, 30, 34)),
    Market("Phoenix", 33.4484, -112.0740, (14, 17, 21, 26, 33)),
    Market("Austin", 30.2672, -97.7431, (14, 18, 24, 28, 33)),
    Market("Seattle", 47.6062, -122.3321, (14, 20, 22, 27, 31)),
]

_NYC_VENUE_CHANNELS = (20, 21, 25, 28, 31, 33)

VENUES: Dict[str, Venue] = {
    v.venue_id: v
    for v in [
        Venue(
            "ryman", "Ryman Auditorium", "Nashville", "TN", "37219",
            36.1612, -86.7783, 2362,
            known_issues=("Heavy TV activity on Ch 28-32",),
            recommended_bands=("470-530", "566-590"),
            active_channels=(28, 29, 30, 31, 32),
        ),
        Venue(
            "redrocks", "Red Rocks Amphitheatre", "Morrison", "CO", "80465",
            39.6654, -105.2057, 9525,
            known_issues=("Mountain reflections can cause multipath",),
            recommended_bands=("500-560",),
        ),
        Venue(
            "msg", "Madison Square Garden", "New York", "NY", "10001",
            40.7505, -73.9934, 20789,
            known_issues=("Extremely congested RF environment", "Many TV stations"),
            recommended_bands=("470-500", "580-608"),
            active_channels=_NYC_VENUE_CHANNELS,
        ),
        Venue(
            "greek", "The Greek Theatre", "Los Angeles", "CA", "90027",
            34.1125, -118.2969, 5870,
            known_issues=("LA market very congested",),
            recommended_bands=("500-540",),
            active_channels=(22, 24, 28, 30, 34),
        ),
        Venue(
            "acl", "ACL Live at The Moody Theater", "Austin", "TX", "78701",
            30.2651, -97.7471, 2750,
            recommended_bands=("470-560", "566-608"),
        ),
        Venue(
            "fillmore", "The Fillmore", "San Francisco", "CA", "94115",
            37.7840, -122.4334, 1315,
            known_issues=("Bay Area TV congestion",),
            recommended_bands=("520-580",),
        ),
        Venue(
            "gorge", "The Gorge Amphitheatre", "George", "WA", "98848",
            47.1014, -119.9967, 27500,
            known_issues=("Remote location - cleaner spectrum",),
            recommended_bands=("470-608",),
        ),
        Venue(
            "bonnaroo", "Bonnaroo (Great Stage Park)", "Manchester", "TN", "37355",
            35.4792, -86.0658, 80000,
            known_issues=("Festival RF coordination required", "Multiple stages"),
            recommended_bands=("Coordinate with festival RF team",),
        ),
        Venue(
            "house-of-blues-chicago", "House of Blues Chicago", "Chicago", "IL", "60654",
            41.8925, -87.6262, 1500,
            known_issues=("Chicago TV market congested",),
            recommended_bands=("470-510", "560-600"),
        ),
        Venue(
            "brooklyn-steel", "Brooklyn Steel", "Brooklyn", "NY", "11211",
            40.7197, -73.9501, 1800,
            known_issues=("NYC market very congested",),
            recommended_bands=("470-500", "580-608"),
            active_channels=_NYC_VENUE_CHANNELS,
        ),
    ]
}


def haversine_km(lat1_deg: float, lon1_deg: float, lat2_deg: float, lon2_deg: float) -> float:
    """Great-circle distance between two points in kilometres."""
    r_earth_km = 6371.0
    lat1 = math.radians(lat1_deg)
    lat2 = math.radians(lat2_deg)
    dlat = lat2 - lat1
    dlon = math.radians(lon2_deg - lon1_deg)
    a = math.sin(dlat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    c = 2.0 * math.atan2(math.sqrt(a), math.sqrt(1.0 - a))
    return r_earth_km * c


def nearest_market(lat: float, lon: float) -> Market:
    """Closest market by great-circle distance (first one wins on ties)."""
    return min(MARKETS, key=lambda m: haversine_km(lat, lon, m.lat, m.lon))


def find_market(name: str) -> Market:
    for m in MARKETS:
        if m.name.lower() == name.lower():
            return m
    raise KeyError(f"Unknown market '{name}'")


def find_venue(venue_id: str) -> Venue:
    try:
        return VENUES[venue_id]
    except KeyError:
        raise KeyError(f"Unknown venue '{venue_id}'") from None


def channels_for_location(lat: float, lon: float) -> List[int]:
    return list(nearest_market(lat, lon).channels)
