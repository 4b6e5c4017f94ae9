# src/wireless_coord/channels.py
from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from .config_models import Range, TVChannel, MHz


FIRST_UHF_CHANNEL = 14
LAST_UHF_CHANNEL = 36
CHANNEL_WIDTH_MHZ = 6.0
_CHANNEL_14_START_MHZ = 470.0


def channel_range(number: int) -> Optional[Range]:
    """
    Frequency block of a US UHF TV channel, or None outside 14-36.

    Channel 14 starts at 470 MHz; every channel is 6 MHz wide.
    """
    if number < FIRST_UHF_CHANNEL or number > LAST_UHF_CHANNEL:
        return None
    start = _CHANNEL_14_START_MHZ + (number - FIRST_UHF_CHANNEL) * CHANNEL_WIDTH_MHZ
    return Range(start=start, stop=start + CHANNEL_WIDTH_MHZ)


def _build_table() -> Dict[int, TVChannel]:
    table: Dict[int, TVChannel] = {}
    for number in range(FIRST_UHF_CHANNEL, LAST_UHF_CHANNEL + 1):
        r = channel_range(number)
        table[number] = TVChannel(number=number, min=r.start, max=r.stop)
    return table


US_UHF_TV_CHANNELS: Mapping[int, TVChannel] = _build_table()


def normalize_active_channels(channels: Optional[Iterable[int]]) -> List[int]:
    """Sorted, deduplicated channel numbers."""
    if channels is None:
        return []
    return sorted({int(ch) for ch in channels})


def is_in_channel(
    freq: MHz,
    active_channels: Iterable[int],
    table: Mapping[int, TVChannel] = US_UHF_TV_CHANNELS,
    guard_band: MHz = 0.0,
) -> Optional[TVChannel]:
    """
    Return the active channel whose block contains freq, if any.

    Channels are tested in ascending numeric order and edges are inclusive.
    Numbers missing from the table are ignored.

    The engine tests raw channel edges (guard_band=0). A positive guard_band
    widens each block to [min - g, max + g]; with adjacent active channels
    the widened blocks overlap and the lower channel wins.
    """
    for number in normalize_active_channels(active_channels):
        ch = table.get(number)
        if ch is None:
            continue
        if ch.min - guard_band <= freq <= ch.max + guard_band:
            return ch
    return None


def free_segments(
    band: Range,
    active_channels: Iterable[int],
    table: Mapping[int, TVChannel] = US_UHF_TV_CHANNELS,
) -> List[Range]:
    """
    Parts of band not covered by any active channel, in ascending order.
    """
    segments: List[Range] = []
    cursor = band.start
    for number in normalize_active_channels(active_channels):
        ch = table.get(number)
        if ch is None:
            continue
        overlap = ch.range.intersect(band)
        if overlap is None:
            continue
        if overlap.start > cursor:
            segments.append(Range(cursor, overlap.start))
        cursor = max(cursor, overlap.stop)
    if cursor < band.stop:
        segments.append(Range(cursor, band.stop))
    return segments
