# src/wireless_coord/search.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence
import logging

from .config_models import (
    ConfigurationError,
    CoordinationSettings,
    DEFAULT_SETTINGS,
    Frequency,
    FrequencyKind,
    Range,
    SearchIterationLimitError,
    MHz,
)
from .channels import is_in_channel, normalize_active_channels
from .intermod import get_all_im_products, has_im_conflict

logger = logging.getLogger(__name__)

# Default sub-bands for coordinate()
DEFAULT_MIC_BAND = Range(470.0, 550.0)
DEFAULT_IEM_BAND = Range(560.0, 608.0)


def _check_search_settings(
    kind: str,
    band_min: MHz,
    band_max: MHz,
    settings: CoordinationSettings,
) -> None:
    settings.validate()
    spacing = settings.spacing_for(kind)
    width = band_max - band_min
    if width > 0 and spacing > width:
        raise ConfigurationError(
            f"{kind} spacing {spacing:.3f} MHz exceeds band width "
            f"{width:.3f} MHz ({band_min:.3f}-{band_max:.3f})"
        )


def find_frequencies(
    count: int,
    kind: FrequencyKind,
    existing: Sequence[Frequency],
    active_channels: Iterable[int],
    band_min: MHz = 470.0,
    band_max: MHz = 608.0,
    settings: CoordinationSettings = DEFAULT_SETTINGS,
) -> List[Frequency]:
    """
    Greedy forward scan for up to `count` new frequencies of one kind.

    Starting at band_min + band_edge_margin, each candidate is checked in turn:

      1. inside an active TV channel -> jump to channel max + tv_guard_band
      2. closer than the kind's spacing to an existing or accepted carrier
         -> advance one step
      3. within im_safety_margin of an IM product of
         existing + accepted + candidate (recomputed from scratch each time)
         -> advance one step
      4. otherwise accept, then advance by spacing + step

    The scan stops once `count` carriers are accepted or the candidate
    reaches band_max - band_edge_margin; a short result is not an error.
    Candidates are raw float accumulations with no per-step rounding.
    """
    if count <= 0:
        return []

    _check_search_settings(kind, band_min, band_max, settings)

    channels = normalize_active_channels(active_channels)
    spacing = settings.spacing_for(kind)
    step = settings.step_size
    stop_at = band_max - settings.band_edge_margin

    accepted: List[Frequency] = []
    candidate = band_min + settings.band_edge_margin
    iterations = 0

    while len(accepted) < count and candidate < stop_at:
        iterations += 1
        if iterations > settings.max_scan_iterations:
            raise SearchIterationLimitError(
                f"{kind} search exceeded {settings.max_scan_iterations} iterations "
                f"at {candidate:.3f} MHz ({len(accepted)}/{count} found)"
            )

        tv = is_in_channel(candidate, channels)
        if tv is not None:
            jump = tv.max + settings.tv_guard_band
            # a zero guard band lands on the channel edge itself
            candidate = jump if jump > candidate else candidate + step
            continue

        placed = list(existing) + accepted
        if any(abs(candidate - f.value) < spacing for f in placed):
            candidate += step
            continue

        products = get_all_im_products(
            [f.value for f in placed] + [candidate],
            band=settings.coordination_band,
        )
        if has_im_conflict(candidate, products, settings.im_safety_margin):
            candidate += step
            continue

        accepted.append(Frequency(value=candidate, kind=kind, origin="calculated"))
        logger.debug("Accepted %s at %.3f MHz", kind, candidate)
        candidate += spacing + step

    if len(accepted) < count:
        logger.info(
            "%s search in %.3f-%.3f MHz found %d of %d requested frequencies",
            kind,
            band_min,
            band_max,
            len(accepted),
            count,
        )
    return accepted


def coordinate(
    mic_count: int,
    iem_count: int,
    active_channels: Iterable[int],
    mic_band: Range = DEFAULT_MIC_BAND,
    iem_band: Range = DEFAULT_IEM_BAND,
    existing: Sequence[Frequency] = (),
    settings: CoordinationSettings = DEFAULT_SETTINGS,
) -> List[Frequency]:
    """
    Fresh assignment: mics first, then IEMs avoiding the mic results.

    Mic/IEM separation comes from the two sub-bands being disjoint; the
    caller chooses them at least min_spacing_mic_to_iem apart.
    """
    channels = normalize_active_channels(active_channels)
    gap = iem_band.start - mic_band.stop
    if mic_count > 0 and iem_count > 0 and gap < settings.min_spacing_mic_to_iem:
        logger.warning(
            "Mic band ends %.3f MHz below IEM band start; less than the %.3f MHz "
            "mic-to-IEM separation.",
            gap,
            settings.min_spacing_mic_to_iem,
        )

    mics = find_frequencies(
        mic_count,
        "mic",
        list(existing),
        channels,
        mic_band.start,
        mic_band.stop,
        settings,
    )
    iems = find_frequencies(
        iem_count,
        "iem",
        list(existing) + mics,
        channels,
        iem_band.start,
        iem_band.stop,
        settings,
    )
    return mics + iems


def add_frequency(
    kind: FrequencyKind,
    current: Sequence[Frequency],
    active_channels: Iterable[int],
    band: Range,
    settings: CoordinationSettings = DEFAULT_SETTINGS,
) -> Optional[Frequency]:
    """One more carrier of `kind` that fits alongside `current`, or None."""
    found = find_frequencies(
        1,
        kind,
        current,
        active_channels,
        band.start,
        band.stop,
        settings,
    )
    return found[0] if found else None
