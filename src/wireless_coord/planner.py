# src/wireless_coord/planner.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import logging

from .config_models import CoordinationRequest, Frequency
from .channels import normalize_active_channels
from .markets import (
    DEFAULT_ACTIVE_CHANNELS,
    Venue,
    channels_for_location,
    find_market,
    find_venue,
)
from .search import coordinate
from .analyzer import analyze, AnalysisResult

logger = logging.getLogger(__name__)


@dataclass
class PlannerResult:
    request: CoordinationRequest
    active_channels: List[int]
    frequencies: List[Frequency]
    analysis: AnalysisResult
    venue: Optional[Venue] = None
    # kind -> number of requested frequencies that could not be placed
    shortfall: Dict[str, int] = field(default_factory=dict)


class Planner:
    """
    High-level coordination run: resolve channels, search, then validate.
    """

    def __init__(self, request: CoordinationRequest):
        self.request = request
        request.settings.validate()
        self.venue = find_venue(request.venue) if request.venue else None

    def resolve_active_channels(self) -> List[int]:
        req = self.request
        if req.active_channels is not None:
            source = "explicit list"
            channels = req.active_channels
        elif self.venue is not None:
            source = f"venue '{self.venue.name}'"
            channels = self.venue.active_channels
        elif req.market:
            source = f"market '{req.market}'"
            channels = find_market(req.market).channels
        elif req.location is not None:
            source = f"nearest market to {req.location[0]:.4f}, {req.location[1]:.4f}"
            channels = channels_for_location(*req.location)
        else:
            source = "defaults"
            channels = DEFAULT_ACTIVE_CHANNELS

        resolved = normalize_active_channels(channels)
        logger.info("Active TV channels from %s: %s", source, resolved)
        return resolved

    def run(self) -> PlannerResult:
        req = self.request
        channels = self.resolve_active_channels()

        calculated = coordinate(
            req.mic_count,
            req.iem_count,
            channels,
            mic_band=req.mic_band,
            iem_band=req.iem_band,
            existing=req.manual_frequencies,
            settings=req.settings,
        )

        shortfall: Dict[str, int] = {}
        for kind, wanted in (("mic", req.mic_count), ("iem", req.iem_count)):
            got = sum(1 for f in calculated if f.kind == kind)
            if got < wanted:
                shortfall[kind] = wanted - got
                logger.warning(
                    "Only %d of %d %s frequencies could be coordinated; "
                    "widen the band or clear TV channels.",
                    got,
                    wanted,
                    kind,
                )

        frequencies = list(req.manual_frequencies) + calculated
        analysis = analyze(frequencies, channels, req.settings)
        logger.info(
            "Coordinated %d frequencies: %d issues, %d warnings, %d IM products",
            len(frequencies),
            len(analysis.issues),
            len(analysis.warnings),
            len(analysis.im_products),
        )

        return PlannerResult(
            request=req,
            active_channels=channels,
            frequencies=frequencies,
            analysis=analysis,
            venue=self.venue,
            shortfall=shortfall,
        )
