# src/wireless_coord/config_models.py
from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import List, Optional, Tuple, Literal, Union

import yaml


MHz = float

FrequencyKind = Literal["mic", "iem"]
FrequencyOrigin = Literal["calculated", "manual"]

FREQUENCY_KINDS: Tuple[str, ...] = ("mic", "iem")
FREQUENCY_ORIGINS: Tuple[str, ...] = ("calculated", "manual")


class CoordinationError(Exception):
    """Base class for coordination engine errors."""


class ConfigurationError(CoordinationError, ValueError):
    """Numeric configuration that would make the engine misbehave."""


class SearchIterationLimitError(CoordinationError, RuntimeError):
    """The greedy search exceeded its hard iteration ceiling."""


@dataclass(frozen=True)
class Range:
    """Closed interval [start, stop] in MHz."""
    start: MHz
    stop: MHz

    def contains(self, f: MHz) -> bool:
        return self.start <= f <= self.stop

    def intersect(self, other: "Range") -> Optional["Range"]:
        lo = max(self.start, other.start)
        hi = min(self.stop, other.stop)
        if lo <= hi:
            return Range(lo, hi)
        return None

    @property
    def width(self) -> float:
        return self.stop - self.start


# Full US UHF coordination band (TV channels 14-36).
UHF_BAND = Range(start=470.0, stop=608.0)


@dataclass
class Frequency:
    """
    One wireless channel assignment.

    value is in MHz. origin is "calculated" for search results and "manual"
    once a user has edited the value by hand.

    Calculated values keep the raw float accumulation of the scan step
    (e.g. 471.59999999999945 rather than 471.6); they are only rounded for
    display ("%.3f"). Compare them with a tolerance or through
    intermod.round_mhz, never with ==.
    """
    value: MHz
    kind: FrequencyKind = "mic"
    label: Optional[str] = None
    origin: FrequencyOrigin = "calculated"

    def with_value(self, value: MHz, band: Range = UHF_BAND) -> "Frequency":
        """
        Return an edited copy with a new value, marked as manual.

        Values outside the coordination band are rejected here (editing
        layer), never inside the engine.
        """
        if not band.contains(value):
            raise ValueError(
                f"{value:.3f} MHz is outside {band.start:.3f}-{band.stop:.3f} MHz"
            )
        return replace(self, value=value, origin="manual")

    def with_label(self, label: Optional[str]) -> "Frequency":
        return replace(self, label=label)


@dataclass(frozen=True)
class TVChannel:
    """A broadcast TV channel occupying the closed block [min, max] MHz."""
    number: int
    min: MHz
    max: MHz

    @property
    def range(self) -> Range:
        return Range(self.min, self.max)


@dataclass(frozen=True)
class CoordinationSettings:
    """
    Numeric constants threaded into every engine call.

    min_spacing_mic_to_iem is not checked directly: callers keep mic and IEM
    searches in disjoint sub-bands at least this far apart.
    """
    min_spacing_mic: MHz = 0.250
    min_spacing_iem: MHz = 0.350
    min_spacing_mic_to_iem: MHz = 4.0
    tv_guard_band: MHz = 0.5
    step_size: MHz = 0.025
    im_safety_margin: MHz = 0.250
    # scan starts at band_min + margin and stops before band_max - margin
    band_edge_margin: MHz = 0.5
    coordination_band: Range = field(default_factory=lambda: Range(UHF_BAND.start, UHF_BAND.stop))
    max_scan_iterations: int = 1_000_000

    def spacing_for(self, kind: str) -> MHz:
        return self.min_spacing_iem if kind == "iem" else self.min_spacing_mic

    def pair_spacing(self, kind_a: str, kind_b: str) -> MHz:
        """IEM spacing applies if either side is an IEM."""
        if kind_a == "iem" or kind_b == "iem":
            return self.min_spacing_iem
        return self.min_spacing_mic

    def validate(self) -> None:
        if not self.step_size > 0:
            raise ConfigurationError(f"step_size must be positive, got {self.step_size}")
        for name in (
            "min_spacing_mic",
            "min_spacing_iem",
            "min_spacing_mic_to_iem",
            "tv_guard_band",
            "im_safety_margin",
            "band_edge_margin",
        ):
            value = getattr(self, name)
            if not value >= 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")
        if self.coordination_band.width < 0:
            raise ConfigurationError(
                "coordination_band start must not exceed stop "
                f"({self.coordination_band.start} > {self.coordination_band.stop})"
            )
        if self.max_scan_iterations <= 0:
            raise ConfigurationError(
                f"max_scan_iterations must be positive, got {self.max_scan_iterations}"
            )


DEFAULT_SETTINGS = CoordinationSettings()


@dataclass
class CoordinationRequest:
    """
    Top-level configuration object for a coordination run.

    Active channels resolve in priority order: explicit list, venue preset,
    named market, then nearest market to location.
    """
    mic_count: int = 0
    iem_count: int = 0
    active_channels: Optional[List[int]] = None
    mic_band: Range = field(default_factory=lambda: Range(470.0, 550.0))
    iem_band: Range = field(default_factory=lambda: Range(560.0, 608.0))
    settings: CoordinationSettings = field(default_factory=CoordinationSettings)
    manual_frequencies: List[Frequency] = field(default_factory=list)
    venue: Optional[str] = None
    market: Optional[str] = None
    location: Optional[Tuple[float, float]] = None  # (lat, lon)

    # Metadata / description
    description: Optional[str] = None


def _load_yaml_or_json(path: Path) -> dict:
    text = path.read_text()
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    else:
        return json.loads(text)


def load_config(path: Union[str, Path]) -> CoordinationRequest:
    """
    Load a CoordinationRequest from a JSON or YAML file.
    """
    path = Path(path)
    raw = _load_yaml_or_json(path) or {}

    def r_rng(d) -> Range:
        return Range(start=float(d["start"]), stop=float(d["stop"]))

    def r_num(d, key, default, cast=float):
        if key not in d:
            return default
        try:
            return cast(d[key])
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"settings.{key} must be a number, got {d[key]!r}"
            ) from None

    def r_settings(d) -> CoordinationSettings:
        defaults = DEFAULT_SETTINGS
        band = d.get("coordination_band")
        settings = CoordinationSettings(
            min_spacing_mic=r_num(d, "min_spacing_mic", defaults.min_spacing_mic),
            min_spacing_iem=r_num(d, "min_spacing_iem", defaults.min_spacing_iem),
            min_spacing_mic_to_iem=r_num(d, "min_spacing_mic_to_iem", defaults.min_spacing_mic_to_iem),
            tv_guard_band=r_num(d, "tv_guard_band", defaults.tv_guard_band),
            step_size=r_num(d, "step_size", defaults.step_size),
            im_safety_margin=r_num(d, "im_safety_margin", defaults.im_safety_margin),
            band_edge_margin=r_num(d, "band_edge_margin", defaults.band_edge_margin),
            coordination_band=r_rng(band) if band is not None else defaults.coordination_band,
            max_scan_iterations=r_num(d, "max_scan_iterations", defaults.max_scan_iterations, int),
        )
        settings.validate()
        return settings

    def r_frequency(d) -> Frequency:
        kind = d.get("kind", "mic")
        if kind not in FREQUENCY_KINDS:
            raise ConfigurationError(f"Unknown frequency kind '{kind}'")
        origin = d.get("origin", "manual")
        if origin not in FREQUENCY_ORIGINS:
            raise ConfigurationError(f"Unknown frequency origin '{origin}'")
        return Frequency(
            value=float(d["value"]),
            kind=kind,
            label=d.get("label"),
            origin=origin,
        )

    def r_location(d) -> Optional[Tuple[float, float]]:
        if d is None:
            return None
        return (float(d["lat"]), float(d["lon"]))

    defaults = CoordinationRequest()
    mic_band = raw.get("mic_band")
    iem_band = raw.get("iem_band")
    active = raw.get("active_channels")

    return CoordinationRequest(
        mic_count=int(raw.get("mic_count", 0)),
        iem_count=int(raw.get("iem_count", 0)),
        active_channels=[int(ch) for ch in active] if active is not None else None,
        mic_band=r_rng(mic_band) if mic_band is not None else defaults.mic_band,
        iem_band=r_rng(iem_band) if iem_band is not None else defaults.iem_band,
        settings=r_settings(raw.get("settings") or {}),
        manual_frequencies=[r_frequency(f) for f in raw.get("manual_frequencies") or []],
        venue=raw.get("venue"),
        market=raw.get("market"),
        location=r_location(raw.get("location")),
        description=raw.get("description"),
    )
