# src/wireless_coord/analyzer.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Sequence

from .config_models import CoordinationSettings, DEFAULT_SETTINGS, Frequency, MHz
from .channels import is_in_channel, normalize_active_channels
from .intermod import get_all_im_products, has_im_conflict


DiagnosticKind = Literal["tv_conflict", "im_conflict", "spacing"]
Severity = Literal["error", "warning"]


@dataclass(frozen=True)
class Diagnostic:
    """
    One finding against a single frequency.

    tv_conflict is always an error; im_conflict and spacing are warnings.
    """
    kind: DiagnosticKind
    frequency: MHz
    message: str
    severity: Severity


@dataclass
class AnalysisResult:
    issues: List[Diagnostic] = field(default_factory=list)
    warnings: List[Diagnostic] = field(default_factory=list)
    im_products: List[MHz] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.issues and not self.warnings

    def diagnostics_for(self, value: MHz) -> List[Diagnostic]:
        """Issues then warnings raised for a given frequency value."""
        return [d for d in self.issues + self.warnings if d.frequency == value]


def analyze(
    frequencies: Sequence[Frequency],
    active_channels: Iterable[int],
    settings: CoordinationSettings = DEFAULT_SETTINGS,
) -> AnalysisResult:
    """
    Validate an arbitrary (possibly hand-edited) frequency set.

    IM products are computed once over the whole input. Each frequency is
    then checked, in input order, for TV occupancy, IM proximity and spacing
    against every other entry. A too-close pair therefore produces two
    spacing warnings, one from each side. Nothing is deduplicated.
    """
    channels = normalize_active_channels(active_channels)
    result = AnalysisResult(
        im_products=get_all_im_products(frequencies, band=settings.coordination_band),
    )

    for idx, freq in enumerate(frequencies):
        tv = is_in_channel(freq.value, channels)
        if tv is not None:
            result.issues.append(
                Diagnostic(
                    kind="tv_conflict",
                    frequency=freq.value,
                    message=f"{freq.value:.3f} MHz conflicts with TV Ch {tv.number}",
                    severity="error",
                )
            )

        if has_im_conflict(freq.value, result.im_products, settings.im_safety_margin):
            result.warnings.append(
                Diagnostic(
                    kind="im_conflict",
                    frequency=freq.value,
                    message=f"{freq.value:.3f} MHz near intermod product",
                    severity="warning",
                )
            )

        for other_idx, other in enumerate(frequencies):
            if other_idx == idx:
                continue
            min_spacing = settings.pair_spacing(freq.kind, other.kind)
            if abs(freq.value - other.value) < min_spacing:
                result.warnings.append(
                    Diagnostic(
                        kind="spacing",
                        frequency=freq.value,
                        message=(
                            f"{freq.value:.3f} MHz too close to {other.value:.3f} MHz"
                        ),
                        severity="warning",
                    )
                )

    return result
