# src/wireless_coord/outputs.py
from __future__ import annotations

import csv
import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config_models import CoordinationRequest, Frequency, Range
from .channels import channel_range, free_segments
from .analyzer import AnalysisResult
from .intermod import im_product_table
from .planner import PlannerResult


def _timestamp(generated: Optional[datetime]) -> str:
    return (generated or datetime.now(timezone.utc)).isoformat()


def _default_name(freq: Frequency, index: int) -> str:
    return freq.label or f"{'Mic' if freq.kind == 'mic' else 'IEM'} {index + 1}"


def format_frequency_list(frequencies: Sequence[Frequency]) -> str:
    """Space-separated MHz values, for quick manual entry."""
    return " ".join(f"{f.value:.3f}" for f in frequencies)


def write_frequency_list(path: str | Path, frequencies: Sequence[Frequency]) -> None:
    Path(path).write_text(format_frequency_list(frequencies))


def write_wwb_frequency_list(
    path: str | Path,
    frequencies: Sequence[Frequency],
    venue_name: Optional[str] = None,
    generated: Optional[datetime] = None,
) -> None:
    """
    Wireless Workbench frequency list: a '//' comment header followed by one
    MHz value per line.
    """
    lines = [
        "// Frequency export for Wireless Workbench",
        f"// Venue: {venue_name or 'Unknown'}",
        f"// Generated: {_timestamp(generated)}",
        "// Import via: Coordination > Frequency List > Import",
        "",
    ]
    lines.extend(f"{f.value:.3f}" for f in frequencies)
    Path(path).write_text("\n".join(lines) + "\n")


def write_wsm_xml(path: str | Path, frequencies: Sequence[Frequency]) -> None:
    """Sennheiser WSM frequency list; values in whole kHz."""
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<FrequencyList>"]
    lines.extend(
        f'  <Frequency value="{f.value * 1000:.0f}" unit="kHz" />' for f in frequencies
    )
    lines.append("</FrequencyList>")
    Path(path).write_text("\n".join(lines) + "\n")


def write_full_report_csv(path: str | Path, frequencies: Sequence[Frequency]) -> None:
    """CSV: Name, Type, Frequency (MHz), Status."""
    path = Path(path)
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["Name", "Type", "Frequency (MHz)", "Status"])
        for idx, freq in enumerate(frequencies):
            writer.writerow(
                [_default_name(freq, idx), freq.kind, f"{freq.value:.3f}", freq.origin]
            )


def write_detailed_report(
    path: str | Path,
    frequencies: Sequence[Frequency],
    active_channels: Sequence[int],
    analysis: AnalysisResult,
    venue_name: Optional[str] = None,
    venue_location: Optional[str] = None,
    generated: Optional[datetime] = None,
    bands: Optional[Sequence[Tuple[str, Range]]] = None,
) -> None:
    """
    Human-readable coordination report: active channels, free spectrum per
    named band (when bands are given), frequencies grouped by kind, and
    diagnostic counts with their messages.
    """
    lines: List[str] = [
        "COORDINATION REPORT",
        "===================",
        "",
        f"Generated: {_timestamp(generated)}",
        f"Venue: {venue_name or 'Manual Location'}",
        f"Location: {venue_location or 'Unknown'}",
        "",
        "ACTIVE TV CHANNELS",
        "------------------",
    ]
    for ch in active_channels:
        r = channel_range(ch)
        if r is not None:
            lines.append(f"Ch {ch}: {r.start:g}-{r.stop:g} MHz")

    if bands:
        lines += ["", "FREE SPECTRUM", "-------------"]
        for name, band in bands:
            segments = free_segments(band, active_channels)
            lines.append(f"{name} ({band.start:g}-{band.stop:g} MHz):")
            if not segments:
                lines.append("  none")
            for seg in segments:
                lines.append(f"  {seg.start:g}-{seg.stop:g} MHz ({seg.width:g} MHz)")

    lines += ["", "COORDINATED FREQUENCIES", "-----------------------", ""]
    for kind, title in (("mic", "WIRELESS MICROPHONES:"), ("iem", "IN-EAR MONITORS:")):
        lines.append(title)
        of_kind = [f for f in frequencies if f.kind == kind]
        for i, f in enumerate(of_kind):
            lines.append(f"  {i + 1}. {_default_name(f, i)}: {f.value:.3f} MHz")
        lines.append("")

    lines += [
        "ANALYSIS",
        "--------",
        f"Issues: {len(analysis.issues)}",
        f"Warnings: {len(analysis.warnings)}",
        f"IM Products Calculated: {len(analysis.im_products)}",
    ]
    for d in analysis.issues + analysis.warnings:
        lines.append(f"  [{d.severity}] {d.message}")

    lines += [
        "",
        "NOTES",
        "-----",
        "- Always verify with RF scan at venue",
        "- TV channels may vary - check local broadcasts",
        "- Keep 4+ MHz separation between mics and IEMs",
    ]
    Path(path).write_text("\n".join(lines) + "\n")


def write_diagnostics(path: str | Path, analysis: AnalysisResult) -> None:
    """JSONL: one record per diagnostic, issues first, in analysis order."""
    path = Path(path)
    with path.open("w") as f:
        for d in analysis.issues + analysis.warnings:
            f.write(json.dumps(asdict(d)) + "\n")


def write_im_ledger(
    path: str | Path,
    frequencies: Sequence[Frequency],
    request: CoordinationRequest,
) -> None:
    """JSONL: every in-band IM product with the carrier pair behind it."""
    path = Path(path)
    with path.open("w") as f:
        for row in im_product_table(frequencies, band=request.settings.coordination_band):
            f.write(json.dumps(asdict(row)) + "\n")


def write_run_metadata(path: str | Path, result: PlannerResult) -> None:
    """
    Small JSON header for the run: settings, bands, counts.
    """
    req = result.request
    s = req.settings
    metadata = {
        "description": req.description,
        "venue": result.venue.venue_id if result.venue is not None else None,
        "active_channels": result.active_channels,
        "requested": {"mic": req.mic_count, "iem": req.iem_count},
        "coordinated": {
            "mic": sum(1 for f in result.frequencies if f.kind == "mic"),
            "iem": sum(1 for f in result.frequencies if f.kind == "iem"),
            "manual": sum(1 for f in result.frequencies if f.origin == "manual"),
        },
        "shortfall": result.shortfall,
        "mic_band": {"start": req.mic_band.start, "stop": req.mic_band.stop},
        "iem_band": {"start": req.iem_band.start, "stop": req.iem_band.stop},
        "settings": {
            "min_spacing_mic": s.min_spacing_mic,
            "min_spacing_iem": s.min_spacing_iem,
            "min_spacing_mic_to_iem": s.min_spacing_mic_to_iem,
            "tv_guard_band": s.tv_guard_band,
            "step_size": s.step_size,
            "im_safety_margin": s.im_safety_margin,
            "band_edge_margin": s.band_edge_margin,
            "coordination_band": {
                "start": s.coordination_band.start,
                "stop": s.coordination_band.stop,
            },
        },
        "analysis": {
            "issues": len(result.analysis.issues),
            "warnings": len(result.analysis.warnings),
            "im_products": len(result.analysis.im_products),
        },
        "modelling_notes": {
            "im_orders": [3, 5],
            "guard_band_applied_in_containment": False,
            "mic_iem_separation_by_sub_band": True,
        },
    }
    Path(path).write_text(json.dumps(metadata, indent=2))
