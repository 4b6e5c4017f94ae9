# src/wireless_coord/cli.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config_models import load_config
from .planner import Planner
from .outputs import (
    write_frequency_list,
    write_wwb_frequency_list,
    write_wsm_xml,
    write_full_report_csv,
    write_detailed_report,
    write_diagnostics,
    write_im_ledger,
    write_run_metadata,
)
from .plotting import plot_spectrum


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(
        description="UHF wireless microphone / IEM frequency coordinator"
    )
    parser.add_argument("config", type=str, help="Path to YAML/JSON request file")
    parser.add_argument(
        "--out-dir",
        type=str,
        default="wireless_coord_out",
        help="Output directory",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Disable spectrum plot generation",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    request = load_config(args.config)
    result = Planner(request).run()

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    venue = result.venue
    venue_name = venue.name if venue is not None else None
    venue_location = f"{venue.city}, {venue.state}" if venue is not None else None

    write_wwb_frequency_list(out_dir / "wwb_frequencies.txt", result.frequencies, venue_name)
    write_frequency_list(out_dir / "frequencies.txt", result.frequencies)
    write_wsm_xml(out_dir / "wsm_frequencies.xml", result.frequencies)
    write_full_report_csv(out_dir / "coordination_report.csv", result.frequencies)
    write_detailed_report(
        out_dir / "coordination_report.txt",
        result.frequencies,
        result.active_channels,
        result.analysis,
        venue_name=venue_name,
        venue_location=venue_location,
        bands=[("Mic band", request.mic_band), ("IEM band", request.iem_band)],
    )
    write_diagnostics(out_dir / "diagnostics.jsonl", result.analysis)
    write_im_ledger(out_dir / "im_products.jsonl", result.frequencies, request)

    if not args.no_plots:
        plot_spectrum(
            result.frequencies,
            result.active_channels,
            result.analysis.im_products,
            band=request.settings.coordination_band,
            out_path=out_dir / "spectrum.png",
        )

    # Run metadata
    write_run_metadata(out_dir / "run_metadata.json", result)


if __name__ == "__main__":
    main()
