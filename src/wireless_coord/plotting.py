# src/wireless_coord/plotting.py
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt

from .config_models import Frequency, Range, UHF_BAND
from .channels import US_UHF_TV_CHANNELS, normalize_active_channels


def plot_spectrum(
    frequencies: Sequence[Frequency],
    active_channels: Sequence[int],
    im_products: Sequence[float] = (),
    band: Range = UHF_BAND,
    out_path: Optional[str | Path] = None,
) -> None:
    """
    Spectrum overview: active TV channels shaded, IM products as thin
    vertical lines, mics and IEMs as stems.
    """
    fig, ax = plt.subplots(figsize=(12, 4))

    for i, number in enumerate(normalize_active_channels(active_channels)):
        ch = US_UHF_TV_CHANNELS.get(number)
        if ch is None:
            continue
        ax.axvspan(
            ch.min,
            ch.max,
            color="tab:red",
            alpha=0.15,
            label="active TV channels" if i == 0 else "_tv",
        )

    products = np.asarray(im_products, dtype=float)
    if products.size:
        ax.vlines(
            products,
            0.0,
            0.4,
            colors="goldenrod",
            linewidth=0.6,
            alpha=0.7,
            label="IM products",
        )

    for kind, color, label in (("mic", "tab:blue", "mic"), ("iem", "tab:purple", "IEM")):
        vals = np.asarray([f.value for f in frequencies if f.kind == kind], dtype=float)
        if vals.size:
            ax.vlines(vals, 0.0, 1.0, colors=color, linewidth=1.5, label=label)

    ax.set_xlim(band.start, band.stop)
    ax.set_ylim(0.0, 1.1)
    ax.set_yticks([])
    ax.set_xlabel("Frequency (MHz)")
    ax.set_title("UHF Coordination")
    ax.legend(loc="upper right")
    ax.grid(True, axis="x")
    if out_path:
        out_path = Path(out_path)
        fig.savefig(out_path, dpi=150, bbox_inches="tight")
        plt.close(fig)
    else:
        plt.show()
