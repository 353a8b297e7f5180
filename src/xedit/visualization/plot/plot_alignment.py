from dataclasses import dataclass, field

import matplotlib.pyplot as plt
import numpy as np

from xedit.core._base_config import BaseConfig
from xedit.core.config import COORDS, DIMS
from xedit.core.spectrum import Spectrum


@dataclass
class PlotAlignmentConfig(BaseConfig):
    """Configuration for the sub-spectrum alignment quality-control plot."""

    # --- Figure & Canvas ---
    fig_size: tuple[float, float] = field(
        default=(8, 4.5),
        metadata={
            "group": "Figure & Canvas",
            "description": "Dimensions of the figure (width, height).",
        },
    )
    style: str = field(
        default="seaborn-v0_8-white",
        metadata={"group": "Figure & Canvas", "description": "Matplotlib style sheet."},
    )
    font_family: str = field(
        default="sans-serif",
        metadata={
            "group": "Figure & Canvas",
            "description": "Font family used for all plot text.",
        },
    )

    # --- Traces ---
    cmap_name: str = field(
        default="viridis",
        metadata={
            "group": "Traces",
            "description": "Colormap sampled once per sub-spectrum.",
        },
    )
    line_width: float = field(
        default=1.0,
        metadata={"group": "Traces", "description": "Line width of each trace."},
    )
    offset_step: float = field(
        default=0.0,
        metadata={
            "group": "Traces",
            "description": "Vertical shift between consecutive sub-spectra, as a "
            "fraction of the largest peak. 0 overlays them.",
        },
    )

    # --- Diagnostic Window ---
    shade_window: bool = field(
        default=True,
        metadata={
            "group": "Diagnostic Window",
            "description": "Shade the ppm window used by the alignment objective.",
        },
    )
    window: tuple[float, float] = field(
        default=(1.95, 4.0),
        metadata={
            "group": "Diagnostic Window",
            "description": "ppm interval to shade.",
        },
    )
    window_color: str = field(
        default="#d9d9d9",
        metadata={"group": "Diagnostic Window", "description": "Shading color."},
    )
    show_corrections: bool = field(
        default=True,
        metadata={
            "group": "Diagnostic Window",
            "description": "Append the applied frequency/phase correction to each "
            "legend entry when the spectrum carries them.",
        },
    )


def plot_alignment(
    spectrum: Spectrum,
    ppm_range: tuple[float, float] | None = (0.5, 4.5),
    ax: plt.Axes | None = None,
    config: PlotAlignmentConfig | None = None,
) -> plt.Axes:
    """
    Overlay the real part of every sub-spectrum for visual alignment QC.

    Parameters
    ----------
    spectrum : Spectrum
        Packed or single acquisition, typically the output of
        :func:`~xedit.alignment.align_subspectra`.
    ppm_range : tuple of float, optional
        Displayed chemical-shift interval. None shows the full axis.
    ax : plt.Axes, optional
        Target axes. A new figure is created when omitted.
    config : PlotAlignmentConfig, optional
        Aesthetic settings.

    Returns
    -------
    plt.Axes
        The axes with one line per sub-spectrum, ppm decreasing left to right.
    """
    cfg = config or PlotAlignmentConfig()

    specs = spectrum.specs
    if DIMS.subspectrum not in specs.dims:
        specs = specs.expand_dims(DIMS.subspectrum)
    specs = specs.transpose(DIMS.subspectrum, DIMS.frequency)

    ppm = spectrum.ppm
    keep = np.ones_like(ppm, dtype=bool)
    if ppm_range is not None:
        keep = (ppm >= min(ppm_range)) & (ppm <= max(ppm_range))
    values = np.real(specs.values)[:, keep]
    x_vals = ppm[keep]

    n_sub = values.shape[0]
    labels = (
        [str(v) for v in specs.coords[DIMS.subspectrum].values]
        if DIMS.subspectrum in specs.coords
        else [str(i) for i in range(n_sub)]
    )
    has_corrections = COORDS.frequency_shift in specs.coords and COORDS.phase_shift in specs.coords
    step = cfg.offset_step * (np.abs(values).max() if values.size else 0.0)

    custom_rc = {"font.family": cfg.font_family, "axes.linewidth": 1.0}
    with plt.style.context(cfg.style), plt.rc_context(custom_rc):
        if ax is None:
            _, ax = plt.subplots(figsize=cfg.fig_size)

        colors = plt.colormaps[cfg.cmap_name](np.linspace(0.0, 0.85, n_sub))

        if cfg.shade_window:
            ax.axvspan(*cfg.window, color=cfg.window_color, alpha=0.5, lw=0, zorder=0)

        for i in range(n_sub):
            label = labels[i]
            if cfg.show_corrections and has_corrections:
                f = float(np.atleast_1d(specs.coords[COORDS.frequency_shift].values)[i])
                p = float(np.atleast_1d(specs.coords[COORDS.phase_shift].values)[i])
                label = f"{label} ({f:+.2f} Hz, {p:+.1f}°)"
            ax.plot(
                x_vals,
                values[i] + i * step,
                color=colors[i],
                linewidth=cfg.line_width,
                label=label,
                zorder=i + 1,
            )

        ax.set_xlabel(f"{COORDS.chemical_shift.long_name} [{COORDS.chemical_shift.unit}]")
        ax.set_ylabel("Real part [a.u.]")
        ax.invert_xaxis()
        ax.legend(frameon=False, fontsize="small")

    return ax
