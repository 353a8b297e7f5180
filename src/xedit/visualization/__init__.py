from .plot import PlotAlignmentConfig, plot_alignment

__all__ = [
    "plot_alignment",
    "PlotAlignmentConfig",
]
