from .plot_alignment import PlotAlignmentConfig, plot_alignment

__all__ = [
    "PlotAlignmentConfig",
    "plot_alignment",
]
