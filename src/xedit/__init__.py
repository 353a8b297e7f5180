import logging

# 0. Expose the submodules for documentation traversal
from . import alignment, processing, simulation  # noqa: I001

# 1. Configuration (The Central Nervous System)
from .core import ATTRS, COORDS, DIMS, Spectrum, accessor

# 2. Accessor (Importing this automatically registers the .xed namespace)
from .core.accessor import XeditAccessor

# 3. Errors and editing schemes
from .core.modes import CorrectionStep, EditingMode
from .core.validation import (
    AlignmentConvergenceWarning,
    AlignmentPreconditionError,
    AxisMismatchError,
)

# 4. Core Processing
from .processing.correction import apply_correction, scale_amplitude, shift_and_phase
from .processing.fourier import fft, fftshift, ifft, ifftshift, to_fid, to_spectrum
from .processing.subspectra import combine_subspectra, merge_subspectra, take_subspectrum

# 5. Alignment
from .alignment import (
    AlignmentConfig,
    AlignmentResult,
    Correction,
    align_pair,
    align_subspectra,
    align_subspectra_results,
    alignment_objective,
    frequency_mask,
)

# 6. Simulation
from .simulation import simulate_fid, simulate_spectrum

# 7. Visualisation
from .visualization.plot import PlotAlignmentConfig, plot_alignment

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Explicitly define the public API.
__all__ = [
    # --- Submodules ---
    "accessor",
    "alignment",
    "processing",
    "simulation",
    # --- Flat API (For the users) ---
    # Config
    "ATTRS",
    "COORDS",
    "DIMS",
    # Data model
    "Spectrum",
    "EditingMode",
    "CorrectionStep",
    # Accessor
    "XeditAccessor",
    # Errors
    "AlignmentPreconditionError",
    "AxisMismatchError",
    "AlignmentConvergenceWarning",
    # Fourier Transforms
    "fft",
    "fftshift",
    "ifft",
    "ifftshift",
    "to_fid",
    "to_spectrum",
    # Corrections
    "apply_correction",
    "shift_and_phase",
    "scale_amplitude",
    # Sub-spectra
    "take_subspectrum",
    "merge_subspectra",
    "combine_subspectra",
    # Alignment
    "AlignmentConfig",
    "AlignmentResult",
    "Correction",
    "align_pair",
    "align_subspectra",
    "align_subspectra_results",
    "alignment_objective",
    "frequency_mask",
    # Simulation
    "simulate_fid",
    "simulate_spectrum",
    # Visualization
    "plot_alignment",
    "PlotAlignmentConfig",
]
