from .config import ATTRS, COORDS, DIMS
from .spectrum import Spectrum
from .validation import (
    AlignmentConvergenceWarning,
    AlignmentPreconditionError,
    AxisMismatchError,
)

__all__ = [
    "ATTRS",
    "COORDS",
    "DIMS",
    "Spectrum",
    "AlignmentConvergenceWarning",
    "AlignmentPreconditionError",
    "AxisMismatchError",
]
