from .config import AlignmentConfig
from .editing import align_subspectra, align_subspectra_results
from .objective import alignment_objective, frequency_mask, normalization_factor
from .pairwise import AlignmentResult, Correction, align_pair

__all__ = [
    "AlignmentConfig",
    "AlignmentResult",
    "Correction",
    "align_pair",
    "align_subspectra",
    "align_subspectra_results",
    "alignment_objective",
    "frequency_mask",
    "normalization_factor",
]
