from dataclasses import dataclass, field

from xedit.core._base_config import BaseConfig


@dataclass(frozen=True)
class AlignmentConfig(BaseConfig):
    """Settings for pairwise L1-norm sub-spectrum alignment."""

    # --- Objective ---
    ppm_range: tuple[float, float] = field(
        default=(1.95, 4.0),
        metadata={
            "group": "Objective",
            "description": "Inclusive chemical-shift window [ppm] over which the "
            "absolute residual is summed (the 2 to 4 ppm metabolite region).",
        },
    )
    normalize: bool = field(
        default=True,
        metadata={
            "group": "Objective",
            "description": "Scale both spectra by the largest real-part magnitude "
            "before optimising. Does not affect the returned corrected target.",
        },
    )

    # --- Solver ---
    x0: tuple[float, float] = field(
        default=(0.0, 0.0),
        metadata={
            "group": "Solver",
            "description": "Initial guess (frequency [Hz], phase [degrees]).",
        },
    )
    method: str = field(
        default="trf",
        metadata={
            "group": "Solver",
            "description": "scipy.optimize.least_squares method. 'lm' is not "
            "accepted because the residual is a single scalar.",
        },
    )
    x_scale: str | tuple[float, float] = field(
        default="jac",
        metadata={
            "group": "Solver",
            "description": "Characteristic parameter scale passed to least_squares.",
        },
    )
    ftol: float = field(
        default=1e-8,
        metadata={"group": "Solver", "description": "Tolerance on the objective change."},
    )
    xtol: float = field(
        default=1e-8,
        metadata={"group": "Solver", "description": "Tolerance on the parameter change."},
    )
    gtol: float = field(
        default=1e-8,
        metadata={"group": "Solver", "description": "Tolerance on the gradient norm."},
    )
    max_nfev: int = field(
        default=1000,
        metadata={
            "group": "Solver",
            "description": "Maximum objective evaluations. Reaching it marks the "
            "result as not converged and emits AlignmentConvergenceWarning.",
        },
    )

    def __post_init__(self):
        low, high = self.ppm_range
        if not low < high:
            raise ValueError(
                f"ppm_range must be (low, high) with low < high, got {self.ppm_range}."
            )
        if len(self.x0) != 2:
            raise ValueError(f"x0 must hold (frequency, phase), got {self.x0}.")
        if self.method == "lm":
            raise ValueError(
                "method='lm' needs at least as many residuals as parameters; "
                "use 'trf' or 'dogbox'."
            )
        if self.max_nfev < 1:
            raise ValueError(f"max_nfev must be positive, got {self.max_nfev}.")
