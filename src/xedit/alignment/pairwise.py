import logging
import warnings
from dataclasses import dataclass

import numpy as np
import scipy.optimize

from xedit.alignment.config import AlignmentConfig
from xedit.alignment.objective import alignment_objective, frequency_mask, normalization_factor
from xedit.core.spectrum import Spectrum
from xedit.core.validation import (
    AlignmentConvergenceWarning,
    AlignmentPreconditionError,
    AxisMismatchError,
)
from xedit.processing.correction import shift_and_phase
from xedit.processing.fourier import _to_spectrum_ndarray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Correction:
    """A frequency shift [Hz] and zero-order phase rotation [degrees]."""

    freq_hz: float = 0.0
    phase_deg: float = 0.0

    def __iter__(self):
        yield self.freq_hz
        yield self.phase_deg

    def __neg__(self) -> "Correction":
        return Correction(-self.freq_hz, -self.phase_deg)


@dataclass(frozen=True)
class AlignmentResult:
    """
    Outcome of one pairwise alignment.

    Iterating the result yields ``(correction, corrected)``, so
    ``correction, corrected = align_pair(reference, target)`` works directly.

    Attributes
    ----------
    correction : Correction
        The optimal (or last) frequency/phase correction.
    corrected : Spectrum
        The target with ``correction`` applied at its original amplitude.
    objective : float
        L1 objective at ``correction`` on the normalised scale.
    initial_objective : float
        L1 objective at the initial guess.
    converged : bool
        False when the solver stopped on its evaluation cap.
    n_evaluations : int
        Number of objective evaluations spent by the solver.
    message : str
        Solver termination message.
    """

    correction: Correction
    corrected: Spectrum
    objective: float
    initial_objective: float
    converged: bool
    n_evaluations: int
    message: str = ""

    def __iter__(self):
        return iter((self.correction, self.corrected))


def _check_single(spectrum: Spectrum, role: str) -> None:
    """Reject packed, multi-coil or unaveraged input before any solver work."""
    if spectrum.subspecs != 1:
        raise AlignmentPreconditionError(
            f"The {role} must be a single sub-spectrum (subspecs == 1), "
            f"got subspecs == {spectrum.subspecs}. Split it with take_subspectrum first."
        )
    if not spectrum.coil_combined:
        raise AlignmentPreconditionError(
            f"The {role} is not coil-combined. Combine the receiver channels before alignment."
        )
    if not spectrum.averaged:
        raise AlignmentPreconditionError(
            f"The {role} is not averaged. Average the transients before alignment."
        )
    if spectrum.fids.size != spectrum.n_points:
        raise AxisMismatchError(
            f"The {role} must hold one time-domain signal of {spectrum.n_points} samples; "
            f"it has shape {dict(spectrum.fid.sizes)}."
        )
    if not np.all(np.isfinite(spectrum.fids)):
        raise AlignmentPreconditionError(f"The {role} contains non-finite samples.")


def _check_pair(reference: Spectrum, target: Spectrum) -> None:
    """Validate that ``reference`` and ``target`` can be aligned onto each other."""
    _check_single(reference, "reference")
    _check_single(target, "target")

    if reference.n_points != target.n_points:
        raise AxisMismatchError(
            f"Sample counts differ: reference has {reference.n_points}, "
            f"target has {target.n_points}."
        )
    if not np.allclose(reference.t, target.t, rtol=1e-9, atol=0.0):
        raise AxisMismatchError("Reference and target have different time axes.")
    if not np.allclose(reference.ppm, target.ppm, rtol=1e-9, atol=1e-12):
        raise AxisMismatchError("Reference and target have different ppm axes.")


def _solve_pair(
    reference: Spectrum, target: Spectrum, config: AlignmentConfig
) -> AlignmentResult:
    """
    Run the least-squares search for one validated pair.

    Pure: no warnings and no shared state, so it can run inside joblib workers.
    Callers are responsible for validation and for reporting non-convergence.
    """
    mask = frequency_mask(reference.ppm, config.ppm_range)
    if not mask.any():
        raise AlignmentPreconditionError(
            f"No samples fall inside ppm_range={config.ppm_range}; "
            f"the spectrum covers {reference.ppm.min():.2f} to {reference.ppm.max():.2f} ppm."
        )

    scale = normalization_factor(reference, target) if config.normalize else 1.0
    if scale == 0.0:
        raise AlignmentPreconditionError(
            "Both spectra have an all-zero real part; the alignment objective is undefined."
        )

    t = reference.t
    ref_fid = reference.fids.reshape(-1) / scale
    tgt_fid = target.fids.reshape(-1) / scale
    ref_spec = _to_spectrum_ndarray(ref_fid)

    def residual(x):
        return np.array([alignment_objective(ref_spec, tgt_fid, t, mask, x)])

    x0 = np.asarray(config.x0, dtype=float)
    initial = float(residual(x0)[0])

    res = scipy.optimize.least_squares(
        residual,
        x0,
        method=config.method,
        x_scale=config.x_scale,
        ftol=config.ftol,
        xtol=config.xtol,
        gtol=config.gtol,
        max_nfev=config.max_nfev,
    )

    freq_hz, phase_deg = (float(v) for v in res.x)
    correction = Correction(freq_hz, phase_deg)
    return AlignmentResult(
        correction=correction,
        corrected=shift_and_phase(target, freq_hz, phase_deg),
        objective=float(res.fun[0]),
        initial_objective=initial,
        converged=res.status > 0,
        n_evaluations=int(res.nfev),
        message=str(res.message),
    )


def _report(result: AlignmentResult, label: str = "target") -> None:
    """Log the outcome and warn if the solver stopped early."""
    logger.debug(
        "Aligned %s: %.4f Hz, %.4f deg (objective %.4g -> %.4g, %d evaluations)",
        label,
        result.correction.freq_hz,
        result.correction.phase_deg,
        result.initial_objective,
        result.objective,
        result.n_evaluations,
    )
    if not result.converged:
        warnings.warn(
            f"Alignment of {label} did not converge within the evaluation limit "
            f"({result.n_evaluations} evaluations: {result.message}). "
            f"Using the last iterate ({result.correction.freq_hz:.3f} Hz, "
            f"{result.correction.phase_deg:.3f} deg); review this dataset manually.",
            AlignmentConvergenceWarning,
            stacklevel=3,
        )


def align_pair(
    reference: Spectrum, target: Spectrum, *, config: AlignmentConfig | None = None
) -> AlignmentResult:
    """
    Align ``target`` onto ``reference`` by frequency shift and phase rotation.

    Minimises the L1 difference of the real spectra inside the diagnostic
    window (``config.ppm_range``, 1.95 to 4.0 ppm by default) over
    ``(freq_hz, phase_deg)``, starting from ``(0, 0)``. Both spectra are
    divided by the joint normalisation factor for the search only; the
    returned corrected target keeps its original amplitude.

    Parameters
    ----------
    reference : Spectrum
        Fixed single sub-spectrum.
    target : Spectrum
        Single sub-spectrum to correct. Must share the reference's time and
        ppm axes.
    config : AlignmentConfig, optional
        Solver and window settings. Defaults to ``AlignmentConfig()``.

    Returns
    -------
    AlignmentResult
        Unpacks as ``(correction, corrected)``.

    Raises
    ------
    AlignmentPreconditionError
        If either input is packed, not coil-combined, not averaged or
        non-finite.
    AxisMismatchError
        If sample counts or axes differ.

    Warns
    -----
    AlignmentConvergenceWarning
        If the solver hits ``config.max_nfev``. The last iterate is returned.

    Examples
    --------
    >>> correction, corrected = align_pair(spec_a, spec_b)
    >>> correction.freq_hz, correction.phase_deg
    """
    config = config or AlignmentConfig()
    _check_pair(reference, target)
    result = _solve_pair(reference, target, config)
    _report(result)
    return result
